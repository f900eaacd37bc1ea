"""Units module summary

Attributes
----------
ureg : pint.UnitRegistry
    Unit registry shared by gridaxis.
"""

import logging

from pint import UnitRegistry
from pint.errors import PintError

ureg = UnitRegistry()

# Set up logging
_logger = logging.getLogger(__name__)


def time_unit_seconds(unit):
    """Length of a time unit, in seconds.

    Parameters
    ----------
    unit : str
        A time unit understood by pint, e.g. ``'hours'``, ``'days'`` or ``'s'``.

    Returns
    -------
    float
        Number of seconds in one ``unit``.

    Raises
    ------
    ValueError
        If the unit is unknown or is not a time unit.
    """

    try:
        quantity = ureg.Quantity(1, unit.strip())
    except (PintError, AttributeError, TypeError) as e:
        raise ValueError("Unknown time unit '%s': %s" % (unit, e))

    if quantity.dimensionality != ureg.second.dimensionality:
        raise ValueError("'%s' is not a time unit (dimensionality %s)" % (unit, quantity.dimensionality))

    return float(quantity.to(ureg.second).magnitude)
