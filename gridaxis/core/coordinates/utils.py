"""
Utilities functions for handling gridaxis coordinate axes.

.. testsetup:: gridaxis.core.coordinates.utils

    import numpy as np
    from gridaxis.core.coordinates.utils import *
"""

import datetime
import numbers

import numpy as np


def make_coord_value(val):
    """
    Make a numerical coordinate value by casting to float.

    Parameters
    ----------
    val : number, np.ndarray
        Input coordinate value.

    Returns
    -------
    val : float
        Cast coordinate value.

    Notes
    -----
     * the value is extracted from singleton and 0-dimensional arrays

    Raises
    ------
    TypeError
        val is an unsupported type

    """

    # extract value from singleton and 0-dimensional arrays
    if isinstance(val, np.ndarray):
        try:
            val = val.item()
        except ValueError:
            raise TypeError("Invalid coordinate value, unsupported type '%s'" % type(val))

    if isinstance(val, bool) or not isinstance(val, numbers.Number):
        raise TypeError("Invalid coordinate value, unsupported type '%s'" % type(val))

    return float(val)


def make_date_value(val):
    """
    Make a date by casting to a numpy ``datetime64``.

    Parameters
    ----------
    val : str, datetime.date, np.datetime64, np.ndarray
        Input date.

    Returns
    -------
    val : np.datetime64
        Cast date.

    Notes
    -----
     * the value is extracted from singleton and 0-dimensional arrays
     * strings are interpreted as ISO 8601 dates; a trailing ``Z`` or `` UTC`` is dropped

    Examples
    --------

    .. doctest:: gridaxis.core.coordinates.utils

        >>> make_date_value('2018-01-01T06:00Z')
        numpy.datetime64('2018-01-01T06:00')
    """

    if isinstance(val, np.ndarray):
        try:
            val = val.item()
        except ValueError:
            raise TypeError("Invalid date, unsupported type '%s'" % type(val))

    if isinstance(val, str):
        s = val.strip()
        for suffix in ("Z", " UTC", "UTC"):
            if s.endswith(suffix):
                s = s[: -len(suffix)].strip()
                break
        try:
            val = np.datetime64(s.replace(" ", "T"))
        except ValueError:
            raise ValueError("Invalid date string '%s'" % val)
    elif isinstance(val, np.datetime64):
        pass
    elif isinstance(val, datetime.datetime):
        if val.tzinfo is not None:
            val = val.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        val = np.datetime64(val)
    elif isinstance(val, datetime.date):
        val = np.datetime64(val)
    else:
        raise TypeError("Invalid date, unsupported type '%s'" % type(val))

    if np.isnat(val):
        raise ValueError("Invalid date (NaT)")

    return val


def make_coord_array(values):
    """
    Make a flat array of numerical coordinate values.

    Parameters
    ----------
    values : array-like
        Input coordinate values.

    Returns
    -------
    a : np.ndarray
        1-dimensional float array.

    Raises
    ------
    TypeError
        values are not numerical
    """

    a = np.asarray(values)

    if a.dtype == float:
        pass
    elif a.size == 0 or np.issubdtype(a.dtype, np.number):
        a = a.astype(float)
    else:
        raise TypeError("Invalid coordinate values (must be all numbers), got dtype '%s'" % a.dtype)

    return a.ravel()


def longest_run(mask):
    """
    Find the longest run of consecutive True entries in a boolean array.

    Parameters
    ----------
    mask : array-like of bool
        1-dimensional mask.

    Returns
    -------
    run : tuple, None
        (first, last) inclusive indices of the first longest run, or None if no entry is True.

    Examples
    --------

    .. doctest:: gridaxis.core.coordinates.utils

        >>> longest_run([False, True, True, False, True])
        (1, 2)
    """

    mask = np.asarray(mask, dtype=bool)
    if not mask.any():
        return None

    # run boundaries from the sign changes of the padded mask
    padded = np.concatenate([[False], mask, [False]]).astype(int)
    changes = np.diff(padded)
    starts = np.where(changes == 1)[0]
    stops = np.where(changes == -1)[0]
    lengths = stops - starts
    i = int(np.argmax(lengths))
    return int(starts[i]), int(stops[i] - 1)


def interval_mask(lo_edges, hi_edges, min_value, max_value):
    """
    Mask of the intervals that intersect [min_value, max_value].

    The edges of each interval may be given in either order.

    Parameters
    ----------
    lo_edges : np.ndarray
        first edge of each interval
    hi_edges : np.ndarray
        second edge of each interval
    min_value : float
        low bound
    max_value : float
        high bound

    Returns
    -------
    mask : np.ndarray
        boolean mask, one entry per interval
    """

    lo = np.minimum(lo_edges, hi_edges)
    hi = np.maximum(lo_edges, hi_edges)
    return (lo <= max_value) & (hi >= min_value)
