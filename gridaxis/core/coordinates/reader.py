"""
Deferred Coordinate Readers

A reader fetches the explicit coordinate values of an axis on demand. Readers are borrowed by the axes that use them;
an axis calls :meth:`CoordAxisReader.read_values` the first time its values are requested.
"""

import logging

import numpy as np
import traitlets as tl
from lazy_import import lazy_module

from gridaxis.core.utils import ArrayTrait

xr = lazy_module("xarray")

_logger = logging.getLogger(__name__)


class CoordAxisReader(tl.HasTraits):
    """Base class for deferred coordinate value readers."""

    def read_values(self, axis):
        """
        Read the explicit coordinate values of an axis.

        Arguments
        ---------
        axis : :class:`CoordAxis`
            the axis requesting its values

        Returns
        -------
        values : array-like
            ordered numerical values, laid out according to the axis spacing

        Raises
        ------
        IOError
            the values cannot be read
        """

        raise NotImplementedError


class ArrayCoordAxisReader(CoordAxisReader):
    """Reader for values already held in memory.

    Parameters
    ----------
    values : np.ndarray
        coordinate values returned for any axis
    """

    values = ArrayTrait(ndim=1, dtype=float, read_only=True)

    def __init__(self, values, **kwargs):
        super(ArrayCoordAxisReader, self).__init__(**kwargs)
        self.set_trait("values", values)

    def read_values(self, axis):
        return self.values.copy()


class DatasetCoordAxisReader(CoordAxisReader):
    """
    Reader for a coordinate variable of an xarray Dataset.

    Parameters
    ----------
    source : xarray.Dataset, str
        Dataset, or path of a file xarray can open. Files are opened for each read and closed afterwards.
    variable : str, optional
        Name of the variable holding the values. Defaults to the axis name.
    """

    source = tl.Any(read_only=True)
    variable = tl.Unicode(allow_none=True, default_value=None, read_only=True)

    def __init__(self, source, variable=None, **kwargs):
        super(DatasetCoordAxisReader, self).__init__(**kwargs)
        self.set_trait("source", source)
        self.set_trait("variable", variable)

    def _read(self, dataset, name):
        if name not in dataset.variables:
            raise IOError("Variable '%s' not found in dataset" % name)
        # bounds variables (n, 2) flatten to low0, high0, low1, high1, ...
        return np.asarray(dataset[name].values).ravel()

    def read_values(self, axis):
        name = self.variable or axis.name

        if isinstance(self.source, str):
            _logger.debug("Reading coordinate values '%s' from '%s'" % (name, self.source))
            with xr.open_dataset(self.source) as dataset:
                return self._read(dataset, name)

        return self._read(self.source, name)
