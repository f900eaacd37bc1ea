"""
Subset Parameters
"""

import numbers

from gridaxis.core.coordinates.utils import make_coord_value, make_date_value


class SubsetParams(dict):
    """
    Named constraints of a subset request.

    Each coordinate axis reads the constraints that apply to its own kind and ignores the rest. Missing constraints
    are ``None``.

    Constraints
    -----------
    bounds : dict
        axis name -> (min, max) value bounds, for numeric axes
    stride : dict
        axis name -> stride, for numeric axes
    horiz_stride : int
        stride for horizontal axes (GeoX, GeoY, Lat, Lon) without an entry in ``stride``
    vert_coord : float
        vertical level, selects the nearest coordinate of vertical axes (GeoZ, Height, Pressure)
    time : date
        selects the nearest coordinate of time axes
    time_range : (date, date)
        selects the time coordinates within the date range
    time_latest : bool
        selects the last time coordinate
    time_stride : int
        stride for time axes
    runtime : date
        selects the nearest coordinate of run time axes
    runtime_range : (date, date)
        selects the run time coordinates within the date range
    runtime_latest : bool
        selects the last run time coordinate
    time_offset : float
        selects the nearest coordinate of time offset axes
    time_offset_range : (float, float)
        selects the time offset coordinates within the range

    Examples
    --------

    >>> params = SubsetParams(time_range=("2018-01-01", "2018-01-02"), bounds={"lat": (30, 40)})
    >>> params["vert_coord"] is None
    True
    """

    def __getitem__(self, key):
        # return none if the parameter does not exist
        try:
            return super(SubsetParams, self).__getitem__(key)
        except KeyError:
            return None

    def __repr__(self):
        return "SubsetParams(%s)" % ", ".join("%s=%r" % (k, v) for k, v in self.items())

    def get_bool(self, key):
        return bool(self[key])

    def get_float(self, key):
        value = self[key]
        if value is None:
            return None
        return make_coord_value(value)

    def get_int(self, key, default=None):
        value = self[key]
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeError("Subset parameter '%s' must be an integer, got '%s'" % (key, type(value)))
        return int(value)

    def get_date(self, key):
        value = self[key]
        if value is None:
            return None
        return make_date_value(value)

    def get_date_range(self, key):
        value = self[key]
        if value is None:
            return None
        if len(value) != 2:
            raise ValueError("Subset parameter '%s' must be a (start, end) pair, got %s" % (key, value))
        return make_date_value(value[0]), make_date_value(value[1])

    def get_value_range(self, key):
        value = self[key]
        if value is None:
            return None
        if len(value) != 2:
            raise ValueError("Subset parameter '%s' must be a (min, max) pair, got %s" % (key, value))
        return make_coord_value(value[0]), make_coord_value(value[1])

    def get_bounds(self, name):
        """
        Value bounds requested for an axis.

        Arguments
        ---------
        name : str
            axis name

        Returns
        -------
        bounds : tuple, None
            (min, max), or None if the axis is not constrained
        """

        bounds = self["bounds"]
        if not bounds or name not in bounds:
            return None
        value = bounds[name]
        if len(value) != 2:
            raise ValueError("Subset bounds for '%s' must be a (min, max) pair, got %s" % (name, value))
        return make_coord_value(value[0]), make_coord_value(value[1])

    def get_stride(self, name, horizontal=False):
        """
        Stride requested for an axis.

        Arguments
        ---------
        name : str
            axis name
        horizontal : bool
            If True, fall back to ``horiz_stride``.

        Returns
        -------
        stride : int
            requested stride, 1 if none
        """

        strides = self["stride"] or {}
        if name in strides:
            stride = strides[name]
        elif horizontal and self["horiz_stride"] is not None:
            stride = self["horiz_stride"]
        else:
            return 1

        if isinstance(stride, bool) or not isinstance(stride, numbers.Integral) or stride < 1:
            raise ValueError("Subset stride for '%s' must be a positive integer, got %s" % (name, stride))
        return int(stride)
