"""
Coordinate Axis Taxonomy

Tags shared by every coordinate axis. The tags carry no behavior; the axis algorithms branch on them.
"""

import enum


class Spacing(enum.Enum):
    """How the coordinate values of an axis are stored or derived.

    * ``regular``: no explicit values, coordinate i is ``start_value + i * resolution``
    * ``irregularPoint``: ``ncoords`` values, one per point, edges halfway between points
    * ``contiguousInterval``: ``ncoords + 1`` values, the edges of adjacent intervals
    * ``discontiguousInterval``: ``2 * ncoords`` values, ``(low0, high0, low1, high1, ...)``
    """

    regular = 1
    irregularPoint = 2
    contiguousInterval = 3
    discontiguousInterval = 4


class DependenceType(enum.Enum):
    """How an axis relates to the dimensions of its dataset.

    * ``independent``: has its own dimension, e.g. ``x(x)``
    * ``dependent``: auxiliary coordinate indexed by another axis, e.g. ``reftime(time)``
    * ``scalar``: a single value without a dimension
    * ``twoD``: a function of two other axes, e.g. ``time(reftime, offset)``
    """

    independent = 1
    dependent = 2
    scalar = 3
    twoD = 4


class AxisType(enum.Enum):
    """Physical role of an axis."""

    GeoX = 1
    GeoY = 2
    GeoZ = 3
    Lat = 4
    Lon = 5
    Height = 6
    Pressure = 7
    Time = 8
    RunTime = 9
    TimeOffset = 10
    Ensemble = 11


class AxisKind(enum.Enum):
    """Concrete kind of a coordinate axis, derived from its axis type and dependence type."""

    numeric = 1
    time = 2
    runtime = 3
    time_offset = 4
    time2d = 5


class LoadState(enum.Enum):
    """State of the explicit coordinate values of an axis."""

    unloaded = 1
    loaded = 2
    failed = 3


TIME_AXIS_TYPES = (AxisType.Time, AxisType.RunTime, AxisType.TimeOffset)
HORIZONTAL_AXIS_TYPES = (AxisType.GeoX, AxisType.GeoY, AxisType.Lat, AxisType.Lon)
VERTICAL_AXIS_TYPES = (AxisType.GeoZ, AxisType.Height, AxisType.Pressure)


def get_axis_kind(axis_type, dependence_type):
    """
    Get the axis kind for an axis type and dependence type.

    Arguments
    ---------
    axis_type : AxisType, None
        physical role of the axis
    dependence_type : DependenceType
        dependence type of the axis

    Returns
    -------
    kind : AxisKind
        concrete axis kind
    """

    if axis_type == AxisType.Time and dependence_type == DependenceType.twoD:
        return AxisKind.time2d
    elif axis_type == AxisType.Time:
        return AxisKind.time
    elif axis_type == AxisType.RunTime:
        return AxisKind.runtime
    elif axis_type == AxisType.TimeOffset:
        return AxisKind.time_offset
    else:
        return AxisKind.numeric


def expected_values_size(spacing, ncoords):
    """
    Number of explicit values an axis with the given spacing and number of coordinates stores.

    Arguments
    ---------
    spacing : Spacing
        axis spacing
    ncoords : int
        number of coordinates

    Returns
    -------
    size : int, None
        expected number of values, None for regular spacing (no explicit values)
    """

    if spacing == Spacing.regular:
        return None
    elif ncoords == 0:
        return 0
    elif spacing == Spacing.irregularPoint:
        return ncoords
    elif spacing == Spacing.contiguousInterval:
        return ncoords + 1
    elif spacing == Spacing.discontiguousInterval:
        return 2 * ncoords
    else:
        raise ValueError("Unknown spacing '%s'" % (spacing,))
