"""
Coverage Coordinate Axis
"""

import json
import logging
import threading
from collections import OrderedDict
from copy import deepcopy
from hashlib import sha256 as hash_alg
from types import MappingProxyType

import numpy as np
import traitlets as tl

from gridaxis.core.settings import settings
from gridaxis.core.utils import ArrayTrait, TupleTrait, JSONEncoder, cached_property
from gridaxis.core.coordinates.taxonomy import AxisType, AxisKind, DependenceType, LoadState, Spacing
from gridaxis.core.coordinates.taxonomy import TIME_AXIS_TYPES, HORIZONTAL_AXIS_TYPES, VERTICAL_AXIS_TYPES
from gridaxis.core.coordinates.taxonomy import get_axis_kind, expected_values_size
from gridaxis.core.coordinates.utils import make_coord_array, make_coord_value, longest_run, interval_mask
from gridaxis.core.coordinates.range import Range
from gridaxis.core.coordinates.reader import CoordAxisReader
from gridaxis.core.coordinates.subset_params import SubsetParams
from gridaxis.core.coordinates.time_helper import TimeHelper

_logger = logging.getLogger(__name__)


class CoordAxis(tl.HasTraits):
    """
    One axis of the coordinate system of a gridded dataset.

    A CoordAxis describes the coordinate values of one dimension, either analytically (``regular`` spacing: start,
    resolution and number of coordinates) or with an explicit array of values whose layout depends on the spacing:

    * ``irregularPoint``: one value per coordinate
    * ``contiguousInterval``: ``ncoords + 1`` interval edges
    * ``discontiguousInterval``: ``2 * ncoords`` values, ``(low0, high0, low1, high1, ...)``

    The explicit values are either given eagerly or read on first use by a :class:`CoordAxisReader`. Apart from the
    lazily loaded values, axes are immutable: subset operations return new axes.

    The kind of axis (numeric, time, runtime, time offset, 2d time) is derived from the axis type and dependence type
    and selects the subset behavior, see :attr:`kind`. Time-like axes (Time, RunTime, TimeOffset) carry a
    :class:`TimeHelper` for date conversions.

    Parameters
    ----------
    name : str
        Axis name.
    units : str
        Units of the coordinate values.
    description : str
        Description.
    data_type : str
        numpy dtype name of the stored coordinate values.
    axis_type : AxisType
        Physical role of the axis.
    dependence_type : DependenceType
        Relation to the dataset dimensions.
    depends_on : tuple
        Names of the axes this axis depends on (dependent and twoD axes only).
    spacing : Spacing
        Layout of the coordinate values.
    ncoords : int
        Number of coordinates (not values).
    start_value : float
        First coordinate, or first low edge for interval spacings.
    end_value : float
        Last coordinate, or last high edge for interval spacings.
    resolution : float
        Nominal step between coordinates.
    is_subset : bool
        Whether the axis is the result of a subset operation.
    source_range : Range
        Indices of the coordinates of this axis in the axis it was subset from, None if not a subset.
    offsets_per_run : int
        Number of time offsets in each run of a 2d time axis.
    time_helper : TimeHelper
        Date conversions, time-like axes only.
    """

    name = tl.Unicode(read_only=True)
    units = tl.Unicode(read_only=True)
    description = tl.Unicode(read_only=True)
    data_type = tl.Unicode(read_only=True)
    axis_type = tl.UseEnum(AxisType, allow_none=True, read_only=True)
    dependence_type = tl.UseEnum(DependenceType, read_only=True)
    depends_on = TupleTrait(trait=tl.Unicode(), read_only=True)
    spacing = tl.UseEnum(Spacing, read_only=True)
    ncoords = tl.Int(read_only=True)
    start_value = tl.Float(read_only=True)
    end_value = tl.Float(read_only=True)
    resolution = tl.Float(read_only=True)
    is_subset = tl.Bool(read_only=True)
    source_range = tl.Instance(Range, allow_none=True, read_only=True)
    offsets_per_run = tl.Int(default_value=None, allow_none=True, read_only=True)
    reader = tl.Instance(CoordAxisReader, allow_none=True, read_only=True)
    time_helper = tl.Instance(TimeHelper, allow_none=True, read_only=True)

    _attributes = tl.Instance(OrderedDict, read_only=True)
    _values = ArrayTrait(ndim=1, dtype=float, allow_none=True)

    def __init__(
        self,
        name,
        units="",
        description="",
        data_type="float64",
        axis_type=None,
        attributes=None,
        dependence_type=DependenceType.independent,
        depends_on=None,
        spacing=Spacing.regular,
        ncoords=0,
        start_value=0.0,
        end_value=0.0,
        resolution=0.0,
        values=None,
        reader=None,
        is_subset=False,
        source_range=None,
        offsets_per_run=None,
    ):
        super(CoordAxis, self).__init__()

        # per-instance exclusion for the lazily loaded values
        self._lock = threading.Lock()
        self._load_state = LoadState.unloaded
        self._load_error = None

        try:
            data_type = np.dtype(data_type).name
        except TypeError:
            raise TypeError("Invalid coordinate axis data_type '%s'" % (data_type,))

        if isinstance(ncoords, bool) or not isinstance(ncoords, (int, np.integer)):
            raise TypeError("ncoords must be an integer, not '%s'" % type(ncoords))
        if ncoords < 0:
            raise ValueError("ncoords must be >= 0, got %d" % ncoords)

        # metadata
        self.set_trait("name", name)
        self.set_trait("units", units or "")
        self.set_trait("description", description or "")
        self.set_trait("data_type", data_type)
        self.set_trait("axis_type", axis_type)
        self.set_trait("_attributes", OrderedDict(attributes or {}))
        self.set_trait("dependence_type", dependence_type)
        self.set_trait("depends_on", tuple(depends_on or ()))
        self.set_trait("spacing", spacing)
        self.set_trait("reader", reader)
        self.set_trait("is_subset", bool(is_subset))
        self.set_trait("source_range", source_range)

        # dependence
        has_dependents = self.dependence_type in (DependenceType.dependent, DependenceType.twoD)
        if has_dependents and not self.depends_on:
            raise ValueError(
                "Coordinate axis '%s' is %s and requires depends_on" % (self.name, self.dependence_type.name)
            )
        if not has_dependents and self.depends_on:
            raise ValueError(
                "Coordinate axis '%s' is %s and cannot depend on %s"
                % (self.name, self.dependence_type.name, list(self.depends_on))
            )

        # values
        if values is not None:
            if self.spacing == Spacing.regular:
                raise ValueError("Coordinate axis '%s' has regular spacing and cannot have explicit values" % name)
            values = make_coord_array(values)
            self._check_values_size(values, ncoords)
            if values.size > 0:
                start_value, end_value = values[0], values[-1]
            self.set_trait("_values", values)
            self._load_state = LoadState.loaded
        else:
            self.set_trait("_values", None)
            if self.spacing != Spacing.regular and self.reader is None:
                raise ValueError(
                    "Coordinate axis '%s' has %s spacing and requires either values or a reader"
                    % (self.name, self.spacing.name)
                )

        start_value = make_coord_value(start_value)
        end_value = make_coord_value(end_value)
        resolution = make_coord_value(resolution)

        # a resolution derived from the bounds follows lazily read values
        self._derived_resolution = resolution == 0.0
        if resolution == 0.0 and ncoords > 1:
            resolution = (end_value - start_value) / (ncoords - 1)

        self.set_trait("ncoords", int(ncoords))
        self.set_trait("start_value", start_value)
        self.set_trait("end_value", end_value)
        self.set_trait("resolution", resolution)

        # 2d time
        if self.kind == AxisKind.time2d:
            if offsets_per_run is None or offsets_per_run < 1:
                raise ValueError("2d time axis '%s' requires offsets_per_run >= 1" % self.name)
            if self.ncoords % offsets_per_run != 0:
                raise ValueError(
                    "2d time axis '%s': ncoords (%d) is not a multiple of offsets_per_run (%d)"
                    % (self.name, self.ncoords, offsets_per_run)
                )
            if self.spacing not in (Spacing.irregularPoint, Spacing.discontiguousInterval):
                raise ValueError(
                    "2d time axis '%s' must have irregularPoint or discontiguousInterval spacing, not %s"
                    % (self.name, self.spacing.name)
                )
        elif offsets_per_run is not None:
            raise ValueError("offsets_per_run is only valid for 2d time axes")
        self.set_trait("offsets_per_run", offsets_per_run)

        # time delegate
        if self.axis_type in TIME_AXIS_TYPES:
            self.set_trait("time_helper", TimeHelper.factory(self.units, self._attributes))
        else:
            self.set_trait("time_helper", None)

    def _check_values_size(self, values, ncoords):
        size = expected_values_size(self.spacing, ncoords)
        if values.ndim != 1 or values.size != size:
            raise ValueError(
                "Coordinate axis '%s' with %s spacing and %d coordinates requires %s values, got %d"
                % (self.name, self.spacing.name, ncoords, size, values.size)
            )

    # ------------------------------------------------------------------------------------------------------------------
    # Alternate Constructors
    # ------------------------------------------------------------------------------------------------------------------

    @classmethod
    def from_definition(cls, d):
        """
        Create a coordinate axis from an axis definition.

        The definition must contain the axis name::

            c = CoordAxis.from_definition({
                "name": "lat",
                "axis_type": "Lat",
                "ncoords": 181,
                "start_value": -90,
                "end_value": 90
            })

        The definition may also contain any of the other axis parameters. Enumerations are given by name.

        Arguments
        ---------
        d : dict
            coordinate axis definition

        Returns
        -------
        :class:`CoordAxis`
            coordinate axis

        See Also
        --------
        definition
        """

        if "name" not in d:
            raise ValueError('CoordAxis definition requires "name" property')

        kwargs = dict(d)
        if kwargs.get("source_range") is not None and not isinstance(kwargs["source_range"], Range):
            kwargs["source_range"] = Range.from_definition(kwargs["source_range"])
        return cls(**kwargs)

    @classmethod
    def from_json(cls, s):
        """
        Create a coordinate axis from a coordinate axis JSON definition.

        Arguments
        ---------
        s : str
            JSON definition

        Returns
        -------
        :class:`CoordAxis`
            coordinate axis

        See Also
        --------
        json
        """

        d = json.loads(s, object_pairs_hook=OrderedDict)
        return cls.from_definition(d)

    # ------------------------------------------------------------------------------------------------------------------
    # standard methods
    # ------------------------------------------------------------------------------------------------------------------

    def __repr__(self):
        return "%s(%s): %s, %s, N[%d], Bounds[%s, %s]" % (
            self.__class__.__name__,
            self.name,
            self.kind.name,
            self.spacing.name,
            self.ncoords,
            self.start_value,
            self.end_value,
        )

    def __eq__(self, other):
        if not isinstance(other, CoordAxis):
            return False

        # loading the values may update the start and end
        a, b = self.get_values(), other.get_values()

        for name in _DEFINING_PROPERTIES:
            if name == "_attributes":
                if not _attributes_equal(self._attributes, other._attributes):
                    return False
            elif getattr(self, name) != getattr(other, name):
                return False

        if self.spacing != Spacing.regular:
            if a is None or b is None:
                return a is None and b is None
            if not np.array_equal(a, b):
                return False

        return True

    # ------------------------------------------------------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------------------------------------------------------

    @cached_property
    def kind(self):
        """:AxisKind: Concrete axis kind, derived from the axis type and dependence type."""
        return get_axis_kind(self.axis_type, self.dependence_type)

    @property
    def attributes(self):
        """:mapping: Read-only ordered mapping of the axis attributes."""
        return MappingProxyType(self._attributes)

    @property
    def values(self):
        """:np.ndarray, None: Explicit values, if available. This never triggers a read, see :meth:`get_values`."""
        return self._values

    @property
    def has_data(self):
        """:bool: Whether the explicit values are available."""
        return self._values is not None

    @property
    def load_state(self):
        """:LoadState: State of the explicit values (unloaded, loaded, failed)."""
        return self._load_state

    @property
    def load_error(self):
        """:Exception: Error of the last failed read, None otherwise."""
        return self._load_error

    @property
    def is_regular(self):
        return self.spacing == Spacing.regular

    @property
    def is_interval(self):
        return self.spacing in (Spacing.contiguousInterval, Spacing.discontiguousInterval)

    @property
    def is_scalar(self):
        return self.dependence_type == DependenceType.scalar

    @property
    def is_time2d(self):
        return self.kind == AxisKind.time2d

    @property
    def definition(self):
        """:dict: Serializable coordinate axis definition."""
        return self._get_definition(full=False)

    @property
    def full_definition(self):
        """:dict: Serializable coordinate axis definition, containing all properties. For internal use."""
        return self._get_definition(full=True)

    def _get_definition(self, full=True):
        # loading the values may update the start and end
        values = self.get_values()

        d = OrderedDict()
        d["name"] = self.name
        for key in _DEFINITION_PROPERTIES:
            value = getattr(self, key)
            if not full and (value is None or value == "" or value == () or value is False):
                continue
            if isinstance(value, tuple):
                value = list(value)
            d[key] = value

        if full or self._attributes:
            d["attributes"] = deepcopy(self._attributes)
        if self.spacing != Spacing.regular:
            d["values"] = values
        return d

    @property
    def json(self):
        """:str: JSON-serialized coordinate axis definition.

        The ``json`` can be used to create new CoordAxis::

            c = CoordAxis.from_json(c.json)

        See Also
        --------
        from_json
        """

        return json.dumps(self.definition, separators=(",", ":"), cls=JSONEncoder)

    @property
    def hash(self):
        """:str: Coordinate axis hash value."""
        return hash_alg(self.json.encode("utf-8")).hexdigest()

    # ------------------------------------------------------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------------------------------------------------------

    def copy(self):
        """
        Make a copy of the coordinate axis.

        Returns
        -------
        :class:`CoordAxis`
            Copy of the coordinate axis, sharing the reader.
        """

        return self._replace()

    def _replace(self, **kwargs):
        d = OrderedDict()
        d["name"] = self.name
        for key in _DEFINITION_PROPERTIES:
            d[key] = getattr(self, key)
        d["attributes"] = self._attributes
        d["values"] = self._values
        d["reader"] = self.reader
        d.update(kwargs)
        return CoordAxis(**d)

    def set_dataset(self, dataset):
        """Called once the axis is attached to its coordinate system container. Does nothing by default."""
        pass

    def get_shape(self):
        """
        Shape of the coordinate array.

        Returns
        -------
        shape : tuple
            ``()`` for scalar axes, otherwise ``(ncoords,)``
        """

        if self.dependence_type == DependenceType.scalar:
            return ()
        return (self.ncoords,)

    def get_range(self):
        """
        Index range of the axis.

        Returns
        -------
        :class:`Range`
            ``Range.EMPTY`` for scalar axes, otherwise the range ``[0, ncoords - 1]`` named after this axis

        Raises
        ------
        ValueError
            If a non-scalar axis has no coordinates.
        """

        if self.dependence_type == DependenceType.scalar:
            return Range.EMPTY
        return Range(self.name, 0, self.ncoords - 1)

    # ------------------------------------------------------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------------------------------------------------------

    def get_values(self):
        """
        Get the explicit coordinate values, reading them with the axis reader the first time.

        Regular axes have no explicit values, their coordinates are derived from the start value and resolution.

        Concurrent first callers share a single read and receive the same array. The first and last values read
        replace :attr:`start_value` and :attr:`end_value`.

        If the read fails, the error is logged, :attr:`load_state` is ``failed`` and None is returned. The next call
        reads again if ``settings["RETRY_FAILED_READS"]`` is set (the default); otherwise the failure is kept and the
        reader is not called again.

        Returns
        -------
        values : np.ndarray, None
            explicit values, laid out according to the spacing, or None for regular axes and failed reads
        """

        if self.spacing == Spacing.regular:
            return None

        if self._load_state == LoadState.loaded:
            return self._values

        with self._lock:
            # another caller may have finished the read while this one was waiting
            if self._load_state == LoadState.loaded:
                return self._values

            if self._load_state == LoadState.failed and not settings["RETRY_FAILED_READS"]:
                return None

            try:
                values = make_coord_array(self.reader.read_values(self))
                self._check_values_size(values, self.ncoords)
            except Exception as e:
                _logger.error("Failed to read coordinate values of axis '%s'" % self.name, exc_info=True)
                self._load_error = e
                self._load_state = LoadState.failed
                return None

            # the values determine the start and end, as for eager values
            if values.size > 0:
                self._set_bounds_from_values(values)
            self.set_trait("_values", values)
            self._load_error = None
            self._load_state = LoadState.loaded
            _logger.debug("Read %d coordinate values of axis '%s'" % (values.size, self.name))

        return self._values

    def _set_bounds_from_values(self, values):
        start_value, end_value = float(values[0]), float(values[-1])
        if start_value != self.start_value or end_value != self.end_value:
            _logger.debug(
                "Coordinate values of axis '%s' span [%s, %s], replacing [%s, %s]"
                % (self.name, start_value, end_value, self.start_value, self.end_value)
            )
        if self._derived_resolution and self.ncoords > 1:
            self.set_trait("resolution", (end_value - start_value) / (self.ncoords - 1))
        self.set_trait("start_value", start_value)
        self.set_trait("end_value", end_value)

    def _require_values(self):
        values = self.get_values()
        if values is None:
            raise RuntimeError("Coordinate values of axis '%s' are not available" % self.name) from self._load_error
        return values

    def get_coords_as_array(self):
        """
        Coordinate values, one per coordinate.

        Interval coordinates are the midpoints of their intervals.

        Returns
        -------
        coords : np.ndarray
            coordinate values, shape ``(ncoords,)``
        """

        if self.spacing == Spacing.regular:
            return self.start_value + np.arange(self.ncoords) * self.resolution

        values = self._require_values()
        if self.spacing == Spacing.irregularPoint:
            return values.copy()
        elif self.spacing == Spacing.contiguousInterval:
            if self.ncoords == 0:
                return np.array([], dtype=float)
            return (values[:-1] + values[1:]) / 2.0
        elif self.spacing == Spacing.discontiguousInterval:
            return (values[0::2] + values[1::2]) / 2.0
        else:
            raise ValueError("Unknown spacing '%s'" % (self.spacing,))

    def get_coord_bounds_as_array(self):
        """
        Cell edges of each coordinate.

        Point coordinates have edges halfway between neighboring coordinates; the outer edges are extended by half of
        the neighboring step (half of the resolution for a single coordinate).

        Returns
        -------
        bounds : np.ndarray
            low and high edges, shape ``(ncoords, 2)``
        """

        n = self.ncoords
        if n == 0:
            return np.zeros((0, 2), dtype=float)

        if self.spacing == Spacing.regular:
            coords = self.get_coords_as_array()
            return np.column_stack([coords - self.resolution / 2.0, coords + self.resolution / 2.0])

        values = self._require_values()
        if self.spacing == Spacing.irregularPoint:
            if n == 1:
                return np.array([[values[0] - self.resolution / 2.0, values[0] + self.resolution / 2.0]])
            mids = (values[:-1] + values[1:]) / 2.0
            lo = np.concatenate([[values[0] - (values[1] - values[0]) / 2.0], mids])
            hi = np.concatenate([mids, [values[-1] + (values[-1] - values[-2]) / 2.0]])
            return np.column_stack([lo, hi])
        elif self.spacing == Spacing.contiguousInterval:
            return np.column_stack([values[:-1], values[1:]])
        elif self.spacing == Spacing.discontiguousInterval:
            return values.reshape(n, 2).copy()
        else:
            raise ValueError("Unknown spacing '%s'" % (self.spacing,))

    def get_coord_midpoint(self, index):
        return self.get_coords_as_array()[index]

    def get_coord_edge1(self, index):
        return self.get_coord_bounds_as_array()[index, 0]

    def get_coord_edge2(self, index):
        return self.get_coord_bounds_as_array()[index, 1]

    # ------------------------------------------------------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------------------------------------------------------

    def _require_time_helper(self):
        if self.time_helper is None:
            raise TypeError(
                "Coordinate axis '%s' is not a time axis (axis_type %s)"
                % (self.name, None if self.axis_type is None else self.axis_type.name)
            )
        return self.time_helper

    def convert(self, date):
        """Numeric offset of a calendar date in the axis time units. Time-like axes only."""
        return self._require_time_helper().convert(date)

    def make_date(self, value):
        """Calendar date of a numeric offset in the axis time units. Time-like axes only."""
        return self._require_time_helper().make_date(value)

    def get_date_range(self):
        """(start, end) calendar dates of the axis. Time-like axes only."""
        helper = self._require_time_helper()
        self.get_values()
        return helper.get_date_range(self.start_value, self.end_value)

    def get_offset_in_time_units(self, start, end):
        """Offset between two calendar dates in the axis time units. Time-like axes only."""
        return self._require_time_helper().get_offset_in_time_units(start, end)

    def get_dates_as_array(self):
        """Calendar dates of the coordinates. Time-like axes only."""
        helper = self._require_time_helper()
        return helper.make_dates(self.get_coords_as_array())

    # ------------------------------------------------------------------------------------------------------------------
    # Subsets
    # ------------------------------------------------------------------------------------------------------------------

    def subset(self, params, max_value=None, stride=None):
        """
        Get a subset of the axis.

        ``subset(params)`` applies the constraints of a :class:`SubsetParams` that concern this kind of axis and
        returns this axis unchanged if none does. ``subset(min_value, max_value)`` selects the coordinates within a
        range of values, see :meth:`subset_values`.

        Arguments
        ---------
        params : SubsetParams, dict, float
            subset constraints, or the low value of a value range
        max_value : float, optional
            high value of a value range
        stride : int, optional
            stride, for value ranges

        Returns
        -------
        :class:`CoordAxis`
            subset axis, or this axis
        """

        if max_value is not None:
            return self.subset_values(params, max_value, stride=1 if stride is None else stride)

        if params is None:
            return self
        if not isinstance(params, SubsetParams):
            params = SubsetParams(params)

        # scalar axes have a single value and are never restricted
        if self.dependence_type == DependenceType.scalar:
            return self

        kind = self.kind
        if kind == AxisKind.numeric:
            return self._subset_numeric(params)
        elif kind == AxisKind.time:
            return self._subset_dates(params, "time", "time_range", "time_latest", "time_stride")
        elif kind == AxisKind.runtime:
            return self._subset_dates(params, "runtime", "runtime_range", "runtime_latest", None)
        elif kind == AxisKind.time_offset:
            return self._subset_time_offset(params)
        elif kind == AxisKind.time2d:
            # rows follow the run time axis, see subset_dependent
            return self
        else:
            raise ValueError("Unknown axis kind '%s'" % (kind,))

    def _subset_numeric(self, params):
        stride = params.get_stride(self.name, horizontal=self.axis_type in HORIZONTAL_AXIS_TYPES)

        if self.axis_type in VERTICAL_AXIS_TYPES and params["vert_coord"] is not None:
            index = self._find_nearest(params.get_float("vert_coord"))
            return self._subset_index(index, index)

        bounds = params.get_bounds(self.name)
        if bounds is not None:
            return self.subset_values(bounds[0], bounds[1], stride=stride)

        if stride > 1:
            return self._subset_index(0, self.ncoords - 1, stride)

        return self

    def _subset_dates(self, params, date_key, range_key, latest_key, stride_key):
        stride = params.get_int(stride_key, 1) if stride_key else 1

        if params.get_bool(latest_key):
            return self._subset_index(self.ncoords - 1, self.ncoords - 1)

        date = params.get_date(date_key)
        if date is not None:
            index = self._find_nearest(self.convert(date))
            return self._subset_index(index, index)

        date_range = params.get_date_range(range_key)
        if date_range is not None:
            return self.subset_values(self.convert(date_range[0]), self.convert(date_range[1]), stride=stride)

        if stride > 1:
            return self._subset_index(0, self.ncoords - 1, stride)

        return self

    def _subset_time_offset(self, params):
        offset = params.get_float("time_offset")
        if offset is not None:
            index = self._find_nearest(offset)
            return self._subset_index(index, index)

        offset_range = params.get_value_range("time_offset_range")
        if offset_range is not None:
            return self.subset_values(offset_range[0], offset_range[1])

        return self

    def subset_values(self, min_value, max_value, stride=1):
        """
        Get the subset of the axis within a range of values.

        Selects the longest contiguous run of coordinates whose value (or interval, for interval spacings) intersects
        ``[min_value, max_value]``. One-dimensional axes only.

        Arguments
        ---------
        min_value : float
            low value
        max_value : float
            high value
        stride : int, optional
            take every stride-th coordinate of the run. Contiguous intervals become discontiguous for strides > 1.

        Returns
        -------
        :class:`CoordAxis`
            subset axis

        Raises
        ------
        TypeError
            for scalar and 2d axes
        ValueError
            if no coordinate is within the range
        """

        if self.dependence_type == DependenceType.scalar or self.kind == AxisKind.time2d:
            raise TypeError("Cannot subset %s axis '%s' by value" % (self.dependence_type.name, self.name))

        lo, hi = sorted([make_coord_value(min_value), make_coord_value(max_value)])
        run = self._find_run(lo, hi)
        if run is None:
            raise ValueError("Coordinate axis '%s' has no coordinates within [%s, %s]" % (self.name, lo, hi))
        return self._subset_index(run[0], run[1], stride)

    def _find_run(self, lo, hi):
        n = self.ncoords
        if n == 0:
            return None

        if self.spacing == Spacing.regular:
            if n == 1 or self.resolution == 0.0:
                return (0, 0) if lo <= self.start_value <= hi else None
            tol = settings["VALUE_TOLERANCE"]
            fmin, fmax = sorted([(lo - self.start_value) / self.resolution, (hi - self.start_value) / self.resolution])
            imin = max(int(np.ceil(fmin - tol)), 0)
            imax = min(int(np.floor(fmax + tol)), n - 1)
            return (imin, imax) if imin <= imax else None

        values = self._require_values()
        if self.spacing == Spacing.irregularPoint:
            mask = (values >= lo) & (values <= hi)
        elif self.spacing == Spacing.contiguousInterval:
            mask = interval_mask(values[:-1], values[1:], lo, hi)
        elif self.spacing == Spacing.discontiguousInterval:
            mask = interval_mask(values[0::2], values[1::2], lo, hi)
        else:
            raise ValueError("Unknown spacing '%s'" % (self.spacing,))
        return longest_run(mask)

    def _find_nearest(self, value):
        if self.ncoords == 0:
            raise ValueError("Coordinate axis '%s' has no coordinates" % self.name)

        # intervals containing the value take precedence
        if self.is_interval:
            bounds = self.get_coord_bounds_as_array()
            (inside,) = np.where(interval_mask(bounds[:, 0], bounds[:, 1], value, value))
            if inside.size:
                return int(inside[0])

        coords = self.get_coords_as_array()
        return int(np.argmin(np.abs(coords - value)))

    def _subset_index(self, first, last, stride=1):
        if stride < 1:
            raise ValueError("stride must be >= 1, got %d" % stride)
        if not 0 <= first <= last < self.ncoords:
            raise ValueError(
                "Invalid index range [%d, %d] for axis '%s' with %d coordinates" % (first, last, self.name, self.ncoords)
            )

        n = (last - first) // stride + 1
        last = first + (n - 1) * stride
        spacing = self.spacing
        resolution = self.resolution * stride

        if self.spacing == Spacing.regular:
            start = self.start_value + first * self.resolution
            end = start + (n - 1) * resolution
            values = None
        else:
            v = self._require_values()
            index = np.arange(first, last + 1, stride)
            start = end = 0.0
            if self.spacing == Spacing.irregularPoint:
                values = v[index]
            elif self.spacing == Spacing.contiguousInterval:
                if stride == 1:
                    values = v[first : last + 2]
                else:
                    values = np.column_stack([v[index], v[index + 1]]).ravel()
                    spacing = Spacing.discontiguousInterval
            elif self.spacing == Spacing.discontiguousInterval:
                values = np.column_stack([v[2 * index], v[2 * index + 1]]).ravel()
            else:
                raise ValueError("Unknown spacing '%s'" % (self.spacing,))

        return self._replace(
            spacing=spacing,
            ncoords=n,
            start_value=start,
            end_value=end,
            resolution=resolution,
            values=values,
            reader=None,
            is_subset=True,
            source_range=self._compose_source_range(first, last, stride),
        )

    def _compose_source_range(self, first, last, stride):
        r = Range(self.name, first, last, stride)
        if self.source_range is None:
            return r
        return self.source_range.compose(r)

    def subset_dependent(self, axis):
        """
        Get the subset of a dependent axis matching a subset of the axis it depends on.

        Dependent axes take the coordinates at the indices of the subset axis. 2d time axes take the runs at the
        indices of the subset run time axis.

        Arguments
        ---------
        axis : :class:`CoordAxis`
            subset of the one-dimensional axis this axis depends on

        Returns
        -------
        :class:`CoordAxis`
            subset axis, or this axis if ``axis`` is not a subset

        Raises
        ------
        TypeError
            for axes that are neither dependent nor 2d time axes
        """

        if self.dependence_type == DependenceType.dependent:
            select = self._subset_index
        elif self.kind == AxisKind.time2d:
            select = self._subset_runs
        else:
            raise TypeError(
                "Cannot subset %s axis '%s' by a dependent axis" % (self.dependence_type.name, self.name)
            )

        if axis.name not in self.depends_on:
            raise ValueError("Coordinate axis '%s' does not depend on '%s'" % (self.name, axis.name))

        r = axis.source_range
        if not axis.is_subset or r is None:
            return self
        return select(r.first, r.last, r.stride)

    def _subset_runs(self, first, last, stride=1):
        nruns = self.ncoords // self.offsets_per_run
        if not 0 <= first <= last < nruns:
            raise ValueError(
                "Invalid run range [%d, %d] for 2d time axis '%s' with %d runs" % (first, last, self.name, nruns)
            )

        width = self.offsets_per_run
        if self.spacing == Spacing.discontiguousInterval:
            width *= 2

        rows = np.arange(first, last + 1, stride)
        values = self._require_values().reshape(nruns, width)[rows].ravel()

        return self._replace(
            ncoords=rows.size * self.offsets_per_run,
            values=values,
            reader=None,
            is_subset=True,
            source_range=self._compose_source_range(first, int(rows[-1]), stride),
        )


# properties that define an axis, in definition order (name, attributes and values are handled separately)
_DEFINITION_PROPERTIES = [
    "units",
    "description",
    "data_type",
    "axis_type",
    "dependence_type",
    "depends_on",
    "spacing",
    "ncoords",
    "start_value",
    "end_value",
    "resolution",
    "is_subset",
    "source_range",
    "offsets_per_run",
]

_DEFINING_PROPERTIES = ["name", "_attributes"] + _DEFINITION_PROPERTIES


def _attributes_equal(a, b):
    if set(a.keys()) != set(b.keys()):
        return False
    for key in a:
        va, vb = a[key], b[key]
        if isinstance(va, np.ndarray) or isinstance(vb, np.ndarray):
            if not np.array_equal(va, vb):
                return False
        elif isinstance(va, dict) and isinstance(vb, dict):
            if not _attributes_equal(va, vb):
                return False
        elif va != vb:
            return False
    return True
