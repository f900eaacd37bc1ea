import json
from collections import OrderedDict

import pytest
import traitlets as tl
import numpy as np
from numpy.testing import assert_equal

from gridaxis.core.coordinates.coord_axis import CoordAxis
from gridaxis.core.coordinates.taxonomy import AxisType, AxisKind, DependenceType, LoadState, Spacing
from gridaxis.core.coordinates.taxonomy import expected_values_size
from gridaxis.core.coordinates.range import Range
from gridaxis.core.coordinates.reader import ArrayCoordAxisReader
from gridaxis.core.coordinates.time_helper import TimeHelper


def make_axis(spacing, dependence_type, ncoords):
    size = expected_values_size(spacing, ncoords)
    values = None if size is None else np.arange(size, dtype=float)
    depends_on = ["other"] if dependence_type in (DependenceType.dependent, DependenceType.twoD) else None
    return CoordAxis(
        "x",
        axis_type=AxisType.GeoX,
        dependence_type=dependence_type,
        depends_on=depends_on,
        spacing=spacing,
        ncoords=ncoords,
        start_value=0.0,
        end_value=4.0,
        values=values,
    )


class TestCoordAxisInvariants(object):
    @pytest.mark.parametrize("ncoords", [0, 1, 2])
    @pytest.mark.parametrize("dependence_type", list(DependenceType))
    @pytest.mark.parametrize("spacing", list(Spacing))
    def test_invariants(self, spacing, dependence_type, ncoords):
        c = make_axis(spacing, dependence_type, ncoords)

        # explicit values determine the start and end
        if c.values is not None and c.values.size > 0:
            assert c.start_value == c.values[0]
            assert c.end_value == c.values[-1]

        # derived resolution
        if ncoords > 1:
            assert c.resolution == (c.end_value - c.start_value) / (ncoords - 1)

        # values only for non-regular spacing
        if spacing == Spacing.regular:
            assert c.values is None
            assert c.get_values() is None
        else:
            assert c.get_values().size == expected_values_size(spacing, ncoords)

        # depends_on
        if dependence_type in (DependenceType.dependent, DependenceType.twoD):
            assert c.depends_on == ("other",)
        else:
            assert c.depends_on == ()

        # shape and range
        if dependence_type == DependenceType.scalar:
            assert c.get_shape() == ()
            assert c.get_range() is Range.EMPTY
        elif ncoords == 0:
            assert c.get_shape() == (0,)
            with pytest.raises(ValueError):
                c.get_range()
        else:
            assert c.get_shape() == (ncoords,)
            assert c.get_range() == Range("x", 0, ncoords - 1)
            assert c.get_coords_as_array().shape == (ncoords,)
            assert c.get_coord_bounds_as_array().shape == (ncoords, 2)

    def test_derived_resolution(self):
        c = CoordAxis("x", ncoords=5, start_value=0, end_value=8)
        assert c.resolution == 2.0

    def test_supplied_resolution(self):
        c = CoordAxis("x", ncoords=5, start_value=0, end_value=8, resolution=3.5)
        assert c.resolution == 3.5

    def test_regular(self):
        c = CoordAxis("x", ncoords=4, start_value=10, end_value=30, resolution=5)
        assert_equal(c.get_coords_as_array(), [10, 15, 20, 25])
        assert c.end_value == 30
        assert c.is_regular
        assert not c.is_interval
        assert c.get_values() is None
        assert c.load_state == LoadState.unloaded

    def test_values_override_start(self):
        c = CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=3, values=[1, 2, 3], start_value=99)
        assert c.start_value == 1
        assert c.end_value == 3
        assert c.resolution == 1.0
        assert c.has_data
        assert c.load_state == LoadState.loaded

    def test_scalar(self):
        for ncoords in [0, 1, 5]:
            c = CoordAxis("reftime", dependence_type=DependenceType.scalar, ncoords=ncoords, start_value=5)
            assert c.get_shape() == ()
            assert c.get_range() is Range.EMPTY
            assert c.get_range().length == 0
            assert c.is_scalar

    def test_irregular_point(self):
        c = CoordAxis("z", spacing=Spacing.irregularPoint, ncoords=3, values=[0, 2, 6])
        assert_equal(c.get_coords_as_array(), [0, 2, 6])
        assert_equal(c.get_coord_bounds_as_array(), [[-1, 1], [1, 4], [4, 8]])
        assert c.get_coord_edge1(1) == 1
        assert c.get_coord_edge2(1) == 4
        assert c.get_coord_midpoint(2) == 6

    def test_contiguous_interval(self):
        c = CoordAxis("z", spacing=Spacing.contiguousInterval, ncoords=3, values=[0, 2, 6, 8])
        assert c.is_interval
        assert c.start_value == 0
        assert c.end_value == 8
        assert_equal(c.get_coords_as_array(), [1, 4, 7])
        assert_equal(c.get_coord_bounds_as_array(), [[0, 2], [2, 6], [6, 8]])

    def test_discontiguous_interval(self):
        c = CoordAxis("z", spacing=Spacing.discontiguousInterval, ncoords=2, values=[0, 1, 5, 6])
        bounds = c.get_coord_bounds_as_array()
        assert tuple(bounds[0]) == (0, 1)
        assert tuple(bounds[1]) == (5, 6)
        assert_equal(c.get_coords_as_array(), [0.5, 5.5])

    def test_regular_bounds(self):
        c = CoordAxis("x", ncoords=3, start_value=0, end_value=2)
        assert_equal(c.get_coord_bounds_as_array(), [[-0.5, 0.5], [0.5, 1.5], [1.5, 2.5]])

    def test_attributes_read_only(self):
        atts = OrderedDict([("standard_name", "latitude"), ("positive", "up")])
        c = CoordAxis("lat", attributes=atts)
        assert list(c.attributes.keys()) == ["standard_name", "positive"]
        with pytest.raises(TypeError):
            c.attributes["standard_name"] = "longitude"

        # the axis keeps its own copy
        atts["standard_name"] = "longitude"
        assert c.attributes["standard_name"] == "latitude"

    def test_traits_read_only(self):
        c = CoordAxis("x", ncoords=3, start_value=0, end_value=2)
        with pytest.raises(tl.TraitError):
            c.ncoords = 4
        with pytest.raises(tl.TraitError):
            c.start_value = 1.0

    def test_enum_names(self):
        c = CoordAxis(
            "lat", axis_type="Lat", spacing="irregularPoint", dependence_type="independent", ncoords=2, values=[0, 1]
        )
        assert c.axis_type == AxisType.Lat
        assert c.spacing == Spacing.irregularPoint
        assert c.dependence_type == DependenceType.independent

    def test_repr(self):
        repr(CoordAxis("x", ncoords=3, start_value=0, end_value=2))
        repr(CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=2, values=[0, 1]))

    def test_set_dataset(self):
        c = CoordAxis("x", ncoords=3, start_value=0, end_value=2)
        c.set_dataset(object())
        assert c.ncoords == 3


class TestCoordAxisPreconditions(object):
    def test_regular_with_values(self):
        with pytest.raises(ValueError, match="regular spacing"):
            CoordAxis("x", spacing=Spacing.regular, ncoords=3, values=[0, 1, 2])

    def test_no_values_no_reader(self):
        for spacing in [Spacing.irregularPoint, Spacing.contiguousInterval, Spacing.discontiguousInterval]:
            with pytest.raises(ValueError, match="requires either values or a reader"):
                CoordAxis("x", spacing=spacing, ncoords=3)

    def test_values_size(self):
        with pytest.raises(ValueError):
            CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=3, values=[0, 1])
        with pytest.raises(ValueError):
            CoordAxis("x", spacing=Spacing.contiguousInterval, ncoords=3, values=[0, 1, 2])
        with pytest.raises(ValueError):
            CoordAxis("x", spacing=Spacing.discontiguousInterval, ncoords=2, values=[0, 1, 2])

    def test_values_type(self):
        with pytest.raises(TypeError):
            CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=2, values=["a", "b"])

    def test_ncoords(self):
        with pytest.raises(ValueError):
            CoordAxis("x", ncoords=-1)
        with pytest.raises(TypeError):
            CoordAxis("x", ncoords=1.5)
        with pytest.raises(TypeError):
            CoordAxis("x", ncoords=True)

        # numpy integers are accepted
        c = CoordAxis("x", ncoords=np.int64(3), start_value=0, end_value=2)
        assert c.ncoords == 3

    def test_depends_on(self):
        with pytest.raises(ValueError, match="requires depends_on"):
            CoordAxis("x", dependence_type=DependenceType.dependent, ncoords=1)
        with pytest.raises(ValueError, match="requires depends_on"):
            CoordAxis("x", dependence_type=DependenceType.twoD, ncoords=1)
        with pytest.raises(ValueError, match="cannot depend on"):
            CoordAxis("x", dependence_type=DependenceType.independent, depends_on=["y"], ncoords=1)
        with pytest.raises(ValueError, match="cannot depend on"):
            CoordAxis("x", dependence_type=DependenceType.scalar, depends_on=["y"], ncoords=1)

    def test_invalid_enum(self):
        with pytest.raises(tl.TraitError):
            CoordAxis("x", spacing="sparse", ncoords=1)
        with pytest.raises(tl.TraitError):
            CoordAxis("x", axis_type="Depth", ncoords=1)

    def test_invalid_data_type(self):
        with pytest.raises(TypeError):
            CoordAxis("x", data_type="not-a-dtype", ncoords=1)

    def test_offsets_per_run_only_for_time2d(self):
        with pytest.raises(ValueError, match="only valid for 2d time axes"):
            CoordAxis("x", ncoords=4, start_value=0, end_value=3, offsets_per_run=2)

    def test_time2d(self):
        kwargs = dict(
            axis_type=AxisType.Time,
            units="hours since 2018-01-01",
            dependence_type=DependenceType.twoD,
            depends_on=["runtime", "offset"],
            spacing=Spacing.irregularPoint,
            ncoords=4,
            values=[0, 6, 12, 18],
        )

        c = CoordAxis("time", offsets_per_run=2, **kwargs)
        assert c.kind == AxisKind.time2d
        assert c.is_time2d

        with pytest.raises(ValueError, match="requires offsets_per_run"):
            CoordAxis("time", **kwargs)
        with pytest.raises(ValueError, match="not a multiple"):
            CoordAxis("time", offsets_per_run=3, **kwargs)

        kwargs["spacing"] = Spacing.contiguousInterval
        kwargs["values"] = [0, 6, 12, 18, 24]
        with pytest.raises(ValueError, match="spacing"):
            CoordAxis("time", offsets_per_run=2, **kwargs)

    def test_time_axis_requires_units(self):
        with pytest.raises(ValueError):
            CoordAxis("time", axis_type=AxisType.Time, ncoords=3, start_value=0, end_value=2)


class TestCoordAxisKind(object):
    def test_kind(self):
        assert CoordAxis("x", axis_type=AxisType.GeoX).kind == AxisKind.numeric
        assert CoordAxis("x").kind == AxisKind.numeric
        assert CoordAxis("t", axis_type=AxisType.Time, units="days since 2000-01-01").kind == AxisKind.time
        assert CoordAxis("r", axis_type=AxisType.RunTime, units="hours since 2000-01-01").kind == AxisKind.runtime
        assert CoordAxis("o", axis_type=AxisType.TimeOffset, units="hours").kind == AxisKind.time_offset

    def test_time_helper(self):
        assert CoordAxis("x", axis_type=AxisType.Lat).time_helper is None
        assert isinstance(
            CoordAxis("t", axis_type=AxisType.Time, units="days since 2000-01-01").time_helper, TimeHelper
        )
        assert isinstance(CoordAxis("r", axis_type=AxisType.RunTime, units="hours since 2000-01-01").time_helper, TimeHelper)

        # time offset units from the attributes
        c = CoordAxis("o", axis_type=AxisType.TimeOffset, attributes={"units": "hours"})
        assert c.time_helper.unit == "hours"


class TestCoordAxisTime(object):
    def test_time(self):
        c = CoordAxis(
            "time",
            axis_type=AxisType.Time,
            units="hours since 2018-01-01",
            ncoords=3,
            start_value=0,
            end_value=12,
        )

        assert c.convert("2018-01-01T06:00") == 6.0
        assert c.make_date(12) == np.datetime64("2018-01-01T12:00")
        assert c.get_date_range() == (np.datetime64("2018-01-01T00:00"), np.datetime64("2018-01-01T12:00"))
        assert c.get_offset_in_time_units("2018-01-01", "2018-01-02") == 24.0
        assert_equal(
            c.get_dates_as_array(),
            np.array(["2018-01-01T00:00", "2018-01-01T06:00", "2018-01-01T12:00"]).astype("datetime64[ms]"),
        )

    def test_not_time(self):
        c = CoordAxis("lat", axis_type=AxisType.Lat, ncoords=3, start_value=0, end_value=2)
        with pytest.raises(TypeError, match="not a time axis"):
            c.convert("2018-01-01")
        with pytest.raises(TypeError, match="not a time axis"):
            c.make_date(0)
        with pytest.raises(TypeError, match="not a time axis"):
            c.get_date_range()
        with pytest.raises(TypeError, match="not a time axis"):
            c.get_offset_in_time_units("2018-01-01", "2018-01-02")
        with pytest.raises(TypeError, match="not a time axis"):
            c.get_dates_as_array()


class TestCoordAxisDefinition(object):
    def test_definition(self):
        c = CoordAxis("lat", axis_type=AxisType.Lat, units="degrees_north", ncoords=3, start_value=0, end_value=2)
        d = c.definition
        assert d["name"] == "lat"
        assert d["axis_type"] == AxisType.Lat
        assert d["ncoords"] == 3
        assert "description" not in d
        assert "values" not in d

        c2 = CoordAxis.from_definition(d)
        assert c2 == c

    def test_full_definition(self):
        c = CoordAxis("lat", ncoords=3, start_value=0, end_value=2)
        d = c.full_definition
        assert d["description"] == ""
        assert d["is_subset"] is False
        assert d["attributes"] == OrderedDict()

    def test_from_definition_requires_name(self):
        with pytest.raises(ValueError, match="requires \"name\""):
            CoordAxis.from_definition({"ncoords": 3})

    def test_json(self):
        c = CoordAxis(
            "depth",
            axis_type=AxisType.GeoZ,
            units="m",
            attributes=OrderedDict([("positive", "down")]),
            spacing=Spacing.contiguousInterval,
            ncoords=3,
            values=[0, 10, 50, 100],
        )

        s = c.json
        d = json.loads(s)
        assert d["axis_type"] == "GeoZ"
        assert d["spacing"] == "contiguousInterval"
        assert d["values"] == [0, 10, 50, 100]

        c2 = CoordAxis.from_json(s)
        assert c2 == c
        assert c2.hash == c.hash

    def test_json_subset(self):
        c = CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=5, values=[1, 3, 5, 7, 9])
        s = c.subset(4, 8)
        s2 = CoordAxis.from_json(s.json)
        assert s2 == s
        assert s2.source_range == Range("x", 2, 3)
        assert s2.is_subset

    def test_definition_lazy(self):
        reader = ArrayCoordAxisReader([0, 1, 3])
        c = CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=3, start_value=0, end_value=3, reader=reader)
        assert_equal(c.definition["values"], [0, 1, 3])
        assert c.load_state == LoadState.loaded

    def test_hash(self):
        c1 = CoordAxis("x", ncoords=3, start_value=0, end_value=2)
        c2 = CoordAxis("x", ncoords=3, start_value=0, end_value=2)
        c3 = CoordAxis("x", ncoords=4, start_value=0, end_value=2)
        assert c1.hash == c2.hash
        assert c1.hash != c3.hash

    def test_eq(self):
        c = CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=3, values=[0, 1, 3])
        assert c == CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=3, values=[0, 1, 3])
        assert c != CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=3, values=[0, 2, 3])
        assert c != CoordAxis("y", spacing=Spacing.irregularPoint, ncoords=3, values=[0, 1, 3])
        assert c != "x"

    def test_eq_array_attributes(self):
        c1 = CoordAxis("x", ncoords=3, start_value=0, end_value=2, attributes={"valid_range": np.array([0, 10])})
        c2 = CoordAxis("x", ncoords=3, start_value=0, end_value=2, attributes={"valid_range": np.array([0, 10])})
        c3 = CoordAxis("x", ncoords=3, start_value=0, end_value=2, attributes={"valid_range": np.array([0, 20])})
        c4 = CoordAxis("x", ncoords=3, start_value=0, end_value=2, attributes={"valid_range": [0, 10]})
        c5 = CoordAxis("x", ncoords=3, start_value=0, end_value=2, attributes={"valid_min": 0})
        assert c1 == c2
        assert c1 != c3
        assert c1 == c4
        assert c1 != c5
        assert c1 != CoordAxis("x", ncoords=3, start_value=0, end_value=2)

    def test_copy(self):
        reader = ArrayCoordAxisReader([0, 1, 3])
        c = CoordAxis("x", spacing=Spacing.irregularPoint, ncoords=3, start_value=0, end_value=3, reader=reader)
        c2 = c.copy()
        assert c2 is not c
        assert c2.reader is reader
        assert c2 == c
