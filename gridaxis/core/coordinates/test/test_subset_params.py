import pytest
import numpy as np

from gridaxis.core.coordinates.subset_params import SubsetParams


class TestSubsetParams(object):
    def test_missing(self):
        p = SubsetParams()
        assert p["time"] is None
        assert p.get_bool("time_latest") is False
        assert p.get_float("vert_coord") is None
        assert p.get_int("time_stride") is None
        assert p.get_int("time_stride", 1) == 1
        assert p.get_date("time") is None
        assert p.get_date_range("time_range") is None
        assert p.get_value_range("time_offset_range") is None
        assert p.get_bounds("lat") is None
        assert p.get_stride("lat") == 1

    def test_values(self):
        p = SubsetParams(
            time_latest=True,
            vert_coord=500,
            time_stride=2,
            time="2018-01-01T12:00Z",
            time_range=("2018-01-01", "2018-01-02"),
            time_offset_range=[0, 6],
        )
        assert p.get_bool("time_latest") is True
        assert p.get_float("vert_coord") == 500.0
        assert p.get_int("time_stride") == 2
        assert p.get_date("time") == np.datetime64("2018-01-01T12:00")
        assert p.get_date_range("time_range") == (np.datetime64("2018-01-01"), np.datetime64("2018-01-02"))
        assert p.get_value_range("time_offset_range") == (0.0, 6.0)

    def test_invalid(self):
        with pytest.raises(TypeError):
            SubsetParams(time_stride="2").get_int("time_stride")
        with pytest.raises(TypeError):
            SubsetParams(time_stride=True).get_int("time_stride")
        with pytest.raises(TypeError):
            SubsetParams(vert_coord="500").get_float("vert_coord")
        with pytest.raises(ValueError):
            SubsetParams(time_range=("2018-01-01",)).get_date_range("time_range")
        with pytest.raises(ValueError):
            SubsetParams(time_offset_range=(0, 1, 2)).get_value_range("time_offset_range")
        with pytest.raises(ValueError):
            SubsetParams(time="yesterday").get_date("time")

    def test_bounds(self):
        p = SubsetParams(bounds={"lat": (10, 20), "lon": [30, 40, 50]})
        assert p.get_bounds("lat") == (10.0, 20.0)
        assert p.get_bounds("x") is None
        with pytest.raises(ValueError):
            p.get_bounds("lon")

    def test_stride(self):
        p = SubsetParams(stride={"lat": 3}, horiz_stride=2)
        assert p.get_stride("lat") == 3
        assert p.get_stride("lat", horizontal=True) == 3
        assert p.get_stride("lon") == 1
        assert p.get_stride("lon", horizontal=True) == 2

        with pytest.raises(ValueError):
            SubsetParams(stride={"lat": 0}).get_stride("lat")
        with pytest.raises(ValueError):
            SubsetParams(horiz_stride=1.5).get_stride("lat", horizontal=True)

    def test_repr(self):
        assert repr(SubsetParams(time_latest=True)) == "SubsetParams(time_latest=True)"
