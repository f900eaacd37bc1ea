"""
Time Helper

Conversion between calendar dates and the numeric offsets stored by time-like coordinate axes.

Time units follow the CF convention ``"<unit> since <reference date>"``, e.g. ``"hours since 2018-01-01T00:00"``.
Time offset axes may use a bare unit (``"hours"``); they can measure offsets but cannot convert dates.
Dates are numpy ``datetime64`` values with millisecond precision.
"""

import logging

import numpy as np
import traitlets as tl

from gridaxis.core.settings import settings
from gridaxis.core.units import time_unit_seconds
from gridaxis.core.coordinates.utils import make_date_value

_logger = logging.getLogger(__name__)

SUPPORTED_CALENDARS = ["standard", "gregorian", "proleptic_gregorian"]

_ONE_MS = np.timedelta64(1, "ms")


class TimeHelper(tl.HasTraits):
    """
    Calendar-date conversions for one time-like coordinate axis.

    Parameters
    ----------
    units : str
        Time units, ``"<unit> since <date>"`` or ``"<unit>"``.
    unit : str
        Time unit part of the units, e.g. ``'hours'``.
    ref_date : np.datetime64, None
        Reference date of the units, None for bare units.
    calendar : str
        Calendar name, one of ``SUPPORTED_CALENDARS``.
    """

    units = tl.Unicode(read_only=True)
    unit = tl.Unicode(read_only=True)
    ref_date = tl.Instance(np.datetime64, allow_none=True, read_only=True)
    calendar = tl.Unicode(read_only=True)

    def __init__(self, units, calendar=None):
        super(TimeHelper, self).__init__()

        if not isinstance(units, str) or not units.strip():
            raise ValueError("Time units are required for time axes")

        if calendar is None:
            calendar = settings["DEFAULT_CALENDAR"]
        calendar = calendar.lower()
        if calendar not in SUPPORTED_CALENDARS:
            raise ValueError("Unsupported calendar '%s', must be one of %s" % (calendar, SUPPORTED_CALENDARS))

        parts = units.strip().split(" since ", 1)
        unit = parts[0].strip()
        ref_date = None
        if len(parts) == 2:
            ref_date = make_date_value(parts[1]).astype("datetime64[ms]")

        # validates the unit
        self._seconds = time_unit_seconds(unit)

        self.set_trait("units", units.strip())
        self.set_trait("unit", unit)
        self.set_trait("ref_date", ref_date)
        self.set_trait("calendar", calendar)

    @classmethod
    def factory(cls, units, attributes=None):
        """
        Create the time helper for a time-like axis.

        The units argument is used if given, otherwise the ``units`` attribute. The calendar is read from the
        ``calendar`` attribute.

        Arguments
        ---------
        units : str
            axis units
        attributes : dict-like, optional
            axis attributes

        Returns
        -------
        :class:`TimeHelper`
            time helper
        """

        attributes = attributes or {}
        if not units:
            units = attributes.get("units")
        return cls(units, calendar=attributes.get("calendar"))

    def __repr__(self):
        return "TimeHelper(%s, calendar=%s)" % (self.units, self.calendar)

    def _require_ref_date(self):
        if self.ref_date is None:
            raise ValueError("Time units '%s' have no reference date" % self.units)
        return self.ref_date

    def convert(self, date):
        """
        Numeric offset of a date, in the time units.

        Arguments
        ---------
        date : str, datetime, np.datetime64
            calendar date

        Returns
        -------
        value : float
            offset from the reference date
        """

        ref_date = self._require_ref_date()
        date = make_date_value(date).astype("datetime64[ms]")
        return float((date - ref_date) / _ONE_MS) / 1000.0 / self._seconds

    def make_date(self, value):
        """
        Calendar date of a numeric offset.

        Arguments
        ---------
        value : float
            offset from the reference date, in the time units

        Returns
        -------
        date : np.datetime64
            calendar date (millisecond precision)
        """

        ref_date = self._require_ref_date()
        return ref_date + np.timedelta64(int(round(float(value) * self._seconds * 1000.0)), "ms")

    def make_dates(self, values):
        """
        Calendar dates of an array of numeric offsets.

        Arguments
        ---------
        values : array-like
            offsets from the reference date, in the time units

        Returns
        -------
        dates : np.ndarray
            datetime64[ms] array
        """

        ref_date = self._require_ref_date()
        ms = np.round(np.asarray(values, dtype=float) * self._seconds * 1000.0).astype(np.int64)
        return ref_date + ms.astype("timedelta64[ms]")

    def get_date_range(self, start_value, end_value):
        """
        Calendar date range of two numeric offsets.

        Returns
        -------
        date_range : tuple
            (start date, end date)
        """

        return self.make_date(start_value), self.make_date(end_value)

    def get_offset_in_time_units(self, start, end):
        """
        Offset between two dates, in the time units.

        Arguments
        ---------
        start : str, datetime, np.datetime64
            from date
        end : str, datetime, np.datetime64
            to date

        Returns
        -------
        offset : float
            ``end - start`` in the time units
        """

        start = make_date_value(start).astype("datetime64[ms]")
        end = make_date_value(end).astype("datetime64[ms]")
        return float((end - start) / _ONE_MS) / 1000.0 / self._seconds
