"""
Index Ranges
"""

from collections import OrderedDict


class Range(object):
    """
    Named, inclusive, strided range of array indices.

    Ranges are used to slice the storage underlying a coordinate axis. ``Range.EMPTY`` is the range of a scalar axis.

    Parameters
    ----------
    name : str
        Name of the axis the range belongs to.
    first : int
        First index, inclusive.
    last : int
        Last index, inclusive.
    stride : int
        Step between indices.
    """

    EMPTY = None

    def __init__(self, name=None, first=0, last=0, stride=1):
        if first < 0:
            raise ValueError("Invalid range '%s': first index must be >= 0, got %d" % (name, first))
        if last < first:
            raise ValueError("Invalid range '%s': last index (%d) must be >= first index (%d)" % (name, last, first))
        if stride < 1:
            raise ValueError("Invalid range '%s': stride must be >= 1, got %d" % (name, stride))

        self._name = name
        self._first = int(first)
        self._last = int(first + (last - first) // stride * stride)
        self._stride = int(stride)
        self._length = (self._last - self._first) // self._stride + 1

    @classmethod
    def _empty(cls):
        r = cls.__new__(cls)
        r._name = None
        r._first = 0
        r._last = -1
        r._stride = 1
        r._length = 0
        return r

    @classmethod
    def from_definition(cls, d):
        """
        Create a range from a range definition.

        Arguments
        ---------
        d : dict
            range definition, with "first", "last", and optional "stride" and "name"

        Returns
        -------
        :class:`Range`
            index range
        """

        if d.get("length") == 0:
            return cls.EMPTY
        if "first" not in d or "last" not in d:
            raise ValueError('Range definition requires "first" and "last" properties')
        return cls(d.get("name"), d["first"], d["last"], d.get("stride", 1))

    @property
    def name(self):
        """:str: Axis name."""
        return self._name

    @property
    def first(self):
        return self._first

    @property
    def last(self):
        return self._last

    @property
    def stride(self):
        return self._stride

    @property
    def length(self):
        """:int: Number of indices in the range."""
        return self._length

    @property
    def is_empty(self):
        return self._length == 0

    @property
    def definition(self):
        d = OrderedDict()
        if self.is_empty:
            d["length"] = 0
            return d
        if self._name is not None:
            d["name"] = self._name
        d["first"] = self._first
        d["last"] = self._last
        d["stride"] = self._stride
        return d

    def as_slice(self):
        """Equivalent python slice."""
        if self.is_empty:
            return slice(0, 0)
        return slice(self._first, self._last + 1, self._stride)

    def compose(self, other):
        """
        Express a range of indices into this range as a range of indices into the underlying storage.

        Arguments
        ---------
        other : :class:`Range`
            range of positions within this range

        Returns
        -------
        :class:`Range`
            the same elements, indexed into the storage this range indexes
        """

        if other.last >= self._length:
            raise ValueError("Cannot compose range %s into range %s of length %d" % (other, self, self._length))
        return Range(
            other.name,
            self._first + other.first * self._stride,
            self._first + other.last * self._stride,
            self._stride * other.stride,
        )

    def __len__(self):
        return self._length

    def __iter__(self):
        return iter(range(self._first, self._last + 1, self._stride))

    def __eq__(self, other):
        if not isinstance(other, Range):
            return False
        if self.is_empty or other.is_empty:
            return self.is_empty and other.is_empty
        return (self._name, self._first, self._last, self._stride) == (
            other._name,
            other._first,
            other._last,
            other._stride,
        )

    def __hash__(self):
        return hash((self._name, self._first, self._last, self._stride, self._length))

    def __repr__(self):
        if self.is_empty:
            return "Range(EMPTY)"
        return "Range(%s): [%d:%d:%d]" % (self._name, self._first, self._last, self._stride)


Range.EMPTY = Range._empty()
