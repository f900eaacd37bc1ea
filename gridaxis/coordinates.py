"""
Coordinate Axis Public Module
"""

from gridaxis.core.coordinates import CoordAxis
from gridaxis.core.coordinates import Spacing, DependenceType, AxisType, AxisKind, LoadState
from gridaxis.core.coordinates import Range, SubsetParams, TimeHelper
from gridaxis.core.coordinates import CoordAxisReader, ArrayCoordAxisReader, DatasetCoordAxisReader
