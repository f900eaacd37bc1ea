from gridaxis.core.coordinates.utils import make_coord_value
from gridaxis.core.coordinates.utils import make_date_value
from gridaxis.core.coordinates.utils import make_coord_array

from gridaxis.core.coordinates.taxonomy import Spacing, DependenceType, AxisType, AxisKind, LoadState
from gridaxis.core.coordinates.range import Range
from gridaxis.core.coordinates.time_helper import TimeHelper
from gridaxis.core.coordinates.subset_params import SubsetParams
from gridaxis.core.coordinates.reader import CoordAxisReader, ArrayCoordAxisReader, DatasetCoordAxisReader
from gridaxis.core.coordinates.coord_axis import CoordAxis
