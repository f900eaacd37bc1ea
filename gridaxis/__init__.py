"""
gridaxis Module

Coordinate axes of gridded scientific datasets.

Public API
----------
The public API is the ``gridaxis`` namespace and the ``gridaxis.coordinates`` and ``gridaxis.utils`` modules.
``gridaxis.core`` is the developer API.

Attributes
----------
version_info : OrderedDict
    Dict with keys MAJOR, MINOR, HOTFIX depicting version
"""

# Public API
from gridaxis.core.settings import settings
from gridaxis.core.coordinates import CoordAxis, SubsetParams, Range
from gridaxis.core.coordinates import Spacing, DependenceType, AxisType
from gridaxis.core.utils import cached_property, create_logfile
from gridaxis.core.units import ureg as units

# Organized submodules
# These files are simply wrappers to create a curated namespace of gridaxis modules
from gridaxis import coordinates
from gridaxis import utils

## Developer API
from gridaxis import core

# version handling
from gridaxis import version

__version__ = version.version()
version_info = version.VERSION_INFO

if settings["LOG_TO_FILE"]:
    create_logfile(settings["LOG_FILE_PATH"])
