"""
Utils Public Module
"""

from gridaxis.core.utils import create_logfile, cached_property
