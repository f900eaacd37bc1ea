"""
Utils Summary
"""

import os
import json
import enum
import datetime
import logging

import traitlets as tl
import numpy as np

# create log for module
_log = logging.getLogger(__name__)

from gridaxis.core.settings import settings


def create_logfile(
    filename=settings["LOG_FILE_PATH"],
    level=logging.INFO,
    format="[%(asctime)s] %(name)s.%(funcName)s[%(lineno)d] - %(levelname)s - %(message)s",
):
    """Convience method to create a log file that only logs
    gridaxis related messages

    Parameters
    ----------
    filename : str, optional
        Filename of the log file. Defaults to ``settings["LOG_FILE_PATH"]``
    level : int, optional
        Log level to use (0 - 50). Defaults to ``logging.INFO`` (20)
        See https://docs.python.org/3/library/logging.html#levels
    format : str, optional
        String format for log messages.
        See https://docs.python.org/3/library/logging.html#logrecord-attributes
        for creating format. Default is:
        format='[%(asctime)s] %(name)s.%(funcName)s[%(lineno)d] - %(levelname)s - %(message)s'

    Returns
    -------
    logging.Logger, logging.Handler, logging.Formatter
        Returns the constructed logger, handler, and formatter for the log file
    """
    # get logger for gridaxis module only
    log = logging.getLogger("gridaxis")
    log.setLevel(level)

    # Create directory if it doesn't exist
    dirname = os.path.dirname(filename)
    if dirname:
        os.makedirs(dirname, exist_ok=True)

    handler = logging.FileHandler(filename, "a")

    # see https://docs.python.org/3/library/logging.html#logrecord-attributes
    formatter = logging.Formatter(format)
    handler.setFormatter(formatter)

    log.addHandler(handler)

    # insert log from utils into logfile
    _log.info("Logging to file {}".format(filename))

    return log, handler, formatter


class ArrayTrait(tl.TraitType):
    """A coercing numpy array trait."""

    def __init__(self, ndim=None, shape=None, dtype=None, dtypes=None, default_value=None, *args, **kwargs):
        if ndim is not None and shape is not None and len(shape) != ndim:
            raise ValueError("Incompatible ndim and shape (ndim=%d, shape=%s)" % (ndim, shape))
        if dtype is not None and not isinstance(dtype, type):
            if dtype not in np.sctypeDict:
                raise ValueError("Unknown dtype '%s'" % dtype)
            dtype = np.sctypeDict[dtype]
        self.ndim = ndim
        self.shape = shape
        self.dtype = dtype
        super(ArrayTrait, self).__init__(default_value=default_value, *args, **kwargs)

    def validate(self, obj, value):
        # coerce type
        if not isinstance(value, np.ndarray):
            value = np.array(value)

        # ndim
        if self.ndim is not None and self.ndim != value.ndim:
            raise tl.TraitError(
                "The '%s' trait of an %s instance must have ndim %d, but a value with ndim %d was specified"
                % (self.name, obj.__class__.__name__, self.ndim, value.ndim)
            )

        # shape
        if self.shape is not None and self.shape != value.shape:
            raise tl.TraitError(
                "The '%s' trait of an %s instance must have shape %s, but a value %s with shape %s was specified"
                % (self.name, obj.__class__.__name__, self.shape, value, value.shape)
            )

        # dtype
        if self.dtype is not None:
            try:
                value = value.astype(self.dtype)
            except (TypeError, ValueError):
                raise tl.TraitError(
                    "The '%s' trait of an %s instance must have dtype %s, but a value with dtype %s was specified"
                    % (self.name, obj.__class__.__name__, self.dtype, value.dtype)
                )

        return value


class TupleTrait(tl.List):
    """An instance of a Python tuple that accepts the 'trait' argument (like Set, List, and Dict)."""

    def validate(self, obj, value):
        value = super(TupleTrait, self).validate(obj, value)
        return tuple(value)


class JSONEncoder(json.JSONEncoder):
    def default(self, obj):
        # gridaxis objects with definitions (coordinate axes, index ranges)
        if hasattr(obj, "definition") and not isinstance(obj, type):
            return obj.definition

        # axis taxonomy
        if isinstance(obj, enum.Enum):
            return obj.name

        # datetime64
        if isinstance(obj, np.datetime64):
            return obj.astype(str)

        # datetime
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()

        # numpy scalars
        if isinstance(obj, np.integer):
            return int(obj)

        if isinstance(obj, np.floating):
            return float(obj)

        # numpy array
        if isinstance(obj, np.ndarray):
            if np.issubdtype(obj.dtype, np.datetime64):
                return obj.astype(str).tolist()
            if np.issubdtype(obj.dtype, np.number):
                return obj.tolist()
            else:
                try:
                    # completely serialize the individual elements using the custom encoder
                    return json.loads(json.dumps([e for e in obj], cls=JSONEncoder))
                except TypeError as e:
                    raise TypeError("Cannot serialize numpy array\n%s" % e)

        # raise the TypeError
        return json.JSONEncoder.default(self, obj)


def cached_property(fn):
    """
    Decorator that creates a property that is computed once for each object.

    Examples
    --------

    >>> class MyAxis(tl.HasTraits):
        # property that is recomputed every time
        @property
        def my_property(self):
            return 0

        # property is computed once for each object
        @cached_property
        def my_cached_property(self):
            return 1
    """

    if not callable(fn):
        raise TypeError("cached_property decorator does not accept any positional arguments")

    key = "_gridaxis_cached_property_%s" % fn.__name__

    @property
    def wrapper(self):
        if hasattr(self, key):
            value = getattr(self, key)
        else:
            value = fn(self)
            setattr(self, key, value)
        return value

    return wrapper
