"""
gridaxis Settings
"""

import os
import json
from copy import deepcopy
import logging

from gridaxis import version

_logger = logging.getLogger(__name__)

# Settings Defaults
DEFAULT_SETTINGS = {
    # gridaxis core settings
    "DEBUG": False,
    "ROOT_PATH": os.path.join(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~")), ".config", "gridaxis"),
    "AUTOSAVE_SETTINGS": False,
    "LOG_TO_FILE": False,
    "LOG_FILE_PATH": os.path.join(
        os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~")), "gridaxis", "logs", "gridaxis.log"
    ),
    "GRIDAXIS_VERSION": version.semver(),
    # axes
    "RETRY_FAILED_READS": True,
    "DEFAULT_CALENDAR": "standard",
    "VALUE_TOLERANCE": 1e-10,
}


class GridaxisSettings(dict):
    """
    Persistently stored gridaxis settings

    gridaxis settings are persistently stored in a ``settings.json`` file created at runtime.
    By default, gridaxis looks for a settings json file in the users home directory
    (``~/.config/gridaxis/settings.json``), or $XDG_CONFIG_HOME/.config/gridaxis/settings.json.

    Default settings can be overridden or extended by:
      * editing the ``settings.json`` file in the settings directory
      * creating a ``settings.json`` in the current working directory (i.e. ``./settings.json``)

    If ``settings.json`` files exist in multiple places, gridaxis will load settings in the following order,
    overwriting previously loaded settings in the process (i.e. highest numbered settings file prefered):
      1. gridaxis settings defaults
      2. settings directory (``~/.config/gridaxis/settings.json``)
      3. current working directory settings (``./settings.json``)

    :attr:`settings.settings_path` shows the path of the last loaded settings file (e.g. the active settings file).
    To persistently update the active settings file as changes are made at runtime,
    set the ``settings['AUTOSAVE_SETTINGS']`` field to ``True``. The active setting file can be persistently
    saved at any time using :meth:`settings.save`.

    The default settings are shown below:

    Attributes
    ----------
    ROOT_PATH : str
        Path to primary gridaxis working directory. Defaults to ``~/.config/gridaxis``.
    AUTOSAVE_SETTINGS: bool
        Save settings automatically as they are changed during runtime. Defaults to ``False``.
    LOG_TO_FILE : bool
        Attach a file handler to the ``gridaxis`` logger when the package is imported. Defaults to ``False``.
    LOG_FILE_PATH : str
        Log file used when ``LOG_TO_FILE`` is enabled.
    RETRY_FAILED_READS : bool
        If True, a coordinate axis whose deferred read failed calls its reader again on the next
        :meth:`CoordAxis.get_values` call. If False, the failure is kept and the reader is not called again.
        Defaults to ``True``.
    DEFAULT_CALENDAR : str
        Calendar assumed for time axes without a ``calendar`` attribute. Defaults to ``'standard'``.
    VALUE_TOLERANCE : float
        Tolerance, in units of the axis resolution, used when selecting regularly spaced coordinates by value.
        Defaults to ``1e-10``.
    """

    def __init__(self):
        self._loaded = False

        # call dict init
        super(GridaxisSettings, self).__init__()

        # load settings from default locations
        self.load()

        # set loaded flag
        self._loaded = True

    def __setitem__(self, key, value):

        # get old value if it exists
        try:
            old_val = deepcopy(self[key])
        except KeyError:
            old_val = None

        super(GridaxisSettings, self).__setitem__(key, value)

        # save settings file if value has changed
        if self._loaded and self["AUTOSAVE_SETTINGS"] and old_val != value:
            self.save()

    def __getitem__(self, key):

        # return none if the parameter does not exist
        try:
            return super(GridaxisSettings, self).__getitem__(key)
        except KeyError:
            return None

    def _load_defaults(self):
        """Load default settings"""

        for key in DEFAULT_SETTINGS:
            self[key] = DEFAULT_SETTINGS[key]

    def _load_user_settings(self, path=None, filename="settings.json"):
        """Load user settings from settings.json file

        Parameters
        ----------
        path : str
            Full path to containing directory of settings file
        filename : str
            Filename of custom settings file
        """

        # custom file path - only used if path is not None
        filepath = os.path.join(path, filename) if path is not None else None

        # home path location is in the ROOT_PATH
        root_filepath = os.path.join(self["ROOT_PATH"], filename)

        # cwd path
        cwd_filepath = os.path.join(os.getcwd(), filename)

        # set settings path to default to start
        self._settings_filepath = root_filepath

        if path is not None and not os.path.exists(path):
            raise ValueError("Input gridaxis settings path does not exist: {}".format(path))

        # order of paths to import settings - the later settings will overwrite earlier ones
        filepath_choices = [root_filepath, cwd_filepath, filepath]

        for p in filepath_choices:
            json_settings = None

            if p is not None and os.path.exists(p):

                try:
                    with open(p, "r") as f:
                        json_settings = json.load(f)
                except json.JSONDecodeError:

                    # if the root_filepath settings file is broken, raise
                    if p == root_filepath:
                        raise
                    _logger.warning("Ignoring unreadable settings file {}".format(p))

                if json_settings is not None:
                    for key in json_settings:
                        self[key] = json_settings[key]

                    # save this path as the active
                    self._settings_filepath = p

    @property
    def settings_path(self):
        """Path to the last loaded ``settings.json`` file

        Returns
        -------
        str
            Path to the last loaded ``settings.json`` file
        """
        return self._settings_filepath

    @property
    def defaults(self):
        """
        Show the gridaxis default settings
        """
        return DEFAULT_SETTINGS

    def save(self, filepath=None):
        """
        Save current settings to active settings file

        :attr:`settings.settings_path` shows the path to the currently active settings file

        Parameters
        ----------
        filepath : str, optional
            Path to settings file to save. Defaults to :attr:`self.settings_filepath`
        """

        if filepath is not None:
            self._settings_filepath = filepath

        if not os.path.exists(self._settings_filepath):
            os.makedirs(os.path.dirname(self._settings_filepath), exist_ok=True)

        with open(self._settings_filepath, "w") as f:
            json.dump(self, f, indent=4)

    def reset(self):
        """
        Reset settings to defaults.

        This method will ignore the value in :attr:`AUTOSAVE_SETTINGS`.
        To persistenly reset settings to defaults, call :meth:`settings.save()` after this method.
        """

        # ignore autosave
        self["AUTOSAVE_SETTINGS"] = False

        self.clear()
        self._load_defaults()

    def load(self, path=None, filename="settings.json"):
        """
        Load a new settings file to be active

        :attr:`settings.settings_path` shows the path to the currently active settings file

        Parameters
        ----------
        path : str, optional
            Path to directory which contains the settings file. Defaults to :attr:`DEFAULT_SETTINGS['ROOT_PATH']`
        filename : str, optional
            Filename of the settings file. Defaults to 'settings.json'
        """
        self._load_defaults()
        self._load_user_settings(path, filename)

        # it breaks things to set these paths to None, set back to default if set to None
        if self["ROOT_PATH"] is None:
            self["ROOT_PATH"] = DEFAULT_SETTINGS["ROOT_PATH"]

        if self["LOG_FILE_PATH"] is None:
            self["LOG_FILE_PATH"] = DEFAULT_SETTINGS["LOG_FILE_PATH"]

    def __enter__(self):
        # save original settings
        self._original = {k: v for k, v in self.items()}

    def __exit__(self, type, value, traceback):
        # restore original settings
        for k, v in self._original.items():
            self[k] = v


# load settings dict when module is loaded
settings = GridaxisSettings()
