"""
Test Setup
"""

import copy
import pytest
from gridaxis.core.settings import settings


def pytest_addoption(parser):
    """Add command line option to pytest

    Parameters
    ----------
    parser : _pytest.config.argparsing.Parser

    """
    # config option for when we're running tests on ci
    parser.addoption("--ci", action="store_true", default=False)


def pytest_runtest_setup(item):
    markers = [marker.name for marker in item.iter_markers()]
    if item.config.getoption("--ci") and "slow" in markers:
        pytest.skip("Skip slow tests during CI")


def pytest_configure(config):
    """Configuration before all tests are run

    Parameters
    ----------
    config : _pytest.config.Config

    """

    config.addinivalue_line("markers", "slow: mark test as slow (threaded) test")


original_settings = {}


def pytest_sessionstart(session):
    # save settings
    global original_settings
    original_settings = copy.copy(settings)

    # never persist settings changed by tests
    settings["AUTOSAVE_SETTINGS"] = False


def pytest_sessionfinish(session, exitstatus):
    # restore settings
    keys = list(settings.keys())
    for key in keys:
        if key in original_settings:
            settings[key] = original_settings[key]
        else:
            del settings[key]
