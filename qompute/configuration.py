"""
Numeric configuration.

Settings are read from a ``qompute.toml`` file. The current directory, the
directory named by ``QOMPUTE_CONF`` and the user config directory are
searched in that order; the first file found wins.

Example file::

    [numeric]
    precision = "single"
    atol = 1e-6
    rtol = 1e-5
"""

import copy
import os
import logging

import numpy as np
import toml
from appdirs import user_config_dir

from .errors import QomputeError

log = logging.getLogger(__name__)

PRECISIONS = {
    "double": np.complex128,
    "single": np.complex64,
}

DEFAULTS = {
    "numeric": {
        "precision": "double",
        "atol": 1e-8,
        "rtol": 1e-5,
    }
}


class Configuration:
    """Configuration class.

    Loads and stores the numeric settings used across qompute. Keys are
    addressed with dotted paths, e.g. ``config["numeric.atol"]``.

    Args:
        name (str): file name to search for
    """

    def __init__(self, name='qompute.toml'):
        self._config = copy.deepcopy(DEFAULTS)
        self._filepath = None
        self._name = name
        self._user_config_dir = user_config_dir('qompute')
        self._env_config_dir = os.environ.get("QOMPUTE_CONF", "")

        directories = [os.curdir, self._env_config_dir, self._user_config_dir]
        for directory in directories:
            if not directory:
                continue
            filepath = os.path.join(directory, self._name)
            try:
                self.load(filepath)
                break
            except FileNotFoundError:
                continue
        else:
            log.debug('No qompute configuration file found, using defaults.')

    def __repr__(self):
        return "qompute Configuration <{}>".format(self._filepath)

    @property
    def path(self):
        return self._filepath

    def load(self, filepath):
        """Load a configuration file, merging it over the current settings."""
        with open(filepath, 'r') as f:
            loaded = toml.load(f)
        candidate = copy.deepcopy(self._config)
        self._merge(candidate, loaded)
        self._validate(candidate)
        self._config = candidate
        self._filepath = filepath
        log.debug('Loaded qompute configuration from %s', filepath)

    def save(self, filepath):
        """Save the current settings to a configuration file."""
        with open(filepath, 'w') as f:
            toml.dump(self._config, f)

    def reset(self):
        """Restore the built-in defaults."""
        self._config = copy.deepcopy(DEFAULTS)
        self._filepath = None

    def __getitem__(self, key):
        keys = key.split('.')
        return self.safe_get(self._config, *keys)

    def __setitem__(self, key, value):
        keys = key.split('.')
        candidate = copy.deepcopy(self._config)
        self.safe_set(candidate, value, *keys)
        self._validate(candidate)
        self._config = candidate

    @property
    def dtype(self):
        """NumPy complex dtype selected by ``numeric.precision``"""
        return PRECISIONS[self["numeric.precision"]]

    @property
    def atol(self) -> float:
        return float(self["numeric.atol"])

    @property
    def rtol(self) -> float:
        return float(self["numeric.rtol"])

    @classmethod
    def _validate(cls, settings):
        precision = cls.safe_get(settings, "numeric", "precision")
        if not isinstance(precision, str) or precision not in PRECISIONS:
            raise QomputeError(
                f"Unknown precision {precision!r}, expected one of {sorted(PRECISIONS)}"
            )

    @classmethod
    def _merge(cls, base, update):
        for key, value in update.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                cls._merge(base[key], value)
            else:
                base[key] = value

    @staticmethod
    def safe_set(dct, value, *keys):
        """Safely set value in a nested dictionary."""
        for key in keys[:-1]:
            dct = dct.setdefault(key, {})

        dct[keys[-1]] = value

    @staticmethod
    def safe_get(dct, *keys):
        """Safely return value from a nested dictionary."""
        for key in keys:
            try:
                dct = dct[key]
            except (KeyError, TypeError):
                return {}
        return dct


config = Configuration()


def load_config(filepath) -> Configuration:
    """Load ``filepath`` into the shared configuration.

    Logs a warning and keeps the current settings when the file is missing.
    """
    try:
        config.load(filepath)
    except FileNotFoundError:
        log.warning('qompute configuration file %s not found', filepath)
    return config
