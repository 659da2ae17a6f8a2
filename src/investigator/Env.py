#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

import os

from .Obj import Obj


class Env(Obj):
    """Env - process configuration read from INVESTIGATOR_* environment variables"""

    _instance = None

    # config key -> default
    _DEFAULTS = {
        "logLevel": "info",
        "instanceFields": "true",
    }

    def __init__(self, environ=None):
        self._vars = dict(os.environ if environ is None else environ)

    @staticmethod
    def cur():
        if Env._instance is None:
            Env._instance = Env()
        return Env._instance

    @staticmethod
    def reset():
        """Drop the current Env so the next cur() re-reads the environment."""
        Env._instance = None

    @staticmethod
    def _var_name(key):
        """Map config key to env var name: logLevel -> INVESTIGATOR_LOG_LEVEL"""
        out = []
        for c in key:
            if c.isupper():
                out.append("_")
            out.append(c.upper())
        return "INVESTIGATOR_" + "".join(out)

    def vars(self):
        """Return a copy of the environment variables this Env was built from."""
        return dict(self._vars)

    def config(self, key, def_val=None):
        """Get configuration value.

        Args:
            key: Config key, e.g. "logLevel"
            def_val: Default value if neither env var nor builtin default exists

        Returns:
            Config value as string or default
        """
        val = self._vars.get(Env._var_name(key))
        if val is not None and val.strip():
            return val.strip()
        if def_val is not None:
            return def_val
        return Env._DEFAULTS.get(key)

    def config_bool(self, key, def_val=None):
        """Get configuration value parsed as bool."""
        val = self.config(key, def_val)
        if isinstance(val, bool):
            return val
        if val is None:
            return False
        val = val.lower()
        if val in ("true", "yes", "on", "1"):
            return True
        if val in ("false", "no", "off", "0"):
            return False
        from .Err import ParseErr
        raise ParseErr.make_str("Bool", val)

    def to_str(self):
        return "Env"
