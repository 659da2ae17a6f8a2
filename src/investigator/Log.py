#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

import logging
import re
from datetime import datetime

from .Obj import Obj


class LogLevel(Obj):
    """
    Severity of a log record, ordered debug < info < warn < err < silent.
    Each level knows the logging module level it forwards to.
    """

    _vals = {}

    def __init__(self, name, ordinal, py_level):
        self._name = name
        self._ordinal = ordinal
        self._py_level = py_level

    @staticmethod
    def from_str(name, checked=True):
        level = LogLevel._vals.get(name.strip().lower())
        if level is None and checked:
            from .Err import ParseErr
            raise ParseErr.make_str("LogLevel", name)
        return level

    @staticmethod
    def vals():
        return sorted(LogLevel._vals.values(), key=LogLevel.ordinal)

    @staticmethod
    def debug():
        return LogLevel._vals["debug"]

    @staticmethod
    def info():
        return LogLevel._vals["info"]

    @staticmethod
    def warn():
        return LogLevel._vals["warn"]

    @staticmethod
    def err():
        return LogLevel._vals["err"]

    @staticmethod
    def silent():
        return LogLevel._vals["silent"]

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def py_level(self):
        """logging module level, None for silent"""
        return self._py_level

    def __lt__(self, other):
        return self._ordinal < other._ordinal

    def __gt__(self, other):
        return self._ordinal > other._ordinal

    def to_str(self):
        return self._name


for _name, _ordinal, _py_level in (
        ("debug", 0, logging.DEBUG),
        ("info", 1, logging.INFO),
        ("warn", 2, logging.WARNING),
        ("err", 3, logging.ERROR),
        ("silent", 4, None)):
    LogLevel._vals[_name] = LogLevel(_name, _ordinal, _py_level)


class LogRec(Obj):
    """One record handed to every registered handler."""

    def __init__(self, time, level, log_name, msg, err=None):
        self._time = time
        self._level = level
        self._log_name = log_name
        self._msg = msg
        self._err = err

    def time(self):
        return self._time

    def level(self):
        return self._level

    def log_name(self):
        return self._log_name

    def msg(self):
        return self._msg

    def err(self):
        return self._err

    def to_str(self):
        return f"[{self._level.name()}] {self._log_name}: {self._msg}"


class Log(Obj):
    """
    Named log. Registered logs are shared through Log.get(); records go
    to the global handlers and then to the logging module logger of the
    same name. The starting level comes from Env config "logLevel".
    """

    _logs = {}
    _handlers = []

    _NAME = re.compile(r"^[A-Za-z0-9_.]+$")

    def __init__(self, name, register=True):
        if not name or not Log._NAME.match(name):
            from .Err import NameErr
            raise NameErr.make(f"Invalid log name: {name!r}")
        if register and name in Log._logs:
            from .Err import ArgErr
            raise ArgErr.make(f"Log already registered: {name}")

        from .Env import Env
        self._name = name
        self._level = LogLevel.from_str(Env.cur().config("logLevel"), False) or LogLevel.info()
        self._py_logger = logging.getLogger(name)
        if register:
            Log._logs[name] = self

    @staticmethod
    def get(name):
        """Return the registered log, creating it on first use"""
        log = Log._logs.get(name)
        return log if log is not None else Log(name)

    @staticmethod
    def find(name, checked=True):
        log = Log._logs.get(name)
        if log is None and checked:
            from .Err import UnknownSlotErr
            raise UnknownSlotErr.make(f"Unknown log: {name}")
        return log

    def name(self):
        return self._name

    def level(self, value=None):
        """Get or set level - log.level() or log.level(LogLevel.debug())"""
        if value is None:
            return self._level
        self._level = value
        return self

    def is_enabled(self, level):
        return level is not LogLevel.silent() and not level < self._level

    def is_debug(self):
        return self.is_enabled(LogLevel.debug())

    def debug(self, msg, err=None):
        self._emit(LogLevel.debug(), msg, err)

    def info(self, msg, err=None):
        self._emit(LogLevel.info(), msg, err)

    def warn(self, msg, err=None):
        self._emit(LogLevel.warn(), msg, err)

    def err(self, msg, err=None):
        self._emit(LogLevel.err(), msg, err)

    def _emit(self, level, msg, err):
        if self.is_enabled(level):
            self.log(LogRec(datetime.now(), level, self._name, msg, err))

    def log(self, rec):
        """Dispatch a record to the handlers and the logging module"""
        for handler in list(Log._handlers):
            handler(rec)
        exc_info = rec.err() if isinstance(rec.err(), BaseException) else None
        self._py_logger.log(rec.level().py_level(), rec.msg(), exc_info=exc_info)

    @staticmethod
    def handlers():
        return list(Log._handlers)

    @staticmethod
    def add_handler(handler):
        """Register a callable taking a LogRec"""
        if not callable(handler):
            from .Err import ArgErr
            raise ArgErr.make("Log handler must be callable")
        Log._handlers.append(handler)

    @staticmethod
    def remove_handler(handler):
        if handler in Log._handlers:
            Log._handlers.remove(handler)

    def to_str(self):
        return self._name
