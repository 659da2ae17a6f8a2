#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

import traceback

from .Obj import Obj


class Err(Exception, Obj):
    """Base of every error raised or reported by investigator.

    Build errors with the make() factory so subclasses come out typed:

        raise UnknownSlotErr.make("Square.missing")
        raise InvokeErr.make("Square.fail raised ValueError", e)

    The cause is the exception that triggered this one, if any.
    """

    def __init__(self, msg=None, cause=None):
        super().__init__(msg)
        self._msg = msg
        self._cause = cause

    @classmethod
    def make(cls, msg=None, cause=None):
        return cls(msg, cause)

    def msg(self):
        return "" if self._msg is None else self._msg

    def cause(self):
        return self._cause

    def trace_to_str(self):
        """Traceback of this error followed by its cause chain"""
        lines = [self.to_str()]
        if self.__traceback__ is not None:
            lines.extend(traceback.format_tb(self.__traceback__))
        cause = self._cause
        if isinstance(cause, Err):
            lines.append("  Caused by: " + cause.trace_to_str())
        elif cause is not None:
            lines.append(f"  Caused by: {type(cause).__name__}: {cause}")
            if cause.__traceback__ is not None:
                lines.extend(traceback.format_tb(cause.__traceback__))
        return "\n".join(line.rstrip("\n") for line in lines)

    def to_str(self):
        name = type(self).__name__
        return f"{name}: {self._msg}" if self._msg else name

    def __str__(self):
        return self.to_str()


class ArgErr(Err):
    """Arguments do not fit the member being called"""


class CastErr(Err):
    """A result cannot be narrowed to the requested type"""


class ParseErr(Err):
    """A configuration or level string cannot be parsed"""

    @staticmethod
    def make_str(type_name, s):
        return ParseErr.make(f"Invalid {type_name}: '{s}'")


class NameErr(Err):
    """A log or slot name is not well formed"""


class UnknownSlotErr(Err):
    """No declared member matches the name, signature or arity"""


class AccessErr(Err):
    """Member exists but is not visible without elevation"""


class InvokeErr(Err):
    """The reflected member raised; cause() holds the original exception"""


class NotLoadedErr(Err):
    """Investigator used before load()"""
