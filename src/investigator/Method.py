#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

import inspect
import typing

from .Param import Param
from .Slot import Slot, FConst


_CTOR_MARK = "__investigator_ctor__"


def ctor(func):
    """Mark a classmethod or staticmethod as a named constructor.

    Works above or below @classmethod:

        @ctor
        @classmethod
        def from_str(cls, s): ...
    """
    setattr(getattr(func, "__func__", func), _CTOR_MARK, True)
    return func


class Method(Slot):
    """Method reflection - represents a declared Python callable.

    Methods are created by Type._reflect() for:
    1. Functions, staticmethods, classmethods and builtin descriptors
    2. Constructors: __init__, __new__, the synthetic default
       constructor and @ctor factories (flagged FConst.Ctor)
    """

    def __init__(self, parent=None, name="", flags=0, returns=None, params=None, func=None, py_name=None):
        """Create a Method reflection object.

        Args:
            parent: Declaring Type
            name: Method name as written in source
            flags: Slot flags (FConst values)
            returns: Return type
            params: List of Param objects
            func: Raw attribute from the class __dict__, or the class itself for
                  the synthetic default constructor
            py_name: Attribute key, mangled for private names
        """
        super().__init__(parent, name, flags, py_name)
        self._returns = returns if returns is not None else object
        self._params = params if params is not None else []
        self._func = func
        self._accessible = False

    @staticmethod
    def is_ctor_marked(raw):
        return getattr(getattr(raw, "__func__", raw), _CTOR_MARK, False) is True

    @staticmethod
    def reflect(parent, name, py_name, raw, extra_flags=0):
        """Create a Method from a raw class __dict__ entry."""
        func = raw
        drop_first = True
        flags = FConst.visibility(name) | extra_flags
        if isinstance(raw, staticmethod):
            func = raw.__func__
            drop_first = False
            flags |= FConst.Static
        elif isinstance(raw, classmethod):
            func = raw.__func__
            flags |= FConst.Static
        if py_name == "__new__":
            # __new__ is an implicit staticmethod taking cls first
            drop_first = True
            flags &= ~FConst.Static

        if getattr(func, "__isabstractmethod__", False):
            flags |= FConst.Abstract
        if getattr(func, "__final__", False):
            flags |= FConst.Final

        params, returns = Method._signature(func, drop_first)
        return Method(parent, name, flags, returns, params, raw, py_name)

    @staticmethod
    def synthetic_ctor(parent):
        """Create the default constructor for a class that declares none."""
        cls = parent.py_class()
        try:
            params = Param.from_signature(inspect.signature(cls))
        except (ValueError, TypeError):
            params = [Param("args", object, False, True)]
        flags = FConst.Public | FConst.Ctor | FConst.Synthetic
        return Method(parent, "__init__", flags, cls, params, cls, "__init__")

    @staticmethod
    def _signature(func, drop_first):
        """Return (params, returns) for a callable.

        Builtin descriptors without signature metadata get a single
        variadic param so any argument list is accepted.
        """
        try:
            sig = inspect.signature(func)
        except (ValueError, TypeError):
            return [Param("args", object, False, True)], object

        try:
            hints = typing.get_type_hints(func)
        except Exception:
            # unresolvable forward references fall back to raw annotations
            hints = {}

        params = list(sig.parameters.values())
        if drop_first and params and params[0].kind in (
                inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            params = params[1:]
        sig = sig.replace(parameters=params)

        returns = hints.get("return", sig.return_annotation)
        if returns is inspect.Signature.empty:
            returns = object
        return Param.from_signature(sig, hints), returns

    def is_method(self):
        return True

    def returns(self):
        """Get return type."""
        return self._returns

    def params(self):
        """Get parameter list (read-only copy)"""
        return list(self._params)

    def arity(self):
        """Number of declared non-variadic parameters."""
        return sum(1 for p in self._params if p.is_positional())

    def fits_args(self, arg_types):
        """Check an inferred argument type list against the declared params.

        Args beyond the declared params are only allowed when *args is
        declared; missing args must have defaults.
        """
        positional = [p for p in self._params if p.is_positional()]
        var = next((p for p in self._params if p.is_var_positional()), None)
        if any(p.is_keyword() and not p.is_variadic() and not p.has_default() for p in self._params):
            return False
        if len(arg_types) > len(positional) and var is None:
            return False
        for i, p in enumerate(positional):
            if i < len(arg_types):
                if not p.accepts(arg_types[i]):
                    return False
            elif not p.has_default():
                return False
        if var is not None:
            return all(var.accepts(t) for t in arg_types[len(positional):])
        return True

    def fits_types(self, param_types):
        """Check an explicit parameter type list for an exact match."""
        positional = [p for p in self._params if p.is_positional()]
        if len(positional) != len(param_types):
            return False
        return all(p.is_exactly(t) for p, t in zip(positional, param_types))

    def accessible(self, val=None):
        """Get or set visibility elevation - method.accessible() or method.accessible(True)"""
        if val is None:
            return self._accessible or self.is_public()
        self._accessible = bool(val)
        return self

    def call_on(self, target, args=None):
        """Call method on a specific target object.

        Args:
            target: Object to call method on (None for static methods)
            args: List of arguments (method args, NOT including target)
        """
        if args is None:
            args = []
        if self.is_ctor():
            return self.make(args)
        if not self.is_static() and target is None:
            from .Err import ArgErr
            raise ArgErr.make(f"Instance method {self.qname()} requires target object")

        cls = self._parent.py_class()
        if self.is_static():
            bound = self._func.__get__(None, cls)
        else:
            bound = self._func.__get__(target, cls)
        return self._invoke(bound, args)

    def make(self, args=None):
        """Invoke this constructor and return the new instance."""
        if args is None:
            args = []
        if not self.is_ctor():
            from .Err import ArgErr
            raise ArgErr.make(f"{self.qname()} is not a constructor")

        cls = self._parent.py_class()
        if self._py_name in ("__init__", "__new__"):
            return self._invoke(cls, args)
        return self._invoke(self._func.__get__(None, cls), args)

    def _invoke(self, bound, args):
        """Internal method to check access, bind and call.

        Argument binding problems raise ArgErr, anything raised by the
        member itself is wrapped in InvokeErr.
        """
        from .Err import AccessErr, ArgErr, InvokeErr

        if not self.accessible():
            raise AccessErr.make(f"Method {self.qname()} is not public")

        try:
            inspect.signature(bound).bind(*args)
        except TypeError as e:
            raise ArgErr.make(f"Method {self.qname()} cannot take {len(args)} args: {e}", e)
        except ValueError:
            # no signature metadata available
            pass

        try:
            return bound(*args)
        except Exception as e:
            raise InvokeErr.make(f"{self.qname()} raised {type(e).__name__}: {e}", e)

    def signature(self):
        params = ", ".join(p.to_str() for p in self._params)
        return f"{self._name}({params})"

    def to_str(self):
        return self.qname()
