#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

import inspect
import types
import typing

from .Obj import Obj


class Param(Obj):
    """Method parameter metadata for reflection.

    Represents a single parameter of a Python callable, including:
    - name: Parameter name
    - type: Annotated type (object when unannotated)
    - hasDefault: Whether parameter has a default value
    - variadic: Whether parameter is *args or **kwargs
    - keyword: Whether parameter is keyword-only or **kwargs
    """

    # int is acceptable where float or complex is declared
    _NUMERIC_TOWER = {
        float: (int,),
        complex: (int, float),
    }

    def __init__(self, name, param_type, has_default=False, variadic=False, keyword=False):
        """Create a Param object.

        Args:
            name: Parameter name
            param_type: Annotation value; a class, typing construct or string
            has_default: Whether this parameter has a default value
            variadic: True for *args / **kwargs parameters
            keyword: True for keyword-only and **kwargs parameters
        """
        self._name = name
        self._type = object if param_type is inspect.Parameter.empty else param_type
        self._has_default = has_default
        self._variadic = variadic
        self._keyword = keyword

    @staticmethod
    def from_signature(sig, hints=None):
        """Build the Param list for an inspect.Signature.

        Args:
            sig: inspect.Signature with self/cls already removed
            hints: Optional resolved annotations from typing.get_type_hints
        """
        hints = hints or {}
        params = []
        for p in sig.parameters.values():
            variadic = p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
            keyword = p.kind in (inspect.Parameter.KEYWORD_ONLY, inspect.Parameter.VAR_KEYWORD)
            params.append(Param(
                p.name,
                hints.get(p.name, p.annotation),
                p.default is not inspect.Parameter.empty,
                variadic,
                keyword,
            ))
        return params

    def name(self):
        """Get parameter name."""
        return self._name

    def type(self):
        """Get parameter type."""
        return self._type

    def has_default(self):
        """Check if parameter has a default value."""
        return self._has_default

    def is_variadic(self):
        """Check if this is a *args or **kwargs parameter."""
        return self._variadic

    def is_positional(self):
        """Check if a single positional argument may fill this parameter."""
        return not self._variadic and not self._keyword

    def is_var_positional(self):
        """Check if this is the *args parameter."""
        return self._variadic and not self._keyword

    def is_keyword(self):
        """Check if this is keyword-only or **kwargs."""
        return self._keyword

    def accepts(self, value_type):
        """Return true if a value of value_type may be passed for this param."""
        return Param._accepts(self._type, value_type)

    @staticmethod
    def _accepts(declared, value_type):
        if declared is object or declared is typing.Any:
            return True
        if declared is None:
            return value_type is type(None)
        if isinstance(declared, str):
            names = (value_type.__name__, value_type.__qualname__)
            return any(Param._name_of(part) in names for part in declared.split("|"))

        origin = typing.get_origin(declared)
        if origin is typing.Union or origin is types.UnionType:
            return any(Param._accepts(arg, value_type) for arg in typing.get_args(declared))
        if origin is not None:
            declared = origin

        if isinstance(declared, type):
            try:
                if issubclass(value_type, declared):
                    return True
            except TypeError:
                # non runtime-checkable protocols refuse issubclass
                return True
            return issubclass(value_type, Param._NUMERIC_TOWER.get(declared, ()))

        # TypeVar, Callable and friends are not checked
        return True

    def is_exactly(self, t):
        """Return true if this param is declared with exactly type t."""
        if isinstance(self._type, str):
            return isinstance(t, type) and Param._name_of(self._type) in (t.__name__, t.__qualname__)
        return self._type is t or self._type == t

    @staticmethod
    def _name_of(annotation):
        return annotation.strip().strip("'\"").split("[")[0].split(".")[-1]

    def signature(self):
        t = self._type
        if isinstance(t, type):
            return t.__name__
        return str(t)

    def to_str(self):
        """String representation."""
        prefix = ("**" if self._keyword else "*") if self._variadic else ""
        return f"{prefix}{self._name}: {self.signature()}"

    def __repr__(self):
        return f"Param({self._name}, {self.signature()})"
