#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

import abc
import functools
import inspect
import re
import typing

from .Obj import Obj
from .Slot import FConst


# Interpreter and library bookkeeping found in class __dict__
_BOOKKEEPING = {
    "__module__", "__qualname__", "__doc__", "__dict__", "__weakref__",
    "__annotations__", "__annotate__", "__annotate_func__", "__annotations_cache__",
    "__slots__", "__firstlineno__", "__static_attributes__", "__classcell__",
    "__orig_bases__", "__parameters__", "__type_params__", "__abstractmethods__",
    "_abc_impl", "__dataclass_fields__", "__dataclass_params__", "__match_args__",
    "__protocol_attrs__", "_is_protocol", "_is_runtime_protocol",
    "__non_callable_proto_members__", "__final__",
}

# Bases that are typing machinery rather than superclasses or interfaces
_TYPING_BASES = (typing.Generic, typing.Protocol, abc.ABC)

_CONST_NAME = re.compile(r"^[A-Z][A-Z0-9_]*$")
_SUNDER_NAME = re.compile(r"^_[^_].*[^_]_$")
_CLASSVAR_STR = re.compile(r"^(?:\w+\.)*ClassVar\b")
_FINAL_STR = re.compile(r"^(?:\w+\.)*Final\b")


class Type(Obj):
    """Type class - reflection over a Python class.

    A Type wraps a class and optionally the live instance it was taken
    from. Declared slots are read from the class __dict__ only and are
    built lazily once per Type object; nothing is cached across Type
    objects so every Type.of() re-derives from the live class.
    """

    def __init__(self, cls=object, instance=None):
        self._cls = cls
        self._instance = instance
        self._reflected = False
        self._field_list = []
        self._method_list = []
        self._ctor_list = []

    @staticmethod
    def of(obj):
        """Get type of object, bound to obj for instance field discovery"""
        return Type(type(obj), obj)

    @staticmethod
    def make(cls):
        """Get type for a class with no instance"""
        if not isinstance(cls, type):
            from .Err import ArgErr
            raise ArgErr.make(f"Not a class: {cls!r}")
        return Type(cls)

    @staticmethod
    def simple_name(qname, sep="."):
        """Strip a qualified name down to its last segment.

        "pkg.mod.Outer.Inner" -> "Inner"; a name with no separator is returned as is.
        """
        return qname.rsplit(sep, 1)[-1]

    def py_class(self):
        return self._cls

    def instance(self):
        return self._instance

    def name(self):
        return Type.simple_name(self.qname())

    def qname(self):
        return f"{self._cls.__module__}.{self._cls.__qualname__}"

    def signature(self):
        return self.qname()

    #########################################################################
    # Inheritance
    #########################################################################

    @staticmethod
    def _is_interface(cls):
        """Protocol classes are interfaces wherever they appear in the bases."""
        return cls is not object and bool(getattr(cls, "_is_protocol", False))

    def _bases(self):
        return [b for b in self._cls.__bases__ if b not in _TYPING_BASES]

    def base(self):
        """Return superclass type, None for object"""
        if self._cls is object:
            return None
        for b in self._bases():
            if not Type._is_interface(b):
                return Type(b)
        return Type(object)

    def mixins(self):
        """Return directly implemented interfaces.

        Every direct base except the superclass: protocols plus the
        mixins of a multiple inheritance class statement.
        """
        if self._cls is object:
            return []
        base = self.base()
        return [Type(b) for b in self._bases() if b is not object and b is not base._cls]

    def inheritance(self):
        """Return chain from this type up to and including object via base()."""
        result = [self]
        t = self.base()
        while t is not None:
            result.append(t)
            t = t.base()
        return result

    def all_fields(self):
        """Return declared fields of every type in inheritance(), leaf first."""
        fields = []
        for t in self.inheritance():
            fields.extend(t.fields())
        return fields

    #########################################################################
    # Type flags
    #########################################################################

    def flags(self):
        flags = FConst.visibility(self._cls.__name__)
        if self.is_abstract():
            flags |= FConst.Abstract
        if self.is_mixin():
            flags |= FConst.Mixin
        if getattr(self._cls, "__final__", False):
            flags |= FConst.Final
        return flags

    def is_abstract(self):
        return inspect.isabstract(self._cls) or bool(getattr(self._cls, "_is_protocol", False))

    def is_mixin(self):
        return Type._is_interface(self._cls)

    def is_final(self):
        return (self.flags() & FConst.Final) != 0

    #########################################################################
    # Slot Reflection
    #########################################################################

    def _reflect(self):
        """Process the class __dict__ into declared slot lists.

        After calling, the type has populated:
        - _field_list: declared fields, annotations first
        - _method_list: declared methods
        - _ctor_list: default constructor first, then @ctor factories
        """
        if self._reflected:
            return self
        self._reflected = True

        from .Field import Field
        from .Method import Method

        cls = self._cls
        own = cls.__dict__
        fields = []
        methods = []
        ctors = []
        seen = set()

        # Annotated fields
        for key, ann in Type._own_annotations(cls).items():
            if key in _BOOKKEEPING:
                continue
            name = Type._demangle(cls, key)
            classvar, final = Type._ann_kind(ann)
            flags = FConst.visibility(name)
            if classvar or (final and key in own):
                flags |= FConst.Static
            if final:
                flags |= FConst.Final
            fields.append(Field(self, name, flags, Type._field_type(ann), key))
            seen.add(key)

        # Class __dict__ entries in definition order
        for key, raw in own.items():
            if key in seen or key in _BOOKKEEPING or _SUNDER_NAME.match(key):
                continue
            if key in ("__init__", "__new__") or inspect.isclass(raw):
                continue
            name = Type._demangle(cls, key)

            if Method.is_ctor_marked(raw):
                ctors.append(Method.reflect(self, name, key, raw, FConst.Ctor))
            elif isinstance(raw, (property, functools.cached_property)):
                fields.append(Type._property_field(self, name, key, raw))
            elif isinstance(raw, (staticmethod, classmethod)) or inspect.isroutine(raw):
                if getattr(raw, "__module__", None) == "typing":
                    # Protocol machinery injected by typing
                    continue
                methods.append(Method.reflect(self, name, key, raw))
            elif key.startswith("__") and key.endswith("__"):
                continue
            elif inspect.isdatadescriptor(raw):
                # __slots__ members and builtin getset descriptors
                fields.append(Field(self, name, FConst.visibility(name), object, key))
            else:
                flags = FConst.visibility(name) | FConst.Static
                if _CONST_NAME.match(name):
                    flags |= FConst.Final
                fields.append(Field(self, name, flags, type(raw), key))
            seen.add(key)

        # Constructors: own __init__, else own __new__, else synthetic default
        if "__init__" in own and inspect.isroutine(own["__init__"]):
            ctors.insert(0, Method.reflect(self, "__init__", "__init__", own["__init__"], FConst.Ctor))
        elif "__new__" in own:
            ctors.insert(0, Method.reflect(self, "__new__", "__new__", own["__new__"], FConst.Ctor))
        else:
            ctors.insert(0, Method.synthetic_ctor(self))

        if self._instance is not None:
            fields.extend(self._instance_fields())

        self._field_list = fields
        self._method_list = methods
        self._ctor_list = ctors
        return self

    def _instance_fields(self):
        """Fields assigned on the live instance and declared nowhere on the chain."""
        from .Env import Env
        from .Field import Field

        if not Env.cur().config_bool("instanceFields"):
            return []
        try:
            attrs = vars(self._instance)
        except TypeError:
            return []

        declared = set()
        chain = self.inheritance()
        for t in chain[1:]:
            declared.update(f.py_name() for f in t.fields())
        declared.update(k for k in self._cls.__dict__ if k not in _BOOKKEEPING)
        declared.update(Type._own_annotations(self._cls))

        result = []
        for key, val in attrs.items():
            if key in declared or (key.startswith("__") and key.endswith("__")):
                continue
            name = key
            for t in chain:
                name = Type._demangle(t._cls, key)
                if name != key:
                    break
            result.append(Field(self, name, FConst.visibility(name), type(val), key))
        return result

    @staticmethod
    def _demangle(cls, key):
        from .Slot import Slot
        return Slot.demangle(cls.__name__, key)

    @staticmethod
    def _own_annotations(cls):
        try:
            return dict(inspect.get_annotations(cls))
        except Exception:
            # broken __annotate__ functions raise NameError and friends
            return {}

    @staticmethod
    def _ann_kind(ann):
        """Return (is_classvar, is_final) for an annotation value."""
        if isinstance(ann, str):
            s = ann.strip().strip("'\"")
            return bool(_CLASSVAR_STR.match(s)), bool(_FINAL_STR.match(s))
        origin = typing.get_origin(ann)
        classvar = ann is typing.ClassVar or origin is typing.ClassVar
        final = ann is typing.Final or origin is typing.Final
        if classvar and not final:
            final = any(a is typing.Final or typing.get_origin(a) is typing.Final
                        for a in typing.get_args(ann))
        return classvar, final

    @staticmethod
    def _field_type(ann):
        """Unwrap ClassVar[X] / Final[X] to X."""
        origin = typing.get_origin(ann)
        while origin is typing.ClassVar or origin is typing.Final:
            args = typing.get_args(ann)
            if not args:
                return object
            ann = args[0]
            origin = typing.get_origin(ann)
        if ann is typing.ClassVar or ann is typing.Final:
            return object
        return ann

    @staticmethod
    def _property_field(parent, name, key, raw):
        from .Field import Field
        flags = FConst.visibility(name) | FConst.Getter
        if isinstance(raw, property):
            getter = raw.fget
            if raw.fset is None:
                flags |= FConst.Readonly
        else:
            getter = raw.func
        field_type = object
        try:
            field_type = typing.get_type_hints(getter).get("return", object)
        except Exception:
            # unresolvable forward references leave the type as object
            pass
        return Field(parent, name, flags, field_type, key)

    #########################################################################
    # Slot Reflection - Lookup Methods
    #########################################################################

    def slots(self):
        """Return declared fields, methods and constructors."""
        self._reflect()
        return self._field_list + self._method_list + self._ctor_list

    def slot(self, name, checked=True):
        """Find declared slot by source or mangled name.

        Args:
            name: Slot name to find
            checked: If True, raise UnknownSlotErr if not found

        Returns:
            Slot instance or None (if checked=False and not found)
        """
        for slot in self.slots():
            if slot.matches(name):
                return slot
        if checked:
            from .Err import UnknownSlotErr
            raise UnknownSlotErr.make(f"{self.qname()}.{name}")
        return None

    def fields(self):
        """Return declared fields."""
        self._reflect()
        return list(self._field_list)

    def field(self, name, checked=True):
        """Find declared field by name."""
        for f in self.fields():
            if f.matches(name):
                return f
        if checked:
            from .Err import UnknownSlotErr
            raise UnknownSlotErr.make(f"{self.qname()}.{name} is not a field")
        return None

    def methods(self):
        """Return declared methods, constructors excluded."""
        self._reflect()
        return list(self._method_list)

    def method(self, name, checked=True):
        """Find declared method by name."""
        for m in self.methods():
            if m.matches(name):
                return m
        if checked:
            from .Err import UnknownSlotErr
            raise UnknownSlotErr.make(f"{self.qname()}.{name} is not a method")
        return None

    def ctors(self):
        """Return constructors in declaration order."""
        self._reflect()
        return list(self._ctor_list)

    def equals(self, other):
        return isinstance(other, Type) and other._cls is self._cls

    def hash(self):
        return hash(self._cls)

    def to_str(self):
        return self.qname()

    def __repr__(self):
        return f"Type({self.qname()})"
