#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class FConst:
    """Member modifier flags.

    Visibility is derived from the Python name; the other flags come from
    descriptors (staticmethod, property), annotations (ClassVar, Final)
    and abc markers.
    """
    Public = 0x00000001
    Private = 0x00000002
    Protected = 0x00000004
    Mixin = 0x00000040
    Final = 0x00000080
    Ctor = 0x00000100
    Abstract = 0x00000400
    Static = 0x00000800
    Readonly = 0x00004000
    Getter = 0x00010000
    Synthetic = 0x00100000

    @staticmethod
    def visibility(name):
        """Visibility flag for a source name.

        "__secret" is Private, "_helper" is Protected, anything else,
        dunders such as "__init__" included, is Public.
        """
        if name.startswith("__"):
            return FConst.Public if name.endswith("__") else FConst.Private
        if name.startswith("_"):
            return FConst.Protected
        return FConst.Public


class Slot(Obj):
    """A declared member of a Type: the common half of Field and Method.

    name() is the name as written in the class body. py_name() is the key
    actually stored in the class __dict__, which differs for private
    names because of mangling.
    """

    def __init__(self, parent=None, name="", flags=0, py_name=None):
        self._parent = parent
        self._name = name
        self._flags = flags
        self._py_name = name if py_name is None else py_name

    @staticmethod
    def demangle(cls_name, key):
        """Undo private name mangling: ("Square", "_Square__whisper") -> "__whisper"."""
        owner = cls_name.lstrip("_")
        prefix = f"_{owner}__"
        if owner and key.startswith(prefix) and not key.endswith("__"):
            return "__" + key[len(prefix):]
        return key

    def parent(self):
        return self._parent

    def name(self):
        return self._name

    def py_name(self):
        return self._py_name

    def flags_(self):
        return self._flags

    def qname(self):
        if self._parent is None:
            return self._name
        return f"{self._parent.qname()}.{self._name}"

    def matches(self, name):
        """True for either the source name or the mangled __dict__ key"""
        return name in (self._name, self._py_name)

    def is_field(self):
        return False

    def is_method(self):
        return False

    def _has(self, flag):
        return (self._flags & flag) != 0

    def is_ctor(self):
        return self._has(FConst.Ctor)

    def is_public(self):
        return self._has(FConst.Public)

    def is_protected(self):
        return self._has(FConst.Protected)

    def is_private(self):
        return self._has(FConst.Private)

    def is_static(self):
        return self._has(FConst.Static)

    def is_abstract(self):
        return self._has(FConst.Abstract)

    def is_final(self):
        return self._has(FConst.Final)

    def is_readonly(self):
        return self._has(FConst.Readonly)

    def is_synthetic(self):
        return self._has(FConst.Synthetic)

    def to_str(self):
        return self.qname()
