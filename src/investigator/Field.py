#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

from .Slot import Slot


class Field(Slot):
    """Field reflection - represents a declared Python field.

    Fields are created by Type._reflect() from:
    1. Own class annotations
    2. Data descriptors (property, __slots__ members, getset descriptors)
    3. Plain class attributes
    4. Attributes of the live instance not declared anywhere on the chain
    """

    def __init__(self, parent=None, name="", flags=0, type_=None, py_name=None):
        """Create a Field reflection object.

        Args:
            parent: Declaring Type
            name: Field name as written in source
            flags: Slot flags (FConst values)
            type_: Field type (annotation, or type of the class value)
            py_name: Attribute key, mangled for private names
        """
        super().__init__(parent, name, flags, py_name)
        self._type = type_ if type_ is not None else object
        self._accessible = False

    def is_field(self):
        return True

    def type(self):
        """Get field type."""
        return self._type

    def accessible(self, val=None):
        """Get or set visibility elevation - field.accessible() or field.accessible(True)"""
        if val is None:
            return self._accessible or self.is_public()
        self._accessible = bool(val)
        return self

    def get(self, obj=None):
        """Get field value from object.

        Args:
            obj: Object to get field from (ignored for static fields)

        Returns:
            Field value
        """
        if not self.accessible():
            from .Err import AccessErr
            raise AccessErr.make(f"Field {self.qname()} is not public")

        owner = type(obj).__name__
        if self.is_static():
            obj = self._parent.py_class()
            owner = obj.__name__
        elif obj is None:
            from .Err import ArgErr
            raise ArgErr.make(f"Instance field {self.qname()} requires target object")

        try:
            return getattr(obj, self._py_name)
        except AttributeError as e:
            from .Err import UnknownSlotErr
            raise UnknownSlotErr.make(f"{self.qname()} is not set on {owner}", e)
        except Exception as e:
            # property getters run user code
            from .Err import InvokeErr
            raise InvokeErr.make(f"Getter {self.qname()} raised {type(e).__name__}", e)

    def to_str(self):
        return self.qname()
