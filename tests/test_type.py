#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

"""Tests for the reflection layer: Type, Slot, Field, Method and Param."""

import inspect
import typing
from typing import Optional, Union

import pytest

from conftest import (
    Box, Calc, Comparable, Named, Overloaded, Pair, Point, Shape, Sized, Square, Vault,
)
from investigator import (
    AccessErr, ArgErr, FConst, Field, InvokeErr, Method, Param, Slot, Type, UnknownSlotErr, ctor,
)


class TestType:
    def test_names(self):
        t = Type.make(Square)
        assert t.name() == "Square"
        assert t.qname() == "conftest.Square"
        assert t.signature() == t.qname()
        assert t.to_str() == "conftest.Square"

    def test_simple_name(self):
        assert Type.simple_name("pkg.mod.Outer.Inner") == "Inner"
        assert Type.simple_name("Inner") == "Inner"
        assert Type.simple_name("a/b/C", "/") == "C"

    def test_make_rejects_instances(self):
        with pytest.raises(ArgErr):
            Type.make(Square(1))

    def test_of_binds_instance(self, square):
        t = Type.of(square)
        assert t.py_class() is Square
        assert t.instance() is square
        assert t.field("side", False) is not None
        assert Type.make(Square).field("side", False) is None

    def test_equality(self, square):
        assert Type.of(square) == Type.make(Square)
        assert Type.make(Square) != Type.make(Shape)
        assert hash(Type.of(square)) == hash(Type.make(Square))

    def test_base_and_mixins(self):
        t = Type.make(Square)
        assert t.base().py_class() is Shape
        assert [m.py_class() for m in t.mixins()] == [Named, Comparable]
        assert Type.make(Shape).base().py_class() is object
        assert Type.make(object).base() is None
        assert Type.make(object).mixins() == []

    def test_inheritance(self):
        names = [t.name() for t in Type.make(Square).inheritance()]
        assert names == ["Square", "Shape", "object"]

    def test_flags(self):
        assert Type.make(Shape).is_abstract()
        assert not Type.make(Square).is_abstract()
        assert Type.make(Named).is_mixin()
        assert Type.make(Named).flags() & FConst.Mixin
        assert not Type.make(Square).is_mixin()
        assert Type.make(Pair).flags() & FConst.Public

    def test_final_class(self):
        @typing.final
        class Sealed:
            pass

        assert Type.make(Sealed).is_final()
        assert not Type.make(Square).is_final()

    def test_slot_lookup(self):
        t = Type.make(Square)
        assert t.slot("add").is_method()
        assert t.slot("MAX_SIDE").is_field()
        assert t.slot("scaled").is_ctor()
        assert t.slot("nope", False) is None
        with pytest.raises(UnknownSlotErr):
            t.slot("nope")
        with pytest.raises(UnknownSlotErr):
            t.method("MAX_SIDE")
        with pytest.raises(UnknownSlotErr):
            t.field("add")

    def test_slots_partition(self, square):
        t = Type.of(square)
        assert len(t.slots()) == len(t.fields()) + len(t.methods()) + len(t.ctors())

    def test_ctor_order(self):
        ctors = Type.make(Overloaded).ctors()
        assert [c.name() for c in ctors] == ["__init__", "parse", "_hidden"]
        assert ctors[2].is_protected()

    def test_synthetic_ctor(self):
        c = Type.make(Box).ctors()[0]
        assert not c.is_synthetic()

        class Bare:
            pass

        c = Type.make(Bare).ctors()[0]
        assert c.is_synthetic()
        assert c.is_public()
        assert c.arity() == 0

    def test_field_flags(self):
        t = Type.make(Square)
        assert t.field("MAX_SIDE").is_static()
        assert t.field("MAX_SIDE").is_final()
        assert t.field("count").is_static()
        assert not t.field("count").is_final()
        assert t.field("count").type() is int
        assert t.field("perimeter").is_readonly()
        assert t.field("perimeter").type() is int
        assert Type.make(Shape).field("UNIT").is_final()
        assert not Type.make(Shape).field("sides").is_static()

    def test_slots_descriptors(self):
        t = Type.make(Point)
        assert [f.name() for f in t.fields()] == ["x", "y"]
        assert not t.field("x").is_static()


class TestSlot:
    def test_visibility(self):
        assert FConst.visibility("name") == FConst.Public
        assert FConst.visibility("__init__") == FConst.Public
        assert FConst.visibility("_name") == FConst.Protected
        assert FConst.visibility("__name") == FConst.Private

    def test_demangle(self):
        assert Slot.demangle("Square", "_Square__whisper") == "__whisper"
        assert Slot.demangle("_Hidden", "_Hidden__x") == "__x"
        assert Slot.demangle("Square", "_Other__x") == "_Other__x"
        assert Slot.demangle("Square", "plain") == "plain"

    def test_private_method_flags(self):
        m = Type.make(Square).method("__whisper")
        assert m.is_private()
        assert m.py_name() == "_Square__whisper"
        assert m.matches("_Square__whisper")
        assert m.qname() == "conftest.Square.__whisper"

    def test_static_flags(self):
        t = Type.make(Square)
        assert t.method("doubled").is_static()
        assert t.method("sides_of").is_static()
        assert not t.method("add").is_static()
        assert Type.make(Shape).method("area").is_abstract()


class TestMethod:
    def test_params(self):
        m = Type.make(Square).method("add")
        assert [p.name() for p in m.params()] == ["a", "b"]
        assert m.returns() is int
        assert m.arity() == 2
        assert m.signature() == "add(a: int, b: int)"

    def test_fits_args(self):
        m = Type.make(Square).method("add")
        assert m.fits_args([int, int])
        assert m.fits_args([bool, int])
        assert not m.fits_args([int])
        assert not m.fits_args([int, str])

    def test_fits_args_defaults(self):
        m = Type.make(Square).ctors()[0]
        assert m.fits_args([])
        assert m.fits_args([int])

    def test_fits_types_is_exact(self):
        m = Type.make(Square).method("add")
        assert m.fits_types([int, int])
        assert not m.fits_types([bool, int])
        assert not m.fits_types([int])

    def test_keyword_only(self):
        m = Type.make(Vault).method("unlock")
        assert m.arity() == 0
        assert not m.fits_args([])

    def test_call_on(self, square):
        m = Type.make(Square).method("add")
        assert m.call_on(square, [1, 2]) == 3
        with pytest.raises(ArgErr):
            m.call_on(None, [1, 2])
        with pytest.raises(ArgErr):
            m.call_on(square, [1])

    def test_call_on_wraps_errors(self, square):
        with pytest.raises(InvokeErr) as e:
            Type.make(Square).method("fail").call_on(square)
        assert isinstance(e.value.cause(), ValueError)

    def test_accessible(self, square):
        m = Type.make(Square).method("__whisper")
        assert not m.accessible()
        with pytest.raises(AccessErr):
            m.call_on(square)
        assert m.accessible(True) is m
        assert m.call_on(square) == "psst"

    def test_make(self):
        t = Type.make(Square)
        assert t.ctors()[0].make([3]).side == 3
        assert t.slot("scaled").make([2, 2]).side == 4
        with pytest.raises(ArgErr):
            t.method("add").make([])

    def test_ctor_decorator(self):
        class Money:
            def __init__(self, cents):
                self.cents = cents

            @classmethod
            @ctor
            def of_dollars(cls, dollars):
                return cls(dollars * 100)

            @ctor
            @staticmethod
            def zero():
                return Money(0)

        assert Method.is_ctor_marked(Money.__dict__["of_dollars"])
        assert Method.is_ctor_marked(Money.__dict__["zero"])
        assert not Method.is_ctor_marked(Money.__dict__["__init__"])
        t = Type.make(Money)
        assert [c.name() for c in t.ctors()] == ["__init__", "of_dollars", "zero"]
        assert t.methods() == []
        assert t.slot("of_dollars").make([2]).cents == 200


class TestField:
    def test_get(self, square):
        t = Type.of(square)
        assert t.field("side").get(square) == 2
        assert t.field("count").get() == 0
        with pytest.raises(ArgErr):
            t.field("side").get(None)

    def test_get_private(self, square):
        f = Type.of(square).field("__secret_token")
        assert f.is_private()
        with pytest.raises(AccessErr):
            f.get(square)
        assert f.accessible(True).get(square) == "sq"

    def test_unset_instance_field(self):
        f = Type.make(Shape).field("sides")
        with pytest.raises(UnknownSlotErr):
            f.get(object())

    def test_getter_raises(self):
        class Broken:
            @property
            def value(self):
                raise RuntimeError("nope")

        f = Type.make(Broken).field("value")
        with pytest.raises(InvokeErr):
            f.get(Broken())

    def test_defaults(self):
        f = Field(None, "x", FConst.Public)
        assert f.type() is object
        assert f.qname() == "x"


class TestParam:
    def test_unannotated(self):
        p = Param("x", inspect.Parameter.empty)
        assert p.type() is object
        assert p.accepts(str)
        assert p.is_exactly(object)

    def test_subclass_and_numeric_tower(self):
        assert Param("x", int).accepts(bool)
        assert Param("x", float).accepts(int)
        assert Param("x", complex).accepts(float)
        assert not Param("x", int).accepts(float)
        assert not Param("x", str).accepts(int)

    def test_unions(self):
        assert Param("x", Optional[int]).accepts(type(None))
        assert Param("x", Union[int, str]).accepts(str)
        assert not Param("x", Union[int, str]).accepts(bytes)
        assert Param("x", int | None).accepts(int)

    def test_plain_protocol_is_unchecked(self):
        assert Param("s", Sized).accepts(int)
        assert Param("s", Sized).accepts(Square)

    def test_generic_alias(self):
        assert Param("x", list[int]).accepts(list)
        assert not Param("x", list[int]).accepts(tuple)

    def test_string_annotations(self):
        assert Param("x", "int").accepts(int)
        assert Param("x", "'Square'").accepts(Square)
        assert Param("x", "int | str").accepts(str)
        assert Param("x", "mod.Square").is_exactly(Square)
        assert not Param("x", "int").accepts(str)

    def test_kinds(self):
        params = Type.make(Vault).method("total").params()
        assert params[0].is_variadic()
        assert params[0].is_var_positional()
        assert not params[0].is_positional()
        assert params[0].to_str() == "*nums: int"

        kw = Type.make(Vault).method("unlock").params()[0]
        assert kw.is_keyword()
        assert not kw.is_positional()
        assert not kw.has_default()


class TestStaticField:
    def test_unset_class_var(self):
        f = Type.make(Calc).field("limit")
        assert f.is_static()
        with pytest.raises(UnknownSlotErr):
            f.get()
