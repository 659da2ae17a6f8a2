#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

"""Shared sample classes and fixtures for investigator tests."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Final, Generic, Protocol, TypeVar

import pytest

from investigator import Env, Investigator, Log, LogLevel, ctor


# ---------------------------------------------------------------------------
# Sample classes
# ---------------------------------------------------------------------------

class Named(Protocol):
    def label(self) -> str: ...


class Comparable(Protocol):
    def compare_to(self, other) -> int: ...


class Shape(ABC):
    UNIT = "cm"
    sides: int

    def __init__(self, sides):
        self.sides = sides

    @abstractmethod
    def area(self) -> int: ...

    def describe(self):
        return f"{type(self).__name__} with {self.sides} sides"


class Square(Shape, Named, Comparable):
    """Declares 10 methods (2 static), 2 constructors and 5 fields when
    loaded from an instance: MAX_SIDE, count, perimeter, side and
    __secret_token. One of the fields is final."""

    MAX_SIDE: Final = 100
    count: ClassVar[int] = 0

    def __init__(self, side=1):
        super().__init__(4)
        self.side = side
        self.__secret_token = "sq"

    @ctor
    @classmethod
    def scaled(cls, side: int, factor: int) -> "Square":
        return cls(side * factor)

    @property
    def perimeter(self) -> int:
        return 4 * self.side

    def area(self) -> int:
        return self.side * self.side

    def add(self, a: int, b: int) -> int:
        return a + b

    def label(self) -> str:
        return "square"

    def compare_to(self, other: "Square") -> int:
        return self.side - other.side

    @staticmethod
    def doubled(n: int) -> int:
        return n * 2

    @classmethod
    def sides_of(cls) -> int:
        return 4

    def is_unit(self) -> bool:
        return self.side == 1

    def fail(self):
        raise ValueError("boom")

    def _scale(self, factor: int) -> int:
        return self.side * factor

    def __whisper(self):
        return "psst"


class Empty:
    pass


class Single:
    def __init__(self):
        self.value = 1

    def only(self):
        return self.value


class Parent:
    pass


class Child(Parent):
    pass


class Base:
    label = "base"
    tag: str = "b"


class Derived(Base):
    label = "derived"


class Point:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y


@dataclass
class Pair:
    left: int
    right: int = 0


T = TypeVar("T")


class Box(Generic[T]):
    def __init__(self, item: T):
        self.item = item

    def get(self) -> T:
        return self.item


class Overloaded:
    """Two public constructors of arity one: the factory is declared last."""

    def __init__(self, value):
        self.value = value
        self.via = "init"

    @ctor
    @staticmethod
    def parse(text: str) -> "Overloaded":
        o = Overloaded(int(text))
        o.via = "parse"
        return o

    @ctor
    @classmethod
    def _hidden(cls, value):
        return cls(value)


class Vault:
    """A keyword-only method and a variadic one."""

    def __init__(self, code):
        self._code = code

    def unlock(self, *, code):
        return code == self._code

    def total(self, *nums: int) -> int:
        return sum(nums)


class Sized(Protocol):
    """Plain protocol: issubclass() against it raises TypeError."""

    def area(self) -> int: ...


class Measurer:
    def measure(self, s: Sized) -> int:
        return s.area()


class Calc:
    limit: ClassVar[int]
    scale: ClassVar[int] = 10


def make_named_protocol():
    class Named(Protocol):
        def label(self) -> str: ...
    return Named


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_env():
    """Re-read the environment for every test and restore the log level."""
    Env.reset()
    log = Log.get("investigator")
    level = log.level()
    yield
    log.level(level)
    Env.reset()


@pytest.fixture
def square():
    return Square(2)


@pytest.fixture
def inv(square):
    return Investigator.of(square)


@pytest.fixture
def captured_logs():
    """Collect LogRecs at debug level for the investigator log."""
    recs = []
    Log.get("investigator").level(LogLevel.debug())
    Log.add_handler(recs.append)
    yield recs
    Log.remove_handler(recs.append)
