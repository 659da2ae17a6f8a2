#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

from .Err import Err, CastErr, NotLoadedErr, UnknownSlotErr
from .Log import Log
from .Obj import Obj
from .Outcome import Outcome
from .Type import Type


class LoadedTarget(Obj):
    """Class and live instance captured together by one Investigator.load()"""

    def __init__(self, cls, instance):
        self._cls = cls
        self._instance = instance

    def py_class(self):
        return self._cls

    def instance(self):
        return self._instance

    def type_(self):
        """Fresh Type for the loaded pair - slots are re-derived per query."""
        return Type(self._cls, self._instance)

    def to_str(self):
        return f"LoadedTarget({self._cls.__qualname__})"


class Investigator(Obj):
    """
    Investigator loads an instance of an unknown class and answers
    structural queries about it through reflection, or invokes its
    members and constructors by name.

    Query operations return plain values. Reflective actions return an
    Outcome tagged ok/unresolved/inaccessible/failed; use BestEffort for
    the degrade-to-None behaviour. Every operation raises NotLoadedErr
    before load() is called.

    Not thread safe: use one Investigator per thread.
    """

    def __init__(self):
        self._target = None
        self._log = Log.get("investigator")

    @staticmethod
    def of(instance):
        """Create an Investigator with instance already loaded"""
        inv = Investigator()
        inv.load(instance)
        return inv

    def load(self, instance):
        """Load an instance of an unknown type, replacing any previous target."""
        self._target = LoadedTarget(type(instance), instance)
        if self._log.is_debug():
            self._log.debug(f"Loaded {Type.of(instance).qname()}")

    def is_loaded(self):
        return self._target is not None

    def target(self):
        """Return the LoadedTarget, raise NotLoadedErr before load()"""
        if self._target is None:
            raise NotLoadedErr.make("Investigator used before load()")
        return self._target

    def type_(self):
        return self.target().type_()

    #########################################################################
    # Declared member counts
    #########################################################################

    def method_count(self):
        """Number of methods declared by the loaded class, constructors excluded."""
        return len(self.type_().methods())

    def constructor_count(self):
        return len(self.type_().ctors())

    def field_count(self):
        """Number of declared fields, static and instance, any visibility."""
        return len(self.type_().fields())

    def constant_field_count(self):
        return sum(1 for f in self.type_().fields() if f.is_final())

    def static_method_count(self):
        return sum(1 for m in self.type_().methods() if m.is_static())

    def method_names(self):
        return sorted(m.name() for m in self.type_().methods())

    def field_names(self):
        return sorted(f.name() for f in self.type_().fields())

    #########################################################################
    # Inheritance queries
    #########################################################################

    def interface_names(self):
        """Simple names of directly implemented interfaces."""
        return {t.name() for t in self.type_().mixins()}

    def is_extending(self):
        """True if the superclass is anything but object"""
        base = self.type_().base()
        return base is not None and base.py_class() is not object

    def parent_simple_name(self):
        """Simple name of the superclass, None when not extending"""
        if not self.is_extending():
            return None
        return self.type_().base().name()

    def is_parent_abstract(self):
        if not self.is_extending():
            return False
        return self.type_().base().is_abstract()

    def field_names_across_chain(self):
        """Names of fields declared anywhere from the loaded class up to object."""
        return {f.name() for f in self.type_().all_fields()}

    def ancestor_names(self):
        """Simple names from object down to the loaded class."""
        chain = self.type_().inheritance()
        chain.reverse()
        return [t.name() for t in chain]

    def inheritance_chain_str(self, delimiter):
        """Join ancestor_names() with delimiter, e.g. "object->Shape->Square"."""
        return delimiter.join(self.ancestor_names())

    #########################################################################
    # Reflective actions
    #########################################################################

    def invoke_returning_int(self, name, *args):
        """Invoke a public method whose signature fits the runtime types of args.

        Returns:
            Outcome with the int result
        """
        t = self.type_()
        instance = self.target().instance()

        def run():
            m = self._resolve_by_args(t, name, args)
            return Investigator._narrow_int(m, m.call_on(instance, list(args)))

        return self._action(f"invoke_returning_int {name}", run)

    def invoke(self, name, *args, elevate=False):
        """Invoke a declared method resolved by the runtime types of args.

        Returns:
            Outcome with the raw result
        """
        t = self.type_()
        instance = self.target().instance()

        def run():
            m = self._resolve_by_args(t, name, args)
            if elevate:
                m.accessible(True)
            return m.call_on(instance, list(args))

        return self._action(f"invoke {name}", run)

    def create_instance(self, expected_arg_count, *args):
        """Construct a new instance with the public constructor taking expected_arg_count args.

        When several public constructors share the arity the last one in
        declaration order wins. The loaded instance is left untouched.

        Returns:
            Outcome with the new instance
        """
        t = self.type_()

        def run():
            chosen = None
            for c in t.ctors():
                if c.is_public() and c.arity() == expected_arg_count:
                    chosen = c
            if chosen is None:
                raise UnknownSlotErr.make(
                    f"No public constructor of {t.qname()} takes {expected_arg_count} args")
            return chosen.make(list(args))

        return self._action(f"create_instance/{expected_arg_count}", run)

    def elevate_and_invoke(self, name, parameter_types, *args):
        """Invoke a declared method of any visibility by exact name and parameter types.

        Unannotated parameters are matched by object.

        Returns:
            Outcome with the raw result
        """
        t = self.type_()
        instance = self.target().instance()
        parameter_types = list(parameter_types or [])
        shape = "(" + ", ".join(getattr(p, "__name__", str(p)) for p in parameter_types) + ")"

        def run():
            m = Investigator._resolve(t, name, lambda m: m.fits_types(parameter_types), shape)
            m.accessible(True)
            return m.call_on(instance, list(args))

        return self._action(f"elevate_and_invoke {name}", run)

    def read_field(self, name, elevate=False):
        """Read a declared field from the loaded instance.

        Returns:
            Outcome with the field value
        """
        t = self.type_()
        instance = self.target().instance()

        def run():
            f = t.field(name)
            if elevate:
                f.accessible(True)
            return f.get(instance)

        return self._action(f"read_field {name}", run)

    def _action(self, label, fn):
        try:
            return Outcome.make_ok(fn())
        except Err as e:
            outcome = Outcome.make_err(e)
            self._log.debug(f"{label} -> {outcome.status().name()}: {e.msg()}", e)
            return outcome

    def _resolve_by_args(self, t, name, args):
        arg_types = [type(a) for a in args]
        shape = "(" + ", ".join(a.__name__ for a in arg_types) + ")"
        return Investigator._resolve(t, name, lambda m: m.fits_args(arg_types), shape)

    @staticmethod
    def _resolve(t, name, fits, shape):
        """Linear scan of declared methods by name, then by signature."""
        candidates = [m for m in t.methods() if m.matches(name)]
        if not candidates:
            raise UnknownSlotErr.make(f"{t.qname()}.{name}")
        for m in candidates:
            if fits(m):
                return m
        raise UnknownSlotErr.make(f"{t.qname()}.{name} has no signature matching {shape}")

    @staticmethod
    def _narrow_int(m, result):
        if isinstance(result, int) and not isinstance(result, bool):
            return int(result)
        raise CastErr.make(f"{m.qname()} returned {type(result).__name__}, not int")

    def to_str(self):
        if self._target is None:
            return "Investigator(unloaded)"
        return f"Investigator({self._target.py_class().__qualname__})"
