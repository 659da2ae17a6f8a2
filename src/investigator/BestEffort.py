#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class BestEffort(Obj):
    """
    BestEffort wraps an Investigator so reflective actions never raise:
    a failed Outcome degrades to None. Queries pass straight through.
    """

    def __init__(self, investigator=None):
        if investigator is None:
            from .Investigator import Investigator
            investigator = Investigator()
        self._investigator = investigator

    def investigator(self):
        """Return the wrapped Investigator."""
        return self._investigator

    def load(self, instance):
        self._investigator.load(instance)

    # Queries

    def method_count(self):
        return self._investigator.method_count()

    def constructor_count(self):
        return self._investigator.constructor_count()

    def field_count(self):
        return self._investigator.field_count()

    def method_names(self):
        return self._investigator.method_names()

    def field_names(self):
        return self._investigator.field_names()

    def interface_names(self):
        return self._investigator.interface_names()

    def constant_field_count(self):
        return self._investigator.constant_field_count()

    def static_method_count(self):
        return self._investigator.static_method_count()

    def is_extending(self):
        return self._investigator.is_extending()

    def parent_simple_name(self):
        return self._investigator.parent_simple_name()

    def is_parent_abstract(self):
        return self._investigator.is_parent_abstract()

    def field_names_across_chain(self):
        return self._investigator.field_names_across_chain()

    def ancestor_names(self):
        return self._investigator.ancestor_names()

    def inheritance_chain_str(self, delimiter):
        return self._investigator.inheritance_chain_str(delimiter)

    # Actions

    def invoke_returning_int(self, name, *args):
        """Return the int result, or None on any failure."""
        return self._investigator.invoke_returning_int(name, *args).get(checked=False)

    def create_instance(self, expected_arg_count, *args):
        """Return the new instance, or None on any failure."""
        return self._investigator.create_instance(expected_arg_count, *args).get(checked=False)

    def elevate_and_invoke(self, name, parameter_types, *args):
        """Return the method result, or None on any failure."""
        return self._investigator.elevate_and_invoke(name, parameter_types, *args).get(checked=False)

    def invoke(self, name, *args, elevate=False):
        """Return the raw result, or None on any failure."""
        return self._investigator.invoke(name, *args, elevate=elevate).get(checked=False)

    def read_field(self, name, elevate=False):
        return self._investigator.read_field(name, elevate).get(checked=False)

    def to_str(self):
        return f"BestEffort({self._investigator.to_str()})"
