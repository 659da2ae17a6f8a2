#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class OutcomeStatus(Obj):
    """
    Result state of a reflective action.

    Values:
    - ok: member resolved and returned normally
    - unresolved: no member matches the name, signature or arity
    - inaccessible: member exists but is not public and was not elevated
    - failed: member raised, or its result could not be narrowed
    """

    _vals = {}

    def __init__(self, name, ordinal):
        self._name = name
        self._ordinal = ordinal

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def to_str(self):
        return self._name

    def __repr__(self):
        return f"OutcomeStatus.{self._name}"

    def __eq__(self, other):
        if isinstance(other, OutcomeStatus):
            return self._ordinal == other._ordinal
        return False

    def __hash__(self):
        return hash(self._ordinal)

    def is_ok(self):
        return self._ordinal == 0

    def is_unresolved(self):
        return self._ordinal == 1

    def is_inaccessible(self):
        return self._ordinal == 2

    def is_failed(self):
        return self._ordinal == 3

    @staticmethod
    def ok():
        return OutcomeStatus._vals["ok"]

    @staticmethod
    def unresolved():
        return OutcomeStatus._vals["unresolved"]

    @staticmethod
    def inaccessible():
        return OutcomeStatus._vals["inaccessible"]

    @staticmethod
    def failed():
        return OutcomeStatus._vals["failed"]

    @staticmethod
    def vals():
        return [
            OutcomeStatus._vals["ok"],
            OutcomeStatus._vals["unresolved"],
            OutcomeStatus._vals["inaccessible"],
            OutcomeStatus._vals["failed"],
        ]

    @staticmethod
    def for_err(err):
        """Map an Err to the status it produces."""
        from .Err import AccessErr, ArgErr, UnknownSlotErr
        if isinstance(err, AccessErr):
            return OutcomeStatus.inaccessible()
        if isinstance(err, (UnknownSlotErr, ArgErr)):
            return OutcomeStatus.unresolved()
        return OutcomeStatus.failed()


OutcomeStatus._vals["ok"] = OutcomeStatus("ok", 0)
OutcomeStatus._vals["unresolved"] = OutcomeStatus("unresolved", 1)
OutcomeStatus._vals["inaccessible"] = OutcomeStatus("inaccessible", 2)
OutcomeStatus._vals["failed"] = OutcomeStatus("failed", 3)


class Outcome(Obj):
    """
    Outcome is the completed result of a reflective action: either a
    value with status ok, or an Err tagged with the failure status.
    """

    def __init__(self, status, val=None, err=None):
        self._status = status
        self._val = val
        self._err = err

    @staticmethod
    def make_ok(val):
        return Outcome(OutcomeStatus.ok(), val)

    @staticmethod
    def make_err(err):
        return Outcome(OutcomeStatus.for_err(err), None, err)

    def status(self):
        """Return status of this outcome."""
        return self._status

    def is_ok(self):
        return self._status.is_ok()

    def val(self):
        """Return the value, None unless ok."""
        return self._val

    def err(self):
        """Return the Err or None if completed successfully."""
        return self._err

    def get(self, checked=True):
        """Return the value.

        Args:
            checked: If True raise the Err of a failed outcome, else return None
        """
        if self._err is not None:
            if checked:
                raise self._err
            return None
        return self._val

    def to_str(self):
        if self._err is not None:
            return f"Outcome({self._status.name()}: {self._err.msg()})"
        return f"Outcome(ok: {self._val!r})"
