#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

class Obj:
    """Root of the reflection objects.

    Subclasses override equals/hash/to_str; the dunders route to them so
    reflection objects behave in sets, dicts and f-strings.
    """

    def equals(self, that):
        return self is that

    def hash(self):
        return id(self)

    def to_str(self):
        return f"{type(self).__name__}@{id(self):x}"

    def __eq__(self, other):
        return self.equals(other)

    def __hash__(self):
        return self.hash()

    def __str__(self):
        return self.to_str()

    def __repr__(self):
        return self.to_str()
