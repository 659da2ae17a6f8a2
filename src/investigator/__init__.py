#
# Copyright (c) 2025, The investigator contributors
# Licensed under the Academic Free License version 3.0
#

# investigator - reflective structural queries over unknown objects

# Base types
from .Obj import Obj

# Reflection
from .Slot import Slot, FConst
from .Param import Param
from .Field import Field
from .Method import Method, ctor
from .Type import Type

# Results
from .Outcome import Outcome, OutcomeStatus

# Investigation
from .Investigator import Investigator, LoadedTarget
from .BestEffort import BestEffort

# Environment
from .Env import Env
from .Log import Log, LogLevel, LogRec

# Errors
from .Err import (
    Err, AccessErr, ArgErr, CastErr, InvokeErr, NameErr, NotLoadedErr, ParseErr, UnknownSlotErr,
)
