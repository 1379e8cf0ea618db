"""Interactive NFA to regular expression conversion by state elimination."""

from .automaton import Automaton, State, Transition
from .catalog import get_sample, load_catalog
from .elimination import EliminationRecord, NewTransition, apply, final_regex, preview
from .errors import (ConversionError, InvalidSelection, MalformedAutomaton, NoHistory,
                     RegexSyntaxError, SessionNotStarted)
from .regex import concat, main_operator, parse, simplify, star, union
from .session import ConversionSession, Status, StepResult

__version__ = "0.1.0"
