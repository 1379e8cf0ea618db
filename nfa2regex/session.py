"""
Conversion session: one interactive run of the state-elimination algorithm.

The session owns the current snapshot, the eliminated set, the step log and a
stack of snapshots for stepping back.  Expected misuse (eliminating the start
state, stepping back past the beginning, ...) is reported through a failed
``StepResult`` rather than an exception; only a malformed source automaton
makes ``start`` raise.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from . import elimination
from .automaton import Automaton
from .errors import ConversionError, InvalidSelection, MalformedAutomaton, NoHistory, SessionNotStarted
from .regex import render

l = logging.getLogger(__name__)

HINTS = [
    "Try eliminating states with fewer connections first",
    "States with self-loops create more complex regex patterns",
    "Different elimination orders can lead to different regex forms",
    "Look for states that are \"bottlenecks\" in the NFA",
    "Consider which elimination might simplify the overall structure",
]


class Status(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Snapshot:
    """Everything needed to restore the session to an earlier step."""
    automaton: Automaton
    eliminated: frozenset
    step_index: int


@dataclass(frozen=True)
class StepLogEntry:
    index: int
    title: str
    description: str
    regex: str = None
    state_id: str = None

    def to_dict(self):
        data = {"index": self.index, "title": self.title, "description": self.description}
        if self.regex is not None:
            data["regex"] = self.regex
        if self.state_id is not None:
            data["stateId"] = self.state_id
        return data


@dataclass
class StepResult:
    """Outcome of a session operation.

    ``event`` is one of ``started``, ``selected``, ``eliminated``,
    ``completed``, ``stepped_back``, ``reset`` or ``rejected``.
    """
    ok: bool
    event: str
    error: ConversionError = None
    automaton: Automaton = None
    record: elimination.EliminationRecord = None
    final_regex: object = None

    def __bool__(self):
        return self.ok

    @property
    def message(self):
        if self.error is not None:
            return str(self.error)
        return self.event.replace("_", " ").capitalize()


# Commands accepted by ConversionSession.apply_command

@dataclass(frozen=True)
class Start:
    automaton: Automaton = None


@dataclass(frozen=True)
class Select:
    state_id: str


@dataclass(frozen=True)
class Eliminate:
    state_id: str = None


@dataclass(frozen=True)
class StepBack:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass
class ConversionSession:
    """A single NFA → regex conversion, created by the caller and discarded with it."""
    source: Automaton = None
    status: Status = Status.NOT_STARTED
    automaton: Automaton = None
    step_index: int = 0
    history: list = field(default_factory=list)
    steps: list = field(default_factory=list)
    final_regex: object = None
    selected: str = None

    def __post_init__(self):
        if self.source is not None and self.automaton is None:
            self.automaton = self.source.copy(eliminated=())

    # -- lifecycle ----------------------------------------------------------

    def start(self, automaton=None):
        """Begin converting ``automaton`` (or the session's source) from step 0."""
        automaton = automaton if automaton is not None else self.source
        if automaton is None:
            raise MalformedAutomaton("no automaton to convert")
        automaton.validate()

        self.source = automaton.copy(eliminated=())
        self.automaton = self.source.copy()
        self.step_index = 0
        self.final_regex = None
        self.selected = None
        self.history = [self._snapshot()]
        self.steps = [StepLogEntry(0, "Initial NFA", "Original NFA ready for conversion")]
        self.status = Status.IN_PROGRESS
        l.info("Conversion started for %s", self.source.name or "automaton")

        if self.check_completion():
            return StepResult(True, "completed", automaton=self.automaton, final_regex=self.final_regex)
        return StepResult(True, "started", automaton=self.automaton)

    def reset(self):
        """Discard the run and return to the untouched source automaton."""
        self.status = Status.NOT_STARTED
        self.automaton = self.source.copy(eliminated=()) if self.source is not None else None
        self.step_index = 0
        self.history = []
        self.steps = []
        self.final_regex = None
        self.selected = None
        l.info("Conversion reset")
        return StepResult(True, "reset", automaton=self.automaton)

    # -- operations ---------------------------------------------------------

    def _rejection(self, state_id):
        if self.status is Status.NOT_STARTED:
            return SessionNotStarted()
        blocker = self.automaton.elimination_blocker(state_id)
        if blocker:
            return InvalidSelection(state_id, blocker)
        return None

    def _reject(self, error):
        l.warning("Rejected: %s", error)
        return StepResult(False, "rejected", error=error, automaton=self.automaton)

    def select_for_elimination(self, state_id):
        """Mark ``state_id`` as the next state to eliminate."""
        error = self._rejection(state_id)
        if error:
            return self._reject(error)
        self.selected = state_id
        return StepResult(True, "selected", automaton=self.automaton)

    def eliminate(self, state_id=None):
        """Eliminate ``state_id`` (default: the selected state)."""
        state_id = state_id if state_id is not None else self.selected
        if state_id is None:
            return self._reject(InvalidSelection(None, "No state selected"))
        error = self._rejection(state_id)
        if error:
            return self._reject(error)

        self.history.append(self._snapshot())
        record = elimination.preview(self.automaton, state_id)
        self.automaton = elimination.apply(self.automaton, record)
        self.step_index += 1
        self.selected = None
        self.steps.append(StepLogEntry(
            self.step_index, f"Eliminated state {state_id}", record.describe(), state_id=state_id))
        l.info("Step %d: eliminated %s", self.step_index, state_id)

        if self.check_completion():
            return StepResult(True, "completed", automaton=self.automaton, record=record,
                              final_regex=self.final_regex)
        return StepResult(True, "eliminated", automaton=self.automaton, record=record)

    confirm_elimination = eliminate

    def step_back(self):
        """Undo the most recent elimination."""
        if self.status is Status.NOT_STARTED:
            return self._reject(SessionNotStarted())
        if len(self.history) <= 1:
            return self._reject(NoHistory())

        snapshot = self.history.pop()
        self.automaton = snapshot.automaton
        self.step_index = snapshot.step_index
        self.final_regex = None
        self.selected = None
        self.status = Status.IN_PROGRESS
        self.steps = self.steps[:self.step_index + 1]
        l.info("Stepped back to step %d", self.step_index)
        return StepResult(True, "stepped_back", automaton=self.automaton)

    def check_completion(self):
        """Complete the run once only start and accept states remain."""
        if self.status is not Status.IN_PROGRESS:
            return self.status is Status.COMPLETED
        if self.automaton.intermediate_states():
            return False

        self.final_regex = elimination.final_regex(self.automaton)
        self.status = Status.COMPLETED
        text = render(self.final_regex)
        self.steps.append(StepLogEntry(
            self.step_index + 1, "Conversion Complete!", f"Final regular expression: {text}", regex=text))
        l.info("Conversion complete: %s", text)
        return True

    def apply_command(self, command):
        """Run a Start/Select/Eliminate/StepBack/Reset command."""
        if isinstance(command, Start):
            try:
                return self.start(command.automaton)
            except MalformedAutomaton as exc:
                return self._reject(exc)
        if isinstance(command, Select):
            return self.select_for_elimination(command.state_id)
        if isinstance(command, Eliminate):
            return self.eliminate(command.state_id)
        if isinstance(command, StepBack):
            return self.step_back()
        if isinstance(command, Reset):
            return self.reset()
        raise TypeError(f"Unknown command: {command!r}")

    # -- queries ------------------------------------------------------------

    @property
    def eliminated(self):
        return self.automaton.eliminated if self.automaton is not None else frozenset()

    @property
    def can_step_back(self):
        return self.status is not Status.NOT_STARTED and len(self.history) > 1

    def get_current_automaton(self):
        return self.automaton.copy() if self.automaton is not None else None

    def get_elimination_preview(self, state_id):
        if self.automaton is None:
            raise SessionNotStarted()
        return elimination.preview(self.automaton, state_id)

    def get_step_log(self):
        return list(self.steps)

    def get_final_regex(self):
        return self.final_regex

    def available_states(self):
        """Ids of the states that can still be eliminated."""
        if self.status is not Status.IN_PROGRESS:
            return []
        return [state.id for state in self.automaton.intermediate_states()]

    def suggest_state(self, strategy="random", rng=None):
        """Pick a state to eliminate next, at random or the cheapest one."""
        available = self.available_states()
        if not available:
            return None
        if strategy == "cheapest":
            return min(available, key=lambda state_id: elimination.complexity(self.automaton, state_id))
        return (rng or random).choice(available)

    def hint(self, rng=None):
        if self.status is Status.NOT_STARTED:
            return "Start conversion first to explore different paths"
        if not self.available_states():
            return "No more states to eliminate - see what regex you created!"
        return (rng or random).choice(HINTS)

    def _snapshot(self):
        return Snapshot(self.automaton, self.automaton.eliminated, self.step_index)

    # -- export -------------------------------------------------------------

    def export(self):
        """Serializable record of the run."""
        return {
            "sourceAutomaton": self.source.to_dict() if self.source is not None else None,
            "finalRegex": render(self.final_regex) if self.final_regex is not None else None,
            "steps": [entry.to_dict() for entry in self.steps],
        }

    @classmethod
    def from_export(cls, data):
        """Rebuild a session by replaying the eliminations of an exported run."""
        session = cls(Automaton.from_dict(data["sourceAutomaton"]))
        session.start()
        for entry in data.get("steps", []):
            state_id = entry.get("stateId")
            if state_id is None:
                continue
            result = session.eliminate(state_id)
            if not result:
                raise result.error
        return session
