"""
Automaton model for state elimination.

Transition labels are regex fragments, so the same structure holds the source
NFA (labels such as ``a`` or ``a,b``) and every intermediate generalized NFA
produced while states are eliminated.
"""

import itertools
from dataclasses import dataclass, replace

from .errors import MalformedAutomaton
from .regex import Regex, coerce, matches, render, symbols, union


@dataclass(frozen=True)
class State:
    """A state of the automaton. Position is only used for drawing."""
    id: str
    x: float = 0
    y: float = 0
    is_start: bool = False
    is_accept: bool = False

    @property
    def is_intermediate(self):
        return not (self.is_start or self.is_accept)


@dataclass(frozen=True)
class Transition:
    """A labelled edge between two states."""
    source: str
    target: str
    label: Regex

    @property
    def is_self_loop(self):
        return self.source == self.target

    @property
    def text(self):
        return render(self.label)


class Automaton:
    """Represents an NFA with states, transitions, start and accept flags.

    At most one transition is kept per ordered pair of states: adding a second
    one unions the labels.  Eliminated states stay in ``states`` and are listed
    in ``eliminated``; they carry no transitions.
    """

    def __init__(self, states, transitions=(), alphabet=None, name="", description="",
                 sample_id=None, test_strings=None, eliminated=()):
        self.states = list(states)
        self.transitions = []
        for transition in transitions:
            self.add_transition(transition.source, transition.target, transition.label)
        if alphabet is None:
            alphabet = set()
            for transition in self.transitions:
                alphabet |= symbols(transition.label)
        self.alphabet = sorted(alphabet)
        self.name = name
        self.description = description
        self.sample_id = sample_id
        self.test_strings = test_strings or {"accepting": [], "rejecting": []}
        self.eliminated = frozenset(eliminated)

    def __repr__(self):
        return f"Automaton({self.name or 'unnamed'}, {len(self.states)} states, {len(self.transitions)} transitions)"

    def __eq__(self, other):
        if not isinstance(other, Automaton):
            return NotImplemented
        return (self.states == other.states
                and set(self.transitions) == set(other.transitions)
                and self.eliminated == other.eliminated
                and self.alphabet == other.alphabet)

    # -- lookup -------------------------------------------------------------

    @property
    def state_ids(self):
        return [state.id for state in self.states]

    def get_state(self, state_id):
        for state in self.states:
            if state.id == state_id:
                return state
        return None

    @property
    def start_state(self):
        return next((state for state in self.states if state.is_start), None)

    @property
    def accept_states(self):
        return [state for state in self.states if state.is_accept]

    def active_states(self):
        """States that have not been eliminated."""
        return [state for state in self.states if state.id not in self.eliminated]

    def intermediate_states(self):
        """Remaining states that are neither start nor accept."""
        return [state for state in self.active_states() if state.is_intermediate]

    def incoming_of(self, state_id):
        return [t for t in self.transitions if t.target == state_id and t.source != state_id]

    def outgoing_of(self, state_id):
        return [t for t in self.transitions if t.source == state_id and t.target != state_id]

    def self_loop_of(self, state_id):
        return self.transition_between(state_id, state_id)

    def transitions_from(self, state_id):
        return [t for t in self.transitions if t.source == state_id]

    def transition_between(self, source, target):
        for transition in self.transitions:
            if transition.source == source and transition.target == target:
                return transition
        return None

    def elimination_blocker(self, state_id):
        """Reason why ``state_id`` cannot be eliminated, or None if it can."""
        state = self.get_state(state_id)
        if state is None:
            return "Unknown state"
        if state.is_start:
            return "Cannot eliminate start state"
        if state.is_accept:
            return "Cannot eliminate accept state"
        if state_id in self.eliminated:
            return "State already eliminated"
        return None

    def is_eliminable(self, state_id):
        return self.elimination_blocker(state_id) is None

    # -- mutation -----------------------------------------------------------

    def add_transition(self, source, target, label):
        """Add a transition, unioning with an existing one on the same pair."""
        label = coerce(label)
        existing = self.transition_between(source, target)
        if existing is not None:
            label = union(existing.label, label)
            self.transitions.remove(existing)
        self.transitions.append(Transition(source, target, label))

    def set_transition(self, source, target, label):
        """Install a transition, replacing whatever the pair had before."""
        self.transitions = [t for t in self.transitions
                            if not (t.source == source and t.target == target)]
        self.transitions.append(Transition(source, target, coerce(label)))

    def remove_transitions_touching(self, state_id):
        self.transitions = [t for t in self.transitions
                            if t.source != state_id and t.target != state_id]

    def copy(self, **changes):
        """Independent copy; states and transitions are immutable and shared."""
        clone = Automaton.__new__(Automaton)
        clone.__dict__.update(self.__dict__)
        clone.states = list(self.states)
        clone.transitions = list(self.transitions)
        clone.alphabet = list(self.alphabet)
        clone.test_strings = {key: list(value) for key, value in self.test_strings.items()}
        for key, value in changes.items():
            setattr(clone, key, frozenset(value) if key == "eliminated" else value)
        return clone

    def with_flags(self, state_id, **flags):
        """Copy with one state's start/accept flags replaced."""
        clone = self.copy()
        clone.states = [replace(state, **flags) if state.id == state_id else state
                        for state in self.states]
        return clone

    # -- checks -------------------------------------------------------------

    def validate(self):
        """Raise MalformedAutomaton unless the structural invariants hold."""
        problems = []
        ids = self.state_ids
        duplicates = sorted({state_id for state_id in ids if ids.count(state_id) > 1})
        if duplicates:
            problems.append(f"duplicate state ids: {', '.join(duplicates)}")
        starts = [state.id for state in self.states if state.is_start]
        if not starts:
            problems.append("no start state")
        elif len(starts) > 1:
            problems.append(f"more than one start state: {', '.join(starts)}")
        if not self.accept_states:
            problems.append("no accept state")
        known = set(ids)
        for transition in self.transitions:
            for endpoint in (transition.source, transition.target):
                if endpoint not in known:
                    problems.append(
                        f"transition {transition.source}->{transition.target} references unknown state {endpoint}")
        if problems:
            raise MalformedAutomaton(problems)
        return self

    def accepts(self, word):
        """Simulate the automaton on ``word``.

        A transition may consume any slice of the input its label matches,
        including the empty slice, so plain NFAs, ε-labels and regex-labelled
        snapshots are handled alike.
        """
        start = self.start_state
        if start is None:
            return False
        accepting = {state.id for state in self.accept_states}
        frontier = [(start.id, 0)]
        seen = set(frontier)
        while frontier:
            state_id, position = frontier.pop()
            if position == len(word) and state_id in accepting:
                return True
            for transition in self.transitions_from(state_id):
                for end in range(position, len(word) + 1):
                    configuration = (transition.target, end)
                    if configuration in seen:
                        continue
                    if matches(transition.label, word[position:end]):
                        seen.add(configuration)
                        frontier.append(configuration)
        return False

    def words(self, max_length):
        """All strings over the alphabet up to ``max_length`` symbols."""
        for length in range(max_length + 1):
            for letters in itertools.product(self.alphabet, repeat=length):
                yield "".join(letters)

    # -- serialization ------------------------------------------------------

    def to_dict(self):
        """Plain record with the catalog's keys."""
        data = {
            "id": self.sample_id,
            "name": self.name,
            "description": self.description,
            "states": [
                {"id": s.id, "x": s.x, "y": s.y, "isStart": s.is_start, "isAccept": s.is_accept}
                for s in self.states
            ],
            "transitions": [
                {"from": t.source, "to": t.target, "label": t.text,
                 "type": "self" if t.is_self_loop else "normal"}
                for t in self.transitions
            ],
            "alphabet": list(self.alphabet),
            "testStrings": {key: list(value) for key, value in self.test_strings.items()},
        }
        if self.eliminated:
            data["eliminated"] = sorted(self.eliminated)
        return data

    @classmethod
    def from_dict(cls, data):
        """Build an automaton from a catalog/export record."""
        try:
            states = [
                State(s["id"], s.get("x", 0), s.get("y", 0),
                      bool(s.get("isStart", False)), bool(s.get("isAccept", False)))
                for s in data["states"]
            ]
            transitions = [Transition(t["from"], t["to"], coerce(t["label"]))
                           for t in data.get("transitions", [])]
        except KeyError as exc:
            raise MalformedAutomaton(f"missing field {exc.args[0]!r}") from exc
        test_strings = data.get("testStrings") or {}
        return cls(
            states,
            transitions,
            alphabet=data.get("alphabet"),
            name=data.get("name", ""),
            description=data.get("description", ""),
            sample_id=data.get("id"),
            test_strings={"accepting": list(test_strings.get("accepting", [])),
                          "rejecting": list(test_strings.get("rejecting", []))},
            eliminated=data.get("eliminated", ()),
        )

    def display(self):
        """Display the automaton details."""
        start = self.start_state
        print(f"\n{self.name or 'NFA'} Details:")
        print("States:", ", ".join(self.state_ids))
        print("Alphabet:", ", ".join(self.alphabet))
        print("Start State:", start.id if start else "-")
        print("Accept States:", ", ".join(state.id for state in self.accept_states))
        if self.eliminated:
            print("Eliminated:", ", ".join(sorted(self.eliminated)))
        print("Transitions:")
        for transition in self.transitions:
            print(f"δ({transition.source}, {transition.text}) → {transition.target}")
