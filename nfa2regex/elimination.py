"""
State elimination: the rewrite produced by removing one state, and applying it.

For every incoming edge ``p -(R1)-> q`` and outgoing edge ``q -(R3)-> r`` of
the eliminated state ``q`` with self-loop ``R2``, the path ``p -> r`` becomes
``R1·R2*·R3``, unioned with any edge ``p -> r`` already present.
"""

import logging
from dataclasses import dataclass, field

from .automaton import State
from .errors import InvalidSelection
from .regex import Empty, Epsilon, concat, matches, render, simplify, star, union

l = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewTransition:
    """A transition installed by an elimination."""
    source: str
    target: str
    label: object
    is_new: bool
    path: object = None

    @property
    def is_self_loop(self):
        return self.source == self.target

    @property
    def text(self):
        return render(self.label)


@dataclass(frozen=True)
class EliminationRecord:
    """What eliminating ``state_id`` does; computing it changes nothing."""
    state_id: str
    incoming: tuple = ()
    outgoing: tuple = ()
    self_loop: object = None
    new_transitions: tuple = field(default_factory=tuple)

    @property
    def path_count(self):
        return len(self.incoming) * len(self.outgoing)

    def describe(self, implicit_concat=False):
        """One line per rewritten transition."""
        if not self.new_transitions:
            return f"Removed {self.state_id}; no paths ran through it"
        lines = [f"Removed {self.state_id} and updated transitions:"]
        for transition in self.new_transitions:
            action = "new" if transition.is_new else "union with existing"
            lines.append(f"  {transition.source} → {transition.target}: "
                         f"{render(transition.label, implicit_concat)} ({action})")
        return "\n".join(lines)


def preview(automaton, state_id):
    """Compute the elimination record for ``state_id`` without touching the automaton."""
    if automaton.get_state(state_id) is None:
        raise InvalidSelection(state_id, "Unknown state")

    incoming = automaton.incoming_of(state_id)
    outgoing = automaton.outgoing_of(state_id)
    self_loop = automaton.self_loop_of(state_id)
    loop = star(self_loop.label) if self_loop else Epsilon()

    new_transitions = []
    for in_trans in incoming:
        for out_trans in outgoing:
            path = concat(concat(in_trans.label, loop), out_trans.label)
            existing = None
            if (in_trans.source not in automaton.eliminated
                    and out_trans.target not in automaton.eliminated):
                existing = automaton.transition_between(in_trans.source, out_trans.target)
            label = union(existing.label, path) if existing else path
            new_transitions.append(NewTransition(
                in_trans.source, out_trans.target, simplify(label),
                is_new=existing is None, path=simplify(path)))

    return EliminationRecord(state_id, tuple(incoming), tuple(outgoing), self_loop,
                             tuple(new_transitions))


def apply(automaton, record):
    """Return the automaton after installing ``record``; the input is left as is."""
    result = automaton.copy(eliminated=automaton.eliminated | {record.state_id})
    result.remove_transitions_touching(record.state_id)
    for transition in record.new_transitions:
        result.set_transition(transition.source, transition.target, transition.label)
    l.debug("Eliminated %s: %d incoming, %d outgoing, %d new transitions",
            record.state_id, len(record.incoming), len(record.outgoing),
            len(record.new_transitions))
    return result


def complexity(automaton, state_id):
    """Rough cost of eliminating a state: paths created, self-loop and label sizes."""
    incoming = automaton.incoming_of(state_id)
    outgoing = automaton.outgoing_of(state_id)
    score = len(incoming) * len(outgoing)
    if automaton.self_loop_of(state_id):
        score += 2
    score += sum(len(t.text) for t in incoming)
    score += sum(len(t.text) for t in outgoing)
    return score


def eliminate_all(automaton, order=None):
    """Eliminate every intermediate state, in ``order`` or state order.

    Returns the final snapshot and the list of records applied.
    """
    if order is None:
        order = [state.id for state in automaton.intermediate_states()]
    records = []
    for state_id in order:
        blocker = automaton.elimination_blocker(state_id)
        if blocker:
            raise InvalidSelection(state_id, blocker)
        record = preview(automaton, state_id)
        automaton = apply(automaton, record)
        records.append(record)
    return automaton, records


def _fresh_id(automaton, base):
    taken = set(automaton.state_ids)
    candidate, n = base, 0
    while candidate in taken:
        n += 1
        candidate = f"{base}{n}"
    return candidate


def final_regex(automaton):
    """Regex for the language of ``automaton`` once its intermediates are gone.

    The remaining start and accept states are wrapped between a fresh start and
    a fresh accept state joined by ε and eliminated in turn.  With a start state
    that has no incoming edges and accept states without outgoing ones this is
    the union of the start → accept labels.
    """
    start = automaton.start_state
    accepts = automaton.accept_states
    if start is None or not accepts:
        return Empty()

    entry = _fresh_id(automaton, "start")
    exit_ = _fresh_id(automaton, "accept")
    wrapped = automaton.copy()
    wrapped.states = [State(s.id, s.x, s.y) for s in automaton.states]
    wrapped.states += [State(entry, is_start=True), State(exit_, is_accept=True)]
    wrapped.add_transition(entry, start.id, Epsilon())
    for state in accepts:
        wrapped.add_transition(state.id, exit_, Epsilon())

    order = [start.id] + [state.id for state in accepts if state.id != start.id]
    order += [state.id for state in automaton.active_states() if state.id not in order]
    for state_id in order:
        wrapped = apply(wrapped, preview(wrapped, state_id))

    transition = wrapped.transition_between(entry, exit_)
    return simplify(transition.label) if transition else Empty()


def counterexamples(automaton, expr, max_length):
    """Strings up to ``max_length`` on which the automaton and ``expr`` disagree."""
    return [word for word in automaton.words(max_length)
            if automaton.accepts(word) != matches(expr, word)]
