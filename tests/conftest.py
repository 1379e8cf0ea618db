import pytest

from nfa2regex.automaton import Automaton, State, Transition
from nfa2regex.catalog import get_sample, load_catalog
from nfa2regex.regex import parse


def build(start, accepts, edges, intermediates=()):
    """Small automaton from (source, label, target) triples."""
    ids = [start] + [s for s in intermediates] + [a for a in accepts if a != start]
    states = [State(i, is_start=(i == start), is_accept=(i in accepts)) for i in ids]
    transitions = [Transition(source, target, parse(label)) for source, label, target in edges]
    return Automaton(states, transitions)


@pytest.fixture
def nfa1():
    """Complex NFA 1: q0 start, q6 accept, q1..q5 intermediate."""
    return get_sample(0)


@pytest.fixture
def nfa2():
    """Complex NFA 2: has a self-loop on the start state."""
    return get_sample(1)


@pytest.fixture
def catalog():
    return load_catalog()


@pytest.fixture
def chain():
    """p -a-> q -b-> r with a direct p -c-> r."""
    return build("p", ["r"], [("p", "a", "q"), ("q", "b", "r"), ("p", "c", "r")], intermediates=["q"])
