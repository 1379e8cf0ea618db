import pytest

from nfa2regex.automaton import Automaton
from nfa2regex.catalog import SAMPLES, get_sample, load_catalog


class TestCatalog:
    """Tests for the bundled sample automata."""

    def test_load_catalog(self, catalog):
        assert [a.sample_id for a in catalog] == [0, 1, 2, 3]
        assert all(isinstance(a, Automaton) for a in catalog)

    def test_names(self, catalog):
        assert [a.name for a in catalog] == ["Complex NFA 1", "Complex NFA 2", "Complex NFA 3",
                                              "Challenging NFA"]

    def test_unknown_sample(self):
        with pytest.raises(KeyError):
            get_sample(99)

    def test_samples_are_fresh(self):
        first = get_sample(0)
        first.remove_transitions_touching("q1")
        assert get_sample(0).incoming_of("q1")

    @pytest.mark.parametrize("sample", SAMPLES, ids=lambda s: s["name"])
    def test_shape(self, sample):
        """One start state, one accept state, binary alphabet."""
        automaton = Automaton.from_dict(sample)
        assert automaton.start_state is not None
        assert len(automaton.accept_states) == 1
        assert automaton.alphabet == ["a", "b"]
        assert automaton.intermediate_states()

    @pytest.mark.parametrize("sample", SAMPLES, ids=lambda s: s["name"])
    def test_declared_strings_agree_with_simulation(self, sample):
        automaton = Automaton.from_dict(sample)
        assert all(automaton.accepts(w) for w in sample["testStrings"]["accepting"])
        assert not any(automaton.accepts(w) for w in sample["testStrings"]["rejecting"])

    def test_catalog_matches_get_sample(self):
        assert load_catalog() == [get_sample(s["id"]) for s in SAMPLES]
