from nfa2regex.elimination import apply, eliminate_all, final_regex, preview
from nfa2regex.session import ConversionSession
from nfa2regex.visualize import (check_strings_table, elimination_table, step_log_table,
                                 transition_table, visualize_automaton)


class TestDiagram:
    """Tests for the Graphviz rendering."""

    def test_states_and_edges(self, nfa1):
        source = visualize_automaton(nfa1, "Complex NFA 1").source
        assert "doublecircle" in source
        assert "q6" in source
        assert "__start__ -> q0" in source

    def test_eliminated_state_faded(self, nfa1):
        result = apply(nfa1, preview(nfa1, "q1"))
        source = visualize_automaton(result, "after q1").source
        assert "dashed" in source

    def test_preview_highlight(self, nfa1):
        record = preview(nfa1, "q4")
        source = visualize_automaton(nfa1, "preview", record=record, selected="q4").source
        assert "constraint=false" in source
        assert "#10b981" in source
        assert "#8b5cf6" in source

    def test_rankdir_and_implicit_concat(self, nfa1):
        result = apply(nfa1, preview(nfa1, "q1"))
        source = visualize_automaton(result, "tb", rankdir="TB", implicit_concat=True).source
        assert "rankdir=TB" in source
        assert "label=aa" in source


class TestTables:
    """Tests for the DataFrames shown next to the diagram."""

    def test_transition_table(self, nfa1):
        table = transition_table(nfa1)
        assert list(table.columns) == ["From", "To", "Label", "Type"]
        assert len(table) == len(nfa1.transitions)
        assert (table["Type"] == "self-loop").sum() == 1

    def test_elimination_table(self, chain):
        table = elimination_table(preview(chain, "q"))
        assert list(table.columns) == ["From", "Via", "To", "Self-loop", "Path", "Result", "Status"]
        row = table.iloc[0]
        assert (row["From"], row["Via"], row["To"]) == ("p", "q", "r")
        assert row["Result"] == "c|a·b"
        assert row["Status"] == "Union with existing"

    def test_step_log_table(self, nfa1):
        session = ConversionSession(nfa1)
        session.start()
        session.eliminate("q1")
        table = step_log_table(session.get_step_log())
        assert list(table["Step"]) == [0, 1]
        assert list(table["Title"]) == ["Initial NFA", "Eliminated state q1"]

    def test_check_strings_table(self, nfa1):
        table = check_strings_table(nfa1)
        assert list(table.columns) == ["String", "Expected", "NFA"]
        assert (table["NFA"] == table["Expected"]).all()
        assert "ε" in list(table["String"])

    def test_check_strings_table_with_regex(self, nfa1):
        automaton, _ = eliminate_all(nfa1)
        table = check_strings_table(nfa1, final_regex(automaton))
        assert (table["Regex"] == table["Expected"]).all()
