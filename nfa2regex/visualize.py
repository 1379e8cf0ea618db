"""Graphviz diagrams and pandas tables for the user interface."""

import graphviz
import pandas as pd

from .regex import matches, render

COLORS = {
    "default": "#374151",
    "incoming": "#10b981",
    "outgoing": "#f59e0b",
    "self-loop": "#8b5cf6",
    "new": "#ef4444",
    "eliminated": "#d1d5db",
    "start": "#dbeafe",
    "accept": "#dcfce7",
    "selected": "#fde68a",
}


def _edge_role(transition, record):
    if record is None:
        return "default"
    if transition.is_self_loop and transition.source == record.state_id:
        return "self-loop"
    if transition.target == record.state_id:
        return "incoming"
    if transition.source == record.state_id:
        return "outgoing"
    return "default"


def visualize_automaton(automaton, title, record=None, selected=None, rankdir="LR", implicit_concat=False):
    """Create a graphical representation of a snapshot using Graphviz.

    Eliminated states are drawn faded; when an elimination ``record`` is given
    its incoming, outgoing and self-loop edges are highlighted and the
    transitions it would install are drawn dashed.
    """
    dot = graphviz.Digraph(comment=title)
    dot.attr(rankdir=rankdir)
    dot.attr("node", fontname="Helvetica")
    dot.attr("edge", fontname="Helvetica")

    for state in automaton.states:
        attrs = {"shape": "doublecircle" if state.is_accept else "circle", "style": "filled"}
        if state.id in automaton.eliminated:
            attrs.update(style="dashed", color=COLORS["eliminated"], fontcolor=COLORS["eliminated"])
        elif state.id == selected or (record is not None and state.id == record.state_id):
            attrs["fillcolor"] = COLORS["selected"]
        elif state.is_start:
            attrs["fillcolor"] = COLORS["start"]
        elif state.is_accept:
            attrs["fillcolor"] = COLORS["accept"]
        else:
            attrs["fillcolor"] = "#f9fafb"
        dot.node(state.id, **attrs)

    start = automaton.start_state
    if start is not None:
        dot.node("__start__", shape="none", label="")
        dot.edge("__start__", start.id)

    for transition in automaton.transitions:
        role = _edge_role(transition, record)
        attrs = {"label": render(transition.label, implicit_concat), "color": COLORS[role]}
        if role != "default":
            attrs["penwidth"] = "2.5"
        dot.edge(transition.source, transition.target, **attrs)

    if record is not None:
        for transition in record.new_transitions:
            dot.edge(transition.source, transition.target,
                     label=render(transition.label, implicit_concat),
                     color=COLORS["new"], fontcolor=COLORS["new"], style="dashed", constraint="false")
    return dot


def transition_table(automaton, implicit_concat=False):
    """Transitions of a snapshot as a DataFrame."""
    rows = [
        {
            "From": t.source,
            "To": t.target,
            "Label": render(t.label, implicit_concat),
            "Type": "self-loop" if t.is_self_loop else "normal",
        }
        for t in automaton.transitions
    ]
    return pd.DataFrame(rows, columns=["From", "To", "Label", "Type"])


def elimination_table(record, implicit_concat=False):
    """One row per path rewritten by an elimination."""
    loop = render(record.self_loop.label, implicit_concat) if record.self_loop else "-"
    rows = [
        {
            "From": t.source,
            "Via": record.state_id,
            "To": t.target,
            "Self-loop": loop,
            "Path": render(t.path, implicit_concat) if t.path is not None else "",
            "Result": render(t.label, implicit_concat),
            "Status": "New" if t.is_new else "Union with existing",
        }
        for t in record.new_transitions
    ]
    return pd.DataFrame(rows, columns=["From", "Via", "To", "Self-loop", "Path", "Result", "Status"])


def step_log_table(steps):
    return pd.DataFrame(
        [{"Step": s.index, "Title": s.title, "Description": s.description, "Regex": s.regex or ""}
         for s in steps],
        columns=["Step", "Title", "Description", "Regex"],
    )


def check_strings_table(automaton, regex=None):
    """Check the declared test strings against the automaton and, if given, the regex."""
    rows = []
    for expected, words in (("Accept", automaton.test_strings.get("accepting", [])),
                            ("Reject", automaton.test_strings.get("rejecting", []))):
        for word in words:
            row = {
                "String": f'"{word}"' if word else "ε",
                "Expected": expected,
                "NFA": "Accept" if automaton.accepts(word) else "Reject",
            }
            if regex is not None:
                row["Regex"] = "Accept" if matches(regex, word) else "Reject"
            rows.append(row)
    columns = ["String", "Expected", "NFA"] + (["Regex"] if regex is not None else [])
    return pd.DataFrame(rows, columns=columns)
