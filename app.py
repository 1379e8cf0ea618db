import streamlit as st
import io
import json
import logging
import sys
from datetime import datetime, timezone
import pandas as pd
import warnings
warnings.filterwarnings('ignore')

from nfa2regex.catalog import SAMPLES, get_sample
from nfa2regex.config import Settings
from nfa2regex.elimination import complexity, counterexamples
from nfa2regex.errors import ConversionError
from nfa2regex.regex import matches, render
from nfa2regex.session import ConversionSession, Eliminate, Reset, Select, Start, Status, StepBack
from nfa2regex.visualize import (check_strings_table, elimination_table, step_log_table,
                                 transition_table, visualize_automaton)

settings = Settings.from_env()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


def capture_display(display_func):
    """Capture the output of the display functions."""
    old_stdout = sys.stdout
    new_stdout = io.StringIO()
    sys.stdout = new_stdout
    try:
        display_func()
    finally:
        sys.stdout = old_stdout
    return new_stdout.getvalue()


def fmt(expr):
    """Render a fragment with the configured concatenation style."""
    return render(expr, settings.implicit_concat)


def get_session(sample_id):
    """The session for the selected sample; switching samples discards the old one."""
    if st.session_state.get("sample_id") != sample_id or "session" not in st.session_state:
        st.session_state.sample_id = sample_id
        st.session_state.session = ConversionSession(get_sample(sample_id))
        st.session_state.feedback = ("info", 'Click "Start Conversion" to begin')
    return st.session_state.session


def run_command(command):
    """Apply a command to the current session and keep its outcome for display."""
    session = st.session_state.session
    result = session.apply_command(command)
    if not result:
        st.session_state.feedback = ("error", result.message)
    elif result.event == "completed":
        st.session_state.feedback = ("success", f"Conversion completed! Final regex: {fmt(result.final_regex)}")
    elif result.event == "eliminated":
        st.session_state.feedback = ("success", f"State {result.record.state_id} eliminated successfully!")
    elif result.event == "stepped_back":
        st.session_state.feedback = ("info", "Stepped back to the previous step")
    elif result.event == "started":
        st.session_state.feedback = ("info", "Conversion started! Pick intermediate states to eliminate them.")
    elif result.event == "reset":
        st.session_state.feedback = ("info", 'Click "Start Conversion" to begin')
    elif result.event == "selected":
        st.session_state.feedback = ("info", f"Selected {command.state_id} for elimination")


def explore_random():
    session = st.session_state.session
    state_id = session.suggest_state()
    if state_id is None:
        st.session_state.feedback = ("info", "No states available to eliminate")
    else:
        run_command(Select(state_id))


def show_feedback():
    kind, message = st.session_state.get("feedback", ("info", ""))
    if message:
        getattr(st, kind)(message)


def render_controls(session):
    st.markdown("### Controls")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.button("▶ Start Conversion", on_click=run_command, args=(Start(),),
                  disabled=session.status is not Status.NOT_STARTED, use_container_width=True)
    with col2:
        st.button("✂ Eliminate Selected", on_click=run_command, args=(Eliminate(),),
                  disabled=session.selected is None, use_container_width=True)
    with col3:
        st.button("↶ Step Back", on_click=run_command, args=(StepBack(),),
                  disabled=not session.can_step_back, use_container_width=True)
    with col4:
        st.button("⟲ Reset", on_click=run_command, args=(Reset(),),
                  disabled=session.status is Status.NOT_STARTED, use_container_width=True)

    if session.status is Status.IN_PROGRESS:
        available = session.available_states()
        if available:
            current = session.selected if session.selected in available else None
            choice = st.radio(
                "Select a state to eliminate:",
                available,
                index=available.index(current) if current else None,
                horizontal=True,
                format_func=lambda s: f"{s} (cost {complexity(session.automaton, s)})",
                help="Start and accept states can never be eliminated.",
            )
            if choice is not None and choice != session.selected:
                run_command(Select(choice))
                st.rerun()
        hint_col, random_col = st.columns(2)
        with hint_col:
            if st.button("💡 Strategy Hint", use_container_width=True):
                st.session_state.feedback = ("info", f"💡 Hint: {session.hint()}")
        with random_col:
            st.button("🎲 Explore Random", on_click=explore_random, use_container_width=True)


def render_automaton(session, sample):
    record = None
    if session.selected is not None:
        record = session.get_elimination_preview(session.selected)

    col1, col2 = st.columns([1, 2])
    with col1:
        st.markdown("### NFA Details:")
        st.code(capture_display(session.automaton.display), language="text")
        st.write("#### Transition Table:")
        st.table(transition_table(session.automaton, settings.implicit_concat))
    with col2:
        st.markdown("### NFA Visualization:")
        dot = visualize_automaton(session.automaton, sample.name, record=record,
                                  selected=session.selected, rankdir=settings.graph_rankdir,
                                  implicit_concat=settings.implicit_concat)
        st.graphviz_chart(dot, use_container_width=True)
        st.caption("Double circles are accepting states. Faded dashed states have been eliminated. "
                   "While a state is selected, incoming edges are green, outgoing orange, "
                   "self-loops purple and the replacement transitions dashed red.")

    if record is not None:
        st.subheader(f"Elimination Preview: {record.state_id}")
        st.markdown(f"""
        - **Incoming transitions:** {len(record.incoming)}
        - **Outgoing transitions:** {len(record.outgoing)}
        - **Self-loop:** {fmt(record.self_loop.label) if record.self_loop else 'none'}
        - **Paths to rewrite:** {record.path_count}
        """)
        if record.new_transitions:
            st.table(elimination_table(record, settings.implicit_concat))
        else:
            st.warning(f"No path runs through {record.state_id}: eliminating it only removes its transitions.")


def render_result(session, sample):
    st.subheader("Conversion Steps")
    if session.steps:
        st.table(step_log_table(session.get_step_log()))
    else:
        st.info("Conversion not started")

    st.subheader("Final Regular Expression")
    final_regex = session.get_final_regex()
    if final_regex is None:
        st.info("Conversion in progress..." if session.status is Status.IN_PROGRESS else "Conversion not started")
        return

    display_regex = fmt(final_regex).replace('*', '\\*')
    st.write("## ", display_regex)
    mismatches = counterexamples(session.source, final_regex, settings.max_test_length)
    if mismatches:
        st.error(f"The regex disagrees with the NFA on: {', '.join(repr(w) for w in mismatches[:10])}")
    else:
        st.success(f"Verified: the regex and the NFA agree on every string up to length {settings.max_test_length}.")

    with st.expander("Declared test strings"):
        st.table(check_strings_table(session.source, final_regex))

    export = session.export()
    export["timestamp"] = datetime.now(timezone.utc).isoformat()
    st.download_button(
        "📤 Export Results",
        data=json.dumps(export, indent=2, ensure_ascii=False),
        file_name=f"nfa-to-regex-conversion-{sample.sample_id}.json",
        mime="application/json",
    )


def render_string_tester(session):
    st.subheader("Test a String")
    st.markdown("""
    Enter any string to test whether the original NFA accepts it and, once the conversion is complete,
    whether the final regular expression matches it.
    """)
    test_string = st.text_input("Enter a string to test:",
                                help="Use only symbols from the alphabet. Leave empty to test the empty string.")
    if test_string is None:
        return
    invalid_chars = sorted(set(test_string) - set(session.source.alphabet))
    if invalid_chars:
        st.error(f"Error: Symbol(s) {', '.join(invalid_chars)} not in the alphabet {session.source.alphabet}")
        return
    label = f"'{test_string}'" if test_string else "The empty string"
    accepted = session.source.accepts(test_string)
    st.write(f"{label} is **{'ACCEPTED' if accepted else 'REJECTED'}** by the NFA.")
    final_regex = session.get_final_regex()
    if final_regex is not None:
        matched = matches(final_regex, test_string)
        st.write(f"{label} is **{'ACCEPTED' if matched else 'REJECTED'}** by {fmt(final_regex)}.")


def main():
    st.set_page_config(
        page_title="NFA to Regular Expression | State Elimination",
        page_icon="🧠",
        layout="wide"
    )

    st.title("NFA to Regular Expression: State Elimination")
    st.markdown("""
    This interactive tool converts a Non-deterministic Finite Automaton into an equivalent regular expression
    with the **state elimination** algorithm. Pick the intermediate states to remove one at a time, inspect how
    every path through a removed state is rewritten as a regex, step back to try another order, and compare
    the final expression against the original automaton.
    """)

    with st.sidebar:
        st.header("📚 State Elimination Guide")
        st.markdown("""
        ### How it works
        To eliminate a state **q** with self-loop **R2**, every pair of an incoming edge **p →(R1) q**
        and an outgoing edge **q →(R3) r** becomes a direct edge **p →(R1·R2*·R3) r**.
        If **p → r** already exists, the labels are joined with a union.

        Start and accept states are never eliminated. When only they remain, the labels from the start
        state to the accept states give the final regular expression.

        ### Notation:
        - `|` for union/alternation (OR)
        - `·` for concatenation
        - `*` for Kleene star (zero or more repetitions)
        - `ε` for the empty string, `∅` for the empty language
        """)

    sample_names = {sample["id"]: sample["name"] for sample in SAMPLES}
    default_index = settings.default_sample if settings.default_sample in sample_names else 0
    sample_id = st.selectbox(
        "Select an NFA:",
        options=list(sample_names),
        index=list(sample_names).index(default_index),
        format_func=lambda i: f"{sample_names[i]}",
    )

    try:
        session = get_session(sample_id)
    except ConversionError as e:
        st.error(f"Error loading NFA: {str(e)}")
        return
    sample = session.source
    st.caption(sample.description)

    show_feedback()
    render_controls(session)
    render_automaton(session, sample)
    render_result(session, sample)
    render_string_tester(session)

    with st.sidebar:
        st.header("💡 Theoretical Insights")
        with st.expander("Why does the order matter?"):
            st.markdown("""
            Every elimination order yields a regular expression for the same language, but the expressions
            can look very different. Eliminating states with few connections first usually keeps the
            labels short; states with self-loops add starred factors to every path through them.
            """)
        with st.expander("Alphabet and test strings"):
            st.table(pd.DataFrame({"Alphabet": sample.alphabet}))
            st.table(check_strings_table(sample))


if __name__ == "__main__":
    main()
