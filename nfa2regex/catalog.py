"""Sample automata offered by the application."""

from .automaton import Automaton

SAMPLES = [
    {
        "id": 0,
        "name": "Complex NFA 1",
        "description": "NFA with multiple intermediate states and branching paths",
        "states": [
            {"id": "q0", "x": 80, "y": 200, "isStart": True, "isAccept": False},
            {"id": "q1", "x": 200, "y": 120, "isStart": False, "isAccept": False},
            {"id": "q2", "x": 200, "y": 280, "isStart": False, "isAccept": False},
            {"id": "q3", "x": 320, "y": 120, "isStart": False, "isAccept": False},
            {"id": "q4", "x": 320, "y": 200, "isStart": False, "isAccept": False},
            {"id": "q5", "x": 320, "y": 280, "isStart": False, "isAccept": False},
            {"id": "q6", "x": 480, "y": 200, "isStart": False, "isAccept": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q1", "label": "a"},
            {"from": "q0", "to": "q2", "label": "b"},
            {"from": "q1", "to": "q3", "label": "a"},
            {"from": "q1", "to": "q4", "label": "b"},
            {"from": "q2", "to": "q4", "label": "a"},
            {"from": "q2", "to": "q5", "label": "b"},
            {"from": "q3", "to": "q6", "label": "a,b"},
            {"from": "q4", "to": "q4", "label": "a"},
            {"from": "q4", "to": "q6", "label": "b"},
            {"from": "q5", "to": "q6", "label": "a,b"},
        ],
        "alphabet": ["a", "b"],
        "testStrings": {
            "accepting": ["aaa", "aab", "abb", "bab", "bba", "bbb"],
            "rejecting": ["", "a", "b", "ab", "ba", "baa"],
        },
    },
    {
        "id": 1,
        "name": "Complex NFA 2",
        "description": "NFA with loops and multiple elimination options",
        "states": [
            {"id": "q0", "x": 80, "y": 200, "isStart": True, "isAccept": False},
            {"id": "q1", "x": 200, "y": 140, "isStart": False, "isAccept": False},
            {"id": "q2", "x": 200, "y": 260, "isStart": False, "isAccept": False},
            {"id": "q3", "x": 320, "y": 140, "isStart": False, "isAccept": False},
            {"id": "q4", "x": 320, "y": 260, "isStart": False, "isAccept": False},
            {"id": "q5", "x": 440, "y": 200, "isStart": False, "isAccept": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q0", "label": "a"},
            {"from": "q0", "to": "q1", "label": "b"},
            {"from": "q0", "to": "q2", "label": "a"},
            {"from": "q1", "to": "q1", "label": "b"},
            {"from": "q1", "to": "q3", "label": "a"},
            {"from": "q2", "to": "q4", "label": "b"},
            {"from": "q2", "to": "q2", "label": "a"},
            {"from": "q3", "to": "q5", "label": "a"},
            {"from": "q4", "to": "q5", "label": "b"},
            {"from": "q4", "to": "q3", "label": "a"},
        ],
        "alphabet": ["a", "b"],
        "testStrings": {
            "accepting": ["baa", "abb", "aabb", "bbaa", "abaa", "aabaa"],
            "rejecting": ["", "a", "b", "aa", "bb", "ba"],
        },
    },
    {
        "id": 2,
        "name": "Complex NFA 3",
        "description": "NFA with diamond structure and multiple convergent paths",
        "states": [
            {"id": "q0", "x": 80, "y": 200, "isStart": True, "isAccept": False},
            {"id": "q1", "x": 200, "y": 100, "isStart": False, "isAccept": False},
            {"id": "q2", "x": 200, "y": 180, "isStart": False, "isAccept": False},
            {"id": "q3", "x": 200, "y": 260, "isStart": False, "isAccept": False},
            {"id": "q4", "x": 320, "y": 140, "isStart": False, "isAccept": False},
            {"id": "q5", "x": 320, "y": 220, "isStart": False, "isAccept": False},
            {"id": "q6", "x": 440, "y": 180, "isStart": False, "isAccept": False},
            {"id": "q7", "x": 560, "y": 180, "isStart": False, "isAccept": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q1", "label": "a"},
            {"from": "q0", "to": "q2", "label": "b"},
            {"from": "q0", "to": "q3", "label": "a"},
            {"from": "q1", "to": "q4", "label": "b"},
            {"from": "q2", "to": "q4", "label": "a"},
            {"from": "q2", "to": "q5", "label": "b"},
            {"from": "q3", "to": "q5", "label": "a"},
            {"from": "q4", "to": "q6", "label": "a"},
            {"from": "q4", "to": "q4", "label": "b"},
            {"from": "q5", "to": "q6", "label": "b"},
            {"from": "q5", "to": "q5", "label": "a"},
            {"from": "q6", "to": "q7", "label": "a,b"},
        ],
        "alphabet": ["a", "b"],
        "testStrings": {
            "accepting": ["abaa", "baab", "aaba", "bbbb", "abbab", "aaabb"],
            "rejecting": ["", "a", "b", "ab", "ba", "aa", "aba"],
        },
    },
    {
        "id": 3,
        "name": "Challenging NFA",
        "description": "Advanced NFA with intricate state relationships and elimination challenges",
        "states": [
            {"id": "q0", "x": 80, "y": 200, "isStart": True, "isAccept": False},
            {"id": "q1", "x": 180, "y": 120, "isStart": False, "isAccept": False},
            {"id": "q2", "x": 180, "y": 200, "isStart": False, "isAccept": False},
            {"id": "q3", "x": 180, "y": 280, "isStart": False, "isAccept": False},
            {"id": "q4", "x": 300, "y": 120, "isStart": False, "isAccept": False},
            {"id": "q5", "x": 300, "y": 200, "isStart": False, "isAccept": False},
            {"id": "q6", "x": 300, "y": 280, "isStart": False, "isAccept": False},
            {"id": "q7", "x": 420, "y": 160, "isStart": False, "isAccept": False},
            {"id": "q8", "x": 520, "y": 200, "isStart": False, "isAccept": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q1", "label": "a"},
            {"from": "q0", "to": "q2", "label": "b"},
            {"from": "q1", "to": "q4", "label": "a"},
            {"from": "q1", "to": "q2", "label": "b"},
            {"from": "q2", "to": "q2", "label": "a"},
            {"from": "q2", "to": "q3", "label": "b"},
            {"from": "q2", "to": "q5", "label": "a"},
            {"from": "q3", "to": "q6", "label": "a"},
            {"from": "q4", "to": "q7", "label": "b"},
            {"from": "q4", "to": "q4", "label": "a"},
            {"from": "q5", "to": "q7", "label": "a"},
            {"from": "q5", "to": "q6", "label": "b"},
            {"from": "q6", "to": "q7", "label": "b"},
            {"from": "q6", "to": "q6", "label": "a"},
            {"from": "q7", "to": "q8", "label": "a,b"},
        ],
        "alphabet": ["a", "b"],
        "testStrings": {
            "accepting": ["aaba", "aaabb", "baaa", "abaab", "bbabb", "babba"],
            "rejecting": ["", "a", "b", "aa", "bb", "ab", "aab"],
        },
    },
]


def load_catalog():
    """Validated automata for every sample, in catalog order."""
    return [Automaton.from_dict(sample).validate() for sample in SAMPLES]


def get_sample(sample_id):
    """A fresh automaton for the sample with the given id."""
    for sample in SAMPLES:
        if sample["id"] == sample_id:
            return Automaton.from_dict(sample).validate()
    raise KeyError(f"No sample automaton with id {sample_id}")
