"""
Answer Presence - Explicit optionality for a submitted answer set.

Purpose:
    Collapses "answers may be None, empty, or populated" into a finite
    enum so that the validator's presence check branches exhaustively
    instead of relying on scattered None/emptiness tests.

Design Constraints:
    - Pure, total, deterministic function
    - Never raises exceptions
    - No side effects, no logging
"""

from enum import Enum
from typing import Optional

from craq.contracts import AnswerSet


class AnswerPresence(Enum):
    """
    Presence state of a submitted answer set.

    Values:
        MISSING: No answer set was submitted at all (None).
        EMPTY:   An answer set was submitted but holds no entries.
        PRESENT: At least one answer was submitted.

    MISSING and EMPTY are reported identically by the validator (every
    question WAS_NOT_ANSWERED); they stay distinct here so callers and
    logs can tell them apart.
    """
    MISSING = "missing"
    EMPTY = "empty"
    PRESENT = "present"


def assess_answer_presence(answers: Optional[AnswerSet]) -> AnswerPresence:
    """
    Classify an answer set.

    Args:
        answers: AnswerSet or None

    Returns:
        AnswerPresence: MISSING for None, EMPTY for no entries, else PRESENT
    """
    if answers is None:
        return AnswerPresence.MISSING

    if len(answers) == 0:
        return AnswerPresence.EMPTY

    return AnswerPresence.PRESENT
