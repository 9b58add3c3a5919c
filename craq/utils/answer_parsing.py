"""
Build AnswerSets from raw submitted answers.

Raw answers arrive as JSON-style mappings keyed by label:

    {"q0": 0, "q1": 2}

Keys that are not question labels cannot join to any question and are
dropped with a warning. Values are kept as-is; the validator reports
anything that is not an in-range int as NOT_VALID_ANSWER.
"""

import logging
from typing import Any, Mapping, Optional

from craq.contracts import AnswerSet, QuestionKey

logger = logging.getLogger(__name__)


def parse_answers(raw_answers: Optional[Mapping[str, Any]]) -> Optional[AnswerSet]:
    """
    Convert a raw label-keyed mapping into an AnswerSet.

    Args:
        raw_answers: Mapping of label to option index, or None

    Returns:
        AnswerSet, or None when raw_answers is None (answers missing)

    Raises:
        TypeError: If raw_answers is neither None nor a mapping
    """
    if raw_answers is None:
        return None

    if not isinstance(raw_answers, Mapping):
        raise TypeError(
            f"Answers must be a mapping of question key to option index, "
            f"got {type(raw_answers).__name__}"
        )

    answers = {}
    ignored = []

    for label, value in raw_answers.items():
        try:
            key = QuestionKey.from_label(label)
        except ValueError:
            ignored.append(label)
            continue
        answers[key] = value

    if ignored:
        logger.warning(f"Ignoring answers with unrecognised question keys: {ignored}")

    return AnswerSet.from_dict(answers)
