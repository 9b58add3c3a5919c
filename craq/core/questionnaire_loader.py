"""
Questionnaire Loader - Build Question tuples from JSON definitions

Responsibilities:
- Read questionnaire definition files
- Check document structure before building contracts
- Convert option/question dicts into frozen Option/Question objects

Fail fast: every structural problem in a document is collected and
reported in a single ValueError, so a broken definition is fixed in one
pass instead of one error at a time.

Document format:
    {
        "questions": [
            {
                "text": "Have you had a security audit?",
                "options": [
                    {"text": "Yes"},
                    {"text": "No", "complete_if_selected": true}
                ]
            }
        ]
    }

A bare top-level list is accepted as the questions array, and the
camelCase 'completeIfSelected' spelling is accepted as an alias.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Tuple, Union

from craq.contracts import Option, Question

logger = logging.getLogger(__name__)


COMPLETE_IF_SELECTED_KEYS = ("complete_if_selected", "completeIfSelected")


def load_questionnaire(path: Union[str, Path]) -> Tuple[Question, ...]:
    """
    Load and validate a questionnaire definition file.

    Args:
        path: Path to questionnaire JSON

    Returns:
        tuple[Question, ...]: Questions in questionnaire order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not JSON or the structure is malformed
    """
    questionnaire_path = Path(path)

    if not questionnaire_path.exists():
        raise FileNotFoundError(f"Questionnaire not found: {path}")

    with open(questionnaire_path, 'r', encoding='utf-8') as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Questionnaire {path} is not valid JSON: {e}") from e

    questions = parse_questionnaire(document)
    logger.info(f"Loaded questionnaire {questionnaire_path.name} with {len(questions)} questions")
    return questions


def parse_questionnaire(document: Any) -> Tuple[Question, ...]:
    """
    Build questions from an already-decoded document.

    Args:
        document: Dict with a 'questions' list, or the list itself

    Returns:
        tuple[Question, ...]: Questions in questionnaire order

    Raises:
        ValueError: If validation fails (message lists every problem)
    """
    raw_questions = document.get("questions") if isinstance(document, dict) else document

    errors = _validate_questionnaire(document, raw_questions)
    if errors:
        error_msg = "Questionnaire validation failed:\n  - " + "\n  - ".join(errors)
        raise ValueError(error_msg)

    return tuple(_build_question(raw) for raw in raw_questions)


# =========================================================================
# Construction
# =========================================================================

def _complete_flag(raw_option: dict) -> bool:
    """Completion flag of an option. Absent or null means False."""
    for name in COMPLETE_IF_SELECTED_KEYS:
        if raw_option.get(name) is not None:
            return raw_option[name]
    return False


def _build_question(raw_question: dict) -> Question:
    options = tuple(
        Option(
            complete_if_selected=_complete_flag(raw_option),
            text=raw_option.get("text"),
        )
        for raw_option in raw_question["options"]
    )
    return Question(options=options, text=raw_question.get("text"))


# =========================================================================
# Validation
# =========================================================================

def _validate_questionnaire(document: Any, raw_questions: Any) -> List[str]:
    """
    Check questionnaire structure.

    Checks:
    - Document is an object with 'questions' or a list
    - 'questions' is a list
    - Every question is an object with an 'options' list
    - Every option is an object
    - Completion flags, if set, are booleans (null counts as unset)

    Option content beyond the flag, such as 'text', is not checked.

    Returns:
        list[str]: Problems found (empty if valid)
    """
    errors = []

    if isinstance(document, dict):
        if "questions" not in document:
            errors.append("Missing 'questions' in questionnaire")
            return errors
    elif not isinstance(document, list):
        errors.append(
            f"Questionnaire must be an object or a list, got {type(document).__name__}"
        )
        return errors

    if not isinstance(raw_questions, list):
        errors.append(f"'questions' must be a list, got {type(raw_questions).__name__}")
        return errors

    for i, question in enumerate(raw_questions):
        if not isinstance(question, dict):
            errors.append(f"Question at index {i} must be an object")
            continue

        if "options" not in question:
            errors.append(f"Question at index {i} missing 'options'")
            continue

        options = question["options"]
        if not isinstance(options, list):
            errors.append(f"Question at index {i} 'options' must be a list")
            continue

        for j, option in enumerate(options):
            if not isinstance(option, dict):
                errors.append(f"Option {j} of question {i} must be an object")
                continue

            present = [name for name in COMPLETE_IF_SELECTED_KEYS if option.get(name) is not None]
            if len(present) > 1:
                errors.append(
                    f"Option {j} of question {i} sets both "
                    f"'{present[0]}' and '{present[1]}'"
                )
            for name in present:
                if not isinstance(option[name], bool):
                    errors.append(f"Option {j} of question {i} '{name}' must be a boolean")

    return errors
