"""
Answer Validator - Sequential validation of CRAQ questionnaire answers

Responsibilities:
- Presence check: report every question unanswered when no answers exist
- Classify each question's answer in questionnaire order
- Track whether an earlier answer already completed the questionnaire

Design principles:
- Stateless: validate_answers() is a pure function of its inputs
- Deterministic: Same input always produces same output
- Explicit fold: the terminal flag is a left scan over the questions,
  each question is then classified from the flag in force before it
- Linear: one pass, constant work per question
- Never raises for bad answers: findings are returned as data

Classification order per question (termination before range):
1. Answered after a terminal answer   -> ANSWER_FOR_COMPLETED_QUESTION
2. Answered, index in range           -> valid; selected option may terminate
3. Answered, index out of range       -> NOT_VALID_ANSWER
4. Unanswered, not yet terminated     -> WAS_NOT_ANSWERED
5. Unanswered after termination       -> no error
"""

import logging
from itertools import accumulate
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from craq.contracts import AnswerSet, Question, QuestionKey
from craq.results import ValidationErrorKind, ValidationResult
from craq.utils.answer_parsing import parse_answers
from craq.utils.answer_presence import AnswerPresence, assess_answer_presence

logger = logging.getLogger(__name__)


LOWEST_POSSIBLE_ANSWER = 0

Answers = Union[AnswerSet, Mapping[str, Any], None]


# =========================================================================
# Public API
# =========================================================================

def validate_answers(questions: Sequence[Question], answers: Answers) -> ValidationResult:
    """
    Validate an answer set against an ordered questionnaire.

    Args:
        questions: Questions in questionnaire order
        answers: AnswerSet, a raw label-keyed mapping ({'q0': 0, ...}),
                 or None if no answers were submitted

    Returns:
        ValidationResult: errors keyed by QuestionKey; valid iff no errors

    Raises:
        TypeError: If answers is neither None, an AnswerSet nor a mapping
    """
    answers = _as_answer_set(answers)
    presence = assess_answer_presence(answers)

    if presence is not AnswerPresence.PRESENT:
        logger.info(f"Answers {presence.value}: marking all {len(questions)} questions unanswered")
        return ValidationResult(errors=_all_unanswered(questions))

    errors, terminated = _classify_questions(questions, answers)
    result = ValidationResult(errors=errors)
    logger.info(
        f"Validated {len(answers)} answers against {len(questions)} questions: "
        f"{len(result.errors)} errors, terminated={terminated}"
    )
    return result


def selected_option_index(question: Question, answer: Any) -> Optional[int]:
    """
    Resolve an answer to an option index of this question.

    Integral floats (1.0) count as their integer; booleans never count
    even though bool is an int subclass.

    Args:
        question: Question being answered
        answer: Submitted value

    Returns:
        int index in [0, option_count - 1], or None if not a valid answer
    """
    if isinstance(answer, bool):
        return None

    if isinstance(answer, float):
        if not answer.is_integer():
            return None
        answer = int(answer)

    if not isinstance(answer, int):
        return None

    highest_possible_answer = question.option_count - 1
    if LOWEST_POSSIBLE_ANSWER <= answer <= highest_possible_answer:
        return answer

    return None


def is_valid_answer(question: Question, answer: Any) -> bool:
    return selected_option_index(question, answer) is not None


class CraqValidator:
    """
    Validator bound to one questionnaire and one answer set.

    Holds no mutable state: every call re-runs validate_answers(), so
    errors and is_valid() always agree with each other.

    Example:
        >>> validator = CraqValidator(questions, {'q0': 0})
        >>> validator.is_valid()
        False
        >>> validator.errors
        mappingproxy({QuestionKey(position=1): <ValidationErrorKind.WAS_NOT_ANSWERED: ...>})
    """

    def __init__(self, questions: Sequence[Question], answers: Answers):
        self.questions = tuple(questions)
        self.answers = _as_answer_set(answers)

    def validate(self) -> ValidationResult:
        return validate_answers(self.questions, self.answers)

    def is_valid(self) -> bool:
        return self.validate().valid

    @property
    def errors(self):
        return self.validate().errors


# =========================================================================
# Fold steps
# =========================================================================

def _as_answer_set(answers: Answers) -> Optional[AnswerSet]:
    """Accept raw label-keyed mappings alongside AnswerSets."""
    if answers is None or isinstance(answers, AnswerSet):
        return answers
    return parse_answers(answers)


def _next_terminal_flag(
    has_terminal_answer: bool,
    indexed_question: Tuple[int, Question],
    answers: AnswerSet
) -> bool:
    """Terminal flag after this question. Once True it stays True."""
    if has_terminal_answer:
        return True

    index, question = indexed_question
    key = QuestionKey.from_position(index)
    if key not in answers:
        return False

    option_index = selected_option_index(question, answers[key])
    if option_index is None:
        return False

    return question.options[option_index].complete_if_selected


def _classify_question(
    has_terminal_answer: bool,
    key: QuestionKey,
    question: Question,
    answers: AnswerSet
) -> Optional[ValidationErrorKind]:
    """Classify one question given the flag in force before it."""
    answered = key in answers

    if has_terminal_answer and answered:
        logger.debug(f"{key}: answered after questionnaire completed")
        return ValidationErrorKind.ANSWER_FOR_COMPLETED_QUESTION

    if answered:
        if not is_valid_answer(question, answers[key]):
            logger.debug(f"{key}: answer {answers[key]!r} outside {question.option_count} options")
            return ValidationErrorKind.NOT_VALID_ANSWER
        return None

    if not has_terminal_answer:
        logger.debug(f"{key}: not answered")
        return ValidationErrorKind.WAS_NOT_ANSWERED

    return None


def _classify_questions(
    questions: Sequence[Question],
    answers: AnswerSet
) -> Tuple[Dict[QuestionKey, ValidationErrorKind], bool]:
    """
    Fold over the questions.

    Returns:
        (errors, final terminal flag)
    """
    # flags[i] is the flag in force before question i; flags[-1] is the final flag
    flags = list(accumulate(
        enumerate(questions),
        lambda flag, indexed: _next_terminal_flag(flag, indexed, answers),
        initial=False,
    ))

    errors = {}
    for index, question in enumerate(questions):
        key = QuestionKey.from_position(index)
        kind = _classify_question(flags[index], key, question, answers)
        if kind is not None:
            errors[key] = kind

    return errors, flags[-1]


def _all_unanswered(questions: Sequence[Question]) -> Dict[QuestionKey, ValidationErrorKind]:
    return {
        QuestionKey.from_position(index): ValidationErrorKind.WAS_NOT_ANSWERED
        for index in range(len(questions))
    }
