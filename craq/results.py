"""
Result types returned by the answer validator.

Answer problems are never raised. They are reported as data here.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from craq.contracts import QuestionKey


class ValidationErrorKind(str, Enum):
    """
    Per-question validation outcome. At most one per question.

    The values are the exact messages reported to consumers and must not
    change.

    Values:
        WAS_NOT_ANSWERED:
            Question reachable but no answer present, or the whole answer
            set was missing/empty.

        NOT_VALID_ANSWER:
            Answer present but its index is outside the question's options.

        ANSWER_FOR_COMPLETED_QUESTION:
            Answer present although an earlier answer already ended the
            questionnaire.
    """
    WAS_NOT_ANSWERED = "was not answered"
    NOT_VALID_ANSWER = "has an answer that is not on the list of valid answers"
    ANSWER_FOR_COMPLETED_QUESTION = (
        "was answered even though a previous response indicated that the questions were complete"
    )

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of one validation run.

    Attributes:
        errors: Read-only mapping of QuestionKey to ValidationErrorKind.
                Contains an entry for every failed question and none for
                passed ones.

    valid is derived from errors on every access, never stored.
    """
    errors: Mapping[QuestionKey, ValidationErrorKind] = field(default_factory=dict)

    def __post_init__(self):
        ordered = dict(sorted(self.errors.items()))
        object.__setattr__(self, "errors", MappingProxyType(ordered))

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def to_json(self) -> dict:
        """
        Serialize to a JSON-safe dict.

        Returns:
            dict: {'valid': bool, 'errors': {label: message}} with errors
                  in question order
        """
        return {
            "valid": self.valid,
            "errors": {key.label: kind.message for key, kind in self.errors.items()},
        }
