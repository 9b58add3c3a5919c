"""
Semantic contracts for the CRAQ answer validator.

This module defines immutable data structures shared by the loader,
the answer parser and the validator. These are NOT validators - they
define shape and semantics without enforcing questionnaire rules.

Design principles:
- Frozen dataclasses (immutable after creation)
- Tuples instead of lists, MappingProxyType instead of dict
- No dependencies on other craq modules except config

Contents:
- Option: One selectable choice of a question
- Question: Ordered options, position given by its index in the questionnaire
- QuestionKey: Typed identifier joining a question position to answers and errors
- AnswerSet: Read-only mapping of QuestionKey to the selected option index

Usage:
    from craq.contracts import Option, Question, QuestionKey, AnswerSet
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Tuple

from craq.config import QUESTION_KEY_PREFIX


_LABEL_PATTERN = re.compile(re.escape(QUESTION_KEY_PREFIX) + r"(0|[1-9][0-9]*)")


@dataclass(frozen=True)
class Option:
    """
    One selectable choice of a question.

    The option's index is implicit: its position in Question.options.

    Attributes:
        complete_if_selected: Choosing this option ends the questionnaire.
            No later question may be answered.
        text: Display text as supplied (not used by validation)
    """
    complete_if_selected: bool = False
    text: Any = None


@dataclass(frozen=True)
class Question:
    """
    A questionnaire question.

    Attributes:
        options: Ordered options. Tuple (not list) to ensure immutability.
        text: Display text as supplied (not used by validation)
    """
    options: Tuple[Option, ...] = ()
    text: Any = None

    @property
    def option_count(self) -> int:
        return len(self.options)


@dataclass(frozen=True, order=True)
class QuestionKey:
    """
    Typed identifier for a question, derived from its position.

    The label format is the key prefix followed by the decimal position
    ('q0', 'q1', ...). from_position() and label are inverses of
    from_label(), so one label always names exactly one question.

    Examples:
        >>> QuestionKey(2).label
        'q2'
        >>> QuestionKey.from_label('q2')
        QuestionKey(position=2)
        >>> QuestionKey.from_label('q02')  # Raises ValueError
    """
    position: int

    def __post_init__(self):
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise TypeError(f"Question position must be int, got {type(self.position).__name__}")
        if self.position < 0:
            raise ValueError(f"Question position must be non-negative, got {self.position}")

    @property
    def label(self) -> str:
        return f"{QUESTION_KEY_PREFIX}{self.position}"

    @classmethod
    def from_position(cls, position: int) -> "QuestionKey":
        return cls(position)

    @classmethod
    def from_label(cls, label: str) -> "QuestionKey":
        """
        Parse a label such as 'q3'.

        Raises:
            ValueError: If label is not prefix + non-negative integer
                        without sign or leading zeros
        """
        if not isinstance(label, str):
            raise ValueError(f"Question key label must be str, got {type(label).__name__}")

        match = _LABEL_PATTERN.fullmatch(label)
        if match is None:
            raise ValueError(f"Invalid question key label: {label!r}")

        return cls(int(match.group(1)))

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class AnswerSet:
    """
    Read-only mapping of QuestionKey to the selected option index.

    Absence of a key means the question was not answered. Values are kept
    as supplied; the validator decides which values name an option.

    Use AnswerSet.from_dict() to build one. The wrapped mapping is copied
    on construction so later changes to the caller's dict are not seen.
    """
    _answers: Mapping[QuestionKey, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "_answers", MappingProxyType(dict(self._answers)))

    @staticmethod
    def from_dict(answers: Mapping[QuestionKey, Any]) -> "AnswerSet":
        return AnswerSet(_answers=answers)

    def __contains__(self, key: object) -> bool:
        return key in self._answers

    def __getitem__(self, key: QuestionKey) -> Any:
        return self._answers[key]

    def __iter__(self) -> Iterator[QuestionKey]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def get(self, key: QuestionKey, default: Any = None) -> Any:
        return self._answers.get(key, default)
