"""
Console Harness for the CRAQ Answer Validator

Validates an answers file against a questionnaire file and prints the
result. Exit code 0 when valid, 1 when invalid, 2 on unreadable input.

Usage:
    python main.py data/example_questionnaire.json data/example_answers.json
    python main.py questionnaire.json answers.json --json
"""

import argparse
import json
import logging
import sys

from craq.config import LOG_FORMAT, LOG_LEVEL
from craq.core.answer_validator import CraqValidator
from craq.core.questionnaire_loader import load_questionnaire
from craq.utils.answer_parsing import parse_answers

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_BAD_INPUT = 2


def print_separator(char="=", length=60):
    """Print a separator line"""
    print(char * length)


def print_report(result):
    """Print a human-readable ValidationResult"""
    print_separator()
    print("CRAQ ANSWER VALIDATION")
    print_separator()

    if result.valid:
        print("All answers are valid.")
    else:
        print(f"{len(result.errors)} question(s) failed validation:\n")
        for key, kind in result.errors.items():
            print(f"  {key.label}: {kind.message}")

    print_separator()


def load_answers_file(path):
    """Read raw answers JSON ('null' means no answers were submitted)"""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Validate CRAQ questionnaire answers."
    )
    parser.add_argument("questionnaire", help="Path to questionnaire JSON")
    parser.add_argument("answers", help="Path to answers JSON (label -> option index)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a report"
    )
    return parser


def main(argv=None):
    """Run console validation"""
    args = build_arg_parser().parse_args(argv)

    try:
        questions = load_questionnaire(args.questionnaire)
        answers = parse_answers(load_answers_file(args.answers))
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Could not read input: {e}")
        print(f"\nERROR: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    result = CraqValidator(questions, answers).validate()

    if args.json:
        print(json.dumps(result.to_json(), indent=2))
    else:
        print_report(result)

    return EXIT_VALID if result.valid else EXIT_INVALID


if __name__ == '__main__':
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    sys.exit(main())
