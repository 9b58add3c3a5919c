"""
Test Suite for the Questionnaire Loader

Run with: python -m pytest tests/test_questionnaire_loader.py
"""

import unittest
import json
import tempfile
import os
from pathlib import Path

from craq.contracts import Option, Question
from craq.core.questionnaire_loader import load_questionnaire, parse_questionnaire


EXAMPLE_PATH = Path(__file__).resolve().parent.parent / "data" / "example_questionnaire.json"


# =============================================================================
# PART 1: File loading
# =============================================================================

class TestLoadQuestionnaire(unittest.TestCase):
    """Reading questionnaire definition files."""

    def setUp(self):
        """Create a small valid questionnaire file."""
        self.document = {
            "questions": [
                {"text": "First", "options": [{"text": "a"}, {"text": "b", "complete_if_selected": True}]},
                {"text": "Second", "options": [{"text": "c"}]}
            ]
        }

        self.temp_file = tempfile.NamedTemporaryFile(
            mode='w', suffix='.json', delete=False
        )
        json.dump(self.document, self.temp_file)
        self.temp_file.close()

    def tearDown(self):
        """Clean up temp file."""
        os.unlink(self.temp_file.name)

    def test_load_builds_questions(self):
        """Questions and options come back in file order."""
        questions = load_questionnaire(self.temp_file.name)

        self.assertEqual(len(questions), 2)
        self.assertEqual(questions[0].text, "First")
        self.assertEqual(
            questions[0].options,
            (Option(complete_if_selected=False, text="a"), Option(complete_if_selected=True, text="b"))
        )
        self.assertEqual(questions[1].option_count, 1)

    def test_load_accepts_path_object(self):
        questions = load_questionnaire(Path(self.temp_file.name))

        self.assertEqual(len(questions), 2)

    def test_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            load_questionnaire("/nonexistent/questionnaire.json")

    def test_invalid_json_raises_value_error(self):
        with open(self.temp_file.name, 'w') as f:
            f.write("{not json")

        with self.assertRaises(ValueError) as ctx:
            load_questionnaire(self.temp_file.name)

        self.assertIn("not valid JSON", str(ctx.exception))

    def test_bundled_example_loads(self):
        questions = load_questionnaire(EXAMPLE_PATH)

        self.assertEqual(len(questions), 4)
        self.assertTrue(questions[0].options[1].complete_if_selected)


# =============================================================================
# PART 2: Document parsing
# =============================================================================

class TestParseQuestionnaire(unittest.TestCase):
    """Building questions from decoded documents."""

    def test_bare_list_accepted(self):
        questions = parse_questionnaire([{"options": [{}, {}]}])

        self.assertEqual(questions, (Question(options=(Option(), Option())),))

    def test_camel_case_flag_accepted(self):
        questions = parse_questionnaire([{"options": [{"completeIfSelected": True}]}])

        self.assertTrue(questions[0].options[0].complete_if_selected)

    def test_flag_defaults_to_false(self):
        questions = parse_questionnaire({"questions": [{"options": [{"text": "x"}]}]})

        self.assertFalse(questions[0].options[0].complete_if_selected)

    def test_null_flag_is_false(self):
        """A null completion flag is treated as unset."""
        questions = parse_questionnaire([
            {"options": [{"complete_if_selected": None}, {"completeIfSelected": None}]}
        ])

        self.assertFalse(questions[0].options[0].complete_if_selected)
        self.assertFalse(questions[0].options[1].complete_if_selected)

    def test_null_flag_alongside_other_spelling(self):
        questions = parse_questionnaire([
            {"options": [{"complete_if_selected": None, "completeIfSelected": True}]}
        ])

        self.assertTrue(questions[0].options[0].complete_if_selected)

    def test_option_text_not_checked(self):
        """Display text is kept as supplied; validation never reads it."""
        questions = parse_questionnaire([{"text": 1, "options": [{"text": 2}, {"text": None}]}])

        self.assertEqual(questions[0].text, 1)
        self.assertEqual(questions[0].options[0].text, 2)
        self.assertEqual(questions[0].option_count, 2)

    def test_empty_questionnaire_allowed(self):
        self.assertEqual(parse_questionnaire({"questions": []}), ())

    def test_question_without_options_allowed(self):
        questions = parse_questionnaire([{"options": []}])

        self.assertEqual(questions[0].option_count, 0)

    def test_result_is_tuple(self):
        questions = parse_questionnaire([{"options": [{}]}])

        self.assertIsInstance(questions, tuple)


# =============================================================================
# PART 3: Structural validation
# =============================================================================

class TestQuestionnaireValidation(unittest.TestCase):
    """Malformed documents raise one ValueError listing every problem."""

    def assert_invalid(self, document, *fragments):
        with self.assertRaises(ValueError) as ctx:
            parse_questionnaire(document)

        message = str(ctx.exception)
        self.assertTrue(message.startswith("Questionnaire validation failed:"))
        for fragment in fragments:
            self.assertIn(fragment, message)

    def test_missing_questions_key(self):
        self.assert_invalid({"items": []}, "Missing 'questions'")

    def test_wrong_document_type(self):
        self.assert_invalid("questions", "must be an object or a list")

    def test_questions_not_list(self):
        self.assert_invalid({"questions": {"q0": {}}}, "'questions' must be a list")

    def test_question_not_object(self):
        self.assert_invalid([["a", "b"]], "Question at index 0 must be an object")

    def test_missing_options(self):
        self.assert_invalid([{"text": "no options"}], "Question at index 0 missing 'options'")

    def test_options_not_list(self):
        self.assert_invalid([{"options": "yes/no"}], "'options' must be a list")

    def test_option_not_object(self):
        self.assert_invalid([{"options": ["yes"]}], "Option 0 of question 0 must be an object")

    def test_non_boolean_flag(self):
        self.assert_invalid(
            [{"options": [{"complete_if_selected": "true"}]}],
            "'complete_if_selected' must be a boolean"
        )

    def test_both_flag_spellings(self):
        self.assert_invalid(
            [{"options": [{"complete_if_selected": True, "completeIfSelected": True}]}],
            "sets both"
        )


    def test_all_errors_collected(self):
        """Every problem is reported, not just the first."""
        document = [
            {"options": [{}]},
            {"text": "missing options"},
            {"options": [{"complete_if_selected": 1}]},
            "not a question",
        ]

        self.assert_invalid(
            document,
            "Question at index 1 missing 'options'",
            "Option 0 of question 2 'complete_if_selected' must be a boolean",
            "Question at index 3 must be an object"
        )


if __name__ == '__main__':
    unittest.main()
