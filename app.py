"""
Flask Web Application for the CRAQ Answer Validator

JSON API wrapping validate_answers(). Each request is an independent
validation run; nothing is stored between requests.
"""

from flask import Flask, request, jsonify
import logging

from craq.config import LOG_FORMAT, LOG_LEVEL, SERVER_HOST, SERVER_PORT
from craq.core.answer_validator import CraqValidator
from craq.core.questionnaire_loader import parse_questionnaire
from craq.utils.answer_parsing import parse_answers

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)


def error_response(message, status):
    return jsonify({
        'success': False,
        'error': message
    }), status


@app.route('/api/health', methods=['GET'])
def health():
    """Liveness check"""
    return jsonify({
        'success': True,
        'status': 'ok'
    })


@app.route('/api/validate', methods=['POST'])
def validate():
    """
    Validate submitted answers against a questionnaire.

    Body:
        {"questions": [...], "answers": {"q0": 0, ...} | null}
    """
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return error_response('Request body must be a JSON object', 400)

    if 'questions' not in data:
        return error_response("Missing 'questions'", 400)

    try:
        questions = parse_questionnaire(data['questions'])
        answers = parse_answers(data.get('answers'))
    except (ValueError, TypeError) as e:
        logger.warning(f"Rejected validation request: {e}")
        return error_response(str(e), 400)

    result = CraqValidator(questions, answers).validate()

    payload = result.to_json()
    return jsonify({
        'success': True,
        'valid': payload['valid'],
        'errors': payload['errors']
    })


if __name__ == '__main__':
    print("\n" + "="*60)
    print("CRAQ ANSWER VALIDATOR - WEB INTERFACE")
    print("="*60)
    print(f"\nServer starting on http://{SERVER_HOST}:{SERVER_PORT}")
    print("POST questionnaire + answers to /api/validate")
    print("\nPress Ctrl+C to stop the server")
    print("="*60 + "\n")

    app.run(host=SERVER_HOST, port=SERVER_PORT)
