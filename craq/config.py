"""
Configuration for the CRAQ answer validator.

Module-level constants. Runtime settings can be overridden through
environment variables; the key prefix cannot, since it is part of the
answer/error key format.
"""

import os

# Question keys are '<prefix><position>': q0, q1, ...
QUESTION_KEY_PREFIX = "q"

# Logging
LOG_LEVEL = os.environ.get("CRAQ_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Web interface
SERVER_HOST = os.environ.get("CRAQ_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("CRAQ_PORT", "5000"))
