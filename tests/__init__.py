"""
Test suite for the Task Manager API.

Covers:
- Validation rules (identifiers, title uniqueness, due date lead time)
- Task service orchestration and status guards
- Task stores (in-memory and SQLAlchemy)
- HTTP endpoints
"""

import logging

# Configure test logging
logging.basicConfig(level=logging.WARNING)  # Reduce noise during tests
