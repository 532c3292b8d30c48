"""
BlockCreds Test Suite
=====================

Test organization:
- tests/unit/          - Unit tests (no external dependencies)
- tests/services/      - HTTP route tests against the ASGI apps

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
"""
