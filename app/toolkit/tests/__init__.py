"""
Tests for utils app.

This package contains test modules for:
- test_helpers.py: Helper function tests
- test_decorators.py: Decorator tests
- test_validators.py: Validator tests
- test_email_service.py: EmailService tests

Usage:
    pytest utils/tests/
    pytest utils/tests/test_helpers.py
"""
