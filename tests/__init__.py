"""
Test suite for primitive-sugar.

Test structure:
- unit/ - Unit tests (fast, isolated)
- fixtures/ - Shared test fixtures and helpers

Run tests:
    pytest                    # All tests
    pytest tests/unit         # Unit tests only
    pytest -k "chainable"     # Tests matching name
    pytest --cov              # With coverage

Philosophy:
    The registry is process-wide state. Every test resets it before and
    after running so no namespace or method leaks between tests.
"""
