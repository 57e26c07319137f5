"""
Test fixtures for primitive-sugar

This package contains fixtures used for testing:
- Sample instance methods (add, mult, arg, total)
"""

import os

# Path to fixtures directory
FIXTURES_DIR = os.path.dirname(__file__)
