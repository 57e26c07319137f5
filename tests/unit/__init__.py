"""Unit tests for primitive-sugar.

Fast, isolated tests for individual components.
No network; filesystem only through temporary directories.
"""
