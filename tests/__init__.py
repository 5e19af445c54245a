"""
Test suite for the set-function extension library

Contains:
- tests/unit/          : Unit tests for individual modules and end-to-end scenarios
"""
