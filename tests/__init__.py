"""
Test suite for exactint

Contains:
- tests/unit/          : Unit tests for individual modules
"""
