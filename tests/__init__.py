"""
Test suite for the smoothing numerics

Contains:
- tests/unit/          : Unit tests for individual modules
"""
