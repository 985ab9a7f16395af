"""
Test suite for business_hours

Contains:
- tests/unit/          : Unit tests for individual modules
"""
