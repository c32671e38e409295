"""
Test suite for Matrix Calculator

Contains:
- tests/unit/          : Unit tests for the matrix core, contracts, parser, calculator and CLI
"""
