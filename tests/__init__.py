"""
Test suite for GoldPH accounting core

Contains:
- tests/unit/          : Unit tests for ledger, holdings, valuation, metrics and sessions
"""
