"""
Double-entry ledger и проверки инвариантов.
"""

from goldph.ledger.invariants import (
    InvariantReport,
    InvariantResult,
    check_invariants,
    equity_adjustment,
)
from goldph.ledger.ledger import Ledger

__all__ = [
    "Ledger",
    "InvariantReport",
    "InvariantResult",
    "check_invariants",
    "equity_adjustment",
]
