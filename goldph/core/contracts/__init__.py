"""
Contract Validation Module

Модуль для валидации JSON контрактов GoldPH.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    SessionRecordValidator,
    from_record,
    to_record,
    validate_session_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SessionRecordValidator",
    # Functions
    "validate_session_record",
    "to_record",
    "from_record",
]
