"""
JSON Schema Contract Validators

Модуль для валидации сохраняемых записей согласно формальным JSON Schema
контрактам. Использует библиотеку jsonschema (Draft 2020-12).

Схемы:
- session_record.json (запись сессии для внешнего хранилища)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from goldph.core.domain.session import Session

logger = logging.getLogger("goldph.contracts")


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в contracts/schema/.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'session_record')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидация данных против JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class SessionRecordValidator(ContractValidator):
    """Валидатор для session_record контракта."""

    def __init__(self):
        super().__init__("session_record")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_session_record(data: Dict[str, Any]) -> None:
    """
    Валидация записи сессии.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    SessionRecordValidator().validate(data)


def to_record(session: Session) -> Dict[str, Any]:
    """
    Сериализация сессии во вложенные примитивы (JSON-совместимые).

    Ключи holdings/items становятся строками. Результат проверяется
    против session_record.json перед возвратом.
    """
    record = session.model_dump(mode="json")
    validate_session_record(record)
    return record


def from_record(data: Dict[str, Any]) -> Session:
    """
    Восстановление сессии из записи.

    Raises:
        jsonschema.ValidationError: Запись нарушает контракт
        pydantic.ValidationError: Запись нарушает ограничения модели
    """
    validate_session_record(data)
    session = Session.model_validate(data)
    logger.debug("Restored session %d from record", session.session_id)
    return session
