"""
Schema Validator - JSON Schema gate for transformed court list documents.

Schemas live next to this module under ``schemas/`` and are compiled once
per process with jsonschema's Draft 2020-12 validator.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from pydantic import BaseModel

from ...common.types import CourtListType
from ..errors import SchemaValidationException

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schemas"

SCHEMA_FILES: Dict[CourtListType, str] = {
    CourtListType.STANDARD: "standard-court-list-schema.json",
    CourtListType.PUBLIC: "public-court-list-schema.json",
    CourtListType.ONLINE_PUBLIC: "online-public-court-list-schema.json",
}

SchemaVariant = Union[CourtListType, str]


class SchemaValidator:
    """
    Validates documents against the schema registered for their variant.

    A variant is either a CourtListType or a schema file name under
    schema_dir.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        self._validators: Dict[str, Draft202012Validator] = {}
        self._lock = threading.Lock()

    def validate(self, document: Any, variant: SchemaVariant) -> None:
        """
        Raises:
            SchemaValidationException: null document, unknown schema, or any
                constraint violation (all messages are collected)
        """
        if document is None:
            raise SchemaValidationException("Document cannot be null")

        validator = self._get_validator(variant)
        instance = self._to_json(document)

        errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])
        if errors:
            messages = [self._format_error(e) for e in errors]
            logger.warning(
                "Document failed schema %s with %d violation(s)",
                self._schema_file(variant),
                len(messages),
            )
            raise SchemaValidationException(
                "JSON schema validation failed:\n" + "\n".join(messages),
                errors=messages,
            )

    def is_valid(self, document: Any, variant: SchemaVariant) -> bool:
        try:
            self.validate(document, variant)
        except SchemaValidationException:
            return False
        return True

    def _schema_file(self, variant: SchemaVariant) -> str:
        if isinstance(variant, CourtListType):
            return SCHEMA_FILES[variant]
        try:
            return SCHEMA_FILES[CourtListType(variant)]
        except ValueError:
            return str(variant)

    def _get_validator(self, variant: SchemaVariant) -> Draft202012Validator:
        name = self._schema_file(variant)
        with self._lock:
            cached = self._validators.get(name)
            if cached is not None:
                return cached

            path = (self._schema_dir / name).resolve()
            if self._schema_dir.resolve() not in path.parents:
                raise SchemaValidationException(f"Schema not found: {name}")
            try:
                schema = json.loads(path.read_text(encoding="utf-8"))
                Draft202012Validator.check_schema(schema)
            except FileNotFoundError:
                raise SchemaValidationException(f"Schema not found: {name}")
            except (json.JSONDecodeError, SchemaError) as e:
                raise SchemaValidationException(f"Schema could not be loaded: {name}: {e}")

            validator = Draft202012Validator(schema)
            self._validators[name] = validator
            return validator

    @staticmethod
    def _to_json(document: Any) -> Any:
        if isinstance(document, BaseModel):
            return document.model_dump(by_alias=True, mode="json")
        # Round-trip plain structures so tuples and the like match JSON types
        return json.loads(json.dumps(document, default=str))

    @staticmethod
    def _format_error(error) -> str:
        location = "$" + "".join(
            f"[{p}]" if isinstance(p, int) else f".{p}" for p in error.absolute_path
        )
        return f"{location}: {error.message}"
