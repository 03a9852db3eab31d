"""
Schema validation for GitHub payloads.

Every response from the API is checked against a JSON Schema before the
client reads fields out of it, so a changed or truncated payload fails
with a clear message instead of a KeyError deep in the validator.
"""

import json
from importlib import resources
from typing import Any

import jsonschema


class SchemaValidationError(Exception):
    """Payload did not match its schema."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


# Cache loaded schemas
_schema_cache: dict[str, dict] = {}


def _load_schema(schema_name: str) -> dict:
    """Load schema by name from the package's schemas directory, with caching."""
    if schema_name not in _schema_cache:
        schema_file = resources.files("issue_hierarchy") / "schemas" / f"{schema_name}.schema.json"
        if not schema_file.is_file():
            raise SchemaValidationError(schema_name, f"Schema file not found: {schema_file}")
        _schema_cache[schema_name] = json.loads(schema_file.read_text())
    return _schema_cache[schema_name]


def validate(data: Any, schema_name: str) -> None:
    """
    Validate data against named schema.

    Args:
        data: Decoded JSON payload
        schema_name: Schema name ("issue" or "timeline_event")

    Raises:
        SchemaValidationError: If validation fails
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else "(root)"
        raise SchemaValidationError(schema_name, e.message, path) from None

