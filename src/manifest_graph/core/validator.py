"""JSON Schema validation for normalized manifest graphs.

This module loads the bundled JSON Schema and validates a normalized
document's dictionary form before it is handed on.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .types import ManifestDocument

# Path to the schema file (bundled with the package)
SCHEMA_PATH = Path(__file__).parent / "schemas" / "manifest_graph.schema.json"


def load_schema() -> dict[str, Any]:
    """Load the JSON schema from disk.

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_graph(document: ManifestDocument | dict[str, Any]) -> None:
    """Validate a normalized document against the JSON Schema.

    Args:
        document: The normalized document, or its dictionary form

    Raises:
        ValidationError: If the document doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    instance = document.to_dict() if isinstance(document, ManifestDocument) else document
    jsonschema.validate(instance=instance, schema=load_schema())


def validate_graph_with_error_details(
    document: ManifestDocument | dict[str, Any],
) -> tuple[bool, str | None]:
    """Validate a normalized document and return detailed error information.

    Args:
        document: The normalized document, or its dictionary form

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_graph(document)
        return True, None
    except ValidationError as e:
        error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
        error_msg = f"Validation error at {error_path}: {e.message}"

        if e.instance:
            error_msg += f"\nInvalid value: {e.instance}"

        return False, error_msg
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
