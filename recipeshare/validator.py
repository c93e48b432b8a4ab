import json
import os
from functools import lru_cache
from typing import Any, Dict, Tuple

from jsonschema import Draft7Validator
from jsonschema import ValidationError as SchemaValidationError

# Path: recipeshare/schemas/
SCHEMA_DIR = os.path.join(
    os.path.dirname(__file__),
    "schemas"
)

# Mapping payload name → schema filename
PAYLOAD_SCHEMAS = {
    "legacy_buffer": "legacy_buffer.json",
    "create_recipe": "create_recipe.json",
    "comment": "comment.json",
}


@lru_cache(maxsize=None)
def load_schema(name: str) -> Dict[str, Any]:
    """
    Load the JSON schema file registered under `name`.
    """
    filename = PAYLOAD_SCHEMAS[name]
    path = os.path.join(SCHEMA_DIR, filename)

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=None)
def _validator(name: str) -> Draft7Validator:
    return Draft7Validator(load_schema(name))


def validate_payload(name: str, data: Any) -> Tuple[bool, str]:
    """
    Validate `data` against the named schema.

    Returns:
        (True, "") if valid
        (False, "<error message>") if invalid
    """
    try:
        _validator(name).validate(data)
        return True, ""
    except SchemaValidationError as e:
        return False, e.message


def matches_schema(name: str, data: Any) -> bool:
    """
    Boolean form of validate_payload, for content sniffing.
    """
    return _validator(name).is_valid(data)
