"""Loading JSON/YAML documents given on the command line."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..exceptions import ValidationError


def load_document(path: Optional[Path]) -> Any:
    """Parse a JSON or YAML file; ``None`` when no path is given.

    Raises:
        ValidationError: If the file cannot be read or parsed
    """
    if path is None:
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            # YAML is a superset of JSON, so one loader covers both
            return yaml.safe_load(f)
    except OSError as e:
        raise ValidationError(f"Cannot read {path}: {e.strerror}", field=str(path)) from e
    except yaml.YAMLError as e:
        raise ValidationError(f"Cannot parse {path}: {e}", field=str(path)) from e


def load_mapping(path: Optional[Path]) -> Optional[Dict[str, Any]]:
    """Load a document that must be a mapping."""
    data = load_document(path)
    if data is not None and not isinstance(data, dict):
        raise ValidationError(f"{path} must contain a mapping", field=str(path))
    return data


def load_list(path: Optional[Path]) -> Optional[List[Any]]:
    """Load a document that must be a list."""
    data = load_document(path)
    if data is not None and not isinstance(data, list):
        raise ValidationError(f"{path} must contain a list", field=str(path))
    return data


def parse_assignments(values: Optional[List[str]], option: str) -> Dict[str, str]:
    """Turn repeated ``key=value`` options into a dict.

    Raises:
        ValidationError: If an item has no ``=``
    """
    result: Dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValidationError(f"Expected key=value, got '{item}'", field=option)
        result[key.strip()] = value.strip()
    return result
