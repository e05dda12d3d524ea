"""Structural checks for typedef documents.

The shape of a typedef document is published as a JSON Schema
(``typedef.schema.json`` next to this module) and checked with
:mod:`jsonschema` before a :class:`~jtc.typedef.SchemaNode` tree is built.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .errors import MalformedSchema

META_SCHEMA_PATH = Path(__file__).resolve().with_name("typedef.schema.json")

with open(META_SCHEMA_PATH, "r", encoding="utf-8") as f:
    META_SCHEMA = json.load(f)

_VALIDATOR = Draft202012Validator(META_SCHEMA)


@dataclass(frozen=True, slots=True)
class SchemaIssue:
    """One structural problem, located by a JSON pointer into the document."""

    message: str
    location: str = ""


def _pointer(parts: Iterable[Any]) -> str:
    tokens = [str(p).replace("~", "~0").replace("/", "~1") for p in parts]
    return "/" + "/".join(tokens) if tokens else ""


def _node_at(document: Any, parts: Iterable[Any]) -> Any:
    node = document
    for part in parts:
        node = node[part]
    return node


def _forbidden_key(error: ValidationError) -> Optional[str]:
    # Keys that do not belong to a node's kind are rejected with
    # ``{"not": {"required": [key]}}``.
    if error.validator != "not" or not isinstance(error.validator_value, dict):
        return None
    required = error.validator_value.get("required")
    if isinstance(required, list) and len(required) == 1:
        return required[0]
    return None


def _issue(error: ValidationError, document: Any) -> SchemaIssue:
    key = _forbidden_key(error)
    if key is None:
        return SchemaIssue(message=error.message, location=_pointer(error.path))
    owner = _node_at(document, error.path)
    kind = owner.get("type") if isinstance(owner, dict) else None
    message = f"'{key}' is not allowed on '{kind}' nodes" if isinstance(kind, str) else f"'{key}' is not allowed here"
    return SchemaIssue(message=message, location=_pointer([*error.path, key]))


def iter_issues(document: Any) -> List[SchemaIssue]:
    """Return every structural problem in ``document``, shallowest first."""

    errors = sorted(
        _VALIDATOR.iter_errors(document),
        key=lambda e: (len(e.path), [str(p) for p in e.path]),
    )
    return [_issue(e, document) for e in errors]


def validate_obj(document: Any) -> bool:
    return not iter_issues(document)


def check_obj(document: Any, *, source: Optional[str] = None) -> None:
    """Raise :class:`MalformedSchema` for the first structural problem in ``document``."""

    issues = iter_issues(document)
    if issues:
        first = issues[0]
        raise MalformedSchema(first.message, source=source, location=first.location)


__all__ = ["META_SCHEMA", "META_SCHEMA_PATH", "SchemaIssue", "check_obj", "iter_issues", "validate_obj"]
