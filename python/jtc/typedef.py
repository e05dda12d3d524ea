"""In-memory model of typedef documents.

A typedef document is a JSON object shaped like::

    {
        "type": "string" | "number" | "object" | "list" | "<alias name>",
        "children": {...},              # element schema, lists only
        "properties": {"name": {...}},  # objects only
        "define": {"alias": {...}},     # aliases visible to this subtree
        "optional": true                # on a property's node
    }

Any ``type`` outside the reserved set names an alias that is resolved
against the ``define`` tables of the node and its ancestors during
validation.  Parsing never resolves aliases: a name may be defined by an
ancestor, so only the validator can tell whether it is unknown.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import MalformedSchema
from .meta import check_obj


class Kind(Enum):
    STRING = "string"
    NUMBER = "number"
    OBJECT = "object"
    LIST = "list"
    ALIAS = "alias"

    @classmethod
    def from_tag(cls, tag: str) -> "Kind":
        """Map a ``type`` tag to a kind; unreserved tags are aliases."""

        if tag in RESERVED_TAGS:
            return cls(tag)
        return cls.ALIAS


RESERVED_TAGS = frozenset({"string", "number", "object", "list"})


@dataclass(slots=True)
class SchemaNode:
    """One node of a typedef tree.

    ``alias`` is set only for :attr:`Kind.ALIAS` nodes, ``element_schema``
    only for lists and ``properties`` only for objects.  The ``optional``
    flag belongs to a property's node and is read by the enclosing object.
    """

    kind: Kind
    alias: Optional[str] = None
    element_schema: Optional["SchemaNode"] = None
    properties: Dict[str, "SchemaNode"] = field(default_factory=dict)
    local_aliases: Dict[str, "SchemaNode"] = field(default_factory=dict)
    optional: bool = False

    @property
    def tag(self) -> str:
        if self.kind is Kind.ALIAS:
            return self.alias or ""
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.tag}
        if self.element_schema is not None:
            data["children"] = self.element_schema.to_dict()
        if self.properties:
            data["properties"] = {name: node.to_dict() for name, node in self.properties.items()}
        if self.local_aliases:
            data["define"] = {name: node.to_dict() for name, node in self.local_aliases.items()}
        if self.optional:
            data["optional"] = True
        return data

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], validate: bool = True) -> "SchemaNode":
        """Build a tree from a decoded typedef document.

        With ``validate`` (the default) the document is first checked
        against the published meta-schema and :class:`MalformedSchema` is
        raised for the shallowest problem found.
        """

        if validate:
            check_obj(raw)
        return cls._build(raw)

    @classmethod
    def _build(cls, raw: Mapping[str, Any]) -> "SchemaNode":
        tag = str(raw["type"])
        kind = Kind.from_tag(tag)
        children = raw.get("children")
        return cls(
            kind=kind,
            alias=tag if kind is Kind.ALIAS else None,
            element_schema=cls._build(children) if children is not None else None,
            properties={name: cls._build(node) for name, node in (raw.get("properties") or {}).items()},
            local_aliases={name: cls._build(node) for name, node in (raw.get("define") or {}).items()},
            optional=bool(raw.get("optional", False)),
        )


def parse_typedef(data: bytes | str, *, source: Optional[str] = None) -> SchemaNode:
    """Deserialize typedef ``data`` into a :class:`SchemaNode` tree.

    Raises :class:`MalformedSchema` when ``data`` is not JSON or does not
    have the shape of a typedef document.
    """

    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise MalformedSchema(f"not UTF-8 text: {exc}", source=source) from exc
    else:
        text = data.lstrip("\ufeff")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedSchema(f"invalid JSON: {exc}", source=source) from exc
    except RecursionError as exc:
        raise MalformedSchema("document nested too deeply", source=source) from exc
    # The meta-schema check and the tree builder both recurse per level.
    try:
        check_obj(raw, source=source)
        return SchemaNode.from_dict(raw, validate=False)
    except RecursionError as exc:
        raise MalformedSchema("document nested too deeply", source=source) from exc


def load_typedef_file(path: str | Path) -> SchemaNode:
    path = Path(path)
    return parse_typedef(path.read_bytes(), source=str(path))


__all__ = ["Kind", "RESERVED_TAGS", "SchemaNode", "load_typedef_file", "parse_typedef"]
