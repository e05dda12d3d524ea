"""Validation of JSON values against typedef trees.

The walk visits the schema tree and the data tree in lock-step.  At every
schema node the node's ``define`` table is merged into the inherited scope
before anything else happens, so properties, list elements and the node's
own alias reference all see the same aliases.

A type mismatch stops the walk for that node only; siblings scheduled by
the enclosing object or list are still checked.
"""

from __future__ import annotations

from typing import Any, List, NamedTuple, Optional, Union

from .errors import MalformedSchema
from .findings import DiagnosticSink, Finding
from .scope import DefinitionScope
from .typedef import Kind, SchemaNode

DEFAULT_MAX_ALIAS_HOPS = 64

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return _INT64_MIN <= value <= _INT64_MAX


class _Step(NamedTuple):
    """One pending check of a value against a schema node."""

    node: SchemaNode
    value: Any
    path: str
    scope: DefinitionScope
    hops: int


_Pending = Union[_Step, Finding]


class Validator:
    """Validates JSON values against :class:`SchemaNode` trees.

    ``max_alias_hops`` bounds the number of alias dereferences allowed in a
    row without descending into the data; a schema such as
    ``{"type": "A", "define": {"A": {"type": "A"}}}`` would otherwise never
    terminate.  The validator keeps no state between calls.
    """

    def __init__(self, *, max_alias_hops: int = DEFAULT_MAX_ALIAS_HOPS) -> None:
        if max_alias_hops < 1:
            raise ValueError("max_alias_hops must be at least 1")
        self.max_alias_hops = max_alias_hops

    def validate(
        self,
        schema: SchemaNode,
        value: Any,
        path: str = "",
        scope: Optional[DefinitionScope] = None,
        sink: Optional[DiagnosticSink] = None,
    ) -> List[Finding]:
        """Check ``value`` against ``schema`` and return the findings in discovery order.

        When ``sink`` is given the findings are also recorded into it.
        Nesting depth is bounded only by memory: pending checks live on an
        explicit stack, not on the interpreter's call stack.
        """

        if sink is None:
            sink = DiagnosticSink()
        start = len(sink)
        stack: List[_Pending] = [_Step(schema, value, path, scope or DefinitionScope.empty(), 0)]
        while stack:
            item = stack.pop()
            if isinstance(item, Finding):
                sink.record(item)
                continue
            # Pushed in reverse so the first item of a step is handled next,
            # which keeps the order of a depth-first walk.
            stack.extend(reversed(self._expand(item)))
        return list(sink.all()[start:])

    # -- walk ----------------------------------------------------------------
    def _expand(self, step: _Step) -> List[_Pending]:
        node, value, path = step.node, step.value, step.path
        scope = step.scope.merge(node.local_aliases)
        kind = node.kind

        if kind is Kind.STRING:
            return [] if isinstance(value, str) else [Finding.expected("string", path)]
        if kind is Kind.NUMBER:
            return [] if _is_integer(value) else [Finding.expected("number", path)]
        if kind is Kind.OBJECT:
            return self._expand_object(node, value, path, scope)
        if kind is Kind.LIST:
            return self._expand_list(node, value, path, scope)
        if kind is Kind.ALIAS:
            target = scope.lookup(node.alias or "")
            if target is None:
                return [Finding.unknown_type(path)]
            if step.hops >= self.max_alias_hops:
                return [Finding.recursion_limit(path)]
            return [_Step(target, value, path, scope, step.hops + 1)]
        raise AssertionError(f"unhandled schema kind: {kind!r}")  # pragma: no cover - Kind is closed

    def _expand_object(
        self,
        node: SchemaNode,
        value: Any,
        path: str,
        scope: DefinitionScope,
    ) -> List[_Pending]:
        if not isinstance(value, dict):
            return [Finding.expected("object", path)]

        pending: List[_Pending] = []
        # Unknown keys are only looked for when the object has more keys
        # than the schema declares.
        if len(value) > len(node.properties):
            declared = set(node.properties)
            pending.extend(Finding.unexpected_field(key, path) for key in value if key not in declared)

        for name, prop in node.properties.items():
            if name not in value:
                if not prop.optional:
                    pending.append(Finding.missing_key(name, path))
                continue
            pending.append(_Step(prop, value[name], f"{path}.{name}", scope, 0))
        return pending

    def _expand_list(
        self,
        node: SchemaNode,
        value: Any,
        path: str,
        scope: DefinitionScope,
    ) -> List[_Pending]:
        if not isinstance(value, list):
            return [Finding.expected("list", path)]
        element = node.element_schema
        if element is None:
            raise MalformedSchema("list node has no element schema", location=path)
        return [_Step(element, item, f"{path}[{i}]", scope, 0) for i, item in enumerate(value)]


def validate(
    schema: SchemaNode,
    value: Any,
    path: str = "",
    scope: Optional[DefinitionScope] = None,
    *,
    max_alias_hops: int = DEFAULT_MAX_ALIAS_HOPS,
) -> List[Finding]:
    """Validate ``value`` against ``schema`` with a fresh :class:`Validator`."""

    return Validator(max_alias_hops=max_alias_hops).validate(schema, value, path, scope)


__all__ = ["DEFAULT_MAX_ALIAS_HOPS", "Validator", "validate"]
