import pytest

from jtc.scope import DefinitionScope, lookup, merge
from jtc.typedef import Kind, SchemaNode


STRING = SchemaNode(kind=Kind.STRING)
NUMBER = SchemaNode(kind=Kind.NUMBER)


def test_empty_scope():
    scope = DefinitionScope.empty()
    assert len(scope) == 0
    assert lookup(scope, "T") is None


def test_merge_shadows_without_touching_parent():
    parent = DefinitionScope({"T": STRING, "U": STRING})
    child = merge(parent, {"T": NUMBER})
    assert child.lookup("T") is NUMBER
    assert child.lookup("U") is STRING
    assert parent.lookup("T") is STRING
    assert sorted(child) == ["T", "U"]


def test_merge_without_local_aliases_returns_same_scope():
    parent = DefinitionScope({"T": STRING})
    assert parent.merge({}) is parent
    assert parent.merge(None) is parent


def test_scope_copies_its_entries():
    entries = {"T": STRING}
    scope = DefinitionScope(entries)
    entries["T"] = NUMBER
    assert scope["T"] is STRING


def test_scope_is_read_only():
    scope = DefinitionScope({"T": STRING})
    with pytest.raises(TypeError):
        scope["T"] = NUMBER  # type: ignore[index]
    with pytest.raises(KeyError):
        scope["missing"]
