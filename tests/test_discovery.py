import pytest

from jtc.discovery import data_file_for, find_typedef_files, iter_pairs


def _touch(path, text="{}"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_find_typedef_files_is_recursive_and_sorted(tmp_path):
    b = _touch(tmp_path / "b.typedef.json")
    a = _touch(tmp_path / "sub" / "a.typedef.json")
    _touch(tmp_path / "b.json")
    _touch(tmp_path / "notes.txt")
    _touch(tmp_path / ".typedef.json")
    (tmp_path / "dir.typedef.json").mkdir()
    assert find_typedef_files(tmp_path) == sorted([a, b])


def test_find_typedef_files_requires_directory(tmp_path):
    with pytest.raises(NotADirectoryError):
        find_typedef_files(tmp_path / "missing")


def test_data_file_for(tmp_path):
    typedef = _touch(tmp_path / "people.typedef.json")
    assert data_file_for(typedef) is None
    data = _touch(tmp_path / "people.json")
    assert data_file_for(typedef) == data
    with pytest.raises(ValueError):
        data_file_for(tmp_path / "people.json")


def test_iter_pairs_skips_typedefs_without_data(tmp_path):
    _touch(tmp_path / "a.typedef.json")
    _touch(tmp_path / "a.json")
    _touch(tmp_path / "lonely.typedef.json")
    pairs = list(iter_pairs(tmp_path))
    assert [(p.typedef_path.name, p.data_path.name) for p in pairs] == [("a.typedef.json", "a.json")]


def test_custom_suffixes(tmp_path):
    _touch(tmp_path / "a.shape.json")
    _touch(tmp_path / "a.data.json")
    pairs = list(iter_pairs(tmp_path, ".shape.json", ".data.json"))
    assert [p.data_path.name for p in pairs] == ["a.data.json"]
