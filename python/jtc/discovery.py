"""Locate typedef documents and the data documents they describe.

``people.typedef.json`` describes ``people.json`` in the same directory.
A typedef without a data sibling is skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from .config import DEFAULT_DATA_SUFFIX, DEFAULT_TYPEDEF_SUFFIX

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FilePair:
    typedef_path: Path
    data_path: Path


def find_typedef_files(directory: str | Path, suffix: str = DEFAULT_TYPEDEF_SUFFIX) -> List[Path]:
    """Return every ``*<suffix>`` file below ``directory``, sorted."""

    root = Path(directory)
    if not root.is_dir():
        raise NotADirectoryError(root)
    found = [
        p for p in root.rglob(f"*{suffix}")
        if p.is_file() and len(p.name) > len(suffix)
    ]
    found.sort()
    log.debug("found %d typedef file(s) under %s", len(found), root)
    return found


def data_file_for(
    typedef_path: str | Path,
    typedef_suffix: str = DEFAULT_TYPEDEF_SUFFIX,
    data_suffix: str = DEFAULT_DATA_SUFFIX,
) -> Optional[Path]:
    """Return the data document paired with ``typedef_path`` if it exists."""

    typedef_path = Path(typedef_path)
    name = typedef_path.name
    if not name.endswith(typedef_suffix):
        raise ValueError(f"{typedef_path} does not end with {typedef_suffix!r}")
    candidate = typedef_path.with_name(name[: -len(typedef_suffix)] + data_suffix)
    if candidate.is_file():
        return candidate
    return None


def iter_pairs(
    directory: str | Path,
    typedef_suffix: str = DEFAULT_TYPEDEF_SUFFIX,
    data_suffix: str = DEFAULT_DATA_SUFFIX,
) -> Iterator[FilePair]:
    for typedef_path in find_typedef_files(directory, typedef_suffix):
        data_path = data_file_for(typedef_path, typedef_suffix, data_suffix)
        if data_path is None:
            log.info("no data file for %s, skipping", typedef_path)
            continue
        yield FilePair(typedef_path=typedef_path, data_path=data_path)


__all__ = ["FilePair", "data_file_for", "find_typedef_files", "iter_pairs"]
