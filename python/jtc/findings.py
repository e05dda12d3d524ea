"""Diagnostics produced by a validation run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    UNKNOWN_TYPE = "unknown_type"
    RECURSION_LIMIT = "recursion_limit"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def fails_run(self) -> bool:
        return self is not Severity.WARNING


_GLYPHS = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️",
    Severity.UNKNOWN_TYPE: "❗",
    Severity.RECURSION_LIMIT: "⛔",
}


@dataclass(frozen=True, slots=True)
class Finding:
    """A single diagnostic: what went wrong and where in the data document.

    ``path`` is ``""`` for the document root, ``.name`` is appended for each
    object property and ``[i]`` for each list element.
    """

    severity: Severity
    path: str
    message: str

    def render(self) -> str:
        return f"{self.severity.glyph} {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {"severity": self.severity.value, "path": self.path, "message": self.message}

    # -- constructors used by the validator ---------------------------------
    @classmethod
    def expected(cls, what: str, path: str) -> "Finding":
        return cls(Severity.ERROR, path, f"expected {what} at {path}")

    @classmethod
    def missing_key(cls, name: str, path: str) -> "Finding":
        return cls(Severity.ERROR, path, f"missing key '{name}' at {path}")

    @classmethod
    def unexpected_field(cls, key: str, path: str) -> "Finding":
        return cls(Severity.WARNING, path, f"unexpected field '{key}' at {path}")

    @classmethod
    def unknown_type(cls, path: str) -> "Finding":
        return cls(Severity.UNKNOWN_TYPE, path, f"unknown type at {path}")

    @classmethod
    def recursion_limit(cls, path: str) -> "Finding":
        return cls(Severity.RECURSION_LIMIT, path, f"alias recursion limit exceeded at {path}")


class DiagnosticSink:
    """Append-only, ordered collection of findings for one run."""

    def __init__(self) -> None:
        self._findings: List[Finding] = []

    def record(self, finding: Finding) -> None:
        self._findings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        for finding in findings:
            self.record(finding)

    def all(self) -> Sequence[Finding]:
        return tuple(self._findings)

    def passed(self, *, strict: bool = False) -> bool:
        return findings_pass(self._findings, strict=strict)

    def counts(self) -> Dict[str, int]:
        return count_findings(self._findings)

    def __len__(self) -> int:
        return len(self._findings)

    def __iter__(self):
        return iter(tuple(self._findings))


def findings_pass(findings: Iterable[Finding], *, strict: bool = False) -> bool:
    """Return ``True`` unless a run-failing finding is present.

    Warnings only fail the run when ``strict`` is set.
    """

    for finding in findings:
        if finding.severity.fails_run or strict:
            return False
    return True


def count_findings(findings: Iterable[Finding]) -> Dict[str, int]:
    counts = {severity.value: 0 for severity in Severity}
    for finding in findings:
        counts[finding.severity.value] += 1
    return counts


__all__ = ["DiagnosticSink", "Finding", "Severity", "count_findings", "findings_pass"]
