"""Drive validation over typedef/data document pairs."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .config import CheckConfig
from .discovery import iter_pairs
from .errors import MalformedJSON, MalformedSchema
from .findings import Finding, count_findings, findings_pass
from .typedef import parse_typedef
from .validator import DEFAULT_MAX_ALIAS_HOPS, Validator

log = logging.getLogger(__name__)


def parse_data(data: bytes | str, *, source: Optional[str] = None) -> Any:
    """Decode a JSON data document, raising :class:`MalformedJSON` on failure."""

    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise MalformedJSON(f"not UTF-8 text: {exc}", source=source) from exc
    try:
        return json.loads(data.lstrip("\ufeff"))
    except json.JSONDecodeError as exc:
        raise MalformedJSON(f"invalid JSON: {exc}", source=source) from exc
    except RecursionError as exc:
        raise MalformedJSON("document nested too deeply", source=source) from exc


def validate_pair(
    schema_data: bytes | str,
    value_data: bytes | str,
    *,
    max_alias_hops: int = DEFAULT_MAX_ALIAS_HOPS,
    schema_source: Optional[str] = None,
    value_source: Optional[str] = None,
) -> List[Finding]:
    """Parse a typedef and a data document and validate one against the other.

    Starts from the document root with an empty alias scope.
    """

    schema = parse_typedef(schema_data, source=schema_source)
    value = parse_data(value_data, source=value_source)
    return Validator(max_alias_hops=max_alias_hops).validate(schema, value)


@dataclass(slots=True)
class PairReport:
    """Outcome of checking one data document against its typedef."""

    typedef_path: Path
    data_path: Path
    findings: List[Finding] = field(default_factory=list)
    error: Optional[str] = None

    def ok(self, *, strict: bool = False) -> bool:
        if self.error is not None:
            return False
        return findings_pass(self.findings, strict=strict)

    def to_dict(self, *, strict: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "typedef": str(self.typedef_path),
            "data": str(self.data_path),
            "ok": self.ok(strict=strict),
            "counts": count_findings(self.findings),
            "findings": [f.to_dict() for f in self.findings],
        }
        if self.error is not None:
            data["error"] = self.error
        return data


def check_pair(
    typedef_path: str | Path,
    data_path: str | Path,
    *,
    max_alias_hops: int = DEFAULT_MAX_ALIAS_HOPS,
) -> PairReport:
    """Read and validate one pair of files.

    Malformed documents are recorded on the report instead of being
    raised; I/O errors propagate.
    """

    typedef_path = Path(typedef_path)
    data_path = Path(data_path)
    report = PairReport(typedef_path=typedef_path, data_path=data_path)
    log.debug("validating %s against %s", data_path, typedef_path)
    try:
        schema = parse_typedef(typedef_path.read_bytes(), source=str(typedef_path))
        value = parse_data(data_path.read_bytes(), source=str(data_path))
    except (MalformedSchema, MalformedJSON) as exc:
        report.error = str(exc)
        return report
    report.findings = Validator(max_alias_hops=max_alias_hops).validate(schema, value)
    return report


def check_directory(config: CheckConfig) -> Iterator[PairReport]:
    """Yield a report for every typedef/data pair below ``config.directory``."""

    for pair in iter_pairs(config.directory, config.typedef_suffix, config.data_suffix):
        report = check_pair(pair.typedef_path, pair.data_path, max_alias_hops=config.max_alias_hops)
        log.debug(
            "%s: %s",
            report.data_path,
            "ok" if report.ok(strict=config.strict) else "failed",
        )
        yield report


__all__ = ["PairReport", "check_directory", "check_pair", "parse_data", "validate_pair"]
