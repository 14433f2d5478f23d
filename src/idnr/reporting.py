"""Report generation utilities."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass
from pathlib import Path

from .utils import error_names, mask_idnr
from .validators import ValidationError, validate

STRUCTURAL_ERRORS: frozenset[ValidationError] = frozenset(
    {
        ValidationError.IDNR_IS_NULL,
        ValidationError.IDNR_LENGTH_MISSMATCH,
        ValidationError.IDNR_FORMAT_MISSMATCH,
    }
)


@dataclass(slots=True)
class ValidationReport:
    """Outcome of validating a single IdNr, safe to store or display."""

    idnr: str
    valid: bool
    errors: list[str]
    structural: bool

    def to_dict(self) -> dict[str, object]:
        """Return a stable, serializable representation of this report."""
        return asdict(self)


def check(idnr: str | None) -> ValidationReport:
    """Validate idnr and wrap the outcome in a report with a masked number."""
    errors = validate(idnr)
    return ValidationReport(
        idnr=mask_idnr(idnr),
        valid=not errors,
        errors=error_names(errors),
        # a structural error is always reported alone
        structural=bool(errors & STRUCTURAL_ERRORS),
    )


def to_json(
    reports: list[ValidationReport], outfile: Path, return_as_string: bool = False
) -> str | None:
    payload = [r.to_dict() for r in reports]
    json_str = json.dumps(payload, indent=2)

    if return_as_string:
        return json_str

    outfile.parent.mkdir(parents=True, exist_ok=True)
    outfile.write_text(json_str, encoding="utf-8")
    return None


def human_summary(reports: list[ValidationReport]) -> str:
    if not reports:
        return "Validation Summary:\n- No numbers checked"

    valid = sum(1 for report in reports if report.valid)
    counts = Counter(error for report in reports for error in report.errors)

    lines = [f"- valid: {valid}", f"- invalid: {len(reports) - valid}"]
    lines.extend(f"- {error}: {count}" for error, count in sorted(counts.items()))
    return "Validation Summary:\n" + "\n".join(lines)
