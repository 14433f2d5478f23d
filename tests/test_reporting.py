from pathlib import Path

from idnr.reporting import ValidationReport, check, human_summary, to_json


def _sample_reports() -> list[ValidationReport]:
    return [check("86095742719"), check("25768131412"), check(None)]


def test_check_valid() -> None:
    report = check("86095742719")
    assert report.valid
    assert report.errors == []
    assert not report.structural
    assert report.idnr == "*********19"


def test_check_structural() -> None:
    report = check("abcdefghijk")
    assert not report.valid
    assert report.errors == ["IDNR_FORMAT_MISSMATCH"]
    assert report.structural


def test_check_content_errors_sorted() -> None:
    report = check("22558131412")
    assert report.errors == ["CHECKSUM_MISSMATCH", "NUMBER_TO_MANY_OCCURENCES_OF_SAME_DIGIT"]
    assert not report.structural


def test_to_json_schema(tmp_path: Path) -> None:
    """Ensure the JSON report includes expected keys and masked numbers."""
    out_path = tmp_path / "out" / "report.json"

    to_json(_sample_reports(), out_path)

    report_text = out_path.read_text(encoding="utf-8")
    assert '"idnr": "*********12"' in report_text
    assert '"valid": true' in report_text
    assert '"CHECKSUM_MISSMATCH"' in report_text
    assert '"idnr": "<none>"' in report_text
    assert "25768131412" not in report_text


def test_to_json_as_string(tmp_path: Path) -> None:
    out_path = tmp_path / "report.json"
    json_str = to_json([check(None)], out_path, return_as_string=True)

    assert json_str is not None
    assert '"IDNR_IS_NULL"' in json_str
    assert not out_path.exists()


def test_human_summary_privacy() -> None:
    """human_summary should not leak raw numbers."""
    summary = human_summary(_sample_reports())

    assert "- valid: 1" in summary
    assert "- invalid: 2" in summary
    assert "- CHECKSUM_MISSMATCH: 1" in summary
    assert "- IDNR_IS_NULL: 1" in summary
    assert "25768131412" not in summary


def test_human_summary_empty() -> None:
    assert human_summary([]) == "Validation Summary:\n- No numbers checked"
