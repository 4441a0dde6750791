"""Smoke tests for the CLI entry point."""
from __future__ import annotations

import json

import pytest

from nap_engine import __main__
from nap_engine.cli import main

CANONICAL = {
    "name": {"legal": "Acme Dental, LLC", "preferred": "Acme Dental, LLC"},
    "addresses": [
        {"street1": "123 Main Street", "street2": "Suite 100", "city": "Springfield", "state": "IL", "zip": "62701"}
    ],
    "phones": [{"raw": "5551234567", "formatted": "(555) 123-4567", "isPrimary": True}],
    "website": "https://www.acmedental.com",
}

CITATIONS_CSV = (
    "source,url,name,address,phone,website\n"
    'Yelp,https://yelp.com/biz/acme,Acme Dental,"123 Main St, Ste 100, Springfield, IL 62701",(555) 123-4567,https://acmedental.com\n'
    'Yellow Pages,https://yp.com/acme,Acme Dental Care,"456 Oak Ave, Springfield, IL 62702",555-999-9999,\n'
)


def _write_inputs(tmp_path, canonical=CANONICAL):
    canonical_path = tmp_path / "canonical.json"
    canonical_path.write_text(json.dumps(canonical), encoding="utf-8")
    citations_path = tmp_path / "citations.csv"
    citations_path.write_text(CITATIONS_CSV, encoding="utf-8")
    return canonical_path, citations_path


def test_cli_smoke_writes_json_audit(tmp_path) -> None:
    canonical_path, citations_path = _write_inputs(tmp_path)
    output_path = tmp_path / "audit.json"
    schema_path = tmp_path / "schema.json"

    exit_code = main(
        [
            str(canonical_path),
            str(citations_path),
            str(output_path),
            "--mode",
            "concurrent",
            "--schema-output",
            str(schema_path),
        ]
    )

    assert exit_code == 0
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["totalCitations"] == 2
    assert payload["citations"][0]["consistencyScore"] == 100
    assert payload["issuesFound"] == 1
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    assert schema["telephone"] == "+1 555-123-4567"


def test_cli_applies_scoring_config(tmp_path) -> None:
    canonical_path, citations_path = _write_inputs(tmp_path)
    config_path = tmp_path / "scoring.json"
    config_path.write_text(json.dumps({"weights": {"address": 0, "phone": 0, "website": 0}}), encoding="utf-8")
    output_path = tmp_path / "audit.csv"

    exit_code = main([str(canonical_path), str(citations_path), str(output_path), "--config", str(config_path)])

    assert exit_code == 0
    contents = output_path.read_text(encoding="utf-8")
    assert "Yellow Pages" in contents


def test_cli_reports_invalid_canonical_record(tmp_path) -> None:
    canonical_path, citations_path = _write_inputs(tmp_path, dict(CANONICAL, addresses=[]))
    output_path = tmp_path / "audit.json"

    exit_code = main([str(canonical_path), str(citations_path), str(output_path)])

    assert exit_code == 1
    assert not output_path.exists()


def test_cli_reports_missing_canonical_file(tmp_path) -> None:
    _, citations_path = _write_inputs(tmp_path)
    output_path = tmp_path / "audit.json"

    exit_code = main([str(tmp_path / "missing.json"), str(citations_path), str(output_path)])

    assert exit_code == 1
    assert not output_path.exists()


def test_cli_reports_malformed_canonical_hours(tmp_path) -> None:
    canonical_path, citations_path = _write_inputs(tmp_path, dict(CANONICAL, hours={"regular": ["monday"]}))
    output_path = tmp_path / "audit.json"

    exit_code = main([str(canonical_path), str(citations_path), str(output_path)])

    assert exit_code == 1
    assert not output_path.exists()


def test_cli_reports_unsupported_citations_format(tmp_path) -> None:
    canonical_path, _ = _write_inputs(tmp_path)
    citations_path = tmp_path / "citations.txt"
    citations_path.write_text("Yelp", encoding="utf-8")

    exit_code = main([str(canonical_path), str(citations_path), str(tmp_path / "audit.json")])

    assert exit_code == 1


def test_cli_reports_invalid_scoring_config(tmp_path) -> None:
    canonical_path, citations_path = _write_inputs(tmp_path)
    config_path = tmp_path / "scoring.json"
    config_path.write_text(json.dumps({"weights": {"hours": 5}}), encoding="utf-8")

    exit_code = main([str(canonical_path), str(citations_path), str(tmp_path / "audit.json"), "--config", str(config_path)])

    assert exit_code == 1


def test_module_entry_point_delegates_to_cli(tmp_path) -> None:
    canonical_path, citations_path = _write_inputs(tmp_path)
    output_path = tmp_path / "audit.csv"

    exit_code = __main__.main([str(canonical_path), str(citations_path), str(output_path)])

    assert exit_code == 0
    assert output_path.exists()


def test_module_entry_point_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main([])

    captured = capsys.readouterr()
    assert "python -m nap_engine" in captured.out
    assert exit_code == 2
