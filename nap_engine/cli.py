"""Command line interface for running a NAP consistency audit."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import DEFAULT_SETTINGS, ConfigurationError, load_audit_settings
from .ingestion import (
    RecordFormatError,
    UnsupportedFileTypeError,
    export_audit_result,
    load_canonical_record,
    load_citations,
)
from .orchestrator import AuditOrchestrator
from .schema import generate_schema_org_nap
from .validation import InvalidCanonicalRecordError


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Audit business listings for Name/Address/Phone consistency",
    )
    parser.add_argument("canonical", help="Path to the canonical NAP record (JSON or YAML)")
    parser.add_argument("citations", help="Path to the discovered citations (CSV, XLSX or JSON)")
    parser.add_argument("output", help="Path where the audit result should be written (CSV, XLSX or JSON)")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional scoring configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--mode",
        choices=["sequential", "concurrent"],
        default="sequential",
        help="Whether to analyze citations sequentially or concurrently",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Maximum number of workers to use in concurrent mode",
    )
    parser.add_argument(
        "--schema-output",
        default=None,
        help="Also write the schema.org NAP projection of the canonical record to this JSON file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        settings = load_audit_settings(args.config) if args.config else DEFAULT_SETTINGS
        canonical = load_canonical_record(args.canonical)
        citations = load_citations(args.citations)
    except (ConfigurationError, RecordFormatError, UnsupportedFileTypeError, FileNotFoundError) as exc:
        logging.error("Unable to load audit inputs: %s", exc)
        return 1
    if not citations:
        logging.warning("No citations found in %s", args.citations)

    orchestrator = AuditOrchestrator(
        settings,
        concurrent=args.mode == "concurrent",
        max_workers=args.max_workers,
    )
    try:
        result = orchestrator.audit(canonical, citations)
    except InvalidCanonicalRecordError as exc:
        for error in exc.errors:
            logging.error("Canonical record: %s", error)
        return 1

    output_path = export_audit_result(result, args.output)
    logging.info("Overall consistency score: %s/100", result.overall_score)
    for recommendation in result.recommendations:
        logging.info("Recommendation: %s", recommendation)
    logging.info("Audit results written to %s", Path(output_path).resolve())

    if args.schema_output:
        schema_path = Path(args.schema_output)
        schema_path.parent.mkdir(parents=True, exist_ok=True)
        schema_path.write_text(
            json.dumps(generate_schema_org_nap(canonical), indent=2, ensure_ascii=False), encoding="utf-8"
        )
        logging.info("Schema.org NAP written to %s", schema_path.resolve())
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
