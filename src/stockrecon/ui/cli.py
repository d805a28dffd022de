# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from stockrecon.adapters.catalog_api import HttpCatalogFetcher, parse_catalog_entry
from stockrecon.adapters.rows import parse_import_rows, read_json_rows, template_row
from stockrecon.app import persist_matched, start_import
from stockrecon.config import ConfigurationError, configure_logging
from stockrecon.domain.model import OutcomeStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from stockrecon.domain.model import CatalogEntry, ImportRow, ReconciliationOutcome
    from stockrecon.domain.ports.fetching import CatalogFetcher
    from stockrecon.domain.reconciliation import CatalogIndex, ReconciliationSession

log = logging.getLogger(__name__)

type Prompt = Callable[[str], str]


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile supplier stock files")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile", help="Match supplier rows against the product catalog"
    )
    reconcile.add_argument("rows", type=Path, help="JSON array or JSON Lines file of rows")
    source = reconcile.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--catalog",
        type=Path,
        help="JSON array or JSON Lines file of catalog entries",
    )
    source.add_argument(
        "--catalog-api",
        action="store_true",
        help="Fetch the catalog from CATALOG_API_URL",
    )
    reconcile.add_argument("--supplier-id", type=str, help="Supplier owning the stock rows")
    reconcile.add_argument(
        "--persist",
        action="store_true",
        help="Store matched rows as supplier inventory",
    )
    reconcile.add_argument(
        "--replace",
        action="store_true",
        help="Delete the supplier's previous inventory before storing (implies --persist)",
    )
    reconcile.add_argument(
        "--delivery-region",
        action="append",
        default=[],
        dest="delivery_regions",
        help="Region the supplier delivers to; may be repeated",
    )
    reconcile.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for a choice on every ambiguous row",
    )
    reconcile.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Continue with the valid rows when some rows fail validation",
    )
    reconcile.add_argument("--report", type=Path, help="Write a JSON report of all outcomes")

    template = subparsers.add_parser("template", help="Write a sample import row")
    template.add_argument("--output", type=Path, help="Target file (defaults to stdout)")

    return parser.parse_args(list(argv))


def _load_rows(path: Path, *, skip_invalid: bool) -> list[ImportRow]:
    rows, errors = parse_import_rows(read_json_rows(path))
    for error in errors:
        log.warning("Invalid row: %s", error)
    if errors and not skip_invalid:
        raise ValueError(f"{len(errors)} invalid rows in {path}; use --skip-invalid to ignore")
    return rows


def _load_catalog_file(path: Path) -> list[CatalogEntry]:
    return [parse_catalog_entry(payload) for payload in read_json_rows(path)]


def _describe_row(row: ImportRow) -> str:
    parts = [row.name, row.form, row.dosage, row.packaging, row.manufacturer]
    return " | ".join(part or "-" for part in parts)


def _describe_entry(index: CatalogIndex, catalog_entry_id: str) -> str:
    entry = index.get(catalog_entry_id)
    if entry is None:
        return catalog_entry_id
    parts = [entry.name, entry.form, entry.dosage, entry.packaging, entry.manufacturer]
    return " | ".join(part or "-" for part in parts)


def _resolve_interactively(session: ReconciliationSession, *, prompt: Prompt = input) -> int:
    """Ask for a choice on every pending row; return how many were resolved."""

    resolved = 0
    for row_index in session.pending_indices():
        outcome = session.outcome(row_index)
        if outcome.status is not OutcomeStatus.AMBIGUOUS:
            continue
        print(f"\nRow {row_index + 1}: {_describe_row(outcome.row)}")
        if not outcome.candidates:
            print("  no suggestions")
            continue
        for number, candidate in enumerate(outcome.candidates, start=1):
            description = _describe_entry(session.index, candidate.catalog_entry_id)
            print(f"  [{number}] {candidate.score:.2f}  {description}")

        while True:
            answer = prompt("Choice (number, s=skip, q=quit): ").strip().lower()
            if answer in {"", "s"}:
                break
            if answer == "q":
                return resolved
            if answer.isdigit() and 1 <= int(answer) <= len(outcome.candidates):
                chosen = outcome.candidates[int(answer) - 1]
                session.resolve(row_index, chosen.catalog_entry_id)
                resolved += 1
                break
            print("  invalid choice")
    return resolved


def _outcome_record(position: int, outcome: ReconciliationOutcome) -> dict[str, object]:
    record: dict[str, object] = {
        "row_index": position,
        "source_row": outcome.row.source_row,
        "name": outcome.row.name,
        "status": str(outcome.status),
    }
    if outcome.status is OutcomeStatus.MATCHED:
        record["match_kind"] = str(outcome.match_kind)
        record["catalog_entry_id"] = outcome.catalog_entry_id
        record["score"] = outcome.score
    else:
        record["candidates"] = [
            {"catalog_entry_id": candidate.catalog_entry_id, "score": candidate.score}
            for candidate in outcome.candidates
        ]
    return record


def _write_report(session: ReconciliationSession, path: Path) -> None:
    summary = session.summary()
    report = {
        "session_id": str(session.id),
        "summary": {
            "total": summary.total,
            "matched": summary.matched,
            "exact": summary.exact,
            "manual": summary.manual,
            "ambiguous": summary.ambiguous,
            "without_suggestions": summary.without_suggestions,
            "persisted": summary.persisted,
        },
        "outcomes": [
            _outcome_record(position, outcome)
            for position, outcome in enumerate(session.outcomes())
        ],
    }
    path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
    log.info("Wrote reconciliation report to %s", path)


def _print_summary(session: ReconciliationSession) -> None:
    summary = session.summary()
    print(
        f"rows={summary.total} matched={summary.matched} (exact={summary.exact}, "
        f"manual={summary.manual}) ambiguous={summary.ambiguous} "
        f"without_suggestions={summary.without_suggestions} persisted={summary.persisted}"
    )


def _reconcile(
    args: argparse.Namespace,
    rows: list[ImportRow],
    *,
    catalog: list[CatalogEntry] | None,
    fetcher: CatalogFetcher | None,
    prompt: Prompt,
) -> None:
    session = start_import(rows, fetcher=fetcher, catalog=catalog)
    if args.interactive:
        resolved = _resolve_interactively(session, prompt=prompt)
        log.info("Resolved %s rows interactively", resolved)
    if args.persist:
        persist_matched(
            session,
            supplier_id=args.supplier_id,
            replace_existing=args.replace,
            delivery_regions=args.delivery_regions,
        )
    if args.report is not None:
        _write_report(session, args.report)
    _print_summary(session)


def _write_template(output: Path | None) -> None:
    payload = json.dumps([template_row()], indent=2, ensure_ascii=False)
    if output is None:
        print(payload)
    else:
        output.write_text(payload + "\n", encoding="utf-8")
        log.info("Wrote import template to %s", output)


def main(argv: Sequence[str] | None = None, *, prompt: Prompt = input) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    rows: list[ImportRow] = []
    catalog: list[CatalogEntry] | None = None
    fetcher: CatalogFetcher | None = None
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "reconcile":
            if parsed_args.replace:
                parsed_args.persist = True
            if parsed_args.persist and not parsed_args.supplier_id:
                raise ValueError("--persist requires --supplier-id")  # noqa: TRY301
            rows = _load_rows(parsed_args.rows, skip_invalid=parsed_args.skip_invalid)
            if parsed_args.catalog is not None:
                catalog = _load_catalog_file(parsed_args.catalog)
            else:
                fetcher = HttpCatalogFetcher()
    except (ValueError, OSError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            _reconcile(parsed_args, rows, catalog=catalog, fetcher=fetcher, prompt=prompt)
        elif parsed_args.command == "template":
            _write_template(parsed_args.output)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
