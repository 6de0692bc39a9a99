from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from ..errors import BeanlintError
from ..ledger.models import Directive
from ..ledger.source import Sourced
from ..lint_engine import ClientLintConfig, LintContext, LintRunner, load_client_config
from ..lint_engine.appendix import AppendixExtractor, group_by_appendix
from ..lint_engine.catalog import dump_catalog
from ..lint_engine.models import LintRunReport
from ..logging_setup import configure_logging, get_logger
from ..pipelines.ledger_source import get_ledger_source, load_ledger

logger = get_logger(__name__)

CONFIG_ENV = "BEANLINT_CONFIG"

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def _load_config(path: Optional[str]) -> ClientLintConfig:
    path = path or os.getenv(CONFIG_ENV)
    if not path:
        return ClientLintConfig()
    logger.debug("loading lint configuration from %s", path)
    return load_client_config(Path(path))


def load_directives(path: str) -> List[Sourced[Directive]]:
    ledger = load_ledger(get_ledger_source(path))
    return ledger.directives()


def run_check(
    directives: Sequence[Sourced[Directive]],
    client_config: ClientLintConfig,
    *,
    lint_ids: Optional[set[str]] = None,
) -> LintRunReport:
    ctx = LintContext.from_config(directives, client_config)
    return LintRunner().run(ctx, lint_ids=lint_ids)


def format_appendix_listing(
    directives: Sequence[Sourced[Directive]],
    extractor: AppendixExtractor,
) -> str:
    out: List[str] = []
    for appendix, txns in group_by_appendix(directives, extractor):
        out.append(f"{appendix.id: >8} {appendix.statement}")
        for txn in txns:
            out.append(f"       ↳ {txn.location.file.display_name}:{txn.location.start_line + 1}")
        out.append("")
    return "\n".join(out)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beanlint",
        description="Lint beancount files in a directory.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path in which to look for *.beancount files (defaults to the working directory).",
    )
    parser.add_argument(
        "--log-level",
        "-d",
        default=None,
        help="Application log level: off, error, warning, info or debug (env BEANLINT_LOG_LEVEL).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"YAML lint configuration file (env {CONFIG_ENV}).",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Check ledger for all lints.")
    check.add_argument("--format", choices=("text", "json"), default="text", help="Output format (default: text).")
    check.add_argument(
        "--lint",
        action="append",
        dest="lint_ids",
        default=None,
        help="Only run the given lint id (repeatable).",
    )

    commands.add_parser("list-appendices", help="List all appendices referenced in the ledger.")

    catalog = commands.add_parser("catalog", help="Print the catalog of available lints.")
    catalog.add_argument("--format", choices=("yaml", "json"), default="yaml", help="Output format (default: yaml).")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "catalog":
        print(dump_catalog(args.format))
        return EXIT_OK

    try:
        client_config = _load_config(args.config)
        directives = load_directives(args.path)

        if args.command == "list-appendices":
            ctx = LintContext.from_config(directives, client_config)
            print(format_appendix_listing(directives, ctx.extractor))
            return EXIT_OK

        lint_ids = set(args.lint_ids) if args.lint_ids else None
        report = run_check(directives, client_config, lint_ids=lint_ids)
    except (BeanlintError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.format == "json":
        print(report.model_dump_json(indent=2))
    else:
        for finding in report.findings:
            sys.stderr.write(finding.rendered)

    return EXIT_FINDINGS if report.has_findings else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
