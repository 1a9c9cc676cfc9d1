"""CLI entry point and main processing flow."""

import argparse
import logging
import sys
import time
from pathlib import Path

from spirerun.io_csv import update_runs_csv
from spirerun.models import RunRecord
from spirerun.page import report_text_from_html
from spirerun.parse_run import parse
from spirerun.util import ParseError, SpirerunError

logger = logging.getLogger("spirerun")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spirerun",
        description="Parse Slay the Spire run reports and generate a CSV.",
    )
    parser.add_argument(
        "inputs", nargs="+", type=Path,
        help="Run report files (plain text or saved run page HTML)",
    )
    parser.add_argument(
        "--format", choices=["auto", "text", "html"], default="auto",
        help="Input format (default: auto, by extension or leading '<')",
    )
    parser.add_argument(
        "--out", type=Path, default=None,
        help="Output CSV path (default: data/runs.csv under the project root)",
    )
    parser.add_argument(
        "--force", action="store_true", default=False,
        help="Replace all rows of the parsed runners (default: upsert)",
    )
    parser.add_argument(
        "--log-level", choices=["INFO", "DEBUG"], default="INFO",
        help="Logging level (default: INFO)",
    )
    return parser


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def _project_root() -> Path:
    """Find project root (directory containing pyproject.toml or data/)."""
    p = Path.cwd()
    for _ in range(10):
        if (p / "pyproject.toml").exists():
            return p
        if (p / "data").is_dir():
            return p
        parent = p.parent
        if parent == p:
            break
        p = parent
    return Path.cwd()


def _is_html(path: Path, content: str, fmt: str) -> bool:
    if fmt != "auto":
        return fmt == "html"
    if path.suffix.lower() in (".html", ".htm"):
        return True
    return content.lstrip().startswith("<")


def read_report(path: Path, fmt: str = "auto") -> str:
    """Read a report file and return its report text."""
    content = path.read_text(encoding="utf-8")
    if _is_html(path, content, fmt):
        return report_text_from_html(content)
    return content


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.log_level)

    out_path = args.out or _project_root() / "data" / "runs.csv"
    logger.info("Parsing %d report(s) -> %s", len(args.inputs), out_path)

    start_time = time.time()

    try:
        records: list[RunRecord] = []
        failures: dict[str, int] = {}

        for path in args.inputs:
            try:
                text = read_report(path, args.format)
            except UnicodeDecodeError as e:
                failures["InvalidEncoding"] = failures.get("InvalidEncoding", 0) + 1
                logger.warning("Rejected %s [InvalidEncoding]: %s", path, e)
                continue
            try:
                record = parse(text)
            except ParseError as e:
                failures[e.tag] = failures.get(e.tag, 0) + 1
                logger.warning("Rejected %s [%s]: %s", path, e.tag, e)
                continue
            records.append(record)
            logger.info(
                "%s: %s %s %s, #%d %s",
                path, record.category.difficulty.value,
                record.category.seeding.value,
                record.category.character.value,
                record.placing, record.runner,
            )

        if not records:
            logger.error("No report could be parsed")
            sys.exit(1)

        update_runs_csv(records, out_path, args.force)

        elapsed = time.time() - start_time
        logger.info("=== Summary ===")
        logger.info("Parsed: %d", len(records))
        logger.info(
            "Rejected: %d%s",
            sum(failures.values()),
            " (" + ", ".join(f"{t}={n}" for t, n in failures.items()) + ")"
            if failures else "",
        )
        logger.info("Elapsed: %.1fs", elapsed)

    except (SpirerunError, OSError) as e:
        logger.error("Fatal error: %s", e)
        sys.exit(1)
