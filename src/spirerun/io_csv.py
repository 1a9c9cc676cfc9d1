"""CSV read/write with upsert and force replace."""

import csv
import logging
from pathlib import Path

from spirerun.models import RunRecord

logger = logging.getLogger(__name__)

RUN_COLUMNS = [
    "difficulty", "seeding", "glitching", "character", "placing", "verified",
    "runner", "rta", "rta_ms", "igt", "igt_ms", "version", "version_released",
    "seed", "submitter", "submission_date", "submission_time", "platform",
    "run_date", "notes",
]

RUN_KEY_COLUMNS = [
    "difficulty", "seeding", "glitching", "character", "runner", "run_date",
]
RUN_SORT_COLUMNS = [
    "difficulty", "seeding", "glitching", "character", "placing", "runner",
]


def record_to_row(record: RunRecord) -> dict:
    """Flatten a RunRecord into a dict of CSV strings."""
    category = record.category
    times = record.times
    dates = record.dates
    return {
        "difficulty": category.difficulty.value,
        "seeding": category.seeding.value,
        "glitching": category.glitching.value,
        "character": category.character.value,
        "placing": str(record.placing),
        "verified": "T" if record.verified else "F",
        "runner": record.runner,
        "rta": str(times.rta),
        "rta_ms": str(times.rta.total_milliseconds),
        "igt": str(times.igt) if times.igt else "",
        "igt_ms": str(times.igt.total_milliseconds) if times.igt else "",
        "version": str(record.version),
        "version_released": record.version.released.isoformat(),
        "seed": record.seed or "",
        "submitter": record.submitter,
        "submission_date": dates.submission.isoformat(),
        "submission_time": (
            dates.submission_time.strftime("%H:%M") if dates.submission_time else ""
        ),
        "platform": record.platform,
        "run_date": dates.run.isoformat(),
        "notes": record.notes or "",
    }


def _read_csv(path: Path) -> list[dict]:
    """Read existing CSV file, return list of dicts. Empty list if missing."""
    if not path.exists():
        return []
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return list(reader)


def _write_csv(path: Path, rows: list[dict], fieldnames: list[str]) -> None:
    """Write rows to CSV with LF line endings."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(
            f, fieldnames=fieldnames, quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )
        writer.writeheader()
        writer.writerows(rows)


def _sort_rows(rows: list[dict], sort_columns: list[str]) -> list[dict]:
    """Sort rows by sort_columns. Numeric columns sorted as numbers."""
    numeric_cols = {"placing", "rta_ms", "igt_ms"}

    def sort_key(row: dict) -> tuple:
        parts = []
        for col in sort_columns:
            val = row.get(col, "")
            if col in numeric_cols:
                try:
                    parts.append((0, int(val)))
                except (ValueError, TypeError):
                    parts.append((1, 0))
            else:
                parts.append((0, val))
        return tuple(parts)

    return sorted(rows, key=sort_key)


def upsert(
    csv_path: Path,
    new_rows: list[dict],
    key_columns: list[str],
    sort_columns: list[str],
    fieldnames: list[str],
) -> None:
    """Read existing CSV, upsert new rows by key, write sorted output."""
    indexed: dict[tuple, dict] = {}
    for row in _read_csv(csv_path) + new_rows:
        key = tuple(str(row.get(k, "")) for k in key_columns)
        indexed[key] = row

    rows = _sort_rows(list(indexed.values()), sort_columns)
    _write_csv(csv_path, rows, fieldnames)
    logger.info("Upserted %d new rows -> %d total rows in %s",
                len(new_rows), len(rows), csv_path)


def force_replace(
    csv_path: Path,
    new_rows: list[dict],
    filter_column: str,
    filter_values: set[str],
    sort_columns: list[str],
    fieldnames: list[str],
) -> None:
    """Remove rows whose filter_column is in filter_values, add new rows."""
    existing = _read_csv(csv_path)

    kept = [
        r for r in existing if str(r.get(filter_column, "")) not in filter_values
    ]
    removed = len(existing) - len(kept)

    kept.extend(new_rows)
    kept = _sort_rows(kept, sort_columns)
    _write_csv(csv_path, kept, fieldnames)
    logger.info(
        "Force replaced: removed %d, added %d -> %d total rows in %s",
        removed, len(new_rows), len(kept), csv_path,
    )


def write_runs_csv(records: list[RunRecord], path: Path) -> None:
    """Write the runs CSV from scratch."""
    rows = _sort_rows([record_to_row(r) for r in records], RUN_SORT_COLUMNS)
    _write_csv(path, rows, RUN_COLUMNS)
    logger.info("Wrote %d run rows to %s", len(rows), path)


def update_runs_csv(
    new_records: list[RunRecord],
    path: Path,
    force: bool,
) -> None:
    """Update the runs CSV with upsert, or replace every row of the runners
    present in new_records when force is set."""
    rows = [record_to_row(r) for r in new_records]
    if force:
        runners = {row["runner"] for row in rows}
        force_replace(path, rows, "runner", runners, RUN_SORT_COLUMNS, RUN_COLUMNS)
    else:
        upsert(path, rows, RUN_KEY_COLUMNS, RUN_SORT_COLUMNS, RUN_COLUMNS)
