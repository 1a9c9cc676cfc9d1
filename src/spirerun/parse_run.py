"""Run report text parser.

A report reads, once line breaks are collapsed:

    Ascension-20 Unseeded - 4-Character in 28m 22s by Tickler - 2nd place
    [In-game time: 27m 1s] Version: 2.3 03/07/2022 [Seed: UPG42]
    [Notes: ...] Submitted by: Tickler on 2023-01-08, 11:44
    Played on: PC on 2023-01-08

Anchors are located left to right, each one after the end of the previous.
Notes are free text, so the notes block is closed by the last
"Submitted by:" that comes before the last "Played on:" in the report, and
its content is never searched for anchors. Text after the run date may
repeat "Submitted by:" without moving the boundary.
"""

import logging
import re
from datetime import date, time

from spirerun.models import Category, Dates, Duration, RunRecord, Times, Version
from spirerun.util import (
    InvalidDate,
    InvalidDuration,
    InvalidPlacing,
    InvalidRunner,
    InvalidVersion,
    MissingAnchor,
    MissingSeed,
    normalize_whitespace,
)
from spirerun.vocab import (
    Glitching,
    InvalidGlitching,
    Seeding,
    parse_character,
    parse_difficulty,
    parse_glitching,
    parse_seeding,
)

logger = logging.getLogger(__name__)

IGT_ANCHOR = "In-game time:"
VERSION_ANCHOR = "Version:"
NOTES_ANCHOR = "Notes:"
SUBMITTED_ANCHOR = "Submitted by:"
PLAYED_ANCHOR = "Played on:"

# "54s", "1m 54s", "1h 2m 3s", each optionally followed by "440ms".
# Digit runs are bounded so int() never sees an oversized literal.
_DURATION_PATTERN = re.compile(
    r"(?:(?:(\d{1,9})h )?(\d{1,9})m )?(\d{1,9})s(?: (\d{1,9})ms)?", re.ASCII,
)
_PLACING_PATTERN = re.compile(r"(Claims to be )?(\d{1,9})(?:st|nd|rd|th)", re.ASCII)
_VERSION_PATTERN = re.compile(r"(\d{1,9})\.(\d{1,9})(?:\.(\d{1,9}))?", re.ASCII)
_ISO_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
_US_DATE_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{4})", re.ASCII)
_CLOCK_PATTERN = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)
_SEED_PATTERN = re.compile(r"(?:Seed:(?: (\S+))?)?")


class _Scanner:
    """Cursor over normalized report text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def until(self, anchor: str) -> str:
        """Return the span before the next *anchor* and move past it."""
        return self._take(self.text.find(anchor, self.pos), anchor)

    def until_last(self, anchor: str, before: str) -> str:
        """Like until(), but stop at the last *anchor* that still has a
        *before* anchor after it."""
        end = self.text.rfind(before, self.pos)
        if end < 0:
            end = len(self.text)
        return self._take(self.text.rfind(anchor, self.pos, end), anchor)

    def token(self) -> str:
        """Return the next space-delimited token and move past it."""
        start = self.pos
        while start < len(self.text) and self.text[start] == " ":
            start += 1
        end = self.text.find(" ", start)
        if end < 0:
            end = len(self.text)
        self.pos = end
        return self.text[start:end]

    def rest(self) -> str:
        span = self.text[self.pos:].strip()
        self.pos = len(self.text)
        return span

    def _take(self, idx: int, anchor: str) -> str:
        if idx < 0:
            raise MissingAnchor(anchor.strip())
        span = self.text[self.pos:idx].strip()
        # Keep a trailing space so the next anchor can start with one.
        self.pos = idx + len(anchor.rstrip())
        logger.debug("span before %r -> %r", anchor.strip(), span)
        return span


def parse(text: str) -> RunRecord:
    """Parse one run report into a RunRecord.

    Raises the first ParseError met in anchor order.
    """
    scanner = _Scanner(normalize_whitespace(text))

    header = scanner.until(" - ")
    difficulty, seeding, glitching = _parse_header(header)
    character = parse_character(scanner.until(" in "))
    rta = parse_duration(scanner.until(" by "), "rta")

    runner = scanner.until(" - ")
    if not runner:
        raise InvalidRunner()
    placing, verified = parse_placing(scanner.until(" place"))

    igt_block = scanner.until(VERSION_ANCHOR)
    igt = None
    if igt_block:
        if not igt_block.startswith(IGT_ANCHOR):
            raise MissingAnchor(IGT_ANCHOR)
        igt = parse_duration(igt_block[len(IGT_ANCHOR):].strip(), "igt")

    version_text = scanner.token()
    released_text = scanner.token()
    version = parse_version(version_text, released_text)

    setup, has_notes, notes = scanner.until_last(
        SUBMITTED_ANCHOR, PLAYED_ANCHOR,
    ).partition(NOTES_ANCHOR)
    seed = _parse_seed(setup.strip(), seeding)

    submitter, submission, submission_time = _parse_submission(
        scanner.until(PLAYED_ANCHOR)
    )
    platform, run_date = _parse_played(scanner.rest())

    record = RunRecord(
        category=Category(
            character=character,
            difficulty=difficulty,
            seeding=seeding,
            glitching=glitching,
        ),
        times=Times(rta=rta, igt=igt),
        version=version,
        placing=placing,
        runner=runner,
        dates=Dates(
            submission=submission,
            run=run_date,
            submission_time=submission_time,
        ),
        seed=seed,
        verified=verified,
        submitter=submitter,
        platform=platform,
        notes=notes.strip() if has_notes else None,
    )
    logger.debug(
        "Parsed run: %s %s %s by %s, #%d in %s",
        difficulty.value, seeding.value, character.value,
        runner, placing, rta,
    )
    return record


def _parse_header(header: str) -> tuple:
    """Split "<difficulty> <seeding> [<glitching>]"."""
    tokens = header.split(" ")
    difficulty = parse_difficulty(tokens[0])
    seeding = parse_seeding(tokens[1] if len(tokens) > 1 else "")
    if len(tokens) > 3:
        raise InvalidGlitching(" ".join(tokens[2:]))
    if len(tokens) == 3:
        glitching = parse_glitching(tokens[2])
    else:
        glitching = Glitching.GLITCHLESS
    return difficulty, seeding, glitching


def parse_duration(text: str, field: str) -> Duration:
    """Parse "Ns", "Mm Ns" or "Hh Mm Ns" with an optional "Wms" suffix."""
    m = _DURATION_PATTERN.fullmatch(text)
    if not m:
        raise InvalidDuration(field, text)
    hour, minute, second, millisecond = (int(g) if g else 0 for g in m.groups())
    return Duration(
        hour=hour, minute=minute, second=second, millisecond=millisecond,
    )


def parse_placing(text: str) -> tuple[int, bool]:
    """Return (placing, verified) from "2nd" or "Claims to be 1st"."""
    m = _PLACING_PATTERN.fullmatch(text)
    if not m:
        raise InvalidPlacing(text)
    placing = int(m.group(2))
    if placing < 1:
        raise InvalidPlacing(text)
    return placing, m.group(1) is None


def parse_version(text: str, released_text: str) -> Version:
    """Parse "2.3" or "2.3.4" plus its MM/DD/YYYY release date."""
    m = _VERSION_PATTERN.fullmatch(text)
    if not m:
        raise InvalidVersion(text)
    major, minor, patch = (int(g) if g else 0 for g in m.groups())

    d = _US_DATE_PATTERN.fullmatch(released_text)
    if not d:
        raise InvalidDate("release", released_text)
    month, day, year = (int(g) for g in d.groups())
    return Version(
        major=major,
        minor=minor,
        patch=patch,
        released=_make_date(year, month, day, "release", released_text),
    )


def parse_iso_date(text: str, field: str) -> date:
    """Parse a YYYY-MM-DD date."""
    m = _ISO_DATE_PATTERN.fullmatch(text)
    if not m:
        raise InvalidDate(field, text)
    year, month, day = (int(g) for g in m.groups())
    return _make_date(year, month, day, field, text)


def _make_date(year: int, month: int, day: int, field: str, text: str) -> date:
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidDate(field, text) from None


def _parse_seed(setup: str, seeding: Seeding) -> str | None:
    m = _SEED_PATTERN.fullmatch(setup)
    if not m:
        raise MissingAnchor(NOTES_ANCHOR)
    seed = m.group(1)
    if seeding is not Seeding.SEEDED:
        if seed:
            logger.debug("Ignoring seed %r on an unseeded run", seed)
        return None
    if not seed:
        raise MissingSeed()
    return seed


def _parse_submission(text: str) -> tuple[str, date, time | None]:
    """Split "<submitter> on YYYY-MM-DD, HH:MM"."""
    submitter, sep, stamp = text.rpartition(" on ")
    if not sep:
        raise MissingAnchor("on")
    date_text, has_clock, clock_text = stamp.partition(",")
    submission = parse_iso_date(date_text.strip(), "submission")

    submission_time = None
    if has_clock:
        clock_text = clock_text.strip()
        m = _CLOCK_PATTERN.fullmatch(clock_text)
        if not m:
            raise InvalidDate("submission_time", clock_text)
        try:
            submission_time = time(int(m.group(1)), int(m.group(2)))
        except ValueError:
            raise InvalidDate("submission_time", clock_text) from None
    return submitter.strip(), submission, submission_time


def _parse_played(text: str) -> tuple[str, date]:
    """Split "<platform> on YYYY-MM-DD [trailing text]"."""
    platform, sep, tail = text.partition(" on ")
    if not sep:
        raise MissingAnchor("on")
    date_text, _, trailing = tail.partition(" ")
    if trailing:
        logger.debug("Ignoring text after run date: %r", trailing)
    return platform.strip(), parse_iso_date(date_text, "run")
