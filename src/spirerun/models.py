"""Data models."""

from dataclasses import dataclass
from datetime import date, time

from spirerun.vocab import Character, Difficulty, Glitching, Seeding


@dataclass(frozen=True)
class Duration:
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    @property
    def total_milliseconds(self) -> int:
        return (
            (self.hour * 60 + self.minute) * 60 + self.second
        ) * 1000 + self.millisecond

    def __str__(self) -> str:
        return f"{self.hour}:{self.minute:02d}:{self.second:02d}.{self.millisecond:03d}"


@dataclass(frozen=True)
class Times:
    rta: Duration
    igt: Duration | None = None


@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int
    released: date

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class Dates:
    submission: date
    run: date  # usually <= submission, not enforced
    submission_time: time | None = None


@dataclass(frozen=True)
class Unlocks:
    levels: tuple[int, int, int, int]
    bosses: tuple[int, int, int]


@dataclass(frozen=True)
class Category:
    character: Character
    difficulty: Difficulty
    seeding: Seeding
    glitching: Glitching


@dataclass(frozen=True)
class RunRecord:
    category: Category
    times: Times
    version: Version
    placing: int  # 1-based
    runner: str
    dates: Dates
    seed: str | None = None  # set iff category.seeding is SEEDED
    unlocks: Unlocks | None = None
    verified: bool = True  # False for "Claims to be Nth place"
    submitter: str = ""
    platform: str = ""
    notes: str | None = None  # None when the report has no Notes: block
