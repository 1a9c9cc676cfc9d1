"""Closed vocabularies for the category fields of a run report.

Each enum's values are the exact literals accepted in report text.
Lookups are case-sensitive and never fall back to a default.
"""

from enum import Enum

from spirerun.util import VocabularyError


class FieldKind(Enum):
    DIFFICULTY = "difficulty"
    SEEDING = "seeding"
    CHARACTER = "character"
    GLITCHING = "glitching"


class Difficulty(Enum):
    ANY = "Any%"
    A20 = "Ascension-20"


class Seeding(Enum):
    SEEDED = "Seeded"
    UNSEEDED = "Unseeded"


class Character(Enum):
    IRONCLAD = "Ironclad"
    SILENT = "Silent"
    DEFECT = "Defect"
    WATCHER = "Watcher"
    FOUR = "4-Character"


class Glitching(Enum):
    GLITCHLESS = "Glitchless"
    GLITCHED = "Glitched"


class InvalidDifficulty(VocabularyError):
    tag = "InvalidDifficulty"
    kind = FieldKind.DIFFICULTY


class InvalidSeeding(VocabularyError):
    tag = "InvalidSeeding"
    kind = FieldKind.SEEDING


class InvalidCharacter(VocabularyError):
    tag = "InvalidCharacter"
    kind = FieldKind.CHARACTER


class InvalidGlitching(VocabularyError):
    tag = "InvalidGlitching"
    kind = FieldKind.GLITCHING


# literal -> member, built once from the enum definitions
_DIFFICULTIES = {m.value: m for m in Difficulty}
_SEEDINGS = {m.value: m for m in Seeding}
_CHARACTERS = {m.value: m for m in Character}
_GLITCHINGS = {m.value: m for m in Glitching}


def parse_difficulty(token: str) -> Difficulty:
    try:
        return _DIFFICULTIES[token]
    except (KeyError, TypeError):
        raise InvalidDifficulty(token) from None


def parse_seeding(token: str) -> Seeding:
    try:
        return _SEEDINGS[token]
    except (KeyError, TypeError):
        raise InvalidSeeding(token) from None


def parse_character(token: str) -> Character:
    try:
        return _CHARACTERS[token]
    except (KeyError, TypeError):
        raise InvalidCharacter(token) from None


def parse_glitching(token: str) -> Glitching:
    try:
        return _GLITCHINGS[token]
    except (KeyError, TypeError):
        raise InvalidGlitching(token) from None
