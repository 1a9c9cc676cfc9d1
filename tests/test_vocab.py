"""Tests for spirerun.vocab."""

import pytest

from spirerun.util import ParseError, VocabularyError
from spirerun.vocab import (
    Character,
    Difficulty,
    FieldKind,
    Glitching,
    InvalidCharacter,
    InvalidDifficulty,
    InvalidGlitching,
    InvalidSeeding,
    Seeding,
    parse_character,
    parse_difficulty,
    parse_glitching,
    parse_seeding,
)


class TestAcceptedLiterals:
    def test_difficulty(self) -> None:
        assert parse_difficulty("Any%") is Difficulty.ANY
        assert parse_difficulty("Ascension-20") is Difficulty.A20

    def test_seeding(self) -> None:
        assert parse_seeding("Seeded") is Seeding.SEEDED
        assert parse_seeding("Unseeded") is Seeding.UNSEEDED

    def test_character(self) -> None:
        assert parse_character("Ironclad") is Character.IRONCLAD
        assert parse_character("Silent") is Character.SILENT
        assert parse_character("Defect") is Character.DEFECT
        assert parse_character("Watcher") is Character.WATCHER
        assert parse_character("4-Character") is Character.FOUR

    def test_glitching(self) -> None:
        assert parse_glitching("Glitchless") is Glitching.GLITCHLESS
        assert parse_glitching("Glitched") is Glitching.GLITCHED


class TestRejection:
    @pytest.mark.parametrize("token", [
        "Ascension-19", "any%", "Any", "Any% ", "", "A20",
    ])
    def test_unknown_difficulty(self, token: str) -> None:
        with pytest.raises(InvalidDifficulty) as exc:
            parse_difficulty(token)
        assert exc.value.kind is FieldKind.DIFFICULTY
        assert exc.value.value == token

    @pytest.mark.parametrize("token", ["seeded", "UNSEEDED", "Set Seed", ""])
    def test_unknown_seeding(self, token: str) -> None:
        with pytest.raises(InvalidSeeding) as exc:
            parse_seeding(token)
        assert exc.value.kind is FieldKind.SEEDING

    @pytest.mark.parametrize("token", [
        "ironclad", "4 Character", "4-character", "Necromancer", "Four",
    ])
    def test_unknown_character(self, token: str) -> None:
        with pytest.raises(InvalidCharacter) as exc:
            parse_character(token)
        assert exc.value.kind is FieldKind.CHARACTER

    @pytest.mark.parametrize("token", ["Seeded", "glitched", "Glitch-less", ""])
    def test_unknown_glitching(self, token: str) -> None:
        """The seeding literal is not a glitching mode."""
        with pytest.raises(InvalidGlitching) as exc:
            parse_glitching(token)
        assert exc.value.kind is FieldKind.GLITCHING

    def test_errors_are_parse_errors(self) -> None:
        with pytest.raises(ParseError):
            parse_character("Necromancer")
        assert issubclass(InvalidSeeding, VocabularyError)

    def test_error_tag_and_message(self) -> None:
        with pytest.raises(InvalidDifficulty) as exc:
            parse_difficulty("Ascension-19")
        assert exc.value.tag == "InvalidDifficulty"
        assert str(exc.value) == "unknown difficulty: 'Ascension-19'"

    def test_base_error_constructible(self) -> None:
        err = VocabularyError("x")
        assert err.kind is None
        assert str(err) == "unknown value: 'x'"
