"""Common utilities and exception classes."""

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse line breaks and whitespace runs into single spaces."""
    return _WHITESPACE.sub(" ", text).strip()


class SpirerunError(Exception):
    """Base exception for spirerun."""


class ParseError(SpirerunError):
    """Run report could not be turned into a RunRecord."""

    tag = "ParseError"


class MissingAnchor(ParseError):
    """A literal marker was not found after the previous one."""

    tag = "MissingAnchor"

    def __init__(self, anchor: str) -> None:
        self.anchor = anchor
        super().__init__(f"expected {anchor!r} was not found")


class VocabularyError(ParseError):
    """Token is not one of the accepted literals of a closed vocabulary.

    Raised through the per-vocabulary subclasses, which set ``kind``.
    """

    tag = "VocabularyError"
    # FieldKind of the rejecting vocabulary; None on the base class.
    kind = None

    def __init__(self, value: str) -> None:
        self.value = value
        name = self.kind.value if self.kind is not None else "value"
        super().__init__(f"unknown {name}: {value!r}")


class InvalidDuration(ParseError):
    tag = "InvalidDuration"

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"invalid {field} duration: {value!r}")


class InvalidVersion(ParseError):
    tag = "InvalidVersion"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid version: {value!r}")


class InvalidDate(ParseError):
    tag = "InvalidDate"

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"invalid {field} date: {value!r}")


class InvalidPlacing(ParseError):
    tag = "InvalidPlacing"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid placing: {value!r}")


class InvalidRunner(ParseError):
    tag = "InvalidRunner"

    def __init__(self) -> None:
        super().__init__("runner name is empty")


class MissingSeed(ParseError):
    """Seeded run without a seed token."""

    tag = "MissingSeed"

    def __init__(self) -> None:
        super().__init__("seeded run has no 'Seed:' value")
