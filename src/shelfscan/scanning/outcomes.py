# ABOUTME: Terminal outcomes of one scan cycle and their user-facing messages.
# ABOUTME: Success, Duplicate, NotFound, and Error are the only ways a cycle can end.

from dataclasses import dataclass
from typing import assert_never


@dataclass(frozen=True)
class Success:
    title: str


@dataclass(frozen=True)
class Duplicate:
    title: str


@dataclass(frozen=True)
class NotFound:
    isbn: str


@dataclass(frozen=True)
class Error:
    message: str


Outcome = Success | Duplicate | NotFound | Error


def describe(outcome: Outcome) -> str:
    """Human-readable status line for an outcome."""
    match outcome:
        case Success(title=title):
            return f"Added: {title}"
        case Duplicate(title=title):
            return f"Already in collection: {title}"
        case NotFound(isbn=isbn):
            return f"No book information found for {isbn}"
        case Error(message=message):
            return f"Error: {message}"
        case _:
            assert_never(outcome)
