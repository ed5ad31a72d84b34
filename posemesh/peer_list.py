"""Validation shared by the bootstrap and relay peer lists.

Peer lists are joined with ``;`` by consumers that need a single string, so
an entry may never contain that character.  Each list is also a set with a
preserved order: the same address may appear only once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

PEER_LIST_DELIMITER = ";"


@dataclass(frozen=True)
class PeerListError(ABC):
    """Base class for peer list validation results."""

    @abstractmethod
    def describe(self, operation: str, label: str) -> str:
        """Return the human readable diagnostic for this result."""


@dataclass(frozen=True)
class IllegalCharacter(PeerListError):
    """Entry at ``index`` contains the reserved delimiter."""

    index: int

    def describe(self, operation: str, label: str) -> str:
        return (
            f"{operation}: {label} at index {self.index} contains an illegal "
            f"'{PEER_LIST_DELIMITER}' character"
        )


@dataclass(frozen=True)
class DuplicateEntry(PeerListError):
    """Entry at ``duplicate_index`` repeats the entry at ``first_index``."""

    first_index: int
    duplicate_index: int

    def describe(self, operation: str, label: str) -> str:
        return (
            f"{operation}: {label} at index {self.duplicate_index} is the same "
            f"as {label} at index {self.first_index}"
        )


class PeerListValidationError(ValueError):
    """Raised by :func:`validate_peer_list` when a list is rejected."""

    def __init__(self, error: PeerListError, label: str, operation: str = "validate_peer_list") -> None:
        self.error = error
        self.label = label
        super().__init__(error.describe(operation, label))


def check_peer_list(entries: Sequence[str]) -> Optional[PeerListError]:
    """Return the first rule ``entries`` violates or ``None`` if it is valid.

    Delimiters are checked over the whole list before duplicates, so a list
    with both problems always reports the delimiter.
    """
    for idx, entry in enumerate(entries):
        if PEER_LIST_DELIMITER in entry:
            return IllegalCharacter(idx)
    count = len(entries)
    for i in range(count - 1):
        for j in range(i + 1, count):
            if entries[i] == entries[j]:
                return DuplicateEntry(i, j)
    return None


def validate_peer_list(entries: Iterable[str], label: str = "peer") -> list[str]:
    """Return ``entries`` as a list or raise :class:`PeerListValidationError`."""
    if isinstance(entries, (str, bytes)):
        raise TypeError(f"expected a sequence of strings, not {type(entries).__name__}")
    items = list(entries)
    error = check_peer_list(items)
    if error is not None:
        raise PeerListValidationError(error, label)
    return items


__all__ = [
    "PEER_LIST_DELIMITER",
    "PeerListError",
    "IllegalCharacter",
    "DuplicateEntry",
    "PeerListValidationError",
    "check_peer_list",
    "validate_peer_list",
]
