"""Data models for RestSeating."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


class SeatingError(Exception):
    """Base class for seating misuse errors."""


class OverCapacityError(SeatingError, ValueError):
    """A table was asked to seat more clients than it has free seats."""


class UnknownGroupError(SeatingError, LookupError):
    """A group is neither seated nor waiting."""


def _positive_int(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{what} must be positive, got {value}")
    return value


@dataclass(eq=False)
class Table:
    """Venue table with a fixed number of chairs.

    Tables compare by identity. ``<`` orders them by capacity so that a
    stable sort keeps list order among equal sizes.
    """

    capacity: int
    name: str = ""
    free_seats: int = field(init=False)

    def __post_init__(self) -> None:
        _positive_int(self.capacity, "Table capacity")
        self.free_seats = self.capacity

    @property
    def occupied(self) -> bool:
        return self.free_seats != self.capacity

    def can_fit(self, group_size: int) -> bool:
        return self.free_seats >= group_size

    def occupy(self, group_size: int) -> None:
        """Take ``group_size`` seats. The caller checks :meth:`can_fit` first."""
        if not self.can_fit(group_size):
            raise OverCapacityError(
                f"{self.label} has {self.free_seats} free seats, cannot take {group_size}"
            )
        self.free_seats -= group_size

    def release(self) -> None:
        """Free the whole table, whatever was taken."""
        self.free_seats = self.capacity

    @property
    def label(self) -> str:
        return self.name or f"table({self.capacity})"

    def __lt__(self, other: "Table") -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self.capacity < other.capacity

    def __str__(self) -> str:
        flag = "(!)" if self.occupied else ""
        return f"{flag}table {self.free_seats}/{self.capacity}"


@dataclass(eq=False)
class ClientGroup:
    """Party of clients arriving together.

    Two groups of the same size are still different groups, so equality and
    hashing are by instance.
    """

    party_size: int
    label: str = ""
    assigned_table: Optional[Table] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _positive_int(self.party_size, "Party size")

    def assign(self, table: Table) -> None:
        self.assigned_table = table

    def clear_assignment(self) -> None:
        self.assigned_table = None

    def current_table(self) -> Optional[Table]:
        return self.assigned_table

    @property
    def seated(self) -> bool:
        return self.assigned_table is not None

    def __str__(self) -> str:
        return f"client {self.party_size}"
