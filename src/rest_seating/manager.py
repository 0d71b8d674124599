"""
Seating manager for a venue with a fixed set of tables.

Arrivals are placed with a best-fit search over every table:
    1. a table whose free seats match the party size exactly wins,
    2. otherwise the smallest table that still fits,
    3. equal capacities keep the table listed first.
Groups that do not fit anywhere wait in arrival order. When a seated group
leaves, its table is offered to the waitlist in FIFO order and goes to the
first group that fits, even if a later group would fit more tightly.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import ClientGroup, Table, UnknownGroupError

logger = logging.getLogger(__name__)


# ----------------------------- reporting helpers -----------------------------
def compute_table_stats(table: Table, label: Optional[str] = None) -> Dict[str, int | float | str | bool]:
    """Seat usage for a single table."""
    used = table.capacity - table.free_seats
    return {
        "table": label or table.label,
        "capacity": table.capacity,
        "free_seats": table.free_seats,
        "used_seats": used,
        "occupied": table.occupied,
        "utilisation": used / table.capacity,
    }


def _render(items: Iterable[object]) -> str:
    return "[" + ", ".join(str(item) for item in items) + "]"


# ----------------------------- manager -----------------------------
class SeatingManager:
    """Seat arriving groups and keep a FIFO waitlist for the rest."""

    def __init__(self, tables: Sequence[Table]) -> None:
        if not tables:
            raise ValueError("A venue needs at least one table")
        seen = set()
        for table in tables:
            if id(table) in seen:
                raise ValueError(f"Table listed twice: {table.label}")
            seen.add(id(table))
        self._tables: Tuple[Table, ...] = tuple(tables)
        # unnamed tables are labelled by position in this venue
        self._labels: Dict[int, str] = {
            id(table): table.name or f"T{idx}" for idx, table in enumerate(self._tables)
        }
        self._waitlist: List[ClientGroup] = []

    @property
    def tables(self) -> Tuple[Table, ...]:
        return self._tables

    def owns(self, table: Table) -> bool:
        return any(t is table for t in self._tables)

    def table_label(self, table: Table) -> str:
        """Name of ``table`` in this venue, ``T<index>`` when it has none."""
        if self.owns(table):
            return self._labels[id(table)]
        return table.label

    @property
    def waitlist(self) -> List[ClientGroup]:
        """Waiting groups in arrival order (a copy)."""
        return list(self._waitlist)

    def is_waiting(self, group: ClientGroup) -> bool:
        return any(g is group for g in self._waitlist)

    # ----------------------------- events -----------------------------
    def arrive(self, group: ClientGroup) -> Optional[Table]:
        """Seat ``group`` on the best fitting table or queue it.

        Returns the table the group was seated at, ``None`` if it queued.
        """
        if group.seated or self.is_waiting(group):
            raise ValueError(f"{group} has already arrived")

        table = self.select_best_table(group)
        if table is None:
            self._waitlist.append(group)
            logger.debug("queued %s at position %d", group, len(self._waitlist))
            return None

        self._seat(group, table)
        return table

    def leave(self, group: ClientGroup) -> None:
        """Remove ``group``, freeing its table or dropping it from the waitlist."""
        table = group.current_table()
        if table is not None:
            if not self.owns(table):
                raise UnknownGroupError(f"{group} is seated in another venue")
            table.release()
            group.clear_assignment()
            logger.debug("%s left %s", group, self.table_label(table))
            self.promote_waiting(table)
            return

        for idx, waiting in enumerate(self._waitlist):
            if waiting is group:
                del self._waitlist[idx]
                logger.debug("%s left the waitlist", group)
                return
        raise UnknownGroupError(f"{group} is neither seated nor waiting")

    def lookup(self, group: ClientGroup) -> Optional[Table]:
        """Table where ``group`` sits, ``None`` if waiting or gone."""
        return group.current_table()

    # ----------------------------- policy -----------------------------
    def select_best_table(self, group: ClientGroup) -> Optional[Table]:
        """Best fitting table for ``group`` or ``None`` when nothing fits."""
        best: Optional[Table] = None
        for table in self._tables:
            if not table.can_fit(group.party_size):
                continue
            if best is None:
                best = table
            else:
                best = self._better_table(group, best, table)
        return best

    @staticmethod
    def _better_table(group: ClientGroup, current: Table, candidate: Table) -> Table:
        if current.free_seats == group.party_size:
            return current
        if candidate.free_seats == group.party_size:
            return candidate
        # ties keep the table found first
        return candidate if candidate < current else current

    def promote_waiting(self, table: Table) -> Optional[ClientGroup]:
        """Give ``table`` to the earliest waiting group that fits on it.

        At most one group is promoted. Returns it, or ``None``.
        """
        for idx, group in enumerate(self._waitlist):
            if table.can_fit(group.party_size):
                del self._waitlist[idx]
                self._seat(group, table)
                logger.info("promoted %s from the waitlist to %s", group, self.table_label(table))
                return group
        return None

    def _seat(self, group: ClientGroup, table: Table) -> None:
        table.occupy(group.party_size)
        group.assign(table)
        logger.debug("seated %s at %s", group, self.table_label(table))

    # ----------------------------- introspection -----------------------------
    def occupancy_report(self) -> List[Dict[str, int | float | str | bool]]:
        return [compute_table_stats(t, self.table_label(t)) for t in self._tables]

    def summarize(self) -> Dict[str, int]:
        """Venue wide totals."""
        return {
            "tables": len(self._tables),
            "total_capacity": sum(t.capacity for t in self._tables),
            "free_seats": sum(t.free_seats for t in self._tables),
            "occupied_tables": sum(1 for t in self._tables if t.occupied),
            "waiting_groups": len(self._waitlist),
            "waiting_clients": sum(g.party_size for g in self._waitlist),
        }

    def describe(self) -> str:
        return f"{_render(self._tables)}\n{_render(self._waitlist)}"

    def __str__(self) -> str:
        return self.describe()
