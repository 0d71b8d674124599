"""Replay an ordered script of arrivals and departures against a manager."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .manager import SeatingManager
from .models import ClientGroup, Table, UnknownGroupError

ARRIVE = "arrive"
LEAVE = "leave"
EVENT_KINDS = (ARRIVE, LEAVE)


@dataclass(frozen=True)
class SeatingEvent:
    """One line of an event script."""

    kind: str
    label: str
    size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind: {self.kind!r}")
        if self.kind == ARRIVE and self.size is None:
            raise ValueError(f"Arrival of {self.label!r} needs a size")

    def __str__(self) -> str:
        if self.kind == ARRIVE:
            return f"in {self.label} ({self.size})"
        return f"out {self.label}"


@dataclass(frozen=True)
class Snapshot:
    """State of the venue right after an event was applied."""

    step: int
    event: SeatingEvent
    table: Optional[str]
    tables: Tuple[str, ...]
    waitlist: Tuple[str, ...]
    text: str


@dataclass
class EventReplay:
    """Feed events to ``manager`` and keep labelled handles to live groups."""

    manager: SeatingManager
    history: List[Snapshot] = field(default_factory=list)
    _groups: Dict[str, ClientGroup] = field(default_factory=dict, repr=False)

    def group(self, label: str) -> ClientGroup:
        try:
            return self._groups[label]
        except KeyError:
            raise UnknownGroupError(f"No live group labelled {label!r}") from None

    def locate(self, label: str) -> Optional[Table]:
        return self.manager.lookup(self.group(label))

    @property
    def groups(self) -> List[ClientGroup]:
        """Groups that are seated or waiting, in arrival order."""
        return list(self._groups.values())

    def apply(self, event: SeatingEvent) -> Snapshot:
        if event.kind == ARRIVE:
            if event.label in self._groups:
                raise ValueError(f"Group {event.label!r} is still in the venue")
            group = ClientGroup(party_size=int(event.size), label=event.label)
            self.manager.arrive(group)
            self._groups[event.label] = group
        else:
            group = self.group(event.label)
            self.manager.leave(group)
            del self._groups[event.label]

        table = self.manager.lookup(group)
        snap = Snapshot(
            step=len(self.history),
            event=event,
            table=self.manager.table_label(table) if table is not None else None,
            tables=tuple(str(t) for t in self.manager.tables),
            waitlist=tuple(str(g) for g in self.manager.waitlist),
            text=self.manager.describe(),
        )
        self.history.append(snap)
        return snap

    def run(self, events: Iterable[SeatingEvent]) -> List[Snapshot]:
        for event in events:
            self.apply(event)
        return self.history


# ----------------------------- demo scenario -----------------------------
DEMO_TABLE_SIZES = [2, 2, 3, 4, 5, 6, 6]
DEMO_ARRIVAL_SIZES = [3, 5, 3, 5, 6, 3, 2, 4, 3, 6]


def demo_tables() -> List[Table]:
    return [Table(capacity=size) for size in DEMO_TABLE_SIZES]


def demo_events() -> List[SeatingEvent]:
    """Ten arrivals, a served group leaving, a waiting group giving up, one more arrival."""
    events = [
        SeatingEvent(ARRIVE, f"g{idx}", size)
        for idx, size in enumerate(DEMO_ARRIVAL_SIZES)
    ]
    events.append(SeatingEvent(LEAVE, "g2"))
    events.append(SeatingEvent(LEAVE, "g8"))
    events.append(SeatingEvent(ARRIVE, "g10", 2))
    return events
