"""RestSeating package."""
from .models import (
    ClientGroup,
    OverCapacityError,
    SeatingError,
    Table,
    UnknownGroupError,
)
from .manager import SeatingManager, compute_table_stats
from .replay import EventReplay, SeatingEvent, Snapshot, demo_events, demo_tables
from .csv_loader import load_tables, load_events, load_all

__all__ = [
    "ClientGroup",
    "Table",
    "SeatingError",
    "OverCapacityError",
    "UnknownGroupError",
    "SeatingManager",
    "compute_table_stats",
    "EventReplay",
    "SeatingEvent",
    "Snapshot",
    "demo_events",
    "demo_tables",
    "load_tables",
    "load_events",
    "load_all",
]
