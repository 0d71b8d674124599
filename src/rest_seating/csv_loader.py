"""CSV loading utilities."""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import IO, Any, List, Tuple

import pandas as pd

from .models import Table
from .replay import ARRIVE, EVENT_KINDS, SeatingEvent

logger = logging.getLogger(__name__)


def _require_columns(df: pd.DataFrame, required: List[str], file_label: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{file_label}: missing columns: {', '.join(missing)}")


def _row_int(value: object, what: str, line: int) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"row {line}: {what} is not a number: {value!r}") from None
    if not math.isfinite(number) or number != int(number):
        raise ValueError(f"row {line}: {what} is not a whole number: {value!r}")
    if number <= 0:
        raise ValueError(f"row {line}: {what} must be positive, got {int(number)}")
    return int(number)


def _text(value: object) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def load_tables(path: Path | str | IO[Any]) -> List[Table]:
    """Load table definitions from ``tables.csv``.

    ``capacity`` is required, ``name`` is optional. Other columns are
    ignored. Row order is table order.
    """
    df = pd.read_csv(path)
    _require_columns(df, ["capacity"], "tables.csv")
    tables: List[Table] = []
    # header is line 1
    for line, (_, row) in enumerate(df.iterrows(), start=2):
        tables.append(
            Table(
                capacity=_row_int(row["capacity"], "capacity", line),
                name=_text(row.get("name", "")),
            )
        )
    if not tables:
        raise ValueError("tables.csv: no tables defined")
    logger.info("loaded %d tables", len(tables))
    return tables


def load_events(path: Path | str | IO[Any]) -> List[SeatingEvent]:
    """Load an arrival/departure script from ``events.csv``.

    Every ``leave`` must name a group that arrived earlier and has not left
    yet, and a label can only be reused once its previous holder left.
    """
    df = pd.read_csv(path, dtype={"group": str})
    _require_columns(df, ["event", "group"], "events.csv")
    events: List[SeatingEvent] = []
    present = set()
    for line, (_, row) in enumerate(df.iterrows(), start=2):
        kind = _text(row["event"]).lower()
        label = _text(row["group"])
        if kind not in EVENT_KINDS:
            raise ValueError(f"row {line}: unknown event {kind!r}")
        if not label:
            raise ValueError(f"row {line}: missing group label")
        if kind == ARRIVE:
            if label in present:
                raise ValueError(f"row {line}: group {label!r} arrives twice")
            size = _row_int(row.get("size"), "size", line)
            present.add(label)
            events.append(SeatingEvent(kind, label, size))
        else:
            if label not in present:
                raise ValueError(f"row {line}: group {label!r} leaves before arriving")
            present.discard(label)
            events.append(SeatingEvent(kind, label))
    logger.info("loaded %d events", len(events))
    return events


def load_all(tables_path: Path | str, events_path: Path | str) -> Tuple[List[Table], List[SeatingEvent]]:
    """Convenience wrapper returning tables and events."""
    return load_tables(tables_path), load_events(events_path)
