import io
import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from rest_seating.csv_loader import load_events, load_tables

DATA_DIR = pathlib.Path(__file__).parent / "data"


def test_load_tables():
    tables = load_tables(DATA_DIR / "tables.csv")
    assert [t.capacity for t in tables] == [2, 2, 3, 4, 5, 6, 6]
    assert tables[0].name == "Booth A"
    assert tables[3].name == "Round 2"
    assert all(t.free_seats == t.capacity for t in tables)


def test_load_tables_capacity_only():
    tables = load_tables(io.StringIO("capacity\n4\n2\n"))
    assert [t.capacity for t in tables] == [4, 2]
    assert [t.name for t in tables] == ["", ""]


@pytest.mark.parametrize(
    "text",
    [
        "name,seats\nA,4\n",
        "capacity\n0\n",
        "capacity\n2.5\n",
        "capacity\nfour\n",
        "capacity\n",
        "capacity\ninf\n",
        "capacity\nnan\n",
    ],
)
def test_load_tables_rejects_bad_input(text):
    with pytest.raises(ValueError):
        load_tables(io.StringIO(text))


def test_load_events():
    events = load_events(DATA_DIR / "events.csv")
    assert len(events) == 13
    assert (events[0].kind, events[0].label, events[0].size) == ("arrive", "smith", 3)
    assert (events[10].kind, events[10].label, events[10].size) == ("leave", "lee", None)


def test_numeric_labels_stay_text():
    events = load_events(io.StringIO("event,group,size\narrive,007,2\nleave,007,\n"))
    assert [e.label for e in events] == ["007", "007"]


@pytest.mark.parametrize(
    "text, message",
    [
        ("event,size\narrive,2\n", "missing columns"),
        ("event,group,size\nwander,a,2\n", "unknown event"),
        ("event,group,size\nleave,a,\n", "leaves before arriving"),
        ("event,group,size\narrive,a,2\narrive,a,3\n", "arrives twice"),
        ("event,group,size\narrive,a,\n", "size"),
        ("event,group,size\narrive,a,-1\n", "positive"),
        ("event,group,size\narrive,a,inf\n", "whole number"),
    ],
)
def test_load_events_rejects_bad_input(text, message):
    with pytest.raises(ValueError, match=message):
        load_events(io.StringIO(text))
