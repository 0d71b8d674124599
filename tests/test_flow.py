import pathlib
import sys

import pytest

# Ensure src package is on path
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from rest_seating import csv_loader
from rest_seating.manager import SeatingManager
from rest_seating.models import UnknownGroupError
from rest_seating.replay import (
    EventReplay,
    SeatingEvent,
    demo_events,
    demo_tables,
)

AFTER_ARRIVALS = (
    "[(!)table 0/2, table 2/2, (!)table 0/3, (!)table 1/4, (!)table 0/5, (!)table 1/6, (!)table 0/6]\n"
    "[client 3, client 4, client 3, client 6]"
)
FINAL = (
    "[(!)table 0/2, (!)table 0/2, (!)table 0/3, (!)table 1/4, (!)table 0/5, (!)table 1/6, (!)table 0/6]\n"
    "[client 4, client 6]"
)


def test_demo_scenario():
    manager = SeatingManager(demo_tables())
    replay = EventReplay(manager)
    history = replay.run(demo_events())

    # first five arrivals all seated, best fit first
    assert [snap.table for snap in history[:5]] == ["T2", "T4", "T3", "T5", "T6"]
    # the size 2 group still finds an empty two-top, the rest queue
    assert [snap.table for snap in history[5:10]] == [None, "T0", None, None, None]
    assert history[9].text == AFTER_ARRIVALS

    # third arrival leaves its four-top; earliest waiting group that fits takes it
    assert str(history[10].event) == "out g2"
    assert replay.locate("g5") is manager.tables[3]
    assert history[10].waitlist == ("client 4", "client 3", "client 6")

    # ninth arrival gives up while still waiting
    assert history[11].waitlist == ("client 4", "client 6")

    # late arrival takes the other two-top
    assert history[12].table == "T1"
    assert str(manager) == FINAL
    assert len(history) == 13


def test_full_flow_from_csv():
    data_dir = pathlib.Path(__file__).parent / "data"
    tables, events = csv_loader.load_all(data_dir / "tables.csv", data_dir / "events.csv")

    manager = SeatingManager(tables)
    replay = EventReplay(manager)
    replay.run(events)

    assert replay.locate("brown").name == "Round 2"
    assert replay.locate("patel").name == "Booth A"
    assert replay.locate("davis").name == "Booth B"
    assert replay.locate("nguyen") is None
    assert [g.label for g in manager.waitlist] == ["nguyen", "martin"]
    assert str(manager) == FINAL

    # every live group is either seated or waiting, never both
    waiting = {id(g) for g in manager.waitlist}
    for group in replay.groups:
        assert (group.current_table() is None) == (id(group) in waiting)


def test_labels_can_be_reused_after_leaving():
    replay = EventReplay(SeatingManager(demo_tables()))
    replay.apply(SeatingEvent("arrive", "a", 2))
    first = replay.group("a")
    replay.apply(SeatingEvent("leave", "a"))
    replay.apply(SeatingEvent("arrive", "a", 4))
    assert replay.group("a") is not first
    assert replay.locate("a").capacity == 4


def test_replay_rejects_bad_scripts():
    replay = EventReplay(SeatingManager(demo_tables()))
    with pytest.raises(UnknownGroupError):
        replay.apply(SeatingEvent("leave", "ghost"))
    replay.apply(SeatingEvent("arrive", "a", 2))
    with pytest.raises(ValueError):
        replay.apply(SeatingEvent("arrive", "a", 2))
    assert len(replay.history) == 1


def test_event_validation():
    with pytest.raises(ValueError):
        SeatingEvent("wander", "a", 2)
    with pytest.raises(ValueError):
        SeatingEvent("arrive", "a")
    assert str(SeatingEvent("arrive", "a", 3)) == "in a (3)"
