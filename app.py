"""Streamlit UI for RestSeating with CSV previews and a step by step replay."""
from __future__ import annotations

# Add src to sys.path so rest_seating can be found
import sys
import os
import io
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from rest_seating.csv_loader import load_events, load_tables
from rest_seating.manager import SeatingManager
from rest_seating.replay import EventReplay, demo_events, demo_tables
from rest_seating.seating_map import generate_seating_map

# -----------------------------
# Helpers
# -----------------------------

def uploadedfile_to_csvio(uploaded_file) -> io.StringIO:
    """Copy a Streamlit UploadedFile into a StringIO positioned at start."""
    uploaded_file.seek(0)
    return io.StringIO(uploaded_file.read().decode("utf-8"))

def validate_columns(df: pd.DataFrame, required: list[str], file_label: str) -> bool:
    """Check required columns and show an error if any are missing."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        st.error(f"Error in {file_label}: missing columns: {', '.join(missing)}")
        return False
    return True

def history_to_df(replay: EventReplay) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "step": snap.step,
                "event": snap.event.kind,
                "group": snap.event.label,
                "size": snap.event.size,
                "table": snap.table,
                "waitlist": ", ".join(snap.waitlist),
            }
            for snap in replay.history
        ]
    )

# -----------------------------
# Sidebar options
# -----------------------------

st.sidebar.header("Replay Options")
use_demo = st.sidebar.checkbox(
    "Use the built-in demo venue",
    value=False,
    help="Seven tables sized 2, 2, 3, 4, 5, 6, 6 and the reference event sequence.",
)
show_steps = st.sidebar.checkbox(
    "Show every step",
    value=True,
    help="List the state of tables and waitlist after each event.",
)
show_map = st.sidebar.checkbox(
    "Show venue map",
    value=True,
    help="Draw tables, seated groups and the waitlist after the last event.",
)

# -----------------------------
# Main UI and previews
# -----------------------------

st.title("Rest Seating")

_tables_file = None if use_demo else st.file_uploader("Tables CSV", type="csv")
_events_file = None if use_demo else st.file_uploader("Events CSV", type="csv")

tables_valid = events_valid = use_demo

if _tables_file is not None:
    tables_df = pd.read_csv(_tables_file)
    st.subheader("Tables preview")
    st.dataframe(tables_df, use_container_width=True)
    tables_valid = validate_columns(tables_df, ["capacity"], "tables.csv")
    _tables_file.seek(0)

if _events_file is not None:
    events_df = pd.read_csv(_events_file)
    st.subheader("Events preview")
    st.dataframe(events_df, use_container_width=True)
    events_valid = validate_columns(events_df, ["event", "group"], "events.csv")
    _events_file.seek(0)

# -----------------------------
# Run button
# -----------------------------

run_disabled = not (tables_valid and events_valid)
run_clicked = st.button("Replay events", disabled=run_disabled, key="replay_button")

# -----------------------------
# Replay
# -----------------------------

if run_clicked and not run_disabled:
    try:
        if use_demo:
            tables, events = demo_tables(), demo_events()
        else:
            tables = load_tables(uploadedfile_to_csvio(_tables_file))
            events = load_events(uploadedfile_to_csvio(_events_file))

        manager = SeatingManager(tables)
        replay = EventReplay(manager)
        replay.run(events)

        if show_steps:
            st.subheader("Replay")
            st.dataframe(history_to_df(replay), use_container_width=True)

        st.subheader("Tables")
        st.dataframe(pd.DataFrame(manager.occupancy_report()), use_container_width=True)

        st.subheader("Waitlist")
        waiting = manager.waitlist
        if waiting:
            st.dataframe(
                pd.DataFrame(
                    {
                        "position": range(1, len(waiting) + 1),
                        "group": [g.label for g in waiting],
                        "size": [g.party_size for g in waiting],
                    }
                ),
                use_container_width=True,
            )
        else:
            st.write("Nobody is waiting.")

        summary = manager.summarize()
        st.caption(
            f"{summary['occupied_tables']} of {summary['tables']} tables occupied, "
            f"{summary['free_seats']} of {summary['total_capacity']} seats free, "
            f"{summary['waiting_clients']} clients waiting."
        )

        csv_bytes = history_to_df(replay).to_csv(index=False).encode("utf-8")
        st.download_button(
            "Download replay as CSV",
            csv_bytes,
            file_name="replay.csv",
        )

        if show_map:
            st.subheader("Venue Map")
            html = generate_seating_map(manager, replay.groups)
            components.html(html, height=600, scrolling=True)

    except ValueError as e:
        st.error(f"Input validation error: {e}")
        st.stop()
    except Exception as e:
        st.exception(e)
        st.stop()
