"""Interactive venue map built with networkx and rendered by pyvis."""
from __future__ import annotations

import math
from typing import Dict, Iterable, List, Tuple

import networkx as nx
from pyvis.network import Network

from .manager import SeatingManager
from .models import ClientGroup, Table

WAITLIST_NODE = "waitlist"

_FREE_COLOR = "#77DD77"
_BUSY_COLOR = "#FF6961"
_GROUP_COLOR = "#AEC6CF"
_WAITING_COLOR = "#FFD700"

# ---------------------------
# Public API
# ---------------------------

def build_seating_graph(
    manager: SeatingManager,
    groups: Iterable[ClientGroup] = (),
    canvas_size: Tuple[int, int] = (1600, 1000),
) -> nx.Graph:
    """
    Build the venue graph.

    Parameters:
      manager: seating manager whose tables and waitlist are drawn.
      groups: groups to look up; seated ones hang off their table.
      canvas_size: width, height in pixels for layout scaling.

    Nodes are ``table:<i>``, ``group:<i>`` and ``waitlist``. Waiting groups
    are chained from the waitlist node in arrival order.
    """
    width, height = canvas_size
    tables = list(manager.tables)
    table_ids = {id(t): f"table:{i}" for i, t in enumerate(tables)}
    centers = _compute_table_centers([table_ids[id(t)] for t in tables], width, height)

    G = nx.Graph()
    for table in tables:
        node = table_ids[id(table)]
        x, y = centers[node]
        G.add_node(
            node,
            label=f"{manager.table_label(table)} {table.free_seats}/{table.capacity}",
            title=_table_tooltip(manager.table_label(table), table),
            color=_BUSY_COLOR if table.occupied else _FREE_COLOR,
            kind="table",
            x=x,
            y=y,
            physics=False,
            shape="box",
        )

    # Seated groups around their tables
    seated: Dict[str, List[Tuple[int, ClientGroup]]] = {}
    for idx, group in enumerate(groups):
        table = manager.lookup(group)
        if table is not None and id(table) in table_ids:
            seated.setdefault(table_ids[id(table)], []).append((idx, group))

    for table_node, members in seated.items():
        cx, cy = centers[table_node]
        coords = _circle_layout(cx, cy, 70, len(members))
        for (idx, group), (x, y) in zip(members, coords):
            node = f"group:{idx}"
            G.add_node(
                node,
                label=_group_label(group),
                title=f"<b>{_group_label(group)}</b><br>Party: {group.party_size}",
                color=_GROUP_COLOR,
                kind="group",
                x=x,
                y=y,
                physics=False,
                shape="dot",
                size=10 + 2 * group.party_size,
            )
            G.add_edge(table_node, node, color="#A9A9A9", width=1 + group.party_size)

    # Waitlist chain along the bottom edge
    waiting = manager.waitlist
    G.add_node(
        WAITLIST_NODE,
        label=f"waitlist ({len(waiting)})",
        color=_WAITING_COLOR,
        kind="waitlist",
        x=60,
        y=height - 60,
        physics=False,
        shape="box",
    )
    previous = WAITLIST_NODE
    for pos, group in enumerate(waiting, start=1):
        node = f"waiting:{pos}"
        G.add_node(
            node,
            label=_group_label(group),
            title=f"<b>{_group_label(group)}</b><br>Queue position: {pos}",
            color=_WAITING_COLOR,
            kind="waiting",
            x=60 + pos * 90,
            y=height - 60,
            physics=False,
            shape="dot",
            size=10 + 2 * group.party_size,
        )
        G.add_edge(previous, node, color=_WAITING_COLOR, width=2)
        previous = node

    return G


def generate_seating_map(
    manager: SeatingManager,
    groups: Iterable[ClientGroup] = (),
    canvas_size: Tuple[int, int] = (1600, 1000),
) -> str:
    """Render :func:`build_seating_graph` to an HTML string."""
    G = build_seating_graph(manager, groups, canvas_size)

    net = Network(height="700px", width="100%", bgcolor="#111111", font_color="#EEEEEE")
    net.toggle_physics(False)  # positions are fixed
    net.from_nx(G)

    return _inject_legend_html(net.generate_html())

# ---------------------------
# Internals
# ---------------------------

def _group_label(group: ClientGroup) -> str:
    return group.label or str(group)


def _table_tooltip(label: str, table: Table) -> str:
    return (
        f"<b>{label}</b><br>"
        f"Capacity: {table.capacity}<br>"
        f"Free seats: {table.free_seats}"
    )


def _compute_table_centers(tables: List[str], width: int, height: int) -> Dict[str, Tuple[int, int]]:
    """
    Place table centers on a grid inside the canvas area.
    The bottom band is left for the waitlist.
    """
    if not tables:
        return {}
    n = len(tables)
    cols = max(1, int(math.ceil(math.sqrt(n))))
    rows = int(math.ceil(n / cols))
    margin_x = 120
    margin_y = 120
    usable_w = max(1, width - 2 * margin_x)
    usable_h = max(1, height - 2 * margin_y - 80)
    step_x = usable_w // max(1, cols)
    step_y = usable_h // max(1, rows)

    centers: Dict[str, Tuple[int, int]] = {}
    for idx, name in enumerate(tables):
        r, c = divmod(idx, cols)
        x = margin_x + c * step_x + step_x // 2
        y = margin_y + r * step_y + step_y // 2
        centers[name] = (x, y)
    return centers


def _circle_layout(cx: int, cy: int, r: int, n: int) -> List[Tuple[int, int]]:
    pts = []
    for i in range(n):
        theta = 2 * math.pi * i / n
        x = int(cx + r * math.cos(theta))
        y = int(cy + r * math.sin(theta))
        pts.append((x, y))
    return pts


def _inject_legend_html(html: str) -> str:
    legend = f"""
    <style>
    .legend-box{{
      position:absolute;right:12px;bottom:12px;
      background:#222;color:#eee;border:1px solid #444;border-radius:8px;
      padding:8px 12px;font-family:system-ui, -apple-system, Segoe UI, Roboto, Arial;font-size:12px;
      z-index:10;
    }}
    .legend-swatch{{display:inline-block;width:12px;height:12px;margin-right:6px;vertical-align:middle;border:1px solid #444;}}
    </style>
    <div class="legend-box">
      <div><span class="legend-swatch" style="background:{_FREE_COLOR}"></span>free table</div>
      <div><span class="legend-swatch" style="background:{_BUSY_COLOR}"></span>occupied table</div>
      <div><span class="legend-swatch" style="background:{_GROUP_COLOR}"></span>seated group</div>
      <div><span class="legend-swatch" style="background:{_WAITING_COLOR}"></span>waiting group</div>
    </div>
    """
    if "</body>" in html:
        return html.replace("</body>", legend + "</body>", 1)
    return html + legend
