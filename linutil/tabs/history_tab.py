from __future__ import annotations

from rich.markup import escape
from textual.containers import Container, Horizontal
from textual.widgets import Button, DataTable, Static

from ..history import parse_history

def build(app, pane):
    app.mount_topcard(pane, "History", "Scripts run from linutil", "")
    tbl = DataTable(id="hist_tbl")
    app.safe_cursor_row(tbl)
    refresh(app, tbl)
    pane.mount(
        Horizontal(
            Container(tbl, id="hist_left"),
            Static("", id="hist_info", classes="infobox"),
            id="hist_row",
        )
    )

    pane.mount(
        Horizontal(
            Button("Refresh", id="btn_hist_refresh", variant="primary"),
            classes="toolbar",
        )
    )

def refresh(app, tbl=None):
    if tbl is None:
        tbl = app.query_one("#hist_tbl", DataTable)
    tbl.clear(columns=True)
    tbl.add_columns("ts", "action", "rc", "script")
    for e in app.history[:500]:
        first = (e.get("lines") or [""])[0]
        tbl.add_row(str(e.get("ts", "")), str(e.get("action", "")), str(e.get("rc", "")), str(first)[:120])

def on_row_highlighted(app, event, table_id: str) -> bool:
    if table_id != "hist_tbl":
        return False
    idx = event.cursor_row
    if idx < 0 or idx >= len(app.history):
        return True
    e = app.history[idx]
    lines = escape("\n".join(e.get("lines") or []))
    body = f"[b]{e.get('ts','')}[/b]\nAction: {e.get('action','')}\nrc={e.get('rc','')}\n\n{lines}"
    app.query_one("#hist_info", Static).update(body[:15000])
    return True

async def on_button(app, bid: str) -> bool:
    if bid == "btn_hist_refresh":
        app.history = parse_history(app.config.history_log)
        refresh(app)
        app.set_last("History refreshed")
        return True
    return False
