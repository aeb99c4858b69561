from __future__ import annotations

from typing import List, Optional

from rich.markup import escape
from rich.text import Text
from textual.containers import Container, Horizontal
from textual.widgets import DataTable, Static, TabbedContent

from ..models import ScriptEntry

def table_id(idx: int) -> str:
    return f"scripts_tbl_{idx}"

def info_id(idx: int) -> str:
    return f"scripts_info_{idx}"

def build(app, pane, idx: int, tab: str):
    entries = app.catalog.entries(tab)
    app.mount_topcard(pane, tab, f"{len(entries)} scripts", "Space Toggle · Enter Run selection · u Revert")
    tbl = DataTable(id=table_id(idx))
    app.safe_cursor_row(tbl)
    refresh(app, idx, tbl)
    pane.mount(
        Horizontal(
            Container(tbl, classes="scripts_left"),
            Static("", id=info_id(idx), classes="infobox"),
            classes="scripts_row",
        )
    )

def refresh(app, idx: int, tbl: Optional[DataTable] = None):
    """Fill the table; pass tbl when it is not mounted yet."""
    tab = app.tab_names[idx]
    if tbl is None:
        tbl = app.query_one(f"#{table_id(idx)}", DataTable)
    tbl.clear(columns=True)
    tbl.add_columns("sel", "script", "path")
    for e in app.catalog.entries(tab):
        mark = Text("[x]" if e.path in app.selected else "[ ]")
        tbl.add_row(mark, e.name, e.path, key=e.path)

def _index(table_id_: str) -> Optional[int]:
    if not table_id_.startswith("scripts_tbl_"):
        return None
    return int(table_id_.rsplit("_", 1)[1])

def active_index(app) -> Optional[int]:
    active = app.query_one("#tabs", TabbedContent).active or ""
    if not active.startswith("tab_scripts_"):
        return None
    return int(active.rsplit("_", 1)[1])

def current_entry(app) -> Optional[ScriptEntry]:
    idx = active_index(app)
    if idx is None:
        return None
    tbl = app.query_one(f"#{table_id(idx)}", DataTable)
    entries = app.catalog.entries(app.tab_names[idx])
    if not entries or tbl.cursor_row < 0 or tbl.cursor_row >= len(entries):
        return None
    return entries[tbl.cursor_row]

def on_row_highlighted(app, event, table_id_: str) -> bool:
    idx = _index(table_id_)
    if idx is None:
        return False
    entries = app.catalog.entries(app.tab_names[idx])
    row = event.cursor_row
    if 0 <= row < len(entries):
        app.query_one(f"#{info_id(idx)}", Static).update(escape(entries[row].text[:15000]))
    return True

def action_toggle(app) -> bool:
    e = current_entry(app)
    if e is None:
        return False
    if e.path in app.selected:
        app.selected.remove(e.path)
    else:
        app.selected.append(e.path)
    idx = active_index(app)
    tbl = app.query_one(f"#{table_id(idx)}", DataTable)
    row = tbl.cursor_row
    refresh(app, idx)
    tbl.move_cursor(row=row)
    app.set_last(f"{len(app.selected)} selected")
    return True

def selection(app) -> List[ScriptEntry]:
    """Finalized selection; falls back to the highlighted script."""
    out = [app.catalog.get(p) for p in app.selected]
    chosen = [e for e in out if e is not None]
    if not chosen:
        e = current_entry(app)
        if e is not None:
            chosen = [e]
    return chosen
