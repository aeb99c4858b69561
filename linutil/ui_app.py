from __future__ import annotations

import logging
from typing import Any, Dict, List

from textual import work
from textual.app import App, ComposeResult
from textual.widgets import DataTable, Footer, Header, Static, TabbedContent, TabPane

from .catalog import Catalog
from .config import Config
from .confirmation import ConfirmPrompt
from .executor import run_selection
from .history import parse_history
from .modals import FloatScreen, OutputModal
from .models import FloatEvent, System
from .tabs import help_tab, history_tab, scripts_tab

logger = logging.getLogger(__name__)

class LinutilApp(App):
    TITLE = "Linux Toolbox"

    CSS = """
    Screen { background: $background; }
    Header { background: $panel; }
    Footer { background: $panel; }
    FloatScreen, OutputModal { align: center middle; }

    .scripts_row, #hist_row { height: 1fr; }
    .scripts_left, #hist_left { width: 3fr; height: 1fr; }
    .scripts_row .infobox, #hist_row .infobox { width: 2fr; min-width: 40; height: 1fr; overflow: auto; }

    #statusbar { height: auto; border: round $primary; background: $boost; padding: 0 2; margin: 0 1 1 1; }

    .topcard { height: auto; border: round $primary; background: $panel; padding: 1 2; margin: 0 1 1 1; }
    .infobox { border: round $primary; background: $boost; padding: 1 2; margin: 0 1 1 1; }
    .toolbar { height: auto; padding: 0 1; margin: 0 1 1 1; }

    DataTable { height: 1fr; border: round $surface; background: $panel; margin: 0 1 1 1; }

    #modal { width: 70%; max-width: 120; height: auto; max-height: 80%; padding: 1 2; background: $panel; }
    #output_body { height: auto; max-height: 30; }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("q", "quit", "Quit"),
        ("space", "toggle", "Toggle"),
        ("enter", "finalize", "Run selection"),
        ("u", "revert", "Revert selection"),
        ("r", "refresh", "Refresh"),
    ]

    def __init__(self, system: System, catalog: Catalog, config: Config):
        super().__init__()
        self.system = system
        self.catalog = catalog.for_system(system)
        self.config = config
        self.tab_names: List[str] = self.catalog.tabs()

        self.selected: List[str] = []
        self.history: List[Dict[str, Any]] = parse_history(config.history_log)
        self.last_action = "Ready."
        self.status_text = ""

    # ---------- float helpers ----------
    def confirm_selection(self, entries, action: str = "run") -> None:
        if not entries:
            self.set_last("Nothing selected." if action == "run" else f"Nothing to {action}.")
            return
        labels = [e.path if action == "run" else f"{e.path} ({action})" for e in entries]
        prompt = ConfirmPrompt(labels)

        def _done(outcome: FloatEvent) -> None:
            if outcome is FloatEvent.CONFIRM:
                self.set_last(f"Running {action} for {len(entries)} script(s)...")
                self.run_entries(entries, action)
            elif outcome is FloatEvent.ABORT:
                self.set_last("Aborted.")

        self.push_screen(FloatScreen(prompt), callback=_done)

    @work(exclusive=True, thread=True)
    def run_entries(self, entries, action: str = "run") -> None:
        rc, out = run_selection(entries, self.system, self.config.history_log, action)
        self.call_from_thread(self.finished, rc, out)

    def finished(self, rc: int, out: str) -> None:
        self.selected.clear()
        self.refresh_all()
        self.set_last(f"Done (rc={rc}).")
        self.push_screen(OutputModal("Finished" if rc == 0 else f"Failed (rc={rc})", out))

    # ---------- basics ----------
    def set_last(self, msg: str) -> None:
        self.last_action = msg
        self.update_status()

    def update_status(self) -> None:
        pm = self.system.package_manager
        s = (
            f"System: {self.system.pretty_name}   "
            f"Package manager: {pm.value if pm else 'none'}   "
            f"Selected: {len(self.selected)}   "
            f"Last: {self.last_action}"
        )
        self.status_text = s
        try:
            self.query_one("#statusbar", Static).update(s)
        except Exception:
            pass

    def mount_topcard(self, pane: TabPane, title: str, subtitle: str = "", keys: str = "") -> None:
        lines = [f"[b]{title}[/b]"]
        if subtitle:
            lines.append(f"[dim]{subtitle}[/dim]")
        if keys:
            lines.append(f"[dim]{keys}[/dim]")
        pane.mount(Static("\n".join(lines), classes="topcard"))

    @staticmethod
    def safe_cursor_row(tbl: DataTable) -> None:
        tbl.cursor_type = "row"

    # ---------- app layout ----------
    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static("", id="statusbar")
        with TabbedContent(id="tabs"):
            for i, name in enumerate(self.tab_names):
                yield TabPane(name, id=f"tab_scripts_{i}")
            yield TabPane("History", id="tab_history")
            yield TabPane("Help", id="tab_help")
        yield Footer()

    def on_mount(self) -> None:
        self.build_all()
        self.update_status()

    def clear_pane(self, pane_id: str) -> TabPane:
        pane = self.query_one(f"#{pane_id}", TabPane)
        pane.remove_children()
        return pane

    def build_all(self) -> None:
        for i, name in enumerate(self.tab_names):
            scripts_tab.build(self, self.clear_pane(f"tab_scripts_{i}"), i, name)
        history_tab.build(self, self.clear_pane("tab_history"))
        help_tab.build(self, self.clear_pane("tab_help"))

    def refresh_all(self) -> None:
        self.history = parse_history(self.config.history_log)
        for i in range(len(self.tab_names)):
            scripts_tab.refresh(self, i)
        history_tab.refresh(self)

    # ---------- global dispatch ----------
    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        table_id = getattr(event.data_table, "id", "") or ""
        if scripts_tab.on_row_highlighted(self, event, table_id): return
        if history_tab.on_row_highlighted(self, event, table_id): return

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if (event.data_table.id or "").startswith("scripts_tbl_"):
            self.action_finalize()

    async def on_button_pressed(self, event) -> None:
        bid = event.button.id
        if await history_tab.on_button(self, bid): return

    # ---------- key actions ----------
    def action_toggle(self) -> None:
        scripts_tab.action_toggle(self)

    def action_finalize(self) -> None:
        self.confirm_selection(scripts_tab.selection(self))

    def action_revert(self) -> None:
        # only scripts shipping a revert() entry point can be undone
        self.confirm_selection([e for e in scripts_tab.selection(self) if e.defines("revert")], "revert")

    def action_refresh(self) -> None:
        self.refresh_all()
        self.set_last("Refreshed.")
