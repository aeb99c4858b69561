from __future__ import annotations
from textual import events
from textual.app import ComposeResult
from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from .confirmation import FloatContent
from .models import FloatEvent

class FloatScreen(ModalScreen[FloatEvent]):
    """Hosts any FloatContent; dismisses with the content's outcome."""

    def __init__(self, content: FloatContent):
        super().__init__()
        self.float_content = content

    def compose(self) -> ComposeResult:
        yield Container(Static(id="float_body"), id="modal")

    def on_mount(self) -> None:
        self.redraw()

    def redraw(self) -> None:
        self.query_one("#float_body", Static).update(self.float_content.render())

    def on_key(self, event: events.Key) -> None:
        key = event.character if event.is_printable and event.character else event.key
        outcome = self.float_content.handle_key(key)
        event.stop()
        if outcome is not FloatEvent.NONE:
            self.dismiss(outcome)
        elif key == "escape" and self.float_content.is_finished():
            self.dismiss(FloatEvent.NONE)
        else:
            self.redraw()

class OutputModal(ModalScreen[None]):
    def __init__(self, title: str, body: str):
        super().__init__()
        self._title = title
        self._body = body

    def compose(self) -> ComposeResult:
        yield Container(
            Static(f"[b]{self._title}[/b]"),
            VerticalScroll(Static(self._body), id="output_body"),
            Button("Close", id="close", variant="primary"),
            id="modal",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None)
