from __future__ import annotations

from typing import Protocol, Sequence, Tuple

from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text

from .models import FloatEvent, Shortcut

class FloatContent(Protocol):
    """What a float (modal overlay) needs from the content it hosts."""

    def render(self) -> RenderableType: ...
    def handle_key(self, key: str) -> FloatEvent: ...
    def is_finished(self) -> bool: ...
    def get_shortcut_list(self) -> Tuple[str, Tuple[Shortcut, ...]]: ...

class ConfirmPrompt:
    TITLE = " Confirm selections "

    def __init__(self, names: Sequence[str]):
        self.names: Tuple[str, ...] = tuple(f"{n}. {name}" for n, name in enumerate(names, 1))
        self.scroll = 0

    def scroll_down(self) -> None:
        if self.scroll < len(self.names) - 1:
            self.scroll += 1

    def scroll_up(self) -> None:
        if self.scroll > 0:
            self.scroll -= 1

    def visible(self) -> Tuple[str, ...]:
        return self.names[self.scroll:]

    def render(self) -> RenderableType:
        return Panel(
            Text("\n".join(self.visible())),
            title=Text(self.TITLE, style="bold"),
            title_align="center",
        )

    def handle_key(self, key: str) -> FloatEvent:
        if key in ("y", "Y"):
            return FloatEvent.CONFIRM
        if key in ("n", "N", "escape"):
            return FloatEvent.ABORT
        if key == "j":
            self.scroll_down()
        elif key == "k":
            self.scroll_up()
        return FloatEvent.NONE

    def is_finished(self) -> bool:
        return True

    def get_shortcut_list(self) -> Tuple[str, Tuple[Shortcut, ...]]:
        # the quit binding belongs to the app; listed here for the help overlay
        return (
            "Confirmation prompt",
            (
                Shortcut("Continue", ("Y", "y")),
                Shortcut("Abort", ("N", "n", "Esc")),
                Shortcut("Scroll down", ("j",)),
                Shortcut("Scroll up", ("k",)),
                Shortcut("Close linutil", ("CTRL-c", "q")),
            ),
        )
