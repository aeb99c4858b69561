from __future__ import annotations
from textual.widgets import Markdown

from ..confirmation import ConfirmPrompt

def shortcut_markdown(title, shortcuts) -> str:
    lines = [f"## {title}"]
    for s in shortcuts:
        keys = " ".join(f"`{k}`" for k in s.keys)
        lines.append(f"- {keys} {s.name}")
    return "\n".join(lines) + "\n"

def build(app, pane):
    app.mount_topcard(pane, "Help", "Keys & Workflow", "")
    title, shortcuts = ConfirmPrompt([]).get_shortcut_list()
    pane.mount(Markdown(
        "## Keys\n"
        "- `Space` Toggle script\n"
        "- `Enter` Run selection (asks for confirmation)\n"
        "- `u` Revert selection (scripts with a revert step only)\n"
        "- `r` Refresh\n"
        "- `q` `Ctrl+c` Quit\n"
        "\n" + shortcut_markdown(title, shortcuts)
    , classes="infobox"))
