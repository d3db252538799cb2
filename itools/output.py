"""The output panel that collects the results of executed scripts."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

# Paragraph separator as it appears, escaped, in plugin output.
PARAGRAPH_SEPARATOR = "\\u2029"

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class OutputDisplay:
    """Accumulates HTML blocks describing script runs; hidden until shown."""

    def __init__(self) -> None:
        self.visible = False
        self.blocks: list[str] = []

    def show(self) -> None:
        """Make the panel visible."""
        self.visible = True

    def hide(self) -> None:
        """Hide the panel."""
        self.visible = False

    def toggle(self) -> None:
        """Show the panel if hidden, hide it if shown."""
        self.visible = not self.visible

    def log(self, output: str, error: str, now: Optional[datetime] = None) -> None:
        """Append a timestamped entry holding the output and error lines."""
        stamp = (now or datetime.now()).strftime(_TIMESTAMP_FORMAT)
        self.blocks.append('<h4 style="color: #FFFDD0;">Executed: ' + stamp + "</h4>")
        self.blocks.append("<div>")
        self.blocks.extend(
            '<p  style="color: #FFFFFF;">' + line + "</p>"
            for line in output.split(PARAGRAPH_SEPARATOR)
        )
        self.blocks.extend(
            '<p style="color: #FF6347;">' + line + "</p>"
            for line in error.split(PARAGRAPH_SEPARATOR)
        )
        self.blocks.append("</div>")

    def html(self) -> str:
        """All logged entries as one HTML document, one block per line."""
        return "\n".join(self.blocks)