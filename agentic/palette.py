"""Command palette state and the spinner shown while a command runs."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_SUGGESTIONS = (
    "task add --title 'New task' --priority high",
    "prep start --exam CET --duration 60",
    "blog new --title 'My Blog Post'",
    "agent 'help me with...'",
    "git status",
    "git add .",
    "git commit -m 'message'",
    "cargo build",
    "cargo test",
    "ls -la",
    "cd ..",
    "pwd",
)

SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
SPINNER_INTERVAL_MS = 100


def spinner_frame(elapsed_ms: int) -> str:
    """Spinner character for a command that has been running for elapsed_ms."""
    return SPINNER_FRAMES[(elapsed_ms // SPINNER_INTERVAL_MS) % len(SPINNER_FRAMES)]


@dataclass
class CommandPalette:
    """A filterable list of command suggestions with a selection cursor."""

    suggestions: list[str] = field(default_factory=lambda: list(DEFAULT_SUGGESTIONS))
    selected_index: int = 0
    filter: str = ""
    is_visible: bool = False

    def toggle(self) -> None:
        """Show or hide the palette; hiding clears the filter and selection."""
        self.is_visible = not self.is_visible
        if not self.is_visible:
            self.filter = ""
            self.selected_index = 0

    def update_filter(self, text: str) -> None:
        self.filter = text
        self.selected_index = 0

    def move_selection(self, direction: int) -> None:
        """Move the cursor down (positive) or up (negative), wrapping around."""
        count = len(self.filtered_suggestions())
        if count == 0:
            return
        if direction > 0:
            self.selected_index = (self.selected_index + 1) % count
        elif direction < 0:
            self.selected_index = count - 1 if self.selected_index == 0 else self.selected_index - 1

    def filtered_suggestions(self) -> list[str]:
        """Suggestions containing the filter text, ignoring case."""
        if not self.filter:
            return list(self.suggestions)
        needle = self.filter.lower()
        return [suggestion for suggestion in self.suggestions if needle in suggestion.lower()]

    def selected_suggestion(self) -> str | None:
        filtered = self.filtered_suggestions()
        if 0 <= self.selected_index < len(filtered):
            return filtered[self.selected_index]
        return None