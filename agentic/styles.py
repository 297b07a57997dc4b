"""Colour themes for the terminal interface."""

from __future__ import annotations

from dataclasses import dataclass

ROLES = ("primary", "secondary", "accent", "background", "text", "success", "error", "warning", "info")


@dataclass(frozen=True)
class AppTheme:
    """Named colours for each role in the interface."""

    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str
    text_color: str
    success_color: str
    error_color: str
    warning_color: str
    info_color: str

    @classmethod
    def dark(cls) -> AppTheme:
        return cls(
            primary_color="blue",
            secondary_color="dark_gray",
            accent_color="cyan",
            background_color="black",
            text_color="white",
            success_color="green",
            error_color="red",
            warning_color="yellow",
            info_color="blue",
        )

    @classmethod
    def light(cls) -> AppTheme:
        return cls(
            primary_color="blue",
            secondary_color="gray",
            accent_color="magenta",
            background_color="white",
            text_color="black",
            success_color="green",
            error_color="red",
            warning_color="yellow",
            info_color="blue",
        )

    @classmethod
    def for_mode(cls, dark_mode: bool) -> AppTheme:
        return cls.dark() if dark_mode else cls.light()

    def style(self, role: str) -> str:
        """Foreground colour for a role such as "primary" or "error"."""
        if role not in ROLES:
            raise ValueError(f"unknown style role: {role!r}")
        return getattr(self, f"{role}_color")