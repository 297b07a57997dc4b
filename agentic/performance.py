"""Helpers that keep terminal rendering cheap: frame limiting, scrolling, animation."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


def _lines(text: str) -> list[str]:
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


@dataclass
class DirtyRegion:
    """A screen area that needs redrawing."""

    x: int
    y: int
    width: int
    height: int
    priority: int


@dataclass
class PerformanceManager:
    """Limits frame rate, tracks dirty regions and trims history and output."""

    max_history_size: int = 1000
    max_output_lines: int = 10000
    animation_frame_rate: int = 60
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    dirty_regions: list[DirtyRegion] = field(default_factory=list)
    last_frame_time: float = field(init=False)

    def __post_init__(self) -> None:
        self.last_frame_time = self.clock()

    def should_render_frame(self) -> bool:
        """True once a frame interval has passed since the last rendered frame."""
        frame_duration = (1000 // self.animation_frame_rate) / 1000
        now = self.clock()
        if now - self.last_frame_time >= frame_duration:
            self.last_frame_time = now
            return True
        return False

    def mark_dirty(self, x: int, y: int, width: int, height: int, priority: int) -> None:
        """Record a dirty region, keeping higher priorities first."""
        region = DirtyRegion(x, y, width, height, priority)
        position = next(
            (index for index, existing in enumerate(self.dirty_regions) if existing.priority < priority),
            len(self.dirty_regions),
        )
        self.dirty_regions.insert(position, region)

    def clear_dirty_regions(self) -> None:
        self.dirty_regions.clear()

    def optimize_command_history(self, history: list) -> None:
        """Drop entries beyond the history limit, in place."""
        del history[self.max_history_size:]

    def optimize_command_output(self, output: str) -> str:
        """Cut output to the line limit, noting how many lines were dropped."""
        lines = _lines(output)
        if len(lines) <= self.max_output_lines:
            return output
        kept = "\n".join(lines[: self.max_output_lines])
        dropped = len(lines) - self.max_output_lines
        return f"{kept}\n\n... {dropped} more lines truncated for performance"


@dataclass
class VirtualScroller:
    """Tracks which fixed-height items of a long list fit in the viewport."""

    viewport_height: int
    item_height: int
    total_items: int = 0
    scroll_offset: int = 0

    def __post_init__(self) -> None:
        if self.item_height <= 0:
            raise ValueError("item_height must be positive")

    @property
    def _visible_items(self) -> int:
        return self.viewport_height // self.item_height

    def update_total_items(self, total: int) -> None:
        self.total_items = total
        self._clamp()

    def visible_range(self) -> tuple[int, int]:
        """Start (inclusive) and end (exclusive) indices of the visible items."""
        start = self.scroll_offset
        return start, min(start + self._visible_items, self.total_items)

    def scroll_up(self, amount: int) -> None:
        self.scroll_offset = max(self.scroll_offset - amount, 0)

    def scroll_down(self, amount: int) -> None:
        self.scroll_offset = min(self.scroll_offset + amount, self.max_scroll_offset())
        self._clamp()

    def scroll_to_item(self, item_index: int) -> None:
        """Scroll just far enough that the item is visible."""
        visible = self._visible_items
        if item_index < self.scroll_offset:
            self.scroll_offset = item_index
        elif item_index >= self.scroll_offset + visible:
            self.scroll_offset = max(item_index - max(visible - 1, 0), 0)
        self._clamp()

    def max_scroll_offset(self) -> int:
        return max(self.total_items - self._visible_items, 0)

    def _clamp(self) -> None:
        self.scroll_offset = min(self.scroll_offset, self.max_scroll_offset())


class EasingFunction(Enum):
    """Curves mapping linear progress in [0, 1] to eased progress."""

    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"

    def apply(self, progress: float) -> float:
        if self is EasingFunction.LINEAR:
            return progress
        if self is EasingFunction.EASE_IN:
            return progress * progress
        if self is EasingFunction.EASE_OUT:
            return 1.0 - (1.0 - progress) * (1.0 - progress)
        if progress < 0.5:
            return 2.0 * progress * progress
        return 1.0 - 2.0 * (1.0 - progress) * (1.0 - progress)


@dataclass
class Animation:
    """A value moving from one number to another over a duration in seconds."""

    id: str
    start_time: float
    duration: float
    easing: EasingFunction
    from_value: float
    to_value: float
    current_value: float


@dataclass
class AnimationSystem:
    """Runs named animations; finished ones are dropped on update."""

    animations: list[Animation] = field(default_factory=list)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    def start_animation(
        self,
        animation_id: str,
        duration: float,
        from_value: float,
        to_value: float,
        easing: EasingFunction = EasingFunction.LINEAR,
    ) -> None:
        """Start an animation, replacing any running one with the same id."""
        self.animations = [a for a in self.animations if a.id != animation_id]
        self.animations.append(
            Animation(
                id=animation_id,
                start_time=self.clock(),
                duration=duration,
                easing=easing,
                from_value=from_value,
                to_value=to_value,
                current_value=from_value,
            )
        )

    def update(self) -> bool:
        """Advance every animation; return whether any is still running."""
        now = self.clock()
        any_running = False
        for animation in self.animations:
            elapsed = now - animation.start_time
            if elapsed >= animation.duration:
                animation.current_value = animation.to_value
            else:
                eased = animation.easing.apply(elapsed / animation.duration)
                animation.current_value = (
                    animation.from_value + (animation.to_value - animation.from_value) * eased
                )
                any_running = True
        self.animations = [a for a in self.animations if now - a.start_time < a.duration]
        return any_running

    def get_value(self, animation_id: str) -> float | None:
        return next((a.current_value for a in self.animations if a.id == animation_id), None)


_RUST_KEYWORDS = ("fn", "let", "mut", "pub", "struct", "impl", "use")
_SHELL_COMMANDS = ("cd", "ls", "git", "cargo", "npm", "docker")


@dataclass
class OptimizedTextRenderer:
    """Splits text into lines with simple ANSI highlighting and keeps a line cache."""

    max_cache_size: int = 10000
    line_cache: deque[str] = field(default_factory=deque)

    def render_with_highlighting(self, text: str, language: str | None = None) -> list[str]:
        lines = _lines(text)
        if language == "rust":
            return [self._highlight_rust(line) for line in lines]
        if language in ("bash", "shell"):
            return [self._highlight_shell(line) for line in lines]
        if language == "json":
            return [line.replace(":", "\x1b[93m:\x1b[0m") for line in lines]
        return lines

    @staticmethod
    def _highlight_rust(line: str) -> str:
        for keyword in _RUST_KEYWORDS:
            line = line.replace(keyword, f"\x1b[94m{keyword}\x1b[0m")
        return line

    @staticmethod
    def _highlight_shell(line: str) -> str:
        if line.lstrip().startswith(_SHELL_COMMANDS):
            return f"\x1b[92m{line}\x1b[0m"
        return line

    def cache_line(self, line: str) -> None:
        """Append a line, dropping the oldest when the cache is full."""
        if len(self.line_cache) >= self.max_cache_size and self.line_cache:
            self.line_cache.popleft()
        self.line_cache.append(line)