"""Time windows used for rolling statistics display."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TimeWindow(Enum):
    """A time span, valued in seconds."""

    SECOND = 1
    TEN_SEC = 10
    MINUTE = 60
    TEN_MIN = 600

    @property
    def seconds(self) -> int:
        return self.value

    def __str__(self) -> str:
        minutes, secs = divmod(self.value, 60)
        parts = []
        if minutes:
            parts.append(f"{minutes}m")
        if secs:
            parts.append(f"{secs}s")
        return " ".join(parts)

    @classmethod
    def auto_select(cls, elapsed: float) -> TimeWindow:
        """Pick the largest window strictly shorter than the elapsed seconds."""
        chosen = cls.SECOND
        for window in cls:
            if elapsed > window.value:
                chosen = window
        return chosen

    def format(self, n: int) -> str:
        """Label for the n-th bucket back in time."""
        if self is TimeWindow.SECOND:
            return f"{n}s"
        if self is TimeWindow.TEN_SEC:
            return f"{10 * n}s"
        if self is TimeWindow.MINUTE:
            return f"{n}m"
        return f"{10 * n}m"

    def next(self) -> TimeWindow:
        members = list(TimeWindow)
        return members[min(members.index(self) + 1, len(members) - 1)]

    def prev(self) -> TimeWindow:
        members = list(TimeWindow)
        return members[max(members.index(self) - 1, 0)]


@dataclass(frozen=True)
class TimeWindowMode:
    """Either automatic window selection or a fixed, user-chosen window."""

    window: TimeWindow | None = None

    @classmethod
    def auto(cls) -> TimeWindowMode:
        return cls(None)

    @classmethod
    def manual(cls, window: TimeWindow) -> TimeWindowMode:
        return cls(window)

    @property
    def is_auto(self) -> bool:
        return self.window is None

    def effective(self, elapsed: float) -> TimeWindow:
        """The window in use after the given elapsed seconds."""
        if self.window is None:
            return TimeWindow.auto_select(elapsed)
        return self.window