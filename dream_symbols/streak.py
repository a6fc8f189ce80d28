from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from .content import MILESTONE_INSIGHTS, STREAK_MILESTONES
from .days import day_key, parse_day_key, shift_day


@dataclass(frozen=True)
class StreakState:
    """Consecutive journaling days, counted on the user's local calendar."""

    current: int = 0
    best: int = 0
    last_log_day: date | None = None

    def log(self, day: date) -> "StreakState":
        if self.last_log_day is not None and day <= self.last_log_day:
            return self
        if self.last_log_day == shift_day(day, -1):
            current = self.current + 1
        else:
            current = 1
        return StreakState(current=current, best=max(self.best, current), last_log_day=day)

    def active(self, today: date) -> int:
        # A streak survives until the end of the day after the last entry.
        if self.last_log_day is None or self.last_log_day < shift_day(today, -1):
            return 0
        return self.current

    def at_risk(self, today: date) -> bool:
        return self.current > 0 and self.last_log_day == shift_day(today, -1)

    def to_document(self) -> dict[str, Any]:
        return {
            "streak": self.current,
            "best_streak": self.best,
            "last_log_date": day_key(self.last_log_day) if self.last_log_day else None,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "StreakState":
        return cls(
            current=int(doc.get("streak") or 0),
            best=int(doc.get("best_streak") or 0),
            last_log_day=parse_day_key(doc.get("last_log_date")),
        )


def next_milestone(streak: int) -> int | None:
    for milestone in STREAK_MILESTONES:
        if milestone > streak:
            return milestone
    return None


def milestone_progress(streak: int) -> float:
    upcoming = next_milestone(streak)
    if upcoming is None:
        return 1.0
    previous = max([m for m in STREAK_MILESTONES if m <= streak], default=0)
    progress = (streak - previous) / (upcoming - previous)
    return min(max(progress, 0.0), 1.0)


def reached_milestone(before: StreakState, after: StreakState) -> int | None:
    if after.current != before.current and after.current in MILESTONE_INSIGHTS:
        return after.current
    return None


def motivational_message(streak: int) -> str:
    if streak == 0:
        return "Start your dream journey today!"
    if streak < 3:
        return "Great start! Keep the momentum going!"
    if streak < 7:
        return "You're building a solid streak! Keep it up!"
    if streak < 10:
        return f"Almost at your first milestone! Just {10 - streak} more days!"
    if streak < 21:
        return "Fantastic work! You're developing a healthy habit!"
    if streak < 60:
        return "You're a dream logging master! Keep exploring your subconscious!"
    return "Your dedication is extraordinary! You're unlocking the deepest insights!"
