from __future__ import annotations

from typing import Any

from .content import ENTRY_QUESTIONS

YES_ANSWERS = {"yes", "y", "yeah", "yep", "true", "1"}
NO_ANSWERS = {"no", "n", "nope", "false", "0"}
BOOLEAN_QUESTION_KEYS = {"did_wake_up", "had_negative_emotions"}
MAX_DESCRIPTION_CHARS = 4000


def question_prompt(index: int) -> str:
    _, prompt = ENTRY_QUESTIONS[index]
    return f"Q{index + 1}/{len(ENTRY_QUESTIONS)}: {prompt}"


def parse_answer(key: str, text: str) -> Any:
    """Validate one journal answer. Raises ValueError with a message fit for the user."""
    value = (text or "").strip()
    if key in BOOLEAN_QUESTION_KEYS:
        lowered = value.lower()
        if lowered in YES_ANSWERS:
            return True
        if lowered in NO_ANSWERS:
            return False
        raise ValueError("Please answer yes or no.")
    if key == "intensity_level":
        if not value.isdigit() or not 1 <= int(value) <= 10:
            raise ValueError("Please enter a number from 1 to 10.")
        return int(value)
    if not value:
        raise ValueError("Please describe at least a fragment of the dream.")
    return value[:MAX_DESCRIPTION_CHARS]


def format_entry_summary(entry_id: str, entry: dict[str, Any]) -> str:
    description = str(entry.get("description", ""))
    if len(description) > 120:
        description = description[:117] + "..."
    return (
        f"Dream saved. ID: {entry_id}\n"
        f"Date: {entry.get('entry_date', 'N/A')}\n"
        f"Woke you up: {'yes' if entry.get('did_wake_up') else 'no'} | "
        f"Negative emotions: {'yes' if entry.get('had_negative_emotions') else 'no'} | "
        f"Intensity: {entry.get('intensity_level', 'N/A')}/10\n"
        f"{description}"
    )


def format_entry_index(entries: list[dict[str, Any]]) -> str:
    lines = [f"Dream Journal (latest {len(entries)}):"]
    for i, item in enumerate(entries, start=1):
        day = item.get("entry_date") or item.get("created_at", "")
        snippet = str(item.get("description", "")).splitlines()[0:1]
        title = (snippet[0] if snippet else "Untitled")[:40]
        lines.append(f"{i}. {day} | {title} | intensity {item.get('intensity_level', '?')}")
    return "\n".join(lines)
