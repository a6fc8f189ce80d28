from __future__ import annotations

import logging
from datetime import date
from typing import Any

from openai import OpenAI, OpenAIError

from .catalog import DreamSymbol
from .content import DREAM_FACTS, LUCID_LESSONS

logger = logging.getLogger(__name__)


class SymbolLLM:
    def __init__(self, api_key: str, model: str) -> None:
        self.enabled = bool(api_key)
        self.model = model
        self.client = OpenAI(api_key=api_key) if self.enabled else None

    def _chat(self, system: str, user: str) -> str | None:
        if not self.enabled or self.client is None:
            return None
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=0.8,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except OpenAIError as exc:
            logger.warning("OpenAI request failed: %s", exc)
            return None
        return (response.choices[0].message.content or "").strip() or None

    def _fallback_reflection(self, symbol: DreamSymbol) -> str:
        theme = symbol.short_description.lower() or "what this image stirs in you"
        return (
            f"Tonight's intention: notice {symbol.name.lower()} if it appears. "
            f"Before sleep, write one line about where {theme} shows up in your life right now, "
            "then ask yourself in the morning whether the dream answered."
        )

    def reflect_on_symbol(self, symbol: DreamSymbol, day: date) -> str:
        system = (
            "You are a gentle dream journaling guide. "
            "Write exactly one short paragraph (2-3 sentences, max 60 words) in plain text. "
            "Offer the symbol as an invitation to reflect, never as a prediction or diagnosis. "
            "End with one question the dreamer can carry into sleep."
        )
        user = (
            f"Date: {day.isoformat()}\n"
            f"Symbol: {symbol.name} ({symbol.category.label})\n"
            f"Meaning: {symbol.short_description}\n"
            f"Notes: {symbol.detailed_description}"
        )
        text = self._chat(system, user)
        if not text:
            return self._fallback_reflection(symbol)
        return text

    def _fallback_interpretation(self, entry: dict[str, Any], symbol: DreamSymbol | None) -> str:
        intensity = entry.get("intensity_level")
        lines = ["Core Themes:"]
        if entry.get("had_negative_emotions"):
            lines.append("- Difficult feelings surfaced. Name the emotion and where you felt it this week.")
        else:
            lines.append("- A calmer dream. Notice which scene felt most alive.")
        if entry.get("did_wake_up") or (isinstance(intensity, int) and intensity >= 8):
            lines.append("- The dream was strong enough to break through. Its images are worth revisiting today.")
        if symbol is not None:
            lines.append(f"- Today's symbol is {symbol.name}: {symbol.short_description.lower()}.")
        lines.append("One Reflection Question:")
        lines.append("- What in your waking life feels like the heart of this dream?")
        return "\n".join(lines)

    def interpret_dream(self, entry: dict[str, Any], symbol: DreamSymbol | None = None) -> str:
        system = (
            "You are a dream journaling coach inspired by evidence-based practices "
            "(dream recall training, reality testing, sleep hygiene). "
            "You never claim medical certainty. Keep output practical and safe. "
            "Respond in plain text (no markdown symbols) with sections:\n"
            "Dream Name:\nQuick Overview:\nIn-Depth Interpretation:\nDaily Life Connection:\nRecommendations:\n"
            "Use short bullets and keep total response compact."
        )
        user = (
            f"Description: {entry.get('description', '')}\n"
            f"Woke up from it: {entry.get('did_wake_up', '')}\n"
            f"Negative emotions: {entry.get('had_negative_emotions', '')}\n"
            f"Intensity (1-10): {entry.get('intensity_level', '')}\n"
            f"Symbol of the day: {symbol.name if symbol else 'none'}"
        )
        text = self._chat(system, user)
        if not text:
            return self._fallback_interpretation(entry, symbol)
        return text

    def daily_content(self, kind: str, day: date) -> str:
        if kind == "fact":
            pool = DREAM_FACTS
            system = (
                "You share one surprising, accurate fact about dreams or sleep science. "
                "Plain text, 2 sentences, max 50 words. No medical advice."
            )
        elif kind == "lesson":
            pool = LUCID_LESSONS
            system = (
                "You teach one practical lucid dreaming technique a beginner can try tonight. "
                "Plain text, start with the technique name and a colon, max 70 words."
            )
        else:
            raise ValueError(f"Unknown daily content kind: {kind!r}")

        text = self._chat(system, f"Date: {day.isoformat()}. Pick something different from yesterday's.")
        if not text:
            return pool[day.toordinal() % len(pool)]
        return text
