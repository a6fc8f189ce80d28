from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator

from .content import CATEGORY_ICONS, CATEGORY_LABELS, DREAM_SYMBOLS

logger = logging.getLogger(__name__)

# Longest callback is "reflect:<id>:YYYY-MM-DD", Telegram caps callback data at 64 bytes.
MAX_SYMBOL_ID_BYTES = 44


class EmptyCatalogError(LookupError):
    """Raised when a symbol has to be drawn from a catalog with no entries."""


class SymbolCategory(str, Enum):
    NATURE = "nature"
    ANIMALS = "animals"
    OBJECTS = "objects"
    PLACES = "places"
    PEOPLE = "people"
    BODY = "body"
    ACTIONS = "actions"
    ELEMENTS = "elements"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self.value]

    @property
    def icon(self) -> str:
        return CATEGORY_ICONS[self.value]


@dataclass(frozen=True)
class DreamSymbol:
    id: str
    name: str
    icon: str
    category: SymbolCategory
    short_description: str
    detailed_description: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "DreamSymbol":
        symbol_id = str(raw.get("id", "")).strip()
        name = str(raw.get("name", "")).strip()
        if not symbol_id or not name:
            raise ValueError(f"Dream symbol needs an id and a name: {raw!r}")
        if ":" in symbol_id or len(symbol_id.encode("utf-8")) > MAX_SYMBOL_ID_BYTES:
            raise ValueError(
                f"Invalid dream symbol id {symbol_id!r}: no colons and at most {MAX_SYMBOL_ID_BYTES} bytes."
            )
        try:
            category = SymbolCategory(str(raw.get("category", "")).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown category for dream symbol {symbol_id!r}: {raw.get('category')!r}") from exc
        return cls(
            id=symbol_id,
            name=name,
            icon=str(raw.get("icon", "")).strip(),
            category=category,
            short_description=str(raw.get("short_description", "")).strip(),
            detailed_description=str(raw.get("detailed_description", "")).strip(),
        )


class SymbolCatalog:
    """Read-only, ordered collection of dream symbols keyed by stable id."""

    def __init__(self, symbols: Iterable[DreamSymbol]) -> None:
        self._symbols: dict[str, DreamSymbol] = {}
        for symbol in symbols:
            if symbol.id in self._symbols:
                logger.warning("Duplicate dream symbol id %r ignored", symbol.id)
                continue
            self._symbols[symbol.id] = symbol

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[DreamSymbol]:
        return iter(self._symbols.values())

    def __getitem__(self, symbol_id: str) -> DreamSymbol:
        return self._symbols[symbol_id]

    def __contains__(self, symbol_id: object) -> bool:
        return symbol_id in self._symbols

    def ids(self) -> list[str]:
        return list(self._symbols)

    def get(self, symbol_id: str | None) -> DreamSymbol | None:
        if symbol_id is None:
            return None
        return self._symbols.get(symbol_id)

    def by_category(self, category: SymbolCategory | str) -> list[DreamSymbol]:
        wanted = SymbolCategory(category)
        return [s for s in self._symbols.values() if s.category is wanted]

    def categories(self) -> list[SymbolCategory]:
        present = {s.category for s in self._symbols.values()}
        return [c for c in SymbolCategory if c in present]

    def search(self, text: str) -> list[DreamSymbol]:
        needle = text.strip().lower()
        if not needle:
            return []
        return [s for s in self._symbols.values() if needle in s.name.lower()]


def load_catalog(path: str | Path | None = None) -> SymbolCatalog:
    if path is None:
        return SymbolCatalog(DreamSymbol.from_dict(row) for row in DREAM_SYMBOLS)

    source = Path(path).expanduser()
    try:
        rows = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"Symbol catalog file not found: {source}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in symbol catalog file {source}: {exc}") from exc

    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        raise ValueError(f"Symbol catalog file {source} must contain a JSON list of objects.")

    catalog = SymbolCatalog(DreamSymbol.from_dict(row) for row in rows)
    logger.info("Loaded %d dream symbols from %s", len(catalog), source)
    return catalog
