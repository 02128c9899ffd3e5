"""
Menu catalog collaborator.

The catalog is external to the ordering engine. Two sources ship with the
app: a generated dummy menu (used until a real menu feed exists) and a
JSON file. Whatever the source, callers only ever see:

    fetch_items() -> Outcome[List[MenuItem]]   (failure carries CatalogUnavailableError)
    lookup(item_id) -> MenuItem                (unknown sentinel on miss or failure)

so a broken catalog degrades to "unknown item, price 0" instead of
breaking cart totals or confirmations.
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Any, Dict, List

from core.exceptions import CatalogUnavailableError
from models.menu import MenuItem
from models.outcome import Outcome
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

DUMMY_CATEGORIES = ("Snacks", "Skewers", "Fried")

SORT_ORDERS = ("recommend", "category", "quick")


class MenuCatalog:
    """
    Base catalog. Subclasses implement _load_items().

    _load_items() may raise anything; this class is the boundary that
    turns those failures into Outcomes.
    """

    source_name = "catalog"

    def _load_items(self) -> List[MenuItem]:
        raise NotImplementedError

    def fetch_items(self) -> Outcome[List[MenuItem]]:
        """Load all menu items, never raising."""
        try:
            items = self._load_items()
        except CatalogUnavailableError as e:
            logger.warning(f"Menu catalog unavailable: {e}")
            return Outcome.failed(e)
        except Exception as e:
            logger.warning(f"Menu catalog '{self.source_name}' failed: {e}")
            return Outcome.failed(CatalogUnavailableError(str(e), source=self.source_name))
        return Outcome.ok(items)

    def lookup(self, item_id: str) -> MenuItem:
        """Resolve one item; misses and catalog failures give MenuItem.unknown."""
        outcome = self.fetch_items()
        if outcome.success:
            for item in outcome.value:
                if item.id == item_id:
                    return item
        return MenuItem.unknown(item_id)


class DummyMenuCatalog(MenuCatalog):
    """
    Generated izakaya menu.

    Item N: id "mNN", price 0 when N is a multiple of 5 (complimentary),
    otherwise 500 + 50*N; category cycles by N % 3. Ranks are drawn from a
    seeded RNG so the same seed always yields the same menu.
    """

    source_name = "dummy"

    def __init__(self, count: int = 12, seed: int = 0):
        self.count = count
        self.seed = seed
        self._items = self._generate()

    def _generate(self) -> List[MenuItem]:
        rng = random.Random(self.seed)
        items = []
        for n in range(1, self.count + 1):
            items.append(MenuItem(
                id=f"m{n:02d}",
                name=f"Izakaya menu {n}",
                price=0 if n % 5 == 0 else 500 + n * 50,
                category=DUMMY_CATEGORIES[n % 3],
                recommend=rng.randint(0, 99),
                quick_order=rng.randint(0, 9),
            ))
        return items

    def _load_items(self) -> List[MenuItem]:
        return list(self._items)


class JsonFileMenuCatalog(MenuCatalog):
    """
    Menu read from a JSON file: a list of item objects, or {"items": [...]}.

    The file is re-read on every fetch so menu edits (sold-out flags)
    show up without a restart.
    """

    source_name = "json"

    def __init__(self, path):
        self.path = Path(path)

    def _load_items(self) -> List[MenuItem]:
        if not self.path.exists():
            raise CatalogUnavailableError(
                f"Menu file not found: {self.path}",
                source=str(self.path),
            )

        data = json.loads(self.path.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("items", [])
        return [MenuItem.from_dict(entry) for entry in data]


def create_catalog(config) -> MenuCatalog:
    """Pick the catalog source from a Flask config mapping."""
    path = config.get("MENU_CATALOG_PATH")
    if path:
        logger.info(f"Using menu file: {path}")
        return JsonFileMenuCatalog(path)

    count = int(config.get("DUMMY_MENU_COUNT", 12))
    logger.info(f"Using generated dummy menu ({count} items)")
    return DummyMenuCatalog(count=count)


# =============================================================================
# FILTERING / SORTING
# =============================================================================

def filter_items(items: List[MenuItem], keyword: str = "", category: str = "") -> List[MenuItem]:
    """Case-insensitive name search plus exact category match; empty means no filter."""
    keyword = (keyword or "").strip().lower()
    return [
        item for item in items
        if (not category or item.category == category)
        and (not keyword or keyword in item.name.lower())
    ]


def sort_items(items: List[MenuItem], sort_order: str = "recommend") -> List[MenuItem]:
    """Sort by recommend (desc), category (asc) or quick (asc). Unknown orders use recommend."""
    if sort_order == "category":
        return sorted(items, key=lambda item: item.category)
    if sort_order == "quick":
        return sorted(items, key=lambda item: item.quick_order)
    return sorted(items, key=lambda item: item.recommend, reverse=True)


def categories(items: List[MenuItem]) -> List[str]:
    """Distinct non-empty categories in first-seen order."""
    seen: Dict[str, Any] = {}
    for item in items:
        if item.category:
            seen.setdefault(item.category, None)
    return list(seen)
