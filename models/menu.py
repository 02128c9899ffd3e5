"""
Menu item model.

Menu items come from the external catalog and are read-only to the rest
of the application. Lookups that miss (or a catalog that is down) resolve
to the unknown-item sentinel, so price and name logic has a single path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class MenuItem:
    """A single orderable menu item."""

    id: str
    """Catalog item id (e.g. 'm01')."""

    name: str
    """Display name."""

    price: int
    """Unit price in yen. 0 means complimentary."""

    category: str = ""
    """Menu category used for filtering."""

    sold_out: bool = False
    """Sold-out items cannot be added to a cart."""

    image_url: str = ""
    """Optional image for the menu card."""

    recommend: int = 0
    """Recommendation rank; higher sorts first."""

    quick_order: int = 0
    """Preparation speed rank; lower sorts first."""

    known: bool = True
    """False only for the unknown-item sentinel."""

    @classmethod
    def unknown(cls, item_id: str) -> "MenuItem":
        """Sentinel for an item the catalog cannot resolve: raw id as name, price 0."""
        return cls(id=item_id, name=item_id, price=0, known=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape used by the menu screen."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "soldOut": self.sold_out,
            "imageUrl": self.image_url,
            "recommend": self.recommend,
            "quickOrder": self.quick_order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MenuItem":
        """Create from a catalog record. Missing or negative prices become 0."""
        price = int(data.get("price") or 0)
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            price=max(price, 0),
            category=str(data.get("category", "")),
            sold_out=bool(data.get("soldOut", data.get("sold_out", False))),
            image_url=str(data.get("imageUrl", data.get("image_url", ""))),
            recommend=int(data.get("recommend", 0)),
            quick_order=int(data.get("quickOrder", data.get("quick_order", 0))),
        )
