"""Menu domain entity: ordered dinner categories and the dishes listed under each."""
from typing import Dict, List, Optional


class Menu:
    def __init__(self, categories: Optional[List[str]] = None, dishes: Optional[Dict[str, List[str]]] = None):
        self.categories = list(categories or [])
        dishes = dishes or {}
        # Every category has a (possibly empty) list; source order is kept
        self.dishes = {c: list(dishes.get(c, [])) for c in self.categories}

    def __bool__(self) -> bool:
        return bool(self.categories)

    def __repr__(self) -> str:
        counts = ", ".join(f"{c}: {len(self.dishes[c])}" for c in self.categories)
        return f"Menu({counts})"

    def dishes_for(self, category: str) -> List[str]:
        return self.dishes.get(category, [])

    def to_dict(self):
        return {"categories": list(self.categories), "dishes": {c: list(d) for c, d in self.dishes.items()}}

    @staticmethod
    def from_dict(data):
        return Menu(data.get("categories", []), data.get("dishes", {}))
