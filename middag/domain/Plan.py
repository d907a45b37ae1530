"""Plan domain entities: one slot per weekday, the week plan, and the shareable planner state."""
from typing import Iterable, Iterator, List, Optional, Set

from middag.domain.SelectionPolicy import SelectionPolicy
from middag.utilities.constants import NO_CATEGORY


class PlanSlot:
    def __init__(self, id: str, day_key: str, day: str = "", dish: str = "", category: str = NO_CATEGORY):
        self.id = id
        self.day_key = day_key
        self.day = day
        self.dish = dish
        self.category = category

    def __str__(self) -> str:
        return f"{self.day}: {self.dish} ({self.category})"

    def __repr__(self) -> str:
        return f"PlanSlot(id={self.id!r}, day_key={self.day_key!r}, dish={self.dish!r}, category={self.category!r})"

    def __eq__(self, other):
        if not isinstance(other, PlanSlot):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def replace(self, **changes) -> "PlanSlot":
        """Return a copy with the given fields changed."""
        data = self.to_dict()
        data.update(changes)
        return PlanSlot(**data)

    def to_dict(self):
        return {
            "id": self.id,
            "day_key": self.day_key,
            "day": self.day,
            "dish": self.dish,
            "category": self.category,
        }

    @staticmethod
    def from_dict(data):
        return PlanSlot(
            id=str(data.get("id", "")),
            day_key=str(data.get("day_key") or ""),
            day=str(data.get("day") or ""),
            dish=str(data.get("dish") or ""),
            category=str(data.get("category") or NO_CATEGORY),
        )


class Plan:
    """Ordered week of slots (monday..sunday until the user reorders them)."""

    def __init__(self, slots: Optional[Iterable[PlanSlot]] = None):
        self.slots: List[PlanSlot] = list(slots or [])

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[PlanSlot]:
        return iter(self.slots)

    def __getitem__(self, index: int) -> PlanSlot:
        return self.slots[index]

    def __eq__(self, other):
        if not isinstance(other, Plan):
            return NotImplemented
        return self.slots == other.slots

    def ids(self) -> List[str]:
        return [s.id for s in self.slots]

    def index_of(self, slot_id: str) -> int:
        for i, slot in enumerate(self.slots):
            if slot.id == slot_id:
                return i
        raise KeyError(slot_id)

    def get(self, slot_id: str) -> Optional[PlanSlot]:
        return next((s for s in self.slots if s.id == slot_id), None)

    def to_list(self):
        return [s.to_dict() for s in self.slots]

    @staticmethod
    def from_list(items):
        return Plan(PlanSlot.from_dict(i) for i in (items or []) if isinstance(i, dict))


class SharedPlanState:
    """Everything needed to restore a planner session from a shared link."""

    def __init__(self, plan: Optional[Plan] = None, locked_ids: Optional[Iterable[str]] = None,
                 selected_categories: Optional[Iterable[str]] = None, language: str = "no",
                 selection_policy: SelectionPolicy = SelectionPolicy.WEIGHTED):
        self.plan = plan if plan is not None else Plan()
        self.locked_ids: Set[str] = set(locked_ids or [])
        # None means every category of the menu
        self.selected_categories: Optional[List[str]] = None if selected_categories is None else list(selected_categories)
        self.language = language
        self.selection_policy = SelectionPolicy.parse(selection_policy)

    def enabled_categories(self, all_categories: Iterable[str]) -> List[str]:
        if self.selected_categories is None:
            return list(all_categories)
        return list(self.selected_categories)

    def ordered_locked_ids(self) -> List[str]:
        """Locked ids in plan order, then any ids no longer in the plan (sorted)."""
        in_plan = [i for i in self.plan.ids() if i in self.locked_ids]
        stale = sorted(self.locked_ids.difference(in_plan))
        return in_plan + stale

    def to_dict(self):
        return {
            "plan": self.plan.to_list(),
            "locked_ids": self.ordered_locked_ids(),
            "selected_categories": None if self.selected_categories is None else list(self.selected_categories),
            "language": self.language,
            "selection_policy": self.selection_policy.value,
        }

    @staticmethod
    def from_dict(data, default_language: str = "no",
                  default_policy: SelectionPolicy = SelectionPolicy.WEIGHTED):
        # The stored blob is opaque; anything but a list falls back to the default
        plan = data.get("plan")
        locked_ids = data.get("locked_ids")
        selected = data.get("selected_categories")
        language = data.get("language")
        return SharedPlanState(
            plan=Plan.from_list(plan if isinstance(plan, list) else []),
            locked_ids=[str(i) for i in locked_ids] if isinstance(locked_ids, list) else [],
            selected_categories=[str(c) for c in selected] if isinstance(selected, list) else None,
            language=language if isinstance(language, str) and language else default_language,
            selection_policy=SelectionPolicy.parse(data.get("selection_policy"), default=default_policy),
        )
