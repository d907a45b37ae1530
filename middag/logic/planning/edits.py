"""Direct plan changes made by the user: lock toggle, manual dish edit, reorder."""
from __future__ import annotations
from typing import AbstractSet, List, Optional, Sequence, Set, Tuple

from middag.domain.Plan import Plan
from middag.utilities.constants import WEEKDAY_KEYS, MANUAL_CATEGORY
from middag.utilities.translations import day_labels

__all__ = ["toggle_lock", "normalize_dish_input", "edit_dish", "reorder_slots", "move_slot", "plan_as_text"]


def toggle_lock(locked_ids: AbstractSet[str], slot_id: str) -> Set[str]:
    result = set(locked_ids)
    if slot_id in result:
        result.discard(slot_id)
    else:
        result.add(slot_id)
    return result


def normalize_dish_input(text: Optional[str]) -> str:
    return (text or "").strip()


def edit_dish(plan: Plan, slot_id: str, text: Optional[str]) -> Tuple[Plan, bool]:
    """Replace a slot's dish with user text and tag it as a manual entry.

    Blank text (after trimming) or text equal to the current dish is not
    committed: the same plan comes back with committed=False.
    Raises KeyError for an id that is not in the plan.
    """
    index = plan.index_of(slot_id)
    current = plan[index]
    new_dish = normalize_dish_input(text)
    if not new_dish or new_dish == current.dish:
        return plan, False
    slots = list(plan)
    slots[index] = current.replace(dish=new_dish, category=MANUAL_CATEGORY)
    return Plan(slots), True


def reorder_slots(plan: Plan, ordered_ids: Sequence[str], language: str) -> Plan:
    """Put slots in the given id order; the position decides the weekday.

    Raises ValueError unless `ordered_ids` is a permutation of the plan's ids.
    """
    ids = plan.ids()
    if len(ordered_ids) != len(ids) or sorted(ordered_ids) != sorted(ids):
        raise ValueError("New order must list every slot of the plan exactly once")
    if len(ids) > len(WEEKDAY_KEYS):
        raise ValueError(f"A plan holds at most {len(WEEKDAY_KEYS)} slots")
    labels = day_labels(language)
    by_id = {s.id: s for s in plan}
    reordered: List = []
    for position, slot_id in enumerate(ordered_ids):
        day_key = WEEKDAY_KEYS[position]
        reordered.append(by_id[slot_id].replace(day_key=day_key, day=labels[day_key]))
    return Plan(reordered)


def move_slot(plan: Plan, active_id: str, over_id: str, language: str) -> Plan:
    """Drag-end: move `active_id` to where `over_id` sits, shifting the slots in between."""
    old_index = plan.index_of(active_id)
    new_index = plan.index_of(over_id)
    if old_index == new_index:
        return plan
    ids = plan.ids()
    ids.insert(new_index, ids.pop(old_index))
    return reorder_slots(plan, ids, language)


def plan_as_text(plan: Plan) -> str:
    """Copy-friendly plan: one "Day: Dish" line per slot."""
    return "\n".join(f"{s.day}: {s.dish}" for s in plan)
