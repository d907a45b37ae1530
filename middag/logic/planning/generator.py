"""Weekly plan generation with locked slots carried over."""
from __future__ import annotations
import logging
import random
from typing import AbstractSet, Callable, Iterable, List, Mapping, Optional
from uuid import uuid4

from middag.domain.Menu import Menu
from middag.domain.Plan import Plan, PlanSlot
from middag.domain.SelectionPolicy import SelectionPolicy
from middag.logic.selection.selector import select_meal
from middag.utilities.constants import (
    WEEKDAY_KEYS, NO_CATEGORY, NO_DISHES_AVAILABLE, NO_DISH_FOUND, ERROR_KEPT_LOCKED
)
from middag.utilities.translations import translate, day_labels, all_sentinel_messages

logger = logging.getLogger(__name__)

__all__ = ["new_slot_id", "available_categories", "carry_locked_slot", "generate_plan"]


def new_slot_id() -> str:
    return uuid4().hex


def available_categories(selected: Iterable[str], menu: Menu) -> List[str]:
    """Selected categories (menu order) that have at least one dish."""
    wanted = set(selected)
    return [c for c in menu.categories if c in wanted and menu.dishes_for(c)]


def carry_locked_slot(slot_id: str, locked_slots: Mapping[str, PlanSlot], day_key: str, language: str) -> PlanSlot:
    """Locked slot moved to `day_key`, dish and category untouched.

    An id missing from `locked_slots` means the locks and the plan are out of
    sync: the slot keeps its id but gets the "kept locked" error placeholder.
    """
    label = translate(language, day_key)
    locked = locked_slots.get(slot_id)
    if locked is not None:
        return locked.replace(day_key=day_key, day=label)
    logger.warning("Locked slot %s on %s could not be carried over; locks and plan are out of sync",
                   slot_id, day_key)
    return PlanSlot(slot_id, day_key, label, translate(language, ERROR_KEPT_LOCKED), NO_CATEGORY)


def generate_plan(previous_plan: Optional[Plan], locked_ids: AbstractSet[str], selected_categories: Iterable[str],
                  menu: Menu, policy: SelectionPolicy = SelectionPolicy.WEIGHTED, language: str = "no",
                  rng=random, id_factory: Callable[[], str] = new_slot_id) -> Plan:
    """Build a new seven-day plan.

    Behavior:
      - A slot whose id is in `locked_ids` keeps its id, dish and category; only
        its day label/key follow the position and the active language.
      - Other slots get a fresh id and a dish from the next category in a
        shuffled round-robin over the available categories.
      - Dishes already placed this pass (locked ones included) are avoided while
        the category still has unused dishes.
      - Missing data never raises: placeholder dishes are emitted instead.
    """
    previous = list(previous_plan or [])
    labels = day_labels(language)
    categories = available_categories(selected_categories, menu)

    sentinels = all_sentinel_messages()
    locked_slots = {s.id: s for s in previous if s.id in locked_ids}
    used = {s.dish for s in locked_slots.values() if s.dish and s.dish not in sentinels}

    order = list(categories)
    rng.shuffle(order)
    category_index = 0

    slots: List[PlanSlot] = []
    for i, day_key in enumerate(WEEKDAY_KEYS):
        existing = previous[i] if i < len(previous) else None

        if existing is not None and existing.id in locked_ids:
            slots.append(carry_locked_slot(existing.id, locked_slots, day_key, language))
            continue

        if not order:
            dish, category = translate(language, NO_DISHES_AVAILABLE), NO_CATEGORY
        else:
            category = order[category_index % len(order)]
            category_index += 1
            chosen = select_meal(menu.dishes_for(category), used, policy, rng=rng)
            if chosen:
                dish = chosen
                used.add(chosen)
            else:
                dish = translate(language, NO_DISH_FOUND)
        slots.append(PlanSlot(id_factory(), day_key, labels[day_key], dish, category))

    return Plan(slots)
