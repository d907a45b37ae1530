"""
Input validation schemas using Pydantic for the planner API.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from middag.domain.Plan import Plan, PlanSlot, SharedPlanState
from middag.domain.SelectionPolicy import SelectionPolicy
from middag.utilities.config import DEFAULT_LANGUAGE, DEFAULT_SELECTION_POLICY
from middag.utilities.constants import NO_CATEGORY, WEEKDAY_KEYS
from middag.utilities.translations import normalize_language

_WEEKDAY_PATTERN = r'^(' + '|'.join(WEEKDAY_KEYS) + r')$'


class SlotInput(BaseModel):
    """Schema for one plan slot."""
    id: str = Field(..., min_length=1, max_length=100)
    day_key: str = Field(..., pattern=_WEEKDAY_PATTERN)
    day: str = ""
    dish: str = ""
    category: str = NO_CATEGORY

    def to_slot(self) -> PlanSlot:
        return PlanSlot(self.id, self.day_key, self.day, self.dish, self.category or NO_CATEGORY)


class PlanStateInput(BaseModel):
    """Schema for the planner state the page sends with every action.

    selected_categories=None means every menu category.
    """
    plan: List[SlotInput] = Field(default_factory=list, max_length=len(WEEKDAY_KEYS))
    locked_ids: List[str] = Field(default_factory=list)
    selected_categories: Optional[List[str]] = None
    language: str = DEFAULT_LANGUAGE
    selection_policy: str = DEFAULT_SELECTION_POLICY

    @field_validator('language')
    @classmethod
    def validate_language(cls, v):
        """Unknown languages fall back to the default one."""
        return normalize_language(v, default=normalize_language(DEFAULT_LANGUAGE))

    @field_validator('selection_policy')
    @classmethod
    def validate_policy(cls, v):
        """Accept 'uniform', 'weighted' and the older 'random'."""
        try:
            return SelectionPolicy.parse(v).value
        except ValueError:
            raise ValueError(f"selection_policy must be one of: random, {', '.join(p.value for p in SelectionPolicy)}")

    @field_validator('plan')
    @classmethod
    def validate_unique_ids(cls, v):
        ids = [s.id for s in v]
        if len(ids) != len(set(ids)):
            raise ValueError('Slot ids must be unique')
        return v

    def to_state(self) -> SharedPlanState:
        return SharedPlanState(
            plan=Plan(s.to_slot() for s in self.plan),
            locked_ids=self.locked_ids,
            selected_categories=self.selected_categories,
            language=self.language,
            selection_policy=SelectionPolicy.parse(self.selection_policy),
        )


class GenerateRequest(BaseModel):
    state: PlanStateInput = Field(default_factory=PlanStateInput)


class LockToggleRequest(BaseModel):
    state: PlanStateInput
    slot_id: str = Field(..., min_length=1)


class EditDishRequest(BaseModel):
    state: PlanStateInput
    slot_id: str = Field(..., min_length=1)
    dish: str = Field(..., max_length=200)


class ReorderRequest(BaseModel):
    state: PlanStateInput
    slot_ids: List[str]


class MoveSlotRequest(BaseModel):
    state: PlanStateInput
    active_id: str = Field(..., min_length=1)
    over_id: str = Field(..., min_length=1)


class PlanExportRequest(BaseModel):
    state: PlanStateInput


__all__ = [
    'SlotInput', 'PlanStateInput', 'GenerateRequest', 'LockToggleRequest', 'EditDishRequest',
    'ReorderRequest', 'MoveSlotRequest', 'PlanExportRequest'
]
