"""Core planner logic.

Subpackages:
- selection: drawing one dish from a category (uniform or rank-weighted)
- planning: weekly plan generation and the user's direct edits
"""
__all__ = ["selection", "planning"]
