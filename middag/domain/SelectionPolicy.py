"""Selection policy: how one dish is drawn from a category's list."""
from enum import Enum


class SelectionPolicy(str, Enum):
    UNIFORM = "uniform"
    WEIGHTED = "weighted"

    @classmethod
    def parse(cls, value, default: "SelectionPolicy | None" = None) -> "SelectionPolicy":
        """Accept enum members and their string values; 'random' is the old name for uniform."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text == "random":
            return cls.UNIFORM
        try:
            return cls(text)
        except ValueError:
            if default is not None:
                return default
            raise
