import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Optional
from uuid import uuid4

from middag.infra.paths import SHARED_PLANS_FILE

logger = logging.getLogger(__name__)

# One lock per process; the store is a single JSON file
_lock = Lock()


class SharedPlanRepository:
    """Key-value store of shared planner states (opaque JSON objects by generated id).

    Rules:
      - create() always generates a new id.
      - update() only replaces an existing id; it never creates one.
      - Concurrent writers to the same id: last write wins.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else Path(SHARED_PLANS_FILE)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f) or {}
        except json.JSONDecodeError as e:
            logger.error("Shared plans file %s is not valid JSON: %s", self.path, e)
            return {}
        return store if isinstance(store, dict) else {}

    def _atomic_write(self, store: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".shared_plans_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def create(self, state: dict) -> str:
        plan_id = str(uuid4())
        with _lock:
            store = self._load()
            store[plan_id] = state
            self._atomic_write(store)
        logger.info("Shared plan %s created", plan_id)
        return plan_id

    def get(self, plan_id: str) -> Optional[dict]:
        with _lock:
            return self._load().get(plan_id)

    def exists(self, plan_id: str) -> bool:
        return self.get(plan_id) is not None

    def update(self, plan_id: str, state: dict) -> bool:
        with _lock:
            store = self._load()
            if plan_id not in store:
                return False
            store[plan_id] = state
            self._atomic_write(store)
        logger.info("Shared plan %s updated", plan_id)
        return True
