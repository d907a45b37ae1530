from pathlib import Path

# Centralized paths for data files (single source of truth)
DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
SHARED_PLANS_FILE = DATA_DIR / 'shared_plans.json'

__all__ = ['DATA_DIR', 'SHARED_PLANS_FILE']
