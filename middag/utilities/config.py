"""Configuration management for the Middag planner."""
import os
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Menu spreadsheet source: URL wins over a local file
MIDDAGSURL: Final[Optional[str]] = os.getenv('MIDDAGSURL') or None
MENU_FILE: Final[Optional[str]] = os.getenv('MENU_FILE') or None
MENU_FETCH_TIMEOUT: Final[float] = float(os.getenv('MENU_FETCH_TIMEOUT', '15'))

# Planner defaults
DEFAULT_LANGUAGE: Final[str] = os.getenv('DEFAULT_LANGUAGE', 'no')
DEFAULT_SELECTION_POLICY: Final[str] = os.getenv('DEFAULT_SELECTION_POLICY', 'weighted')

# Shared plans: quiet period before an autosave is written
AUTOSAVE_DELAY_SECONDS: Final[float] = float(os.getenv('AUTOSAVE_DELAY_SECONDS', '1.0'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
STATIC_DIR: Final[Path] = BASE_DIR / 'static'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
