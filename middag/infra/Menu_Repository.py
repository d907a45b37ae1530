"""Load the dinner menu from an xlsx spreadsheet.

Layout: the first row of the first sheet holds category names; every cell
below a category name is one dish of that category, top to bottom.
"""
import io
import logging
from pathlib import Path
from typing import Iterable, Optional

import httpx
from openpyxl import load_workbook

from middag.domain.Menu import Menu
from middag.utilities.config import MIDDAGSURL, MENU_FILE, MENU_FETCH_TIMEOUT

logger = logging.getLogger(__name__)

__all__ = ['menu_from_rows', 'parse_workbook', 'fetch_menu', 'read_menu_file', 'load_menu']


def _cell_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def menu_from_rows(rows: Iterable[Iterable]) -> Menu:
    rows = [list(r) for r in rows]
    if len(rows) < 2:
        return Menu()
    header = [_cell_text(v) for v in rows[0]]
    # Keep the column of each category so dishes line up with their header
    columns = [(idx, name) for idx, name in enumerate(header) if name]
    categories = []
    for _, name in columns:
        if name not in categories:
            categories.append(name)
    dishes = {name: [] for name in categories}
    for row in rows[1:]:
        for idx, name in columns:
            if idx < len(row):
                dish = _cell_text(row[idx])
                if dish:
                    dishes[name].append(dish)
    return Menu(categories, dishes)


def parse_workbook(content: bytes) -> Menu:
    workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        return menu_from_rows(sheet.iter_rows(values_only=True))
    finally:
        workbook.close()


def fetch_menu(url: str, client: Optional[httpx.Client] = None) -> Menu:
    """Download and parse the spreadsheet; any failure gives an empty menu."""
    try:
        if client is None:
            with httpx.Client(timeout=MENU_FETCH_TIMEOUT, follow_redirects=True) as own_client:
                response = own_client.get(url, headers={"Cache-Control": "no-store"})
        else:
            response = client.get(url, headers={"Cache-Control": "no-store"})
        response.raise_for_status()
        menu = parse_workbook(response.content)
        logger.info("Loaded menu from %s: %s", url, menu)
        return menu
    except Exception as e:
        logger.error("Failed to fetch or parse menu spreadsheet from %s: %s", url, e)
        return Menu()


def read_menu_file(path) -> Menu:
    try:
        return parse_workbook(Path(path).read_bytes())
    except FileNotFoundError:
        logger.warning("Menu file not found: %s. Returning empty menu.", path)
        return Menu()
    except Exception as e:
        logger.error("Failed to parse menu file %s: %s", path, e)
        return Menu()


def load_menu() -> Menu:
    """Load the menu from the configured source (MIDDAGSURL, else MENU_FILE)."""
    if MIDDAGSURL:
        return fetch_menu(MIDDAGSURL)
    if MENU_FILE:
        return read_menu_file(MENU_FILE)
    logger.error("No menu source configured: set MIDDAGSURL or MENU_FILE")
    return Menu()
