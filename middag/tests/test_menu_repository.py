import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import httpx
from openpyxl import Workbook

from middag.infra import Menu_Repository
from middag.infra.Menu_Repository import menu_from_rows, parse_workbook, fetch_menu, read_menu_file


def workbook_bytes(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


SHEET = [
    ["Fisk", "Kjøtt", "Vegetar"],
    ["Laks", "Taco", "Linsesuppe"],
    ["Torsk", "Lasagne", None],
    [None, "Kjøttkaker", "Omelett"],
]


class TestMenuFromRows(unittest.TestCase):
    def test_categories_and_dishes_in_order(self):
        menu = menu_from_rows(SHEET)
        self.assertEqual(menu.categories, ["Fisk", "Kjøtt", "Vegetar"])
        self.assertEqual(menu.dishes_for("Fisk"), ["Laks", "Torsk"])
        self.assertEqual(menu.dishes_for("Kjøtt"), ["Taco", "Lasagne", "Kjøttkaker"])
        self.assertEqual(menu.dishes_for("Vegetar"), ["Linsesuppe", "Omelett"])

    def test_blank_header_column_is_skipped_and_columns_stay_aligned(self):
        menu = menu_from_rows([
            ["Fisk", None, "Kjøtt"],
            ["Laks", "orphan", "Taco"],
        ])
        self.assertEqual(menu.categories, ["Fisk", "Kjøtt"])
        self.assertEqual(menu.dishes_for("Kjøtt"), ["Taco"])

    def test_cells_are_stringified_and_trimmed(self):
        menu = menu_from_rows([[" Pasta "], [" Carbonara "], [42]])
        self.assertEqual(menu.categories, ["Pasta"])
        self.assertEqual(menu.dishes_for("Pasta"), ["Carbonara", "42"])

    def test_header_only_or_empty_gives_empty_menu(self):
        self.assertFalse(menu_from_rows([]))
        self.assertFalse(menu_from_rows([["Fisk", "Kjøtt"]]))

    def test_category_without_dishes_is_kept(self):
        menu = menu_from_rows([["Fisk", "Tom"], ["Laks", None]])
        self.assertEqual(menu.categories, ["Fisk", "Tom"])
        self.assertEqual(menu.dishes_for("Tom"), [])

    def test_duplicate_header_merges(self):
        menu = menu_from_rows([["Fisk", "Fisk"], ["Laks", "Torsk"]])
        self.assertEqual(menu.categories, ["Fisk"])
        self.assertEqual(menu.dishes_for("Fisk"), ["Laks", "Torsk"])


class TestWorkbookLoading(unittest.TestCase):
    def test_parse_workbook(self):
        menu = parse_workbook(workbook_bytes(SHEET))
        self.assertEqual(menu.categories, ["Fisk", "Kjøtt", "Vegetar"])
        self.assertEqual(menu.dishes_for("Fisk"), ["Laks", "Torsk"])

    def test_fetch_menu_success(self):
        seen = {}

        def handler(request):
            seen["cache"] = request.headers.get("cache-control")
            return httpx.Response(200, content=workbook_bytes(SHEET))

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            menu = fetch_menu("https://example.test/middag.xlsx", client=client)
        self.assertEqual(menu.dishes_for("Kjøtt"), ["Taco", "Lasagne", "Kjøttkaker"])
        self.assertEqual(seen["cache"], "no-store")

    def test_fetch_menu_http_error_gives_empty_menu(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        with httpx.Client(transport=transport) as client:
            with self.assertLogs("middag.infra.Menu_Repository", level="ERROR"):
                menu = fetch_menu("https://example.test/middag.xlsx", client=client)
        self.assertFalse(menu)

    def test_fetch_menu_garbage_gives_empty_menu(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"not a workbook"))
        with httpx.Client(transport=transport) as client:
            with self.assertLogs("middag.infra.Menu_Repository", level="ERROR"):
                menu = fetch_menu("https://example.test/middag.xlsx", client=client)
        self.assertFalse(menu)

    def test_read_menu_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "middag.xlsx"
            path.write_bytes(workbook_bytes(SHEET))
            menu = read_menu_file(path)
        self.assertEqual(menu.categories, ["Fisk", "Kjøtt", "Vegetar"])

    def test_read_missing_file_gives_empty_menu(self):
        with self.assertLogs("middag.infra.Menu_Repository", level="WARNING"):
            menu = read_menu_file("/nonexistent/middag.xlsx")
        self.assertFalse(menu)

    def test_load_menu_without_source(self):
        with patch.object(Menu_Repository, "MIDDAGSURL", None), patch.object(Menu_Repository, "MENU_FILE", None):
            with self.assertLogs("middag.infra.Menu_Repository", level="ERROR"):
                self.assertFalse(Menu_Repository.load_menu())

    def test_load_menu_prefers_url(self):
        with patch.object(Menu_Repository, "MIDDAGSURL", "https://example.test/x.xlsx"), \
                patch.object(Menu_Repository, "MENU_FILE", "/unused.xlsx"), \
                patch.object(Menu_Repository, "fetch_menu", return_value="from-url") as fetch:
            self.assertEqual(Menu_Repository.load_menu(), "from-url")
        fetch.assert_called_once_with("https://example.test/x.xlsx")


if __name__ == '__main__':
    unittest.main()
