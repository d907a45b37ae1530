import json
import tempfile
import unittest
from pathlib import Path

from middag.infra.Shared_Plan_Repository import SharedPlanRepository


STATE = {"plan": [{"id": "a", "day_key": "monday", "day": "Mandag", "dish": "Taco", "category": "Kjøtt"}],
         "locked_ids": ["a"], "language": "no"}


class TestSharedPlanRepository(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "data" / "shared_plans.json"
        self.repo = SharedPlanRepository(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_create_then_get(self):
        plan_id = self.repo.create(STATE)
        self.assertTrue(plan_id)
        self.assertEqual(self.repo.get(plan_id), STATE)
        self.assertTrue(self.path.exists())

    def test_create_generates_distinct_ids(self):
        ids = {self.repo.create(STATE) for _ in range(5)}
        self.assertEqual(len(ids), 5)

    def test_unknown_id(self):
        self.assertIsNone(self.repo.get("missing"))
        self.assertFalse(self.repo.exists("missing"))

    def test_update_existing(self):
        plan_id = self.repo.create(STATE)
        changed = dict(STATE, language="en")
        self.assertTrue(self.repo.update(plan_id, changed))
        self.assertEqual(self.repo.get(plan_id)["language"], "en")

    def test_update_missing_does_not_create(self):
        self.assertFalse(self.repo.update("missing", STATE))
        self.assertIsNone(self.repo.get("missing"))

    def test_state_survives_new_repository_instance(self):
        plan_id = self.repo.create(STATE)
        self.assertEqual(SharedPlanRepository(self.path).get(plan_id), STATE)

    def test_non_ascii_written_as_is(self):
        self.repo.create(STATE)
        self.assertIn("Kjøtt", self.path.read_text(encoding="utf-8"))

    def test_corrupt_file_reads_as_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("middag.infra.Shared_Plan_Repository", level="ERROR"):
            self.assertIsNone(self.repo.get("anything"))

    def test_no_temp_files_left_behind(self):
        self.repo.create(STATE)
        leftovers = [p.name for p in self.path.parent.iterdir() if p.name != self.path.name]
        self.assertEqual(leftovers, [])
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(len(json.load(f)), 1)


if __name__ == '__main__':
    unittest.main()
