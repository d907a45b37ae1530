import unittest

from middag.domain.Plan import Plan, PlanSlot, SharedPlanState
from middag.domain.SelectionPolicy import SelectionPolicy


class TestSharedPlanState(unittest.TestCase):
    def test_round_trip_keeps_fields(self):
        state = SharedPlanState(
            plan=Plan([PlanSlot("a", "monday", "Mandag", "Taco", "Kjøtt")]),
            locked_ids=["a"],
            selected_categories=["Kjøtt"],
            language="en",
            selection_policy="uniform",
        )
        restored = SharedPlanState.from_dict(state.to_dict())
        self.assertEqual(restored.plan, state.plan)
        self.assertEqual(restored.locked_ids, {"a"})
        self.assertEqual(restored.selected_categories, ["Kjøtt"])
        self.assertEqual(restored.language, "en")
        self.assertIs(restored.selection_policy, SelectionPolicy.UNIFORM)

    def test_string_fields_are_not_split_into_characters(self):
        state = SharedPlanState.from_dict({"locked_ids": "abc", "selected_categories": "Fisk"})
        self.assertEqual(state.locked_ids, set())
        self.assertIsNone(state.selected_categories)

    def test_malformed_values_fall_back_to_defaults(self):
        state = SharedPlanState.from_dict(
            {"plan": {"id": "a"}, "language": 5, "selection_policy": ["weighted"]},
            default_language="es", default_policy=SelectionPolicy.UNIFORM,
        )
        self.assertEqual(len(state.plan), 0)
        self.assertEqual(state.language, "es")
        self.assertIs(state.selection_policy, SelectionPolicy.UNIFORM)

    def test_slot_values_are_stringified(self):
        plan = Plan.from_list([{"id": 7, "day_key": "monday", "dish": 42, "category": None}, "junk"])
        self.assertEqual(len(plan), 1)
        self.assertEqual(plan[0].id, "7")
        self.assertEqual(plan[0].dish, "42")
        self.assertEqual(plan[0].category, "-")

    def test_empty_category_list_means_none_selected(self):
        state = SharedPlanState.from_dict({"selected_categories": []})
        self.assertEqual(state.selected_categories, [])
        self.assertEqual(state.enabled_categories(["Fisk"]), [])
        self.assertEqual(SharedPlanState().enabled_categories(["Fisk"]), ["Fisk"])


if __name__ == '__main__':
    unittest.main()
