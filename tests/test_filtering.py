"""Tests for substring filtering and the filter state."""

import unittest

from redis_tui.filtering import FilterState, apply_filter


class ApplyFilterTests(unittest.TestCase):
    def test_single_letter_matches_every_key_containing_it(self) -> None:
        keys = ["alpha", "beta", "gamma"]
        self.assertEqual(apply_filter(keys, "a"), ["alpha", "beta", "gamma"])

    def test_longer_query_narrows_matches(self) -> None:
        self.assertEqual(apply_filter(["alpha", "beta", "gamma"], "al"), ["alpha"])

    def test_matching_ignores_case(self) -> None:
        keys = ["User:1", "session:USER", "cart"]
        self.assertEqual(apply_filter(keys, "uSeR"), ["User:1", "session:USER"])

    def test_result_is_ordered_subsequence(self) -> None:
        keys = ["k9", "x", "k1", "k5", "y", "k1"]
        result = apply_filter(keys, "k")
        self.assertEqual(result, ["k9", "k1", "k5", "k1"])
        positions = [i for i, key in enumerate(keys) if "k" in key]
        self.assertEqual([keys[i] for i in positions], result)

    def test_no_match_returns_empty_list(self) -> None:
        self.assertEqual(apply_filter(["a", "b"], "zzz"), [])


class FilterStateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.keys = ["alpha", "beta", "gamma"]
        self.state = FilterState()

    def test_empty_query_shows_full_list(self) -> None:
        self.assertFalse(self.state.active)
        self.assertIs(self.state.visible(self.keys), self.keys)

    def test_push_and_pop_recompute_matches(self) -> None:
        self.state.push("a", self.keys)
        self.state.push("l", self.keys)
        self.assertEqual(self.state.visible(self.keys), ["alpha"])
        self.state.pop(self.keys)
        self.assertEqual(self.state.query, "a")
        self.assertEqual(self.state.visible(self.keys), ["alpha", "beta", "gamma"])

    def test_pop_to_empty_reverts_to_full_list(self) -> None:
        self.state.push("b", self.keys)
        self.state.pop(self.keys)
        self.assertEqual(self.state.query, "")
        self.assertIs(self.state.visible(self.keys), self.keys)

    def test_pop_on_empty_query_is_harmless(self) -> None:
        self.state.pop(self.keys)
        self.assertEqual(self.state.query, "")


if __name__ == "__main__":
    unittest.main()
