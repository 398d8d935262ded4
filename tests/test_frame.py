"""Tests for projecting view-model state into frames."""

import unittest

from fakes import FakeGateway
from redis_tui.app import App
from redis_tui.frame import HELP_KEYMAP, DetailPane, ListingPane, build_frame, listing_title
from redis_tui.keys import KeyEvent, KeyKind


class BuildFrameTests(unittest.TestCase):
    def setUp(self) -> None:
        self.gateway = FakeGateway(
            {"alpha": "a" * 3, "beta": {"f1": "v1", "f2": "v2"}, "gamma": ["x"]},
            ttls={"alpha": 42},
        )
        self.gateway.data["stream:1"] = "events"
        self.gateway.types["stream:1"] = "stream"
        self.app = App()
        self.app.connect(self.gateway, "redis://127.0.0.1:6379/0")

    def select(self, key: str) -> None:
        for _ in range(list(self.app.active_keys).index(key) + 1):
            self.app.handle_input(KeyEvent(KeyKind.DOWN))

    def test_listing_title_counts_visible_and_total(self) -> None:
        self.app.handle_input(KeyEvent(KeyKind.CHAR, "m"))
        frame = build_frame(self.app)
        self.assertIsInstance(frame.main, ListingPane)
        self.assertEqual(frame.main.title, "Redis Keys (2/4)")
        self.assertEqual(frame.main.query, "m")
        self.assertEqual(frame.main.items, ["gamma", "stream:1"])
        self.assertEqual(listing_title(0, 0), "Redis Keys (0/0)")

    def test_status_and_help_lines(self) -> None:
        frame = self.app.render()
        self.assertEqual(frame.status, "4 keys found")
        self.assertEqual(frame.help, HELP_KEYMAP)
        self.assertEqual([key for key, _ in frame.help], ["Q", "R", "Enter", "ESC"])

    def test_hash_detail_has_ordered_field_rows(self) -> None:
        self.select("beta")
        self.app.handle_input(KeyEvent(KeyKind.ENTER))
        pane = build_frame(self.app).main
        self.assertIsInstance(pane, DetailPane)
        self.assertTrue(pane.is_table)
        self.assertEqual(pane.key, "beta")
        self.assertEqual(pane.type_label, "hash")
        self.assertEqual(pane.summary, "Hash type, 2 fields")
        self.assertEqual(pane.fields, [("f1", "v1"), ("f2", "v2")])
        self.assertEqual(pane.ttl_text, "Never expires")

    def test_string_detail_shows_value_and_ttl(self) -> None:
        self.select("alpha")
        self.app.handle_input(KeyEvent(KeyKind.ENTER))
        pane = build_frame(self.app).main
        self.assertFalse(pane.is_table)
        self.assertEqual(pane.summary, "aaa")
        self.assertEqual(pane.ttl_text, "42 seconds")

    def test_unknown_detail_body_is_raw_type(self) -> None:
        self.select("stream:1")
        self.app.handle_input(KeyEvent(KeyKind.ENTER))
        pane = build_frame(self.app).main
        self.assertEqual(pane.type_label, "stream")
        self.assertEqual(pane.summary, "stream")

    def test_building_a_frame_does_not_mutate_state(self) -> None:
        self.select("gamma")
        before = (self.app.selection.index, self.app.filter.query, len(self.app.cache), self.app.status)
        build_frame(self.app)
        build_frame(self.app)
        after = (self.app.selection.index, self.app.filter.query, len(self.app.cache), self.app.status)
        self.assertEqual(before, after)

    def test_reload_in_detail_renders_listing(self) -> None:
        self.select("beta")
        self.app.handle_input(KeyEvent(KeyKind.ENTER))
        self.app.handle_input(KeyEvent(KeyKind.REFRESH))
        self.assertIsInstance(build_frame(self.app).main, ListingPane)


if __name__ == "__main__":
    unittest.main()
