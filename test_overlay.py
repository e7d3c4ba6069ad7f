import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from overlay import OverlayView


class OverlayViewTests(unittest.TestCase):
    def _open(self, lines, table_h=20, width=80):
        layout = SimpleNamespace(table_h=table_h, W=width)
        overlay = OverlayView(layout)
        win = MagicMock()
        win.getmaxyx.return_value = (min(len(lines) + 2, table_h), width)
        with patch("overlay.curses.newwin", return_value=win) as newwin:
            overlay.open(lines, title="Row 1")
        return overlay, layout, newwin

    def test_open_sizes_window_to_content_and_leaves_layout_alone(self):
        overlay, layout, newwin = self._open(["a", "b", "c"])
        newwin.assert_called_once_with(5, 80, 7, 0)
        self.assertTrue(overlay.visible)
        self.assertEqual(vars(layout), {"table_h": 20, "W": 80})

    def test_long_content_is_capped_and_scrolls(self):
        lines = [f"line {i}" for i in range(50)]
        overlay, _, newwin = self._open(lines, table_h=10)
        self.assertEqual(newwin.call_args[0][0], 10)
        overlay.handle_key(ord("G"))
        self.assertEqual(overlay.scroll, 42)
        overlay.handle_key(ord("k"))
        self.assertEqual(overlay.scroll, 41)
        overlay.handle_key(ord("g"))
        self.assertEqual(overlay.scroll, 0)

    def test_escape_closes(self):
        overlay, _, _ = self._open(["a"])
        overlay.handle_key(27)
        self.assertFalse(overlay.visible)
        self.assertIsNone(overlay.win)


if __name__ == "__main__":
    unittest.main()
