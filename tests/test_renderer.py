"""
Tests for the renderer's layout helpers (no terminal needed).
"""

from breadboard.tui.renderer import clip, scroll_offset


def test_clip():
    assert clip("Setup Autopay", 20) == "Setup Autopay"
    assert clip("Setup Autopay", 6) == "Setup…"
    assert clip("anything", 0) == ""


def test_scroll_follows_selection():
    # 10 rows, 4 visible
    assert scroll_offset(0, 2, 4, 10) == 0
    assert scroll_offset(0, 6, 4, 10) == 3
    assert scroll_offset(5, 2, 4, 10) == 2
    assert scroll_offset(3, 4, 4, 10) == 3


def test_scroll_clamped():
    assert scroll_offset(8, 9, 4, 10) == 6
    assert scroll_offset(5, 1, 4, 3) == 0
    assert scroll_offset(2, 0, 0, 10) == 0
