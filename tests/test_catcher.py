"""Tests for catcher movement."""
from __future__ import annotations

from cleancatch.game.catcher import CatcherController


class TestCatcher:
    def test_starts_centered(self) -> None:
        catcher = CatcherController(800, 600, width=120)
        assert catcher.x == 340

    def test_geometry(self) -> None:
        catcher = CatcherController(800, 600, width=120, height=80, bottom_margin=20)
        rect = catcher.rect
        assert rect.top == 500
        assert rect.bottom == 580
        assert rect.width == 120

    def test_moves_by_step(self) -> None:
        catcher = CatcherController(800, 600, step=8)
        catcher.update(left_held=True, right_held=False, running=True)
        assert catcher.x == 332
        catcher.update(left_held=False, right_held=True, running=True)
        assert catcher.x == 340

    def test_both_keys_cancel_out(self) -> None:
        catcher = CatcherController(800, 600, step=8)
        catcher.update(left_held=True, right_held=True, running=True)
        assert catcher.x == 340

    def test_clamped_to_container(self) -> None:
        catcher = CatcherController(800, 600, width=120, step=8)
        for _ in range(200):
            catcher.update(left_held=True, right_held=False, running=True)
        assert catcher.x == 0
        for _ in range(200):
            catcher.update(left_held=False, right_held=True, running=True)
        assert catcher.x == 680

    def test_frozen_when_not_running(self) -> None:
        catcher = CatcherController(800, 600)
        catcher.update(left_held=True, right_held=False, running=False)
        assert catcher.x == 340

    def test_resize_recenters(self) -> None:
        catcher = CatcherController(800, 600, width=120)
        catcher.update(left_held=True, right_held=False, running=True)
        catcher.resize(400, 500)
        assert catcher.x == 140
        assert catcher.top == 400

    def test_container_narrower_than_catcher(self) -> None:
        catcher = CatcherController(100, 600, width=120)
        assert catcher.x == 0
        catcher.update(left_held=False, right_held=True, running=True)
        assert catcher.x == 0

    def test_clamp(self) -> None:
        catcher = CatcherController(800, 600, width=120)
        catcher.x = 5000
        catcher.clamp()
        assert catcher.x == 680
