"""Scene renderer: paints the round controller's state into a frame buffer.

The renderer only observes the controller; it never mutates game state.
"""

import math

import numpy as np
from numpy.typing import NDArray

from cleancatch.config.settings import Difficulty
from cleancatch.core.state import RoundOutcome, RoundState
from cleancatch.game.drops import Drop, DropKind
from cleancatch.game.round import RoundController
from cleancatch.graphics.primitives import (
    Color,
    blend_rect,
    draw_centered_text,
    draw_circle,
    draw_line,
    draw_rect,
    draw_text,
    fill,
    measure_text,
)

BACKGROUND = (18, 32, 52)
FLOOR = (30, 48, 70)
CATCHER_BODY = (255, 201, 7)
CATCHER_RIM = (255, 240, 170)
HUD_TEXT = (235, 240, 250)
OVERLAY = (6, 10, 20)
HIGHLIGHT = (255, 201, 7)
DIMMED = (120, 130, 150)
WIN_COLOR = (120, 230, 140)
LOSS_COLOR = (255, 90, 90)

DROP_COLORS: dict[DropKind, Color] = {
    DropKind.CLEAN: (46, 157, 247),
    DropKind.BANANA: (250, 220, 60),
    DropKind.DIRTY: (130, 95, 55),
    DropKind.FLY: (60, 60, 70),
    DropKind.SODA_CAN: (220, 50, 50),
}

DIFFICULTY_ORDER = [Difficulty.EASY, Difficulty.NORMAL, Difficulty.HARD]


class SceneRenderer:
    """Draws drops, catcher, HUD and the start/end overlays."""

    def __init__(self, controller: RoundController, text_scale: int = 4):
        self.controller = controller
        self.text_scale = text_scale

    def render(self, buffer: NDArray[np.uint8]) -> None:
        fill(buffer, BACKGROUND)
        self._render_floor(buffer)

        for drop in self.controller.drops:
            self._render_drop(buffer, drop)

        self._render_catcher(buffer)
        self._render_hud(buffer)

        state = self.controller.state
        if state == RoundState.IDLE:
            self._render_start_overlay(buffer)
        elif state == RoundState.ENDED:
            self._render_end_overlay(buffer)

    def _render_floor(self, buffer: NDArray[np.uint8]) -> None:
        h, w = buffer.shape[:2]
        margin = int(self.controller.catcher.bottom_margin)
        if margin > 0:
            draw_rect(buffer, 0, h - margin, w, margin, FLOOR)

    def _render_drop(self, buffer: NDArray[np.uint8], drop: Drop) -> None:
        rect = self.controller.engine.rect_of(drop, self.controller.clock_ms)
        color = DROP_COLORS[drop.kind]
        radius = int(drop.size / 2)
        cx = int(rect.left + radius)
        cy = int(rect.top + radius)

        if drop.kind is DropKind.SODA_CAN:
            draw_rect(buffer, cx - radius // 2, cy - radius, radius, radius * 2, color)
        else:
            draw_circle(buffer, cx, cy, radius, color)

        if drop.kind.rotates:
            # Heading tick shows the spawn rotation
            angle = math.radians(drop.rotation)
            tip_x = cx + int(math.sin(angle) * radius * 0.8)
            tip_y = cy - int(math.cos(angle) * radius * 0.8)
            draw_line(buffer, cx, cy, tip_x, tip_y, (255, 255, 255), thickness=2)

    def _render_catcher(self, buffer: NDArray[np.uint8]) -> None:
        rect = self.controller.catcher.rect
        x, y = int(rect.left), int(rect.top)
        w, h = int(rect.width), int(rect.height)
        draw_rect(buffer, x, y, w, h, CATCHER_BODY)
        draw_rect(buffer, x, y, w, max(2, h // 10), CATCHER_RIM)

    def _render_hud(self, buffer: NDArray[np.uint8]) -> None:
        stats = self.controller.stats
        scale = self.text_scale
        pad = 2 * scale
        w = buffer.shape[1]

        draw_text(buffer, f"SCORE {stats.score}", pad, pad, HUD_TEXT, scale=scale)
        draw_centered_text(buffer, f"TIME {stats.time_left}", pad, HUD_TEXT, scale=scale)
        lives_text = f"LIVES {stats.lives}"
        lives_w, _ = measure_text(lives_text, scale)
        draw_text(buffer, lives_text, w - pad - lives_w, pad, HUD_TEXT, scale=scale)

    def _render_start_overlay(self, buffer: NDArray[np.uint8]) -> None:
        h, w = buffer.shape[:2]
        scale = self.text_scale
        blend_rect(buffer, 0, 0, w, h, OVERLAY, alpha=0.7)

        y = h // 4
        draw_centered_text(buffer, "CLEAN CATCH", y, HIGHLIGHT, scale=scale + 2)
        y += 12 * scale
        draw_centered_text(buffer, "CATCH CLEAN DROPS. DODGE THE REST.", y, HUD_TEXT, scale=max(1, scale - 1))

        y += 14 * scale
        for index, difficulty in enumerate(DIFFICULTY_ORDER, start=1):
            selected = difficulty == self.controller.selected_difficulty
            label = f"{index} {difficulty.value.upper()}"
            if selected:
                label = f"> {label} <"
            draw_centered_text(buffer, label, y, HIGHLIGHT if selected else DIMMED, scale=scale)
            y += 8 * scale

        y += 4 * scale
        draw_centered_text(buffer, "SPACE TO START", y, HUD_TEXT, scale=scale)

    def _render_end_overlay(self, buffer: NDArray[np.uint8]) -> None:
        h, w = buffer.shape[:2]
        scale = self.text_scale
        blend_rect(buffer, 0, 0, w, h, OVERLAY, alpha=0.6)

        summary = self.controller.summary
        won = summary is not None and summary.outcome is RoundOutcome.WIN
        title = "TIME UP!" if won else "GAME OVER"
        score = summary.score if summary is not None else self.controller.stats.score

        y = h // 3
        draw_centered_text(buffer, title, y, WIN_COLOR if won else LOSS_COLOR, scale=scale + 2)
        y += 14 * scale
        draw_centered_text(buffer, f"FINAL SCORE {score}", y, HUD_TEXT, scale=scale)
        y += 12 * scale
        draw_centered_text(buffer, "R TO PLAY AGAIN", y, DIMMED, scale=scale)
