"""
Arcade window: draws a FrameController and feeds it pointer input

Play:
    python -m game.island.window
"""

from __future__ import annotations

import logging
from typing import Optional

import arcade

from .entities import BonusType
from .frame import FrameController
from .island_env import (BALL_C, BG_C, BONUS_COLORS, ISLAND_C, PADDLE_C,
                         SHIELD_C, UNKNOWN_BONUS_C)
from .purchases import MockStore


BONUS_LABELS = {
    BonusType.MULTIBALL: "M",
    BonusType.SHIELD: "S",
    BonusType.SHRINK: "-",
    BonusType.GROW: "+",
}


class IslandWindow(arcade.Window):
    """Arcade window for rendering and playing one session"""

    def __init__(self, game: FrameController, store: Optional[MockStore] = None,
                 interactive: bool = False):
        super().__init__(int(game.config.width), int(game.config.height), "Hit the Island")
        self.game = game
        self.store = store
        self.interactive = interactive
        self.background_color = BG_C
        self.HUD_C = (229, 231, 235)
        self.ISLAND_TEXT_C = (6, 95, 70)
        self.ICON_C = (31, 41, 55)

    def _sy(self, y: float) -> float:
        # Game y grows downwards, Arcade's grows upwards
        return self.height - y

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        snap = self.game.snapshot()

        isl = snap["island"]
        arcade.draw_lrbt_rectangle_filled(
            isl["x"], isl["x"] + isl["width"],
            self._sy(isl["y"] + isl["height"]), self._sy(isl["y"]), ISLAND_C
        )
        arcade.draw_text("Dynamic Island", isl["x"] + isl["width"] / 2,
                         self._sy(isl["y"] + isl["height"] / 2), self.ISLAND_TEXT_C, 12,
                         anchor_x="center", anchor_y="center", bold=True)

        p = snap["paddle"]
        arcade.draw_lrbt_rectangle_filled(
            p["x"], p["x"] + p["width"], self._sy(p["y"] + p["height"]), self._sy(p["y"]), PADDLE_C
        )
        if snap["shield"]:
            arcade.draw_circle_outline(p["x"] + p["width"] / 2, self._sy(p["y"] + p["height"] / 2),
                                       p["width"] / 2 + 6, SHIELD_C, 4)

        for b in snap["balls"]:
            arcade.draw_circle_filled(b["x"], self._sy(b["y"]), b["radius"], BALL_C)

        for b in snap["bonuses"]:
            kind = BonusType.from_name(b["kind"]) if b["kind"] else None
            half = b["size"] / 2
            cx, cy = b["x"] + half, self._sy(b["y"] + half)
            arcade.draw_circle_filled(cx, cy, half, BONUS_COLORS.get(kind, UNKNOWN_BONUS_C))
            arcade.draw_text(BONUS_LABELS.get(kind, "?"), cx, cy, self.ICON_C, 14,
                             anchor_x="center", anchor_y="center", bold=True)

        arcade.draw_text(f"Score: {snap['score']}", 12, self.height - 24, self.HUD_C, 14)
        if self.store is not None and self.store.status:
            arcade.draw_text(self.store.status, 12, 12, self.HUD_C, 12)
        if snap["game_over"]:
            arcade.draw_text("Game over - press R to restart", self.width / 2, self.height / 2,
                             self.HUD_C, 18, anchor_x="center", anchor_y="center")

    # ----------------------------
    # Interactive play
    # ----------------------------

    def on_update(self, delta_time: float):
        if self.interactive:
            self.game.step()

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.game.input.mouse_x = x

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        # A held button stands in for a touch
        self.game.input.touch_x = x

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.game.input.end_touch()

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.R:
            self.game.restart()
        elif symbol == arcade.key.ESCAPE:
            self.close()
        elif self.store is not None:
            if symbol == arcade.key.KEY_1:
                self.store.purchase_remove_ads()
            elif symbol == arcade.key.KEY_2:
                self.store.purchase_bonus_pack("multiball")
            elif symbol == arcade.key.KEY_3:
                self.store.activate_vip_mode()
            elif symbol == arcade.key.KEY_4:
                self.store.restore_purchases()


def play(seed: Optional[int] = None):
    """Open a window and play with the mouse"""
    logging.basicConfig(level=logging.INFO)
    game = FrameController(seed=seed)
    window = IslandWindow(game, store=MockStore(game), interactive=True)
    window.set_update_rate(game.config.frame_ms / 1000.0)
    arcade.run()


if __name__ == "__main__":
    play()
