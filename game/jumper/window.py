"""
Arcade front end: render sink, input source and frame scheduler

Play:
    python -m game.jumper.window
"""

from __future__ import annotations

import argparse
import logging
import os
import time
from typing import Callable, Dict, Optional

import arcade

from .config import Viewport
from .entities import PlatformKind
from .lifecycle import GameState, JsonBestScoreStore
from .loop import GameLoop
from .scheduler import FrameCallback, Scheduler
from .session import Snapshot
from .utils import clamp

KEY_NAMES = {
    arcade.key.LEFT: "ArrowLeft",
    arcade.key.RIGHT: "ArrowRight",
    arcade.key.A: "a",
    arcade.key.D: "d",
}


class ArcadeScheduler(Scheduler):
    """Frames driven by arcade's clock"""

    def __init__(self, frame_interval: float = 1 / 60):
        self.frame_interval = frame_interval
        self._next_handle = 1
        self._pending: Dict[int, Callable[[float], None]] = {}

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1

        def _fire(_delta_time: float):
            self._pending.pop(handle, None)
            callback(time.perf_counter() * 1000.0)

        self._pending[handle] = _fire
        arcade.schedule_once(_fire, self.frame_interval)
        return handle

    def cancel(self, handle: int) -> None:
        fn = self._pending.pop(handle, None)
        if fn is not None:
            arcade.unschedule(fn)


class JumperWindow(arcade.Window):
    """Draws snapshots; with a GameLoop attached it is also the input source"""

    def __init__(self, width: int, height: int, source: Callable[[], Snapshot],
                 loop: Optional[GameLoop] = None, title: str = "Platform Jumper"):
        super().__init__(width, height, title, resizable=loop is not None)
        self.source = source
        self.loop = loop

        # Colors
        self.BG = (230, 242, 255)
        self.PLATFORM_C = (43, 108, 176)
        self.HAZARD_PLATFORM_C = (197, 48, 48)
        self.PELLET_C = (236, 201, 75)
        self.HAZARD_C = (128, 90, 213)
        self.PLAYER_C = (255, 107, 107)
        self.HUD_C = (15, 23, 42)

    def on_draw(self):
        """Draw the current snapshot (simulation y grows downwards)"""
        self.clear()
        arcade.set_background_color(self.BG)
        snap = self.source()
        top = snap.height

        for p in snap.platforms:
            color = self.HAZARD_PLATFORM_C if p.kind is PlatformKind.HAZARDOUS else self.PLATFORM_C
            arcade.draw_lrbt_rectangle_filled(p.x, p.x + p.w, top - (p.y + p.h), top - p.y, color)

        for c in snap.pellets:
            arcade.draw_circle_filled(c.x, top - c.y, c.r, self.PELLET_C)

        for c in snap.hazards:
            arcade.draw_circle_filled(c.x, top - c.y, c.r, self.HAZARD_C)

        # Stretch along the direction of travel
        pl = snap.player
        stretch = clamp(1.0 + abs(pl.vy) / 80.0, 1.0, 1.35)
        arcade.draw_ellipse_filled(pl.x, top - pl.y, 2 * pl.r / stretch, 2 * pl.r * stretch, self.PLAYER_C)

        arcade.draw_text(f"Score: {snap.score}", 14, top - 28, self.HUD_C, 16)
        if self.loop is not None:
            self._draw_overlay(top)

    def _draw_overlay(self, top: float):
        loop = self.loop
        arcade.draw_text(f"Best: {loop.best_score}", 14, top - 50, self.HUD_C, 12)

        lines = []
        if loop.state is GameState.IDLE:
            lines = ["Platform Jumper", "Arrows / A-D or mouse to steer", "Space to start"]
        elif loop.state is GameState.PAUSED:
            lines = ["Paused", "P to resume"]
        elif loop.state is GameState.GAME_OVER:
            lines = ["Game Over", f"Score: {loop.lifecycle.final_score}"]
            if loop.new_best:
                lines.append("New best!")
            lines.append("Space to restart")

        y = top / 2 + 20 * len(lines) / 2
        for line in lines:
            arcade.draw_text(line, self.width / 2, y, self.HUD_C, 18, anchor_x="center")
            y -= 30

    # ----------------------------
    # Input -> latch
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if self.loop is None:
            return
        if symbol in KEY_NAMES:
            self.loop.inputs.key_down(KEY_NAMES[symbol])
        elif symbol in (arcade.key.SPACE, arcade.key.ENTER):
            if self.loop.state in (GameState.IDLE, GameState.GAME_OVER):
                self.loop.start()
        elif symbol in (arcade.key.P, arcade.key.ESCAPE):
            if self.loop.state is GameState.RUNNING:
                self.loop.pause()
            elif self.loop.state is GameState.PAUSED:
                self.loop.resume()

    def on_key_release(self, symbol: int, modifiers: int):
        if self.loop is not None and symbol in KEY_NAMES:
            self.loop.inputs.key_up(KEY_NAMES[symbol])

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        if self.loop is not None:
            self.loop.inputs.pointer_move(x)

    def on_mouse_leave(self, x: int, y: int):
        if self.loop is not None:
            self.loop.inputs.pointer_leave()

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        if self.loop is not None:
            self.loop.resize(width, height)

    def on_close(self):
        if self.loop is not None:
            self.loop.shutdown()
        super().on_close()


def run_game(width: int = 480, height: int = 720, seed: Optional[int] = None,
             best_file: str = os.path.join(os.path.expanduser("~"), ".jumper_best.json")):
    """Open a window and play until it is closed"""
    loop = GameLoop(
        Viewport(width, height),
        ArcadeScheduler(),
        store=JsonBestScoreStore(best_file),
        seed=seed,
    )
    JumperWindow(width, height, source=loop.snapshot, loop=loop)
    arcade.run()


def main():
    parser = argparse.ArgumentParser(description="Play the endless jumper")
    parser.add_argument("--width", type=int, default=480, help="Window width (default: 480)")
    parser.add_argument("--height", type=int, default=720, help="Window height (default: 720)")
    parser.add_argument("--seed", type=int, default=None, help="World seed (default: random)")
    parser.add_argument(
        "--best-file",
        type=str,
        default=os.path.join(os.path.expanduser("~"), ".jumper_best.json"),
        help="Where the best score is kept",
    )
    parser.add_argument("--verbose", action="store_true", help="Log lifecycle events")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run_game(args.width, args.height, args.seed, args.best_file)


if __name__ == "__main__":
    main()
