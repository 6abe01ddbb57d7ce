from __future__ import annotations

import argparse
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, FallingBlockGame, GameConfig, GameSession, GameSnapshot, SessionResult
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    # vi
    pygame.K_h: Action.LEFT,
    pygame.K_l: Action.RIGHT,
    pygame.K_j: Action.SOFT_DROP,
    # rotation
    pygame.K_a: Action.ROTATE_CW,
    pygame.K_SPACE: Action.ROTATE_CW,
    pygame.K_s: Action.ROTATE_CCW,
    # arrows
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
}

# Emacs
CTRL_KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_b: Action.LEFT,
    pygame.K_f: Action.RIGHT,
    pygame.K_n: Action.SOFT_DROP,
}

GAME_OVER_HOLD_MS = 2000


def action_for_key(key: int, mod: int = 0) -> Optional[Action]:
    if mod & pygame.KMOD_CTRL:
        return CTRL_KEY_TO_ACTION.get(key)
    return KEY_TO_ACTION.get(key)


def poll_action() -> Optional[Action]:
    """Return the first mapped key press queued since the last poll.

    Closing the window or pressing Escape raises KeyboardInterrupt so the
    caller's cleanup runs the same way as for Ctrl-C.
    """
    action: Optional[Action] = None
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            raise KeyboardInterrupt
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                raise KeyboardInterrupt
            if action is None:
                action = action_for_key(event.key, event.mod)
    return action


def run(seed: Optional[int] = None, cell_size: int = 24) -> Optional[SessionResult]:
    pygame.init()
    try:
        game = FallingBlockGame(GameConfig(random_seed=seed))
        session = GameSession(game)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.locked.shape))
        pygame.display.set_caption("Falling Blocks")

        def on_frame(snapshot: GameSnapshot) -> None:
            renderer.draw(screen, snapshot)
            pygame.display.flip()

        try:
            result = session.run(poll_action, sleep=lambda s: pygame.time.wait(int(s * 1000)), on_frame=on_frame)
        except KeyboardInterrupt:
            return None
        print("GAME OVER!!!!")
        pygame.time.wait(GAME_OVER_HOLD_MS)
        return result
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=24)
    return p


def main() -> None:
    args = build_parser().parse_args()
    result = run(seed=args.seed, cell_size=args.cell_size)
    if result is not None:
        print(f"score: {result.score}  time: {result.elapsed}s")


if __name__ == "__main__":  # pragma: no cover
    main()
