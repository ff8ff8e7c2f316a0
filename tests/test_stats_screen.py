from __future__ import annotations

import os
from dataclasses import dataclass

from neuroprime_trainer.catalog import Dimension
from neuroprime_trainer.persistence import INITIAL_SKILL, UserStats


@dataclass
class CountingStore:
    loads: int = 0
    resets: int = 0

    def load(self) -> UserStats:
        self.loads += 1
        return UserStats(skills={d: 70 for d in Dimension}, games_played=3, last_trained_utc=None)

    def reset(self) -> UserStats:
        self.resets += 1
        return UserStats(skills={d: INITIAL_SKILL for d in Dimension}, games_played=0, last_trained_utc=None)


def test_stats_screen_loads_once_and_refreshes_on_reset() -> None:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

    import pygame

    from neuroprime_trainer.app import App, StatsScreen

    pygame.init()
    try:
        surface = pygame.Surface((960, 540))
        app = App(surface=surface, font=pygame.font.Font(None, 36))
        store = CountingStore()
        screen = StatsScreen(app, stats=store)  # type: ignore[arg-type]

        for _ in range(30):
            screen.render(surface)
        assert store.loads == 1

        screen.handle_event(pygame.event.Event(pygame.KEYDOWN, {"key": pygame.K_r, "unicode": "r"}))
        for _ in range(5):
            screen.render(surface)
        assert (store.loads, store.resets) == (1, 1)
    finally:
        pygame.quit()
