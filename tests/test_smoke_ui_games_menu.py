from __future__ import annotations

import os
from pathlib import Path


def _key(pygame: object, key: int) -> None:
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, {"key": key, "unicode": ""}))  # type: ignore[attr-defined]


def test_ui_smoke_open_each_game_answer_and_exit(tmp_path: Path) -> None:
    # Headless SDL for CI.
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

    import pygame

    from neuroprime_trainer.app import run

    script: dict[int, int] = {1: pygame.K_RETURN}  # Main Menu -> Games
    frame = 2
    for game_index in range(9):
        for _ in range(game_index):
            script[frame] = pygame.K_DOWN
            frame += 1
        script[frame] = pygame.K_RETURN  # open game
        script[frame + 1] = pygame.K_1  # choice keys where they apply
        script[frame + 2] = pygame.K_UP  # flanker / ignored elsewhere
        script[frame + 3] = pygame.K_y  # stroop / ignored elsewhere
        script[frame + 4] = pygame.K_ESCAPE  # exit session -> back to Games
        frame += 6
        # Move cursor back to the top of the list.
        for _ in range(game_index):
            script[frame] = pygame.K_UP
            frame += 1

    def inject(n: int) -> None:
        key = script.get(n)
        if key is not None:
            _key(pygame, key)

    assert run(max_frames=frame + 5, event_injector=inject, db_path=tmp_path / "stats.sqlite3") == 0


def test_ui_smoke_stats_screen(tmp_path: Path) -> None:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

    import pygame

    from neuroprime_trainer.app import run

    def inject(n: int) -> None:
        if n == 1:
            _key(pygame, pygame.K_DOWN)
        elif n == 2:
            _key(pygame, pygame.K_RETURN)
        elif n == 4:
            _key(pygame, pygame.K_r)
        elif n == 6:
            _key(pygame, pygame.K_ESCAPE)

    assert run(max_frames=10, event_injector=inject, db_path=tmp_path / "stats.sqlite3") == 0
