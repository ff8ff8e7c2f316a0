"""Pygame UI shell for the NeuroPrime trainer.

Nine 60-second mini-games grouped by cognitive dimension, plus a stats screen.
Timing, scoring, adaptivity and round generation live in the core modules;
this file only draws snapshots and turns input into ``SessionController``
calls.
"""

from __future__ import annotations

import math
import random
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pygame
from loguru import logger

from .catalog import GAMES, GameDefinition
from .config import SessionConfig, default_db_path
from .flanker import Direction, FlankerRound
from .log import configure_logging
from .math_sprint import MathRound
from .memory_grid import MemoryGridRound
from .number_series import NumberSeriesRound
from .order_path import OrderPathRound
from .persistence import UserStats, load_stats, open_db, record_session_result, reset_stats
from .reflex import ReflexRound
from .results import SessionResult
from .round_state import MemoryRecallState, OrderPathState
from .rounds import unknown_round
from .scheduler import RealClock
from .schulte import SchulteRound
from .session import Feedback, SessionController, SessionPhase, SessionSnapshot, start_session
from .stroop import StroopRound
from .visual_match import ShapeGroup, VisualMatchRound, group_of

WINDOW_SIZE = (960, 540)
TARGET_FPS = 60

BG = (3, 9, 40)
PANEL_BG = (10, 20, 64)
BORDER = (226, 236, 255)
TEXT_MAIN = (238, 245, 255)
TEXT_MUTED = (160, 176, 210)
CELL_BG = (40, 54, 96)
CELL_ACTIVE = (16, 185, 129)
CORRECT_COLOR = (34, 197, 94)
WRONG_COLOR = (239, 68, 68)
REVERSE_COLOR = (244, 63, 94)

_ARROW_KEYS = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
}


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


@dataclass(frozen=True, slots=True)
class MenuItem:
    label: str
    action: Callable[[], None]


class App:
    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self._surface = surface
        self._font = font
        self._screens: list[Screen] = []
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def pop(self) -> None:
        # Never pop the last/root screen; root handles its own quit/back behavior.
        if len(self._screens) > 1:
            self._screens.pop()

    def replace(self, screen: Screen) -> None:
        if len(self._screens) > 1:
            self._screens[-1] = screen
        else:
            self._screens.append(screen)

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


class StatsStore:
    """Thin wrapper so the UI survives a missing or broken stats database."""

    def __init__(self, path: Path) -> None:
        self._conn: sqlite3.Connection | None
        try:
            self._conn = open_db(path)
        except sqlite3.Error:
            logger.exception("Could not open stats database at {}", path)
            self._conn = None

    def load(self) -> UserStats | None:
        if self._conn is None:
            return None
        return load_stats(self._conn)

    def record(self, definition: GameDefinition, result: SessionResult) -> UserStats | None:
        if self._conn is None:
            return None
        try:
            return record_session_result(self._conn, definition=definition, result=result)
        except sqlite3.Error:
            logger.exception("Could not save {} result", definition.id)
            return None

    def reset(self) -> UserStats | None:
        if self._conn is None:
            return None
        return reset_stats(self._conn)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


class MenuScreen:
    def __init__(self, app: App, title: str, items: list[MenuItem], *, is_root: bool = False) -> None:
        self._app = app
        self._title = title
        self._items = items
        self._selected = 0
        self._is_root = is_root
        self._title_font = pygame.font.Font(None, 42)
        self._item_font = pygame.font.Font(None, 32)
        self._hint_font = pygame.font.Font(None, 22)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        key = event.key
        if key in (pygame.K_UP, pygame.K_w):
            self._move(-1)
        elif key in (pygame.K_DOWN, pygame.K_s):
            self._move(1)
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            if self._items:
                self._items[self._selected].action()
        elif key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
            if self._is_root:
                self._app.quit()
            else:
                self._app.pop()

    def _move(self, delta: int) -> None:
        if not self._items:
            return
        self._selected = (self._selected + delta) % len(self._items)

    def render(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        surface.fill(BG)

        frame = pygame.Rect(20, 20, max(260, w - 40), max(220, h - 40))
        pygame.draw.rect(surface, PANEL_BG, frame)
        pygame.draw.rect(surface, BORDER, frame, 2)

        title = self._title_font.render(self._title, True, TEXT_MAIN)
        surface.blit(title, title.get_rect(midtop=(frame.centerx, frame.y + 16)))

        item_count = max(1, len(self._items))
        top = frame.y + 70
        row_h = max(26, min(40, (frame.bottom - 60 - top) // item_count))
        for idx, item in enumerate(self._items):
            row = pygame.Rect(frame.x + 40, top + idx * row_h, frame.w - 80, row_h - 4)
            selected = idx == self._selected
            pygame.draw.rect(surface, (244, 248, 255) if selected else (9, 20, 106), row)
            color = (14, 26, 74) if selected else TEXT_MAIN
            text = self._item_font.render(item.label, True, color)
            surface.blit(text, (row.x + 10, row.y + (row.h - text.get_height()) // 2))

        foot = self._hint_font.render("Enter: Select  |  Esc: Back", True, TEXT_MUTED)
        surface.blit(foot, foot.get_rect(midbottom=(frame.centerx, frame.bottom - 10)))


class SessionScreen:
    """Hosts one running session: draws its snapshot and forwards input."""

    def __init__(
        self,
        app: App,
        *,
        definition: GameDefinition,
        stats: StatsStore,
        session_factory: Callable[..., SessionController],
    ) -> None:
        self._app = app
        self._definition = definition
        self._stats = stats
        self._session = session_factory(on_complete=self._on_complete, on_exit=self._on_exit)

        self._big_font = pygame.font.Font(None, 96)
        self._mid_font = pygame.font.Font(None, 48)
        self._small_font = pygame.font.Font(None, 26)
        self._cell_hitboxes: list[tuple[pygame.Rect, int]] = []

    @property
    def session(self) -> SessionController:
        return self._session

    def _on_complete(self, performance_index: int, accuracy: int, difficulty_reached: int) -> None:
        result = SessionResult(performance_index, accuracy, difficulty_reached)
        stats = self._stats.record(self._definition, result)
        self._app.replace(ResultScreen(self._app, definition=self._definition, result=result, stats=stats))

    def _on_exit(self) -> None:
        self._app.pop()

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._session.phase is not SessionPhase.RUNNING:
            return
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE):
                self._session.exit()
                return
            response = self._response_from_key(event.key)
            if response is not None:
                self._session.respond(response)
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for rect, index in self._cell_hitboxes:
                if rect.collidepoint(event.pos):
                    self._session.respond(index)
                    return

    def _response_from_key(self, key: int) -> object | None:
        rnd = self._session.state.current_round
        if isinstance(rnd, StroopRound):
            if key in (pygame.K_y, pygame.K_LEFT):
                return True
            if key in (pygame.K_n, pygame.K_RIGHT):
                return False
            return None
        if isinstance(rnd, FlankerRound):
            return _ARROW_KEYS.get(key)
        choice = _choice_from_key(key)
        if choice is None:
            return None
        if isinstance(rnd, (MathRound, NumberSeriesRound)):
            return rnd.choices[choice] if choice < len(rnd.choices) else None
        if isinstance(rnd, VisualMatchRound):
            return choice
        return None

    def render(self, surface: pygame.Surface) -> None:
        self._session.update()
        if self._session.phase is not SessionPhase.RUNNING:
            return
        snap = self._session.snapshot()

        surface.fill(BG)
        w, h = surface.get_size()
        self._draw_header(surface, snap)
        body = pygame.Rect(20, 70, w - 40, h - 90)
        self._cell_hitboxes = []

        rnd = snap.round
        if isinstance(rnd, MathRound):
            self._draw_choice_round(surface, body, rnd.expression, rnd.choices)
        elif isinstance(rnd, NumberSeriesRound):
            terms = "  ".join(str(t) for t in rnd.terms) + "  ?"
            self._draw_choice_round(surface, body, terms, rnd.choices)
        elif isinstance(rnd, StroopRound):
            self._draw_stroop(surface, body, rnd)
        elif isinstance(rnd, MemoryGridRound):
            self._draw_memory(surface, body, rnd, snap)
        elif isinstance(rnd, SchulteRound):
            self._draw_number_grid(surface, body, rnd.size, rnd.cells, prompt=f"Find {rnd.target}")
        elif isinstance(rnd, OrderPathRound):
            rs = snap.round_state
            cleared = rs.cleared if isinstance(rs, OrderPathState) else frozenset()
            nxt = rs.expected_next if isinstance(rs, OrderPathState) else 1
            self._draw_number_grid(surface, body, rnd.size, rnd.cells, prompt=f"Next: {nxt}", cleared=cleared)
        elif isinstance(rnd, VisualMatchRound):
            self._draw_visual_match(surface, body, rnd)
        elif isinstance(rnd, FlankerRound):
            self._draw_flanker(surface, body, rnd)
        elif isinstance(rnd, ReflexRound):
            self._draw_reflex(surface, body, rnd)
        else:
            unknown_round(rnd)

        if snap.feedback is not None:
            color = CORRECT_COLOR if snap.feedback is Feedback.CORRECT else WRONG_COLOR
            pygame.draw.rect(surface, color, surface.get_rect(), 8)

    def _draw_header(self, surface: pygame.Surface, snap: SessionSnapshot) -> None:
        w, _ = surface.get_size()
        title = self._small_font.render(
            f"{snap.title}  |  Level {snap.difficulty}  |  Score {snap.score}  |  Streak {snap.streak}",
            True,
            TEXT_MAIN,
        )
        surface.blit(title, (24, 24))
        timer_color = WRONG_COLOR if snap.time_remaining_s < 10 else TEXT_MAIN
        timer = self._mid_font.render(str(snap.time_remaining_s), True, timer_color)
        surface.blit(timer, timer.get_rect(topright=(w - 24, 14)))

    def _draw_choice_round(
        self,
        surface: pygame.Surface,
        body: pygame.Rect,
        prompt: str,
        choices: tuple[int, ...],
    ) -> None:
        text = self._big_font.render(prompt, True, TEXT_MAIN)
        surface.blit(text, text.get_rect(center=(body.centerx, body.y + body.h // 3)))
        slot_w = body.w // max(1, len(choices))
        for i, value in enumerate(choices):
            label = self._mid_font.render(f"{i + 1}) {value}", True, TEXT_MAIN)
            cx = body.x + slot_w * i + slot_w // 2
            surface.blit(label, label.get_rect(center=(cx, body.y + body.h * 3 // 4)))

    def _draw_stroop(self, surface: pygame.Surface, body: pygame.Rect, rnd: StroopRound) -> None:
        hint = self._small_font.render("Does the meaning match the colour?  Y = yes, N = no", True, TEXT_MUTED)
        surface.blit(hint, hint.get_rect(midtop=(body.centerx, body.y + 10)))
        word = self._big_font.render(rnd.word, True, rnd.color_rgb)
        surface.blit(word, word.get_rect(center=body.center))

    def _grid_cells(self, body: pygame.Rect, size: int) -> list[pygame.Rect]:
        side = min(body.w, body.h - 40)
        cell = side // max(1, size)
        left = body.centerx - (cell * size) // 2
        top = body.y + 40
        return [
            pygame.Rect(left + (i % size) * cell + 3, top + (i // size) * cell + 3, cell - 6, cell - 6)
            for i in range(size * size)
        ]

    def _draw_memory(
        self,
        surface: pygame.Surface,
        body: pygame.Rect,
        rnd: MemoryGridRound,
        snap: SessionSnapshot,
    ) -> None:
        rs = snap.round_state
        assert isinstance(rs, MemoryRecallState)
        if rs.marks_visible:
            prompt = "MEMORIZE THE PATTERN"
        else:
            prompt = f"REPLICATE THE PATTERN ({len(rs.selected)}/{len(rnd.targets)})"
        text = self._small_font.render(prompt, True, TEXT_MUTED)
        surface.blit(text, text.get_rect(midtop=(body.centerx, body.y + 8)))
        for i, rect in enumerate(self._grid_cells(body, rnd.grid_size)):
            lit = (rs.marks_visible and i in rnd.targets) or (not rs.marks_visible and i in rs.selected)
            pygame.draw.rect(surface, CELL_ACTIVE if lit else CELL_BG, rect, border_radius=6)
            if not rs.marks_visible:
                self._cell_hitboxes.append((rect, i))

    def _draw_number_grid(
        self,
        surface: pygame.Surface,
        body: pygame.Rect,
        size: int,
        cells: tuple[int, ...],
        *,
        prompt: str,
        cleared: frozenset[int] = frozenset(),
    ) -> None:
        text = self._small_font.render(prompt, True, TEXT_MUTED)
        surface.blit(text, text.get_rect(midtop=(body.centerx, body.y + 8)))
        for i, rect in enumerate(self._grid_cells(body, size)):
            pygame.draw.rect(surface, CELL_ACTIVE if i in cleared else CELL_BG, rect, border_radius=6)
            label = self._mid_font.render(str(cells[i]), True, TEXT_MAIN)
            surface.blit(label, label.get_rect(center=rect.center))
            self._cell_hitboxes.append((rect, i))

    def _draw_visual_match(self, surface: pygame.Surface, body: pygame.Rect, rnd: VisualMatchRound) -> None:
        target_rect = pygame.Rect(0, 0, 110, 110)
        target_rect.midtop = (body.centerx, body.y + 4)
        _draw_shape(surface, target_rect, rnd.target_shape, rnd.target_rotation, TEXT_MAIN)
        count = len(rnd.options)
        slot_w = body.w // max(1, count)
        size = min(90, slot_w - 10)
        for i, option in enumerate(rnd.options):
            rect = pygame.Rect(0, 0, size, size)
            rect.center = (body.x + slot_w * i + slot_w // 2, body.bottom - size)
            pygame.draw.rect(surface, CELL_BG, rect, border_radius=8)
            _draw_shape(surface, rect.inflate(-16, -16), option.shape, option.rotation, TEXT_MAIN)
            label = self._small_font.render(str(i + 1), True, TEXT_MUTED)
            surface.blit(label, label.get_rect(midtop=(rect.centerx, rect.bottom + 4)))
            self._cell_hitboxes.append((rect, i))

    def _draw_flanker(self, surface: pygame.Surface, body: pygame.Rect, rnd: FlankerRound) -> None:
        hint = "REVERSE: press the opposite direction" if rnd.is_reversed else "Press the direction of the centre arrow"
        text = self._small_font.render(hint, True, REVERSE_COLOR if rnd.is_reversed else TEXT_MUTED)
        surface.blit(text, text.get_rect(midtop=(body.centerx, body.y + 8)))
        slot = min(110, body.w // (len(rnd.sequence) + 1))
        left = body.centerx - slot * len(rnd.sequence) // 2
        for i, direction in enumerate(rnd.sequence):
            rect = pygame.Rect(left + i * slot + 6, body.centery - slot // 2, slot - 12, slot - 12)
            if i == rnd.center_index:
                color = REVERSE_COLOR if rnd.is_reversed else TEXT_MAIN
            else:
                color = TEXT_MUTED
            _draw_arrow(surface, rect, direction, color)

    def _draw_reflex(self, surface: pygame.Surface, body: pygame.Rect, rnd: ReflexRound) -> None:
        for i, rect in enumerate(self._grid_cells(body, rnd.size)):
            active = i == rnd.active_index
            pygame.draw.rect(surface, CELL_ACTIVE if active else CELL_BG, rect, border_radius=8)
            icon = self._small_font.render(rnd.icons[i], True, TEXT_MAIN if active else TEXT_MUTED)
            surface.blit(icon, icon.get_rect(center=rect.center))
            self._cell_hitboxes.append((rect, i))


class ResultScreen:
    def __init__(
        self,
        app: App,
        *,
        definition: GameDefinition,
        result: SessionResult,
        stats: UserStats | None,
    ) -> None:
        self._app = app
        self._definition = definition
        self._result = result
        self._stats = stats
        self._title_font = pygame.font.Font(None, 52)
        self._font = pygame.font.Font(None, 32)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN and event.key in (
            pygame.K_RETURN,
            pygame.K_KP_ENTER,
            pygame.K_SPACE,
            pygame.K_ESCAPE,
        ):
            self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(BG)
        w, _ = surface.get_size()
        title = self._title_font.render(f"{self._definition.name} complete", True, TEXT_MAIN)
        surface.blit(title, title.get_rect(midtop=(w // 2, 40)))
        lines = [
            f"Performance: {self._result.performance_index}",
            f"Accuracy: {self._result.accuracy}%",
            f"Level reached: {self._result.difficulty_reached}",
        ]
        if self._stats is not None:
            lines.append(
                f"{self._definition.dimension.value.title()} skill: {self._stats.skill(self._definition.dimension)}"
            )
        lines.append("")
        lines.append("Press Enter to continue.")
        for i, line in enumerate(lines):
            text = self._font.render(line, True, TEXT_MAIN)
            surface.blit(text, text.get_rect(midtop=(w // 2, 130 + i * 40)))


class StatsScreen:
    def __init__(self, app: App, *, stats: StatsStore) -> None:
        self._app = app
        self._stats = stats
        self._title_font = pygame.font.Font(None, 48)
        self._font = pygame.font.Font(None, 30)
        self._current = stats.load()

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_r:
            self._current = self._stats.reset()
        elif event.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE, pygame.K_RETURN):
            self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(BG)
        w, _ = surface.get_size()
        title = self._title_font.render("Skill profile", True, TEXT_MAIN)
        surface.blit(title, title.get_rect(midtop=(w // 2, 30)))
        stats = self._current
        if stats is None:
            text = self._font.render("Stats unavailable.", True, TEXT_MUTED)
            surface.blit(text, text.get_rect(midtop=(w // 2, 120)))
            return
        y = 100
        bar_w = w - 360
        for dim, value in stats.skills.items():
            label = self._font.render(dim.value.title(), True, TEXT_MAIN)
            surface.blit(label, (60, y))
            bar = pygame.Rect(240, y + 4, bar_w, 20)
            pygame.draw.rect(surface, CELL_BG, bar)
            pygame.draw.rect(surface, CELL_ACTIVE, (bar.x, bar.y, bar_w * value // 100, bar.h))
            num = self._font.render(str(value), True, TEXT_MAIN)
            surface.blit(num, (bar.right + 12, y))
            y += 40
        footer = self._font.render(
            f"Games played: {stats.games_played}   (R: reset, Esc: back)",
            True,
            TEXT_MUTED,
        )
        surface.blit(footer, (60, y + 20))


def _choice_from_key(key: int) -> int | None:
    if pygame.K_1 <= key <= pygame.K_9:
        return key - pygame.K_1
    if pygame.K_KP1 <= key <= pygame.K_KP9:
        return key - pygame.K_KP1
    return None


def _draw_arrow(surface: pygame.Surface, rect: pygame.Rect, direction: Direction, color: tuple[int, int, int]) -> None:
    cx, cy = rect.center
    r = min(rect.w, rect.h) // 2
    # Right-pointing arrow, rotated by direction.
    points = [(-r, -r // 4), (0, -r // 4), (0, -r // 2), (r, 0), (0, r // 2), (0, r // 4), (-r, r // 4)]
    angle = {
        Direction.RIGHT: 0.0,
        Direction.DOWN: math.pi / 2,
        Direction.LEFT: math.pi,
        Direction.UP: -math.pi / 2,
    }[direction]
    c, s = math.cos(angle), math.sin(angle)
    pygame.draw.polygon(surface, color, [(cx + x * c - y * s, cy + x * s + y * c) for x, y in points])


def _draw_shape(
    surface: pygame.Surface,
    rect: pygame.Rect,
    shape: str,
    rotation: int,
    color: tuple[int, int, int],
) -> None:
    side = min(rect.w, rect.h)
    sprite = pygame.Surface((side, side), pygame.SRCALPHA)
    scale = 0.5 if shape.startswith(("small", "tiny")) else 0.9
    r = int(side * scale / 2)
    c = side // 2
    width = 3 if "hollow" in shape or "ring" in shape else 0
    group = group_of(shape)

    if group is ShapeGroup.CIRCLE:
        pygame.draw.circle(sprite, color, (c, c), r, width)
        if shape in ("dot_ring", "target", "double_ring"):
            pygame.draw.circle(sprite, color, (c, c), max(2, r // 3), 0 if shape == "dot_ring" else 2)
    elif group is ShapeGroup.SQUARE:
        box = pygame.Rect(c - r, c - r, 2 * r, 2 * r)
        pygame.draw.rect(sprite, color, box, width, border_radius=8 if shape == "rounded_square" else 0)
    else:
        points = _polygon_points(group, shape, c, r)
        pygame.draw.polygon(sprite, color, points, width)

    if rotation:
        sprite = pygame.transform.rotate(sprite, -rotation)
    surface.blit(sprite, sprite.get_rect(center=rect.center))


def _polygon_points(group: ShapeGroup, shape: str, c: int, r: int) -> list[tuple[float, float]]:
    if group is ShapeGroup.STAR:
        tips = {"star4": 4, "star5": 5, "hollow_star": 5, "star6": 6, "star7": 7, "star8": 8}.get(shape, 5)
        pts = []
        for i in range(tips * 2):
            rad = r if i % 2 == 0 else r * 0.45
            a = -math.pi / 2 + i * math.pi / tips
            pts.append((c + rad * math.cos(a), c + rad * math.sin(a)))
        return pts
    if group is ShapeGroup.DIAMOND:
        squash = 0.5 if shape in ("slim_diamond", "lozenge") else 0.8
        return [(c, c - r), (c + r * squash, c), (c, c + r), (c - r * squash, c)]
    # Triangles and wedges.
    if shape.startswith(("wedge", "hollow_wedge")):
        return [(c - r, c - r), (c + r, c), (c - r, c + r)]
    return [(c, c - r), (c + r, c + r), (c - r, c + r)]


def _new_seed() -> int:
    return random.SystemRandom().randint(1, 2**31 - 1)


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    db_path: Path | None = None,
    config: SessionConfig | None = None,
) -> int:
    configure_logging()
    pygame.init()

    pygame.display.set_caption("NeuroPrime Trainer")
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)

    font = pygame.font.Font(None, 36)
    clock = pygame.time.Clock()

    app = App(surface=surface, font=font)
    stats = StatsStore(db_path or default_db_path())
    real_clock = RealClock()

    def open_game(definition: GameDefinition) -> None:
        seed = _new_seed()
        logger.debug("Opening {} with seed {}", definition.id, seed)
        app.push(
            SessionScreen(
                app,
                definition=definition,
                stats=stats,
                session_factory=lambda **callbacks: start_session(
                    definition,
                    clock=real_clock,
                    seed=seed,
                    config=config,
                    **callbacks,
                ),
            )
        )

    games_menu = MenuScreen(
        app,
        "Games",
        [MenuItem(f"{g.name} ({g.dimension.value})", lambda g=g: open_game(g)) for g in GAMES]
        + [MenuItem("Back", app.pop)],
    )

    main_items = [
        MenuItem("Play", lambda: app.push(games_menu)),
        MenuItem("Skill profile", lambda: app.push(StatsScreen(app, stats=stats))),
        MenuItem("Quit", app.quit),
    ]

    app.push(MenuScreen(app, "NeuroPrime", main_items, is_root=True))

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        stats.close()
        pygame.quit()

    return 0
