from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import sqlite3
import time

from loguru import logger

from .catalog import Dimension, GameDefinition
from .cognitive_core import round_half_up
from .results import SessionResult

SCHEMA_VERSION = 1

INITIAL_SKILL = 40
# New skill = old * 0.7 + session performance * 0.3
HISTORY_WEIGHT = 0.7
SESSION_WEIGHT = 0.3


@dataclass(frozen=True, slots=True)
class UserStats:
    skills: dict[Dimension, int]
    games_played: int
    last_trained_utc: str | None

    def skill(self, dimension: Dimension) -> int:
        return self.skills[Dimension(dimension)]


@dataclass(frozen=True, slots=True)
class StoredResult:
    game_id: str
    dimension: Dimension
    performance_index: int
    accuracy: int
    difficulty_reached: int
    completed_at_utc: str


def open_db(path: Path) -> sqlite3.Connection:
    if str(path) != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.execute("PRAGMA foreign_keys=ON;")
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    _migrate(conn)
    return conn


def _utc_now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(time.time()))


def _migrate(conn: sqlite3.Connection) -> None:
    row = conn.execute("PRAGMA user_version;").fetchone()
    ver = int(row[0]) if row else 0
    if ver >= SCHEMA_VERSION:
        return

    with conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS skill (
                dimension TEXT PRIMARY KEY,
                value INTEGER NOT NULL
            );
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS profile (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                games_played INTEGER NOT NULL,
                last_trained_utc TEXT
            );
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS session_result (
                id INTEGER PRIMARY KEY,
                game_id TEXT NOT NULL,
                dimension TEXT NOT NULL,
                performance_index INTEGER NOT NULL,
                accuracy INTEGER NOT NULL,
                difficulty_reached INTEGER NOT NULL,
                completed_at_utc TEXT NOT NULL
            );
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_session_result_dimension ON session_result(dimension, id);"
        )
        _write_defaults(conn)
        conn.execute(f"PRAGMA user_version={SCHEMA_VERSION};")


def _write_defaults(conn: sqlite3.Connection) -> None:
    for dim in Dimension:
        conn.execute(
            "INSERT OR REPLACE INTO skill(dimension, value) VALUES (?, ?)",
            (dim.value, INITIAL_SKILL),
        )
    conn.execute("INSERT OR REPLACE INTO profile(id, games_played, last_trained_utc) VALUES (1, 0, NULL)")


def blend_skill(current: int, performance: int) -> int:
    """Weighted average so one lucky session cannot max a skill at once."""

    value = round_half_up(current * HISTORY_WEIGHT + performance * SESSION_WEIGHT)
    return max(0, min(100, value))


def load_stats(conn: sqlite3.Connection) -> UserStats:
    skills = {dim: INITIAL_SKILL for dim in Dimension}
    for name, value in conn.execute("SELECT dimension, value FROM skill"):
        try:
            skills[Dimension(name)] = int(value)
        except ValueError:
            logger.warning("Ignoring unknown skill dimension in stats db: {}", name)
    row = conn.execute("SELECT games_played, last_trained_utc FROM profile WHERE id = 1").fetchone()
    games_played = 0 if row is None else int(row[0])
    last = None if row is None else row[1]
    return UserStats(skills=skills, games_played=games_played, last_trained_utc=last)


def record_session_result(
    conn: sqlite3.Connection,
    *,
    definition: GameDefinition,
    result: SessionResult,
) -> UserStats:
    """Fold one finished session into the long-term stats and keep a history row."""

    current = load_stats(conn)
    dim = Dimension(definition.dimension)
    new_value = blend_skill(current.skill(dim), int(result.performance_index))
    now = _utc_now_iso()

    with conn:
        conn.execute(
            "INSERT OR REPLACE INTO skill(dimension, value) VALUES (?, ?)",
            (dim.value, new_value),
        )
        conn.execute(
            "UPDATE profile SET games_played = games_played + 1, last_trained_utc = ? WHERE id = 1",
            (now,),
        )
        conn.execute(
            """
            INSERT INTO session_result(
                game_id, dimension, performance_index, accuracy,
                difficulty_reached, completed_at_utc
            )
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                str(definition.id),
                dim.value,
                int(result.performance_index),
                int(result.accuracy),
                int(result.difficulty_reached),
                now,
            ),
        )

    logger.info(
        "Recorded {} session: {} {} -> {}",
        definition.id,
        dim.value,
        current.skill(dim),
        new_value,
    )
    return load_stats(conn)


def reset_stats(conn: sqlite3.Connection) -> UserStats:
    with conn:
        conn.execute("DELETE FROM session_result")
        _write_defaults(conn)
    return load_stats(conn)


def recent_results(conn: sqlite3.Connection, *, limit: int = 10) -> list[StoredResult]:
    rows = conn.execute(
        """
        SELECT game_id, dimension, performance_index, accuracy, difficulty_reached, completed_at_utc
        FROM session_result
        ORDER BY id DESC
        LIMIT ?
        """,
        (int(limit),),
    ).fetchall()
    return [
        StoredResult(
            game_id=str(r[0]),
            dimension=Dimension(r[1]),
            performance_index=int(r[2]),
            accuracy=int(r[3]),
            difficulty_reached=int(r[4]),
            completed_at_utc=str(r[5]),
        )
        for r in rows
    ]
