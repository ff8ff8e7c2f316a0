from __future__ import annotations

import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Put the repository root (parent of this package) on ``sys.path``.

    Needed when this file is run directly (``python neuroprime_trainer/__main__.py``)
    rather than with ``python -m neuroprime_trainer``.
    """
    repo_root = str(Path(__file__).resolve().parent.parent)
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


try:
    from .app import run  # type: ignore[attr-defined]
except ImportError:
    _ensure_repo_root_on_path()
    from neuroprime_trainer.app import run  # type: ignore[attr-defined]


def main() -> int:
    """Launch the trainer UI."""
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
