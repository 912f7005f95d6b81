"""Environment-first configuration and path helpers.

Values come from T3_* environment variables with fallbacks that still work
when installed as a package or executed from arbitrary CWDs. CLI flags
override whatever is loaded here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

GAMES = ("tictactoe", "total")
TRACKING_BACKENDS = ("none", "mlflow")


def _git_root(start: Path) -> Path | None:
    # src/tictactotal/config.py sits three levels below a source checkout
    for candidate in [start, *start.parents][:5]:
        if (candidate / ".git").exists():
            return candidate
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var T3_REPO_ROOT -> checkout containing this file -> CWD.
    """
    env = os.getenv("T3_REPO_ROOT")
    if env:
        return Path(env)
    return _git_root(Path(__file__).resolve().parent) or Path.cwd()


def log_dir() -> Path:
    p = os.getenv("T3_LOG_DIR")
    return Path(p) if p else repo_root() / "runs"


@dataclass
class Config:
    game: str = "tictactoe"
    board_size: int = 3
    tracking: str = "none"
    log_dir: Path = Path("runs")


def load_config() -> Config:
    game = os.getenv("T3_GAME", "tictactoe")
    if game not in GAMES:
        raise ValueError(f"T3_GAME must be one of {GAMES}, got {game!r}")
    tracking = os.getenv("T3_TRACKING", "none")
    if tracking not in TRACKING_BACKENDS:
        raise ValueError(f"T3_TRACKING must be one of {TRACKING_BACKENDS}, got {tracking!r}")
    raw_size = os.getenv("T3_BOARD_SIZE", "3")
    try:
        size = int(raw_size)
    except ValueError:
        raise ValueError(f"T3_BOARD_SIZE must be an integer, got {raw_size!r}") from None
    if size < 1:
        raise ValueError(f"T3_BOARD_SIZE must be positive, got {size}")
    return Config(game=game, board_size=size, tracking=tracking, log_dir=log_dir())
