"""
Basic settings and logging configuration for the aquaplan scheduling engine.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from aquaplan_app.config.limits import DEFAULT_MAX_WEEKS


def _get_resource_root() -> Path:

    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS)
    return Path(__file__).resolve().parents[2]


def _get_user_data_dir(resource_root: Path) -> Path:

    if getattr(sys, "frozen", False):
        exe_path = Path(getattr(sys, "executable", resource_root))
        return exe_path.parent / "aquaplan_app_data"
    return resource_root / "aquaplan_app_data"


@dataclass(slots=True)
class Settings:
    """Application-level settings."""

    project_root: Path
    data_dir: Path
    log_path: Path
    # Planning horizon (weeks) used when the caller does not pass one
    max_weeks: int = DEFAULT_MAX_WEEKS
    log_level: int = logging.INFO

    @classmethod
    def default(cls) -> "Settings":
        resource_root = _get_resource_root()
        data_dir = _get_user_data_dir(resource_root)
        data_dir.mkdir(exist_ok=True)

        return cls(
            project_root=resource_root,
            data_dir=data_dir,
            log_path=data_dir / "aquaplan.log",
        )


def init_logging(settings: Settings) -> None:
    """Configure basic logging to the planner log file."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[
            logging.FileHandler(settings.log_path, encoding="utf-8"),
        ],
    )

    logging.getLogger(__name__).info(
        "Logging initialized. Data dir at %s, horizon %d weeks",
        settings.data_dir,
        settings.max_weeks,
    )
