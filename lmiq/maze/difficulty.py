"""Difficulty profiles: how each difficulty maps to grid size and generator tuning."""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field

from .models import DIFFICULTIES, Position, SpineFirstConfig


DEFAULT_PROFILES_FILE = Path(__file__).parent / "data" / "difficulties.yaml"


class DifficultyProfile(BaseModel):
    """Geometry and generation parameters for one difficulty."""
    width: int = Field(..., ge=2)
    height: int = Field(..., ge=2)
    spine: SpineFirstConfig = Field(default_factory=SpineFirstConfig)
    min_shortest_path: Optional[int] = Field(default=None, ge=1)

    @property
    def start(self) -> Position:
        return Position(0, 0)

    @property
    def goal(self) -> Position:
        return Position(self.width - 1, self.height - 1)


# Keyed on the modification time too, so an edited file is re-read
@lru_cache(maxsize=None)
def _load(path: str, mtime_ns: int) -> Dict[str, DifficultyProfile]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Difficulty profile file must map difficulty names to profiles: {path}")

    unknown = set(data) - set(DIFFICULTIES)
    if unknown:
        raise ValueError(f"Unknown difficulties in {path}: {', '.join(sorted(unknown))}")

    return {name: DifficultyProfile(**profile) for name, profile in data.items()}


def load_profiles(path: Optional[str | Path] = None) -> Dict[str, DifficultyProfile]:
    """
    Load difficulty profiles from YAML.

    Args:
        path: Profile file (defaults to the bundled ``difficulties.yaml``)

    Returns:
        Profiles keyed by difficulty name
    """
    path = Path(path) if path is not None else DEFAULT_PROFILES_FILE
    if not path.exists():
        raise FileNotFoundError(f"Difficulty profile file not found: {path}")
    path = path.resolve()
    return dict(_load(str(path), path.stat().st_mtime_ns))


def get_profile(difficulty: str, path: Optional[str | Path] = None) -> DifficultyProfile:
    """Profile for a single difficulty."""
    profiles = load_profiles(path)
    if difficulty not in profiles:
        raise ValueError(
            f"No profile for difficulty '{difficulty}'. Available: {', '.join(profiles)}"
        )
    return profiles[difficulty]
