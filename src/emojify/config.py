"""Configuration for emojify.

Example:
    >>> from emojify.config import EmojifyConfig
    >>> config = EmojifyConfig(smiling_threshold=0.2, scale_factor=1.0)
    >>> config = EmojifyConfig.from_yaml("emojify.yaml")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from emojify.assets import ASSET_FILENAMES
from emojify.compositor import EMOJI_SCALE_FACTOR
from emojify.selector import EYE_OPEN_PROB_THRESHOLD, SMILING_PROB_THRESHOLD

ASSETS_DIR_ENV = "EMOJIFY_ASSETS_DIR"


def default_assets_dir() -> Path:
    """Where emoji PNGs live when no directory is configured.

    ``$EMOJIFY_ASSETS_DIR`` if set (relative paths resolve against the
    working directory), otherwise ``~/.emojify/assets``. The directory is
    not created.
    """
    env = os.environ.get(ASSETS_DIR_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return Path.home() / ".emojify" / "assets"


@dataclass
class EmojifyConfig:
    """Tunable values for selection, compositing and asset lookup.

    Attributes:
        smiling_threshold: Smiling probability above which a face smiles.
        eye_open_threshold: Eye-open probability below which an eye is closed.
        scale_factor: Emoji width as a fraction of the face width.
        assets_dir: Directory of emoji PNGs. ``None`` looks in
            :func:`default_assets_dir`, then falls back to rendered emoji.
        emoji_size: Side length in pixels of rendered emoji.

    Example:
        >>> config = EmojifyConfig.from_dict({"smiling_threshold": 0.3})
        >>> config.eye_open_threshold
        0.5
    """

    smiling_threshold: float = SMILING_PROB_THRESHOLD
    eye_open_threshold: float = EYE_OPEN_PROB_THRESHOLD
    scale_factor: float = EMOJI_SCALE_FACTOR
    assets_dir: Optional[str] = None
    emoji_size: int = 256

    def __post_init__(self) -> None:
        for name in ("smiling_threshold", "eye_open_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.scale_factor <= 0:
            raise ValueError(f"scale_factor must be > 0, got {self.scale_factor}")
        if self.emoji_size <= 0:
            raise ValueError(f"emoji_size must be > 0, got {self.emoji_size}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EmojifyConfig":
        """Create an EmojifyConfig from a dictionary (e.g., loaded from YAML).

        Unknown keys are ignored. Missing keys keep their defaults.
        """
        data = data or {}
        return cls(
            smiling_threshold=float(data.get("smiling_threshold", SMILING_PROB_THRESHOLD)),
            eye_open_threshold=float(data.get("eye_open_threshold", EYE_OPEN_PROB_THRESHOLD)),
            scale_factor=float(data.get("scale_factor", EMOJI_SCALE_FACTOR)),
            assets_dir=data.get("assets_dir"),
            emoji_size=int(data.get("emoji_size", 256)),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "EmojifyConfig":
        """Load EmojifyConfig from a YAML file.

        Raises:
            ImportError: If PyYAML is not installed.
            FileNotFoundError: If the file doesn't exist.
        """
        try:
            import yaml
        except ImportError:
            raise ImportError(
                "PyYAML is required for YAML config support. "
                "Install it with: pip install pyyaml"
            )

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data)

    def find_assets_dir(self) -> Optional[Path]:
        """Directory to load emoji PNGs from, or ``None`` to render them.

        An explicit ``assets_dir`` always wins. Otherwise the default
        directory is used only if it exists and holds at least one emoji
        file.
        """
        if self.assets_dir:
            return Path(self.assets_dir)

        candidate = default_assets_dir()
        if any((candidate / name).is_file() for name in ASSET_FILENAMES.values()):
            return candidate
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "smiling_threshold": self.smiling_threshold,
            "eye_open_threshold": self.eye_open_threshold,
            "scale_factor": self.scale_factor,
            "assets_dir": self.assets_dir,
            "emoji_size": self.emoji_size,
        }


__all__ = ["EmojifyConfig", "default_assets_dir"]
