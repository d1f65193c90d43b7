"""Emoji asset resolution.

An :class:`AssetResolver` turns an :class:`~emojify.types.EmojiCategory`
into an emoji image, or ``None`` when it has no asset for it.

Two resolvers are provided:

- :class:`DirectoryAssetResolver` loads PNG files from a directory.
- :class:`RenderedAssetResolver` draws the emoji with OpenCV primitives,
  so no image files are needed.

Example:
    >>> from emojify.assets import DirectoryAssetResolver
    >>> resolver = DirectoryAssetResolver("assets/")
    >>> smile = resolver.resolve(EmojiCategory.SMILE)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union, runtime_checkable

import cv2
import numpy as np

from emojify.types import EmojiCategory

logger = logging.getLogger(__name__)

ASSET_FILENAMES: Dict[EmojiCategory, str] = {
    EmojiCategory.SMILE: "smile.png",
    EmojiCategory.FROWN: "frown.png",
    EmojiCategory.LEFT_WINK: "leftwink.png",
    EmojiCategory.RIGHT_WINK: "rightwink.png",
    EmojiCategory.LEFT_WINK_FROWN: "leftwinkfrown.png",
    EmojiCategory.RIGHT_WINK_FROWN: "rightwinkfrown.png",
    EmojiCategory.CLOSED_EYE_SMILE: "closed_smile.png",
    EmojiCategory.CLOSED_EYE_FROWN: "closed_frown.png",
}

# BGRA
_FACE_COLOR = (40, 200, 255, 255)
_OUTLINE_COLOR = (20, 120, 190, 255)
_FEATURE_COLOR = (40, 50, 70, 255)


@runtime_checkable
class AssetResolver(Protocol):
    """Protocol for emoji asset lookup."""

    def resolve(self, category: EmojiCategory) -> Optional[np.ndarray]:
        """Return the emoji image for ``category``, or None if unavailable."""
        ...


class DirectoryAssetResolver:
    """Loads emoji PNGs from a directory, keeping alpha.

    File names follow :data:`ASSET_FILENAMES`. Loaded images are cached.
    Missing or unreadable files resolve to None.

    Args:
        directory: Directory containing the emoji PNGs.
        filenames: Optional override of the category to file name table.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        filenames: Optional[Dict[EmojiCategory, str]] = None,
    ):
        self._directory = Path(directory)
        self._filenames = dict(ASSET_FILENAMES if filenames is None else filenames)
        self._cache: Dict[EmojiCategory, np.ndarray] = {}

    @property
    def directory(self) -> Path:
        return self._directory

    def resolve(self, category: EmojiCategory) -> Optional[np.ndarray]:
        cached = self._cache.get(category)
        if cached is not None:
            return cached

        filename = self._filenames.get(category)
        if filename is None:
            logger.warning("No asset file configured for %s", category.name)
            return None

        path = self._directory / filename
        if not path.is_file():
            logger.warning("Emoji asset not found: %s", path)
            return None

        image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if image is None:
            logger.warning("Failed to decode emoji asset: %s", path)
            return None

        logger.debug("Loaded %s from %s (%dx%d)", category.name, path, image.shape[1], image.shape[0])
        self._cache[category] = image
        return image


class RenderedAssetResolver:
    """Draws emoji on demand with OpenCV.

    Args:
        size: Side length of the square BGRA emoji in pixels.
    """

    def __init__(self, size: int = 256):
        if size <= 0:
            raise ValueError(f"size must be > 0, got {size}")
        self._size = size
        self._cache: Dict[EmojiCategory, np.ndarray] = {}

    @property
    def size(self) -> int:
        return self._size

    def resolve(self, category: EmojiCategory) -> Optional[np.ndarray]:
        if category not in self._cache:
            self._cache[category] = render_emoji(category, self._size)
        return self._cache[category]


def render_emoji(category: EmojiCategory, size: int = 256) -> np.ndarray:
    """Render ``category`` as a square BGRA image with a transparent background.

    Eyes follow the subject's point of view: the left eye is drawn on the
    right-hand side of the image.
    """
    image = np.zeros((size, size, 4), dtype=np.uint8)
    center = size // 2
    radius = int(size * 0.46)
    stroke = max(1, size // 40)

    cv2.circle(image, (center, center), radius, _FACE_COLOR, -1, cv2.LINE_AA)
    cv2.circle(image, (center, center), radius, _OUTLINE_COLOR, stroke, cv2.LINE_AA)

    left_closed = category in (
        EmojiCategory.LEFT_WINK,
        EmojiCategory.LEFT_WINK_FROWN,
        EmojiCategory.CLOSED_EYE_SMILE,
        EmojiCategory.CLOSED_EYE_FROWN,
    )
    right_closed = category in (
        EmojiCategory.RIGHT_WINK,
        EmojiCategory.RIGHT_WINK_FROWN,
        EmojiCategory.CLOSED_EYE_SMILE,
        EmojiCategory.CLOSED_EYE_FROWN,
    )
    smiling = category in (
        EmojiCategory.SMILE,
        EmojiCategory.LEFT_WINK,
        EmojiCategory.RIGHT_WINK,
        EmojiCategory.CLOSED_EYE_SMILE,
    )

    eye_y = int(size * 0.38)
    eye_dx = int(size * 0.17)
    _draw_eye(image, (center + eye_dx, eye_y), size, closed=left_closed)
    _draw_eye(image, (center - eye_dx, eye_y), size, closed=right_closed)
    _draw_mouth(image, size, smiling=smiling)
    return image


def _draw_eye(image: np.ndarray, pos: tuple[int, int], size: int, closed: bool) -> None:
    stroke = max(1, size // 32)
    axes = (max(1, size // 16), max(1, size // 10))
    if closed:
        cv2.ellipse(image, pos, (axes[0] + stroke, axes[0] // 2 + 1), 0, 0, 180,
                    _FEATURE_COLOR, stroke, cv2.LINE_AA)
    else:
        cv2.ellipse(image, pos, axes, 0, 0, 360, _FEATURE_COLOR, -1, cv2.LINE_AA)


def _draw_mouth(image: np.ndarray, size: int, smiling: bool) -> None:
    stroke = max(1, size // 28)
    axes = (int(size * 0.24), int(size * 0.14))
    if smiling:
        # Lower half of an ellipse
        cv2.ellipse(image, (size // 2, int(size * 0.58)), axes, 0, 0, 180,
                    _FEATURE_COLOR, stroke, cv2.LINE_AA)
    else:
        # Upper half
        cv2.ellipse(image, (size // 2, int(size * 0.78)), axes, 0, 180, 360,
                    _FEATURE_COLOR, stroke, cv2.LINE_AA)


def write_assets(directory: Union[str, Path], size: int = 256) -> List[Path]:
    """Render every emoji and write it to ``directory`` as PNG.

    Returns:
        Paths of the written files, in :class:`EmojiCategory` order.

    Raises:
        IOError: If OpenCV fails to write a file.
    """
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for category in EmojiCategory:
        path = out_dir / ASSET_FILENAMES[category]
        if not cv2.imwrite(str(path), render_emoji(category, size)):
            raise IOError(f"Cannot write emoji asset: {path}")
        paths.append(path)

    logger.info("Wrote %d emoji assets to %s", len(paths), out_dir)
    return paths


__all__ = [
    "ASSET_FILENAMES",
    "AssetResolver",
    "DirectoryAssetResolver",
    "RenderedAssetResolver",
    "render_emoji",
    "write_assets",
]
