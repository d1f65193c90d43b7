"""Emoji compositing onto detected faces.

Scales an emoji image to the width of a face and draws it onto a copy
of the background, centered horizontally on the face and shifted toward
the upper face. All rendering is done on a copy of the input image.

Example:
    >>> from emojify.compositor import composite
    >>> from emojify.types import FaceGeometry
    >>> face = FaceGeometry(x=120, y=80, width=100, height=120)
    >>> output = composite(photo, emoji, face)
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from emojify.types import FaceGeometry

logger = logging.getLogger(__name__)

EMOJI_SCALE_FACTOR = 0.9


class InvalidAssetDimensions(ValueError):
    """Raised when an emoji asset has zero width or height.

    Attributes:
        shape: Shape of the offending asset.
    """

    def __init__(self, shape: tuple):
        self.shape = tuple(shape)
        super().__init__(f"Emoji asset has invalid dimensions: {self.shape}")


def scaled_emoji_size(
    emoji_shape: tuple,
    face: FaceGeometry,
    scale_factor: float = EMOJI_SCALE_FACTOR,
) -> tuple[int, int]:
    """Size ``(width, height)`` the emoji is scaled to for ``face``.

    The width follows the face width. The height keeps the emoji aspect
    ratio and then has the scale factor applied a second time, so emoji
    come out slightly flatter than a pure aspect-preserving scale.

    Raises:
        InvalidAssetDimensions: If the emoji has zero width or height.
    """
    emoji_h, emoji_w = emoji_shape[:2]
    if emoji_w <= 0 or emoji_h <= 0:
        raise InvalidAssetDimensions(emoji_shape)

    new_width = int(round(face.width * scale_factor))
    new_height = int(round(emoji_h * new_width / emoji_w * scale_factor))
    return new_width, new_height


def emoji_origin(face: FaceGeometry, scaled_size: tuple[int, int]) -> tuple[int, int]:
    """Top-left pixel at which a scaled emoji is drawn over ``face``.

    Horizontally centered on the face. Vertically the emoji is anchored a
    third of its height above the face center, which lines it up with the
    eyes and mouth. Offsets into the emoji are whole pixels.
    """
    emoji_w, emoji_h = scaled_size
    center_x, center_y = face.center
    return int(round(center_x)) - emoji_w // 2, int(round(center_y)) - emoji_h // 3


def composite(
    background: np.ndarray,
    emoji: np.ndarray,
    face: FaceGeometry,
    scale_factor: float = EMOJI_SCALE_FACTOR,
) -> np.ndarray:
    """Draw ``emoji`` over ``face`` on a copy of ``background``.

    Args:
        background: Image (H, W), (H, W, 3) or (H, W, 4). Not modified.
        emoji: Emoji image; a BGRA emoji is drawn source-over.
        face: Face bounding box in ``background`` pixel coordinates.
        scale_factor: Emoji width as a fraction of the face width.

    Returns:
        New image with the same shape and dtype as ``background``.

    Raises:
        InvalidAssetDimensions: If the emoji has zero width or height.
    """
    result = np.empty_like(background)
    new_width, new_height = scaled_emoji_size(emoji.shape, face, scale_factor)

    result[...] = background

    if new_width <= 0 or new_height <= 0:
        logger.debug(
            "composite: face %.0fx%.0f too small for emoji, skipped",
            face.width, face.height,
        )
        return result

    scaled = cv2.resize(emoji, (new_width, new_height), interpolation=cv2.INTER_NEAREST)
    x, y = emoji_origin(face, (new_width, new_height))
    _draw_sprite(result, scaled, x, y)
    return result


def _draw_sprite(canvas: np.ndarray, sprite: np.ndarray, x: int, y: int) -> None:
    """Draw ``sprite`` onto ``canvas`` in place at ``(x, y)``, clipped to bounds."""
    canvas_h, canvas_w = canvas.shape[:2]
    sprite_h, sprite_w = sprite.shape[:2]

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + sprite_w, canvas_w), min(y + sprite_h, canvas_h)
    if x0 >= x1 or y0 >= y1:
        return

    patch = _convert_depth(sprite[y0 - y:y1 - y, x0 - x:x1 - x], canvas.dtype)
    region = canvas[y0:y1, x0:x1]

    color, alpha = _split_alpha(patch)
    target, target_alpha = _split_alpha(region)
    color = _match_color_channels(color, target)

    if alpha is None:
        target[...] = color
        if target_alpha is not None:
            target_alpha[...] = _max_value(canvas.dtype)
        return

    a = alpha.astype(np.float32) / _max_value(canvas.dtype)
    if target.ndim == 3:
        a = a[..., None]
    blended = color.astype(np.float32) * a + target.astype(np.float32) * (1.0 - a)
    target[...] = _cast(blended, canvas.dtype)

    if target_alpha is not None:
        a2 = a[..., 0] if a.ndim == 3 else a
        out_alpha = (
            a2 * _max_value(canvas.dtype)
            + target_alpha.astype(np.float32) * (1.0 - a2)
        )
        target_alpha[...] = _cast(out_alpha, canvas.dtype)


def _split_alpha(image: np.ndarray):
    """Split an image view into (color view, alpha view or None)."""
    if image.ndim == 2:
        return image, None
    channels = image.shape[2]
    if channels == 4:
        return image[..., :3], image[..., 3]
    if channels == 2:
        return image[..., 0], image[..., 1]
    if channels == 1:
        return image[..., 0], None
    return image, None


def _match_color_channels(color: np.ndarray, target: np.ndarray) -> np.ndarray:
    """Convert ``color`` between grey and BGR to match ``target``."""
    if color.ndim == target.ndim:
        return color
    if target.ndim == 2:
        return cv2.cvtColor(np.ascontiguousarray(color), cv2.COLOR_BGR2GRAY)
    return np.repeat(color[..., None], target.shape[2], axis=2)


def _convert_depth(image: np.ndarray, dtype) -> np.ndarray:
    """Rescale ``image`` to the value range of ``dtype`` (e.g. 16-bit to 8-bit)."""
    if image.dtype == dtype:
        return image
    scale = _max_value(dtype) / _max_value(image.dtype)
    return _cast(image.astype(np.float32) * scale, dtype)


def _max_value(dtype) -> float:
    if np.issubdtype(dtype, np.integer):
        return float(np.iinfo(dtype).max)
    return 1.0


def _cast(values: np.ndarray, dtype) -> np.ndarray:
    if np.issubdtype(dtype, np.integer):
        return np.clip(np.round(values), 0, np.iinfo(dtype).max).astype(dtype)
    return values.astype(dtype)


__all__ = [
    "EMOJI_SCALE_FACTOR",
    "InvalidAssetDimensions",
    "scaled_emoji_size",
    "emoji_origin",
    "composite",
]
