"""Emoji selection from face expression probabilities.

Maps the smiling and eye-open probabilities reported by a detector to
one of the eight :class:`~emojify.types.EmojiCategory` values.

Example:
    >>> from emojify.selector import select_emoji
    >>> from emojify.types import FaceSignals
    >>> select_emoji(FaceSignals(0.9, 0.1, 0.8))
    <EmojiCategory.LEFT_WINK: 'left_wink'>
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from emojify.types import EmojiCategory, FaceSignals

if TYPE_CHECKING:
    from emojify.config import EmojifyConfig

logger = logging.getLogger(__name__)

SMILING_PROB_THRESHOLD = 0.15
EYE_OPEN_PROB_THRESHOLD = 0.5


class EmojiSelector:
    """Decision table from expression signals to an emoji category.

    A face is smiling when its smiling probability is strictly above
    ``smiling_threshold``. An eye is closed when its open probability is
    strictly below ``eye_open_threshold``.

    Args:
        smiling_threshold: Smiling probability cut-off.
        eye_open_threshold: Eye-open probability cut-off.
    """

    def __init__(
        self,
        smiling_threshold: float = SMILING_PROB_THRESHOLD,
        eye_open_threshold: float = EYE_OPEN_PROB_THRESHOLD,
    ):
        self._smiling_threshold = smiling_threshold
        self._eye_open_threshold = eye_open_threshold

    @classmethod
    def from_config(cls, config: EmojifyConfig) -> "EmojiSelector":
        return cls(
            smiling_threshold=config.smiling_threshold,
            eye_open_threshold=config.eye_open_threshold,
        )

    @property
    def smiling_threshold(self) -> float:
        return self._smiling_threshold

    @property
    def eye_open_threshold(self) -> float:
        return self._eye_open_threshold

    def select(self, signals: FaceSignals) -> EmojiCategory:
        """Pick the emoji closest to the expression on the face."""
        logger.debug("select: smilingProb = %s", signals.smiling_probability)
        logger.debug("select: leftEyeOpenProb = %s", signals.left_eye_open_probability)
        logger.debug("select: rightEyeOpenProb = %s", signals.right_eye_open_probability)

        smiling = signals.smiling_probability > self._smiling_threshold
        left_closed = signals.left_eye_open_probability < self._eye_open_threshold
        right_closed = signals.right_eye_open_probability < self._eye_open_threshold

        # Both-closed is only reached after the two single-wink checks fail.
        if smiling:
            if left_closed and not right_closed:
                emoji = EmojiCategory.LEFT_WINK
            elif right_closed and not left_closed:
                emoji = EmojiCategory.RIGHT_WINK
            elif left_closed:
                emoji = EmojiCategory.CLOSED_EYE_SMILE
            else:
                emoji = EmojiCategory.SMILE
        else:
            if left_closed and not right_closed:
                emoji = EmojiCategory.LEFT_WINK_FROWN
            elif right_closed and not left_closed:
                emoji = EmojiCategory.RIGHT_WINK_FROWN
            elif left_closed:
                emoji = EmojiCategory.CLOSED_EYE_FROWN
            else:
                emoji = EmojiCategory.FROWN

        logger.debug("select: %s", emoji.name)
        return emoji


def select_emoji(
    signals: FaceSignals,
    config: Optional[EmojifyConfig] = None,
) -> EmojiCategory:
    """Select an emoji using thresholds from ``config`` (or the defaults)."""
    if config is None:
        return EmojiSelector().select(signals)
    return EmojiSelector.from_config(config).select(signals)


__all__ = [
    "EmojiSelector",
    "select_emoji",
    "SMILING_PROB_THRESHOLD",
    "EYE_OPEN_PROB_THRESHOLD",
]
