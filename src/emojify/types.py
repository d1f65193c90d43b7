"""Emojify domain types."""

from dataclasses import dataclass
from enum import Enum


class EmojiCategory(Enum):
    """The eight emoji an expression can map to."""

    SMILE = "smile"
    FROWN = "frown"
    LEFT_WINK = "left_wink"
    RIGHT_WINK = "right_wink"
    LEFT_WINK_FROWN = "left_wink_frown"
    RIGHT_WINK_FROWN = "right_wink_frown"
    CLOSED_EYE_SMILE = "closed_eye_smile"
    CLOSED_EYE_FROWN = "closed_eye_frown"


@dataclass(frozen=True)
class FaceSignals:
    """Expression probabilities for a single face.

    Attributes:
        smiling_probability: Confidence that the face is smiling [0, 1].
        left_eye_open_probability: Confidence that the left eye is open [0, 1].
        right_eye_open_probability: Confidence that the right eye is open [0, 1].
    """

    smiling_probability: float
    left_eye_open_probability: float
    right_eye_open_probability: float


@dataclass(frozen=True)
class FaceGeometry:
    """Face bounding box in image pixel coordinates.

    Attributes:
        x: Left edge of the bounding box.
        y: Top edge of the bounding box.
        width: Box width in pixels.
        height: Box height in pixels.
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_bbox(cls, bbox: tuple) -> "FaceGeometry":
        """Build from an ``(x, y, w, h)`` tuple as returned by OpenCV."""
        x, y, w, h = bbox
        return cls(x=float(x), y=float(y), width=float(w), height=float(h))

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class DetectedFace:
    """Result from a face detection backend.

    Attributes:
        signals: Expression probabilities.
        geometry: Bounding box in pixels.
        confidence: Detection confidence [0, 1].
    """

    signals: FaceSignals
    geometry: FaceGeometry
    confidence: float = 1.0


__all__ = ["EmojiCategory", "FaceSignals", "FaceGeometry", "DetectedFace"]
