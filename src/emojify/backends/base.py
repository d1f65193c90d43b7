"""Backend protocol definitions for face detection."""

from typing import List, Protocol

import numpy as np

from emojify.types import DetectedFace


class FaceDetectionBackend(Protocol):
    """Protocol for face detection backends.

    A backend finds faces in an image and reports, for each one, its
    bounding box together with smiling and eye-open probabilities.
    Implementations should be swappable without changing the emojifier.
    """

    def initialize(self) -> None:
        """Initialize the backend and load models."""
        ...

    def detect(self, image: np.ndarray) -> List[DetectedFace]:
        """Detect faces in an image, in detection order."""
        ...

    def cleanup(self) -> None:
        """Release resources and unload models."""
        ...


__all__ = ["FaceDetectionBackend"]
