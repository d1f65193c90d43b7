"""OpenCV Haar cascade backend for face detection and expression scoring."""

import logging
from typing import List, Optional

import cv2
import numpy as np

from emojify.types import DetectedFace, FaceGeometry, FaceSignals

logger = logging.getLogger(__name__)

FACE_CASCADE = "haarcascade_frontalface_default.xml"
EYE_CASCADE = "haarcascade_eye.xml"
SMILE_CASCADE = "haarcascade_smile.xml"

# Heuristic probabilities; cascades only report presence, not confidence.
NO_SMILE_PROB = 0.1
EYE_FOUND_PROB = 0.9
EYE_MISSING_PROB = 0.1


def _load_cascade(filename: str) -> "cv2.CascadeClassifier":
    path = cv2.data.haarcascades + filename
    cascade = cv2.CascadeClassifier(path)
    if cascade.empty():
        raise RuntimeError(f"Failed to load Haar cascade: {path}")
    return cascade


class HaarCascadeBackend:
    """Face detection backend using OpenCV's bundled Haar cascades.

    Faces come from the frontal-face cascade. Within each face, the smile
    cascade scores the lower half and the eye cascade looks for an open
    eye in each side of the upper half. The left eye is the subject's
    left, which is on the right-hand side of the image.

    Args:
        scale_factor: Image pyramid step for face detection.
        min_neighbors: Detection strictness for faces.
        min_face_size: Smallest face (width, height) to report.

    Example:
        >>> backend = HaarCascadeBackend()
        >>> backend.initialize()
        >>> faces = backend.detect(image)
        >>> backend.cleanup()
    """

    def __init__(
        self,
        scale_factor: float = 1.1,
        min_neighbors: int = 5,
        min_face_size: tuple[int, int] = (48, 48),
    ):
        self._scale_factor = scale_factor
        self._min_neighbors = min_neighbors
        self._min_face_size = min_face_size
        self._face_cascade: Optional[object] = None
        self._eye_cascade: Optional[object] = None
        self._smile_cascade: Optional[object] = None
        self._initialized = False

    def initialize(self) -> None:
        if self._initialized:
            return

        self._face_cascade = _load_cascade(FACE_CASCADE)
        self._eye_cascade = _load_cascade(EYE_CASCADE)
        self._smile_cascade = _load_cascade(SMILE_CASCADE)
        self._initialized = True
        logger.info("HaarCascadeBackend initialized")

    def detect(self, image: np.ndarray) -> List[DetectedFace]:
        if not self._initialized:
            self.initialize()

        gray = _to_gray(image)
        gray = cv2.equalizeHist(gray)

        boxes = self._face_cascade.detectMultiScale(
            gray,
            scaleFactor=self._scale_factor,
            minNeighbors=self._min_neighbors,
            minSize=self._min_face_size,
        )

        faces = []
        for (x, y, w, h) in boxes:
            roi = gray[y:y + h, x:x + w]
            left_open, right_open = self._eye_open_probabilities(roi)
            signals = FaceSignals(
                smiling_probability=self._smile_probability(roi),
                left_eye_open_probability=left_open,
                right_eye_open_probability=right_open,
            )
            faces.append(DetectedFace(
                signals=signals,
                geometry=FaceGeometry.from_bbox((x, y, w, h)),
            ))

        logger.debug("HaarCascadeBackend: %d faces", len(faces))
        return faces

    def cleanup(self) -> None:
        self._face_cascade = None
        self._eye_cascade = None
        self._smile_cascade = None
        self._initialized = False

    def _smile_probability(self, face_roi: np.ndarray) -> float:
        h, w = face_roi.shape[:2]
        lower = face_roi[h // 2:, :]
        smiles = self._smile_cascade.detectMultiScale(
            lower, scaleFactor=1.7, minNeighbors=22
        )
        if len(smiles) == 0:
            return NO_SMILE_PROB

        # More/larger smile regions -> higher probability
        lower_area = float(max(1, lower.shape[0] * lower.shape[1]))
        coverage = sum(sw * sh for (_, _, sw, sh) in smiles) / lower_area
        return float(min(1.0, 0.3 + 1.5 * coverage))

    def _eye_open_probabilities(self, face_roi: np.ndarray) -> tuple[float, float]:
        h, w = face_roi.shape[:2]
        upper = face_roi[: int(h * 0.55), :]
        min_eye = max(8, w // 10)
        eyes = self._eye_cascade.detectMultiScale(
            upper, scaleFactor=1.1, minNeighbors=5, minSize=(min_eye, min_eye)
        )

        left_found = right_found = False
        for (ex, _, ew, _) in eyes:
            if ex + ew / 2 >= w / 2:
                left_found = True
            else:
                right_found = True

        left = EYE_FOUND_PROB if left_found else EYE_MISSING_PROB
        right = EYE_FOUND_PROB if right_found else EYE_MISSING_PROB
        return left, right


def _to_gray(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        gray = image
    elif image.shape[2] == 4:
        gray = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    elif image.shape[2] == 1:
        gray = np.ascontiguousarray(image[..., 0])
    else:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

    # equalizeHist and the cascades only take 8-bit input
    if gray.dtype != np.uint8:
        if np.issubdtype(gray.dtype, np.integer):
            scale = 255.0 / np.iinfo(gray.dtype).max
        else:
            scale = 255.0
        gray = cv2.convertScaleAbs(gray, alpha=scale)
    return gray


__all__ = ["HaarCascadeBackend"]
