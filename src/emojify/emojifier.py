"""Detect faces in a picture and overlay a matching emoji on each one.

The pipeline is: detector backend -> :class:`EmojiSelector` -> asset
resolver -> :func:`~emojify.compositor.composite`, repeated for every
face so later overlays sit on top of earlier ones.

Example:
    >>> from emojify import Emojifier
    >>> from emojify.backends import HaarCascadeBackend
    >>> from emojify.assets import RenderedAssetResolver
    >>> with Emojifier(HaarCascadeBackend(), RenderedAssetResolver()) as emojifier:
    ...     result = emojifier.detect_faces_and_overlay_emoji(photo)
    >>> result.image.shape == photo.shape
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np

from emojify.assets import AssetResolver
from emojify.backends.base import FaceDetectionBackend
from emojify.compositor import EMOJI_SCALE_FACTOR, composite
from emojify.config import EmojifyConfig
from emojify.selector import EmojiSelector
from emojify.types import DetectedFace, EmojiCategory, FaceGeometry, FaceSignals

logger = logging.getLogger(__name__)

NO_FACES = "no_faces"
MISSING_EMOJI = "missing_emoji"

FaceInput = Union[DetectedFace, tuple]


@runtime_checkable
class Notifier(Protocol):
    """Receives user-facing notices raised while annotating."""

    def no_faces_found(self) -> None:
        """No face was detected in the picture."""
        ...

    def missing_emoji(self, category: EmojiCategory, face_index: int) -> None:
        """No emoji asset exists for the category chosen for a face."""
        ...


@dataclass(frozen=True)
class Notice:
    """A notice raised during annotation.

    Attributes:
        kind: ``"no_faces"`` or ``"missing_emoji"``.
        category: Emoji category for ``missing_emoji`` notices.
        face_index: Index of the face for ``missing_emoji`` notices.
    """

    kind: str
    category: Optional[EmojiCategory] = None
    face_index: Optional[int] = None

    @property
    def message(self) -> str:
        if self.kind == NO_FACES:
            return "No faces detected"
        return f"No emoji asset for {self.category.name} (face {self.face_index})"


class LoggingNotifier:
    """Notifier that writes notices to the log at warning level."""

    def no_faces_found(self) -> None:
        logger.warning("No faces detected")

    def missing_emoji(self, category: EmojiCategory, face_index: int) -> None:
        logger.warning("No emoji asset for %s (face %d)", category.name, face_index)


class RecordingNotifier:
    """Notifier that keeps notices for later display."""

    def __init__(self):
        self.notices: List[Notice] = []

    def no_faces_found(self) -> None:
        self.notices.append(Notice(kind=NO_FACES))

    def missing_emoji(self, category: EmojiCategory, face_index: int) -> None:
        self.notices.append(Notice(kind=MISSING_EMOJI, category=category, face_index=face_index))


def _unpack(face: FaceInput) -> tuple[FaceSignals, FaceGeometry]:
    if isinstance(face, DetectedFace):
        return face.signals, face.geometry
    signals, geometry = face
    return signals, geometry


def annotate(
    image: np.ndarray,
    detected_faces: Sequence[FaceInput],
    resolver: AssetResolver,
    selector: Optional[EmojiSelector] = None,
    notifier: Optional[Notifier] = None,
    scale_factor: float = EMOJI_SCALE_FACTOR,
) -> np.ndarray:
    """Overlay an emoji on every detected face.

    Args:
        image: Picture the faces were detected in. Not modified.
        detected_faces: :class:`DetectedFace` objects or
            ``(FaceSignals, FaceGeometry)`` pairs, in detection order.
        resolver: Emoji asset lookup.
        selector: Emoji selector (default thresholds if omitted).
        notifier: Receives ``no_faces_found`` / ``missing_emoji`` notices.
        scale_factor: Emoji width as a fraction of face width.

    Returns:
        ``image`` itself when there are no faces, otherwise a new image of
        the same shape and dtype with the emoji drawn in.
    """
    result, _ = _annotate(image, detected_faces, resolver, selector, notifier, scale_factor)
    return result


def _annotate(
    image: np.ndarray,
    detected_faces: Sequence[FaceInput],
    resolver: AssetResolver,
    selector: Optional[EmojiSelector],
    notifier: Optional[Notifier],
    scale_factor: float,
) -> tuple[np.ndarray, List[EmojiCategory]]:
    """:func:`annotate` that also returns the category chosen per face."""
    selector = selector or EmojiSelector()
    notifier = notifier or LoggingNotifier()

    if len(detected_faces) == 0:
        notifier.no_faces_found()
        return image, []

    result = image
    categories = []
    for index, face in enumerate(detected_faces):
        signals, geometry = _unpack(face)
        category = selector.select(signals)
        categories.append(category)

        emoji = resolver.resolve(category)
        if emoji is None:
            notifier.missing_emoji(category, index)
            continue

        result = composite(result, emoji, geometry, scale_factor)

    return result, categories


@dataclass
class EmojifyResult:
    """Output of :meth:`Emojifier.detect_faces_and_overlay_emoji`.

    Attributes:
        image: Picture with emoji drawn over the faces.
        faces: Faces reported by the detector.
        categories: Emoji category chosen for each face.
        notices: Notices raised while annotating.
    """

    image: np.ndarray
    faces: List[DetectedFace] = field(default_factory=list)
    categories: List[EmojiCategory] = field(default_factory=list)
    notices: List[Notice] = field(default_factory=list)

    @property
    def face_count(self) -> int:
        return len(self.faces)


class _FanOutNotifier:
    """Forwards notices to a recorder and to the user-supplied notifier."""

    def __init__(self, recorder: RecordingNotifier, notifier: Notifier):
        self._recorder = recorder
        self._notifier = notifier

    def no_faces_found(self) -> None:
        self._recorder.no_faces_found()
        self._notifier.no_faces_found()

    def missing_emoji(self, category: EmojiCategory, face_index: int) -> None:
        self._recorder.missing_emoji(category, face_index)
        self._notifier.missing_emoji(category, face_index)


class Emojifier:
    """Face detection plus emoji overlay for whole pictures.

    Args:
        detector: Face detection backend.
        resolver: Emoji asset lookup.
        config: Thresholds and scale factor (defaults if omitted).
        notifier: Receives user-facing notices (logs them if omitted).
    """

    def __init__(
        self,
        detector: FaceDetectionBackend,
        resolver: AssetResolver,
        config: Optional[EmojifyConfig] = None,
        notifier: Optional[Notifier] = None,
    ):
        self._detector = detector
        self._resolver = resolver
        self._config = config or EmojifyConfig()
        self._notifier = notifier or LoggingNotifier()
        self._selector = EmojiSelector.from_config(self._config)
        self._initialized = False

    @property
    def config(self) -> EmojifyConfig:
        return self._config

    def initialize(self) -> None:
        if self._initialized:
            return
        self._detector.initialize()
        self._initialized = True

    def cleanup(self) -> None:
        if not self._initialized:
            return
        self._detector.cleanup()
        self._initialized = False
        logger.debug("Emojifier cleaned up")

    def __enter__(self) -> "Emojifier":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def detect_faces_and_overlay_emoji(self, picture: np.ndarray) -> EmojifyResult:
        """Detect faces in ``picture`` and draw an emoji over each one.

        Outside a ``with`` block the detector is initialized for this call
        and released before returning.
        """
        owns_detector = not self._initialized
        self.initialize()
        try:
            faces = list(self._detector.detect(picture))
        finally:
            if owns_detector:
                self.cleanup()
        logger.debug("detectFaces: number of faces = %d", len(faces))

        recorder = RecordingNotifier()
        image, categories = _annotate(
            picture,
            faces,
            self._resolver,
            self._selector,
            _FanOutNotifier(recorder, self._notifier),
            self._config.scale_factor,
        )

        return EmojifyResult(
            image=image,
            faces=faces,
            categories=categories,
            notices=list(recorder.notices),
        )


__all__ = [
    "Notifier",
    "Notice",
    "LoggingNotifier",
    "RecordingNotifier",
    "annotate",
    "EmojifyResult",
    "Emojifier",
]
