"""emojify - Overlay expression-matched emoji on detected faces.

Example:
    >>> from emojify import Emojifier, RenderedAssetResolver
    >>> from emojify.backends import HaarCascadeBackend
    >>> with Emojifier(HaarCascadeBackend(), RenderedAssetResolver()) as emojifier:
    ...     result = emojifier.detect_faces_and_overlay_emoji(photo)
"""

from emojify.types import DetectedFace, EmojiCategory, FaceGeometry, FaceSignals
from emojify.selector import EmojiSelector, select_emoji
from emojify.compositor import InvalidAssetDimensions, composite
from emojify.config import EmojifyConfig
from emojify.assets import (
    AssetResolver,
    DirectoryAssetResolver,
    RenderedAssetResolver,
)
from emojify.emojifier import (
    Emojifier,
    EmojifyResult,
    LoggingNotifier,
    Notice,
    Notifier,
    RecordingNotifier,
    annotate,
)

__version__ = "0.1.0"

__all__ = [
    "DetectedFace",
    "EmojiCategory",
    "FaceGeometry",
    "FaceSignals",
    "EmojiSelector",
    "select_emoji",
    "InvalidAssetDimensions",
    "composite",
    "EmojifyConfig",
    "AssetResolver",
    "DirectoryAssetResolver",
    "RenderedAssetResolver",
    "Emojifier",
    "EmojifyResult",
    "LoggingNotifier",
    "Notice",
    "Notifier",
    "RecordingNotifier",
    "annotate",
]
