"""Face detection backends.

Usage:
    # Protocol (always available)
    from emojify.backends import FaceDetectionBackend

    # Concrete backends are imported lazily
    from emojify.backends import HaarCascadeBackend
"""

from emojify.backends.base import FaceDetectionBackend

__all__ = [
    "FaceDetectionBackend",
    # "HaarCascadeBackend",  # from emojify.backends.haar
]


def __getattr__(name: str):
    """Lazy import for OpenCV-dependent backends."""
    if name == "HaarCascadeBackend":
        from emojify.backends.haar import HaarCascadeBackend
        return HaarCascadeBackend
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
