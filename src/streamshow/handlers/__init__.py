"""
Built-in handlers.

Importing this package registers them with the global plugin registry.
"""

from .imshow import VideoImShowHandler, VIDEO_TAG, VIDEO_PRESTREAM_TAG

__all__ = [
    "VideoImShowHandler",
    "VIDEO_TAG",
    "VIDEO_PRESTREAM_TAG",
]
