"""
Message types carried on handler input ports.

Message types:
- ImageFrame: Decoded video frame (numpy pixel buffer + format + timestamp)
- VideoHeader: Stream-level video metadata, sent once at Timestamp.PRE_STREAM

Frames are owned by the upstream producer for the duration of one process()
call. Consumers read them and must not modify the buffer in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np
from numpy.typing import NDArray

from .timestamps import Timestamp


class ImageFormat(Enum):
    """
    Pixel layout of an ImageFrame buffer.

    Values are (channels, bytes per channel).
    """
    GRAY8 = "gray8"          # 1 x uint8
    GRAY16 = "gray16"        # 1 x uint16
    SRGB = "srgb"            # 3 x uint8, R G B
    SRGBA = "srgba"          # 4 x uint8, R G B A
    SBGRA = "sbgra"          # 4 x uint8, B G R A
    LAB8 = "lab8"            # 3 x uint8, CIELAB
    VEC32F1 = "vec32f1"      # 1 x float32

    @property
    def channels(self) -> int:
        return _FORMAT_LAYOUT[self][0]

    @property
    def byte_depth(self) -> int:
        return _FORMAT_LAYOUT[self][1]

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(_FORMAT_LAYOUT[self][2])

    def __str__(self) -> str:
        return self.name


_FORMAT_LAYOUT = {
    ImageFormat.GRAY8: (1, 1, np.uint8),
    ImageFormat.GRAY16: (1, 2, np.uint16),
    ImageFormat.SRGB: (3, 1, np.uint8),
    ImageFormat.SRGBA: (4, 1, np.uint8),
    ImageFormat.SBGRA: (4, 1, np.uint8),
    ImageFormat.LAB8: (3, 1, np.uint8),
    ImageFormat.VEC32F1: (1, 4, np.float32),
}


@dataclass
class ImageFrame:
    """
    Decoded video frame.

    Attributes:
        data: Pixel buffer, shape (height, width) for single channel formats
            or (height, width, channels) otherwise. None for an unallocated frame.
        format: Pixel layout of data
        timestamp: Presentation timestamp of the frame
        metadata: Optional metadata dict
    """
    data: Optional[NDArray[Any]]
    format: ImageFormat
    timestamp: Timestamp = Timestamp.UNSET
    metadata: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        """Validate buffer shape and dtype against the declared format."""
        if self.data is None or self.data.size == 0:
            return

        if self.data.ndim not in (2, 3):
            raise ValueError(
                f"ImageFrame data must be 2D or 3D, got shape {self.data.shape}"
            )

        channels = 1 if self.data.ndim == 2 else self.data.shape[2]
        if channels != self.format.channels:
            raise ValueError(
                f"ImageFrame format {self.format} expects {self.format.channels} "
                f"channel(s), buffer has {channels}"
            )

        if self.data.dtype != self.format.dtype:
            raise ValueError(
                f"ImageFrame format {self.format} expects {self.format.dtype} data, "
                f"buffer is {self.data.dtype}"
            )

    @classmethod
    def create_blank(
        cls,
        format: ImageFormat,
        width: int,
        height: int,
        timestamp: Timestamp = Timestamp.UNSET,
    ) -> 'ImageFrame':
        """
        Create a zero-filled frame.

        Args:
            format: Pixel layout
            width: Frame width in pixels
            height: Frame height in pixels
            timestamp: Frame timestamp

        Returns:
            ImageFrame with a zeroed buffer of the right shape and dtype
        """
        if format.channels == 1:
            shape = (height, width)
        else:
            shape = (height, width, format.channels)
        return cls(np.zeros(shape, dtype=format.dtype), format, timestamp)

    @property
    def width(self) -> int:
        if self.data is None or self.data.ndim < 2:
            return 0
        return self.data.shape[1]

    @property
    def height(self) -> int:
        if self.data is None or self.data.ndim < 2:
            return 0
        return self.data.shape[0]

    @property
    def channels(self) -> int:
        return self.format.channels

    @property
    def byte_depth(self) -> int:
        return self.format.byte_depth

    @property
    def byte_size(self) -> int:
        """Number of bytes in the pixel buffer."""
        if self.data is None:
            return 0
        return self.data.nbytes

    def is_empty(self) -> bool:
        """True when there is no pixel data to show."""
        return self.data is None or self.data.size == 0


@dataclass
class VideoHeader:
    """
    Stream-level video metadata.

    Sent once on a pre-stream input, before the first frame.

    Attributes:
        width: Frame width in pixels
        height: Frame height in pixels
        frame_rate: Nominal frames per second
        format: Pixel layout of the frames that follow
        duration: Stream duration in seconds (0.0 if unknown)
        metadata: Optional metadata dict (codec info, etc.)
    """
    width: int
    height: int
    frame_rate: float
    format: ImageFormat = ImageFormat.SRGB
    duration: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)
