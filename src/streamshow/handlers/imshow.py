"""
VideoImShowHandler - show decoded video frames in an OpenCV window.

Inputs:
    VIDEO            (required) ImageFrame packets
    VIDEO_PRESTREAM  (optional) VideoHeader, delivered at Timestamp.PRE_STREAM

GRAY8 frames are shown as-is. SRGB and SRGBA frames are reordered to the BGR
and BGRA layouts HighGUI expects. Any other format fails the step.

Note: on macOS HighGUI only works from the main thread, so the runtime driving
this handler must run there.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import cv2
import numpy as np
from numpy.typing import NDArray

from ..display import DisplaySurface
from ..errors import InvalidInputError, UnsupportedFormatError
from ..handler import ProcessContext, StreamHandler
from ..messages import ImageFormat, ImageFrame, VideoHeader
from ..plugins import register_handler
from ..ports import HandlerContract
from ..timestamps import Timestamp

logger = logging.getLogger(__name__)

VIDEO_TAG = 'VIDEO'
VIDEO_PRESTREAM_TAG = 'VIDEO_PRESTREAM'

# Source format -> cv2.cvtColor code producing the HighGUI channel order
_COLOR_CONVERSIONS = {
    ImageFormat.SRGB: cv2.COLOR_RGB2BGR,
    ImageFormat.SRGBA: cv2.COLOR_RGBA2BGRA,
}


@register_handler('video_imshow')
class VideoImShowHandler(StreamHandler):
    """
    Sink handler that renders each VIDEO frame into a desktop window.

    The window is created in on_start(), created again whenever a pre-stream
    step arrives, and destroyed once in on_stop().

    Example:
        runtime = StreamRuntime(VideoImShowHandler(window_name='Preview'))
        runtime.connect('VIDEO', frame_packets)
        await runtime.run()
    """

    def __init__(
        self,
        window_name: str = 'streamshow',
        window_flags: int = cv2.WINDOW_GUI_EXPANDED,
        wait_ms: int = 1,
        handler_id: Optional[str] = None,
    ):
        """
        Initialize display handler.

        Args:
            window_name: Name (and title) of the display window
            window_flags: cv2.namedWindow flags
            wait_ms: Milliseconds given to cv2.waitKey after each frame (>= 1)
            handler_id: Optional custom handler ID
        """
        super().__init__(handler_id or f'imshow-{window_name}')

        if wait_ms < 1:
            raise ValueError(f"wait_ms must be at least 1, got {wait_ms}")

        self.surface = DisplaySurface(window_name, window_flags)
        self.wait_ms = wait_ms
        self.header: Optional[VideoHeader] = None
        self.frames_displayed = 0
        self.last_key = -1

    @classmethod
    def get_contract(cls, contract: HandlerContract) -> None:
        contract.require_input(VIDEO_TAG)
        contract.declare_input(VIDEO_TAG, ImageFrame)
        if contract.has_input(VIDEO_PRESTREAM_TAG):
            contract.declare_input(VIDEO_PRESTREAM_TAG, VideoHeader)

    async def on_start(self, ctx: ProcessContext) -> None:
        self.surface.create()

    async def process(self, ctx: ProcessContext) -> None:
        """
        Show one frame, or set up the window on a pre-stream step.

        Raises:
            InvalidInputError: If the frame buffer is empty or of the wrong dtype
            UnsupportedFormatError: If the frame is not GRAY8, SRGB or SRGBA
        """
        if ctx.input_timestamp == Timestamp.PRE_STREAM:
            self._setup_video_show(ctx)
            return

        packet = ctx.inputs[VIDEO_TAG].value()
        if packet.is_empty():
            raise InvalidInputError(
                f"No frame on {VIDEO_TAG} at timestamp {ctx.input_timestamp}",
                ctx.input_timestamp,
            )
        frame = packet.get(ImageFrame)

        image = self._to_display_image(frame, packet.timestamp)
        self.surface.show(image)

        # Let HighGUI and the event loop breathe
        self.last_key = self.surface.poll(self.wait_ms)
        await asyncio.sleep(0)

        self.frames_displayed += 1
        logger.debug(f"[{self.handler_id}] Displayed frame at {packet.timestamp}")

    async def on_stop(self, ctx: ProcessContext) -> None:
        self.surface.destroy()
        logger.info(
            f"[{self.handler_id}] Stopped: {self.frames_displayed} frames displayed"
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get display statistics."""
        return {
            'window_name': self.surface.name,
            'frames_displayed': self.frames_displayed,
            'window_open': self.surface.is_open,
            'frame_rate': self.header.frame_rate if self.header else None,
        }

    def _setup_video_show(self, ctx: ProcessContext) -> None:
        """Create the window again and pick up the stream header, if any."""
        self.surface.create()

        header_input = ctx.inputs.get(VIDEO_PRESTREAM_TAG)
        if header_input is not None and not header_input.is_empty():
            self.header = header_input.value().get(VideoHeader)
            logger.info(
                f"[{self.handler_id}] Video header: {self.header.width}x{self.header.height} "
                f"@ {self.header.frame_rate:.2f} fps"
            )

    def _to_display_image(self, frame: ImageFrame, timestamp: Timestamp) -> NDArray[np.generic]:
        """Return a buffer in the channel order HighGUI expects."""
        if frame.is_empty():
            raise InvalidInputError(
                f"Receive empty frame at timestamp {timestamp} "
                f"in {self.__class__.__name__}.process()",
                timestamp,
            )

        # Frames are mutable, so the dtype may have changed since construction
        if frame.data.dtype != frame.format.dtype:
            raise InvalidInputError(
                f"Frame at timestamp {timestamp} holds {frame.data.dtype} data, "
                f"{frame.format} expects {frame.format.dtype}",
                timestamp,
            )

        if frame.format == ImageFormat.GRAY8:
            return frame.data

        conversion = _COLOR_CONVERSIONS.get(frame.format)
        if conversion is None:
            raise UnsupportedFormatError(
                f"Unsupported image format: {frame.format}", timestamp
            )
        return cv2.cvtColor(frame.data, conversion)
