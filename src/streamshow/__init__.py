"""
streamshow - show pipeline video streams in a desktop window

A small handler framework (tagged input ports, contracts, timestamps) and one
sink handler that renders ImageFrame packets through OpenCV HighGUI.

Example:
    import asyncio
    from streamshow import (
        StreamRuntime, VideoImShowHandler, ImageFrame, ImageFormat, Packet, Timestamp,
    )

    frames = [
        ImageFrame.create_blank(ImageFormat.SRGB, 640, 480, Timestamp(i * 33_333))
        for i in range(30)
    ]

    runtime = StreamRuntime(VideoImShowHandler(window_name='Preview'))
    runtime.connect('VIDEO', [Packet(f, f.timestamp) for f in frames])
    asyncio.run(runtime.run())
"""

# Core infrastructure
from .timestamps import Timestamp
from .errors import (
    StreamError,
    ContractError,
    InvalidInputError,
    UnsupportedFormatError,
    StepError,
)
from .ports import Packet, InputStream, HandlerContract
from .handler import StreamHandler, ProcessContext
from .display import DisplaySurface
from .runtime import StreamRuntime
from .plugins import PluginRegistry, register_handler, get_registry

# Message types
from .messages import ImageFormat, ImageFrame, VideoHeader

# Handlers
from .handlers import VideoImShowHandler

__version__ = "0.1.0"

__all__ = [
    # Core infrastructure
    "Timestamp",
    "StreamError",
    "ContractError",
    "InvalidInputError",
    "UnsupportedFormatError",
    "StepError",
    "Packet",
    "InputStream",
    "HandlerContract",
    "StreamHandler",
    "ProcessContext",
    "DisplaySurface",
    "StreamRuntime",
    "PluginRegistry",
    "register_handler",
    "get_registry",
    # Messages
    "ImageFormat",
    "ImageFrame",
    "VideoHeader",
    # Handlers
    "VideoImShowHandler",
]
