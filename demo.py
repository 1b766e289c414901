#!/usr/bin/env python3
"""
Show a generated test pattern through VideoImShowHandler.

Runs on the main thread (required by HighGUI on macOS).

Usage:
    python demo.py --pattern moving_box --format srgba --seconds 5
"""

import argparse
import asyncio
import logging

import numpy as np

from streamshow import (
    ImageFormat,
    ImageFrame,
    Packet,
    StreamRuntime,
    Timestamp,
    VideoHeader,
    VideoImShowHandler,
)

# SMPTE top bars: white, yellow, cyan, green, magenta, red, blue
SMPTE_COLORS = [
    (255, 255, 255),
    (255, 255, 0),
    (0, 255, 255),
    (0, 255, 0),
    (255, 0, 255),
    (255, 0, 0),
    (0, 0, 255),
]

FORMATS = {
    'gray8': ImageFormat.GRAY8,
    'srgb': ImageFormat.SRGB,
    'srgba': ImageFormat.SRGBA,
}


def smpte_bars(width: int, height: int) -> np.ndarray:
    """SMPTE color bars (RGB)."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    bar_width = width // 7
    top_height = (height * 2) // 3

    for i, color in enumerate(SMPTE_COLORS):
        x_start = i * bar_width
        x_end = (i + 1) * bar_width if i < 6 else width
        frame[:top_height, x_start:x_end] = color

    frame[top_height:, :] = (16, 16, 16)
    return frame


def moving_box(width: int, height: int, t: float) -> np.ndarray:
    """Red box bouncing around a black frame (RGB)."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    box_size = min(width, height) // 8
    x = int((np.sin(t) + 1) / 2 * (width - box_size))
    y = int((np.cos(t * 1.3) + 1) / 2 * (height - box_size))
    frame[y:y + box_size, x:x + box_size] = (255, 0, 0)
    return frame


def to_format(rgb: np.ndarray, format: ImageFormat) -> np.ndarray:
    if format == ImageFormat.GRAY8:
        return rgb.mean(axis=2).astype(np.uint8)
    if format == ImageFormat.SRGBA:
        alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([rgb, alpha], axis=2)
    return rgb


def generate_frames(pattern: str, format: ImageFormat, width: int, height: int, fps: float, seconds: float):
    for i in range(int(seconds * fps)):
        t = i / fps
        if pattern == 'smpte_bars':
            rgb = smpte_bars(width, height)
        else:
            rgb = moving_box(width, height, t)
        timestamp = Timestamp.from_seconds(t)
        yield Packet(ImageFrame(to_format(rgb, format), format, timestamp), timestamp)


async def run(args) -> None:
    format = FORMATS[args.format]
    header = VideoHeader(width=args.width, height=args.height, frame_rate=args.fps, format=format)

    handler = VideoImShowHandler(window_name=args.window, wait_ms=max(1, int(1000 / args.fps)))
    runtime = StreamRuntime(handler)
    runtime.connect('VIDEO_PRESTREAM', [Packet(header, Timestamp.PRE_STREAM)])
    runtime.connect(
        'VIDEO',
        generate_frames(args.pattern, format, args.width, args.height, args.fps, args.seconds),
    )

    await runtime.run()
    print(f"Displayed {handler.frames_displayed} frames")


def main():
    parser = argparse.ArgumentParser(description='Display a test pattern in a window')
    parser.add_argument('--pattern', choices=['smpte_bars', 'moving_box'], default='moving_box',
                        help='Test pattern')
    parser.add_argument('--format', choices=sorted(FORMATS), default='srgb', help='Frame pixel format')
    parser.add_argument('--width', type=int, default=1280, help='Frame width')
    parser.add_argument('--height', type=int, default=720, help='Frame height')
    parser.add_argument('--fps', type=float, default=30.0, help='Frames per second')
    parser.add_argument('--seconds', type=float, default=5.0, help='Duration in seconds')
    parser.add_argument('--window', default='streamshow demo', help='Window name')
    parser.add_argument('--verbose', action='store_true', help='Log every frame')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    asyncio.run(run(args))


if __name__ == '__main__':
    main()
