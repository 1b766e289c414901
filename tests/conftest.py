"""
Shared fixtures.

HighGUI window calls are replaced with mocks so tests run without a display.
cv2.cvtColor is left alone and runs for real.
"""

from types import SimpleNamespace
from unittest import mock

import cv2
import numpy as np
import pytest

from streamshow import ImageFormat, ImageFrame, Timestamp


@pytest.fixture
def highgui(monkeypatch):
    """Record namedWindow / imshow / waitKey / destroyWindow calls."""
    calls = SimpleNamespace(
        namedWindow=mock.Mock(),
        imshow=mock.Mock(),
        waitKey=mock.Mock(return_value=-1),
        destroyWindow=mock.Mock(),
    )
    monkeypatch.setattr(cv2, 'namedWindow', calls.namedWindow)
    monkeypatch.setattr(cv2, 'imshow', calls.imshow)
    monkeypatch.setattr(cv2, 'waitKey', calls.waitKey)
    monkeypatch.setattr(cv2, 'destroyWindow', calls.destroyWindow)
    return calls


def _make_frame(format: ImageFormat, width: int = 8, height: int = 6, ts: int = 1000) -> ImageFrame:
    """Frame filled with a deterministic random pattern."""
    frame = ImageFrame.create_blank(format, width, height, Timestamp(ts))
    rng = np.random.default_rng(ts)
    frame.data[...] = rng.integers(0, 255, frame.data.shape)
    return frame


@pytest.fixture
def make_frame():
    """Factory for non-empty frames: make_frame(format, width, height, ts)."""
    return _make_frame
