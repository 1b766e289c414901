"""
Exceptions raised by handlers and the runtime.

All of these are final: the runtime reports them to the caller and never
retries the step that raised them.
"""

from typing import Optional

from .timestamps import Timestamp


class StreamError(Exception):
    """
    Base class for streamshow errors.

    Attributes:
        timestamp: Timestamp of the step that failed, if any
    """

    def __init__(self, message: str, timestamp: Optional[Timestamp] = None):
        super().__init__(message)
        self.timestamp = timestamp


class ContractError(StreamError):
    """Handler contract cannot be satisfied (e.g. a required input is missing)."""


class InvalidInputError(StreamError, ValueError):
    """Input packet is unusable (e.g. an empty frame)."""


class UnsupportedFormatError(StreamError, ValueError):
    """Frame pixel format is not one the handler can process."""


class StepError(StreamError):
    """
    A handler step failed.

    Raised by StreamRuntime with the handler's exception as __cause__.

    Attributes:
        handler_id: Handler that failed
    """

    def __init__(self, handler_id: str, message: str, timestamp: Optional[Timestamp] = None):
        super().__init__(f"[{handler_id}] {message}", timestamp)
        self.handler_id = handler_id
