"""
StreamHandler base class for stream processing.

Handlers are pure processing logic - inert until StreamRuntime drives them.
A handler is a set of four capabilities:

1. get_contract(contract) - classmethod, declare inputs (setup phase)
2. on_start(ctx)          - acquire resources
3. process(ctx)           - handle one step (one input timestamp)
4. on_stop(ctx)           - release resources

Example:
    class FrameCounter(StreamHandler):
        @classmethod
        def get_contract(cls, contract):
            contract.require_input('VIDEO')
            contract.declare_input('VIDEO', ImageFrame)

        async def process(self, ctx):
            if not ctx.inputs['VIDEO'].is_empty():
                self.count += 1
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from .ports import HandlerContract, InputStream
from .timestamps import Timestamp


class ProcessContext:
    """
    Per-handler view of the current step.

    Attributes:
        handler_id: Handler this context belongs to
        inputs: Tagged input ports (tag -> InputStream)
        input_timestamp: Timestamp of the current step
    """

    def __init__(self, handler_id: str, inputs: Dict[str, InputStream]):
        self.handler_id = handler_id
        self.inputs = inputs
        self.input_timestamp = Timestamp.UNSET

    def __repr__(self) -> str:
        return (
            f"ProcessContext(handler='{self.handler_id}', "
            f"timestamp={self.input_timestamp}, inputs={list(self.inputs.keys())})"
        )


class StreamHandler(ABC):
    """
    Base class for all stream handlers.

    Lifecycle:
        1. Runtime negotiates: HandlerClass.get_contract(contract)
        2. Runtime starts handler: await handler.on_start(ctx)
        3. Runtime steps handler once per timestamp: await handler.process(ctx)
        4. Runtime stops handler: await handler.on_stop(ctx)

    on_stop() is called even when a step failed.

    Attributes:
        handler_id: Unique identifier for this handler
    """

    def __init__(self, handler_id: Optional[str] = None):
        """
        Initialize handler.

        Args:
            handler_id: Optional unique identifier. If None, auto-generated.
        """
        self.handler_id = handler_id or f"{self.__class__.__name__}-{id(self)}"

    @classmethod
    def get_contract(cls, contract: HandlerContract) -> None:
        """
        Declare the inputs this handler reads.

        Raises:
            ContractError: If the connected inputs cannot satisfy the handler
        """
        pass

    async def on_start(self, ctx: ProcessContext) -> None:
        """
        Called once before the first step.

        Use this to acquire resources (open files, create windows, etc.).
        """
        pass

    @abstractmethod
    async def process(self, ctx: ProcessContext) -> None:
        """
        Process one step.

        Args:
            ctx: Context holding the step timestamp and the input packets

        Raises:
            StreamError: On any failure; the runtime does not retry
        """
        pass

    async def on_stop(self, ctx: ProcessContext) -> None:
        """
        Called once after the last step.

        Use this to release resources (close files, destroy windows, etc.).
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id='{self.handler_id}')"
