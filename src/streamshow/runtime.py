"""
StreamRuntime - minimal host that drives one handler.

The runtime owns nothing but the call order:

1. Negotiate the handler contract against the connected input tags
2. on_start()
3. One step per distinct timestamp across all inputs, in order (a
   Timestamp.PRE_STREAM step comes first when any input carries one)
4. on_stop() - always, even after a failed step

There is no buffering, pacing or concurrency. A failed step is logged and
raised as StepError; nothing is retried.

Example:
    runtime = StreamRuntime(VideoImShowHandler())
    runtime.connect('VIDEO', (Packet(frame, frame.timestamp) for frame in frames))
    runtime.connect('VIDEO_PRESTREAM', [Packet(header, Timestamp.PRE_STREAM)])
    await runtime.run()
"""

import heapq
import logging
from itertools import groupby
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .errors import StepError
from .handler import ProcessContext, StreamHandler
from .ports import HandlerContract, Packet
from .timestamps import Timestamp

logger = logging.getLogger(__name__)


class StreamRuntime:
    """
    Sequential driver for a single StreamHandler.

    Packets from all inputs are merged by timestamp; packets sharing a
    timestamp are delivered in the same step. Inputs are consumed lazily.

    Attributes:
        handler: Handler being driven
        steps_processed: Number of process() calls that returned normally
    """

    def __init__(self, handler: StreamHandler):
        self.handler = handler
        self.steps_processed = 0
        self._streams: Dict[str, Iterable[Packet]] = {}
        self._running = False

    def connect(self, tag: str, packets: Iterable[Packet]) -> None:
        """
        Connect a packet source to the handler input with this tag.

        Args:
            tag: Input tag (e.g., 'VIDEO')
            packets: Packets in timestamp order

        Raises:
            RuntimeError: If the runtime is already running
            ValueError: If tag is already connected
        """
        if self._running:
            raise RuntimeError("Cannot connect inputs while running")
        if tag in self._streams:
            raise ValueError(f"Input '{tag}' is already connected")
        self._streams[tag] = packets

    def negotiate(self) -> HandlerContract:
        """
        Run the handler's contract against the connected inputs.

        Raises:
            ContractError: If the handler cannot run with these inputs
        """
        contract = HandlerContract(self._streams.keys())
        type(self.handler).get_contract(contract)
        contract.validate_inputs()
        return contract

    async def run(self) -> None:
        """
        Negotiate, start, step through all packets, stop.

        Raises:
            ContractError: If negotiation fails (the handler is never started)
            StepError: If on_start() or a step fails
        """
        if self._running:
            raise RuntimeError("StreamRuntime is already running")

        contract = self.negotiate()
        ctx = ProcessContext(self.handler.handler_id, contract.build_inputs())

        self._running = True
        failed = True
        logger.info(f"[{self.handler.handler_id}] Starting")
        try:
            await self._call(self.handler.on_start, ctx, None)

            for timestamp, step_packets in self._steps():
                await self._step(ctx, timestamp, step_packets)
            failed = False
        finally:
            self._running = False
            try:
                await self.handler.on_stop(ctx)
            except Exception as e:
                logger.error(f"[{self.handler.handler_id}] Error in on_stop: {e}")
                # A step failure is the error worth reporting
                if not failed:
                    raise
            logger.info(
                f"[{self.handler.handler_id}] Stopped after {self.steps_processed} steps"
            )

    async def _step(self, ctx: ProcessContext, timestamp: Timestamp, packets: Dict[str, Packet]) -> None:
        ctx.input_timestamp = timestamp
        for tag, port in ctx.inputs.items():
            packet = packets.get(tag)
            if packet is None:
                port.clear()
            else:
                port.set_packet(packet)

        await self._call(self.handler.process, ctx, timestamp)
        self.steps_processed += 1

    async def _call(self, method, ctx: ProcessContext, timestamp: Optional[Timestamp]) -> None:
        try:
            await method(ctx)
        except Exception as e:
            logger.error(
                f"[{self.handler.handler_id}] Error in {method.__name__} at {timestamp}: {e}"
            )
            raise StepError(self.handler.handler_id, str(e), timestamp) from e

    def _steps(self) -> Iterator[Tuple[Timestamp, Dict[str, Packet]]]:
        """
        Merge all inputs into (timestamp, {tag: packet}) steps.

        Raises:
            ValueError: If an input's timestamps are unset or do not strictly increase
        """
        def tagged(tag: str, packets: Iterable[Packet]):
            previous = None
            for packet in packets:
                if packet.timestamp == Timestamp.UNSET:
                    raise ValueError(f"Input '{tag}' has a packet with no timestamp")
                if previous is not None and packet.timestamp <= previous:
                    raise ValueError(
                        f"Input '{tag}' timestamps must increase: "
                        f"{packet.timestamp} after {previous}"
                    )
                previous = packet.timestamp
                yield packet.timestamp, tag, packet

        merged = heapq.merge(
            *(tagged(tag, packets) for tag, packets in self._streams.items()),
            key=lambda item: item[0],
        )
        for timestamp, group in groupby(merged, key=lambda item: item[0]):
            yield timestamp, {tag: packet for _, tag, packet in group}
