"""
Tagged input ports and handler contracts.

Handlers declare the inputs they need in get_contract(). The runtime checks
the declaration against what is actually connected, then delivers one Packet
per input for every step.

Example:
    @classmethod
    def get_contract(cls, contract: HandlerContract) -> None:
        contract.require_input('VIDEO')
        contract.declare_input('VIDEO', ImageFrame)
        if contract.has_input('VIDEO_PRESTREAM'):
            contract.declare_input('VIDEO_PRESTREAM', VideoHeader)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Type

from .errors import ContractError
from .timestamps import Timestamp


@dataclass(frozen=True)
class Packet:
    """
    A value bound to a timestamp.

    Attributes:
        value: Payload (ImageFrame, VideoHeader, ...), None for an empty packet
        timestamp: Timestamp the payload belongs to
    """
    value: Any = None
    timestamp: Timestamp = Timestamp.UNSET

    def is_empty(self) -> bool:
        return self.value is None

    def get(self, expected_type: Optional[Type] = None) -> Any:
        """
        Get the payload, optionally checking its type.

        Raises:
            ValueError: If the packet is empty
            TypeError: If the payload is not an instance of expected_type
        """
        if self.value is None:
            raise ValueError(f"Packet at {self.timestamp} is empty")
        if expected_type is not None and not isinstance(self.value, expected_type):
            raise TypeError(
                f"Packet at {self.timestamp} holds {type(self.value).__name__}, "
                f"expected {expected_type.__name__}"
            )
        return self.value


class InputStream:
    """
    Input port identified by a tag.

    Usage:
        # In handler process():
        packet = ctx.inputs['VIDEO'].value()
        frame = packet.get(ImageFrame)
    """

    def __init__(self, tag: str, packet_type: Optional[Type] = None):
        """
        Initialize input port.

        Args:
            tag: Port tag (e.g., 'VIDEO', 'VIDEO_PRESTREAM')
            packet_type: Payload type accepted on this port (None: any)
        """
        self.tag = tag
        self.packet_type = packet_type
        self._packet = Packet()

    def set_packet(self, packet: Packet) -> None:
        """
        Set the packet for the current step.

        Note: This is called by StreamRuntime.

        Raises:
            TypeError: If the payload does not match packet_type
        """
        if (
            not packet.is_empty()
            and self.packet_type is not None
            and not isinstance(packet.value, self.packet_type)
        ):
            raise TypeError(
                f"Input '{self.tag}' accepts {self.packet_type.__name__}, "
                f"got {type(packet.value).__name__}"
            )
        self._packet = packet

    def clear(self) -> None:
        self._packet = Packet()

    def value(self) -> Packet:
        """Packet for the current step (an empty packet if none was delivered)."""
        return self._packet

    def is_empty(self) -> bool:
        return self._packet.is_empty()

    def __repr__(self) -> str:
        type_name = self.packet_type.__name__ if self.packet_type else 'Any'
        return f"InputStream(tag='{self.tag}', type={type_name})"


class HandlerContract:
    """
    Input requirements of a handler, negotiated before it starts.

    The runtime builds a contract from the tags that are connected, passes it
    to the handler's get_contract(), then validates the result.
    """

    def __init__(self, available_tags: Iterable[str] = ()):
        """
        Initialize contract.

        Args:
            available_tags: Tags of the inputs connected by the host
        """
        self.available_tags = frozenset(available_tags)
        self.inputs: Dict[str, Optional[Type]] = {}

    def has_input(self, tag: str) -> bool:
        """Check whether the host connected an input with this tag."""
        return tag in self.available_tags

    def require_input(self, tag: str) -> None:
        """
        Fail negotiation unless an input with this tag is connected.

        Raises:
            ContractError: If tag is not connected
        """
        if not self.has_input(tag):
            connected = ", ".join(sorted(self.available_tags)) or "none"
            raise ContractError(
                f"Required input '{tag}' is not connected (connected: {connected})"
            )

    def declare_input(self, tag: str, packet_type: Optional[Type] = None) -> None:
        """Declare that the handler reads tag, carrying packet_type payloads."""
        self.inputs[tag] = packet_type

    def validate_inputs(self) -> None:
        """
        Check that every declared input is connected and every connected
        input is declared.

        Raises:
            ContractError: On any mismatch
        """
        missing = sorted(set(self.inputs) - self.available_tags)
        if missing:
            raise ContractError(f"Declared inputs not connected: {', '.join(missing)}")

        undeclared = sorted(self.available_tags - set(self.inputs))
        if undeclared:
            raise ContractError(f"Connected inputs not declared: {', '.join(undeclared)}")

    def build_inputs(self) -> Dict[str, InputStream]:
        """Create one InputStream per declared input."""
        return {
            tag: InputStream(tag, packet_type)
            for tag, packet_type in self.inputs.items()
        }

    def __repr__(self) -> str:
        return f"HandlerContract(inputs={list(self.inputs.keys())})"
