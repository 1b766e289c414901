"""Tests for packets, input ports and contract negotiation."""

import pytest

from streamshow import (
    ContractError,
    HandlerContract,
    ImageFormat,
    ImageFrame,
    InputStream,
    Packet,
    Timestamp,
    VideoHeader,
)


class TestPacket:
    """Test Packet payload access."""

    def test_empty_packet(self):
        packet = Packet()
        assert packet.is_empty()
        assert packet.timestamp == Timestamp.UNSET
        with pytest.raises(ValueError, match="empty"):
            packet.get()

    def test_typed_get(self):
        header = VideoHeader(640, 480, 30.0)
        packet = Packet(header, Timestamp.PRE_STREAM)

        assert packet.get(VideoHeader) is header
        with pytest.raises(TypeError, match="expected ImageFrame"):
            packet.get(ImageFrame)


class TestInputStream:
    """Test tagged input ports."""

    def test_starts_empty(self):
        port = InputStream('VIDEO', ImageFrame)
        assert port.is_empty()
        assert port.value().is_empty()

    def test_set_and_clear(self):
        port = InputStream('VIDEO', ImageFrame)
        frame = ImageFrame.create_blank(ImageFormat.GRAY8, 4, 4, Timestamp(1))

        port.set_packet(Packet(frame, Timestamp(1)))
        assert port.value().get(ImageFrame) is frame

        port.clear()
        assert port.is_empty()

    def test_rejects_wrong_type(self):
        port = InputStream('VIDEO', ImageFrame)
        with pytest.raises(TypeError, match="accepts ImageFrame"):
            port.set_packet(Packet(VideoHeader(1, 1, 1.0), Timestamp(1)))


class TestHandlerContract:
    """Test contract negotiation."""

    def test_require_missing_input(self):
        contract = HandlerContract(['VIDEO_PRESTREAM'])
        with pytest.raises(ContractError, match="Required input 'VIDEO'"):
            contract.require_input('VIDEO')

    def test_require_present_input(self):
        contract = HandlerContract(['VIDEO'])
        contract.require_input('VIDEO')
        assert contract.has_input('VIDEO')
        assert not contract.has_input('VIDEO_PRESTREAM')

    def test_validate_declared_not_connected(self):
        contract = HandlerContract(['VIDEO'])
        contract.declare_input('VIDEO', ImageFrame)
        contract.declare_input('AUDIO')
        with pytest.raises(ContractError, match="not connected: AUDIO"):
            contract.validate_inputs()

    def test_validate_connected_not_declared(self):
        contract = HandlerContract(['VIDEO', 'EXTRA'])
        contract.declare_input('VIDEO', ImageFrame)
        with pytest.raises(ContractError, match="not declared: EXTRA"):
            contract.validate_inputs()

    def test_build_inputs(self):
        contract = HandlerContract(['VIDEO'])
        contract.declare_input('VIDEO', ImageFrame)
        contract.validate_inputs()

        inputs = contract.build_inputs()
        assert list(inputs) == ['VIDEO']
        assert inputs['VIDEO'].packet_type is ImageFrame
