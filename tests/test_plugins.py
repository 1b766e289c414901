"""Tests for the handler registry."""

import pytest

from streamshow import PluginRegistry, StreamHandler, VideoImShowHandler, get_registry


class NullHandler(StreamHandler):
    async def process(self, ctx):
        pass


def test_imshow_registered():
    registry = get_registry()
    assert registry.get_handler('video_imshow') is VideoImShowHandler
    assert 'video_imshow' in registry.list_handlers()


def test_create_handler(highgui):
    handler = get_registry().create_handler('video_imshow', window_name='Configured')
    assert isinstance(handler, VideoImShowHandler)
    assert handler.surface.name == 'Configured'
    highgui.namedWindow.assert_not_called()


def test_create_unknown():
    with pytest.raises(KeyError, match="nope"):
        PluginRegistry().create_handler('nope')


def test_register_conflict():
    registry = PluginRegistry()
    registry.register_handler('null', NullHandler)
    registry.register_handler('null', NullHandler)

    with pytest.raises(ValueError, match="already registered"):
        registry.register_handler('null', VideoImShowHandler)


def test_register_non_handler():
    with pytest.raises(TypeError):
        PluginRegistry().register_handler('bad', dict)
