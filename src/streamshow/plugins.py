"""
Plugin registration system for handlers.

Handlers register under a name so hosts can build them from configuration:

    @register_handler('video_imshow')
    class VideoImShowHandler(StreamHandler):
        ...

    handler_class = get_registry().get_handler('video_imshow')
"""

from typing import Callable, Dict, Optional, Type

from .handler import StreamHandler


class PluginRegistry:
    """Registry of handler classes by name."""

    def __init__(self):
        self._handlers: Dict[str, Type[StreamHandler]] = {}

    def register_handler(self, name: str, handler_class: Type[StreamHandler]) -> None:
        """
        Register a handler implementation.

        Args:
            name: Name to register under (e.g., 'video_imshow')
            handler_class: StreamHandler subclass to register

        Raises:
            TypeError: If handler_class is not a StreamHandler subclass
            ValueError: If name is already taken by a different class
        """
        if not (isinstance(handler_class, type) and issubclass(handler_class, StreamHandler)):
            raise TypeError(f"{handler_class!r} is not a StreamHandler subclass")

        existing = self._handlers.get(name)
        if existing is not None and existing is not handler_class:
            raise ValueError(
                f"Handler name '{name}' already registered to {existing.__name__}"
            )
        self._handlers[name] = handler_class

    def get_handler(self, name: str) -> Optional[Type[StreamHandler]]:
        """Get a registered handler class by name."""
        return self._handlers.get(name)

    def create_handler(self, name: str, **kwargs) -> StreamHandler:
        """
        Instantiate a registered handler.

        Raises:
            KeyError: If no handler is registered under name
        """
        handler_class = self._handlers.get(name)
        if handler_class is None:
            raise KeyError(f"No handler registered as '{name}'")
        return handler_class(**kwargs)

    def list_handlers(self) -> list[str]:
        """List all registered handler names."""
        return list(self._handlers.keys())


# Global registry instance
_registry = PluginRegistry()


def register_handler(name: str) -> Callable[[Type[StreamHandler]], Type[StreamHandler]]:
    """
    Decorator to register a handler.

    Example:
        @register_handler('video_imshow')
        class VideoImShowHandler(StreamHandler):
            ...
    """
    def decorator(cls: Type[StreamHandler]) -> Type[StreamHandler]:
        _registry.register_handler(name, cls)
        return cls
    return decorator


def get_registry() -> PluginRegistry:
    """Get the global plugin registry."""
    return _registry
