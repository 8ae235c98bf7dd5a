"""
Image Format Registry for storacalc

Factory pattern with decorator-based registration.

Usage:
    # In a format implementation:
    @register_format("bmp")
    class BMPImageFactory:
        @staticmethod
        def create(width, height, identifier, config) -> ImageFormat:
            return BMPImage(width, height, identifier, config)

    # To build an image:
    image = create_image("bmp", 640, 480, identifier=1, config={})
"""

from typing import Callable, Dict, Iterable, List

from .base import ImageFormat

# Global registry of image format factories, keyed by canonical name
FORMAT_REGISTRY: Dict[str, Callable[[int, int, int, dict], ImageFormat]] = {}

# Lower-case tag or alias -> canonical name
FORMAT_ALIASES: Dict[str, str] = {}


def register_format(name: str, aliases: Iterable[str] = ()):
    """
    Decorator to register image format factories.

    Args:
        name: Canonical format name (also the config section key)
        aliases: Extra tags accepted for the same format

    Returns:
        Decorator function that registers the factory class

    Example:
        @register_format("jp2", aliases=("jpeg2000",))
        class JP2ImageFactory:
            @staticmethod
            def create(width, height, identifier, config):
                return JP2Image(width, height, identifier, config)
    """
    def decorator(factory_class):
        FORMAT_REGISTRY[name] = factory_class.create
        FORMAT_ALIASES[name] = name
        for alias in aliases:
            FORMAT_ALIASES[alias] = name
        return factory_class
    return decorator


def resolve_format(tag: str) -> str:
    """
    Map a format tag or alias to its canonical name.

    Args:
        tag: Format name or alias, any case

    Returns:
        Canonical format name

    Raises:
        ValueError: If the tag is not registered
    """
    key = tag.strip().lower()
    if key not in FORMAT_ALIASES:
        available = ', '.join(sorted(FORMAT_ALIASES)) if FORMAT_ALIASES else 'none'
        raise ValueError(
            f"Unknown image format: '{tag}'. "
            f"Available formats: {available}"
        )
    return FORMAT_ALIASES[key]


def is_known_format(tag: str) -> bool:
    return tag.strip().lower() in FORMAT_ALIASES


def available_formats() -> List[str]:
    return sorted(FORMAT_REGISTRY)


def create_image(tag: str, width: int, height: int, identifier: int, config: dict = None) -> ImageFormat:
    """
    Build an image of the given format.

    Args:
        tag: Format name or alias (case-insensitive)
        width: Width in pixels
        height: Height in pixels
        identifier: Unique id for the new image
        config: Format-specific configuration dictionary

    Returns:
        Initialized image instance

    Raises:
        ValueError: If the tag is unknown or a dimension is negative
    """
    name = resolve_format(tag)
    return FORMAT_REGISTRY[name](width, height, identifier, config or {})


# Import the formats to trigger registration
from . import baseline, bmp, jp2  # noqa: E402,F401
