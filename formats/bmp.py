"""
BMP size model for storacalc

Uncompressed bitmap: one byte per pixel, stored with a resolution pyramid.
"""

from . import register_format
from .base import PyramidImageAsset
from .pyramid import MIN_SIZE


@register_format("bmp")
class BMPImageFactory:
    """Factory for creating BMP image instances."""

    @staticmethod
    def create(width: int, height: int, identifier: int, config: dict) -> "BMPImage":
        return BMPImage(width, height, identifier, config)


class BMPImage(PyramidImageAsset):
    name = "bmp"
    label = "BMP"

    def __init__(self, width: int, height: int, identifier: int, config: dict = None):
        config = config or {}
        super().__init__(width, height, identifier, config, min_size=config.get('min_size', MIN_SIZE))

    def base_size(self, width: int, height: int) -> int:
        return width * height
