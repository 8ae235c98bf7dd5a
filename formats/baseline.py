"""
Baseline (JPEG) size model for storacalc

Baseline JPEG is estimated at a flat fraction of the pixel count and is
stored with a resolution pyramid.
"""

from utilities import round_half_up

from . import register_format
from .base import PyramidImageAsset
from .pyramid import MIN_SIZE


@register_format("baseline", aliases=("jpeg", "jpg", "j"))
class BaselineImageFactory:
    """Factory for creating Baseline image instances."""

    @staticmethod
    def create(width: int, height: int, identifier: int, config: dict) -> "BaselineImage":
        return BaselineImage(width, height, identifier, config)


class BaselineImage(PyramidImageAsset):
    """
    Baseline/JPEG image.

    Attributes:
        scale_factor: Encoded bytes per pixel (default: 0.2)
    """

    name = "baseline"
    label = "JPEG/Baseline"

    def __init__(self, width: int, height: int, identifier: int, config: dict = None):
        config = config or {}
        super().__init__(width, height, identifier, config, min_size=config.get('min_size', MIN_SIZE))
        self.scale_factor = config.get('scale_factor', 0.2)

    def base_size(self, width: int, height: int) -> int:
        return round_half_up(width * height * self.scale_factor)
