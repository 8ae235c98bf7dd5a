"""
JPEG2000 size model for storacalc

JPEG2000 is multi-resolution by construction (wavelet decomposition), so no
separate pyramid is stored and get_size() is the single-level estimate.

The compression gain grows slowly with image area:

    size = (w * h * scale_factor) / ln(ln(w * h + height_factor))
"""

import math

from utilities import round_half_up

from . import register_format
from .base import ImageAsset


@register_format("jp2", aliases=("jpeg2000",))
class JP2ImageFactory:
    """Factory for creating JPEG2000 image instances."""

    @staticmethod
    def create(width: int, height: int, identifier: int, config: dict) -> "JP2Image":
        return JP2Image(width, height, identifier, config)


class JP2Image(ImageAsset):
    """
    JPEG2000 image.

    Attributes:
        scale_factor: Bytes per pixel before the logarithmic gain (default: 0.4)
        height_factor: Offset added to the pixel count inside the logarithm (default: 16)
    """

    name = "jp2"
    label = "JP2/2000"

    def __init__(self, width: int, height: int, identifier: int, config: dict = None):
        super().__init__(width, height, identifier, config)
        self.scale_factor = self.config.get('scale_factor', 0.4)
        self.height_factor = self.config.get('height_factor', 16)

    def base_size(self, width: int, height: int) -> int:
        """
        Estimate the encoded size of one JPEG2000 level.

        The double logarithm is only positive for w * h + height_factor > e.
        With the default offset of 16 that holds for every non-negative
        size; with a smaller configured offset a non-positive divisor gives 0.
        """
        pixels = width * height
        inner = pixels + self.height_factor
        if inner <= 1:
            return 0

        divisor = math.log(math.log(inner))
        if divisor <= 0:
            return 0

        return round_half_up((pixels * self.scale_factor) / divisor)
