"""
Image Format Protocol for storacalc

Defines the contract that every image format size model implements, and the
shared scaffolding (dimensions, identifier, grouped flag) the concrete formats
build on.
"""

from abc import ABC, abstractmethod
from typing import Protocol

from .pyramid import MIN_SIZE, pyramid_cost


class ImageFormat(Protocol):
    """
    Protocol for image format size models.

    Formats are responsible for:
    - Estimating the encoded size of a single resolution level
    - Estimating the total stored size of an image (pyramid included where the format keeps one)
    - Carrying the registry bookkeeping (identifier, grouped flag)
    """

    identifier: int
    grouped: bool

    def base_size(self, width: int, height: int) -> int:
        """
        Encoded size of one resolution level in bytes.

        Args:
            width: Level width in pixels
            height: Level height in pixels

        Returns:
            Estimated encoded bytes, without pyramid overhead
        """
        ...

    def get_size(self) -> int:
        """
        Total stored size of the image in bytes.

        Returns:
            base_size(width, height) plus any pyramid overhead
        """
        ...

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    @property
    def name(self) -> str:
        """
        Format identifier for logging and debugging.

        Returns:
            Unique name of this format (e.g., 'baseline', 'jp2', 'bmp')
        """
        ...


class ImageAsset(ABC):
    """
    Common state of every image format.

    Attributes:
        identifier: Unique sequential id handed out by the image manager
        grouped: True once the image has been consumed by a group compression
    """

    name = "image"
    label = "Image"

    def __init__(self, width: int, height: int, identifier: int, config: dict = None):
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")

        self._width = int(width)
        self._height = int(height)
        self.identifier = identifier
        self.grouped = False
        self.config = config or {}

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @abstractmethod
    def base_size(self, width: int, height: int) -> int:
        """Encoded bytes of one width x height level."""

    def get_size(self) -> int:
        """Single-level size; formats without a pyramid use this as is."""
        return self.base_size(self._width, self._height)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.identifier}, "
            f"{self._width}x{self._height}, grouped={self.grouped})"
        )


class PyramidImageAsset(ImageAsset):
    """
    Image stored together with a resolution pyramid.

    Every half-resolution copy above min_size is encoded with the same
    format, so its cost is this format's own base_size() at that level.
    """

    def __init__(self, width: int, height: int, identifier: int, config: dict = None, min_size: int = MIN_SIZE):
        super().__init__(width, height, identifier, config)
        self.min_size = min_size
        self.pyramid_total = 0

    def get_size(self) -> int:
        self.pyramid_total = 0
        self.pyramid_total += pyramid_cost(self.base_size, self._width, self._height, self.min_size)
        return self.base_size(self._width, self._height) + self.pyramid_total
