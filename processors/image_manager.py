"""
Image registry and group compression for storacalc.

Every image created during a run is kept here in creation order. A group
request names image identifiers; the not-yet-grouped images among them are
summed and the sum is discounted as if the images were stored together:

    compressed = round(total / ln(matched + compression_factor))

Each image can be consumed by at most one group. Identifiers that are unknown
or already grouped are ignored, so a repeated group request contributes 0.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from formats import create_image, resolve_format
from formats.base import ImageFormat
from formats.pyramid import MIN_SIZE
from utilities import Print, round_half_up

COMPRESSION_FACTOR = 3


class IdentifierAllocator:
    """Hands out unique, increasing image identifiers starting at `start`."""

    def __init__(self, start: int = 1):
        self._next = start
        self.last = start - 1

    def next(self) -> int:
        identifier = self._next
        self._next += 1
        self.last = identifier
        return identifier


@dataclass
class GroupSummary:
    """Outcome of one compress_group() call."""
    requested: List[int]
    matched: List[int] = field(default_factory=list)
    pre_compression_total: int = 0
    compressed_total: int = 0

    @property
    def delta(self) -> int:
        return self.compressed_total - self.pre_compression_total


class ImageManager:
    """
    Owns all images of a run and compresses groups of them.

    Attributes:
        images: Registered images in insertion order
        pending_ids: Identifiers requested for the next compress_group() call
        compression_factor: Offset inside the compression logarithm (default: 3)
        last_group: Summary of the most recent group compression, if any
    """

    def __init__(self, config: Optional[dict] = None, allocator: Optional[IdentifierAllocator] = None):
        """
        Initialize the manager.

        Args:
            config: Configuration dictionary with optional keys:
                - formats: Dict[str, dict] - per-format settings keyed by canonical name
                - pyramid: {'min_size': int} - smallest pyramid level edge (default: 128)
                - grouping: {'compression_factor': int} (default: 3)
            allocator: Identifier source (default: a fresh allocator starting at 1)
        """
        config = config or {}
        self.format_configs = config.get('formats', {})
        self.min_size = config.get('pyramid', {}).get('min_size', MIN_SIZE)
        self.compression_factor = config.get('grouping', {}).get('compression_factor', COMPRESSION_FACTOR)
        self.allocator = allocator or IdentifierAllocator()

        # ln(0 + factor) must stay positive for an empty group
        if self.compression_factor <= 1:
            raise ValueError(f"compression_factor must be greater than 1, got {self.compression_factor}")

        self.images: List[ImageFormat] = []
        self.pending_ids: List[int] = []
        self.last_group: Optional[GroupSummary] = None

    def __len__(self) -> int:
        return len(self.images)

    def create_image(self, tag: str, width: int, height: int) -> ImageFormat:
        """
        Build an image of the given format, assign it the next identifier and register it.

        Raises:
            ValueError: If the format tag is unknown or a dimension is negative
        """
        name = resolve_format(tag)
        format_config = dict(self.format_configs.get(name, {}))
        format_config.setdefault('min_size', self.min_size)

        image = create_image(name, width, height, self.allocator.next(), format_config)
        self.register(image)
        return image

    def register(self, image: ImageFormat) -> None:
        if image is None:
            raise ValueError("Cannot register None as an image")
        self.images.append(image)

    def find(self, identifier: int) -> Optional[ImageFormat]:
        for image in self.images:
            if image.identifier == identifier:
                return image
        return None

    def ungrouped(self) -> List[ImageFormat]:
        return [image for image in self.images if not image.grouped]

    def request_group(self, ids: Iterable[int]) -> None:
        """Set the identifiers for the next compress_group() call (duplicates and unknown ids allowed)."""
        self.pending_ids = list(ids)

    def compress_group(self) -> int:
        """
        Compress the pending group.

        Returns:
            compressed total minus pre-compression total (<= 0); 0 when nothing matched
        """
        summary = GroupSummary(requested=list(self.pending_ids))

        for identifier in self.pending_ids:
            for image in self.images:
                if image.identifier == identifier and not image.grouped:
                    size = image.get_size()
                    Print("DEBUG", f"[{identifier}] size: {size:,}")
                    summary.pre_compression_total += size
                    summary.matched.append(identifier)
                    image.grouped = True

        summary.compressed_total = round_half_up(
            summary.pre_compression_total / math.log(len(summary.matched) + self.compression_factor)
        )

        Print("DEBUG",
            f"Group of {len(summary.matched)}/{len(summary.requested)} image(s): "
            f"{summary.pre_compression_total:,} -> {summary.compressed_total:,} bytes"
        )

        self.pending_ids.clear()
        self.last_group = summary
        return summary.delta
