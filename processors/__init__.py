"""
Processors for storacalc

Image bookkeeping, group compression and input line parsing.
"""

from .image_manager import GroupSummary, IdentifierAllocator, ImageManager
from .input_parser import parse_line

__all__ = ['GroupSummary', 'IdentifierAllocator', 'ImageManager', 'parse_line']
