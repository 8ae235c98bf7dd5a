"""
Resolution pyramid cost for storacalc.

A pyramid is the chain of half-resolution copies kept next to an image for
fast multi-scale access. Levels are added while both halved dimensions stay
strictly above the minimum size. Halving truncates, so an odd edge of 257
gives a 128 pixel level.
"""

from typing import Callable, Iterator, Tuple

from utilities import Print

MIN_SIZE = 128


def halve(n: int) -> int:
    return n // 2


def pyramid_levels(width: int, height: int, min_size: int = MIN_SIZE) -> Iterator[Tuple[int, int]]:
    """Yield (width, height) of each pyramid level, largest first."""
    w, h = halve(width), halve(height)
    while w > min_size and h > min_size:
        yield w, h
        w, h = halve(w), halve(h)


def pyramid_cost(
    base_size: Callable[[int, int], int],
    width: int,
    height: int,
    min_size: int = MIN_SIZE
) -> int:
    """
    Extra bytes used by the pyramid of a width x height image.

    Args:
        base_size: Per-level size formula of the image's format
        width: Full resolution width
        height: Full resolution height
        min_size: Levels must be strictly larger than this in both dimensions

    Returns:
        Sum of base_size() over every pyramid level (0 when the first halving
        already falls to min_size or below)
    """
    total = 0
    last_level = None
    count = 0

    for level in pyramid_levels(width, height, min_size):
        total += base_size(*level)
        last_level = level
        count += 1

    if count:
        Print("DEBUG", f"{width}x{height}: {count} pyramid level(s) down to "
                       f"{last_level[0]}x{last_level[1]}, +{total:,} bytes")
    return total
