#!/usr/bin/env python3
"""
storacalc: storage footprint calculator for image assets.

Estimates how many bytes a set of images occupies once encoded, including
the resolution pyramid stored next to Baseline/JPEG and BMP images, and the
savings from compressing groups of images together.

Architecture:
- Format size models registered through a factory (formats/)
- Image registry with exactly-once group compression (processors/image_manager.py)
- Line parser and interactive loop as a thin shell around both

Usage:
    from storacalc import StorageCalculator

    calculator = StorageCalculator()
    identifier, size = calculator.add_image("jpg", 1000, 1000)
    delta = calculator.group([identifier])
    print(calculator.total)

Or interactively:
    python storacalc.py
    jpg 1000 1000
    bmp 600 600
    g 1 2
    q
"""

import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple

from formats import available_formats
from processors.image_manager import ImageManager
from processors.input_parser import (
    CreateRequest,
    EmptyRequest,
    ExitRequest,
    GroupRequest,
    InvalidRequest,
    parse_line,
)
from utilities import Print, console, format_bytes

HEADER = (
    "Storage calculator\n"
    "Enter one line for each image/group on the format \"[type] [width] [height]\"\n"
    "or \"G i, i, ...\". Exit with \"Q\". Input is not case-sensitive\n"
)


class StorageCalculator:
    """
    Keeps the running storage total of one session.

    Attributes:
        config: Loaded configuration dictionary
        manager: Image registry and group compressor
        total: Running total in bytes (image sizes plus group deltas)
    """

    def __init__(self, config_path: Optional[Path] = None, config: Optional[dict] = None):
        """
        Initialize the calculator.

        Args:
            config_path: Path to config.json. If None, uses the default location.
            config: Configuration dictionary; takes precedence over config_path.

        Raises:
            FileNotFoundError: If the configuration file does not exist
            ValueError: If the configuration is malformed
        """
        self.config = config if config is not None else self._load_config(config_path)
        self._validate_config(self.config)
        self.manager = ImageManager(self.config)
        self.total = 0

    def _load_config(self, config_path: Optional[Path]) -> dict:
        """Load configuration from JSON file."""
        if config_path is None:
            config_path = Path(__file__).parent / "config" / "config.json"

        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}\n"
                f"Create config/config.json or pass --config."
            )

        with open(config_path) as f:
            config = json.load(f)

        Print("DEBUG", f"Loaded configuration v{config.get('version', 'unknown')}")
        return config

    @staticmethod
    def _validate_config(config: dict) -> None:
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a JSON object")

        for section in ('formats', 'pyramid', 'grouping'):
            if not isinstance(config.get(section, {}), dict):
                raise ValueError(f"Configuration section '{section}' must be an object")

        unknown = set(config.get('formats', {})) - set(available_formats())
        if unknown:
            raise ValueError(
                f"Configuration names unknown formats: {', '.join(sorted(unknown))}. "
                f"Available formats: {', '.join(available_formats())}"
            )

        numeric = [
            ("pyramid.min_size", config.get('pyramid', {}).get('min_size')),
            ("grouping.compression_factor", config.get('grouping', {}).get('compression_factor')),
        ]
        for name, settings in config.get('formats', {}).items():
            if not isinstance(settings, dict):
                raise ValueError(f"Configuration section 'formats.{name}' must be an object")
            for key in ('scale_factor', 'height_factor', 'min_size'):
                numeric.append((f"formats.{name}.{key}", settings.get(key)))

        for key, value in numeric:
            # bool is an int subclass but never a meaningful factor
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise ValueError(f"Configuration value '{key}' must be a number, got {value!r}")

    def add_image(self, tag: str, width: int, height: int) -> Tuple[int, int]:
        """
        Create an image and add its size to the total.

        Returns:
            (identifier, size in bytes)

        Raises:
            ValueError: If the format tag is unknown or a dimension is negative
        """
        image = self.manager.create_image(tag, width, height)
        size = image.get_size()
        self.total += size
        return image.identifier, size

    def group(self, ids: Iterable[int]) -> int:
        """
        Compress a group of images and add the (non-positive) delta to the total.

        Returns:
            Size delta in bytes
        """
        self.manager.request_group(ids)
        delta = self.manager.compress_group()
        self.total += delta
        return delta

    def process_line(self, line: str) -> bool:
        """
        Handle one line of shell input.

        Returns:
            False when the line asks to exit, True otherwise
        """
        request = parse_line(line)

        if isinstance(request, ExitRequest):
            return False

        if isinstance(request, EmptyRequest):
            return True

        if isinstance(request, InvalidRequest):
            Print("WARNING", f"Invalid input '{request.line.strip()}': {request.reason}")
            console.print("[invalid input]", markup=False)
            return True

        if isinstance(request, CreateRequest):
            identifier, size = self.add_image(request.format_name, request.width, request.height)
            image = self.manager.find(identifier)
            console.print(f"[{image.label}] size: {size}  index: {identifier}\n", markup=False)
            return True

        if isinstance(request, GroupRequest):
            console.print("[grouping images]", markup=False)
            delta = self.group(request.ids)
            summary = self.manager.last_group
            console.print(
                f"\nprevious size of images: {summary.pre_compression_total}\n"
                f"total compressed size: {summary.compressed_total}\n",
                markup=False
            )
            if not summary.matched:
                Print("INFO", "No ungrouped images matched the requested ids")
            Print("DEBUG", f"Group delta: {delta:,} bytes")
            return True

        return True

    def run(self, stream: TextIO) -> int:
        """
        Read lines from `stream` until 'q' or end of input.

        Returns:
            Final total in bytes
        """
        console.print(HEADER, markup=False)

        for line in stream:
            if not self.process_line(line):
                break

        console.print(f"\nTotal size: {self.total} bytes", markup=False)
        Print("COMPLETED", f"{len(self.manager)} image(s), total {format_bytes(self.total)}")
        return self.total


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description='storacalc: storage footprint calculator for image assets',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python storacalc.py
  python storacalc.py --config my_config.json
  printf 'jpg 1000 1000\\nbmp 600 600\\ng 1 2\\nq\\n' | python storacalc.py
        """
    )

    parser.add_argument('--config', type=Path, default=None, help='Path to config.json')

    args = parser.parse_args(argv)

    try:
        calculator = StorageCalculator(config_path=args.config)
        Print("STARTING", f"storacalc v{calculator.config.get('version', '1.0.0')} "
                          f"(formats: {', '.join(available_formats())})")
        calculator.run(sys.stdin)
        return 0

    except FileNotFoundError as e:
        Print("FAILURE", str(e))
        return 1
    except ValueError as e:
        Print("FAILURE", f"Invalid configuration: {e}")
        return 2
    except KeyboardInterrupt:
        Print("WARNING", "Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
