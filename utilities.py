import inspect
import math
import time
from datetime import datetime, timezone

from rich.console import Console
from rich import print as _print
from rich.markup import escape

# Shared console for user-facing output (prompts, results, totals)
console = Console(highlight=False, soft_wrap=True)

# logType -> (before symbol, after symbol, rich style)
LOG_TYPES = {
    'SUCCESS': ('^^^', '^^^', 'green'),
    'FAILURE': ('###', '###', 'red bold'),
    'STATE': ('~~~', '~~~', 'cyan'),
    'INFO': ('---', '---', 'blue'),
    'WARNING': ('(((', ')))', 'yellow'),
    'DEBUG': ('[[[', ']]]', 'white'),
    'STARTING': ('>>>', '>>>', 'green'),
    'PROGRESS': ('vvv', 'vvv', 'blue'),
    'COMPLETED': ('<<<', '<<<', 'green'),
    'HEADER': ('===', '===', 'magenta'),
}


def Print(logType: str, message: str) -> None:
    """
    Prints a log message with timestamp, calling function name, symbols wrapping the logType, and the message.
    """
    try:
        timestamp = datetime.fromtimestamp(time.time(), tz=timezone.utc).isoformat(timespec='microseconds') + 'Z'

        logTypeUpper = logType.upper()
        before_symbol, after_symbol, style = LOG_TYPES.get(logTypeUpper, ('', '', ''))

        formattedLogType = f"{before_symbol} {logTypeUpper} {after_symbol}"
        if style:
            formattedLogType = f"[{style}]{formattedLogType}[/{style}]"

        # Name of the function that called Print
        function_name = inspect.stack()[1].function

        output_line = f"{timestamp} {formattedLogType} {function_name.ljust(32)} {escape(message)}"
        _print(output_line)

    except Exception as e:
        print(f"Something went wrong when attempting to print.\nError: {e}")


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    The builtin round() rounds ties to even (round(2.5) == 2).
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def format_bytes(size_bytes: int) -> str:
    """Format a byte count to a human readable string."""
    if abs(size_bytes) < 1024:
        return f"{size_bytes} B"
    elif abs(size_bytes) < 1024 * 1024:
        return f"{size_bytes / 1024:.2f} KB"
    elif abs(size_bytes) < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.2f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"
