"""Terminal Output Formatting Package"""

import os
import sys

from clean_vibe import COMMIT_CATEGORIES


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except (AttributeError, OSError):
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
ARROW = '→' if UNICODE_ENABLED else '->'
BULLET = '•' if UNICODE_ENABLED else '*'
RULE = '─' if UNICODE_ENABLED else '-'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return _colorize(text, Colors.GREEN)


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def label(text: str) -> str:
    return _colorize(text, Colors.BLUE)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def heading(text: str) -> str:
    return _colorize(text, Colors.BOLD, Colors.CYAN)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning('⚠')} {warning(message)}" if UNICODE_ENABLED else f"[!] {message}")


def print_field(name: str, value: str) -> None:
    """Print a `Name: value` line of a status report."""
    print(f"{label(name + ':')} {value}")


def print_rule(width: int = 50) -> None:
    print(dim(RULE * width))


BUMP_TYPE_COLORS = {
    'major': Colors.RED,
    'minor': Colors.BLUE,
    'patch': Colors.GREEN,
}


def colorize_bump_type(bump_type: str, text: str | None = None) -> str:
    """Color `text` (default: the bump type itself) by release type."""
    text = bump_type if text is None else text
    color = BUMP_TYPE_COLORS.get(bump_type)
    return _colorize(text, color) if color else text


CATEGORY_COLORS = {
    'breaking': Colors.RED,
    'feature': Colors.GREEN,
    'fix': Colors.YELLOW,
    'security': Colors.MAGENTA,
    'performance': Colors.CYAN,
}


def colorize_category(category: str, text: str) -> str:
    """Color `text` by commit category. Categories without a color are dimmed."""
    if category not in COMMIT_CATEGORIES:
        raise KeyError(category)
    color = CATEGORY_COLORS.get(category, Colors.DIM)
    return _colorize(text, Colors.BOLD, color)


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "ARROW", "BULLET", "RULE",
    "success", "error", "warning", "info", "label", "dim", "bold", "heading",
    "print_success", "print_error", "print_warning", "print_field", "print_rule",
    "colorize_bump_type", "BUMP_TYPE_COLORS",
    "colorize_category", "CATEGORY_COLORS",
]
