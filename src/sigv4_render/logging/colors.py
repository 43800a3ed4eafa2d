"""ANSI color codes for terminal output.

All colors use the 256-color palette.

Usage:
    from sigv4_render.logging.colors import GREEN, RESET

    print(f"{GREEN}Signed{RESET}")
"""

RESET = "\033[0m"

# Status
GREEN = "\033[38;5;82m"  # Success - bright green
RED = "\033[38;5;196m"  # Failure - bright red
YELLOW = "\033[38;5;226m"  # Warnings - bright yellow

# Information
LIGHT_BLUE = "\033[38;5;153m"  # Context/details - light blue
CYAN = "\033[38;5;51m"  # Info - cyan
MAGENTA = "\033[38;5;201m"  # Render component - magenta

__all__ = [
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
