from typing import Any, Optional


class ColorCodes:
    DEFAULT = "\x1b[0m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    CYAN = "\x1b[36m"
    DARK_GREY = "\x1b[90m"

    # text styles
    BOLD = "\033[1m"


def color(string: Any, color_code: Optional[str] = ColorCodes.GREEN, bold: bool = False) -> str:
    """Add ANSI color code to string

    :param string: Original string to color
    :param color_code: ANSI color code
    :param bold: Bold string
    """
    if not isinstance(string, str):
        string = str(string)

    colored_str = string
    if bold:
        colored_str = ColorCodes.BOLD + colored_str
    if color_code:
        colored_str = color_code + colored_str
    if bold or color_code:
        colored_str += ColorCodes.DEFAULT
    return colored_str
