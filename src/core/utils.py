import os


def format_ms(ms: int | None) -> str:
    """Format milliseconds as m:ss, or h:mm:ss past the hour. Unknown/negative -> 0:00."""
    ms = max(0, int(ms or 0))
    s = ms // 1000
    h, s = divmod(s, 3600)
    m, s = divmod(s, 60)
    if h:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def clamp(value: int, low: int, high: int) -> int:
    if high < low:
        high = low
    return max(low, min(high, value))


def display_name(locator: str) -> str:
    # basename on both separators; pickers on some platforms hand back "/" paths
    name = os.path.basename(locator.replace("\\", "/"))
    return name or locator
