SEPARATOR = " • "


def display_string(title: str, artist: str) -> str:
    """List label for a track, also accepted as a lookup key from list selections."""
    return f"{title}{SEPARATOR}{artist}"


def format_time(ms: int | float | None) -> str:
    """
    MM:SS, zero padded. Minutes are not wrapped at 60.
    """
    if ms is None:
        return "00:00"
    total_s = max(0, int(ms)) // 1000
    m = total_s // 60
    s = total_s % 60
    return f"{m:02d}:{s:02d}"


def clamp_fraction(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def fraction_from_pointer(offset: float, width: float) -> float | None:
    # click on a progress bar -> position in [0, 1]
    if width <= 0:
        return None
    return clamp_fraction(offset / width)
