"""Five-stop heat color scale: blue → green → yellow → orange → red."""

import math

RGB = tuple[int, int, int]

HEATMAP_STOPS: tuple[RGB, ...] = (
    (59, 130, 246),  # blue-500 (low)
    (34, 197, 94),  # green-500
    (234, 179, 8),  # yellow-500
    (249, 115, 22),  # orange-500
    (239, 68, 68),  # red-500 (high)
)


def intensity(value: float, maximum: float) -> float:
    """Normalize *value* against *maximum* into [0, 1]; 0 when maximum <= 0."""
    if maximum <= 0:
        return 0.0
    return min(max(value / maximum, 0.0), 1.0)


def heatmap_rgb(t: float) -> RGB:
    """Interpolate the stop color for intensity *t* (clamped to [0, 1])."""
    if math.isnan(t):
        t = 0.0
    t = min(max(t, 0.0), 1.0)
    segments = len(HEATMAP_STOPS) - 1
    segment = min(math.floor(t * segments), segments - 1)
    local_t = t * segments - segment

    low = HEATMAP_STOPS[segment]
    high = HEATMAP_STOPS[segment + 1]
    # Round half up, not to even
    return tuple(  # type: ignore[return-value]
        math.floor(a + (b - a) * local_t + 0.5) for a, b in zip(low, high)
    )


def heatmap_color(t: float) -> str:
    """CSS color string for intensity *t*, e.g. ``"rgb(59, 130, 246)"``."""
    r, g, b = heatmap_rgb(t)
    return f"rgb({r}, {g}, {b})"
