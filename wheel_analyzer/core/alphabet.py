# Segments of the wheel, in canonical order. Every per-outcome table follows it.
OUTCOMES: tuple[int, ...] = (2, 3, 5, 10)
