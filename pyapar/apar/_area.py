"""Piecewise-linear area between the pU and pL curves.

Only the part of each segment where ``pL < pU`` counts.  When the sign of
``pU − pL`` flips inside a segment, the two bound lines are intersected and
only the valid triangle between the crossing and the valid endpoint is
integrated.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def eq_line(x0: float, y0: float, x1: float, y1: float) -> tuple[float, float]:
    """Slope and intercept of the line through two points."""
    slope = (y1 - y0) / (x1 - x0)
    return slope, y0 - slope * x0


def _intersection(
    m1: float, b1: float, m2: float, b2: float,
) -> float | None:
    """x-coordinate where two lines meet, or ``None`` if they are parallel."""
    if m1 == m2:
        return None
    return (b2 - b1) / (m1 - m2)


def _crossing(
    t0: float, t1: float,
    l0: float, l1: float,
    u0: float, u1: float,
) -> float | None:
    """Threshold where pL and pU meet inside ``[t1, t0]``."""
    if t0 == t1:
        return None
    m_u, b_u = eq_line(t0, u0, t1, u1)
    m_l, b_l = eq_line(t0, l0, t1, l1)
    x = _intersection(m_u, b_u, m_l, b_l)
    if x is None:
        return None
    return float(np.clip(x, min(t0, t1), max(t0, t1)))


def apar_area(
    thresholds: NDArray[np.floating],
    pl: NDArray[np.floating],
    pu: NDArray[np.floating],
) -> tuple[float, float, int]:
    """Integrate ``pU − pL`` over the valid region of a threshold axis.

    Parameters
    ----------
    thresholds : array
        Finite threshold axis, in descending order.
    pl, pu : array
        Sanitised bounds aligned with *thresholds*.

    Returns
    -------
    (area, largest_range, largest_range_index) : tuple
        *area* is rounded to 3 decimals and capped at 1.
    """
    thresholds = np.asarray(thresholds, dtype=np.float64)
    pl = np.asarray(pl, dtype=np.float64)
    pu = np.asarray(pu, dtype=np.float64)

    total = 0.0
    largest_range = 0.0
    largest_index = 0

    for i in range(thresholds.shape[0] - 1):
        t0, t1 = thresholds[i], thresholds[i + 1]
        l0, l1 = pl[i], pl[i + 1]
        u0, u1 = pu[i], pu[i + 1]
        dx = t0 - t1

        valid0 = l0 < u0
        valid1 = l1 < u1

        if valid0 and valid1:
            total += abs(((u0 - l0) + (u1 - l1)) / 2.0) * abs(dx)
            for idx, rng in ((i, u0 - l0), (i + 1, u1 - l1)):
                if rng > largest_range:
                    largest_range = float(rng)
                    largest_index = idx

        elif valid1:
            x = _crossing(t0, t1, l0, l1, u0, u1)
            if x is not None:
                total += abs(x - t1) * abs(u1 - l1) / 2.0

        elif valid0:
            x = _crossing(t0, t1, l0, l1, u0, u1)
            if x is not None:
                total += abs(t0 - x) * abs(u0 - l0) / 2.0

    area = min(round(float(total), 3), 1.0)
    return area, largest_range, largest_index
