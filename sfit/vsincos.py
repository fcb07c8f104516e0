"""Vectorised sine and cosine of ``2*pi*v*t`` with range reduction."""

from __future__ import annotations

import numpy as np


def vsincos(v, t) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(sin, cos)`` of ``2*pi*v*t`` for each element of ``t``.

    The phase ``v*t`` is first reduced to the nearest-integer remainder
    so that precision is kept for large arguments.
    """
    phi = float(v) * np.asarray(t, dtype=float)
    phi = phi - np.rint(phi)
    angle = 2.0 * np.pi * phi
    return np.sin(angle), np.cos(angle)