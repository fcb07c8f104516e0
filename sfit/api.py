"""Entry points for periodogram search and single-frequency fits.

Each light curve is given as a tuple ``(t, y, wt[, ep[, idc[, iamp]]])``
or as a :class:`~sfit.lightcurve.LightCurve`:

* ``t``, ``y`` and ``wt`` are the time, data and weight vectors;
* ``ep`` holds one or more vectors of external parameters;
* ``idc`` and ``iamp`` are integer indices for fitting separate DC
  offsets or amplitudes.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .fit import fit_null, fit_single, search_periods
from .lightcurve import parse_light_curves


def search(
    lightcurves: Iterable,
    pl: int,
    ph: int,
    vsamp: float,
    nthr: int = -1,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute the periodogram.

    Frequencies ``p * vsamp`` are evaluated for ``p`` from ``pl`` to
    ``ph`` inclusive.  ``nthr`` is the number of worker threads, with
    -1 meaning one per processor.  Returns ``(chisq, winfunc)``, one
    value of each per frequency.
    """
    lcs = parse_light_curves(lightcurves)
    return search_periods(lcs, int(pl), int(ph), float(vsamp), int(nthr))


def null(lightcurves: Iterable) -> tuple[float, np.ndarray, np.ndarray]:
    """Fit the null-hypothesis model.

    Returns ``(chisq, b, bcov)`` where ``b`` holds one row of
    coefficients per light curve and ``bcov`` one covariance block per
    light curve, zero-padded to a common size.
    """
    result = fit_null(parse_light_curves(lightcurves))
    return result.chisq, result.b, result.bcov


def single(lightcurves: Iterable, v: float) -> tuple[float, np.ndarray, np.ndarray]:
    """Fit the sinusoidal model at frequency ``v``.

    Returns ``(chisq, b, bcov)`` laid out as for :func:`null`; the
    sin and cos amplitudes follow the DC offsets and external parameters.
    """
    result = fit_single(parse_light_curves(lightcurves), float(v))
    return result.chisq, result.b, result.bcov