"""Least-squares sinusoid fitting of light curves and periodogram search."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .lightcurve import LightCurve, parse_light_curves
from .qr import qr
from .vsincos import vsincos


@dataclass
class FitResult:
    """Outcome of a fit over a set of light curves.

    ``b`` has one row of coefficients per light curve and ``bcov`` one
    square covariance block per light curve, both padded with zeros to
    the largest coefficient count among the light curves.
    """

    chisq: float
    winfunc: float | None = None
    b: np.ndarray | None = None
    bcov: np.ndarray | None = None


def num_cpus() -> int:
    """Number of online processors, or -1 if it cannot be determined."""
    count = os.cpu_count()
    return count if count is not None else -1


def _ncoeff_max(lightcurves: list[LightCurve]) -> int:
    return max((lc.ncoeff_alt for lc in lightcurves), default=0)


def _design_matrix(lc: LightCurve, ncoeff: int, sinarg, cosarg) -> np.ndarray:
    rows = np.arange(lc.ndp)
    x = np.zeros((lc.ndp, ncoeff), dtype=float)

    if lc.ndc > 0:
        x[rows, lc.off_dc + lc.idc] = 1.0

    if lc.nep > 0:
        x[:, lc.off_ep:lc.off_ep + lc.nep] = lc.ep.T

    if sinarg is not None:
        if lc.namp > 1:
            pamp = lc.off_amp + 2 * lc.iamp.astype(int)
        else:
            pamp = np.full(lc.ndp, lc.off_amp, dtype=int)
        x[rows, pamp] = sinarg
        x[rows, pamp + 1] = cosarg

    return x


def compute(
    lightcurves: Iterable,
    v: float = 0.0,
    alternative: bool = True,
    want_coefficients: bool = False,
    want_covariance: bool = False,
) -> FitResult:
    """Fit every light curve at frequency ``v`` and total the chi-squared.

    With ``alternative`` false only the null-hypothesis model (DC offsets
    and external parameters) is fitted and no window function is given.
    """
    lcs = parse_light_curves(lightcurves)
    nlc = len(lcs)
    stride = _ncoeff_max(lcs)

    b_out = np.zeros((nlc, stride), dtype=float) if want_coefficients else None
    cov_out = np.zeros((nlc, stride, stride), dtype=float) if want_covariance else None

    chisq = 0.0
    a0 = a1 = a2 = 0.0

    for ilc, lc in enumerate(lcs):
        if alternative:
            sinarg, cosarg = vsincos(v, lc.t)
            ncoeff = lc.ncoeff_alt
            a0 += float(np.sum(lc.wt))
            a1 += float(sinarg @ lc.wt)
            a2 += float(cosarg @ lc.wt)
        else:
            sinarg = cosarg = None
            ncoeff = lc.ncoeff

        x = _design_matrix(lc, ncoeff, sinarg, cosarg)
        normal = x.T @ (x * lc.wt[:, None])
        coeffs = x.T @ (lc.y * lc.wt)

        if ncoeff > 0:
            decomposition = qr(normal)
            coeffs, _ = decomposition.solve(coeffs)
            if cov_out is not None:
                cov, _ = decomposition.invert()
                cov_out[ilc, :ncoeff, :ncoeff] = cov

        if b_out is not None:
            b_out[ilc, :ncoeff] = coeffs

        resid = lc.y - x @ coeffs
        chisq += float(np.sum(resid * resid * lc.wt))

    winfunc = None
    if alternative:
        with np.errstate(divide="ignore", invalid="ignore"):
            winfunc = float(np.float64(np.hypot(a1, a2)) / np.float64(a0))

    return FitResult(chisq=chisq, winfunc=winfunc, b=b_out, bcov=cov_out)


def search_periods(
    lightcurves: Iterable,
    pl: int,
    ph: int,
    vsamp: float,
    nthr: int = -1,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute chi-squared and window function for frequencies ``p*vsamp``.

    ``p`` runs from ``pl`` to ``ph`` inclusive.  ``nthr`` below zero uses
    one worker per processor; one or fewer runs in the calling thread.
    """
    count = ph - pl + 1
    if count < 0:
        raise ValueError(f"invalid frequency range: pl={pl}, ph={ph}")

    lcs = parse_light_curves(lightcurves)

    if nthr < 0:
        nthr = num_cpus()
    if nthr < 0:
        nthr = 1

    def work(p: int) -> FitResult:
        return compute(lcs, p * vsamp, alternative=True)

    periods = range(pl, ph + 1)
    if nthr > 1:
        with ThreadPoolExecutor(max_workers=nthr) as pool:
            results = list(pool.map(work, periods))
    else:
        results = [work(p) for p in periods]

    chisq = np.array([r.chisq for r in results], dtype=float)
    winfunc = np.array([r.winfunc for r in results], dtype=float)
    return chisq, winfunc


def fit_null(lightcurves: Iterable) -> FitResult:
    """Fit the null-hypothesis model, returning coefficients and covariance."""
    return compute(
        lightcurves,
        0.0,
        alternative=False,
        want_coefficients=True,
        want_covariance=True,
    )


def fit_single(lightcurves: Iterable, v: float) -> FitResult:
    """Fit the sinusoidal model at frequency ``v``."""
    return compute(
        lightcurves,
        v,
        alternative=True,
        want_coefficients=True,
        want_covariance=True,
    )