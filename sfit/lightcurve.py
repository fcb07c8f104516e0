"""Light curve description used by the fitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np


def _float_array(value) -> np.ndarray:
    return np.ascontiguousarray(np.asarray(value, dtype=float)).reshape(-1)


def _index_array(value, name: str, ndp: int) -> np.ndarray:
    arr = np.ascontiguousarray(np.asarray(value).astype(np.intc)).reshape(-1)
    if arr.size != ndp:
        raise IndexError(f"array '{name}' is not same length as 't'")
    if arr.size and arr.min() < 0:
        raise ValueError(f"array '{name}' contains negative indices")
    return arr


@dataclass(frozen=True)
class LightCurve:
    """One light curve: times, data, weights and model layout.

    ``ep`` has shape ``(nep, ndp)``; ``idc`` selects a DC offset for each
    point and ``iamp`` selects a sin/cos amplitude pair for each point.
    """

    t: np.ndarray
    y: np.ndarray
    wt: np.ndarray
    ep: np.ndarray
    idc: np.ndarray | None
    iamp: np.ndarray | None
    ndc: int
    namp: int

    @classmethod
    def from_tuple(cls, item) -> "LightCurve":
        """Build from ``(t, y, wt[, ep[, idc[, iamp]]])``."""
        item = tuple(item)
        if not 3 <= len(item) <= 6:
            raise TypeError(
                f"light curve needs 3 to 6 items (t, y, wt, ep, idc, iamp), got {len(item)}"
            )
        targ, yarg, wtarg, *rest = item
        rest += [None] * (3 - len(rest))
        eparg, idcarg, iamparg = rest

        t = _float_array(targ)
        y = _float_array(yarg)
        wt = _float_array(wtarg)
        ndp = t.size

        if y.size != ndp:
            raise IndexError("array 'y' is not same length as 't'")
        if wt.size != ndp:
            raise IndexError("array 'wt' is not same length as 't'")

        ep = np.zeros((0, ndp), dtype=float)
        if eparg is not None:
            raw = np.ascontiguousarray(np.asarray(eparg, dtype=float))
            if raw.ndim > 0:
                if raw.ndim > 1:
                    nep, tdp = raw.shape[0], raw.shape[1]
                else:
                    nep, tdp = 1, raw.shape[0]
                if tdp != ndp:
                    raise IndexError("array 'ep' is not same length as 't'")
                ep = raw.reshape(-1)[: nep * ndp].reshape(nep, ndp)

        if idcarg is not None:
            idc = _index_array(idcarg, "idc", ndp)
            ndc = int(idc.max(initial=0)) + 1
        else:
            idc = None
            ndc = 0

        if iamparg is not None:
            iamp = _index_array(iamparg, "iamp", ndp)
            namp = int(iamp.max(initial=0)) + 1
        else:
            iamp = None
            namp = 1

        return cls(t=t, y=y, wt=wt, ep=ep, idc=idc, iamp=iamp, ndc=ndc, namp=namp)

    @property
    def ndp(self) -> int:
        return self.t.size

    @property
    def nep(self) -> int:
        return self.ep.shape[0]

    @property
    def ncoeff(self) -> int:
        """Number of coefficients excluding the sin/cos terms."""
        return self.ndc + self.nep

    @property
    def ncoeff_alt(self) -> int:
        """Number of coefficients including the sin/cos terms."""
        return self.ncoeff + 2 * self.namp

    @property
    def off_dc(self) -> int:
        return 0

    @property
    def off_ep(self) -> int:
        return self.ndc

    @property
    def off_amp(self) -> int:
        return self.ndc + self.nep


def parse_light_curves(items: Iterable) -> list[LightCurve]:
    """Turn a sequence of tuples (or light curves) into light curves."""
    return [
        item if isinstance(item, LightCurve) else LightCurve.from_tuple(item)
        for item in items
    ]