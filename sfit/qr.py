"""QR decomposition with column pivoting and truncated least-squares solves.

Intended for the small, dense normal-equation systems built by the fitter.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

DEFAULT_RCOND = 2.0 * float(np.finfo(float).eps)
"""Default conditioning ratio applied to the singular values."""

_DBL_MIN = float(np.finfo(float).tiny)


def _resolve_rcond(rcond: float | None) -> float:
    if rcond is None or rcond < 0:
        return DEFAULT_RCOND
    return float(rcond)


@dataclass
class QRDecomposition:
    """Householder QR factors of a square matrix.

    ``a`` holds R in its upper triangle and the Householder vectors
    (scaled so their first element is one) below the diagonal.  ``s``
    holds the squared row norms of R, used as singular value estimates,
    ``beta`` the Householder scale factors and ``perm`` the column
    pivot chosen at each step.
    """

    a: np.ndarray
    s: np.ndarray
    beta: np.ndarray
    perm: np.ndarray

    @property
    def n(self) -> int:
        return self.a.shape[0]

    def _threshold(self, rcond: float | None) -> float:
        rcond = _resolve_rcond(rcond)
        thresh = max(0.0, float(self.s.max(initial=0.0)))
        thresh *= rcond
        thresh *= rcond
        return max(thresh, _DBL_MIN)

    def solve(self, b, rcond=None) -> tuple[np.ndarray, int]:
        """Solve ``A x = b``, dropping ill-conditioned rows.

        Returns the solution and the effective rank used.
        """
        n = self.n
        x = np.array(b, dtype=float, copy=True).reshape(-1)
        if x.shape[0] != n:
            raise ValueError(f"right-hand side has length {x.shape[0]}, expected {n}")

        a = self.a
        for c, beta in enumerate(self.beta):
            if beta:
                v = a[c + 1:, c]
                total = beta * (x[c] + v @ x[c + 1:])
                x[c] -= total
                x[c + 1:] -= v * total

        thresh = self._threshold(rcond)

        rank = 0
        for i in reversed(range(n)):
            if self.s[i] > thresh:
                x[i] = (x[i] - a[i, i + 1:] @ x[i + 1:]) / a[i, i]
                rank += 1
            else:
                x[i] = 0.0

        for i in reversed(range(n)):
            p = int(self.perm[i])
            if p != i:
                x[[p, i]] = x[[i, p]]

        return x, rank

    def invert(self, rcond=None) -> tuple[np.ndarray, int]:
        """Compute the truncated pseudo-inverse of the factored matrix.

        Returns the inverse and the effective rank used.
        """
        n = self.n
        a = self.a
        ainv = np.zeros((n, n), dtype=float)

        # Form Q^T by backward accumulation of the Householder reflections.
        for c in reversed(range(n)):
            beta = self.beta[c]
            if beta:
                v = a[c + 1:, c]
                ainv[c, c] = 1.0 - beta
                ainv[c, c + 1:] = -v * beta
                sums = beta * (ainv[c + 1:, c + 1:] @ v)
                ainv[c + 1:, c] = -sums
                ainv[c + 1:, c + 1:] -= np.outer(sums, v)
            else:
                ainv[c, c] = 1.0
                ainv[c, c + 1:] = 0.0
                ainv[c + 1:, c] = 0.0

        thresh = self._threshold(rcond)

        rank = 0
        for i in reversed(range(n)):
            if self.s[i] > thresh:
                scale = 1.0 / a[i, i]
                ainv[i, :] = (ainv[i, :] - a[i, i + 1:] @ ainv[i + 1:, :]) * scale
                rank += 1
            else:
                ainv[i, :] = 0.0

        for i in reversed(range(n)):
            p = int(self.perm[i])
            if p != i:
                ainv[[p, i], :] = ainv[[i, p], :]

        return ainv, rank


def qr(a) -> QRDecomposition:
    """Factor a square matrix with Householder reflections and column pivoting."""
    work = np.array(a, dtype=float, copy=True)
    if work.ndim != 2 or work.shape[0] != work.shape[1]:
        raise ValueError("matrix must be square")

    n = work.shape[0]
    s = np.sum(work * work, axis=0)
    betas = np.zeros(n, dtype=float)
    perm = np.zeros(n, dtype=int)

    for c in range(n):
        cpiv = c + int(np.argmax(s[c:]))
        perm[c] = cpiv

        if cpiv != c:
            work[:, [c, cpiv]] = work[:, [cpiv, c]]
            s[[c, cpiv]] = s[[cpiv, c]]

        # Householder transformation A -> A - beta v v^T A
        # (Golub & van Loan, "Matrix Computations", 5.4.1).
        x = work[c, c]
        below = work[c + 1:, c]
        sigma = float(below @ below)

        if sigma > 0:
            mu = np.sqrt(x * x + sigma)
            u = -sigma / (x + mu) if x > 0 else x - mu

            usq = u * u
            beta = 2.0 * usq / (usq + sigma)

            inv_u = 1.0 / u
            work[c + 1:, c] *= inv_u
            work[c, c] -= beta * inv_u * (u * x + sigma)

            v = work[c + 1:, c]
            sums = beta * (work[c, c + 1:] + v @ work[c + 1:, c + 1:])
            work[c, c + 1:] -= sums
            work[c + 1:, c + 1:] -= np.outer(v, sums)

            s[c + 1:] -= work[c, c + 1:] ** 2
            betas[c] = beta
        else:
            betas[c] = 0.0

        row = work[c, c:]
        s[c] = float(row @ row)

    return QRDecomposition(a=work, s=s, beta=betas, perm=perm)