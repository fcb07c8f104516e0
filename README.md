# sfit

Least-squares sine-fitting periodogram for one or more light curves.

At each trial frequency ν, sfit fits this model by weighted linear least squares:

    y = DC[idc] + sum_k c_k * ep_k + A[iamp] * sin(2πνt) + B[iamp] * cos(2πνt)

Each light curve is fitted on its own. The chi-squared values are then summed over all light curves to give the periodogram.

The model can include:

- separate DC offsets for segments of a light curve (`idc` indices);
- any number of external parameters (`ep`, decorrelation vectors);
- separate sine amplitudes for segments of a light curve (`iamp` indices).

The normal equations are solved by a QR decomposition with column pivoting and Householder transformations. Directions whose squared singular value estimate falls below a threshold are dropped. The threshold is the largest estimate multiplied by `rcond` squared.

## Installation

    pip install .

The only runtime dependency is numpy.

## Light curves

Give each light curve as a tuple `(t, y, wt[, ep[, idc[, iamp]]])` or as a `sfit.lightcurve.LightCurve`. The tuple items are:

- `t`, `y`, `wt`: the time, data and weight arrays (weights are usually 1/σ²). All three must have the same length.
- `ep`: optional external parameters. This is either one vector, or a 2-D array of shape `(nep, len(t))`.
- `idc`: optional integer DC-segment index for each point. The number of DC offsets is `max(idc) + 1`. If `idc` is not given, no DC offset is fitted.
- `iamp`: optional integer amplitude-segment index for each point. The number of sin/cos pairs is `max(iamp) + 1`. If `iamp` is not given, one pair is fitted.

Any optional item can be `None`.

The following inputs raise errors:

| Input | Error |
|---|---|
| An array whose length differs from `t` | `IndexError` |
| A negative index in `idc` or `iamp` | `ValueError` |
| A tuple with fewer than 3 or more than 6 items | `TypeError` |

## Usage

```python
import numpy as np
from sfit.api import search, null, single

t = np.linspace(0.0, 10.0, 500)
y = 0.3 * np.sin(2 * np.pi * 1.7 * t) + 5.0
wt = np.ones_like(t)
idc = np.zeros(t.size, dtype=int)

lcs = [(t, y, wt, None, idc)]

# Periodogram over frequency indices 1..400 with step 0.01 (frequencies 0.01 .. 4.0)
chisq, winfunc = search(lcs, 1, 400, 0.01)
best_frequency = (1 + np.argmin(chisq)) * 0.01

# Null hypothesis fit: no sinusoid
chisq0, b0, bcov0 = null(lcs)

# Fit at one frequency
chisq1, b1, bcov1 = single(lcs, best_frequency)
```

### `search(lightcurves, pl, ph, vsamp, nthr=-1)`

Returns two arrays, each of length `ph - pl + 1`, with one entry for each `p` from `pl` to `ph`:

- chi-squared at frequency `p * vsamp`;
- the window function at the same frequency.

The window function is `sqrt(Σ wt·sin² + …)`. More precisely, it is `hypot(Σ wt·sin, Σ wt·cos) / Σ wt`, summed over all points of all light curves.

`nthr` sets the number of worker threads:

- a negative value uses one thread per available CPU;
- `0` or `1` runs the search in the calling thread.

If `ph < pl - 1`, `search` raises `ValueError`.

### `null(lightcurves)` and `single(lightcurves, v)`

Both return `(chisq, b, bcov)`:

- `b` has shape `(nlc, ncoeffmax)`. It holds each light curve's coefficients in this order: DC offsets, external parameters, then (sin, cos) pairs. The pairs are present only for `single`.
- `bcov` has shape `(nlc, ncoeffmax, ncoeffmax)`. It holds the truncated pseudo-inverse of each light curve's normal matrix.

Both arrays are padded with zeros up to the largest coefficient count among the light curves, counting the sin/cos pairs.

## Lower-level modules

- `sfit.qr`
  - `qr(a)` factors a square matrix and returns a `QRDecomposition`.
  - `QRDecomposition.solve(b, rcond=None)` returns `(x, rank)`.
  - `QRDecomposition.invert(rcond=None)` returns `(pseudo_inverse, rank)`.
  - A missing or negative `rcond` uses `DEFAULT_RCOND`, which is twice the machine epsilon.
  - A non-square matrix raises `ValueError`.
- `sfit.vsincos`
  - `vsincos(v, t)` returns `(sin(2πvt), cos(2πvt))`.
  - The phase `v*t` is reduced to its offset from the nearest integer first.
- `sfit.lightcurve`
  - `LightCurve` provides `LightCurve.from_tuple(item)` and the derived counts `ndp`, `nep`, `ndc`, `namp`, `ncoeff` and `ncoeff_alt`.
  - `parse_light_curves(items)` converts a list of tuples or light curves.
- `sfit.fit`
  - `compute(lightcurves, v, alternative, want_coefficients, want_covariance)` returns a `FitResult` with fields `chisq`, `winfunc`, `b` and `bcov`.
  - The module also provides `search_periods`, `fit_null`, `fit_single` and `num_cpus`.

## What this package does not do

sfit is a library only. It has no command-line program. It does not read or write light-curve files, and it does not plot periodograms. Load the data into arrays yourself and pass them in.

## Tests

    pip install .[test]
    pytest