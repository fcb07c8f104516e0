"""Sine-fitting periodogram and least-squares fits for light curves."""

__version__ = "1.0.0"

__all__ = ["api", "fit", "lightcurve", "qr", "vsincos"]