import numpy as np
import pytest

from sfit.api import null, search, single

FREQ = 0.5


def _times():
    return np.linspace(0.0, 10.0, 57)


def _sinusoid_lc():
    t = _times()
    y = 3.0 + 2.0 * np.sin(2.0 * np.pi * FREQ * t)
    wt = np.ones_like(t)
    idc = np.zeros(t.size, dtype=int)
    return (t, y, wt, None, idc)


def test_single_recovers_sinusoid():
    chisq, b, bcov = single([_sinusoid_lc()], FREQ)
    assert chisq == pytest.approx(0.0, abs=1e-18)
    assert b.shape == (1, 3)
    assert bcov.shape == (1, 3, 3)
    np.testing.assert_allclose(b[0], [3.0, 2.0, 0.0], atol=1e-10)


def test_single_covariance_is_symmetric():
    _, _, bcov = single([_sinusoid_lc()], FREQ)
    np.testing.assert_allclose(bcov[0], bcov[0].T, atol=1e-12)
    assert np.all(np.diag(bcov[0]) > 0)


def test_null_constant_fit_is_weighted_mean():
    t, y, wt, _, idc = _sinusoid_lc()
    wt = np.linspace(1.0, 2.0, t.size)
    chisq, b, bcov = null([(t, y, wt, None, idc)])
    mean = np.sum(y * wt) / np.sum(wt)
    assert b.shape == (1, 3)
    assert b[0, 0] == pytest.approx(mean)
    np.testing.assert_array_equal(b[0, 1:], [0.0, 0.0])
    assert chisq == pytest.approx(np.sum((y - mean) ** 2 * wt))
    assert bcov[0, 0, 0] == pytest.approx(1.0 / np.sum(wt))
    np.testing.assert_array_equal(bcov[0, 1:, :], 0.0)


def test_null_without_coefficients_keeps_data():
    t = _times()
    y = np.cos(t)
    wt = np.ones_like(t)
    chisq, b, bcov = null([(t, y, wt)])
    assert b.shape == (1, 2)
    np.testing.assert_array_equal(b, 0.0)
    np.testing.assert_array_equal(bcov, 0.0)
    assert chisq == pytest.approx(np.sum(y * y))


def test_outputs_padded_to_largest_light_curve():
    t = _times()
    y = np.sin(t)
    wt = np.ones_like(t)
    idc = (t > 5.0).astype(int)
    _, b, bcov = single([(t, y, wt, None, idc), (t, y, wt)], FREQ)
    assert b.shape == (2, 4)
    assert bcov.shape == (2, 4, 4)
    np.testing.assert_array_equal(b[1, 2:], 0.0)
    np.testing.assert_array_equal(bcov[1, 2:, :], 0.0)
    np.testing.assert_array_equal(bcov[1, :, 2:], 0.0)


def test_search_shape_and_match_with_single():
    lcs = [_sinusoid_lc()]
    vsamp = 0.05
    chisq, winfunc = search(lcs, 0, 20, vsamp, nthr=1)
    assert chisq.shape == (21,)
    assert winfunc.shape == (21,)
    for p in (0, 7, 10):
        expected, _, _ = single(lcs, p * vsamp)
        assert chisq[p] == pytest.approx(expected, rel=1e-9, abs=1e-12)
    assert int(np.argmin(chisq)) == 10


def test_search_window_function_at_zero_frequency():
    _, winfunc = search([_sinusoid_lc()], 0, 0, 0.1, nthr=1)
    assert winfunc[0] == pytest.approx(1.0)


def test_search_threaded_matches_serial():
    lcs = [_sinusoid_lc()]
    serial = search(lcs, 3, 30, 0.02, nthr=1)
    threaded = search(lcs, 3, 30, 0.02, nthr=4)
    np.testing.assert_allclose(threaded[0], serial[0])
    np.testing.assert_allclose(threaded[1], serial[1])


def test_search_empty_range():
    chisq, winfunc = search([_sinusoid_lc()], 5, 4, 0.1, nthr=1)
    assert chisq.size == 0
    assert winfunc.size == 0


def test_search_invalid_range():
    with pytest.raises(ValueError):
        search([_sinusoid_lc()], 5, 2, 0.1)


def test_mismatched_lengths_raise():
    t = _times()
    with pytest.raises(IndexError, match="'y'"):
        single([(t, t[:-1], np.ones_like(t))], FREQ)
    with pytest.raises(IndexError, match="'wt'"):
        null([(t, t, np.ones(3))])