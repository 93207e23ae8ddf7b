'''Spin-j raising, lowering and component matrices'''
from fractions import Fraction

import numpy as np
import pytest
from scipy.sparse import issparse

from liegen.spin import (
    magnetic_numbers,
    spin_dim,
    spin_lowering,
    spin_ops,
    spin_raising,
    spin_x,
    spin_y,
    spin_z,
)

SPINS = [0, 0.5, 1, 1.5, 2, 2.5, 3, 3.5]


@pytest.mark.parametrize("j", SPINS)
def test_raising_coefficients(j):
    sp = spin_raising(j)
    n = int(2 * j + 1)
    assert sp.shape == (n, n)
    for i in range(n - 1):
        m = j - 1 - i
        np.testing.assert_allclose(sp[i, i + 1], np.sqrt((j - m) * (m + j + 1)), atol=1e-10)
    '''Only the superdiagonal is populated'''
    np.testing.assert_array_equal(sp - np.diag(np.diag(sp, 1), 1), 0)


@pytest.mark.parametrize("j", SPINS)
def test_lowering_coefficients(j):
    sm = spin_lowering(j)
    n = int(2 * j + 1)
    assert sm.shape == (n, n)
    for i in range(1, n):
        m = j - (i - 1)
        np.testing.assert_allclose(sm[i, i - 1], np.sqrt((m + j) * (-m + j + 1)), atol=1e-10)
    np.testing.assert_array_equal(sm - np.diag(np.diag(sm, -1), -1), 0)


@pytest.mark.parametrize("j", SPINS)
def test_lowering_is_raising_transpose(j):
    np.testing.assert_allclose(spin_lowering(j), spin_raising(j).T, atol=1e-10)


@pytest.mark.parametrize("j", SPINS)
def test_z_diagonal(j):
    sz = spin_z(j)
    n = int(2 * j + 1)
    expected = [j - k for k in range(n)]
    np.testing.assert_array_equal(np.diag(sz), expected)
    np.testing.assert_array_equal(sz - np.diag(np.diag(sz)), 0)
    np.testing.assert_array_equal(magnetic_numbers(j), expected)


def test_spin_half():
    sp = spin_raising(0.5)
    sm = spin_lowering(0.5)
    assert np.count_nonzero(sp) == 1 and sp[0, 1] == pytest.approx(1.0)
    assert np.count_nonzero(sm) == 1 and sm[1, 0] == pytest.approx(1.0)
    np.testing.assert_allclose(spin_z(0.5), np.diag([0.5, -0.5]))
    np.testing.assert_allclose(spin_x(0.5), [[0, 0.5], [0.5, 0]])
    np.testing.assert_allclose(spin_y(0.5), [[0, 0.5], [-0.5, 0]])


def test_spin_one():
    np.testing.assert_allclose(np.diag(spin_raising(1), 1), [np.sqrt(2), np.sqrt(2)])
    np.testing.assert_allclose(spin_z(1), np.diag([1.0, 0.0, -1.0]))


def test_spin_zero():
    for op in spin_ops(0):
        assert op.shape == (1, 1)
    np.testing.assert_array_equal(spin_raising(0), [[0.0]])
    np.testing.assert_array_equal(spin_z(0), [[0.0]])


@pytest.mark.parametrize("j", [0.5, 1, 1.5, 2, 3])
def test_commutation(j):
    '''Recover the Hermitian S_y from the real skeleton and check su(2)'''
    sx = spin_x(j)
    sy = -1j * spin_y(j)
    sz = spin_z(j)
    np.testing.assert_allclose(sy, sy.conj().T)
    np.testing.assert_allclose(sx @ sy - sy @ sx, 1j * sz, atol=1e-10)
    np.testing.assert_allclose(sy @ sz - sz @ sy, 1j * sx, atol=1e-10)
    np.testing.assert_allclose(sz @ sx - sx @ sz, 1j * sy, atol=1e-10)
    casimir = sx @ sx + sy @ sy + sz @ sz
    np.testing.assert_allclose(casimir, j * (j + 1) * np.eye(int(2 * j + 1)), atol=1e-10)


@pytest.mark.parametrize("j", [0.5, 2])
def test_spin_ops_bundle(j):
    sx, sy, sz, sp, sm = spin_ops(j)
    np.testing.assert_array_equal(sx, spin_x(j))
    np.testing.assert_array_equal(sy, spin_y(j))
    np.testing.assert_array_equal(sz, spin_z(j))
    np.testing.assert_array_equal(sp, spin_raising(j))
    np.testing.assert_array_equal(sm, spin_lowering(j))


@pytest.mark.parametrize("j", [0, 0.5, 1, 2.5])
def test_sparse_matches_dense(j):
    for build in (spin_raising, spin_lowering, spin_x, spin_y, spin_z):
        mat = build(j, sparse=True)
        assert issparse(mat)
        assert mat.dtype == np.float64
        np.testing.assert_array_equal(mat.toarray(), build(j))
    for dense, sparse in zip(spin_ops(j), spin_ops(j, sparse=True)):
        np.testing.assert_array_equal(sparse.toarray(), dense)


def test_fresh_allocation():
    a = spin_raising(1.5)
    b = spin_raising(1.5)
    np.testing.assert_array_equal(a, b)
    a[0, 1] = 42.0
    assert b[0, 1] != 42.0
    assert spin_raising(1.5)[0, 1] != 42.0


@pytest.mark.parametrize("j, n", [
    (0, 1),
    (0.5, 2),
    (1, 3),
    (np.float64(1.5), 4),
    (np.int64(2), 5),
    (Fraction(5, 2), 6),
    ("7/2", 8),
])
def test_spin_dim(j, n):
    assert spin_dim(j) == n


@pytest.mark.parametrize("j", [-0.5, -1, 0.3, 1.25, float("nan"), float("inf"),
                               "x", "nan", "sqrt(2)", True, 1j, None])
def test_spin_dim_rejects(j):
    with pytest.raises(ValueError):
        spin_dim(j)
    with pytest.raises(ValueError):
        spin_raising(j)


def test_spin_dim_string_not_evaluated(tmp_path):
    '''Strings are parsed as fractions, never executed'''
    marker = tmp_path / "touched"
    code = f"__import__('pathlib').Path({str(marker)!r}).touch() or 1"
    with pytest.raises(ValueError):
        spin_dim(code)
    assert not marker.exists()
    assert spin_dim("1.5") == 4
