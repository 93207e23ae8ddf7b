r"""
liegen: Spin-j Angular Momentum Matrices
----------------------------------------
Builds the su(2) generators for an arbitrary spin quantum number ``j`` in the
``|j, m>`` basis ordered by descending ``m = j, j-1, ..., -j``. The matrix
order is ``n = 2j + 1``.

Public API
----------
- ``spin_dim``, ``magnetic_numbers``
- ``spin_raising``, ``spin_lowering``
- ``spin_x``, ``spin_y``, ``spin_z``, ``spin_ops``

Notes
-----
- Coefficients. The raising matrix has ``(S_+)_{i,i+1} = c_+(m)`` with
  ``c_+(m) = \sqrt{(j-m)(m+j+1)}`` over ``m = j-1, ..., -j``; the lowering
  matrix has ``(S_-)_{i,i-1} = c_-(m)`` with ``c_-(m) = \sqrt{(m+j)(j-m+1)}``
  over ``m = j, ..., -j+1``.
- Real convention. All matrices are real. ``spin_y`` returns
  ``(S_+ - S_-)/2``, the real skeleton of the Hermitian operator
  ``S_y = (S_+ - S_-)/(2i)``. Multiply by ``-1j`` to obtain ``S_y``.
- Sparse output. Every constructor accepts ``sparse=True`` and then returns a
  ``scipy.sparse.csr_matrix`` with identical entries.
"""

from typing import Tuple, Union

import numpy as np
from scipy.sparse import csr_matrix
from sympy import Rational

__all__ = [
    "spin_dim",
    "magnetic_numbers",
    "spin_raising",
    "spin_lowering",
    "spin_x",
    "spin_y",
    "spin_z",
    "spin_ops",
]

SpinMatrix = Union[np.ndarray, csr_matrix]

# --------- Spin validation ---------
def _as_rational_spin(j) -> Rational:
    """Convert ``j`` to an exact sympy ``Rational``.

    Floats are converted exactly (``0.5 -> 1/2``); strings such as ``"3/2"``
    or ``"1.5"`` are parsed as fractions, never evaluated.

    Raises
    ------
    ValueError
        If ``j`` is not a finite rational number.
    """
    if isinstance(j, bool):
        raise ValueError(f"Spin j must be a real number, got {j!r}.")
    if not isinstance(j, str):
        try:
            finite = bool(np.isfinite(float(j)))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Spin j must be a real number, got {j!r}.") from exc
        if not finite:
            raise ValueError(f"Spin j must be a finite real number, got {j!r}.")
    try:
        return Rational(j)
    except (TypeError, ValueError) as exc:
        # e.g. sqrt(2) or an unparsable string
        raise ValueError(f"Spin j must be rational, got {j!r}.") from exc

def spin_dim(j) -> int:
    """Return the matrix order ``n = 2j + 1`` for spin ``j``.

    Parameters
    ----------
    j : int, float, fractions.Fraction, sympy number or str
        Spin quantum number, a non-negative integer or half-integer.

    Returns
    -------
    int
        Dimension ``2j + 1`` (at least 1).

    Raises
    ------
    ValueError
        If ``j`` is negative, not finite, or ``2j`` is not an integer.
    """
    jr = _as_rational_spin(j)
    twice = 2 * jr
    if jr < 0 or not twice.is_Integer:
        raise ValueError(
            f"Spin j must be a non-negative integer or half-integer, got {j!r}."
        )
    return int(twice) + 1

def magnetic_numbers(j) -> np.ndarray:
    """Return the descending sequence ``m = j, j-1, ..., -j``.

    The entries are exact in floating point since ``2j`` is an integer.
    """
    n = spin_dim(j)
    jv = (n - 1) / 2
    return jv - np.arange(n, dtype=float)

def _c_plus(j: float, m: np.ndarray) -> np.ndarray:
    """Raising coefficients ``sqrt((j - m)(m + j + 1))``."""
    return np.sqrt((j - m) * (m + j + 1.0))

def _c_minus(j: float, m: np.ndarray) -> np.ndarray:
    """Lowering coefficients ``sqrt((m + j)(j - m + 1))``."""
    return np.sqrt((m + j) * (-m + j + 1.0))

def _finalize(mat: np.ndarray, sparse: bool) -> SpinMatrix:
    return csr_matrix(mat) if sparse else mat

# --------- Public API ---------
def spin_raising(j, *, sparse: bool = False) -> SpinMatrix:
    """Return the raising matrix ``S_+`` for spin ``j``.

    Parameters
    ----------
    j : int, float, fractions.Fraction, sympy number or str
        Spin quantum number.
    sparse : bool, optional
        Return a ``csr_matrix`` instead of a dense array (default ``False``).

    Returns
    -------
    numpy.ndarray or scipy.sparse.csr_matrix
        Real ``(2j+1, 2j+1)`` matrix, nonzero only on the superdiagonal.

    Raises
    ------
    ValueError
        If ``j`` is not a valid spin (see :func:`spin_dim`).
    """
    n = spin_dim(j)
    jv = (n - 1) / 2
    # m = j-1, ..., -j; one coefficient per superdiagonal slot
    cp = _c_plus(jv, jv - np.arange(1, n, dtype=float))
    if sparse:
        idx = np.arange(n - 1)
        return csr_matrix((cp, (idx, idx + 1)), shape=(n, n), dtype=float)
    return np.diag(cp, 1)

def spin_lowering(j, *, sparse: bool = False) -> SpinMatrix:
    """Return the lowering matrix ``S_-`` for spin ``j``.

    Nonzero only on the subdiagonal; ``(S_-)_{i,i-1} = c_-(m_{i-1})`` with
    ``m`` running over ``j, ..., -j+1``.
    """
    n = spin_dim(j)
    jv = (n - 1) / 2
    cm = _c_minus(jv, jv - np.arange(0, n - 1, dtype=float))
    if sparse:
        idx = np.arange(1, n)
        return csr_matrix((cm, (idx, idx - 1)), shape=(n, n), dtype=float)
    return np.diag(cm, -1)

def spin_z(j, *, sparse: bool = False) -> SpinMatrix:
    """Return the diagonal matrix ``S_z = diag(j, j-1, ..., -j)``."""
    m = magnetic_numbers(j)
    if sparse:
        idx = np.arange(m.size)
        return csr_matrix((m, (idx, idx)), shape=(m.size, m.size), dtype=float)
    return np.diag(m)

def spin_x(j, *, sparse: bool = False) -> SpinMatrix:
    """Return ``S_x = (S_+ + S_-) / 2``."""
    mat = (spin_raising(j) + spin_lowering(j)) * 0.5
    return _finalize(mat, sparse)

def spin_y(j, *, sparse: bool = False) -> SpinMatrix:
    """Return the real skeleton ``(S_+ - S_-) / 2`` of ``S_y``.

    Notes
    -----
    This is *not* the Hermitian ``S_y``. The physical operator is
    ``S_y = -1j * spin_y(j)``; the real form is returned so that every spin
    matrix shares the ``float64`` dtype.
    """
    mat = (spin_raising(j) - spin_lowering(j)) * 0.5
    return _finalize(mat, sparse)

def spin_ops(j, *, sparse: bool = False) -> Tuple[SpinMatrix, ...]:
    """Construct ``(S_x, S_y, S_z, S_+, S_-)`` for spin ``j``.

    ``S_y`` follows the real convention of :func:`spin_y`. Each returned
    matrix is an independent allocation.

    Returns
    -------
    tuple
        ``(sx, sy, sz, sp, sm)``.
    """
    sp = spin_raising(j)
    sm = spin_lowering(j)
    sz = spin_z(j)
    sx = (sp + sm) * 0.5
    sy = (sp - sm) * 0.5
    return tuple(_finalize(mat, sparse) for mat in (sx, sy, sz, sp, sm))
