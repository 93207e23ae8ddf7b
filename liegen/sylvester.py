r"""
liegen: Sylvester CLOCK/SHIFT Basis for su(d)
---------------------------------------------
Constructs Sylvester's generalized Pauli matrices for a qudit of dimension
``d`` and the operator basis of ``su(d)`` they generate.

Public API
----------
- ``root_of_unity``, ``generalized_shift``, ``generalized_clock``
- ``verify_commutation``, ``is_duplicate_or_identity``
- ``generalized_basis``

Notes
-----
- Definitions. ``X|k> = |k+1 mod d>`` (SHIFT) and ``Z|k> = w^k |k>`` (CLOCK)
  with ``w = exp(2 pi i / d)``. They obey the twisted commutation relation

  .. math:: Z X = w\, X Z.

- Basis. The products ``X^r Z^s`` for ``r, s = 1..d`` cover every pair of
  powers modulo ``d``. Since ``X^d = Z^d = I``, the pair ``(d, d)`` is the
  identity, ``(1, d)`` equals ``X`` and ``(d, 1)`` equals ``Z``. Dropping
  those three and seeding the list with ``X`` and ``Z`` leaves
  ``d^2 - 1`` matrices. All of them are traceless: for ``r < d`` the product
  has no diagonal, and for ``r = d`` the trace is ``\sum_k w^{ks} = 0``.
- For ``d = 2`` the basis is ``[sigma_x, sigma_z, -i sigma_y]``.
"""

import numbers
from typing import List, Union

import joblib
import numpy as np
from scipy.sparse import csr_matrix, issparse
from threadpoolctl import threadpool_limits

from ._parallel import resolve_backend, resolve_n_jobs

__all__ = [
    "root_of_unity",
    "generalized_shift",
    "generalized_clock",
    "verify_commutation",
    "is_duplicate_or_identity",
    "generalized_basis",
]

QuditMatrix = Union[np.ndarray, csr_matrix]

# --------- Helpers ---------
def _check_dim(d) -> int:
    """Validate a qudit dimension and return it as ``int``.

    Raises
    ------
    ValueError
        If ``d`` is not an integer or ``d < 2``.
    """
    if isinstance(d, bool) or not isinstance(d, numbers.Integral) or d < 2:
        raise ValueError(f"d must be an integer >= 2, got {d!r}.")
    return int(d)

def _to_dense(mat: QuditMatrix) -> np.ndarray:
    return mat.toarray() if issparse(mat) else np.asarray(mat)

# --------- CLOCK and SHIFT ---------
def root_of_unity(d: int) -> complex:
    """Return the primitive ``d``-th root of unity ``exp(2 pi i / d)``."""
    d = _check_dim(d)
    return complex(np.exp(2j * np.pi / d))

def generalized_shift(d: int, *, sparse: bool = False) -> QuditMatrix:
    """Return the SHIFT matrix ``X`` for dimension ``d``.

    ``X[i+1, i] = 1`` for ``i = 0..d-2`` and ``X[0, d-1] = 1``.

    Parameters
    ----------
    d : int
        Qudit dimension, ``d >= 2``.
    sparse : bool, optional
        Return a ``csr_matrix`` instead of a dense array (default ``False``).

    Returns
    -------
    numpy.ndarray or scipy.sparse.csr_matrix
        Complex permutation matrix of shape ``(d, d)``.

    Raises
    ------
    ValueError
        If ``d`` is not an integer ``>= 2``.
    """
    d = _check_dim(d)
    cols = np.arange(d)
    rows = (cols + 1) % d
    if sparse:
        return csr_matrix((np.ones(d, dtype=complex), (rows, cols)), shape=(d, d))
    x = np.zeros((d, d), dtype=complex)
    x[rows, cols] = 1.0
    return x

def generalized_clock(d: int, *, sparse: bool = False) -> QuditMatrix:
    """Return the CLOCK matrix ``Z = diag(1, w, w^2, ..., w^(d-1))``.

    Parameters
    ----------
    d : int
        Qudit dimension, ``d >= 2``.
    sparse : bool, optional
        Return a ``csr_matrix`` instead of a dense array (default ``False``).

    Raises
    ------
    ValueError
        If ``d`` is not an integer ``>= 2``.
    """
    d = _check_dim(d)
    phases = np.exp(2j * np.pi * np.arange(d) / d)
    if sparse:
        idx = np.arange(d)
        return csr_matrix((phases, (idx, idx)), shape=(d, d))
    return np.diag(phases)

def verify_commutation(x: QuditMatrix, z: QuditMatrix, d: int, *, atol: float = 1e-8) -> bool:
    """Check the twisted commutation relation ``Z X = w X Z``.

    Parameters
    ----------
    x, z : numpy.ndarray or scipy.sparse matrix
        SHIFT and CLOCK candidates of shape ``(d, d)``.
    d : int
        Dimension that fixes ``w = exp(2 pi i / d)``.
    atol : float, optional
        Absolute element-wise tolerance (default ``1e-8``).

    Returns
    -------
    bool
        ``True`` if the relation holds within ``atol``.
    """
    w = root_of_unity(d)
    lhs = _to_dense(z @ x)
    rhs = w * _to_dense(x @ z)
    if lhs.shape != rhs.shape:
        return False
    return bool(np.allclose(lhs, rhs, rtol=0.0, atol=atol))

def is_duplicate_or_identity(r: int, s: int, d: int) -> bool:
    """Return True when ``X^r Z^s`` must be left out of the basis.

    With ``r, s`` in ``1..d``: ``(1, d)`` gives ``X`` and ``(d, 1)`` gives
    ``Z``, both already seeded; ``(d, d)`` gives the identity, which is not
    traceless. Every other pair yields a distinct traceless matrix.
    """
    return (r == 1 and s == d) or (r == d and s == 1) or (r == d and s == d)

# --------- Basis ---------
def _basis_row(x_r: QuditMatrix, z: QuditMatrix, r: int, d: int) -> List[QuditMatrix]:
    """Products ``X^r Z^s`` for ``s = 1..d``, skipping excluded pairs."""
    row = []
    z_s = z
    for s in range(1, d + 1):
        if not is_duplicate_or_identity(r, s, d):
            row.append(x_r @ z_s)
        z_s = z_s @ z
    return row

def _basis_row_single_blas(x_r: QuditMatrix, z: QuditMatrix, r: int, d: int) -> List[QuditMatrix]:
    # one BLAS thread per worker process
    with threadpool_limits(limits=1, user_api="blas"):
        return _basis_row(x_r, z, r, d)

def generalized_basis(
    d: int,
    *,
    check: bool = True,
    atol: float = 1e-8,
    n_jobs: int | None = 1,
    backend: str = "threading",
    sparse: bool = False,
) -> List[QuditMatrix]:
    """Return the Sylvester basis of ``su(d)``.

    The list starts with ``X`` and ``Z``, followed by ``X^r Z^s`` in row-major
    order over ``r, s = 1..d`` with the pairs rejected by
    :func:`is_duplicate_or_identity` left out.

    Parameters
    ----------
    d : int
        Qudit dimension, ``d >= 2``.
    check : bool, optional
        Verify ``Z X = w X Z`` before building products (default ``True``).
    atol : float, optional
        Tolerance for the commutation check (default ``1e-8``).
    n_jobs : int or None, optional
        Number of workers. ``1`` (default) runs serially; ``None`` or a
        non-positive value auto-detects.
    backend : {"threading", "loky", "multiprocessing", "auto"}, optional
        joblib backend used when more than one worker is requested.
    sparse : bool, optional
        Build every matrix as a ``csr_matrix`` (default ``False``).

    Returns
    -------
    list
        ``d**2 - 1`` traceless complex matrices of shape ``(d, d)``.

    Raises
    ------
    ValueError
        If ``d`` is not an integer ``>= 2`` or ``backend`` is unknown.
    RuntimeError
        If the commutation check fails. This indicates a construction bug,
        never a bad input.

    Notes
    -----
    The parallel path splits the work by powers of ``X`` and concatenates
    the rows in order, so the result is identical to the serial one.
    """
    d = _check_dim(d)
    backend = resolve_backend(backend)
    x = generalized_shift(d, sparse=sparse)
    z = generalized_clock(d, sparse=sparse)
    if check and not verify_commutation(x, z, d, atol=atol):
        raise RuntimeError(
            f"CLOCK and SHIFT violate Z X = w X Z for d={d}; construction aborted."
        )

    basis = [x, z]

    # X^1 .. X^d
    x_powers = [x]
    for _ in range(d - 1):
        x_powers.append(x_powers[-1] @ x)

    nj = resolve_n_jobs(n_jobs, backend)
    if nj == 1:
        rows = [_basis_row(x_r, z, r, d) for r, x_r in enumerate(x_powers, start=1)]
    else:
        func = _basis_row_single_blas if backend != "threading" else _basis_row
        rows = joblib.Parallel(n_jobs=nj, backend=backend)(
            joblib.delayed(func)(x_r, z, r, d)
            for r, x_r in enumerate(x_powers, start=1)
        )
    for row in rows:
        basis.extend(row)
    return basis
