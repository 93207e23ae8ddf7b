"""
liegen: Worker-Count Resolution
-------------------------------
Helpers that turn a user-facing ``n_jobs`` / ``backend`` pair into arguments
for :class:`joblib.Parallel`.
"""

import os
import warnings

import joblib

__all__ = ["resolve_backend", "resolve_n_jobs"]

_PROCESS_BACKENDS = ("loky", "multiprocessing")
_BACKENDS = _PROCESS_BACKENDS + ("threading",)

_BLAS_KEYS = (
    "OMP_NUM_THREADS",
    "MKL_NUM_THREADS",
    "OPENBLAS_NUM_THREADS",
    "NUMEXPR_NUM_THREADS",
)


def resolve_backend(backend: str) -> str:
    """Map ``"auto"`` to ``"loky"`` and validate the backend name.

    Raises
    ------
    ValueError
        If ``backend`` is not one of ``"auto"``, ``"loky"``,
        ``"multiprocessing"`` or ``"threading"``.
    """
    if backend == "auto":
        return "loky"
    if backend not in _BACKENDS:
        raise ValueError(
            f"Unknown backend {backend!r}; expected 'auto' or one of {_BACKENDS}."
        )
    return backend


def _blas_threads() -> int:
    """Largest thread count requested through the BLAS environment variables."""
    max_blas = 0
    for k in _BLAS_KEYS:
        v = os.environ.get(k, "").strip()
        if v.isdigit():
            max_blas = max(max_blas, int(v))
    return max_blas


def _auto_n_jobs(backend: str = "threading") -> int:
    """Pick a default worker count for ``backend``.

    Heuristic:
    - Process backends use the physical core count, capped at 61 on Windows.
    - The threading backend uses half of the logical CPUs (max 16), or a
      single worker when BLAS is already configured to run multi-threaded.
    """
    logical = joblib.cpu_count()
    physical = joblib.cpu_count(only_physical_cores=True)

    if backend in _PROCESS_BACKENDS:
        # Windows process pools cannot wait on more than 61 worker handles
        limit = 61 if os.name == "nt" else logical
        return max(1, min(physical, limit))

    if _blas_threads() > 1:
        return 1
    base = max(1, logical // 2)
    return max(1, min(base - 1, 16))


def resolve_n_jobs(n_jobs: int | None, backend: str = "threading") -> int:
    """Resolve the number of workers for parallel execution.

    Parameters
    ----------
    n_jobs : int or None
        Requested number of workers. ``None`` or a non-positive value selects
        the auto-detected count.
    backend : str, optional
        Resolved joblib backend name. Default is ``"threading"``.

    Returns
    -------
    int
        Number of workers (always ``>= 1``).
    """
    if n_jobs is None:
        return _auto_n_jobs(backend)
    try:
        n = int(n_jobs)
    except (TypeError, ValueError):
        warnings.warn(f"Ignoring invalid n_jobs={n_jobs!r}; using auto-detection.")
        return _auto_n_jobs(backend)
    if n <= 0:
        return _auto_n_jobs(backend)
    return n
