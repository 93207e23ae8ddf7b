"""liegen - Matrix generators for su(2) spin-j and Sylvester su(d) algebras
==========================================================================
`liegen` builds matrix representations of Lie-algebra generators: the
raising, lowering and component operators of a spin-j angular momentum
(`d = 2j + 1`), and the basis of su(d) generated by Sylvester's CLOCK and
SHIFT matrices for a d-dimensional qudit. Every function is a pure
construction that returns freshly allocated NumPy (or SciPy sparse) matrices.

License : MIT
Version : 0.1.0
"""

from .spin import (
    magnetic_numbers,
    spin_dim,
    spin_lowering,
    spin_ops,
    spin_raising,
    spin_x,
    spin_y,
    spin_z,
)
from .sylvester import (
    generalized_basis,
    generalized_clock,
    generalized_shift,
    is_duplicate_or_identity,
    root_of_unity,
    verify_commutation,
)

__all__ = [
    # spin
    "spin_dim",
    "magnetic_numbers",
    "spin_raising",
    "spin_lowering",
    "spin_x",
    "spin_y",
    "spin_z",
    "spin_ops",
    # sylvester
    "root_of_unity",
    "generalized_shift",
    "generalized_clock",
    "verify_commutation",
    "is_duplicate_or_identity",
    "generalized_basis",
]
