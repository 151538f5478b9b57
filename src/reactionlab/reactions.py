"""Static reaction forces on pinned point-mass structures under gravity."""

from __future__ import annotations

import numpy as np


FORMULATIONS = ("original", "physical")


class ReactionError(RuntimeError):
    """Raised when the equilibrium system cannot be solved."""


class DimensionMismatch(ValueError):
    """Raised when coordinates, pinned flags and masses disagree in size."""


class SingularSystem(ReactionError):
    """Raised when the pin geometry cannot balance the load."""


class UnderConstrained(ReactionError):
    """Raised when there are too few pins to balance the load."""


def validate_inputs(coordinates, pinned, mass):
    """Check array sizes and return ``(coordinates, pinned, mass)`` as arrays.

    Parameters
    ----------
    coordinates : array_like, shape (3, n)
        Node positions, one column per node.
    pinned : array_like of bool, shape (n,)
        ``True`` where a reaction force acts on the node.
    mass : array_like, shape (n,)
        Point mass at each node.

    Raises
    ------
    DimensionMismatch
        If the sizes are inconsistent. Values themselves (negative masses,
        NaN coordinates) are not checked.
    """

    X = np.asarray(coordinates, dtype=float)
    if X.ndim != 2 or X.shape[0] != 3:
        raise DimensionMismatch(
            f"coordinates must be a 3 x n matrix, got shape {X.shape}"
        )
    n = X.shape[1]

    m = np.asarray(mass, dtype=float).ravel()
    if m.size != n:
        raise DimensionMismatch(
            f"mass vector has {m.size} entries but there are {n} nodes"
        )

    p = np.asarray(pinned, dtype=bool).ravel()
    s = int(p.sum())
    if s > n:
        raise DimensionMismatch(
            f"{s} pinned nodes is inconsistent with {n} nodes in total"
        )
    if p.size != n:
        raise DimensionMismatch(
            f"pinned vector has {p.size} entries but there are {n} nodes"
        )
    return X, p, m


def pinned_coordinates(coordinates, pinned) -> np.ndarray:
    """Return the ``3 x s`` coordinates of the pinned nodes in node order.

    Selection is by flag only. A pinned node may sit at the origin, so the
    zero columns must not be dropped by value.
    """

    X = np.asarray(coordinates, dtype=float)
    flags = np.asarray(pinned, dtype=bool)
    coords_s = np.zeros((3, int(flags.sum())))
    next_node = 0
    for i, is_pinned in enumerate(flags):
        if is_pinned:
            coords_s[:, next_node] = X[:, i]
            next_node += 1
    return coords_s


def _check_formulation(formulation: str) -> None:
    if formulation not in FORMULATIONS:
        raise ValueError(f"unknown formulation: {formulation}")


def center_of_mass(coordinates, mass, formulation: str = "original") -> np.ndarray:
    """Mass-weighted position of the structure.

    Parameters
    ----------
    coordinates : array_like, shape (3, n)
        Node positions.
    mass : array_like, shape (n,)
        Node masses.
    formulation : {"original", "physical"}
        ``"original"`` divides the weighted sum by the node count ``n``, which
        only equals the true center of mass when all masses are equal.
        ``"physical"`` divides by the total mass.

    Returns
    -------
    ndarray, shape (3,)
    """

    _check_formulation(formulation)
    X = np.asarray(coordinates, dtype=float)
    m = np.asarray(mass, dtype=float)
    n = X.shape[1]
    if n == 0:
        return np.zeros(3)

    weighted = (X * m[np.newaxis, :]).sum(axis=1)
    if formulation == "original":
        return weighted / n
    m_tot = m.sum()
    if m_tot == 0.0:
        return np.zeros(3)
    return weighted / m_tot


def assemble_equilibrium(
    coordinates,
    pinned,
    mass,
    g: float,
    formulation: str = "original",
) -> tuple[np.ndarray, np.ndarray]:
    """Build ``A`` (6 x 3s) and ``b`` (6,) such that ``A @ R = b``.

    ``R`` stacks the unknown reactions grouped by axis,
    ``[Fx_1..Fx_s, Fy_1..Fy_s, Fz_1..Fz_s]``. The first three rows sum the
    forces along each axis, the last three sum moments about the origin.
    Gravity acts along -Z.

    With ``formulation="original"`` the total weight is ``n * m_tot * g``
    and the moment right-hand side is ``[-W*com_y, -W*com_x, 0]``. With
    ``"physical"`` the weight is ``m_tot * g`` applied at the true center of
    mass and the right-hand side is its moment ``com x (0, 0, -W)``.
    """

    _check_formulation(formulation)
    X = np.asarray(coordinates, dtype=float)
    m = np.asarray(mass, dtype=float)
    n = X.shape[1]
    m_tot = m.sum()

    coords_s = pinned_coordinates(X, pinned)
    s = coords_s.shape[1]
    x, y, z = coords_s
    ones = np.ones(s)
    zeros = np.zeros(s)

    force_coeff = np.vstack(
        [
            np.concatenate([ones, zeros, zeros]),
            np.concatenate([zeros, ones, zeros]),
            np.concatenate([zeros, zeros, ones]),
        ]
    )
    # cross product p x F, one column group per force axis
    moment_coeff = np.vstack(
        [
            np.concatenate([zeros, -z, y]),
            np.concatenate([z, zeros, -x]),
            np.concatenate([-y, x, zeros]),
        ]
    )

    com = center_of_mass(X, m, formulation)
    if formulation == "original":
        W = n * m_tot * g
        mom_com = np.array([-W * com[1], -W * com[0], 0.0])
    else:
        W = m_tot * g
        mom_com = np.array([-W * com[1], W * com[0], 0.0])
    force_com = np.array([0.0, 0.0, -W])

    A = np.vstack([force_coeff, moment_coeff])
    b = np.concatenate([force_com, mom_com])
    return A, b


def _residual_ok(A, R, b, rtol):
    # relative to the problem's own scale, so tiny loads are not waved through
    scale = np.linalg.norm(A) * np.linalg.norm(R) + np.linalg.norm(b)
    return np.linalg.norm(A @ R - b) <= rtol * scale


def solve_equilibrium(
    A,
    b,
    rtol: float = 1e-9,
) -> np.ndarray:
    """Solve ``A @ R = b`` for the stacked reaction vector ``R``.

    Parameters
    ----------
    A : ndarray, shape (6, 3s)
        Equilibrium coefficients from :func:`assemble_equilibrium`.
    b : ndarray, shape (6,)
        Applied load and its moment.
    rtol : float
        Relative residual tolerance used to decide whether a least-squares
        solution actually balances the load.

    Returns
    -------
    ndarray, shape (3s,)
        Two pins never resist the moment about the line through them, so
        even the square two-pin system is rank deficient. Every case is
        therefore solved with :func:`numpy.linalg.lstsq`, which returns the
        minimum 2-norm solution, and accepted only if it balances the load.

    Raises
    ------
    UnderConstrained
        Fewer than two pins and the load cannot be balanced.
    SingularSystem
        Two or more pins whose geometry cannot balance the load (for example
        all pins on one line with the load off that line).
    """

    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float)
    cols = A.shape[1]
    s = cols // 3

    if cols == 0:
        if not np.any(b):
            return np.zeros(0)
        raise UnderConstrained(
            "no pinned nodes: nothing can balance a nonzero gravity load"
        )

    R, *_ = np.linalg.lstsq(A, b, rcond=None)
    if _residual_ok(A, R, b, rtol):
        return R

    residual = np.linalg.norm(A @ R - b)
    if cols < A.shape[0]:
        raise UnderConstrained(
            f"{s} pinned node(s) cannot balance the load "
            f"(residual {residual:.3e}); at least two are required"
        )
    raise SingularSystem(
        f"degenerate pin geometry: {s} pinned nodes cannot balance the load "
        f"(residual {residual:.3e}); pins may be colinear"
    )


def expand_reactions(R, pinned) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Scatter the axis-grouped solution back to per-node ``(px, py, pz)``.

    Entries for unpinned nodes are exactly zero. ``R`` may be empty when no
    node is pinned.
    """

    flags = np.asarray(pinned, dtype=bool)
    n = flags.size
    s = int(flags.sum())
    R = np.asarray(R, dtype=float).reshape(3, s) if s else np.zeros((3, 0))

    px, py, pz = np.zeros(n), np.zeros(n), np.zeros(n)
    next_node = 0
    for i, is_pinned in enumerate(flags):
        if is_pinned:
            px[i] = R[0, next_node]
            py[i] = R[1, next_node]
            pz[i] = R[2, next_node]
            next_node += 1
    return px, py, pz


def get_reaction_forces(
    coordinates,
    pinned,
    mass,
    g: float,
    formulation: str = "original",
    rtol: float = 1e-9,
    verbose: bool = False,
):
    """Reaction forces at the pinned nodes of a structure under gravity.

    Parameters
    ----------
    coordinates : array_like, shape (3, n)
        Node positions, one column per node.
    pinned : array_like of bool, shape (n,)
        ``True`` where the node is externally pinned.
    mass : array_like, shape (n,)
        Point mass at each node.
    g : float
        Gravitational constant (positive value acts in -Z).
    formulation : {"original", "physical"}
        Weight and center-of-mass convention, see :func:`assemble_equilibrium`.
    rtol : float
        Residual tolerance passed to :func:`solve_equilibrium`.
    verbose : bool
        Print a one-line summary when True.

    Returns
    -------
    tuple of ndarray
        ``(px, py, pz)``, each of length ``n`` and zero at unpinned nodes.
    """

    X, flags, m = validate_inputs(coordinates, pinned, mass)
    A, b = assemble_equilibrium(X, flags, m, g, formulation=formulation)
    R = solve_equilibrium(A, b, rtol=rtol)
    px, py, pz = expand_reactions(R, flags)
    if verbose:
        total = (px.sum(), py.sum(), pz.sum())
        print(
            f"[RF] Solved {int(flags.sum())}/{flags.size} pinned nodes, "
            f"sum F = ({total[0]:.3e}, {total[1]:.3e}, {total[2]:.3e})"
        )
    return px, py, pz


__all__ = [
    "FORMULATIONS",
    "ReactionError",
    "DimensionMismatch",
    "SingularSystem",
    "UnderConstrained",
    "validate_inputs",
    "pinned_coordinates",
    "center_of_mass",
    "assemble_equilibrium",
    "solve_equilibrium",
    "expand_reactions",
    "get_reaction_forces",
]
