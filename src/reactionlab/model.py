import numpy as np

from .reactions import get_reaction_forces


class StructureModel:
    """Simple container for pin-supported point-mass structures.

    ``X`` holds one row per node, ``pinned`` marks supported nodes and
    ``mass`` is the point mass lumped at each node.
    """

    def __init__(self, X, pinned=None, mass=1.0):
        self.X = np.asarray(X, dtype=float).copy()
        self.N = self.X.shape[0]
        self.pinned = (
            np.zeros(self.N, dtype=bool)
            if pinned is None
            else np.asarray(pinned, dtype=bool).copy()
        )
        if np.isscalar(mass):
            self.mass = np.full(self.N, float(mass))
        else:
            self.mass = np.asarray(mass, dtype=float).copy()


def _as_model(model):
    """Coerce various lightweight structure containers to ``StructureModel``."""

    if isinstance(model, StructureModel):
        return model

    if hasattr(model, "nodes"):
        X = np.asarray([n.xyz for n in model.nodes], dtype=float)
        pinned = np.zeros(len(model.nodes), dtype=bool)
        for i in getattr(model, "pinned", getattr(model, "fixed", [])):
            pinned[int(i)] = True
        mass = [float(getattr(n, "mass", 1.0)) for n in model.nodes]
        return StructureModel(X, pinned, mass)

    raise TypeError("Unsupported model type")


def solve_reactions(
    model,
    g: float = 9.81,
    formulation: str = "original",
    verbose: bool = False,
):
    """Reaction forces for a structure model.

    Parameters
    ----------
    model : StructureModel
        Structure definition. Objects exposing ``nodes`` with ``xyz`` (and
        optionally ``mass``) plus a ``pinned`` or ``fixed`` index set are
        accepted too.
    g : float
        Gravitational acceleration (positive value acts in -Z).
    formulation : {"original", "physical"}
        Weight convention, see :func:`reactionlab.reactions.assemble_equilibrium`.
    verbose : bool
        Print a summary line when True.

    Returns
    -------
    ndarray, shape (N, 3)
        Reaction force at each node, zero rows for unpinned nodes.
    """

    model = _as_model(model)
    px, py, pz = get_reaction_forces(
        model.X.T,
        model.pinned,
        model.mass,
        g,
        formulation=formulation,
        verbose=verbose,
    )
    return np.column_stack([px, py, pz])


def to_reaction_dataframe(model, P):
    """Export node data and reaction forces to a :class:`pandas.DataFrame`.

    Parameters
    ----------
    model : StructureModel
        The structure definition.
    P : array_like, shape (N, 3)
        Reactions as returned by :func:`solve_reactions`.
    """

    import pandas as pd

    model = _as_model(model)
    P = np.asarray(P, dtype=float)
    rows = []
    for i in range(model.N):
        x, y, z = model.X[i]
        rows.append(
            {
                "node": i,
                "x": x,
                "y": y,
                "z": z,
                "mass": float(model.mass[i]),
                "pinned": bool(model.pinned[i]),
                "px": P[i, 0],
                "py": P[i, 1],
                "pz": P[i, 2],
            }
        )
    return pd.DataFrame(
        rows, columns=["node", "x", "y", "z", "mass", "pinned", "px", "py", "pz"]
    )


def reaction_totals(P):
    """Return the summed reaction ``(Fx, Fy, Fz)`` over all nodes."""

    return tuple(float(v) for v in np.asarray(P, dtype=float).sum(axis=0))


def to_structure_json(model, P=None):
    """Serialize a model, and optionally its reactions, to a plain ``dict``."""

    model = _as_model(model)
    data = {
        "nodes": model.X.tolist(),
        "pinned": model.pinned.tolist(),
        "mass": model.mass.tolist(),
    }
    if P is not None:
        data["reactions"] = np.asarray(P, dtype=float).tolist()
    return data


def from_structure_json(data):
    """Build a :class:`StructureModel` from :func:`to_structure_json` output.

    Tensegrity exports that name the support mask ``fixed`` are accepted and
    a missing ``mass`` defaults to unit node masses.
    """

    pinned = data.get("pinned", data.get("fixed"))
    return StructureModel(data["nodes"], pinned, data.get("mass", 1.0))


__all__ = [
    "StructureModel",
    "solve_reactions",
    "to_reaction_dataframe",
    "reaction_totals",
    "to_structure_json",
    "from_structure_json",
]
