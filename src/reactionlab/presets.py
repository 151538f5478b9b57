import numpy as np


def _build_prism(
    n: int,
    r: float = 1.0,
    h: float = 1.2,
    theta: float = np.deg2rad(150),
    node_mass: float = 1.0,
    offset=(0.0, 0.0, 0.0),
) -> "StructureModel":
    """Internal helper to create an n-sided prism with its base ring pinned."""

    from .model import StructureModel

    B = np.array(
        [[r * np.cos(2 * np.pi * k / n), r * np.sin(2 * np.pi * k / n), 0.0] for k in range(n)]
    )
    T = np.array(
        [
            [
                r * np.cos(2 * np.pi * k / n + theta),
                r * np.sin(2 * np.pi * k / n + theta),
                h,
            ]
            for k in range(n)
        ]
    )
    X0 = np.vstack([B, T]) + np.asarray(offset, dtype=float)

    pinned = np.zeros(2 * n, dtype=bool)
    pinned[:n] = True
    return StructureModel(X0, pinned, node_mass)


def build_snelson_prism(
    r: float = 1.0,
    h: float = 1.2,
    theta: float = np.deg2rad(150),
    node_mass: float = 1.0,
    offset=(0.0, 0.0, 0.0),
) -> "StructureModel":
    """Create a 3-strut Snelson prism model."""

    return _build_prism(3, r=r, h=h, theta=theta, node_mass=node_mass, offset=offset)


def build_quadruple_prism(
    r: float = 1.0,
    h: float = 1.2,
    theta: float = np.deg2rad(135),
    node_mass: float = 1.0,
    offset=(0.0, 0.0, 0.0),
) -> "StructureModel":
    """Create a 4-strut prism model."""

    return _build_prism(4, r=r, h=h, theta=theta, node_mass=node_mass, offset=offset)


def build_quintuple_prism(
    r: float = 1.0,
    h: float = 1.2,
    theta: float = np.deg2rad(140),
    node_mass: float = 1.0,
    offset=(0.0, 0.0, 0.0),
) -> "StructureModel":
    """Create a 5-strut prism model."""

    return _build_prism(5, r=r, h=h, theta=theta, node_mass=node_mass, offset=offset)


def build_two_pin_bar(
    half_length: float = 1.0,
    node_mass: float = 1.0,
) -> "StructureModel":
    """Two pinned nodes at ``(-half_length, 0, 0)`` and ``(half_length, 0, 0)``.

    The smallest statically determinate setup; the moment about the bar
    axis is unresisted, so the load must stay on that axis.
    """

    from .model import StructureModel

    X0 = np.array([[-half_length, 0.0, 0.0], [half_length, 0.0, 0.0]])
    return StructureModel(X0, [True, True], node_mass)


__all__ = [
    "build_snelson_prism",
    "build_quadruple_prism",
    "build_quintuple_prism",
    "build_two_pin_bar",
]
