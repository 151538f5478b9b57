import numpy as np
import pytest

from reactionlab.reactions import SingularSystem, get_reaction_forces


def test_symmetric_two_pin_hand_values():
    coords = np.array([[-1.0, 1.0], [0.0, 0.0], [0.0, 0.0]])
    n, m_tot, g = 2, 2.0, 9.8
    px, py, pz = get_reaction_forces(coords, [True, True], [1.0, 1.0], g)

    assert np.allclose(px, 0.0)
    assert np.allclose(py, 0.0)
    assert np.allclose(pz, [-n * m_tot * g / 2] * 2)


def test_asymmetric_mass_original_arithmetic():
    # com = (0*1 + 2*3) / n = 3 along x, weight = n * m_tot * g = 78.4
    coords = np.array([[0.0, 2.0], [0.0, 0.0], [0.0, 0.0]])
    px, py, pz = get_reaction_forces(coords, [True, True], [1.0, 3.0], 9.8)

    assert np.allclose(px, 0.0)
    assert np.allclose(py, 0.0)
    assert np.allclose(pz, [-196.0, 117.6])


def test_asymmetric_mass_physical_formulation():
    coords = np.array([[0.0, 2.0], [0.0, 0.0], [0.0, 0.0]])
    _, _, pz = get_reaction_forces(
        coords, [True, True], [1.0, 3.0], 9.8, formulation="physical"
    )
    # each pin carries exactly its own node weight
    assert np.allclose(pz, [-9.8, -29.4])


def test_colinear_pins_with_offset_load_is_singular():
    coords = np.array(
        [
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
            [0.0, 0.0, 0.0],
        ]
    )
    with pytest.raises(SingularSystem):
        get_reaction_forces(coords, [True, True, False], [1.0, 1.0, 1.0], 9.81)


def test_pinned_node_at_origin_is_kept():
    coords = np.array([[0.0, 2.0, 1.0], [0.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    px, py, pz = get_reaction_forces(coords, [True, True, False], [0.0, 1.0, 1.0], 9.81)

    assert pz[0] != 0.0
    assert pz[2] == 0.0
    assert np.isclose(pz.sum(), -3 * 2.0 * 9.81)


def test_colinear_pins_tiny_offset_load_is_singular():
    coords = np.array(
        [
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
            [0.0, 0.0, 0.0],
        ]
    )
    with pytest.raises(SingularSystem):
        get_reaction_forces(coords, [True, True, False], [1e-10, 1e-10, 1e-10], 9.81)
