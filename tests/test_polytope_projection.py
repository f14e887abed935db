import numpy as np
import pytest

pytest.importorskip("cdd")

from robust_equilibrium.cone_projection import ensure_cdd_initialized
from robust_equilibrium import (
    StaticEquilibrium,
    Algorithm,
    LPStatus,
    ValidationError,
    NumericInstabilityError,
    Verbosity,
    generate_rectangle_contacts,
)

MU = 0.5
MASS = 1.0


def _make_equilibrium(algorithm, points=None, normals=None):
    eq = StaticEquilibrium("test", MASS, 8, algorithm=algorithm, verbosity=Verbosity.none)
    if points is None:
        points, normals = generate_rectangle_contacts(0.1, 0.1, np.zeros(3), np.zeros(3))
    eq.set_new_contacts(points, normals, MU, algorithm)
    return eq


def test_square_equilibrium():
    eq = _make_equilibrium(Algorithm.PP)
    assert eq.H.shape[1] == 6
    np.testing.assert_allclose(eq.HD, eq.H.dot(eq.D))
    assert eq.check_robust_equilibrium([0., 0., 0.5]) == (LPStatus.OPTIMAL, True)
    assert eq.check_robust_equilibrium([10., 0., 0.5]) == (LPStatus.OPTIMAL, False)


def test_generators_satisfy_inequalities():
    eq = _make_equilibrium(Algorithm.PP)
    assert np.all(eq.H.dot(eq.G_centr) <= 1e-7)


@pytest.mark.parametrize("com", [[0., 0., 0.5],
                                 [0.05, 0.05, 1.],
                                 [0.09, -0.09, 0.2],
                                 [0.15, 0., 0.5],
                                 [0., -0.2, 0.5],
                                 [10., 0., 0.5]])
def test_agrees_with_lp_sign(com):
    _, equilibrium = _make_equilibrium(Algorithm.PP).check_robust_equilibrium(com)
    status, robustness = _make_equilibrium(Algorithm.LP).compute_equilibrium_robustness(com)
    assert status is LPStatus.OPTIMAL
    assert equilibrium == (robustness > 0)


def test_single_contact_off_axis():
    eq = _make_equilibrium(Algorithm.PP, np.zeros((1, 3)), np.array([[0., 0., 1.]]))
    for com in [[0.1, 0., 0.5], [0., -0.3, 1.]]:
        assert eq.check_robust_equilibrium(com) == (LPStatus.OPTIMAL, False)


def test_nonzero_robustness_is_not_supported():
    eq = _make_equilibrium(Algorithm.PP)
    with pytest.raises(ValidationError):
        eq.check_robust_equilibrium([0., 0., 0.5], e_max=0.1)


def test_lp_queries_are_not_applicable():
    eq = _make_equilibrium(Algorithm.PP)
    with pytest.raises(ValidationError):
        eq.compute_equilibrium_robustness([0., 0., 0.5])
    with pytest.raises(ValidationError):
        eq.find_extremum_over_line([1., 0., 0.], [0., 0., 0.5], 0.)


def test_switching_algorithm_drops_inequalities():
    eq = _make_equilibrium(Algorithm.PP)
    points, normals = generate_rectangle_contacts(0.1, 0.1, np.zeros(3), np.zeros(3))
    eq.set_new_contacts(points, normals, MU, Algorithm.LP)
    assert eq.H is None and eq.HD is None
    with pytest.raises(ValidationError):
        eq.check_robust_equilibrium([0., 0., 0.5])


def test_find_static_equilibrium_com():
    eq = _make_equilibrium(Algorithm.PP)
    found, com = eq.find_static_equilibrium_com([-0.05, -0.05, 0.4], [0.05, 0.05, 0.6])
    assert found
    assert eq.check_robust_equilibrium(com)[1]


def test_projection_failure_leaves_state_unchanged(monkeypatch):
    eq = _make_equilibrium(Algorithm.LP)
    G = eq.G_centr.copy()

    def fail(matrix):
        raise RuntimeError("cddlib failure")

    monkeypatch.setattr(ensure_cdd_initialized(), "polyhedron_from_matrix", fail)
    points, normals = generate_rectangle_contacts(0.2, 0.1, np.ones(3), np.zeros(3))
    with pytest.raises(NumericInstabilityError):
        eq.set_new_contacts(points, normals, MU, Algorithm.PP)

    np.testing.assert_array_equal(eq.G_centr, G)
    assert eq.H is None and eq.HD is None
    assert eq.algorithm is Algorithm.LP
