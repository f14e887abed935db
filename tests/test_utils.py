import numpy as np
import pytest

from robust_equilibrium.utils import (
    cross_m,
    euler_matrix,
    generate_rectangle_contacts,
    uniform,
    date_time_string,
)
from robust_equilibrium.exceptions import ValidationError


def test_cross_m_is_cross_product():
    a = np.array([1., -2., 0.5])
    b = np.array([0.3, 0.1, -4.])
    np.testing.assert_allclose(cross_m(a).dot(b), np.cross(a, b))


def test_euler_matrix_is_rotation():
    R = euler_matrix(0.4, -1.1, 2.3)
    np.testing.assert_allclose(R.dot(R.T), np.eye(3), atol=1e-12)
    assert np.linalg.det(R) == pytest.approx(1.0)


def test_euler_matrix_roll():
    R = euler_matrix(np.pi/2, 0., 0.)
    np.testing.assert_allclose(R.dot([0., 0., 1.]), [0., -1., 0.], atol=1e-12)


def test_rectangle_contacts():
    pos = np.array([1., 2., 0.5])
    p, N = generate_rectangle_contacts(0.2, 0.1, pos, np.zeros(3))
    np.testing.assert_allclose(p, [[1.2, 2.1, 0.5],
                                   [1.2, 1.9, 0.5],
                                   [0.8, 1.9, 0.5],
                                   [0.8, 2.1, 0.5]])
    np.testing.assert_allclose(N, np.tile([0., 0., 1.], (4, 1)))


def test_rotated_rectangle_contacts():
    p, N = generate_rectangle_contacts(0.1, 0.1, np.zeros(3), [np.pi/2, 0., 0.])
    np.testing.assert_allclose(N, np.tile([0., -1., 0.], (4, 1)), atol=1e-12)
    # corners stay in the plane orthogonal to the normal
    np.testing.assert_allclose(p.dot(N[0]), np.zeros(4), atol=1e-12)


def test_uniform_within_bounds():
    lower, upper = np.array([-1., 0., 2.]), np.array([1., 0.5, 3.])
    for _ in range(20):
        x = uniform(lower, upper)
        assert np.all(x >= lower) and np.all(x <= upper)


def test_date_time_string():
    s = date_time_string()
    assert len(s) == 15 and s[8] == '_'


def test_uniform_rejects_mismatched_bounds():
    with pytest.raises(ValidationError):
        uniform([0., 0.], [1., 1., 1.])
