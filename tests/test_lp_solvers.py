import numpy as np
import pytest

from robust_equilibrium.exceptions import ValidationError
from robust_equilibrium.formulations import interpret_dual_status
from robust_equilibrium.lp_solvers import (
    LPStatus,
    LPSolver,
    ScipySolver,
    get_new_solver,
    split_constraints,
)

inf = np.inf


def _small_lp():
    # minimize -x - y  s.t.  x + y <= 1,  x - y = 0,  x, y >= 0
    c = np.array([-1., -1.])
    lb = np.zeros(2)
    ub = inf*np.ones(2)
    A = np.array([[1., 1.], [1., -1.]])
    Alb = np.array([-inf, 0.])
    Aub = np.array([1., 0.])
    return c, lb, ub, A, Alb, Aub


def test_split_constraints():
    A = np.array([[1., 0.], [0., 1.], [1., 1.]])
    Alb = np.array([1., -inf, 0.])
    Aub = np.array([1., 2., 3.])
    A_eq, b_eq, A_ub, b_ub = split_constraints(A, Alb, Aub)
    np.testing.assert_allclose(A_eq, [[1., 0.]])
    np.testing.assert_allclose(b_eq, [1.])
    np.testing.assert_allclose(A_ub, [[0., 1.], [1., 1.], [-1., -1.]])
    np.testing.assert_allclose(b_ub, [2., 3., 0.])


def _check_small_lp(solver):
    status, x = solver.solve(*_small_lp())
    assert status is LPStatus.OPTIMAL
    np.testing.assert_allclose(x, [0.5, 0.5], atol=1e-6)
    assert solver.get_objective_value() == pytest.approx(-1.0, abs=1e-6)


def test_scipy_optimal():
    _check_small_lp(ScipySolver())


def test_cvxopt_optimal():
    pytest.importorskip("cvxopt")
    _check_small_lp(get_new_solver('cvxopt'))


def test_scipy_infeasible():
    # x >= 1 and x <= 0
    status, x = ScipySolver().solve(np.array([1.]), np.array([1.]), np.array([inf]),
                                    np.array([[1.]]), np.array([-inf]), np.array([0.]))
    assert status is LPStatus.INFEASIBLE
    assert x is None


def test_scipy_unbounded():
    # minimize -x with x >= 0 and x - y = 0
    status, x = ScipySolver().solve(np.array([-1., 0.]), np.zeros(2), inf*np.ones(2),
                                    np.array([[1., -1.]]), np.zeros(1), np.zeros(1))
    assert status is LPStatus.UNBOUNDED
    assert x is None


def test_write_lp_to_file(tmp_path):
    fname = str(tmp_path / "lp.npz")
    ScipySolver().write_lp_to_file(fname, *_small_lp(), x=np.array([0.5, 0.5]))
    data = np.load(fname)
    np.testing.assert_allclose(data['x'], [0.5, 0.5])
    np.testing.assert_allclose(data['A'], _small_lp()[3])


def test_get_new_solver():
    assert isinstance(get_new_solver('scipy'), ScipySolver)
    solver = ScipySolver()
    assert get_new_solver(solver) is solver
    with pytest.raises(ValidationError):
        get_new_solver('qpoases')


def test_base_solver_is_abstract():
    with pytest.raises(NotImplementedError):
        LPSolver().solve(*_small_lp())


def test_warm_start_hint():
    solver = ScipySolver()
    solver.set_use_warm_start(True)
    assert solver.use_warm_start
    _check_small_lp(solver)


def test_interpret_dual_status():
    assert interpret_dual_status(LPStatus.INFEASIBLE) is LPStatus.UNBOUNDED
    assert interpret_dual_status(LPStatus.UNBOUNDED) is LPStatus.INFEASIBLE
    assert interpret_dual_status(LPStatus.OPTIMAL) is LPStatus.OPTIMAL
    assert interpret_dual_status(LPStatus.ERROR) is LPStatus.ERROR
