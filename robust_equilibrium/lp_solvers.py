#!/usr/bin/env python
# -*- coding: utf-8 -*-

# Copyright 2015-2017 CNRS-AIST JRL

# This file is part of RobustEquilibrium.

# RobustEquilibrium is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# RobustEquilibrium is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with RobustEquilibrium.  If not, see <http://www.gnu.org/licenses/>.

from enum import Enum, unique

import numpy as np
from scipy.optimize import linprog

from .exceptions import ValidationError
from .printing import Verbosity, Printer

try:
  from cvxopt import matrix, solvers
  CVXOPT_AVAILABLE = True
except ImportError:
  CVXOPT_AVAILABLE = False


@unique
class LPStatus(Enum):

  """Outcome of a linear program"""

  OPTIMAL = 0
  INFEASIBLE = 1
  UNBOUNDED = 2
  MAX_ITER_REACHED = 3
  ERROR = 4
  UNKNOWN = 5


def split_constraints(A, Alb, Aub):
  """Turn the double-sided constraints Alb <= A x <= Aub into
  an equality system and a one-sided inequality system.

  :returns: (A_eq, b_eq, A_ub, b_ub), where the matrices can have zero rows
  """
  A = np.atleast_2d(np.asarray(A, dtype=float))
  Alb = np.asarray(Alb, dtype=float).ravel()
  Aub = np.asarray(Aub, dtype=float).ravel()

  eq_mask = Alb == Aub
  upper_mask = ~eq_mask & np.isfinite(Aub)
  lower_mask = ~eq_mask & np.isfinite(Alb)

  A_eq, b_eq = A[eq_mask], Alb[eq_mask]
  A_ub = np.vstack([A[upper_mask], -A[lower_mask]])
  b_ub = np.hstack([Aub[upper_mask], -Alb[lower_mask]])
  return A_eq, b_eq, A_ub, b_ub


class LPSolver(object):

  """Base class of the linear program solvers. A solver finds x solving:

      minimize     c' x
      subject to   lb  <= x   <= ub
                   Alb <= A x <= Aub

  Infinite bounds are given as +/- np.inf, and rows with Alb == Aub
  are treated as equalities. Subclasses must implement `solve`."""

  name = 'abstract'

  def __init__(self, verbosity=Verbosity.error):
    self.printer = Printer(verbosity, self.name)
    self.use_warm_start = False
    self.objective_value = None

  def set_use_warm_start(self, use_warm_start):
    """Hint the backend that successive problems share their structure.
       Backends without warm-start support ignore it."""
    self.use_warm_start = bool(use_warm_start)

  def supports_native_unbounded_detection(self):
    """Whether an UNBOUNDED status can be trusted from this backend. When
       it cannot, callers fall back on checking for huge objective values."""
    return True

  def solve(self, c, lb, ub, A, Alb, Aub):
    """Solve the linear program.

       :returns: (status, x) where x is None unless status is OPTIMAL
       :rtype: (LPStatus, np.array(n,))"""
    raise NotImplementedError("You must re-implement this function")

  def get_objective_value(self):
    """Objective value of the last problem solved to optimality"""
    return self.objective_value

  def write_lp_to_file(self, fname, c, lb, ub, A, Alb, Aub, x=None):
    """Save the problem data (and optionally a solution) as an npz archive
       :param fname: Filename to which the problem is saved
       :type fname: string"""
    arrays = dict(c=c, lb=lb, ub=ub, A=A, Alb=Alb, Aub=Aub)
    if x is not None:
      arrays['x'] = x
    np.savez(fname, **arrays)


class ScipySolver(LPSolver):

  """Solve linear programs with scipy's HiGHS interface. Ships with scipy,
  hence is the default backend."""

  name = 'scipy'

  statuses = {0: LPStatus.OPTIMAL,
              1: LPStatus.MAX_ITER_REACHED,
              2: LPStatus.INFEASIBLE,
              3: LPStatus.UNBOUNDED,
              4: LPStatus.ERROR}

  def __init__(self, verbosity=Verbosity.error, method='highs'):
    LPSolver.__init__(self, verbosity)
    self.method = method

  def solve(self, c, lb, ub, A, Alb, Aub):
    c = np.asarray(c, dtype=float).ravel()
    A_eq, b_eq, A_ub, b_ub = split_constraints(A, Alb, Aub)
    bounds = [(None if np.isinf(l) else l, None if np.isinf(u) else u)
              for l, u in zip(np.asarray(lb, dtype=float).ravel(),
                              np.asarray(ub, dtype=float).ravel())]

    kwargs = dict(bounds=bounds, method=self.method)
    if A_eq.shape[0] > 0:
      kwargs.update(A_eq=A_eq, b_eq=b_eq)
    if A_ub.shape[0] > 0:
      kwargs.update(A_ub=A_ub, b_ub=b_ub)

    res = linprog(c, **kwargs)
    #HiGHS presolve cannot always tell infeasible from unbounded
    if res.status == 4 and 'unbounded or infeasible' in res.message.lower():
      self.printer("Presolve was inconclusive, solving again without it",
                   Verbosity.debug)
      res = linprog(c, options={'presolve': False}, **kwargs)

    status = self.statuses.get(res.status, LPStatus.UNKNOWN)
    if status is LPStatus.OPTIMAL:
      self.objective_value = res.fun
      return status, res.x

    self.objective_value = None
    self.printer("linprog terminated in {} state: {}".format(status.name, res.message),
                 Verbosity.debug)
    return status, None


class CvxoptSolver(LPSolver):

  """Solve linear programs with cvxopt's interior point method. Bounds are
  added to the inequality constraints. Requires cvxopt."""

  name = 'cvxopt'

  statuses = {'optimal': LPStatus.OPTIMAL,
              'primal infeasible': LPStatus.INFEASIBLE,
              'dual infeasible': LPStatus.UNBOUNDED,
              'unknown': LPStatus.UNKNOWN}

  def __init__(self, verbosity=Verbosity.error):
    if not CVXOPT_AVAILABLE:
      raise ValueError("Cannot find cvxopt. Make sure you install cvxopt.")
    LPSolver.__init__(self, verbosity)
    solvers.options['show_progress'] = False

  def solve(self, c, lb, ub, A, Alb, Aub):
    c = np.asarray(c, dtype=float).ravel()
    lb = np.asarray(lb, dtype=float).ravel()
    ub = np.asarray(ub, dtype=float).ravel()
    n = c.size
    A_eq, b_eq, A_ub, b_ub = split_constraints(A, Alb, Aub)

    #Bounds as -x <= -lb and x <= ub
    eye = np.eye(n)
    lower_mask, upper_mask = np.isfinite(lb), np.isfinite(ub)
    g = np.vstack([A_ub, -eye[lower_mask], eye[upper_mask]])
    h = np.hstack([b_ub, -lb[lower_mask], ub[upper_mask]])

    args = [matrix(c.reshape((n, 1))),
            matrix(g), matrix(h.reshape((h.size, 1)))]
    if A_eq.shape[0] > 0:
      args.extend([matrix(A_eq), matrix(b_eq.reshape((b_eq.size, 1)))])

    try:
      sol = solvers.lp(*args)
    except (ValueError, ArithmeticError) as e:
      self.objective_value = None
      self.printer("cvxopt failed: {}".format(e), Verbosity.error)
      return LPStatus.ERROR, None

    status = self.statuses.get(sol['status'], LPStatus.UNKNOWN)
    if status is LPStatus.OPTIMAL:
      self.objective_value = sol['primal objective']
      return status, np.array(sol['x']).ravel()

    self.objective_value = None
    self.printer("cvxopt terminated in {} state".format(sol['status']),
                 Verbosity.debug)
    return status, None


def get_new_solver(solver, verbosity=Verbosity.error):
  """Build a solver from its name. Solver instances are returned as is."""
  if isinstance(solver, LPSolver):
    return solver
  if solver == 'scipy':
    return ScipySolver(verbosity)
  elif solver == 'cvxopt':
    return CvxoptSolver(verbosity)
  raise ValidationError("Only 'scipy' or 'cvxopt' solvers are available")
