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

"""Problem formulations behind each equilibrium algorithm.

Every formulation exposes the same three methods, taking the
`StaticEquilibrium` instance as first argument:

- `robustness(eq, com)` returns (status, robustness)
- `check_equilibrium(eq, com)` returns (status, equilibrium)
- `extremum_over_line(eq, a, a0, b0)` returns (status, com)

In all the LPs below, G is the matrix whose columns are the gravito-inertial
wrench generators and D c + d is the wrench balancing gravity for a CoM at c.
"""

import numpy as np

from .exceptions import ValidationError
from .lp_solvers import LPStatus
from .printing import Verbosity

UNBOUNDED_THRESHOLD = -1e7


def interpret_dual_status(status):
  """Status of a primal problem from the status of its dual: an infeasible
  dual means an unbounded primal and vice versa."""
  if status is LPStatus.INFEASIBLE:
    return LPStatus.UNBOUNDED
  elif status is LPStatus.UNBOUNDED:
    return LPStatus.INFEASIBLE
  return status


class Formulation(object):

  """Base formulation, answering no query."""

  name = None
  requires_polytope = False

  def robustness(self, eq, com):
    raise ValidationError("compute_equilibrium_robustness is not implemented for the {} algorithm"
                          .format(self.name))

  def check_equilibrium(self, eq, com):
    raise ValidationError("check_robust_equilibrium is only implemented for the PP algorithm, not {}"
                          .format(self.name))

  def extremum_over_line(self, eq, a, a0, b0):
    raise ValidationError("find_extremum_over_line is not implemented for the {} algorithm"
                          .format(self.name))


class PrimalLP(Formulation):

  name = 'LP'

  def robustness(self, eq, com):
    """Solve:
          find          b, b0
          minimize      -b0
          subject to    D c + d <= G b    <= D c + d
                        0       <= b - b0 <= Inf
    """
    G = eq.G_centr
    m = G.shape[1]
    c = np.zeros((m+1,))
    c[m] = -1.0
    lb = -np.inf*np.ones((m+1,))
    ub = np.inf*np.ones((m+1,))

    A = np.zeros((6+m, m+1))
    A[:6, :m] = G
    A[6:, :m] = np.eye(m)
    A[6:, m] = -1.0
    Alb = np.zeros((6+m,))
    Alb[:6] = eq.D.dot(com) + eq.d
    Aub = np.inf*np.ones((6+m,))
    Aub[:6] = Alb[:6]

    status, _ = eq.solver.solve(c, lb, ub, A, Alb, Aub)
    if status is LPStatus.OPTIMAL:
      return status, eq.convert_b0_to_emax(-eq.solver.get_objective_value())

    eq.printer("Primal LP problem could not be solved: {}".format(status.name),
               Verbosity.debug)
    return status, None

  def extremum_over_line(self, eq, a, a0, b0):
    """Solve:
          find          b, p
          minimize      -p
          subject to    D (a p + a0) + d <= G (b + b0) <= D (a p + a0) + d
                        0                <= b          <= Inf
    """
    G = eq.G_centr
    m = G.shape[1]
    c = np.zeros((m+1,))
    c[m] = -1.0
    lb = np.zeros((m+1,))
    lb[m] = -np.inf
    ub = np.inf*np.ones((m+1,))

    A = np.zeros((6, m+1))
    A[:, :m] = G
    A[:, m] = -eq.D.dot(a)
    Alb = eq.D.dot(a0) + eq.d - G.dot(np.ones((m,)))*b0
    Aub = Alb.copy()

    status, x = eq.solver.solve(c, lb, ub, A, Alb, Aub)
    if status is LPStatus.OPTIMAL:
      eq.record_lp('LP_extremum_over_line', c, lb, ub, A, Alb, Aub, x)
      return status, a0 + a*x[m]

    eq.printer("Primal LP problem could not be solved suggesting that no equilibrium position "
               "with robustness {} exists over the line starting from {} in direction {}, "
               "solver error code: {}".format(eq.convert_b0_to_emax(b0), a0, a, status.name),
               Verbosity.debug)
    return status, a0


class PrimalLPAlt(Formulation):

  name = 'LP2'

  def robustness(self, eq, com):
    """Solve:
          find          b, b0
          minimize      -b0
          subject to    D c + d <= G (b + 1*b0) <= D c + d
                        0       <= b            <= Inf
    """
    G = eq.G_centr
    m = G.shape[1]
    c = np.zeros((m+1,))
    c[m] = -1.0
    lb = np.zeros((m+1,))
    lb[m] = -np.inf
    ub = np.inf*np.ones((m+1,))

    A = np.hstack([G, G.dot(np.ones((m, 1)))])
    Alb = eq.D.dot(com) + eq.d
    Aub = Alb.copy()

    status, _ = eq.solver.solve(c, lb, ub, A, Alb, Aub)
    if status is LPStatus.OPTIMAL:
      return status, eq.convert_b0_to_emax(-eq.solver.get_objective_value())

    eq.printer("Primal LP problem could not be solved: {}".format(status.name),
               Verbosity.debug)
    return status, None


class DualLP(Formulation):

  name = 'DLP'

  def robustness(self, eq, com):
    """Solve:
          find          v
          minimize      (d + D c)' v
          subject to    G' v >= 0
                        1' G' v = 1
    """
    G = eq.G_centr
    m = G.shape[1]
    c = eq.D.dot(com) + eq.d
    lb = -np.inf*np.ones((6,))
    ub = np.inf*np.ones((6,))

    A = np.vstack([G.T, G.dot(np.ones((m,)))])
    Alb = np.zeros((m+1,))
    Alb[m] = 1.0
    Aub = np.inf*np.ones((m+1,))
    Aub[m] = 1.0

    status, _ = eq.solver.solve(c, lb, ub, A, Alb, Aub)
    if status is LPStatus.OPTIMAL:
      return status, eq.convert_b0_to_emax(eq.solver.get_objective_value())

    eq.printer("Dual LP problem for com position {} could not be solved: {}"
               .format(com, status.name), Verbosity.debug)
    return interpret_dual_status(status), None

  def extremum_over_line(self, eq, a, a0, b0):
    """Solve:
          find          v
          minimize      (D a0 + d - G b0)' v
          subject to    0  <= G' v    <= Inf
                        -1 <= a' D' v <= -1
    """
    G = eq.G_centr
    m = G.shape[1]
    c = eq.D.dot(a0) + eq.d - G.dot(np.ones((m,)))*b0
    lb = -np.inf*np.ones((6,))
    ub = np.inf*np.ones((6,))

    A = np.vstack([G.T, eq.D.dot(a)])
    Alb = np.zeros((m+1,))
    Alb[m] = -1.0
    Aub = np.inf*np.ones((m+1,))
    Aub[m] = -1.0

    status, v = eq.solver.solve(c, lb, ub, A, Alb, Aub)
    if status is LPStatus.OPTIMAL:
      p = eq.solver.get_objective_value()
      eq.record_lp('DLP_extremum_over_line', c, lb, ub, A, Alb, Aub, v)
      if not eq.solver.supports_native_unbounded_detection() and p < UNBOUNDED_THRESHOLD:
        eq.printer("Dual LP problem over the line starting from {} in direction {} has large "
                   "negative objective value {}, suggesting it is probably unbounded"
                   .format(a0, a, p), Verbosity.debug)
        status = LPStatus.UNBOUNDED
      return status, a0 + a*p

    eq.printer("Dual LP problem could not be solved suggesting that no equilibrium position "
               "with robustness {} exists over the line starting from {} in direction {}, "
               "solver error code: {}".format(eq.convert_b0_to_emax(b0), a0, a, status.name),
               Verbosity.debug)
    return interpret_dual_status(status), a0


class PolytopeProjection(Formulation):

  name = 'PP'
  requires_polytope = True

  def check_equilibrium(self, eq, com):
    res = eq.HD.dot(com) + eq.Hd
    return LPStatus.OPTIMAL, bool(np.all(res <= eq.h))


class NotImplementedFormulation(Formulation):

  """Declared algorithms that have no implementation yet"""

  def __init__(self, name):
    self.name = name

  def robustness(self, eq, com):
    raise NotImplementedError("Algorithm {} not implemented yet".format(self.name))

  def check_equilibrium(self, eq, com):
    raise NotImplementedError("Algorithm {} not implemented yet".format(self.name))

  def extremum_over_line(self, eq, a, a0, b0):
    raise NotImplementedError("Algorithm {} not implemented yet".format(self.name))
