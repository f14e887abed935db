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
from functools import partial

import numpy as np

from .cone_projection import cone_span_to_face, ensure_cdd_initialized
from .exceptions import ValidationError, NumericInstabilityError
from .formulations import (PrimalLP, PrimalLPAlt, DualLP, PolytopeProjection,
                           NotImplementedFormulation)
from .lp_solvers import LPStatus, get_new_solver
from .printing import Verbosity, Printer
from .utils import date_time_string, uniform
from .wrench_cone import centroidal_cone_generators, gravity_wrench


@unique
class Algorithm(Enum):

  """Algorithms available to test static equilibrium."""

  LP = 1    # primal linear program
  LP2 = 2   # primal linear program, with the margin factored out of the cone
  DLP = 3   # dual linear program
  PP = 4    # polytope projection
  IP = 5    # incremental projection, not implemented
  DIP = 6   # incremental projection of the dual, not implemented


def make_formulation(algorithm):
  if algorithm is Algorithm.LP:
    return PrimalLP()
  elif algorithm is Algorithm.LP2:
    return PrimalLPAlt()
  elif algorithm is Algorithm.DLP:
    return DualLP()
  elif algorithm is Algorithm.PP:
    return PolytopeProjection()
  elif algorithm in (Algorithm.IP, Algorithm.DIP):
    return NotImplementedFormulation(algorithm.name)
  raise ValidationError("Unknown algorithm, please use a value supplied in enum")


def as_vector(vec):
  vec = np.asarray(vec, dtype=float)
  if vec.size != 3:
    raise ValidationError("Expected a 3d vector, got shape {}".format(vec.shape))
  return vec.reshape((3,))


class StaticEquilibrium(object):

  """Test the (robust) static equilibrium of a rigid body in contact with
  the environment. Friction cones are linearized and mapped into the 6d
  space of gravito-inertial wrenches; each query then solves one linear
  program (or, for the PP algorithm, evaluates precomputed inequalities).

  You need to first set the contacts with `set_new_contacts`, then query
  the robustness of CoM positions. Every query returns a status that must
  be checked before using the value returned alongside it."""

  def __init__(self, name, mass, generators_per_contact, solver='scipy',
               algorithm=Algorithm.LP, use_warm_start=True,
               verbosity=Verbosity.info, fname_lps=None):
    """The default constructor.

    :param name: Name used to prefix messages
    :param mass: Mass of the body
    :param generators_per_contact: Number of edges of each linearized friction cone
    :param solver: LP backend, 'scipy', 'cvxopt' or an LPSolver instance
    :param algorithm: Algorithm used until contacts are set with another one
    :param use_warm_start: Warm-start hint forwarded to the LP backend
    :param verbosity: Verbosity of the output. Default to `info`.
    :param fname_lps: If set, successful line searches save their LP
                      to files prefixed by it
    :type mass: double
    :type generators_per_contact: int
    :type algorithm: Algorithm
    :type verbosity: Verbosity
    """
    self.name = name
    self.printer = Printer(verbosity, name)

    if generators_per_contact < 3:
      self.printer("Algorithm cannot work with less than 3 generators per contact, using 3",
                   Verbosity.warning)
      generators_per_contact = 3

    self.generators_per_contact = generators_per_contact
    self.mass = mass
    self.fname_lps = fname_lps
    self.nr_recorded_lps = 0

    self.solver = get_new_solver(solver, verbosity)
    self.solver.set_use_warm_start(use_warm_start)

    self.D, self.d = gravity_wrench(mass)

    self.clear_contacts()
    self.select_algorithm(algorithm)

  def clear_contacts(self):
    """Remove all contacts"""
    self.G_centr = np.zeros((6, 0))
    self.b0_to_emax_coefficient = None
    self.H, self.h = None, None
    self.HD, self.Hd = None, None

  def select_algorithm(self, algorithm):
    formulation = make_formulation(algorithm)
    if formulation.requires_polytope:
      ensure_cdd_initialized()

    self.algorithm = algorithm
    self.formulation = formulation
    self.robustness = partial(formulation.robustness, self)
    self.check_equilibrium = partial(formulation.check_equilibrium, self)
    self.extremum_over_line = partial(formulation.extremum_over_line, self)

  def nr_generators(self):
    return self.G_centr.shape[1]

  def set_new_contacts(self, points, normals, friction_coefficient, algorithm=None):
    """Replace the contacts. Nothing is modified if this fails.

    :param points: Contact points, one per row
    :param normals: Unit contact normals, one per row
    :param friction_coefficient: Friction coefficient of all contacts
    :param algorithm: Algorithm to use from now on. Defaults to the current one.
    :type points: np.array(c, 3)
    :type normals: np.array(c, 3)
    :type algorithm: Algorithm
    :returns: True
    :raises NotImplementedError: For the IP and DIP algorithms
    :raises ValidationError: If contacts are malformed
    :raises NumericInstabilityError: If the PP algorithm cannot project the cone
    """
    if algorithm is None:
      algorithm = self.algorithm

    formulation = make_formulation(algorithm)
    if isinstance(formulation, NotImplementedFormulation):
      self.printer("Algorithm {} not implemented yet".format(algorithm.name), Verbosity.error)
      raise NotImplementedError("Algorithm {} not implemented yet".format(algorithm.name))

    if friction_coefficient < 0:
      raise ValidationError("Friction coefficient should be positive, got {}"
                            .format(friction_coefficient))

    try:
      G, coefficient = centroidal_cone_generators(points, normals, friction_coefficient,
                                                  self.generators_per_contact)
    except ValidationError as e:
      self.printer(e.message, Verbosity.error)
      raise

    H, h, HD, Hd = None, None, None, None
    if formulation.requires_polytope and G.shape[1] > 0:
      try:
        H, h = cone_span_to_face(G)
      except NumericInstabilityError as e:
        self.printer(e.message, Verbosity.error)
        raise
      HD, Hd = H.dot(self.D), H.dot(self.d)
      self.printer("Projected {} generators into {} inequalities".format(G.shape[1], H.shape[0]),
                   Verbosity.debug)

    self.select_algorithm(algorithm)
    self.G_centr = G
    self.b0_to_emax_coefficient = coefficient
    self.H, self.h = H, h
    self.HD, self.Hd = HD, Hd
    return True

  def compute_equilibrium_robustness(self, com):
    """Compute the robustness of the equilibrium of a CoM position.
    Positive values mean robust equilibrium.

    :param com: CoM position
    :returns: (status, robustness), robustness is None unless status is OPTIMAL
    :raises ValidationError: With the PP algorithm
    """
    if self.nr_generators() == 0:
      return LPStatus.INFEASIBLE, None
    return self.robustness(as_vector(com))

  def check_robust_equilibrium(self, com, e_max=0.0):
    """Check if a CoM position is in equilibrium. Only for the PP algorithm.

    :param com: CoM position
    :param e_max: Desired robustness, only 0 is supported
    :returns: (status, equilibrium)
    :raises ValidationError: If e_max is not 0 or the algorithm is not PP
    """
    if self.nr_generators() == 0:
      return LPStatus.OPTIMAL, False
    if e_max != 0.0:
      raise ValidationError("check_robust_equilibrium with e_max != 0 not implemented yet")
    return self.check_equilibrium(as_vector(com))

  def find_extremum_over_line(self, a, a0, e_max=0.0):
    """Find the extremal CoM position a0 + a*p in equilibrium with
    robustness e_max, maximizing p.

    :param a: Direction of the line
    :param a0: Origin of the line
    :param e_max: Desired robustness
    :returns: (status, com), com is a0 unless the search succeeded
    :raises ValidationError: With the LP2 and PP algorithms
    """
    a, a0 = as_vector(a), as_vector(a0)
    if self.nr_generators() == 0:
      return LPStatus.INFEASIBLE, a0
    return self.extremum_over_line(a, a0, self.convert_emax_to_b0(e_max))

  def find_extremum_in_direction(self, direction, e_max=0.0):
    """Find the extremal CoM position in equilibrium in a given direction.

    :raises NotImplementedError: Whenever contacts are set
    """
    if self.nr_generators() == 0:
      return LPStatus.INFEASIBLE, None
    self.printer("find_extremum_in_direction not implemented yet", Verbosity.error)
    raise NotImplementedError("find_extremum_in_direction not implemented yet")

  def find_static_equilibrium_com(self, lower_bounds, upper_bounds, max_iter=1000):
    """Sample CoM positions between the bounds until one in equilibrium is found.

    :returns: (found, com) with com the last position tried
    """
    com = None
    for i in range(max_iter):
      com = uniform(lower_bounds, upper_bounds)
      if self.formulation.requires_polytope:
        status, stable = self.check_robust_equilibrium(com)
      else:
        status, robustness = self.compute_equilibrium_robustness(com)
        stable = status is LPStatus.OPTIMAL and robustness > 0
      if status is LPStatus.OPTIMAL and stable:
        self.printer("Found CoM in equilibrium after {} samples".format(i+1), Verbosity.debug)
        return True, com
    self.printer("Could not find a CoM in static equilibrium in {} iterations".format(max_iter),
                 Verbosity.info)
    return False, com

  def record_lp(self, tag, c, lb, ub, A, Alb, Aub, x):
    if self.fname_lps is None:
      return
    self.nr_recorded_lps += 1
    fname = "{}_{}_{}_{:04d}.npz".format(self.fname_lps, tag, date_time_string(),
                                         self.nr_recorded_lps)
    self.solver.write_lp_to_file(fname, c, lb, ub, A, Alb, Aub, x)
    self.printer("Saved LP to {}".format(fname), Verbosity.debug)

  def convert_b0_to_emax(self, b0):
    return b0*self.b0_to_emax_coefficient

  def convert_emax_to_b0(self, emax):
    #Frictionless cones have a zero coefficient: only e_max = 0 is meaningful
    if emax == 0.0:
      return 0.0
    if self.b0_to_emax_coefficient == 0.0:
      raise ValidationError("Cannot reach robustness {} with frictionless contacts".format(emax))
    return emax/self.b0_to_emax_coefficient
