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

"""Conversion of a polyhedral cone given by its generators (V-representation)
into the inequalities bounding it (H-representation) with cddlib."""

import importlib
import threading

import numpy as np

from .exceptions import NumericInstabilityError

_cdd = None
_cdd_lock = threading.Lock()


def ensure_cdd_initialized():
  """Load cddlib once for the whole process and return the module.
  Loading sets up cddlib's global constants; they live until the
  process exits and are never released."""
  global _cdd
  if _cdd is None:
    with _cdd_lock:
      if _cdd is None:
        try:
          _cdd = importlib.import_module('cdd')
        except ImportError:
          raise ValueError("Cannot find cddlib. Make sure you install pycddlib.")
  return _cdd


def cone_span_to_cdd(S):
  """Build the cddlib generator matrix of the cone spanned by
  the columns of S. Every row is a ray: [0, s_j^T]"""
  cdd = ensure_cdd_initialized()
  S = np.asarray(S, dtype=float)
  rays = np.hstack([np.zeros((S.shape[1], 1)), S.T])
  return cdd.matrix_from_array(rays.tolist(), rep_type=cdd.RepType.GENERATOR)


def cone_span_to_face(S):
  """Compute the inequalities H x <= h of the cone spanned by the columns of S.

  Equalities returned by cddlib are split into two opposite inequalities so
  that the result only contains '<=' constraints.

  :param S: Generators of the cone, one per column
  :type S: np.array(n, m)
  :returns: (H, h)
  :rtype: (np.array(k, n), np.array(k,))
  :raises NumericInstabilityError: If cddlib fails on the input
  """
  cdd = ensure_cdd_initialized()
  S = np.asarray(S, dtype=float)
  V = cone_span_to_cdd(S)

  try:
    poly = cdd.polyhedron_from_matrix(V)
    ineq = cdd.copy_inequalities(poly)
  except (RuntimeError, ValueError) as e:
    raise NumericInstabilityError("numerical instability in cddlib, ill formed polytope: {}".format(e))

  #cddlib gives b + A x >= 0, i.e. -A x <= b
  rows = np.array(ineq.array, dtype=float).reshape((-1, S.shape[0]+1))
  if not np.all(np.isfinite(rows)):
    raise NumericInstabilityError("numerical instability in cddlib, ill formed polytope")

  h = rows[:, 0]
  H = -rows[:, 1:]

  eq_rows = sorted(ineq.lin_set)
  if eq_rows:
    H = np.vstack([H, -H[eq_rows]])
    h = np.hstack([h, -h[eq_rows]])

  #Filter trivial rows such as 0 <= 1
  zero_mask = np.all(H == 0, axis=1)
  return H[~zero_mask], h[~zero_mask]
