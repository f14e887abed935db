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

import numpy as np

from .exceptions import ValidationError
from .utils import cross_m, normalize

GRAVITY = np.array([0., 0., -9.81])

EPS_NORMAL = 1e-6
EPS_TANGENT = 1e-5


def contact_tangents(normal):
  """Two unit tangent directions orthogonal to the normal. Y is crossed
  with the normal unless they are (nearly) parallel, then X is used."""
  T1 = np.cross(normal, [0., 1., 0.])
  if np.linalg.norm(T1) < EPS_TANGENT:
    T1 = np.cross(normal, [1., 0., 0.])
  T2 = np.cross(normal, T1)
  return normalize(T1), normalize(T2)


def friction_cone_generators(normal, mu, nr_generators):
  """Linearize the friction cone into nr_generators unit edges.

  :param normal: Unit contact normal
  :param mu: Friction coefficient
  :param nr_generators: Number of edges of the polyhedral cone
  :type normal: np.array(3,)
  :returns: The edges of the cone as columns
  :rtype: np.array(3, nr_generators)
  """
  T1, T2 = contact_tangents(normal)
  angles = [2*np.pi*i/nr_generators for i in range(nr_generators)]
  G = np.vstack([normalize(mu*np.sin(x)*T1 + mu*np.cos(x)*T2 + normal)
                 for x in angles]).T
  return G


def contact_wrench_matrix(point):
  """Matrix mapping a contact force at point to the gravito-inertial wrench"""
  return np.vstack([-np.eye(3), cross_m(-point)])


def b0_to_emax_coefficient(G):
  """Distance between the sum of the edges of a friction cone and its
  boundary, i.e. e_max when b0 = 1. Only depends on mu and the number of
  edges, so any contact of a configuration can be used."""
  f0 = np.sum(G, axis=1)
  return np.linalg.norm(np.cross(f0, G[:, 0]))


def gravity_wrench(mass, gravity=GRAVITY):
  """Compute D, d such that the wrench needed to balance gravity with the
  CoM at c is D c + d.

  :returns: (D, d)
  :rtype: (np.array(6, 3), np.array(6,))
  """
  mg = mass*np.asarray(gravity, dtype=float)
  d = np.zeros((6,))
  d[:3] = mg
  D = np.zeros((6, 3))
  D[3:, :3] = cross_m(-mg)
  return D, d


def check_contacts(points, normals):
  """Validate contact arrays, returning them as (c, 3) float arrays"""
  points = np.atleast_2d(np.asarray(points, dtype=float))
  normals = np.atleast_2d(np.asarray(normals, dtype=float))
  if points.size == 0 and normals.size == 0:
    return np.zeros((0, 3)), np.zeros((0, 3))

  if points.shape[1] != 3 or normals.shape[1] != 3:
    raise ValidationError("Contacts should be (c, 3) arrays, got points {} and normals {}"
                          .format(points.shape, normals.shape))
  if points.shape[0] != normals.shape[0]:
    raise ValidationError("Got {} contact points but {} contact normals"
                          .format(points.shape[0], normals.shape[0]))

  for i, n in enumerate(normals):
    norm = np.linalg.norm(n)
    if abs(norm - 1.0) > EPS_NORMAL:
      raise ValidationError("Contact normals should have norm 1, normal {} has norm {}"
                            .format(i, norm))
  return points, normals


def centroidal_cone_generators(points, normals, mu, nr_generators):
  """Compute the generators of the gravito-inertial wrench cone.

  :param points: Contact points, one per row
  :param normals: Unit contact normals, one per row
  :param mu: Friction coefficient shared by all contacts
  :param nr_generators: Number of edges of each friction cone
  :type points: np.array(c, 3)
  :type normals: np.array(c, 3)
  :returns: (G, coefficient) the generators as a (6, c*nr_generators) array and
            the factor converting b0 to e_max (None without contacts)
  :raises ValidationError: If a normal is not unit or shapes mismatch
  """
  points, normals = check_contacts(points, normals)

  blocks = []
  G = None
  for p, n in zip(points, normals):
    G = friction_cone_generators(n, mu, nr_generators)
    blocks.append(contact_wrench_matrix(p).dot(G))

  if G is None:
    return np.zeros((6, 0)), None

  return np.hstack(blocks), b0_to_emax_coefficient(G)
