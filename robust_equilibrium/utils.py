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

import time

import numpy as np

from .exceptions import ValidationError


def cross_m(vec):
  return np.array([[0, -vec.item(2), vec.item(1)],
                   [vec.item(2), 0, -vec.item(0)],
                   [-vec.item(1), vec.item(0), 0]])


def normalize(vec):
  return vec/(np.linalg.norm(vec))


def euler_matrix(roll, pitch, yaw):
  """Rotation matrix of static x-y-z Euler angles, i.e.
     R = Rz(yaw) Ry(pitch) Rx(roll)"""
  si, sj, sk = np.sin(roll), np.sin(pitch), np.sin(yaw)
  ci, cj, ck = np.cos(roll), np.cos(pitch), np.cos(yaw)
  cc, cs = ci*ck, ci*sk
  sc, ss = si*ck, si*sk

  return np.array([[cj*ck, sj*sc-cs, sj*cc+ss],
                   [cj*sk, sj*ss+cc, sj*cs-sc],
                   [-sj, cj*si, cj*ci]])


def generate_rectangle_contacts(lx, ly, pos, rpy):
  """Generate the 4 contact points and the associated normals of a
  rectangular contact surface.

  :param lx: Half-length of the rectangle along its local x axis
  :param ly: Half-length of the rectangle along its local y axis
  :param pos: Position of the center of the rectangle in the world frame
  :param rpy: Orientation of the rectangle as roll, pitch, yaw
  :type pos: np.array(3,)
  :type rpy: np.array(3,)
  :returns: (p, N) the (4, 3) contact points and (4, 3) contact normals
  """
  R = euler_matrix(*np.asarray(rpy, dtype=float).ravel())
  local = np.array([[lx, ly, 0.],
                    [lx, -ly, 0.],
                    [-lx, -ly, 0.],
                    [-lx, ly, 0.]])
  p = np.asarray(pos, dtype=float).reshape((1, 3)) + local.dot(R.T)
  n = R.dot(np.array([0., 0., 1.]))
  N = np.vstack([n]*4)
  return p, N


def uniform(lower_bounds, upper_bounds):
  """Sample uniformly between the (elementwise) bounds"""
  lower_bounds = np.asarray(lower_bounds, dtype=float)
  upper_bounds = np.asarray(upper_bounds, dtype=float)
  if lower_bounds.shape != upper_bounds.shape:
    raise ValidationError("Bounds have shapes {} and {}"
                          .format(lower_bounds.shape, upper_bounds.shape))
  return np.random.random(lower_bounds.shape)*(upper_bounds - lower_bounds) + lower_bounds


def date_time_string():
  return time.strftime("%Y%m%d_%H%M%S")
