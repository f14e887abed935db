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
import robust_equilibrium as req

def main():
  #Two feet, the left one slightly tilted
  p_l, N_l = req.generate_rectangle_contacts(0.1, 0.05, np.array([0., 0.1, 0.]),
                                             np.array([0.1, 0., 0.]))
  p_r, N_r = req.generate_rectangle_contacts(0.1, 0.05, np.array([0., -0.1, 0.]),
                                             np.zeros(3))
  points, normals = np.vstack([p_l, p_r]), np.vstack([N_l, N_r])

  mu = 0.5
  mass = 60.

  for alg in [req.Algorithm.LP, req.Algorithm.LP2, req.Algorithm.DLP]:
    eq = req.StaticEquilibrium(alg.name, mass, 8, algorithm=alg)
    eq.set_new_contacts(points, normals, mu)

    for com in [np.array([0., 0., 0.8]), np.array([0.3, 0., 0.8])]:
      status, robustness = eq.compute_equilibrium_robustness(com)
      print("{}: CoM {} -> {} {}".format(alg.name, com, status.name, robustness))

    status, com = eq.find_extremum_over_line(np.array([1., 0., 0.]),
                                             np.array([0., 0., 0.8]), 0.)
    print("{}: extremum over x axis {} {}".format(alg.name, status.name, com))

  eq = req.StaticEquilibrium("PP", mass, 8, algorithm=req.Algorithm.PP)
  eq.set_new_contacts(points, normals, mu)
  print("PP: {} inequalities".format(eq.H.shape[0]))
  for com in [np.array([0., 0., 0.8]), np.array([0.3, 0., 0.8])]:
    status, equilibrium = eq.check_robust_equilibrium(com)
    print("PP: CoM {} -> {}".format(com, equilibrium))

if __name__ == '__main__':
  main()
