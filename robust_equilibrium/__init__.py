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

from .static_equilibrium import StaticEquilibrium, Algorithm
from .lp_solvers import LPStatus, LPSolver, ScipySolver, CvxoptSolver, get_new_solver
from .cone_projection import cone_span_to_face, ensure_cdd_initialized
from .wrench_cone import centroidal_cone_generators, gravity_wrench, GRAVITY
from .exceptions import ValidationError, NumericInstabilityError
from .printing import Verbosity, Printer
from .utils import cross_m, normalize, euler_matrix, generate_rectangle_contacts
