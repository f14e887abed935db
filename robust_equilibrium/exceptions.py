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


class ValidationError(ValueError):
  """Raised on malformed contacts, unsupported robustness thresholds
     or queries that do not apply to the selected algorithm."""

  def __init__(self, m):
    ValueError.__init__(self, m)
    self.message = m

  def __str__(self):
    return self.message


class NumericInstabilityError(RuntimeError):
  """Raised when cddlib fails to convert a cone into inequalities."""

  def __init__(self, m):
    RuntimeError.__init__(self, m)
    self.message = m

  def __str__(self):
    return self.message
