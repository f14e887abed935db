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

from enum import IntEnum, unique

@unique
class Verbosity(IntEnum):

  """Enum representing verbosity levels"""
  none = 0
  error = 1
  warning = 2
  info = 3
  debug = 4

_PREFIXES = {
    Verbosity.error: "[ERROR] ",
    Verbosity.warning: "[WARNING] ",
    Verbosity.info: "",
    Verbosity.debug: "[DEBUG] ",
}

class Printer(object):

  """Print messages tagged with a verbosity level, dropping those
     that are more verbose than the configured level."""

  def __init__(self, verbosity, name=None):
    """Initialize with verbosity level and an optional name that
       prefixes every message"""
    self.verbosity = verbosity
    self.name = name

  def __call__(self, text, verbosity):
    """Print only if verbosity level is higher
       than current verbosity"""
    if verbosity <= self.verbosity:
      prefix = _PREFIXES.get(verbosity, "")
      if self.name:
        prefix += "{}: ".format(self.name)
      print(prefix + str(text))
