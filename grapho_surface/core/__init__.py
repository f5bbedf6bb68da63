"""
Core functionality for Grapho Surface.

This module contains the data structures and the sampling and meshing
algorithms that the rest of the package builds on.
"""

from .data_model import *
from .sampler import *
from .mesh import *
