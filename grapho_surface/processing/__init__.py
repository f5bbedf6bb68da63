"""
Processing functions for surface meshes.

This module provides the height color ramp applied to built surfaces.
"""

from .coloring import *
