"""
Visualization of surface graphs.

This module provides the wire material, the matplotlib viewer and the
optional plotly renderer.
"""

from .material import *
from .viewer import *
from .interactive import *
