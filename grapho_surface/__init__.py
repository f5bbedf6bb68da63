"""
Grapho Surface - interactive 3D graphs of functions z = f(x, y).
"""

__version__ = '0.1.0'

# Import main submodules for easy access
from . import config
from . import core
from . import processing
from . import visualization
from .graph import create_graph
from .config import GraphSettings, ViewerConfig, InvalidConfigurationError
