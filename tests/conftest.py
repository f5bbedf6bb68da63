"""
Shared pytest fixtures for the grapho_surface tests.
"""

import math

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest

from grapho_surface import create_graph


def paraboloid(x, y):
    return x * x + y * y


@pytest.fixture
def unit_settings():
    """Settings of the 4 x 4 paraboloid example on [-1, 1]^2."""
    return {'xMin': -1, 'xMax': 1, 'yMin': -1, 'yMax': 1, 'segments': 4}


@pytest.fixture
def paraboloid_mesh(unit_settings):
    return create_graph(paraboloid, unit_settings)


@pytest.fixture
def holed_mesh():
    """Mesh of sqrt(1 - x^2 - y^2): undefined outside the unit disc."""
    def dome(x, y):
        return math.sqrt(1 - x * x - y * y)
    return create_graph(dome, {'xMin': -1.5, 'xMax': 1.5, 'yMin': -1.5, 'yMax': 1.5,
                               'segments': 6})


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


@pytest.fixture
def infinite_column_mesh():
    """4 x 4 mesh on [-1, 1]^2 whose x = 0 column has height -inf."""
    def log_abs(x, y):
        return -math.inf if x == 0 else math.log(abs(x))
    return create_graph(log_abs, {'xMin': -1, 'xMax': 1, 'yMin': -1, 'yMax': 1,
                                  'segments': 4})
