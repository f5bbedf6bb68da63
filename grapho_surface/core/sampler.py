"""
Sampling of a user function over a domain rectangle.
"""

import math
import logging

from .data_model import DomainRectangle

logger = logging.getLogger(__name__)


class DomainSampler:
    """
    Evaluate z = f(x, y) at normalized parameter coordinates.

    A sample is undefined when f returns NaN, returns something that is
    not a number, or raises. Undefined samples come back with z = NaN and
    are counted; they never abort the caller.
    """

    def __init__(self, func, domain: DomainRectangle):
        """
        Initialize a DomainSampler.

        Parameters
        ----------
        func : callable
            Function of two floats returning a number
        domain : DomainRectangle
            Rectangle that (u, v) in [0, 1]^2 is mapped onto
        """
        self.func = func
        self.domain = domain
        self.undefined_count = 0

    def map(self, u, v):
        """
        Map parameter coordinates to world coordinates.

        Parameters
        ----------
        u : float
            Parameter along x, in [0, 1]
        v : float
            Parameter along y, in [0, 1]

        Returns
        -------
        tuple
            (x, y)
        """
        x = self.domain.x_min + u * self.domain.x_range
        y = self.domain.y_min + v * self.domain.y_range
        return x, y

    def evaluate(self, x, y):
        """Return f(x, y) as a float, or NaN if the sample is undefined."""
        try:
            z = float(self.func(x, y))
        except Exception as e:
            logger.debug(f"f({x}, {y}) raised {type(e).__name__}: {e}")
            z = math.nan

        if math.isnan(z):
            self.undefined_count += 1
        return z

    def sample(self, u, v):
        """
        Sample the surface at (u, v).

        Returns
        -------
        tuple
            (x, y, z) with z = NaN for an undefined sample
        """
        x, y = self.map(u, v)
        return x, y, self.evaluate(x, y)
