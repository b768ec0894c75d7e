"""Active volume boundary definition used to check end point proximity."""

from dataclasses import dataclass

import numpy as np

from cosmictag.utils.globals import DEFAULT_MARGIN

__all__ = ["BoundaryConfig"]


@dataclass(frozen=True)
class BoundaryConfig:
    """Active volume extents and the margins to each of its faces.

    The active volume spans [0, width] along the drift (x) axis,
    [-half_height, half_height] along the vertical (y) axis and [0, length]
    along the beam (z) axis.

    Attributes
    ----------
    half_height : float
        Half of the active volume height
    width : float
        Full width of the active volume along the drift axis
    length : float
        Full length of the active volume along the beam axis
    margin : Tuple[float, float, float]
        Distance from the x, y and z faces under which a point is considered
        to be near a boundary. A single number is shared between all axes.
    """

    half_height: float
    width: float
    length: float
    margin: tuple = (DEFAULT_MARGIN, DEFAULT_MARGIN, DEFAULT_MARGIN)

    def __post_init__(self):
        """Check and cast the margins.

        Raises
        ------
        ValueError
            If the margins are not three finite, non-negative numbers
        """
        margin = self.margin
        if np.isscalar(margin):
            margin = (margin, margin, margin)

        margin = tuple(float(m) for m in margin)
        if len(margin) != 3:
            raise ValueError(f"Must provide one margin per axis, got {margin}.")
        if not all(np.isfinite(m) and m >= 0.0 for m in margin):
            raise ValueError(f"Margins must be finite and non-negative, got {margin}.")

        object.__setattr__(self, "margin", margin)

    @property
    def lower(self):
        """(3) Lower bounds of the active volume."""
        return np.array([0.0, -self.half_height, 0.0])

    @property
    def upper(self):
        """(3) Upper bounds of the active volume."""
        return np.array([self.width, self.half_height, self.length])
