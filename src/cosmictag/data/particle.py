"""Module with a data class object which represents a reconstructed particle.

The particle only carries the associations needed to fetch its principal
axes, its hits and its space points from the lists stored in the same entry.
"""

from dataclasses import dataclass

import numpy as np

from .base import DataBase

__all__ = ["Particle"]


@dataclass(eq=False)
class Particle(DataBase):
    """Reconstructed particle trajectory and its associations.

    Attributes
    ----------
    id : int
        Particle ID
    axis_index : np.ndarray
        (A) Indexes of the associated principal axes in the list of axes
    hit_index : np.ndarray
        (H) Indexes of the associated hits in the list of hits
    point_index : np.ndarray
        (P) Indexes of the associated space points in the list of points
    """

    id: int = -1
    axis_index: np.ndarray = None
    hit_index: np.ndarray = None
    point_index: np.ndarray = None

    # Variable-length attributes
    _var_length_attrs = (
        ("axis_index", np.int64),
        ("hit_index", np.int64),
        ("point_index", np.int64),
    )

    # Index attributes
    _index_attrs = ("id", "axis_index", "hit_index", "point_index")
