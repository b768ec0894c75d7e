"""Module with a data class object which represents a principal axis."""

from dataclasses import dataclass

import numpy as np

from .base import DataBase

__all__ = ["PCAxis"]


@dataclass(eq=False)
class PCAxis(DataBase):
    """Principal component summary of a 3D point cloud.

    Attributes
    ----------
    id : int
        Index of the axis in the list of axes
    center : np.ndarray
        (3) Average position of the point cloud
    direction : np.ndarray
        (3) Unit vector along the principal component
    eigenvalues : np.ndarray
        (3) Variance along each of the principal components, largest first
    """

    id: int = -1
    center: np.ndarray = None
    direction: np.ndarray = None
    eigenvalues: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("center", 3), ("direction", 3), ("eigenvalues", 3))

    # Attributes specifying coordinates
    _pos_attrs = ("center",)

    # Attributes specifying vector components
    _vec_attrs = ("direction",)

    # Index attributes
    _index_attrs = ("id",)

    @classmethod
    def from_points(cls, points, id=-1):
        """Builds a principal axis from a point cloud.

        Parameters
        ----------
        points : np.ndarray
            (N, 3) Point coordinates, N > 1
        id : int, default -1
            Axis index

        Returns
        -------
        PCAxis
            Principal axis of the point cloud
        """
        points = np.asarray(points, dtype=np.float64)
        assert len(points) > 1, "Need at least two points to compute an axis."

        # Eigen-decompose the covariance matrix, order the components
        center = np.mean(points, axis=0)
        w, v = np.linalg.eigh(np.cov(points.T))
        w, v = np.flip(w), np.fliplr(v).T

        return cls(
            id=id, center=center, direction=v[0], eigenvalues=np.clip(w, 0.0, None)
        )
