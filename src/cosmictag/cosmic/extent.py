"""Estimation of the spatial extent of a trajectory along its principal axis.

The principal axis alone only provides a line and the spread of the charge
along it. When space points are available, the two points with the lowest
and the highest arc length along the axis are used as end points instead.
"""

from dataclasses import dataclass

import numba as nb
import numpy as np

from cosmictag.utils.globals import PCA_EXTENT_SIGMAS

__all__ = ["Extent", "points_to_array", "pca_endpoints", "estimate_extent"]


@dataclass(eq=False)
class Extent:
    """End points bounding a trajectory.

    Attributes
    ----------
    start : np.ndarray
        (3) First end point (lowest arc length)
    end : np.ndarray
        (3) Second end point (highest arc length)
    valid : bool
        Whether the geometry of the trajectory can be used to tag it
    """

    start: np.ndarray
    end: np.ndarray
    valid: bool


def points_to_array(points):
    """Converts a list of space points into an array of coordinates.

    Parameters
    ----------
    points : Union[List[SpacePoint], np.ndarray]
        (P) List of space points or (P, 3) array of coordinates

    Returns
    -------
    np.ndarray
        (P, 3) Array of point coordinates
    """
    if isinstance(points, np.ndarray):
        return np.ascontiguousarray(points, dtype=np.float64).reshape(-1, 3)

    return np.array([p.position for p in points], dtype=np.float64).reshape(-1, 3)


@nb.njit(cache=True)
def arc_length_extremes(
    points: nb.float64[:, :], center: nb.float64[:], direction: nb.float64[:]
) -> (nb.int64, nb.int64):
    """Finds the points with the lowest and highest arc length along an axis.

    The arc length of a point is the projection of its offset w.r.t. the
    axis center onto the axis direction. Points with non-finite coordinates
    are ignored. In case of ties, the first point prevails.

    Parameters
    ----------
    points : np.ndarray
        (P, 3) Point coordinates
    center : np.ndarray
        (3) Axis center
    direction : np.ndarray
        (3) Axis direction

    Returns
    -------
    int
        Index of the point with the lowest arc length (-1 if none)
    int
        Index of the point with the highest arc length (-1 if none)
    """
    first, last = -1, -1
    min_arc, max_arc = np.inf, -np.inf
    for i in range(len(points)):
        if not np.all(np.isfinite(points[i])):
            continue

        arc = 0.0
        for d in range(3):
            arc += (points[i, d] - center[d]) * direction[d]

        if arc < min_arc:
            min_arc = arc
            first = i
        if arc > max_arc:
            max_arc = arc
            last = i

    return first, last


def pca_endpoints(axis):
    """Places end points three standard deviations away from the axis center.

    Parameters
    ----------
    axis : PCAxis
        Principal axis of the trajectory

    Returns
    -------
    np.ndarray
        (3) First end point, behind the center
    np.ndarray
        (3) Second end point, in front of the center
    """
    arc_length = PCA_EXTENT_SIGMAS * np.sqrt(max(axis.eigenvalues[0], 0.0))
    start = axis.center - arc_length * axis.direction
    end = axis.center + arc_length * axis.direction

    return start, end


def estimate_extent(axis, points=(), require_points=False):
    """Estimates the end points of a trajectory.

    The geometry is flagged as unusable if the spread along the principal
    axis or transverse to it vanishes, if the axis is not finite or, when
    `require_points` is set, if no space point is provided.

    Parameters
    ----------
    axis : PCAxis
        Principal axis of the trajectory
    points : Union[List[SpacePoint], np.ndarray], optional
        (P) Space points of the trajectory
    require_points : bool, default False
        If `True`, the geometry is only usable when points are provided

    Returns
    -------
    Extent
        End points of the trajectory and whether they can be used
    """
    # Start from the end points derived from the axis spread alone
    start, end = pca_endpoints(axis)

    # Check that the axis describes an elongated object
    eigenvalues = axis.eigenvalues
    trans_rms = np.sqrt(eigenvalues[1] ** 2 + eigenvalues[2] ** 2)
    finite = np.all(np.isfinite(axis.center)) and np.all(
        np.isfinite(axis.direction)
    )
    finite = finite and np.all(np.isfinite(eigenvalues))
    if not finite or not eigenvalues[0] > 0.0 or not trans_rms > 0.0:
        return Extent(start, end, False)

    # If there are space points, use the extreme ones as end points
    points = points_to_array(points)
    if len(points) == 0:
        return Extent(start, end, not require_points)

    first, last = arc_length_extremes(
        points,
        np.asarray(axis.center, dtype=np.float64),
        np.asarray(axis.direction, dtype=np.float64),
    )
    if first > -1:
        start, end = points[first].copy(), points[last].copy()

    return Extent(start, end, True)
