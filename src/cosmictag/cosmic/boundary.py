"""Proximity of trajectory end points to the faces of the active volume."""

import numpy as np

__all__ = ["boundary_flags", "BoundaryClassifier"]


def boundary_flags(start, end, config):
    """Checks which faces of the active volume each end point is close to.

    An end point is near the faces of an axis if its distance to either of
    the two faces perpendicular to that axis is smaller than the margin
    configured for that axis. This alone does not imply that the trajectory
    exits the volume. Non-finite coordinates are never near a face.

    Parameters
    ----------
    start : np.ndarray
        (3) First end point
    end : np.ndarray
        (3) Second end point
    config : BoundaryConfig
        Active volume boundaries and margins

    Returns
    -------
    np.ndarray
        (3, 2) Boolean array, `near[axis, end_point_index]`
    """
    # Stack the end points so that each row corresponds to one axis
    ends = np.stack([start, end], axis=1).astype(np.float64)
    lower = config.lower[:, None]
    upper = config.upper[:, None]
    margin = np.asarray(config.margin, dtype=np.float64)[:, None]

    with np.errstate(invalid="ignore"):
        near = ((ends - lower) < margin) | ((upper - ends) < margin)

    return near & np.isfinite(ends)


class BoundaryClassifier:
    """Checks end points against a fixed set of active volume boundaries.

    Attributes
    ----------
    config : BoundaryConfig
        Active volume boundaries and margins
    """

    def __init__(self, config):
        """Store the boundary definition.

        Parameters
        ----------
        config : BoundaryConfig
            Active volume boundaries and margins
        """
        self.config = config

    def __call__(self, start, end):
        """Checks the proximity of two end points to the volume faces.

        Parameters
        ----------
        start : np.ndarray
            (3) First end point
        end : np.ndarray
            (3) Second end point

        Returns
        -------
        np.ndarray
            (3, 2) Boolean array, `near[axis, end_point_index]`
        """
        return boundary_flags(start, end, self.config)
