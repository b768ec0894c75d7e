"""Cosmic tagging of a single trajectory from its principal axis.

The tagger first checks that all the hits of the trajectory are in time. If
they are, it estimates the end points of the trajectory, checks their
proximity to the active volume faces and combines these checks into a tag.
"""

from cosmictag.data import CosmicTag
from cosmictag.utils.logger import logger

from .boundary import boundary_flags
from .decision import decide_tag
from .extent import estimate_extent, pca_endpoints
from .timing import first_out_of_time, hit_time_bounds

__all__ = ["tag_trajectory", "CosmicTagger"]


def tag_trajectory(axis, points, hits, config, window, require_points=False):
    """Classifies one trajectory as a cosmic or not.

    Parameters
    ----------
    axis : PCAxis
        Principal axis of the trajectory
    points : Union[List[SpacePoint], np.ndarray]
        (P) Space points of the trajectory, may be empty
    hits : List[Hit]
        (H) Hits of the trajectory, may be empty
    config : BoundaryConfig
        Active volume boundaries and margins
    window : float
        Drift window width, W, in ticks
    require_points : bool, default False
        If `True`, trajectories without space points are only checked for
        out-of-time hits

    Returns
    -------
    CosmicTag
        Cosmic tag of the trajectory
    """
    # Check that all the hits are in time
    lower, upper = hit_time_bounds(hits)
    oot_index = first_out_of_time(lower, upper, float(window))
    if oot_index > -1:
        logger.debug(
            "Hit %d of axis %d is out of time: [%.1f, %.1f] not in [%.1f, %.1f).",
            oot_index,
            axis.id,
            lower[oot_index],
            upper[oot_index],
            window,
            2 * window,
        )
        start, end = pca_endpoints(axis)
        tag_id, score = decide_tag(True)

        return CosmicTag(start_point=start, end_point=end, tag_id=tag_id, score=score)

    # Estimate the extent of the trajectory, check its boundaries
    extent = estimate_extent(axis, points, require_points)
    near = None
    if extent.valid:
        near = boundary_flags(extent.start, extent.end, config)
    else:
        logger.debug("Axis %d cannot be used to check boundaries.", axis.id)

    tag_id, score = decide_tag(False, near)
    logger.debug("Axis %d tagged as %s (score %.1f).", axis.id, tag_id.name, score)

    return CosmicTag(
        start_point=extent.start, end_point=extent.end, tag_id=tag_id, score=score
    )


class CosmicTagger:
    """Classifies trajectories with a fixed detector configuration.

    Attributes
    ----------
    config : BoundaryConfig
        Active volume boundaries and margins
    window : float
        Drift window width, W, in ticks
    require_points : bool
        If `True`, trajectories without space points are only checked for
        out-of-time hits
    """

    def __init__(self, config, window, require_points=False):
        """Store the detector configuration.

        Parameters
        ----------
        config : BoundaryConfig
            Active volume boundaries and margins
        window : float
            Drift window width, W, in ticks
        require_points : bool, default False
            If `True`, trajectories without space points are only checked for
            out-of-time hits
        """
        assert window > 0, "The drift window width must be positive."
        self.config = config
        self.window = float(window)
        self.require_points = require_points

    def __call__(self, axis, points=(), hits=()):
        """Classifies one trajectory.

        Parameters
        ----------
        axis : PCAxis
            Principal axis of the trajectory
        points : Union[List[SpacePoint], np.ndarray], optional
            (P) Space points of the trajectory
        hits : List[Hit], optional
            (H) Hits of the trajectory

        Returns
        -------
        CosmicTag
            Cosmic tag of the trajectory
        """
        return tag_trajectory(
            axis, points, hits, self.config, self.window, self.require_points
        )
