"""Cosmic tagging of reconstructed particles using their principal axis."""

from dataclasses import replace

import numpy as np

from cosmictag.cosmic import CosmicTagger
from cosmictag.post.base import PostBase
from cosmictag.utils.globals import DEFAULT_MARGIN

__all__ = ["CosmicPCAxisProcessor"]


class CosmicPCAxisProcessor(PostBase):
    """Tags particles which are likely to be through-going cosmic rays.

    Each particle with an associated principal axis is checked for hits
    outside of the drift window and for end points near the faces of the
    TPC. One :class:`CosmicTag` is produced per particle with an axis.

    Typical configuration should look like:

    .. code-block:: yaml

        post:
          cosmic_pca_tagger:
            x_margin: 5
            y_margin: 5
            z_margin: 5
    """

    # Name of the post-processor (as specified in the configuration)
    name = "cosmic_pca_tagger"

    # Alternative allowed names of the post-processor
    aliases = ("cosmic_pcaxis_tagger", "pca_cosmic_tagger")

    # The boundaries and the drift window are derived from the detector
    need_detector = True

    # Set of data keys needed for this post-processor to operate
    _keys = (
        ("particles", True),
        ("pc_axes", True),
        ("hits", False),
        ("space_points", False),
    )

    def __init__(
        self,
        detector,
        x_margin=DEFAULT_MARGIN,
        y_margin=DEFAULT_MARGIN,
        z_margin=DEFAULT_MARGIN,
        require_points=True,
        window=None,
    ):
        """Initialize the cosmic tagger.

        Parameters
        ----------
        detector : TPCDetector
            Detector description
        x_margin : float, default 5
            Distance from the drift (x) faces under which an end point is near
        y_margin : float, default 5
            Distance from the top/bottom (y) faces under which an end point
            is near
        z_margin : float, default 5
            Distance from the upstream/downstream (z) faces under which an
            end point is near
        require_points : bool, default True
            If `True`, particles without space points are only checked for
            out-of-time hits
        window : float, optional
            Drift window width in ticks. If not specified, it is derived
            from the detector drift velocity and sampling rate.
        """
        # Derive the boundaries and the drift window from the detector
        config = detector.boundary_config((x_margin, y_margin, z_margin))
        if window is None:
            window = detector.width_ticks

        self.tagger = CosmicTagger(config, window, require_points)

    @staticmethod
    def order_axes(axes):
        """Orders the axes associated with a particle by preference.

        When a particle has more than one axis, the axis producer guarantees
        that the preferred one has the lowest ID. The list is reversed if it
        is provided in decreasing ID order.

        Parameters
        ----------
        axes : List[PCAxis]
            (A) Axes associated with one particle

        Returns
        -------
        List[PCAxis]
            (A) Axes, the preferred one first
        """
        if len(axes) > 1 and axes[0].id > axes[-1].id:
            return axes[::-1]

        return axes

    def process(self, data):
        """Tag all the particles in one entry.

        Parameters
        ----------
        data : dict
            Dictionary of data products

        Returns
        -------
        dict
            Dictionary containing the list of `cosmic_tags`
        """
        # Fetch the products associated with the particles
        axes = data["pc_axes"]
        hits = data.get("hits", [])
        points = data.get("space_points", [])

        # Loop over the particles, tag those with an axis
        tags = []
        for part in data["particles"]:
            if len(part.axis_index) == 0:
                continue

            part_axes = self.order_axes([axes[i] for i in part.axis_index])
            tag = self.tagger(
                part_axes[0],
                [points[i] for i in part.point_index],
                [hits[i] for i in part.hit_index],
            )

            # Associate the tag with the particle and all its axes
            axis_ids = np.array([axis.id for axis in part_axes], dtype=np.int64)
            tags.append(replace(tag, particle_id=part.id, axis_ids=axis_ids))

        return {"cosmic_tags": tags}
