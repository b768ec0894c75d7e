"""Combination of the timing and boundary checks into a cosmic tag.

The rules are evaluated in order, the first one that applies wins:
1. A hit outside of the drift window makes the trajectory a cosmic;
2. Without usable geometry, the trajectory is not tagged;
3. If both ends are near an x or y face, or the first end is near an x or y
   face and either end is near a z face, the trajectory crosses the volume;
4. If both ends are near a z face, it is a weaker crossing candidate;
5. If exactly one end is near any face, the trajectory enters or exits;
6. Otherwise the trajectory is contained.

Note that a trajectory which enters and exits through the same face is
counted as running parallel to it, not as crossing.
"""

from cosmictag.utils.enums import CosmicTagEnum, cosmic_score

__all__ = ["decide_tag"]


def decide_tag(out_of_time, near=None):
    """Assigns a cosmic tag category and score to a trajectory.

    Parameters
    ----------
    out_of_time : bool
        Whether the timing gate vetoed the trajectory
    near : np.ndarray, optional
        (3, 2) Boolean array, `near[axis, end_point_index]`. If `None`, the
        geometry of the trajectory is not usable.

    Returns
    -------
    CosmicTagEnum
        Cosmic tag category
    float
        Cosmic score
    """
    # The timing veto dominates any geometric consideration
    if out_of_time:
        tag_id = CosmicTagEnum.OUTSIDE_DRIFT_PARTIAL
        return tag_id, cosmic_score(tag_id)

    if near is None:
        tag_id = CosmicTagEnum.NOT_TAGGED
        return tag_id, cosmic_score(tag_id)

    (x0, x1), (y0, y1), (z0, z1) = [(bool(a), bool(b)) for a, b in near]

    # End points near the top/bottom or drift faces
    exit_0 = x0 or y0
    exit_1 = x1 or y1

    # Both z crossing checks are anchored on the first end point
    exit_z0 = exit_0 and z1
    exit_z1 = exit_0 and z0

    if (exit_0 and exit_1) or exit_z0 or exit_z1:
        if x0 and x1:
            tag_id = CosmicTagEnum.GEOMETRY_XX
        elif y0 and y1:
            tag_id = CosmicTagEnum.GEOMETRY_YY
        elif (x0 or x1) and (y0 or y1):
            tag_id = CosmicTagEnum.GEOMETRY_XY
        elif (x0 or x1) and (z0 or z1):
            tag_id = CosmicTagEnum.GEOMETRY_XZ
        else:
            tag_id = CosmicTagEnum.GEOMETRY_YZ

    elif z0 and z1:
        tag_id = CosmicTagEnum.GEOMETRY_ZZ

    elif (x0 or y0 or z0) != (x1 or y1 or z1):
        if x0 or x1:
            tag_id = CosmicTagEnum.GEOMETRY_X
        elif y0 or y1:
            tag_id = CosmicTagEnum.GEOMETRY_Y
        else:
            tag_id = CosmicTagEnum.GEOMETRY_Z

    else:
        tag_id = CosmicTagEnum.NOT_TAGGED

    return tag_id, cosmic_score(tag_id)
