"""Module which contains enumerated variables shared across the project."""

from enum import IntEnum

from .globals import *

__all__ = ["CosmicTagEnum", "cosmic_score"]


class CosmicTagEnum(IntEnum):
    """Enumerates all possible cosmic tag categories."""

    NOT_TAGGED = NOT_TAGGED_TAG
    GEOMETRY_YY = GEO_YY_TAG
    GEOMETRY_YZ = GEO_YZ_TAG
    GEOMETRY_ZZ = GEO_ZZ_TAG
    GEOMETRY_XX = GEO_XX_TAG
    GEOMETRY_XY = GEO_XY_TAG
    GEOMETRY_XZ = GEO_XZ_TAG
    GEOMETRY_Y = GEO_Y_TAG
    GEOMETRY_Z = GEO_Z_TAG
    GEOMETRY_X = GEO_X_TAG
    OUTSIDE_DRIFT_PARTIAL = OOT_PART_TAG


def cosmic_score(tag_id):
    """Returns the cosmic score associated with a tag category.

    Parameters
    ----------
    tag_id : Union[int, CosmicTagEnum]
        Cosmic tag category

    Returns
    -------
    float
        Cosmic score, one of 0, 0.4, 0.5 or 1
    """
    return COSMIC_SCORES[int(tag_id)]
