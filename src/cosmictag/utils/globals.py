"""Module which contains all global variables shared across the project."""

# Cosmic tag IDs, following the anab::CosmicTagID_t codes
NOT_TAGGED_TAG = 0   # Contained or unclassifiable trajectory
GEO_YY_TAG     = 1   # Enters and exits through the top/bottom faces
GEO_YZ_TAG     = 2   # Crosses a top/bottom face and a Z face
GEO_ZZ_TAG     = 3   # Crosses both Z faces
GEO_XX_TAG     = 4   # Crosses both drift (X) faces
GEO_XY_TAG     = 5   # Crosses a drift face and a top/bottom face
GEO_XZ_TAG     = 6   # Crosses a drift face and a Z face
GEO_Y_TAG      = 21  # One end near a top/bottom face
GEO_Z_TAG      = 22  # One end near a Z face
GEO_X_TAG      = 23  # One end near a drift face
OOT_PART_TAG   = 100 # At least one hit outside of the in-time window

# Cosmic score associated with each tag ID
COSMIC_SCORES = {
    NOT_TAGGED_TAG: 0.0,
    OOT_PART_TAG: 1.0,
    GEO_XX_TAG: 1.0,
    GEO_YY_TAG: 1.0,
    GEO_XY_TAG: 1.0,
    GEO_XZ_TAG: 1.0,
    GEO_YZ_TAG: 1.0,
    GEO_ZZ_TAG: 0.4,
    GEO_X_TAG: 0.5,
    GEO_Y_TAG: 0.5,
    GEO_Z_TAG: 0.5,
}

# Default distance from a TPC face under which an end point is near it (cm)
DEFAULT_MARGIN = 5.0

# Number of standard deviations along the principal axis used to place the
# PCA end points when no space point is available
PCA_EXTENT_SIGMAS = 3.0
