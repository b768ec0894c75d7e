"""Cosmic-ray tagging of trajectories summarized by a principal axis.

- `timing`: out-of-time hit veto
- `extent`: end point estimation along the principal axis
- `boundary`: proximity of the end points to the active volume faces
- `decision`: combination of the checks into a tag category and a score
- `tagger`: single-trajectory entry point
"""

from .boundary import BoundaryClassifier, boundary_flags
from .decision import decide_tag
from .extent import Extent, estimate_extent, pca_endpoints
from .tagger import CosmicTagger, tag_trajectory
from .timing import TimingGate, is_out_of_time
