"""Data structures exchanged between the readers, the taggers and the writers.

- `PCAxis`: principal component summary of a trajectory
- `Hit`: timing of a reconstructed wire hit
- `SpacePoint`: reconstructed 3D point
- `Particle`: trajectory record with its axis/hit/point associations
- `CosmicTag`: outcome of the cosmic classification
- `RunInfo`: run/subrun/event identifiers of an entry
"""

from .axis import *
from .cosmic_tag import *
from .hit import *
from .particle import *
from .run_info import *
