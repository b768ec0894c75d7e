"""Top-level module of the cosmic tagger source code."""

# Import main workflow entry point
from .driver import Driver
from .version import __version__

# Import commonly used tagging tools
from .cosmic import CosmicTagger
from .geo import BoundaryConfig, TPCDetector
