"""Detector geometry: TPC extents, readout window and boundary margins."""

from .boundary import BoundaryConfig
from .detector import TPCDetector
