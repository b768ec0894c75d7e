"""Module with a description of a single rectangular TPC and its readout."""

import os
from dataclasses import dataclass

import yaml

from .boundary import BoundaryConfig

__all__ = ["TPCDetector"]


@dataclass(frozen=True)
class TPCDetector:
    """Rectangular TPC with its drift and sampling properties.

    The drift axis is x, the anode sits at x = 0 and the cathode at
    x = 2 * half_width. The volume is centered on y = 0 vertically and
    starts at z = 0 along the beam.

    Attributes
    ----------
    half_width : float
        Half of the TPC width along the drift axis in cm
    half_height : float
        Half of the TPC height in cm
    length : float
        Length of the TPC along the beam axis in cm
    drift_velocity : float
        Electron drift velocity in cm/us
    sampling_rate : float
        Duration of one TPC tick in ns
    name : str, optional
        Name of the detector
    """

    half_width: float
    half_height: float
    length: float
    drift_velocity: float
    sampling_rate: float
    name: str = "tpc"

    def __post_init__(self):
        """Check that the detector properties are physical."""
        for attr in ("half_width", "half_height", "length"):
            if not getattr(self, attr) > 0.0:
                raise ValueError(f"The TPC `{attr}` must be positive.")
        if not self.drift_velocity > 0.0 or not self.sampling_rate > 0.0:
            raise ValueError(
                "The drift velocity and the sampling rate must be positive."
            )

    @classmethod
    def from_file(cls, file_path):
        """Loads a detector description from a YAML file.

        Parameters
        ----------
        file_path : str
            Path to the YAML detector description

        Returns
        -------
        TPCDetector
            Detector object
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Cannot find the geometry file: {file_path}")

        with open(file_path, "r", encoding="utf-8") as geo_yaml:
            cfg = yaml.safe_load(geo_yaml)

        return cls(**cfg)

    @property
    def width(self):
        """Full width of the TPC along the drift axis in cm."""
        return 2.0 * self.half_width

    @property
    def width_ticks(self):
        """Maximum drift time across the full TPC width, in ticks.

        Hits of particles in time with the trigger are expected in the
        [width_ticks, 2 * width_ticks) tick range of the readout window.

        Returns
        -------
        int
            Drift window width in ticks
        """
        tick_length = self.drift_velocity * self.sampling_rate / 1000.0
        return int(self.width / tick_length)

    def boundary_config(self, margin):
        """Builds the active volume boundaries used to tag trajectories.

        Parameters
        ----------
        margin : Union[float, List[float]]
            Distance(s) from the x, y and z faces under which an end point
            is considered near a boundary

        Returns
        -------
        BoundaryConfig
            Boundary definition
        """
        return BoundaryConfig(
            half_height=self.half_height,
            width=self.width,
            length=self.length,
            margin=margin,
        )
