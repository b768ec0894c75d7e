"""Module with data class objects which represent hits and space points."""

from dataclasses import dataclass

import numpy as np

from .base import DataBase

__all__ = ["Hit", "SpacePoint"]


@dataclass(eq=False)
class Hit(DataBase):
    """Timing information of a reconstructed wire hit.

    All times are expressed in TPC ticks.

    Attributes
    ----------
    id : int
        Index of the hit in the list of hits
    peak_time : float
        Time of the hit peak
    time_lower : float
        Lower bound of the hit time interval (peak time minus spread)
    time_upper : float
        Upper bound of the hit time interval (peak time plus spread)
    """

    id: int = -1
    peak_time: float = -np.inf
    time_lower: float = -np.inf
    time_upper: float = -np.inf

    # Index attributes
    _index_attrs = ("id",)

    @classmethod
    def from_rms(cls, peak_time, rms, id=-1):
        """Builds a hit from its peak time and its RMS.

        Parameters
        ----------
        peak_time : float
            Time of the hit peak
        rms : float
            Hit width
        id : int, default -1
            Hit index

        Returns
        -------
        Hit
            Hit object
        """
        return cls(
            id=id,
            peak_time=peak_time,
            time_lower=peak_time - rms,
            time_upper=peak_time + rms,
        )


@dataclass(eq=False)
class SpacePoint(DataBase):
    """Reconstructed 3D space point.

    Attributes
    ----------
    id : int
        Index of the space point in the list of space points
    position : np.ndarray
        (3) Position of the space point
    """

    id: int = -1
    position: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("position", 3),)

    # Attributes specifying coordinates
    _pos_attrs = ("position",)

    # Index attributes
    _index_attrs = ("id",)
