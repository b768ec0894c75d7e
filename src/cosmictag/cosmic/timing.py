"""Readout window check of the hits associated with a trajectory.

A particle in time with the trigger deposits charge which drifts for at most
one full drift window. With the readout window starting one drift window
before the trigger, its hits must all lie in the [W, 2W) tick range, W being
the drift window width in ticks. Any hit outside of that range belongs to a
particle which crossed the detector before or after the trigger.
"""

import numba as nb
import numpy as np

__all__ = ["hit_time_bounds", "first_out_of_time", "is_out_of_time", "TimingGate"]


def hit_time_bounds(hits):
    """Converts a list of hits to arrays of time bounds.

    Parameters
    ----------
    hits : List[Hit]
        (H) List of hits

    Returns
    -------
    np.ndarray
        (H) Lower bounds of the hit time intervals
    np.ndarray
        (H) Upper bounds of the hit time intervals
    """
    lower = np.array([hit.time_lower for hit in hits], dtype=np.float64)
    upper = np.array([hit.time_upper for hit in hits], dtype=np.float64)

    return lower, upper


@nb.njit(cache=True)
def first_out_of_time(
    lower: nb.float64[:], upper: nb.float64[:], window: nb.float64
) -> nb.int64:
    """Finds the first hit which extends outside of the [W, 2W) window.

    Parameters
    ----------
    lower : np.ndarray
        (H) Lower bounds of the hit time intervals
    upper : np.ndarray
        (H) Upper bounds of the hit time intervals
    window : float
        Drift window width, W, in ticks

    Returns
    -------
    int
        Index of the first out-of-time hit, -1 if all hits are in time
    """
    for i in range(len(lower)):
        if lower[i] < window or upper[i] > 2.0 * window:
            return i

    return -1


def is_out_of_time(hits, window):
    """Checks whether any of the hits extends outside the in-time window.

    Parameters
    ----------
    hits : List[Hit]
        (H) List of hits associated with one trajectory
    window : float
        Drift window width, W, in ticks

    Returns
    -------
    bool
        `True` if at least one hit lies outside of [W, 2W)
    """
    lower, upper = hit_time_bounds(hits)

    return first_out_of_time(lower, upper, float(window)) > -1


class TimingGate:
    """Vetoes trajectories with hits outside of the in-time window.

    Attributes
    ----------
    window : float
        Drift window width, W, in ticks
    """

    def __init__(self, window):
        """Store the drift window width.

        Parameters
        ----------
        window : float
            Drift window width, W, in ticks
        """
        assert window > 0, "The drift window width must be positive."
        self.window = float(window)

    def __call__(self, hits):
        """Checks a list of hits against the in-time window.

        Parameters
        ----------
        hits : List[Hit]
            (H) List of hits associated with one trajectory

        Returns
        -------
        bool
            `True` if the trajectory must be vetoed
        """
        return is_out_of_time(hits, self.window)
