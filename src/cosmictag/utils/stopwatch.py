"""Lightweight wall/CPU timers used to profile the processing stages."""

import time
from dataclasses import dataclass

__all__ = ["Time", "Stopwatch", "StopwatchManager"]


@dataclass
class Time:
    """Pair of wall and CPU times.

    Attributes
    ----------
    wall : float, optional
         Wall time in seconds
    cpu : float, optional
         CPU time in seconds
    """

    wall: float = None
    cpu: float = None

    def __add__(self, other):
        return Time(wall=self.wall + other.wall, cpu=self.cpu + other.cpu)

    def __sub__(self, other):
        return Time(wall=self.wall - other.wall, cpu=self.cpu - other.cpu)

    @property
    def is_set(self):
        """Whether this time holds an actual measurement."""
        return self.wall is not None

    @classmethod
    def current(cls):
        """Returns the current wall and CPU times.

        Returns
        -------
        Time
           Current time
        """
        return cls(time.time(), time.process_time())


class Stopwatch:
    """Holds timing information for a single process."""

    def __init__(self):
        """Give default values to the underlying timing attributes."""
        self._start = Time()
        self._stop = Time()
        self._time = Time(0.0, 0.0)
        self._total = Time(0.0, 0.0)

    @property
    def running(self):
        """Whether the stopwatch is currently running."""
        return self._start.is_set and not self._stop.is_set

    def start(self):
        """Start the watch."""
        if self.running:
            raise ValueError("Cannot restart a watch that has not been stopped.")

        self._start = Time.current()
        self._stop = Time()

    def stop(self):
        """Stop the watch, record the elapsed time."""
        if not self._start.is_set:
            raise ValueError("Cannot stop a watch that has not been started.")
        if self._stop.is_set:
            raise ValueError("Cannot stop a watch more than once.")

        self._stop = Time.current()
        self._time = self._stop - self._start
        self._total = self._total + self._time

    @property
    def time(self):
        """Time between the last start and the last stop."""
        if not self._stop.is_set:
            raise ValueError("Cannot get time of watch that has not been stopped.")

        return self._time

    @property
    def time_sum(self):
        """Sum of times between all watch starts and stops."""
        if not self._stop.is_set:
            raise ValueError("Cannot get time of watch that has not been stopped.")

        return self._total


class StopwatchManager:
    """Organizes a set of named stopwatches."""

    def __init__(self):
        """Initalize the private dictionary of stopwatches."""
        self._watch = {}

    def keys(self):
        """Names of the initialized stopwatches."""
        return self._watch.keys()

    def values(self):
        """Initialized stopwatches."""
        return self._watch.values()

    def items(self):
        """(name, stopwatch) pairs."""
        return self._watch.items()

    def initialize(self, key):
        """Initialize one or more stopwatches.

        Parameters
        ----------
        key : Union[str, List[str]]
            Key or list of keys to initialize a `Stopwatch` for
        """
        keys = [key] if isinstance(key, str) else key
        for k in keys:
            self._watch[k] = Stopwatch()

    def reset(self):
        """Reset all the stopwatches to their initial state."""
        for k in self._watch:
            self._watch[k] = Stopwatch()

    def _get(self, key):
        if key not in self._watch:
            raise KeyError(f"No stopwatch initialized under the name: {key}")

        return self._watch[key]

    def start(self, key):
        """Starts the stopwatch named `key`."""
        self._get(key).start()

    def stop(self, key):
        """Stops the stopwatch named `key`."""
        self._get(key).stop()

    def time(self, key):
        """Time recorded between the last start and stop of `key`.

        Returns
        -------
        Time
            Execution time of one iteration of a process
        """
        return self._get(key).time

    def time_sum(self, key):
        """Sum of the times recorded between each start/stop pair of `key`.

        Returns
        -------
        Time
            Execution time of all iterations of a process so far
        """
        return self._get(key).time_sum

    def update(self, other, prefix=None):
        """Updates this manager with the stopwatches of another manager.

        Parameters
        ----------
        other : StopwatchManager
             Manager of another process
        prefix : str, optional
             String to prefix the stopwatch names with
        """
        for key, value in other.items():
            name = key if prefix is None else f"{prefix}_{key}"
            self._watch[name] = value
