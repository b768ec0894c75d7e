"""Contains base class of all post-processors."""

from abc import ABC, abstractmethod

__all__ = ["PostBase"]


class PostBase(ABC):
    """Base class of all post-processors.

    This base class performs the following functions:
      - Ensures that the necessary method exist
      - Checks that the post-processor is provided the necessary data
        products to do its job
      - Filters the data products passed to the `process` method

    Attributes
    ----------
    name : str
        Name of the post-processor as defined in the configuration file
    aliases : Tuple[str]
        Alternative acceptable names for a post-processor
    need_detector : bool
        Whether the post-processor must be provided the detector description
    """

    # Name of the post-processor (as specified in the configuration)
    name = None

    # Alternative allowed names of the post-processor
    aliases = ()

    # Whether the detector description must be provided at initialization
    need_detector = False

    # Set of data keys needed for this post-processor to operate
    _keys = ()

    # Set of post-processors which must be run before this one is
    _upstream = ()

    @property
    def keys(self):
        """Dictionary of (key, necessity) pairs which determine which data keys
        are needed/optional for the post-processor to run.

        Returns
        -------
        Dict[str, bool]
            Dictionary of (key, necessity) pairs to be used
        """
        return dict(self._keys)

    def __call__(self, data):
        """Calls the post processor on one entry.

        Parameters
        ----------
        data : dict
            Dictionary of data products

        Returns
        -------
        dict
            Update to the input dictionary
        """
        # Fetch the input dictionary
        data_filter = {}
        for key, req in self._keys:
            # If this key is needed, check that it exists
            assert not req or key in data, (
                f"Post-processor `{self.name}` is missing an essential "
                f"input to be used: `{key}`."
            )

            if key in data:
                data_filter[key] = data[key]

        # Run the post-processor
        return self.process(data_filter)

    @abstractmethod
    def process(self, data):
        """Place-holder method to be defined in each post-processor.

        Parameters
        ----------
        data : dict
            Dictionary of processed data products
        """
        raise NotImplementedError("Must define the `process` function.")
