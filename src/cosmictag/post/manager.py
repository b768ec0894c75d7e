"""Manages the operation of post-processors."""

from collections import OrderedDict
from copy import deepcopy

import numpy as np

from cosmictag.utils.stopwatch import StopwatchManager

from .factories import post_processor_factory

__all__ = ["PostManager"]


class PostManager:
    """Manager in charge of handling post-processing modules.

    It loads all the post-processor objects once and feeds them data.
    """

    def __init__(self, cfg, detector=None, post_list=None):
        """Initialize the post-processing manager.

        Parameters
        ----------
        cfg : dict
            Post-processor configurations
        detector : TPCDetector, optional
            Detector description, provided to the modules which need it
        post_list : List[str], optional
            List of post-processors which have already been run
        """
        # Loop over the post-processor modules and get their priorities
        cfg = deepcopy(cfg)
        keys = np.array(list(cfg.keys()))
        priorities = -np.ones(len(keys), dtype=np.int32)
        for i, key in enumerate(keys):
            if "priority" in cfg[key]:
                priorities[i] = cfg[key].pop("priority")

        # Add the modules to a processor list in decreasing order of priority
        self.watch = StopwatchManager()
        self.modules = OrderedDict()
        keys = keys[np.argsort(-priorities, kind="stable")]
        for key in keys:
            # Profile the module
            self.watch.initialize(key)

            # Append
            self.modules[key] = post_processor_factory(key, cfg[key], detector)

            # Check dependencies
            ups_post = tuple(post_list or ()) + tuple(self.modules)
            for post in self.modules[key]._upstream:
                assert post in ups_post, (
                    f"Post-processor `{key}` is missing an essential "
                    f"upstream post-processor: `{post}`."
                )

    def __call__(self, data):
        """Pass one entry of data through the post-processors.

        Parameters
        ----------
        data : dict
            Dictionary of data products, updated in place
        """
        for key, module in self.modules.items():
            self.watch.start(key)
            result = module(data)
            self.watch.stop(key)

            # Update the input dictionary
            if result is not None:
                data.update(result)
