"""Construct a post-processor module class from its name."""

from cosmictag.utils.factory import instantiate, module_dict

from . import cosmic

# Build a dictionary of available post-processing modules
POST_DICT = {}
for module in [cosmic]:
    POST_DICT.update(**module_dict(module))

__all__ = ["post_processor_factory"]


def post_processor_factory(name, cfg, detector=None):
    """Instantiates a post-processor module from a configuration dictionary.

    Parameters
    ----------
    name : str
        Name of the post-processor module
    cfg : dict
        Post-processor module configuration
    detector : TPCDetector, optional
        Detector description, provided to the modules which need it

    Returns
    -------
    object
         Initialized post-processor object
    """
    # Provide the name to the configuration
    cfg["name"] = name

    # Instantiate the post-processor module
    if name in POST_DICT and POST_DICT[name].need_detector:
        assert detector is not None, (
            f"Post-processor `{name}` needs a detector description, "
            "provide a `geo` block in the configuration."
        )
        return instantiate(POST_DICT, cfg, detector=detector)

    return instantiate(POST_DICT, cfg)
