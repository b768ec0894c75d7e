"""Main function that calls the Driver class.

This is the first module called when launching the command line tool. It
sets up the `Driver` object used to read data products, tag cosmic rays
and write the tags to file.
"""

from .driver import Driver

__all__ = ["run"]


def run(cfg):
    """Execute the cosmic tagging process.

    Parameters
    ----------
    cfg : dict
        Full driver configuration
    """
    driver = Driver(cfg)
    driver.run()
