"""Cosmic tagging driver class.

Takes care of everything in one centralized place:
- Detector description
- Data loading
- Post-processing (cosmic tagging)
- Writing output to file
"""

import os
import subprocess as sc
from datetime import datetime

import psutil
import yaml

from .geo import TPCDetector
from .io import reader_factory, writer_factory
from .io.write.csv import CSVWriter
from .post import PostManager
from .utils.logger import logger
from .utils.stopwatch import StopwatchManager
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central cosmic tagging driver.

    Processes global configuration and runs the appropriate modules:
      1. Load data
      2. Run post-processing
      3. Write to file

    It takes a configuration dictionary of the form:

    .. code-block:: yaml

        base:
          <Base driver configuration>
        geo:
          <Detector description>
        io:
          <Input/output configuration>
        post:
          <Post-processors>
    """

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : dict
            Global configuration dictionary
        """
        # Initialize the timers and the configuration dictionary
        self.watch = StopwatchManager()
        self.watch.initialize("iteration")

        # Process the full configuration dictionary and store it
        base, geo, io, post = self.process_config(**cfg)

        # Initialize the base driver configuration parameters
        self.initialize_base(**base)

        # Initialize the detector description
        self.geo = None
        if geo is not None:
            self.geo = self.initialize_geo(geo)

        # Initialize the input/output
        self.initialize_io(**io)

        # Initialize the post-processors
        self.post = None
        if post is not None:
            self.watch.initialize("post")
            self.post = PostManager(post, detector=self.geo)

    def process_config(self, io, base=None, geo=None, post=None):
        """Reads the configuration and dumps it to the logger.

        Parameters
        ----------
        io : dict
            I/O configuration dictionary
        base : dict, optional
            Base driver configuration dictionary
        geo : dict, optional
            Detector description configuration dictionary
        post : dict, optional
            Post-processor configutation dictionary

        Returns
        -------
        dict
            Processed configuration
        """
        # If there is no base configuration, make it empty (will use defaults)
        if base is None:
            base = {}

        # Set the verbosity of the logger
        verbosity = base.get("verbosity", "info")
        logger.setLevel(verbosity.upper())

        # Rebuild global configuration dictionary
        self.cfg = {"base": base}
        if geo is not None:
            self.cfg["geo"] = geo
        self.cfg["io"] = io
        if post is not None:
            self.cfg["post"] = post

        # Log environment information
        logger.info("Release version: %s\n", __version__)

        system_info = sc.getstatusoutput("uname -a")[1]
        logger.info("Configuration processed at: %s\n", system_info)

        # Log configuration
        logger.info(yaml.dump(self.cfg, default_flow_style=None, sort_keys=False))

        # Return updated configuration
        return base, geo, io, post

    def initialize_base(
        self,
        iterations=None,
        log_step=1,
        log_dir=None,
        overwrite_log=False,
        parent_path=None,
        verbosity="info",
    ):
        """Initialize the base driver parameters.

        Parameters
        ----------
        iterations : int, optional
            Number of entries to process (-1 or `None` means all entries)
        log_step : int, default 1
            Number of iterations before the logging is called (1: every step)
        log_dir : str, optional
            Path to the directory where the CSV log is written to. If not
            specified, no CSV log is produced.
        overwrite_log : bool, default False
            If `True`, overwrite log even if it already exists
        parent_path : str, optional
            Path to the parent directory of the configuration file, used to
            resolve relative paths
        verbosity : str, default 'info'
            Verbosity level to pass to the `logging` module. Pick one of
            'debug', 'info', 'warning', 'error', 'critical'.
        """
        assert log_step > 0, "The `log_step` must be a strictly positive integer."

        self.iterations = iterations
        self.log_step = log_step
        self.log_dir = log_dir
        self.overwrite_log = overwrite_log
        self.parent_path = parent_path
        self.logger = None
        self.counter = 0
        self.tstamp = None

    def initialize_geo(self, geo):
        """Initialize the detector description.

        The detector can either be described in the configuration block
        itself or in a separate YAML file, provided under the `file` key.

        Parameters
        ----------
        geo : dict
            Detector description configuration dictionary

        Returns
        -------
        TPCDetector
            Detector description
        """
        if "file" in geo:
            assert len(geo) == 1, (
                "If the detector is described in a file, do not provide "
                "any other detector parameter."
            )
            file_path = geo["file"]
            if self.parent_path is not None and not os.path.isabs(file_path):
                file_path = os.path.join(self.parent_path, file_path)

            return TPCDetector.from_file(file_path)

        return TPCDetector(**geo)

    def initialize_io(self, reader, writer=None):
        """Initializes the input/output scripts.

        Parameters
        ----------
        reader : dict
            Reader configuration dictionary
        writer : dict, optional
            Writer configuration dictionary
        """
        # Initialize the reader
        self.watch.initialize("read")
        self.reader = reader_factory(reader)

        # Initialize the data writer, if provided
        self.writer = None
        if writer is not None:
            self.watch.initialize("write")
            self.writer = writer_factory(writer)

        # Harmonize the number of iterations with the number of entries
        if self.iterations is None or self.iterations < 0:
            self.iterations = len(self.reader)
        assert self.iterations <= len(self.reader), (
            f"Requested {self.iterations} iterations, but only "
            f"{len(self.reader)} entries are available."
        )

    def initialize_log(self):
        """Initialize the output CSV log for this driver process."""
        if self.log_dir is None:
            return

        # Make a directory if it does not exist
        if not os.path.exists(self.log_dir):
            os.makedirs(self.log_dir, exist_ok=True)

        # Initialize the log
        log_path = os.path.join(self.log_dir, "cosmictag_log.csv")
        self.logger = CSVWriter(log_path, overwrite=self.overwrite_log)

    def __len__(self):
        """Returns the number of entries in the underlying reader object.

        Returns
        -------
        int
            Number of entries in the underlying reader
        """
        return len(self.reader)

    def __iter__(self):
        """Resets the counter and returns itself.

        Returns
        -------
        object
            The Driver itself
        """
        self.counter = 0

        return self

    def __next__(self):
        """Processes the next entry, up to the requested number of iterations.

        Returns
        -------
        dict
            Dictionary of data products of the next entry
        """
        if self.counter >= self.iterations:
            raise StopIteration

        # Record the execution date/time
        self.tstamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        # Process one entry of data
        data = self.process(entry=self.counter)
        self.counter += 1

        return data

    def run(self):
        """Loop over the requested number of iterations, process them."""
        # Initialize the output log
        self.initialize_log()

        # Loop and process each entry, log the output
        for iteration, data in enumerate(self):
            self.log(data, self.tstamp, iteration)

    def process(self, entry=None, run=None, subrun=None, event=None):
        """Process one entry.

        This includes data loading, post-processing and writing the
        output products to file.

        Parameters
        ----------
        entry : int, optional
            Entry number to load
        run : int, optional
            Run number to load
        subrun : int, optional
            Subrun number to load
        event : int, optional
            Event number to load

        Returns
        -------
        dict
            Dictionary of data products
        """
        # 0. Make sure there is no watch running, start the iteration timer
        for watch in self.watch.values():
            if watch.running:
                self.watch.reset()
                break

        self.watch.start("iteration")

        # 1. Load data
        data = self.load(entry, run, subrun, event)

        # 2. Run post-processing, if requested
        if self.post is not None:
            self.watch.start("post")
            self.post(data)
            self.watch.stop("post")
            self.watch.update(self.post.watch, "post")

        # 3. Write output to file, if requested
        if self.writer is not None:
            self.watch.start("write")
            self.writer(data)
            self.watch.stop("write")

        # Stop the iteration timer
        self.watch.stop("iteration")

        return data

    def load(self, entry=None, run=None, subrun=None, event=None):
        """Loads one entry to process.

        Parameters
        ----------
        entry : int, optional
            Entry number
        run : int, optional
            Run number
        subrun : int, optional
            Subrun number
        event : int, optional
            Event number

        Returns
        -------
        data: dict
            Data dictionary containing the input
        """
        # Must provide either entry number or the run, subrun and event numbers
        assert (entry is not None) or (
            run is not None and subrun is not None and event is not None
        ), (
            "Provide either the entry number or the run, subrun "
            "and event number to read."
        )

        # Read an entry
        self.watch.start("read")
        if entry is not None:
            data = self.reader.get(entry)
        else:
            data = self.reader.get_run_event(run, subrun, event)
        self.watch.stop("read")

        return data

    def log(self, data, tstamp, iteration):
        """Log relevant information to CSV files and stdout.

        Parameters
        ----------
        data : dict
            Dictionary of data products of one entry
        tstamp : str
            Time when this iteration was run
        iteration : int
            Iteration counter
        """
        # Fetch the basics
        tags = data.get("cosmic_tags", [])
        log_dict = {
            "iter": iteration,
            "entry": data["index"],
            "num_tags": len(tags),
            "num_cosmics": sum(tag.is_cosmic for tag in tags),
        }

        # Fetch the memory usage (in GB)
        log_dict["cpu_mem"] = psutil.virtual_memory().used / 1.0e9
        log_dict["cpu_mem_perc"] = psutil.virtual_memory().percent

        # Fetch the times
        suff = "_time"
        for key, watch in self.watch.items():
            time, time_sum = watch.time, watch.time_sum
            log_dict[f"{key}{suff}"] = time.wall
            log_dict[f"{key}{suff}_cpu"] = time.cpu
            log_dict[f"{key}{suff}_sum"] = time_sum.wall
            log_dict[f"{key}{suff}_sum_cpu"] = time_sum.cpu

        # Record
        if self.logger is not None:
            self.logger.append(log_dict)

        # If requested, log out basics of the process
        if ((iteration + 1) % self.log_step) == 0:
            keys = ["Time", "CPU memory", "Tags", "Cosmics"]
            widths = [12, 20, 6, 8]
            header = "  | " + "| ".join(
                [f"{keys[i]:<{widths[i]}}" for i in range(len(keys))]
            )
            separator = "  |" + "+".join(["-" * (w + 1) for w in widths])
            msg = f"Iter. {iteration} (entry {data['index']}) @ {tstamp}\n"
            msg += header + "|\n"
            msg += separator + "|"
            logger.info(msg)

            t_iter = self.watch.time("iteration").wall
            mem, mem_perc = log_dict["cpu_mem"], log_dict["cpu_mem_perc"]
            values = [
                f"{t_iter:0.3f} s",
                f"{mem:0.2f} GB ({mem_perc:0.2f} %)",
                f"{log_dict['num_tags']}",
                f"{log_dict['num_cosmics']}",
            ]
            msg = "  | " + "| ".join(
                [f"{values[i]:<{widths[i]}}" for i in range(len(keys))]
            )
            logger.info(msg + "|\n")
