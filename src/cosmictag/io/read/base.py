"""Contains the data reader base class.

Data readers are used to extract specific entries from files and store their
data products into dictionaries to be used downstream.
"""

import glob
import os

import numpy as np

from cosmictag.utils.logger import logger

__all__ = ["ReaderBase"]


class ReaderBase:
    """Parent reader class which provides common functions between all readers.

    This class provides these basic functions:
    1. Method to parse the requested file list or file list file into a list of
       paths to existing files (throws if nothing is found)
    2. Method to produce a list of entries in the file(s) as selected by the
       provided parameters, checks that they exist (throws if they do not)
    3. Essential `__len__` and `__getitem__` methods. Must define the
       `get` function in the inheriting class for both of them to work.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    num_entries : int
        Total number of entries in the files provided
    entry_index : np.ndarray
        List of global indexes to cycle through
    file_paths : List[str]
        List of files to read data from
    file_index : np.ndarray
        Index of the file each entry lives in
    run_info : np.ndarray
        (run, subrun, event) triplets associated with each entry
    run_map : Dict[Tuple[int], int]
        Maps each available (run, subrun, event) triplet onto an entry index
    """

    name = ""
    num_entries = None
    entry_index = None
    file_paths = None
    file_index = None
    run_info = None
    run_map = None

    def __len__(self):
        """Returns the number of selected entries.

        Returns
        -------
        int
            Number of entries
        """
        return len(self.entry_index)

    def __getitem__(self, idx):
        """Returns a specific entry.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        dict
            One entry-worth of data from the loaded files
        """
        return self.get(idx)

    def get(self, idx):
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def process_file_paths(self, file_keys, limit_num_files=None, max_print_files=10):
        """Process list of files.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths (or glob patterns) to the inputs to read. A
            single path to a `.txt` file is interpreted as a file list.
        limit_num_files : int, optional
            Integer limiting number of files to be taken
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        """
        # Some basic checks
        assert file_keys is not None, "No input `file_keys` provided, abort."
        assert (
            limit_num_files is None or limit_num_files > 0
        ), "If `limit_num_files` is provided, it must be larger than 0."

        # If the file_keys points to a single text file, it must be a text
        # file containing a list of file paths. Parse it to a list.
        if isinstance(file_keys, str) and os.path.splitext(file_keys)[-1] == ".txt":
            assert os.path.isfile(file_keys), (
                "If the `file_keys` are specified as a single string, "
                "it must be the path to a text file with a file list."
            )
            with open(file_keys, "r", encoding="utf-8") as f:
                file_keys = [l for l in f.read().splitlines() if l.strip()]

        # Convert the file keys to a list of file paths with glob
        self.file_paths = []
        if isinstance(file_keys, str):
            file_keys = [file_keys]
        for file_key in file_keys:
            file_paths = glob.glob(file_key)
            assert file_paths, f"File key {file_key} yielded no compatible path."
            for path in sorted(file_paths):
                if (
                    limit_num_files is not None
                    and len(self.file_paths) >= limit_num_files
                ):
                    break
                self.file_paths.append(path)

        self.file_paths = sorted(self.file_paths)

        # Print out the list of loaded files
        num_files = len(self.file_paths)
        file_list = " - " + "\n - ".join(self.file_paths[:max_print_files])
        file_list += "\n ... \n" if num_files > max_print_files else "\n"
        logger.info("Will load %d file(s):\n%s", num_files, file_list)

    def process_run_info(self):
        """Process the run information.

        Check the run information for duplicates and initialize a dictionary
        which map (run, subrun, event) triplets onto entry index.
        """
        assert len(self.run_info) == self.num_entries
        num_unique = len(np.unique(self.run_info, axis=0))
        assert num_unique == len(self.run_info), (
            "Cannot create a run map if (run, subrun, event) triplets "
            "are not unique in the dataset. Abort."
        )

        self.run_map = {
            tuple(int(x) for x in v): i for i, v in enumerate(self.run_info)
        }

    def process_entry_list(
        self,
        n_entry=None,
        n_skip=None,
        entry_list=None,
        skip_entry_list=None,
        run_event_list=None,
        skip_run_event_list=None,
        allow_missing=False,
    ):
        """Create a list of entries that can be accessed by :meth:`__getitem__`.

        Parameters
        ----------
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : list, optional
            List of integer entry IDs to add to the index
        skip_entry_list : list, optional
            List of integer entry IDs to skip from the index
        run_event_list: list((int, int, int)), optional
            List of (run, subrun, event) triplets to add to the index
        skip_run_event_list: list((int, int, int)), optional
            List of (run, subrun, event) triplets to skip from the index
        allow_missing : bool, default False
            If `True`, allows missing entries in the run/event lists
        """
        # Make sure the parameters are sensible
        count_based = n_entry is not None or n_skip is not None
        list_based = entry_list is not None or skip_entry_list is not None
        event_based = run_event_list is not None or skip_run_event_list is not None
        assert count_based + list_based + event_based < 2, (
            "Cannot specify `n_entry` or `n_skip` at the same time "
            "as `entry_list` or `skip_entry_list` or at the same time "
            "as `run_event_list` or `skip_run_event_list`."
        )

        assert not entry_list or not skip_entry_list, (
            "Cannot specify both `entry_list` and "
            "`skip_entry_list` at the same time."
        )

        assert not run_event_list or not skip_run_event_list, (
            "Cannot specify both `run_event_list` and "
            "`skip_run_event_list` at the same time."
        )

        # Create a list of entries to be loaded
        if count_based:
            n_skip = n_skip if n_skip else 0
            n_entry = n_entry if n_entry else self.num_entries - n_skip
            assert n_skip + n_entry <= self.num_entries, (
                f"Mismatch between `n_entry` ({n_entry}), `n_skip` ({n_skip}) "
                f"and the number of entries in the files ({self.num_entries})."
            )
            entry_list = np.arange(n_skip, n_skip + n_entry)

        elif entry_list:
            entry_list = self.parse_entry_list(entry_list)
            assert np.all(
                entry_list < self.num_entries
            ), "Values in entry_list outside of bounds."

        elif run_event_list:
            self.process_run_info()
            entry_list = []
            for r, s, e in self.parse_run_event_list(run_event_list):
                if not allow_missing or (r, s, e) in self.run_map:
                    entry_list.append(self.get_run_event_index(r, s, e))

            entry_list = np.unique(np.array(entry_list, dtype=np.int64))

        elif skip_entry_list or skip_run_event_list:
            if skip_entry_list:
                skip_entry_list = self.parse_entry_list(skip_entry_list)
                assert np.all(
                    skip_entry_list < self.num_entries
                ), "Values in skip_entry_list outside of bounds."

            else:
                self.process_run_info()
                skip_entry_list = []
                for r, s, e in self.parse_run_event_list(skip_run_event_list):
                    if not allow_missing or (r, s, e) in self.run_map:
                        skip_entry_list.append(self.get_run_event_index(r, s, e))

            entry_mask = np.ones(self.num_entries, dtype=bool)
            entry_mask[np.asarray(skip_entry_list, dtype=np.int64)] = False
            entry_list = np.where(entry_mask)[0]

        else:
            entry_list = None

        # Apply entry list to the indexes
        entry_index = np.arange(self.num_entries, dtype=np.int64)
        if entry_list is not None:
            entry_index = entry_index[entry_list]

        assert len(entry_index), "Must at least have one entry to load."

        logger.info("Total number of entries selected: %d\n", len(entry_index))

        self.entry_index = entry_index

    def get_run_event(self, run, subrun, event):
        """Returns an entry corresponding to a specific (run, subrun, event)
        triplet.

        Parameters
        ----------
        run : int
            Run number
        subrun : int
            Subrun number
        event : int
            Event number

        Returns
        -------
        dict
            Dictionary of data products corresponding to one event
        """
        if self.run_map is None:
            self.process_run_info()

        entry = self.get_run_event_index(run, subrun, event)
        index = np.where(self.entry_index == entry)[0]
        assert len(index), (
            f"The (run={run}, subrun={subrun}, event={event}) entry exists "
            "but is not part of the selected entries."
        )

        return self.get(index[0])

    def get_run_event_index(self, run, subrun, event):
        """Returns an entry index corresponding to a specific
        (run, subrun, event) triplet.

        Parameters
        ----------
        run : int
            Run number
        subrun : int
            Subrun number
        event : int
            Event number

        Returns
        -------
        int
            Index of the entry in the files
        """
        assert (
            self.run_map is not None
        ), "Must build a run map to get entries by (run, subrun, event)."
        assert (run, subrun, event) in self.run_map, (
            f"Could not find (run={run}, subrun={subrun}, event={event})."
        )

        return self.run_map[(run, subrun, event)]

    @staticmethod
    def parse_entry_list(list_source):
        """Parses a list into an np.ndarray.

        The list can be passed as a simple python list or a path to a file
        which contains space or comma separated numbers (can be on multiple
        lines or not)

        Parameters
        ----------
        list_source : Union[list, str]
            List as a python list or a text file path

        Returns
        -------
        np.ndarray
            List as a numpy array
        """
        if list_source is None:
            return np.empty(0, dtype=np.int64)

        if not np.isscalar(list_source):
            return np.asarray(list_source, dtype=np.int64)

        if isinstance(list_source, str):
            if not os.path.isfile(list_source):
                raise FileNotFoundError(
                    f"The list source file does not exist: {list_source}"
                )
            with open(list_source, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
                line_list = [l.replace(",", " ").split() for l in lines]
                list_source = [int(w) for l in line_list for w in l]

            return np.array(list_source, dtype=np.int64)

        raise ValueError("List format not recognized.")

    @staticmethod
    def parse_run_event_list(list_source):
        """Parses a list of (run, subrun, event) triplets.

        The list can be passed as a simple python list or a path to a file
        which contains one (run, subrun, event) triplet per line.

        Parameters
        ----------
        list_source : Union[list, str]
            List as a python list or a text file path

        Returns
        -------
        Tuple[Tuple[int]]
            Tuple of (run, subrun, event) triplets
        """
        if list_source is None:
            return ()

        if not np.isscalar(list_source):
            return tuple(tuple(int(v) for v in val) for val in list_source)

        if isinstance(list_source, str):
            if not os.path.isfile(list_source):
                raise FileNotFoundError(
                    f"The list source file does not exist: {list_source}"
                )
            with open(list_source, "r", encoding="utf-8") as f:
                lines = [l for l in f.read().splitlines() if l.strip()]
                line_list = [l.replace(",", " ").split() for l in lines]

            return tuple((int(r), int(s), int(e)) for r, s, e in line_list)

        raise ValueError("List format not recognized.")
