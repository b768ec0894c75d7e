"""Contains a reader class dedicated to loading tables of reconstruction
products from CSV files.

Each input is a directory which contains one table per product:
  - `pc_axes.csv`: principal axes (`id`, `center_[xyz]`, `direction_[xyz]`,
    `eigenvalues_[012]`)
  - `hits.csv`: hits (`id`, `peak_time` and either `time_lower` and
    `time_upper` or `rms`)
  - `space_points.csv`: space points (`id`, `position_[xyz]`)

Every row carries the `run`, `subrun` and `event` of its entry and the
`particle_id` of the particle it is associated with.
"""

import os

import numpy as np
import pandas as pd

from cosmictag.data import Hit, Particle, PCAxis, RunInfo, SpacePoint

from .base import ReaderBase

__all__ = ["CSVReader"]


class CSVReader(ReaderBase):
    """Class which reads information stored in CSV tables.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          reader:
            name: csv
            file_keys: /path/to/products/*
    """

    # Name of the reader (as specified in the configuration)
    name = "csv"

    # Columns which identify an entry
    _entry_cols = ("run", "subrun", "event")

    # (product, file name, required columns) triplets
    _tables = (
        (
            "pc_axes",
            "pc_axes.csv",
            (
                "center_x",
                "center_y",
                "center_z",
                "direction_x",
                "direction_y",
                "direction_z",
                "eigenvalues_0",
                "eigenvalues_1",
                "eigenvalues_2",
            ),
        ),
        ("hits", "hits.csv", ("peak_time",)),
        (
            "space_points",
            "space_points.csv",
            ("position_x", "position_y", "position_z"),
        ),
    )

    def __init__(
        self,
        file_keys,
        limit_num_files=None,
        max_print_files=10,
        n_entry=None,
        n_skip=None,
        entry_list=None,
        skip_entry_list=None,
        run_event_list=None,
        skip_run_event_list=None,
        allow_missing=False,
    ):
        """Initalize the CSV table reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths to the directories to load. Glob patterns
            and `.txt` file lists are accepted.
        limit_num_files : int, optional
            Integer limiting number of directories to be taken
        max_print_files : int, default 10
            Maximum number of loaded directory names to be printed
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
        # Process the list of directories
        self.process_file_paths(file_keys, limit_num_files, max_print_files)

        # Load the tables, concatenate them across directories
        self.tables = {}
        for key, file_name, columns in self._tables:
            frames = []
            for i, path in enumerate(self.file_paths):
                frame = self.load_table(os.path.join(path, file_name), columns)
                frame["file_index"] = i
                frames.append(frame)

            self.tables[key] = pd.concat(frames, ignore_index=True)

        # Check that the hit time intervals can be built
        hits = self.tables["hits"]
        if not {"time_lower", "time_upper"}.issubset(hits.columns):
            if "rms" not in hits.columns:
                raise ValueError(
                    "The hit tables must either provide `time_lower` and "
                    "`time_upper` or `rms` columns."
                )

        # Define the entries as the unique (run, subrun, event) triplets,
        # each of which must live in a single directory
        cols = list(self._entry_cols)
        entries = pd.concat(
            [self.tables[key][cols + ["file_index"]] for key, _, _ in self._tables]
        ).drop_duplicates()
        shared = entries.duplicated(subset=cols, keep=False)
        if shared.any():
            run, subrun, event = entries.loc[shared, cols].iloc[0]
            paths = [
                self.file_paths[i]
                for i in entries.loc[shared, "file_index"].unique()
            ]
            raise ValueError(
                f"Entry (run={run}, subrun={subrun}, event={event}) is found "
                f"in more than one of the input directories {paths}. The "
                "(run, subrun, event) triplets must be unique across inputs."
            )

        self.run_info = entries[cols].to_numpy(dtype=np.int64)
        self.file_index = entries["file_index"].to_numpy(dtype=np.int64)
        self.num_entries = len(self.run_info)

        # Map each entry onto the rows of each of the tables
        self.groups = {}
        for key, _, _ in self._tables:
            self.groups[key] = self.tables[key].groupby(cols, sort=False).indices

        # Process the entry list
        self.process_entry_list(
            n_entry,
            n_skip,
            entry_list,
            skip_entry_list,
            run_event_list,
            skip_run_event_list,
            allow_missing,
        )

    def load_table(self, file_path, columns):
        """Loads one CSV table, checks that it holds the necessary columns.

        Parameters
        ----------
        file_path : str
            Path to the CSV file
        columns : List[str]
            List of columns specific to this table

        Returns
        -------
        pd.DataFrame
            Loaded table
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Could not find the table at: {file_path}")

        frame = pd.read_csv(file_path)
        required = list(self._entry_cols) + ["particle_id"] + list(columns)
        missing = [c for c in required if c not in frame.columns]
        if len(missing):
            raise ValueError(f"The table at {file_path} is missing columns: {missing}")

        return frame

    def get(self, idx):
        """Returns one entry worth of data products.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        dict
            Dictionary of data products
        """
        # Get the appropriate entry index and its run information
        entry = int(self.entry_index[idx])
        run, subrun, event = (int(v) for v in self.run_info[entry])

        # Fetch the rows of each table which belong to this entry
        frames = {}
        for key, _, _ in self._tables:
            rows = self.groups[key].get((run, subrun, event), [])
            frames[key] = self.tables[key].iloc[rows]

        # Build the data products
        pc_axes = self.parse_axes(frames["pc_axes"])
        hits = self.parse_hits(frames["hits"])
        space_points = self.parse_points(frames["space_points"])
        particles = self.parse_particles(frames)

        return {
            "index": entry,
            "run_info": RunInfo(run=run, subrun=subrun, event=event),
            "particles": particles,
            "pc_axes": pc_axes,
            "hits": hits,
            "space_points": space_points,
        }

    @staticmethod
    def get_ids(frame):
        """Fetches the object IDs of a table, defaults to the row index."""
        if "id" in frame.columns:
            return frame["id"].to_numpy(dtype=np.int64)

        return np.arange(len(frame), dtype=np.int64)

    def parse_axes(self, frame):
        """Converts a principal axis table into a list of axes."""
        ids = self.get_ids(frame)
        center = frame[["center_x", "center_y", "center_z"]].to_numpy(np.float64)
        direction = frame[["direction_x", "direction_y", "direction_z"]].to_numpy(
            np.float64
        )
        eigenvalues = frame[
            ["eigenvalues_0", "eigenvalues_1", "eigenvalues_2"]
        ].to_numpy(np.float64)

        return [
            PCAxis(
                id=int(ids[i]),
                center=center[i],
                direction=direction[i],
                eigenvalues=eigenvalues[i],
            )
            for i in range(len(frame))
        ]

    def parse_hits(self, frame):
        """Converts a hit table into a list of hits.

        If the time bounds are not provided, they are derived from the hit
        peak time and its RMS.
        """
        ids = self.get_ids(frame)
        peak_time = frame["peak_time"].to_numpy(np.float64)
        if not {"time_lower", "time_upper"}.issubset(frame.columns):
            rms = frame["rms"].to_numpy(np.float64)
            return [
                Hit.from_rms(float(peak_time[i]), float(rms[i]), id=int(ids[i]))
                for i in range(len(frame))
            ]

        lower = frame["time_lower"].to_numpy(np.float64)
        upper = frame["time_upper"].to_numpy(np.float64)

        return [
            Hit(
                id=int(ids[i]),
                peak_time=float(peak_time[i]),
                time_lower=float(lower[i]),
                time_upper=float(upper[i]),
            )
            for i in range(len(frame))
        ]

    def parse_points(self, frame):
        """Converts a space point table into a list of space points."""
        ids = self.get_ids(frame)
        position = frame[["position_x", "position_y", "position_z"]].to_numpy(
            np.float64
        )

        return [
            SpacePoint(id=int(ids[i]), position=position[i]) for i in range(len(frame))
        ]

    @staticmethod
    def parse_particles(frames):
        """Builds the particle associations of one entry.

        Particles are ordered by first appearance in the axis, hit and space
        point tables (in that order).

        Parameters
        ----------
        frames : Dict[str, pd.DataFrame]
            Tables of each product restricted to one entry

        Returns
        -------
        List[Particle]
            List of particles and their associations
        """
        # Fetch the particle ID of each object in each table
        part_ids = {
            key: frame["particle_id"].to_numpy(np.int64)
            for key, frame in frames.items()
        }
        unique_ids = pd.unique(
            np.concatenate(
                [part_ids["pc_axes"], part_ids["hits"], part_ids["space_points"]]
            )
        )

        # Build the index of the objects which belong to each particle
        particles = []
        for part_id in unique_ids:
            particles.append(
                Particle(
                    id=int(part_id),
                    axis_index=np.where(part_ids["pc_axes"] == part_id)[0],
                    hit_index=np.where(part_ids["hits"] == part_id)[0],
                    point_index=np.where(part_ids["space_points"] == part_id)[0],
                )
            )

        return particles
