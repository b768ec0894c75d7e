"""Module to write cosmic tags to CSV."""

import os

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes cosmic tags to a CSV file.

    Each cosmic tag of each entry is stored as one row of the CSV file, along
    with the run information of the entry it belongs to. It can only be
    used to store relatively basic quantities (scalars, strings, etc.).

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          ...
          writer:
            name: csv
            file_name: cosmic_tags.csv
    """

    # Name of the writer (as specified in the configuration)
    name = "csv"

    # Attributes of the cosmic tags to store
    _tag_attrs = ("particle_id", "tag_id", "score", "start_point", "end_point")

    def __init__(
        self,
        file_name="cosmic_tags.csv",
        keys=("cosmic_tags",),
        overwrite=False,
        append=False,
        accept_missing=False,
    ):
        """Initialize the basics of the output file.

        Parameters
        ----------
        file_name : str, default 'cosmic_tags.csv'
            Name of the output CSV file
        keys : List[str], default ['cosmic_tags']
            List of data products which contain cosmic tags to store
        overwrite : bool, default False
            If `True`, overwrite the output file if it already exists
        append : bool, default False
            If `True`, add more rows to an existing CSV file
        accept_missing : bool, default False
            Tolerate missing columns
        """
        # Check that output file does not already exist, if requested
        if not overwrite and not append and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        # Store persistent attributes
        self.file_name = file_name
        self.keys = keys
        self.append_file = append
        self.accept_missing = accept_missing
        self.result_keys = None
        if self.append_file:
            if not os.path.isfile(file_name):
                raise FileNotFoundError(
                    f"File not found at path: {file_name}. When using "
                    "`append=True` in CSVWriter, the file must exist at "
                    "the prescribed path before data is written to it."
                )

            with open(self.file_name, "r", encoding="utf-8") as out_file:
                self.result_keys = out_file.readline().strip().split(",")

    def __call__(self, data):
        """Writes the cosmic tags of one entry to file.

        Parameters
        ----------
        data : dict
            Dictionary of data products of one entry
        """
        for key in self.keys:
            assert key in data, f"Cannot store `{key}`, it is not in the entry."
            for tag in data[key]:
                row = {"index": data.get("index", -1)}
                if "run_info" in data:
                    row.update(data["run_info"].scalar_dict())
                row.update(tag.scalar_dict(self._tag_attrs))

                self.append(row)

    def create(self, result_blob):
        """Initialize the header of the CSV file, record the keys to be stored.

        Parameters
        ----------
        result_blob : dict
            Dictionary of (column, value) pairs of one row
        """
        # Save the list of keys to store
        self.result_keys = list(result_blob.keys())

        # Create a header and write it to file
        with open(self.file_name, "w", encoding="utf-8") as out_file:
            header_str = ",".join(self.result_keys)
            out_file.write(header_str + "\n")

    def append(self, result_blob):
        """Append one row to the CSV file.

        Parameters
        ----------
        result_blob : dict
            Dictionary of (column, value) pairs of one row
        """
        if self.result_keys is None:
            # If this function has never been called, initialiaze the CSV file
            self.create(result_blob)

        elif list(result_blob.keys()) != self.result_keys:
            # If the list of keys is not identical, check the discrepancies
            missing = self.array_diff(self.result_keys, result_blob.keys())
            excess = self.array_diff(result_blob.keys(), self.result_keys)
            if len(excess):
                raise AssertionError(
                    "There are keys in this entry which were not "
                    "present when the CSV file was initialized. "
                    f"New keys: {list(excess)}"
                )

            if len(missing) and not self.accept_missing:
                raise AssertionError(
                    "There are keys missing in this entry which were "
                    "present when the CSV file was initialized. "
                    f"Missing keys: {list(missing)}"
                )

            new_result_blob = {k: -1 for k in self.result_keys}
            new_result_blob.update(result_blob)
            result_blob = new_result_blob

        # Append file
        with open(self.file_name, "a", encoding="utf-8") as out_file:
            result_str = ",".join([str(result_blob[k]) for k in self.result_keys])
            out_file.write(result_str + "\n")

    @staticmethod
    def array_diff(array_x, array_y):
        """Returns the elements of the first array absent from the second.

        Parameters
        ----------
        array_x : List[str]
            First array of strings
        array_y : List[str]
            Second array of strings

        Returns
        -------
        Set[str]
            Set of keys that appear in `array_x` but not in `array_y`.
        """
        return set(array_x).difference(set(array_y))
