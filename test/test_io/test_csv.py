"""Tests for the CSV reader and writer."""

import shutil

import numpy as np
import pandas as pd
import pytest

from cosmictag.data import CosmicTag, RunInfo
from cosmictag.io import reader_factory, writer_factory
from cosmictag.io.read import CSVReader
from cosmictag.io.write import CSVWriter


class TestCSVReader:
    """Test the loading of reconstruction products from CSV tables."""

    def test_entries(self, products_dir):
        """Entries are the unique (run, subrun, event) triplets."""
        reader = CSVReader(str(products_dir))

        assert len(reader) == 2
        np.testing.assert_array_equal(reader.run_info, [[1, 2, 3], [1, 2, 4]])

    def test_get(self, products_dir):
        """Test the content of one entry."""
        data = CSVReader(str(products_dir))[0]

        assert data["index"] == 0
        assert data["run_info"] == RunInfo(run=1, subrun=2, event=3)
        assert len(data["pc_axes"]) == 3
        assert len(data["space_points"]) == 7
        assert len(data["hits"]) == 5

        particles = data["particles"]
        assert [p.id for p in particles] == [10, 11, 12, 13]
        np.testing.assert_array_equal(particles[2].axis_index, [2])
        np.testing.assert_array_equal(particles[2].hit_index, [2, 3])
        np.testing.assert_array_equal(particles[0].point_index, [0, 1, 2])
        assert len(particles[3].axis_index) == 0

        axis = data["pc_axes"][0]
        np.testing.assert_array_equal(axis.direction, [1.0, 0.0, 0.0])
        np.testing.assert_array_equal(axis.eigenvalues, [5000.0, 1.0, 1.0])

    def test_hit_rms(self, products_dir):
        """Hit time bounds are derived from the RMS if not provided."""
        hits = CSVReader(str(products_dir))[0]["hits"]

        assert (hits[3].time_lower, hits[3].time_upper) == (495.0, 505.0)

    def test_hit_bounds(self, products_dir):
        """Explicit hit time bounds are used as is."""
        hits = pd.read_csv(products_dir / "hits.csv")
        hits["time_lower"] = hits["peak_time"] - 1.0
        hits["time_upper"] = hits["peak_time"] + 2.0
        hits.drop(columns="rms").to_csv(products_dir / "hits.csv", index=False)

        hit = CSVReader(str(products_dir))[0]["hits"][0]
        bounds = (hit.time_lower, hit.peak_time, hit.time_upper)
        assert bounds == (2999.0, 3000.0, 3002.0)

    def test_missing_hit_width(self, products_dir):
        """Hits must provide a way to build their time interval."""
        hits = pd.read_csv(products_dir / "hits.csv")
        hits.drop(columns="rms").to_csv(products_dir / "hits.csv", index=False)

        with pytest.raises(ValueError):
            CSVReader(str(products_dir))

    def test_missing_table(self, products_dir):
        """All three tables are required."""
        (products_dir / "space_points.csv").unlink()

        with pytest.raises(FileNotFoundError):
            CSVReader(str(products_dir))

    def test_missing_column(self, products_dir):
        """Tables missing essential columns are rejected."""
        axes = pd.read_csv(products_dir / "pc_axes.csv")
        axes = axes.drop(columns="eigenvalues_1")
        axes.to_csv(products_dir / "pc_axes.csv", index=False)

        with pytest.raises(ValueError):
            CSVReader(str(products_dir))

    def test_no_match(self, tmp_path):
        """File keys which match nothing are rejected."""
        with pytest.raises(AssertionError):
            CSVReader(str(tmp_path / "nothing*"))

    def test_file_list(self, products_dir, tmp_path):
        """A text file can list the input directories."""
        file_list = tmp_path / "inputs.txt"
        file_list.write_text(f"{products_dir}\n")

        assert len(CSVReader(str(file_list))) == 2

    def test_n_skip(self, products_dir):
        """Test skipping the first entries."""
        reader = CSVReader(str(products_dir), n_skip=1)

        assert len(reader) == 1
        assert reader[0]["run_info"].event == 4

    def test_n_entry(self, products_dir):
        """Test limiting the number of entries."""
        reader = CSVReader(str(products_dir), n_entry=1)

        assert len(reader) == 1
        assert reader[0]["run_info"].event == 3

    def test_skip_entry_list(self, products_dir):
        """Test skipping specific entries."""
        reader = CSVReader(str(products_dir), skip_entry_list=[0])

        assert len(reader) == 1
        assert reader[0]["index"] == 1

    def test_run_event_list(self, products_dir):
        """Test selecting entries by (run, subrun, event)."""
        reader = CSVReader(str(products_dir), run_event_list=[[1, 2, 4]])

        assert len(reader) == 1
        assert reader[0]["run_info"].event == 4
        assert reader.get_run_event(1, 2, 4)["index"] == 1

    def test_incompatible_selections(self, products_dir):
        """Entry selection methods cannot be combined."""
        with pytest.raises(AssertionError):
            CSVReader(str(products_dir), n_entry=1, entry_list=[0])

    def test_multiple_directories(self, products_dir, tmp_path):
        """Entries of several directories are kept apart."""
        other_dir = tmp_path / "other"
        shutil.copytree(products_dir, other_dir)
        for file_name in ("pc_axes.csv", "hits.csv", "space_points.csv"):
            table = pd.read_csv(other_dir / file_name)
            table["event"] += 10
            table.to_csv(other_dir / file_name, index=False)

        reader = CSVReader([str(products_dir), str(other_dir)])
        assert len(reader) == 4
        np.testing.assert_array_equal(reader.file_index, [0, 0, 1, 1])

        data = reader.get_run_event(1, 2, 13)
        assert [p.id for p in data["particles"]] == [10, 11, 12, 13]
        assert len(data["pc_axes"]) == 3
        np.testing.assert_array_equal(data["particles"][0].axis_index, [0])

    def test_shared_entry(self, products_dir, tmp_path):
        """An entry cannot be split across several directories."""
        other_dir = tmp_path / "other"
        shutil.copytree(products_dir, other_dir)

        with pytest.raises(ValueError, match="event=3"):
            CSVReader([str(products_dir), str(other_dir)])

    def test_factory(self, products_dir):
        """Test instantiating the reader from a configuration block."""
        reader = reader_factory({"name": "csv", "file_keys": str(products_dir)})

        assert isinstance(reader, CSVReader)


class TestCSVWriter:
    """Test the storage of cosmic tags to CSV."""

    @pytest.fixture(name="data")
    def fixture_data(self):
        """Entry with two cosmic tags."""
        tags = [
            CosmicTag(
                start_point=[1, 2, 3], end_point=[4, 5, 6], tag_id=4, score=1.0,
                particle_id=10, axis_ids=[0],
            ),
            CosmicTag(
                start_point=[7, 8, 9], end_point=[1, 1, 1], tag_id=0, score=0.0,
                particle_id=11, axis_ids=[1],
            ),
        ]
        run_info = RunInfo(run=1, subrun=2, event=3)

        return {"index": 0, "run_info": run_info, "cosmic_tags": tags}

    def test_write(self, tmp_path, data):
        """One row is written per cosmic tag."""
        file_name = str(tmp_path / "tags.csv")
        writer = CSVWriter(file_name)
        writer(data)

        table = pd.read_csv(file_name)
        assert len(table) == 2
        assert list(table["particle_id"]) == [10, 11]
        assert list(table["tag_id"]) == [4, 0]
        assert list(table["tag_name"]) == ["GEOMETRY_XX", "NOT_TAGGED"]
        assert list(table["event"]) == [3, 3]
        assert table["start_point_x"][0] == 1.0
        assert table["end_point_z"][1] == 1.0

    def test_existing_file(self, tmp_path, data):
        """Existing files are only overwritten if requested."""
        file_path = tmp_path / "tags.csv"
        file_path.write_text("")
        with pytest.raises(FileExistsError):
            CSVWriter(str(file_path))

        writer = CSVWriter(str(file_path), overwrite=True)
        writer(data)
        assert len(pd.read_csv(file_path)) == 2

    def test_append(self, tmp_path, data):
        """Rows can be appended to an existing file."""
        file_name = str(tmp_path / "tags.csv")
        with pytest.raises(FileNotFoundError):
            CSVWriter(file_name, append=True)

        CSVWriter(file_name)(data)
        CSVWriter(file_name, append=True)(data)
        assert len(pd.read_csv(file_name)) == 4

    def test_missing_keys(self, tmp_path):
        """Rows must have the same columns as the header."""
        writer = CSVWriter(str(tmp_path / "log.csv"))
        writer.append({"a": 1, "b": 2})
        with pytest.raises(AssertionError):
            writer.append({"a": 1})
        with pytest.raises(AssertionError):
            writer.append({"a": 1, "b": 2, "c": 3})

        writer = CSVWriter(str(tmp_path / "log_missing.csv"), accept_missing=True)
        writer.append({"a": 1, "b": 2})
        writer.append({"a": 3})
        assert list(pd.read_csv(tmp_path / "log_missing.csv")["b"]) == [2, -1]

    def test_missing_product(self, tmp_path):
        """The cosmic tags must be in the entry."""
        writer = CSVWriter(str(tmp_path / "tags.csv"))
        with pytest.raises(AssertionError):
            writer({"index": 0})

    def test_factory(self, tmp_path):
        """Test instantiating the writer from a configuration block."""
        writer = writer_factory({"name": "csv", "file_name": str(tmp_path / "t.csv")})

        assert isinstance(writer, CSVWriter)
