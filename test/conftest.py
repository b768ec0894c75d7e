"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import numpy as np
import pandas as pd
import pytest

from cosmictag.data import Hit, PCAxis
from cosmictag.geo import BoundaryConfig, TPCDetector


@pytest.fixture(name="detector")
def fixture_detector():
    """Simple TPC with round extents and a drift window of 2000 ticks.

    The active volume spans [0, 250] x [-100, 100] x [0, 1000] cm.
    """
    return TPCDetector(
        half_width=125.0,
        half_height=100.0,
        length=1000.0,
        drift_velocity=0.125,
        sampling_rate=1000.0,
        name="test",
    )


@pytest.fixture(name="config")
def fixture_config():
    """Boundary definition of the test TPC, with 5 cm margins."""
    return BoundaryConfig(half_height=100.0, width=250.0, length=1000.0, margin=5.0)


@pytest.fixture(name="window")
def fixture_window(detector):
    """Drift window width of the test TPC, in ticks."""
    return detector.width_ticks


@pytest.fixture(name="make_track")
def fixture_make_track():
    """Factory of straight tracks between two end points.

    The factory returns the principal axis of the track and its space points.
    The points are sampled uniformly between the two end points.
    """

    def make_track(start, end, num_points=11, id=0):
        start = np.asarray(start, dtype=np.float64)
        end = np.asarray(end, dtype=np.float64)
        points = start + np.linspace(0.0, 1.0, num_points)[:, None] * (end - start)

        direction = (end - start) / np.linalg.norm(end - start)
        length = np.linalg.norm(end - start)
        axis = PCAxis(
            id=id,
            center=(start + end) / 2.0,
            direction=direction,
            eigenvalues=[length**2 / 12.0, 0.5, 0.5],
        )

        return axis, points

    return make_track


@pytest.fixture(name="in_time_hits")
def fixture_in_time_hits(window):
    """List of hits well within the [W, 2W) readout window."""
    return [
        Hit(id=i, peak_time=t, time_lower=t - 5.0, time_upper=t + 5.0)
        for i, t in enumerate(np.linspace(1.2 * window, 1.8 * window, 5))
    ]


@pytest.fixture(name="products_dir")
def fixture_products_dir(tmp_path):
    """Directory of CSV tables describing two entries.

    Entry (1, 2, 3) contains:
      - particle 10, crossing both drift faces
      - particle 11, contained
      - particle 12, contained but with an out-of-time hit
      - particle 13, without a principal axis
    Entry (1, 2, 4) contains:
      - particle 20, crossing both z faces
      - particle 21, crossing both y faces, with two axes (5 and 3)
    """

    axes = [
        (3, 10, 0, (125, 0, 500), (1, 0, 0), (5000, 1, 1)),
        (3, 11, 1, (125, 0, 500), (0, 0, 1), (100, 1, 1)),
        (3, 12, 2, (125, 0, 500), (0, 1, 0), (100, 1, 1)),
        (4, 20, 0, (125, 0, 500), (0, 0, 1), (80000, 1, 1)),
        (4, 21, 5, (125, 0, 500), (0, 0, 1), (100, 1, 1)),
        (4, 21, 3, (125, 0, 500), (0, 1, 0), (100, 1, 1)),
    ]
    points = [
        (3, 10, (1, 0, 500)),
        (3, 10, (125, 0.5, 500)),
        (3, 10, (249, -0.5, 500)),
        (3, 11, (125, 0, 480)),
        (3, 11, (125, 0, 520)),
        (3, 12, (125, -10, 500)),
        (3, 12, (125, 10, 500)),
        (4, 20, (125, 0, 2)),
        (4, 20, (125, 0, 998)),
        (4, 21, (125, -98, 500)),
        (4, 21, (125, 98, 490)),
    ]
    hits = [
        (3, 10, 3000.0),
        (3, 11, 3000.0),
        (3, 12, 3000.0),
        (3, 12, 500.0),
        (3, 13, 3000.0),
        (4, 20, 3000.0),
        (4, 21, 3000.0),
    ]

    def entry(event, particle_id):
        return {"run": 1, "subrun": 2, "event": event, "particle_id": particle_id}

    axis_rows = []
    for event, part_id, axis_id, center, direction, eigenvalues in axes:
        row = entry(event, part_id)
        row["id"] = axis_id
        row.update({f"center_{a}": v for a, v in zip("xyz", center)})
        row.update({f"direction_{a}": v for a, v in zip("xyz", direction)})
        row.update({f"eigenvalues_{i}": v for i, v in enumerate(eigenvalues)})
        axis_rows.append(row)

    point_rows = []
    for i, (event, part_id, position) in enumerate(points):
        row = entry(event, part_id)
        row["id"] = i
        row.update({f"position_{a}": v for a, v in zip("xyz", position)})
        point_rows.append(row)

    hit_rows = []
    for i, (event, part_id, peak_time) in enumerate(hits):
        row = entry(event, part_id)
        row.update(id=i, peak_time=peak_time, rms=5.0)
        hit_rows.append(row)

    path = tmp_path / "products"
    path.mkdir()
    pd.DataFrame(axis_rows).to_csv(path / "pc_axes.csv", index=False)
    pd.DataFrame(point_rows).to_csv(path / "space_points.csv", index=False)
    pd.DataFrame(hit_rows).to_csv(path / "hits.csv", index=False)

    return path
