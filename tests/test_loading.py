from __future__ import annotations

import pandas as pd
import pytest

from collision_traffic.loading import read_collisions, read_traffic


def test_read_collisions_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_collisions(tmp_path / "nope.csv")


def test_read_traffic_requires_columns(tmp_path):
    path = tmp_path / "traffic.csv"
    pd.DataFrame({"County": ["Kings"], "Year": [2019]}).to_csv(path, index=False)

    with pytest.raises(KeyError, match="Count"):
        read_traffic(path)


def test_read_traffic_strips_header_whitespace(tmp_path):
    path = tmp_path / "traffic.csv"
    path.write_text("County , Year,Count,Length \nKings,2019,1000,0.5\n")

    df = read_traffic(path)

    assert list(df.columns) == ["County", "Year", "Count", "Length"]
    assert df.loc[0, "Count"] == 1000


def test_read_collisions_round_trips_fixture(tmp_path, study_inputs):
    collisions, _ = study_inputs
    path = tmp_path / "collisions.csv"
    collisions.to_csv(path, index=False)

    df = read_collisions(path)

    assert len(df) == len(collisions)
    assert df["CRASH DATE"].iloc[0] == collisions["CRASH DATE"].iloc[0]
