import json

import pandas as pd
import pytest


def _entry(oid, title, description, keywords):
    return {
        "_id": {"$oid": oid},
        "title": title,
        "description": description,
        "keyword": keywords,
    }


@pytest.fixture
def catalog():
    return {
        "dataset": [
            _entry(
                "a1",
                "Sea Surface Temperature Ocean Data v1",
                "Ocean temperature measured by buoys. Ocean salinity and sea level.",
                ["Oceans", "OCEAN TEMPERATURE", "Earth Science"],
            ),
            _entry(
                "a2",
                "Ocean Salinity Ocean Data",
                "Salinity of the ocean surface from satellite. Sea temperature.",
                ["OCEANS", "SALINITY", "EARTH SCIENCE"],
            ),
            _entry(
                "a3",
                "Sea Level Ocean Data L2",
                ["Sea level anomalies over the ocean.", "Ocean tides and sea ice."],
                ["OCEANS", "EARTH SCIENCE"],
            ),
            _entry(
                "b1",
                "Forest Fire Burned Area",
                "Fire burned area of forest and vegetation. Fire smoke plumes.",
                ["FIRE", "LAND SURFACE", "EARTH SCIENCE"],
            ),
            _entry(
                "b2",
                "Wildfire Smoke Fire Data",
                "Smoke from forest fire and wildfire. Vegetation fire emissions.",
                ["FIRE", "ATMOSPHERE", "EARTH SCIENCE"],
            ),
            _entry(
                "b3",
                "Vegetation Index Forest",
                "Forest vegetation index and burned fire scars.",
                ["LAND SURFACE", "Vegetation", "EARTH SCIENCE"],
            ),
            _entry(
                "c1",
                "Project Budget",
                "RDR",
                ["BUDGET"],
            ),
        ]
    }


@pytest.fixture
def catalog_path(tmp_path, catalog):
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps(catalog), encoding="utf-8")
    return path


@pytest.fixture
def item_table():
    # id -> items; duplicate ("a", "x") should count once
    rows = [
        ("a", "x"),
        ("a", "y"),
        ("a", "z"),
        ("a", "x"),
        ("b", "x"),
        ("b", "y"),
        ("c", "x"),
        ("d", "w"),
        ("e", "y"),
        ("e", "w"),
    ]
    return pd.DataFrame(rows, columns=["id", "word"])
