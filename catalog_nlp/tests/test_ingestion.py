import json

import pytest

from catalog_nlp.core.ingestion.json_loader import JsonMetadataLoader
from catalog_nlp.utils.exceptions import BadInputError, NotFoundError


def test_load_from_dict_builds_three_tables(catalog):
    tables = JsonMetadataLoader().load(catalog)

    assert tables.num_datasets == 7
    assert list(tables.titles.columns) == ["id", "title"]
    assert list(tables.descriptions.columns) == ["id", "description"]
    assert list(tables.keywords.columns) == ["id", "keyword"]
    assert tables.titles.loc[0, "id"] == "a1"


def test_keywords_are_uppercased_and_deduplicated():
    payload = {
        "dataset": [
            {"_id": "x", "title": "t", "keyword": ["Atmosphere", "ATMOSPHERE", "Ozone"]}
        ]
    }
    tables = JsonMetadataLoader().load(payload)
    assert tables.keywords["keyword"].tolist() == ["ATMOSPHERE", "OZONE"]


def test_list_valued_description_is_joined(catalog):
    tables = JsonMetadataLoader().load(catalog)
    desc = tables.descriptions.set_index("id").loc["a3", "description"]
    assert desc == "Sea level anomalies over the ocean. Ocean tides and sea ice."


def test_missing_fields_and_id_fallbacks():
    payload = {
        "dataset": [
            {"identifier": "ident-1", "title": "only title"},
            {"title": "no id at all", "keyword": "Single"},
        ]
    }
    tables = JsonMetadataLoader().load(payload)
    assert tables.titles["id"].tolist() == ["ident-1", "#1"]
    assert tables.descriptions["description"].tolist() == ["", ""]
    assert tables.keywords.to_dict("records") == [{"id": "#1", "keyword": "SINGLE"}]


def test_positional_ids_do_not_collide_with_numeric_ids():
    payload = {"dataset": [{"_id": "1", "title": "a"}, {"title": "b"}]}
    tables = JsonMetadataLoader().load(payload)
    assert tables.num_datasets == 2
    assert tables.titles.values.tolist() == [["1", "a"], ["#1", "b"]]


def test_duplicate_ids_are_dropped():
    payload = {
        "dataset": [
            {"_id": {"$oid": "dup"}, "title": "first"},
            {"_id": {"$oid": "dup"}, "title": "second"},
        ]
    }
    tables = JsonMetadataLoader().load(payload)
    assert tables.titles["title"].tolist() == ["first"]


def test_load_from_path_and_json_string(catalog, catalog_path):
    from_path = JsonMetadataLoader().load(catalog_path)
    from_str = JsonMetadataLoader().load(json.dumps(catalog))
    from_bytes = JsonMetadataLoader().load(json.dumps(catalog).encode("utf-8"))
    assert from_path.titles.equals(from_str.titles)
    assert from_bytes.keywords.equals(from_path.keywords)


def test_missing_file_raises_not_found(tmp_path):
    with pytest.raises(NotFoundError) as exc:
        JsonMetadataLoader().load(tmp_path / "missing.json")
    assert exc.value.code == "DATA_FILE_NOT_FOUND"


def test_invalid_json_raises_bad_input():
    with pytest.raises(BadInputError) as exc:
        JsonMetadataLoader().load('{"dataset": [')
    assert exc.value.code == "DATA_INVALID_JSON"


def test_missing_dataset_array_raises_bad_input():
    with pytest.raises(BadInputError) as exc:
        JsonMetadataLoader().load({"items": []})
    assert exc.value.code == "DATA_MISSING_DATASETS"
