import json
import shutil
from pathlib import Path

import pytest

from rewards.rarity import Rarity
from server.config import PLUGIN_VERSION, SCHEMA_PATH
from server.config_store import (
    ConfigError,
    ConfigStore,
    Ruleset,
    is_older,
    load_config,
    migrate,
    parse_document,
    validate_document,
    version_tuple,
)
from server.defaults import default_document

FIXTURE = Path(__file__).parent / "fixtures" / "unwrap_rewards.json"


@pytest.fixture
def config_path(tmp_path):
    dest = tmp_path / "unwrap_rewards.json"
    shutil.copy(FIXTURE, dest)
    return dest


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_missing_file_writes_default(tmp_path):
    path = tmp_path / "nested" / "rewards.json"
    config = load_config(path)
    assert path.exists()
    on_disk = json.loads(path.read_text("utf-8"))
    assert on_disk == default_document()
    assert "easter.goldegg" in config.unwrap_rewards
    assert config.rarity_weights[Rarity.VeryRare] == 5


def test_load_without_write_back_leaves_disk_alone(tmp_path):
    path = tmp_path / "rewards.json"
    load_config(path, write_back=False)
    assert not path.exists()


def test_fixture_builds_ruleset(config_path):
    ruleset = Ruleset.from_config(load_config(config_path))
    assert ruleset.version == "1.0.0"
    assert set(ruleset.table) == {"gift.small", "gift.ammo", "gift.broken", "gift.empty"}
    assert [r.item_key for r in ruleset.lookup("gift.broken")] == ["junk"]
    assert ruleset.weights.get(Rarity.VeryRare) is None
    assert ruleset.lookup("gift.small")[1].variant_id == 1826520371


def test_compact_document_is_normalized_on_write_back(tmp_path):
    path = tmp_path / "rewards.json"
    _write(path, {
        "Version": PLUGIN_VERSION,
        "UnwrapRewards": {"box": [{"ItemShortName": "wood", "MinimumAmount": 1,
                                   "MaximumAmount": 2, "Rarity": "Common"}]},
        "RarityWeights": {"Common": 1},
    })
    load_config(path)
    on_disk = json.loads(path.read_text("utf-8"))
    assert list(on_disk) == ["Version", "Unwrap Rewards", "Rarity Weights"]
    assert on_disk["Unwrap Rewards"]["box"][0] == {
        "Item Short Name": "wood",
        "Display Name": None,
        "Skin Id": 0,
        "Minimum Amount": 1,
        "Maximum Amount": 2,
        "Rarity": "Common",
    }


def test_versions_compare_numerically():
    assert version_tuple("1.10.0") > version_tuple("1.9.0")
    assert version_tuple(None) == (0, 0, 0)
    assert version_tuple("garbage") == (0, 0, 0)
    assert is_older("0.9.9", "1.0.0")
    assert not is_older("1.0.0", "1.0.0")


def test_short_version_is_not_older():
    assert not is_older("1.0", "1.0.0")
    assert not is_older("1", "1.0.0")
    assert is_older("1.0", "1.0.1")
    assert not is_older("1.0.0.0", "1.0")


def test_two_part_version_keeps_tables(config_path):
    data = json.loads(config_path.read_text("utf-8"))
    data["Version"] = "1.0"
    _write(config_path, data)

    ruleset = Ruleset.from_config(load_config(config_path))
    assert "gift.small" in ruleset.table
    assert "easter.goldegg" not in ruleset.table
    on_disk = json.loads(config_path.read_text("utf-8"))
    assert "gift.small" in on_disk["Unwrap Rewards"]
    assert on_disk["Rarity Weights"]["Common"] == 90


def test_migrate_resets_pre_1_0_documents():
    old = parse_document({
        "Version": "0.9.0",
        "Unwrap Rewards": {"box": []},
        "Rarity Weights": {"Common": 1},
    })
    config, changed = migrate(old, current="1.0.0")
    assert changed
    assert config.version == "1.0.0"
    assert "box" not in config.unwrap_rewards
    assert "easter.goldegg" in config.unwrap_rewards


def test_migrate_keeps_compatible_tables_and_stamps_version():
    doc = default_document()
    doc["Version"] = "1.0.0"
    doc["Unwrap Rewards"] = {"box": []}
    config, changed = migrate(parse_document(doc), current="1.2.0")
    assert changed
    assert config.version == "1.2.0"
    assert list(config.unwrap_rewards) == ["box"]

    same, changed = migrate(config, current="1.2.0")
    assert not changed
    assert same is config


def test_invalid_json_raises_config_error(tmp_path):
    path = tmp_path / "rewards.json"
    path.write_text("{ not json", encoding="utf-8")
    with pytest.raises(ConfigError) as exc:
        load_config(path)
    assert exc.value.code == "E_JSON"


@pytest.mark.parametrize(
    "patch",
    [
        {"Rarity Weights": {"common": 5}},
        {"Rarity Weights": {"Common": -1}},
        {"Unwrap Rewards": {"box": [{"Item Short Name": "x", "Rarity": "Legendary"}]}},
        {"Unwrap Rewards": {"box": [{"Item Short Name": "x", "Skin Id": -4, "Rarity": "Common"}]}},
        {"Unwrap Rewards": {"box": {"Item Short Name": "x"}}},
    ],
)
def test_schema_violations_are_rejected(config_path, patch):
    data = json.loads(config_path.read_text("utf-8"))
    data.update(patch)
    _write(config_path, data)
    with pytest.raises(ConfigError) as exc:
        load_config(config_path)
    assert exc.value.code == "E_SCHEMA"


def test_pydantic_rejects_bad_weights_directly():
    with pytest.raises(ConfigError) as exc:
        parse_document({"Rarity Weights": {"Common": -1}})
    assert exc.value.code == "E_INVALID"


def test_store_reload_swaps_whole_ruleset(config_path):
    store = ConfigStore(config_path)
    first = store.current
    assert store.current is first

    data = json.loads(config_path.read_text("utf-8"))
    data["Unwrap Rewards"] = {"gift.new": data["Unwrap Rewards"]["gift.ammo"]}
    data["Rarity Weights"] = {"Common": 1}
    _write(config_path, data)

    second = store.reload()
    assert store.current is second
    assert list(second.table) == ["gift.new"]
    assert second.weights == {Rarity.Common: 1}
    # the old ruleset is untouched for readers still holding it
    assert "gift.small" in first.table
    assert first.weights[Rarity.Common] == 90


def test_store_failed_reload_keeps_previous(config_path):
    store = ConfigStore(config_path)
    first = store.load()
    config_path.write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigError):
        store.reload()
    assert store.current is first


def _refuse_write(self, *args, **kwargs):
    raise PermissionError(13, "Permission denied", str(self))


def test_unwritable_config_raises_io_error(config_path, monkeypatch):
    monkeypatch.setattr(Path, "write_text", _refuse_write)
    with pytest.raises(ConfigError) as exc:
        load_config(config_path)
    assert exc.value.code == "E_IO"


def test_missing_schema_raises_io_error(tmp_path):
    with pytest.raises(ConfigError) as exc:
        validate_document({}, schema_path=tmp_path / "missing.schema.json")
    assert exc.value.code == "E_IO"


def test_store_failed_write_keeps_previous(config_path, monkeypatch):
    store = ConfigStore(config_path)
    first = store.load()
    monkeypatch.setattr(Path, "write_text", _refuse_write)
    with pytest.raises(ConfigError) as exc:
        store.reload()
    assert exc.value.code == "E_IO"
    assert store.current is first


def test_schema_ships_inside_server_package():
    assert SCHEMA_PATH.parent.name == "server"
    assert SCHEMA_PATH.exists()
