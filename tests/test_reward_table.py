import pytest

from rewards.rarity import Rarity, freeze_weights, weight_for
from rewards.schemas import UnwrapConfig
from rewards.table import RewardDefinition, RewardTable


def test_lookup_unknown_key_returns_none():
    table = RewardTable({"a": [RewardDefinition("x", Rarity.Common)]})
    assert table.lookup("missing") is None
    assert "missing" not in table


def test_blank_item_keys_are_dropped_and_order_kept():
    table = RewardTable({
        "a": [
            RewardDefinition("x", Rarity.Common),
            RewardDefinition("", Rarity.Rare),
            RewardDefinition("   ", Rarity.Rare),
            RewardDefinition("y", Rarity.VeryRare),
        ],
    })
    assert [r.item_key for r in table.lookup("a")] == ["x", "y"]


def test_configured_empty_list_is_found_but_empty():
    table = RewardTable({"empty": []})
    assert table.lookup("empty") == ()
    assert len(table) == 1


def test_degenerate_ranges_are_preserved():
    table = RewardTable({"a": [RewardDefinition("x", Rarity.Common, 5, 2)]})
    (entry,) = table.lookup("a")
    assert entry.quantity_range == (5, 2)
    assert entry.is_degenerate


def test_table_is_read_only():
    table = RewardTable({"a": [RewardDefinition("x", Rarity.Common)]})
    with pytest.raises(TypeError):
        table["b"] = ()
    with pytest.raises(AttributeError):
        table.lookup("a")[0].item_key = "z"


def test_from_dict_accepts_document_and_compact_keys():
    table = RewardTable.from_dict({
        "box": [
            {"Item Short Name": "wood", "Minimum Amount": 10, "Maximum Amount": 20, "Rarity": "Common"},
            {"ItemShortName": "stones", "DisplayName": "Shiny Stones", "SkinId": 3,
             "MinimumAmount": 1, "MaximumAmount": 2, "Rarity": "VeryRare"},
        ],
    })
    wood, stones = table.lookup("box")
    assert (wood.item_key, wood.min_amount, wood.max_amount, wood.rarity) == ("wood", 10, 20, Rarity.Common)
    assert stones.display_name == "Shiny Stones"
    assert stones.variant_id == 3
    assert stones.rarity is Rarity.VeryRare


def test_from_config_treats_empty_display_name_as_absent():
    config = UnwrapConfig.model_validate({
        "Version": "1.0.0",
        "Unwrap Rewards": {
            "box": [{"Item Short Name": "wood", "Display Name": "", "Minimum Amount": 1,
                     "Maximum Amount": 1, "Rarity": "Uncommon"}],
            "nothing": None,
        },
        "Rarity Weights": {"Uncommon": 4},
    })
    table = RewardTable.from_config(config)
    assert table.lookup("box")[0].display_name is None
    assert table.lookup("nothing") == ()


def test_weights_missing_and_negative_count_as_zero():
    weights = freeze_weights({"Common": 5, "Rare": -3})
    assert weight_for(weights, Rarity.Common) == 5
    assert weight_for(weights, Rarity.Rare) == 0
    assert weight_for(weights, Rarity.VeryRare) == 0
    with pytest.raises(TypeError):
        weights[Rarity.Uncommon] = 1


def test_tier_names_are_case_sensitive():
    with pytest.raises(ValueError):
        freeze_weights({"common": 1})
