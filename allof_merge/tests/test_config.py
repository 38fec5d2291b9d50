from allof_merge import MergeConfig


def test_defaults():
    config = MergeConfig()
    assert not config.old_merge_schemas
    assert config.max_all_of_depth == 64
    assert config.add_generation_comment


def test_from_dict_ignores_unknown_keys():
    config = MergeConfig.from_dict({"old_merge_schemas": True, "max_all_of_depth": 3, "unknown": 1})
    assert config.old_merge_schemas
    assert config.max_all_of_depth == 3
    assert not hasattr(config, "unknown")


def test_to_dict_round_trip():
    config = MergeConfig(schema_base_path="specs", add_generation_comment=False)
    assert MergeConfig.from_dict(config.to_dict()) == config
