"""
Unit tests for the TOML settings layer and HookConfig validation.
"""

from pathlib import Path

import pytest

from relayhook.config.config_loader import ConfigLoader, parse_overrides
from relayhook.config.configs import CostModelConfig, FeeConfig, FulfillmentMode, HookConfig
from relayhook.errors.errors import ConfigurationError
from relayhook.types.types import MAX_FEE

BASIC_TOML = """
[hook]
owner = "0xowner"
default_threshold = 40000

[cost_model]
standard_cost = 200000

[storage]
state_path = "state/hook.json"
"""


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    (tmp_path / "hook.toml").write_text(BASIC_TOML, encoding="utf-8")
    return tmp_path


class TestConfigLoader:
    def test_load_settings_with_defaults(self, config_dir: Path) -> None:
        settings = ConfigLoader(str(config_dir)).load_settings("hook.toml")

        assert settings.hook.owner == "0xowner"
        assert settings.hook.default_threshold == 40_000
        assert settings.hook.fulfillment_mode == "stateful"
        assert settings.cost_model.standard_cost == 200_000
        assert settings.cost_model.relayed_cost == 90_000
        assert settings.fee.max_fee == MAX_FEE

    def test_load_hook_config_resolves_paths(self, config_dir: Path) -> None:
        config = ConfigLoader(str(config_dir)).load_hook_config("hook.toml")

        assert isinstance(config, HookConfig)
        assert config.default_threshold == 40_000
        assert config.cost_model.standard_cost == 200_000
        assert config.state_path == config_dir / "state" / "hook.json"
        assert config.journal_path is None
        assert config.fulfillment_mode is FulfillmentMode.STATEFUL

    def test_overrides_win(self, config_dir: Path) -> None:
        overrides = parse_overrides(
            ["hook.default_threshold=75000", "hook.fulfillment_mode=stateless"]
        )
        config = ConfigLoader(str(config_dir)).load_hook_config("hook.toml", overrides)

        assert config.default_threshold == 75_000
        assert config.fulfillment_mode is FulfillmentMode.STATELESS

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ConfigLoader(str(tmp_path)).load("nope.toml")

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader().validate({"hook": {"owner": "0xowner", "colour": "blue"}})
        assert exc_info.value.field == "hook.colour"
        assert exc_info.value.details["errors"][0]["component"] == "config.settings"

    def test_missing_owner_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader().validate({"hook": {}})
        assert exc_info.value.field == "hook.owner"

    @pytest.mark.parametrize(
        "section,key,value",
        [
            ("hook", "default_threshold", -1),
            ("fee", "max_fee", MAX_FEE + 1),
            ("fee", "divisor", 0),
            ("hook", "fulfillment_mode", "optimistic"),
        ],
    )
    def test_out_of_range_values(self, section: str, key: str, value) -> None:
        data = {"hook": {"owner": "0xowner"}}
        data.setdefault(section, {})[key] = value
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader().validate(data)
        assert exc_info.value.field == f"{section}.{key}"


class TestParseOverrides:
    def test_nested_keys(self) -> None:
        assert parse_overrides(["fee.divisor=50", "hook.owner=0xabc"]) == {
            "fee": {"divisor": "50"},
            "hook": {"owner": "0xabc"},
        }

    def test_value_may_contain_equals(self) -> None:
        assert parse_overrides(["hook.hook_id=a=b"]) == {"hook": {"hook_id": "a=b"}}

    def test_missing_separator(self) -> None:
        with pytest.raises(ValueError):
            parse_overrides(["hook.owner"])

    def test_conflicting_paths(self) -> None:
        with pytest.raises(ValueError):
            parse_overrides(["hook=1", "hook.owner=0xabc"])


class TestHookConfig:
    def test_defaults(self) -> None:
        config = HookConfig(owner="0xowner")
        assert config.default_threshold == 50_000
        assert config.fulfillment_mode is FulfillmentMode.STATEFUL
        assert config.strict_fulfillment is False
        assert config.cost_model == CostModelConfig()
        assert config.fee == FeeConfig()

    def test_empty_owner(self) -> None:
        with pytest.raises(ConfigurationError, match="owner must be configured"):
            HookConfig(owner="")

    def test_negative_threshold(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            HookConfig(owner="0xowner", default_threshold=-1)
        assert exc_info.value.field == "default_threshold"

    def test_strict_requires_stateful(self) -> None:
        with pytest.raises(ConfigurationError):
            HookConfig(
                owner="0xowner",
                fulfillment_mode=FulfillmentMode.STATELESS,
                strict_fulfillment=True,
            )

    def test_relayed_cost_above_standard(self) -> None:
        with pytest.raises(ConfigurationError):
            CostModelConfig(standard_cost=10, relayed_cost=20)

    def test_fee_bounds(self) -> None:
        with pytest.raises(ConfigurationError):
            FeeConfig(divisor=0)
        with pytest.raises(ConfigurationError):
            FeeConfig(max_fee=MAX_FEE + 1)
