"""
Purpose:
    - Load a TOML settings file
    - Apply dotted KEY=VALUE overrides on top
    - Validate with pydantic and translate into HookConfig
"""

import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from relayhook.config.configs import CostModelConfig, FeeConfig, FulfillmentMode, HookConfig
from relayhook.config.models import HookSettings
from relayhook.core.utility import deep_merge, insert_path, validation_error_parser
from relayhook.errors.errors import ConfigurationError


def parse_overrides(pairs: list[str]) -> dict[str, Any]:
    """["hook.default_threshold=60000"] -> {"hook": {"default_threshold": "60000"}}"""
    overrides: dict[str, Any] = {}
    for item in pairs:
        key, sep, value = item.partition("=")
        if sep == "":
            raise ValueError(f"override requires KEY=VALUE format (got {item!r})")
        insert_path(overrides, key, value)
    return overrides


class ConfigLoader:
    """
    Config-loader; loading toml file.
    Relative paths (the file itself and storage paths inside it) resolve against base_dir.
    """

    def __init__(self, base_dir: str = ".") -> None:
        self._base_dir = base_dir

    def load(self, file_name: str) -> dict[str, Any]:
        path = self._resolve(Path(file_name))
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open("rb") as f:
            return tomllib.load(f)

    def load_settings(
        self, file_name: str, overrides: Optional[Mapping[str, Any]] = None
    ) -> HookSettings:
        data = self.load(file_name)
        return self.validate(deep_merge(data, overrides or {}))

    def validate(self, data: Mapping[str, Any]) -> HookSettings:
        try:
            return HookSettings.model_validate(data)
        except ValidationError as exc:
            errors = validation_error_parser(exc)
            first = errors[0] if errors else {}
            raise ConfigurationError(
                f"Invalid settings: {len(errors)} error(s)",
                field=first.get("path"),
                component="ConfigLoader",
                details={"errors": errors},
            ) from exc

    def load_hook_config(
        self, file_name: str, overrides: Optional[Mapping[str, Any]] = None
    ) -> HookConfig:
        return self.to_hook_config(self.load_settings(file_name, overrides))

    def to_hook_config(self, settings: HookSettings) -> HookConfig:
        storage = settings.storage
        return HookConfig(
            owner=settings.hook.owner,
            hook_id=settings.hook.hook_id,
            default_threshold=settings.hook.default_threshold,
            fulfillment_mode=FulfillmentMode(settings.hook.fulfillment_mode),
            strict_fulfillment=settings.hook.strict_fulfillment,
            cost_budget=settings.hook.cost_budget,
            cost_model=CostModelConfig(
                unit_size=settings.cost_model.unit_size,
                standard_cost=settings.cost_model.standard_cost,
                relayed_cost=settings.cost_model.relayed_cost,
            ),
            fee=FeeConfig(divisor=settings.fee.divisor, max_fee=settings.fee.max_fee),
            state_path=self._resolve_optional(storage.state_path),
            journal_path=self._resolve_optional(storage.journal_path),
            telemetry_path=self._resolve_optional(storage.telemetry_path),
        )

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return Path(self._base_dir) / path

    def _resolve_optional(self, path: Optional[Path]) -> Optional[Path]:
        return None if path is None else self._resolve(path)
