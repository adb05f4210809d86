"""Configuration validation utilities."""

import math
from dataclasses import dataclass, fields
from typing import Any

from ..market.models import AssetClass
from .defaults import LoggingParams, SimulatorParams, VolatilityParams

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
KNOWN_SECTIONS = ("simulator", "volatility", "logging", "universe")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _unknown_fields(section: str, params: dict[str, Any], known: type) -> list[ValidationError]:
    allowed = {f.name for f in fields(known)}
    return [
        ValidationError(
            field=f"{section}.{key}",
            message="Unknown parameter",
            value=params[key]
        )
        for key in params
        if key not in allowed
    ]


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_simulator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate simulator parameters."""
        errors = _unknown_fields("simulator", params, SimulatorParams)

        # Validate tick_interval_seconds
        if "tick_interval_seconds" in params:
            value = params["tick_interval_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="tick_interval_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate reversion_factor
        if "reversion_factor" in params:
            value = params["reversion_factor"]
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ValidationError(
                    field="reversion_factor",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        # Validate max_step_pct
        if "max_step_pct" in params:
            value = params["max_step_pct"]
            if not _is_number(value) or value <= 0 or value >= 1:
                errors.append(ValidationError(
                    field="max_step_pct",
                    message="Must be a positive number below 1",
                    value=value
                ))

        # Validate min_price
        if "min_price" in params:
            value = params["min_price"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="min_price",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate price_decimals
        if "price_decimals" in params:
            value = params["price_decimals"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0 or value > 8:
                errors.append(ValidationError(
                    field="price_decimals",
                    message="Must be an integer between 0 and 8",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_volatility_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate per asset class volatility."""
        errors = _unknown_fields("volatility", params, VolatilityParams)

        for name in ("stablecoin", "crypto", "equity"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value >= 1:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number below 1",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = _unknown_fields("logging", params, LoggingParams)

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in VALID_LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(VALID_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_universe(universe: Any) -> list[ValidationError]:
        """Validate a seed universe list from configuration."""
        if not isinstance(universe, list) or not universe:
            return [ValidationError(
                field="universe",
                message="Must be a non-empty list of seed entries",
                value=universe
            )]

        errors = []
        seen: set[str] = set()
        valid_classes = {c.value for c in AssetClass}

        for index, entry in enumerate(universe):
            if not isinstance(entry, dict):
                errors.append(ValidationError(
                    field=f"universe[{index}]",
                    message="Must be a mapping with symbol and base_price",
                    value=entry
                ))
                continue

            symbol = entry.get("symbol")
            if not isinstance(symbol, str) or not symbol.strip():
                errors.append(ValidationError(
                    field=f"universe[{index}].symbol",
                    message="Must be a non-empty string",
                    value=symbol
                ))
            elif symbol.strip().upper() in seen:
                errors.append(ValidationError(
                    field=f"universe[{index}].symbol",
                    message="Duplicate symbol",
                    value=symbol
                ))
            else:
                seen.add(symbol.strip().upper())

            base_price = entry.get("base_price")
            if not _is_number(base_price) or base_price <= 0:
                errors.append(ValidationError(
                    field=f"universe[{index}].base_price",
                    message="Must be a positive number",
                    value=base_price
                ))

            asset_class = entry.get("asset_class", AssetClass.EQUITY.value)
            if asset_class not in valid_classes:
                errors.append(ValidationError(
                    field=f"universe[{index}].asset_class",
                    message=f"Must be one of {', '.join(sorted(valid_classes))}",
                    value=asset_class
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = [
            ValidationError(field=key, message="Unknown section", value=config[key])
            for key in config
            if key not in KNOWN_SECTIONS
        ]

        sections = {
            "simulator": ConfigValidator.validate_simulator_params,
            "volatility": ConfigValidator.validate_volatility_params,
            "logging": ConfigValidator.validate_logging_params,
        }

        for section, validate in sections.items():
            if section not in config:
                continue
            if not isinstance(config[section], dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=config[section]
                ))
                continue
            errors.extend(validate(config[section]))

        if config.get("universe") is not None:
            errors.extend(ConfigValidator.validate_universe(config["universe"]))

        return errors
