"""
Boundary normalization for upstream position records.

Storage rows arrive loosely typed: quantities and prices as strings, the
side under "type", the entry price under "price". PositionNormalizer turns
them into structured Position records or raises a data quality error. The
record itself is kept on the position so it can be echoed back unchanged.
"""

import math
from typing import Any, Iterable

import structlog

from ..errors import DataQualityError, MalformedDataError, MissingDataError
from .models import NormalizationResult, Position, PositionSide

logger = structlog.get_logger(__name__)

# Accepted keys per structured field, in lookup order
SYMBOL_KEYS = ("symbol",)
QUANTITY_KEYS = ("quantity",)
SIDE_KEYS = ("side", "type")
ENTRY_PRICE_KEYS = ("entry_price", "entryPrice", "price")


def _first_present(record: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def parse_decimal(value: Any, field_name: str) -> float:
    """
    Parse a numeric field that may arrive as a string.

    Args:
        value: Raw value from the record
        field_name: Name used in error messages

    Returns:
        Finite float value

    Raises:
        MalformedDataError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise MalformedDataError(
            f"{field_name} must be numeric, got bool",
            raw_data=str(value),
            expected_format="decimal"
        )

    try:
        parsed = float(value)
    except (TypeError, ValueError) as e:
        raise MalformedDataError(
            f"{field_name} is not a valid decimal: {value!r}",
            raw_data=str(value)[:100],
            expected_format="decimal"
        ) from e

    if not math.isfinite(parsed):
        raise MalformedDataError(
            f"{field_name} must be finite, got {value!r}",
            raw_data=str(value)[:100],
            expected_format="decimal"
        )

    return parsed


class PositionNormalizer:
    """Converts upstream position rows into structured Position records."""

    def normalize_record(self, record: dict[str, Any]) -> Position:
        """
        Normalize a single upstream record.

        Args:
            record: Raw position row

        Returns:
            Structured position

        Raises:
            MissingDataError: If a required field is absent
            MalformedDataError: If a field cannot be interpreted
        """
        if not isinstance(record, dict):
            raise MalformedDataError(
                f"Position record must be dict, got {type(record).__name__}",
                raw_data=str(record)[:100],
                expected_format="mapping"
            )

        symbol = _first_present(record, SYMBOL_KEYS)
        if symbol is None:
            raise MissingDataError("Position record has no symbol", field_name="symbol",
                                   context={"record": record})
        if not isinstance(symbol, str) or not symbol.strip():
            raise MalformedDataError(f"Invalid symbol: {symbol!r}", raw_data=str(symbol),
                                     expected_format="non-empty string")

        raw_side = _first_present(record, SIDE_KEYS)
        if raw_side is None:
            raise MissingDataError("Position record has no side", field_name="side",
                                   context={"symbol": symbol})
        try:
            side = PositionSide(str(raw_side).strip().lower())
        except ValueError as e:
            raise MalformedDataError(
                f"Unknown position side: {raw_side!r}",
                raw_data=str(raw_side),
                expected_format="buy|sell",
                context={"symbol": symbol}
            ) from e

        raw_quantity = _first_present(record, QUANTITY_KEYS)
        if raw_quantity is None:
            raise MissingDataError("Position record has no quantity", field_name="quantity",
                                   context={"symbol": symbol})

        raw_entry = _first_present(record, ENTRY_PRICE_KEYS)
        if raw_entry is None:
            raise MissingDataError("Position record has no entry price", field_name="entry_price",
                                   context={"symbol": symbol})

        return Position(
            symbol=symbol.strip().upper(),
            quantity=parse_decimal(raw_quantity, "quantity"),
            side=side,
            entry_price=parse_decimal(raw_entry, "entry_price"),
            raw=dict(record),
        )

    def normalize_records(self, records: Iterable[dict[str, Any]]) -> list[NormalizationResult]:
        """
        Normalize many records without raising.

        Args:
            records: Raw position rows

        Returns:
            One result per record, in input order
        """
        results = []
        for index, record in enumerate(records):
            try:
                results.append(NormalizationResult.success_with_position(
                    self.normalize_record(record)
                ))
            except DataQualityError as e:
                logger.warning(
                    "Rejected position record",
                    index=index,
                    error=str(e),
                    error_type=type(e).__name__,
                    context=e.context
                )
                results.append(NormalizationResult.error(str(e)))
        return results
