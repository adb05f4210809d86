"""Tests for position valuation and portfolio summaries."""

import pytest

from tradedesk_app.market.models import AssetClass
from tradedesk_app.portfolio.models import Position, PositionSide, ValuedPosition
from tradedesk_app.portfolio.valuation import (
    calculate_profit_loss,
    calculate_profit_loss_percent,
    summarize_positions,
    value_positions,
)


def make_position(symbol="AAPL", quantity=10.0, side=PositionSide.BUY, entry_price=170.0, raw=None):
    return Position(symbol=symbol, quantity=quantity, side=side, entry_price=entry_price, raw=raw or {})


class TestProfitLoss:
    """Test profit/loss arithmetic."""

    def test_buy_profit(self):
        assert calculate_profit_loss(PositionSide.BUY, 170.0, 175.0, 10) == 50.0

    def test_sell_loss(self):
        assert calculate_profit_loss(PositionSide.SELL, 170.0, 175.0, 10) == -50.0

    def test_percent(self):
        assert calculate_profit_loss_percent(50.0, 170.0, 10) == pytest.approx(2.941, abs=1e-3)

    def test_zero_entry_price_percent_is_zero(self):
        """Zero entry price yields exactly 0%, whatever the profit."""
        assert calculate_profit_loss_percent(1750.0, 0.0, 10) == 0

    def test_zero_quantity_percent_is_zero(self):
        assert calculate_profit_loss_percent(0.0, 170.0, 0) == 0


class TestValuePositions:
    """Test value_positions."""

    def test_buy_position(self, static_lookup, make_quote):
        """Buy 10 AAPL at 170 with a 175 quote."""
        lookup = static_lookup({"AAPL": make_quote(price=175.0, change=1.25, change_percent=0.72)})

        [result] = value_positions([make_position()], lookup)

        assert result.is_valued
        assert result.valuation.current_price == 175.0
        assert result.valuation.current_value == 1750.0
        assert result.valuation.profit_loss == pytest.approx(50.0)
        assert result.valuation.profit_loss_percent == pytest.approx(2.94, abs=0.01)
        assert result.valuation.market_change == 1.25
        assert result.valuation.market_change_percent == 0.72

    def test_sell_position(self, static_lookup, make_quote):
        lookup = static_lookup({"AAPL": make_quote(price=175.0)})

        [result] = value_positions([make_position(side=PositionSide.SELL)], lookup)

        assert result.valuation.profit_loss == pytest.approx(-50.0)
        assert result.valuation.profit_loss_percent == pytest.approx(-2.94, abs=0.01)

    def test_zero_entry_price(self, static_lookup, make_quote):
        lookup = static_lookup({"AAPL": make_quote(price=175.0)})

        [result] = value_positions([make_position(entry_price=0.0)], lookup)

        assert result.valuation.profit_loss == pytest.approx(1750.0)
        assert result.valuation.profit_loss_percent == 0

    def test_unknown_symbol_passes_through(self, static_lookup):
        """Positions without a quote come back unchanged and unvalued."""
        position = make_position(symbol="NOPE", raw={"id": "pos-9", "symbol": "NOPE"})

        [result] = value_positions([position], static_lookup({}))

        assert result.position is position
        assert result.valuation is None
        data = result.to_dict()
        assert "currentPrice" not in data
        assert "profitLoss" not in data
        assert data["id"] == "pos-9"

    def test_order_preserved_and_nothing_filtered(self, static_lookup, make_quote):
        lookup = static_lookup({
            "AAPL": make_quote(symbol="AAPL", price=175.0),
            "BTC": make_quote(symbol="BTC", price=42000.0),
        })
        positions = [
            make_position(symbol="BTC", quantity=1, entry_price=40000.0),
            make_position(symbol="NOPE"),
            make_position(symbol="AAPL"),
        ]

        results = value_positions(positions, lookup)

        assert [r.position.symbol for r in results] == ["BTC", "NOPE", "AAPL"]
        assert [r.is_valued for r in results] == [True, False, True]
        assert lookup.calls == ["BTC", "NOPE", "AAPL"]

    def test_inputs_not_mutated(self, static_lookup, make_quote):
        position = make_position(raw={"id": "pos-1", "symbol": "AAPL", "quantity": "10"})
        before = position.to_dict()

        value_positions([position], static_lookup({"AAPL": make_quote(price=180.0)}))

        assert position.to_dict() == before

    def test_reads_live_simulator(self, seeded_simulator):
        """Valuation uses whatever the table holds at call time."""
        position = make_position(symbol="MSFT", entry_price=400.0)

        first = value_positions([position], seeded_simulator)[0].valuation.current_price
        seeded_simulator.tick()
        second = value_positions([position], seeded_simulator)[0].valuation.current_price

        assert first == 431.25
        assert second == seeded_simulator.get_price("MSFT").price

    def test_to_dict_wire_format(self, static_lookup, make_quote):
        lookup = static_lookup({"AAPL": make_quote(price=175.0)})
        [result] = value_positions([make_position()], lookup)

        data = result.to_dict()

        assert data["symbol"] == "AAPL"
        assert data["side"] == "buy"
        assert data["entryPrice"] == 170.0
        assert data["currentPrice"] == 175.0
        assert data["currentValue"] == 1750.0
        assert data["lastUpdate"] == "2024-01-02T15:30:00+00:00"

    def test_to_dict_keeps_upstream_record(self, static_lookup, make_quote):
        """Valued rows are the upstream record plus derived fields, untouched."""
        record = {"id": "pos-1", "userId": "u1", "symbol": "AAPL",
                  "quantity": "10", "price": "170.00", "type": "buy"}
        lookup = static_lookup({"AAPL": make_quote(price=175.0)})

        [result] = value_positions([make_position(raw=record)], lookup)
        data = result.to_dict()

        assert {k: data[k] for k in record} == record
        assert "entryPrice" not in data
        assert "side" not in data
        assert data["profitLoss"] == pytest.approx(50.0)

    def test_unvalued_to_dict_is_upstream_record(self, static_lookup):
        record = {"id": "c", "symbol": "NOPE", "quantity": "3", "price": "12.50", "type": "buy"}

        [result] = value_positions(
            [make_position(symbol="NOPE", quantity=3.0, entry_price=12.5, raw=record)],
            static_lookup({}),
        )

        assert result.to_dict() == record


class TestSummarizePositions:
    """Test portfolio summary aggregation."""

    def test_totals(self, static_lookup, make_quote, seeded_simulator):
        lookup = static_lookup({
            "AAPL": make_quote(symbol="AAPL", price=175.0),
            "BTC": make_quote(symbol="BTC", price=42000.0),
        })
        valued = value_positions([
            make_position(symbol="AAPL", quantity=10, entry_price=170.0),
            make_position(symbol="BTC", quantity=0.5, side=PositionSide.SELL, entry_price=40000.0),
            make_position(symbol="NOPE", quantity=3, entry_price=12.5),
        ], lookup)

        summary = summarize_positions(valued, classify=seeded_simulator.asset_class)

        assert summary.position_count == 3
        assert summary.total_value == pytest.approx(1750.0 + 21000.0)
        assert summary.total_cost_basis == pytest.approx(1700.0 + 20000.0)
        assert summary.total_profit_loss == pytest.approx(50.0 - 1000.0)
        assert summary.total_profit_loss_percent == pytest.approx(-950.0 / 21700.0 * 100)
        assert summary.value_by_asset_class == {
            AssetClass.EQUITY.value: pytest.approx(1750.0),
            AssetClass.CRYPTO.value: pytest.approx(21000.0),
        }
        assert summary.unpriced_symbols == ["NOPE"]

    def test_without_classifier(self, static_lookup, make_quote):
        valued = value_positions([make_position()], static_lookup({"AAPL": make_quote(price=175.0)}))

        summary = summarize_positions(valued)

        assert summary.value_by_asset_class == {"unknown": pytest.approx(1750.0)}

    def test_empty_portfolio(self):
        summary = summarize_positions([])

        assert summary.position_count == 0
        assert summary.total_value == 0.0
        assert summary.total_profit_loss_percent == 0.0
        assert summary.to_dict()["unpricedSymbols"] == []

    def test_all_unpriced(self):
        summary = summarize_positions([ValuedPosition(position=make_position(symbol="NOPE"))])

        assert summary.total_cost_basis == 0.0
        assert summary.total_profit_loss_percent == 0.0
        assert summary.unpriced_symbols == ["NOPE"]
