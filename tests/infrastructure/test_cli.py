"""Tests for the click CLI, run against JSON stores in a temp directory."""

import pytest
from click.testing import CliRunner

from shopbot.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("SHOPBOT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SHOPBOT_ENV", "test")
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, list(args))

    return _run


def _stock_coffee(run) -> None:
    result = run("product", "add", "--id", "coffee001", "--name", "Drip Coffee",
                 "--price", "680", "--stock", "2")
    assert result.exit_code == 0, result.output


class TestCatalogCommands:

    def test_browse_empty(self, run):
        result = run("browse")
        assert result.exit_code == 0
        assert "No products found." in result.output

    def test_add_and_browse(self, run):
        _stock_coffee(run)
        result = run("browse")
        assert "coffee001" in result.output
        assert "NT$680" in result.output

    def test_restock(self, run):
        _stock_coffee(run)
        result = run("product", "restock", "--id", "coffee001", "--qty", "3")
        assert result.exit_code == 0
        assert "5 in stock" in result.output


class TestShoppingCommands:

    def test_add_checkout_and_list_orders(self, run):
        _stock_coffee(run)

        result = run("cart", "add", "--user", "A", "--item", "coffee001", "--qty", "2")
        assert result.exit_code == 0, result.output
        assert "NT$1,360" in result.output

        result = run("checkout", "--user", "A")
        assert result.exit_code == 0, result.output
        assert "Order placed." in result.output
        assert "status=PAID" in result.output

        result = run("orders", "list", "--user", "A")
        assert result.exit_code == 0
        assert "NT$1,360" in result.output

    def test_sold_out_checkout_gives_guidance(self, run):
        _stock_coffee(run)
        run("cart", "add", "--user", "A", "--item", "coffee001", "--qty", "2")
        run("checkout", "--user", "A")
        run("cart", "add", "--user", "B", "--item", "coffee001", "--qty", "1")

        result = run("checkout", "--user", "B")

        assert result.exit_code == 1
        assert "Insufficient stock for 'coffee001'" in result.output
        assert "Reduce the quantity" in result.output

        result = run("cart", "show", "--user", "B")
        assert "Drip Coffee" in result.output

    def test_empty_cart_checkout(self, run):
        result = run("checkout", "--user", "A")
        assert result.exit_code == 0
        assert "nothing to check out" in result.output

    def test_invalid_quantity(self, run):
        _stock_coffee(run)
        result = run("cart", "add", "--user", "A", "--item", "coffee001", "--qty", "0")
        assert result.exit_code == 1
        assert "must be positive" in result.output

    def test_unknown_order(self, run):
        result = run("orders", "show", "--user", "A", "--id", "missing")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_recover_with_nothing_pending(self, run):
        result = run("recover")
        assert result.exit_code == 0
        assert "Recovered 0 paid, 0 voided." in result.output
