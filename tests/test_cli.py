"""Tests for the typer CLI in ledgerline.cli."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ledgerline.cli import app
from ledgerline.store import LedgerStore

runner = CliRunner()


@pytest.fixture
def env(tmp_path: Path) -> dict[str, str]:
    """Environment pointing config and database into a temporary directory."""
    return {
        "XDG_CONFIG_HOME": str(tmp_path / "config"),
        "XDG_DATA_HOME": str(tmp_path / "data"),
        "LEDGERLINE_DB": str(tmp_path / "ledger.db"),
        "COLUMNS": "200",
    }


class TestTransactionCommands:
    """Tests for add, list, show, edit, delete and summary."""

    def test_add_and_list(self, env: dict[str, str]) -> None:
        added = runner.invoke(app, ["add", "Salary", "1500", "--type", "income"], env=env)
        listed = runner.invoke(app, ["list"], env=env)

        assert added.exit_code == 0
        assert "Transaction added" in added.output
        assert listed.exit_code == 0
        assert "Salary" in listed.output

    def test_add_invalid_type_exits_1(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["add", "Gift", "10", "--type", "transfer"], env=env)

        assert result.exit_code == 1
        assert "type" in result.output

    def test_show_missing_exits_1(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["show", "7"], env=env)

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_edit(self, env: dict[str, str]) -> None:
        runner.invoke(app, ["add", "Groceries", "20", "--type", "expense"], env=env)

        result = runner.invoke(app, ["edit", "1", "Refund", "20", "--type", "income"], env=env)

        assert result.exit_code == 0
        with LedgerStore(env["LEDGERLINE_DB"]) as store:
            assert store.get(1).description == "Refund"

    def test_delete_with_yes(self, env: dict[str, str]) -> None:
        runner.invoke(app, ["add", "Coffee", "3", "--type", "expense"], env=env)

        first = runner.invoke(app, ["delete", "1", "--yes"], env=env)
        second = runner.invoke(app, ["delete", "1", "--yes"], env=env)

        assert first.exit_code == 0
        assert second.exit_code == 1

    def test_delete_declined_keeps_transaction(self, env: dict[str, str]) -> None:
        runner.invoke(app, ["add", "Coffee", "3", "--type", "expense"], env=env)

        result = runner.invoke(app, ["delete", "1"], input="n\n", env=env)

        assert result.exit_code == 0
        with LedgerStore(env["LEDGERLINE_DB"]) as store:
            assert len(store.list()) == 1

    def test_summary(self, env: dict[str, str]) -> None:
        runner.invoke(app, ["add", "Salary", "100", "--type", "income"], env=env)
        runner.invoke(app, ["add", "Groceries", "40", "--type", "expense"], env=env)

        result = runner.invoke(app, ["summary"], env=env)

        assert result.exit_code == 0
        assert "60.00" in result.output


class TestReportCommand:
    """Tests for the report command."""

    def test_csv_export_written_to_output(self, env: dict[str, str], tmp_path: Path) -> None:
        output = tmp_path / "out" / "march.csv"

        result = runner.invoke(app, ["report", "--month", "2024-03", "--format", "csv", "-o", str(output)], env=env)

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").startswith("Date,Description,Type,Amount")

    def test_pdf_export(self, env: dict[str, str], tmp_path: Path) -> None:
        output = tmp_path / "march.pdf"

        result = runner.invoke(app, ["report", "--month", "2024-03", "--format", "pdf", "-o", str(output)], env=env)

        assert result.exit_code == 0
        assert output.read_bytes().startswith(b"%PDF-")

    def test_table_for_empty_month(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["report", "--month", "2024-03"], env=env)

        assert result.exit_code == 0
        assert "No transactions for this month." in result.output

    def test_invalid_month(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["report", "--month", "March"], env=env)

        assert result.exit_code == 1

    def test_unknown_format(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["report", "--format", "xlsx"], env=env)

        assert result.exit_code == 1


class TestInitCommand:
    """Tests for the init command."""

    def test_creates_config_and_database(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["init"], env=env)

        assert result.exit_code == 0
        assert (Path(env["XDG_CONFIG_HOME"]) / "ledgerline" / "config.toml").exists()
        assert Path(env["LEDGERLINE_DB"]).exists()

    def test_second_init_keeps_data(self, env: dict[str, str]) -> None:
        runner.invoke(app, ["init"], env=env)
        runner.invoke(app, ["add", "Salary", "100", "--type", "income"], env=env)

        result = runner.invoke(app, ["init"], env=env)

        assert result.exit_code == 0
        assert "already exists" in result.output
        with LedgerStore(env["LEDGERLINE_DB"]) as store:
            assert len(store.list()) == 1
