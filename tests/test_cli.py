"""End-to-end tests for the fintrack CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fintrack.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def logged_in(isolated_home: Path) -> None:
    assert runner.invoke(app, ["init"]).exit_code == 0
    assert runner.invoke(app, ["login", "alice"]).exit_code == 0


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, isolated_home: Path) -> None:
        """Should create the database and config file."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (isolated_home / "data" / "fintrack" / "fintrack.db").exists()
        assert (isolated_home / "config" / "fintrack" / "config.toml").exists()

    def test_refuses_to_overwrite(self) -> None:
        """Should fail when the database already exists."""
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_force(self) -> None:
        """Should start over with --force."""
        runner.invoke(app, ["init"])
        runner.invoke(app, ["login", "alice"])
        runner.invoke(app, ["budget", "--category", "Food", "--amount", "100"])

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        assert runner.invoke(app, ["whoami"]).stdout.strip() == "alice"
        assert "No budgets set" in runner.invoke(app, ["budget"]).stdout


class TestUser:
    """Tests for login, logout and whoami."""

    def test_login_and_whoami(self) -> None:
        """Should remember the user name."""
        result = runner.invoke(app, ["login", "alice"])
        assert result.exit_code == 0
        assert "Welcome, alice" in result.stdout

        result = runner.invoke(app, ["whoami"])
        assert result.stdout.strip() == "alice"

    def test_login_blank(self) -> None:
        """Should reject a blank name."""
        result = runner.invoke(app, ["login", "  "])

        assert result.exit_code == 1
        assert "cannot be empty" in result.stdout

    def test_logout(self) -> None:
        """Should forget the user."""
        runner.invoke(app, ["login", "alice"])

        result = runner.invoke(app, ["logout"])

        assert "Logged out alice" in result.stdout
        assert "Nobody is logged in" in runner.invoke(app, ["whoami"]).stdout

    def test_commands_need_login(self) -> None:
        """Should refuse data commands when nobody is logged in."""
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "fintrack login" in result.stdout

    def test_commands_need_database(self) -> None:
        """Should ask for init when the database is missing."""
        runner.invoke(app, ["login", "alice"])

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 1
        assert "fintrack init" in result.stdout


@pytest.mark.usefixtures("logged_in")
class TestTransactions:
    """Tests for transaction commands."""

    def test_add_and_list(self) -> None:
        """Should add a transaction and show it in the list."""
        result = runner.invoke(app, ["add", "12.5", "Lunch", "--category", "food", "--date", "2025-06-03"])
        assert result.exit_code == 0
        assert "Transaction added (ID: 1)" in result.stdout

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Lunch" in result.stdout

    def test_add_rejects_zero_amount(self) -> None:
        """Should fail on a non-positive amount."""
        result = runner.invoke(app, ["add", "0", "Nothing"])

        assert result.exit_code == 1
        assert "greater than 0" in result.stdout

    def test_add_rejects_unknown_category(self) -> None:
        """Should fail on an unknown category."""
        result = runner.invoke(app, ["add", "5", "Snack", "--category", "Snacks"])

        assert result.exit_code == 1
        assert "Unknown category" in result.stdout

    def test_edit_and_delete(self) -> None:
        """Should edit then delete a transaction."""
        runner.invoke(app, ["add", "20", "Taxi", "--category", "Transport", "--date", "2025-06-03"])

        result = runner.invoke(app, ["edit", "1", "--amount", "25"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["delete", "1"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["delete", "1"])
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_other_user_sees_nothing(self) -> None:
        """Should keep each user's transactions private."""
        runner.invoke(app, ["add", "20", "Taxi", "--category", "Transport"])
        runner.invoke(app, ["login", "bob"])

        result = runner.invoke(app, ["list"])
        assert "No transactions yet" in result.stdout

        result = runner.invoke(app, ["delete", "1"])
        assert result.exit_code == 1


@pytest.mark.usefixtures("logged_in")
class TestBudget:
    """Tests for budget commands."""

    def test_set_then_update(self) -> None:
        """Should create a budget, then update it on the second call."""
        result = runner.invoke(app, ["budget", "--category", "Food", "--amount", "300", "--month", "2025-06"])
        assert result.exit_code == 0
        assert "Set Food budget for June 2025" in result.stdout

        result = runner.invoke(app, ["budget", "--category", "food", "--amount", "350", "--month", "2025-06"])
        assert result.exit_code == 0
        assert "Updated Food budget for June 2025" in result.stdout

    def test_needs_category_and_amount(self) -> None:
        """Should fail when only one of --category and --amount is given."""
        result = runner.invoke(app, ["budget", "--category", "Food"])

        assert result.exit_code == 1

    def test_bad_month(self) -> None:
        """Should reject malformed months."""
        result = runner.invoke(app, ["budget", "--category", "Food", "--amount", "10", "--month", "June"])

        assert result.exit_code == 1
        assert "YYYY-MM" in result.stdout


@pytest.mark.usefixtures("logged_in")
class TestReports:
    """Tests for report commands."""

    @pytest.fixture(autouse=True)
    def history(self, logged_in: None) -> None:
        for args in (
            ["add", "3000", "Salary", "--type", "income", "--date", "2025-06-01"],
            ["add", "120", "Groceries", "--category", "Food", "--date", "2025-06-03"],
            ["add", "40", "Bus pass", "--category", "Transport", "--date", "2025-06-05"],
            ["add", "60", "Groceries", "--category", "Food", "--date", "2025-05-12"],
            ["budget", "--category", "Food", "--amount", "100", "--month", "2025-06"],
        ):
            assert runner.invoke(app, args).exit_code == 0

    def test_summary_json(self) -> None:
        """Should report the month's totals as JSON."""
        result = runner.invoke(app, ["summary", "--as-of", "2025-06-15", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["month"] == "2025-06"
        assert data["total_income"] == 3000.0
        assert data["total_expenses"] == 160.0
        assert data["net_income"] == 2840.0
        assert data["budget_remaining"] == -60.0
        assert data["top_category"] == {"category": "Food", "amount": 120.0}
        assert len(data["recent_transactions"]) == 4
        assert all("owner" not in txn for txn in data["recent_transactions"])
        assert all("id" in txn for txn in data["recent_transactions"])

    def test_summary_without_budget(self) -> None:
        """Should say there is no budget for a month without one."""
        result = runner.invoke(app, ["summary", "--as-of", "2025-05-20"])

        assert result.exit_code == 0
        assert "No Budget" in result.stdout

    def test_breakdown_json(self) -> None:
        """Should rank this month's categories."""
        result = runner.invoke(app, ["breakdown", "--as-of", "2025-06-15", "--json"])

        data = json.loads(result.stdout)
        assert [row["category"] for row in data] == ["Food", "Transport"]
        assert [row["percentage"] for row in data] == [75.0, 25.0]

    def test_trend_json(self) -> None:
        """Should list seven months ending with the current one."""
        result = runner.invoke(app, ["trend", "--as-of", "2025-06-15", "--json"])

        data = json.loads(result.stdout)
        assert len(data) == 7
        assert data[-1]["month"] == "2025-06"
        assert data[-1]["is_current"] is True
        assert data[-2]["amount"] == 60.0

    def test_compare_json(self) -> None:
        """Should compare budgets with spending."""
        result = runner.invoke(app, ["compare", "--as-of", "2025-06-15", "--json"])

        rows = {row["category"]: row for row in json.loads(result.stdout)}
        assert rows["Transport"]["overspent"] == 40.0
        assert rows["Food"] == {
            "category": "Food",
            "budget": 100.0,
            "actual": 120.0,
            "remaining": 0.0,
            "overspent": 20.0,
        }

    def test_insights_json(self) -> None:
        """Should flag the overspent budget and rising spending."""
        result = runner.invoke(app, ["insights", "--as-of", "2025-06-15", "--json"])

        data = json.loads(result.stdout)
        assert data["budget_insights"][0]["status"] == "over"
        assert data["budget_insights"][0]["message"] == "You're overspending on Food by $20.00"
        assert data["trend_insights"][0]["message"] == "Your Food spending increased by 100% this month"
        assert data["savings_message"] == "You spent $100.00 more than last month."

    def test_insights_text(self) -> None:
        """Should print recommendations."""
        result = runner.invoke(app, ["insights", "--as-of", "2025-06-15"])

        assert result.exit_code == 0
        assert "Overspending Alert" in result.stdout
        assert "General Tips" in result.stdout

    def test_bad_as_of(self) -> None:
        """Should reject an unparseable reference date."""
        result = runner.invoke(app, ["summary", "--as-of", "not-a-date"])

        assert result.exit_code == 1
