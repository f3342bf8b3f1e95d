"""End-to-end tests of the click CLI against a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from litdist.infrastructure.cli.main import cli
from litdist.infrastructure.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def invoke(*args: str, env: dict | None = None):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args], env=env)

    return invoke


@pytest.fixture
def seeded(run):
    """Region 1 > Locality 2 > Group 3, two titles, 10 copies of title 1 at the locality."""
    for args in (
        ["org", "create", "--name", "North Region", "--type", "REGION"],
        ["org", "create", "--name", "City", "--type", "LOCALITY", "--parent", "1"],
        ["org", "create", "--name", "Hope Group", "--type", "GROUP", "--parent", "2"],
        ["literature", "add", "--title", "Basic Text", "--price", "500"],
        ["literature", "add", "--title", "Daily Meditations", "--price", "1000"],
        ["inventory", "adjust", "--org", "2", "--literature", "1", "--delta", "10", "--reason", "initial"],
    ):
        result = run(*args)
        assert result.exit_code == 0, result.output
    return run


def test_order_lifecycle(seeded, tmp_path):
    result = seeded("order", "create", "--from", "3", "--to", "2", "--items", "1:2")
    assert result.exit_code == 0, result.output
    assert "Total: 1000.00 RUB" in result.output

    for status in ("PENDING", "APPROVED"):
        result = seeded("order", "status", "--id", "1", "--to", status)
        assert result.exit_code == 0, result.output

    result = seeded("inventory", "show", "--org", "2")
    assert "10" in result.output and "8" in result.output

    record = json.loads((tmp_path / "inventory.json").read_text())[0]
    assert (record["quantity"], record["reserved_quantity"]) == (10, 2)

    notifications = json.loads((tmp_path / "notifications.json").read_text())
    assert [n["type"] for n in notifications] == [
        "ORDER_CREATED", "ORDER_STATUS_CHANGED", "ORDER_STATUS_CHANGED",
    ]


def test_invalid_transition_exit_code(seeded):
    seeded("order", "create", "--from", "3", "--to", "2", "--items", "1:1")
    result = seeded("order", "status", "--id", "1", "--to", "COMPLETED")
    assert result.exit_code == 6
    assert "Invalid status transition from DRAFT to COMPLETED" in result.output


def test_insufficient_stock_exit_code(seeded):
    seeded("order", "create", "--from", "3", "--to", "2", "--items", "1:11")
    seeded("order", "status", "--id", "1", "--to", "PENDING")
    result = seeded("order", "status", "--id", "1", "--to", "APPROVED")
    assert result.exit_code == 5
    assert "Insufficient stock" in result.output


def test_role_from_environment(seeded):
    result = seeded(
        "inventory", "adjust", "--org", "3", "--literature", "1", "--delta", "1", "--reason", "found",
        env={"LITDIST_ROLE": "GROUP", "LITDIST_ORG": "3"},
    )
    assert result.exit_code == 4


def test_unknown_role_is_usage_error(run):
    result = run("--role", "JANITOR", "org", "list")
    assert result.exit_code == 2
    assert "Unknown role" in result.output


def test_bad_items_format(seeded):
    result = seeded("order", "create", "--from", "3", "--to", "2", "--items", "1-2")
    assert result.exit_code == 2
    assert "Expected 'LiteratureId:Quantity'" in result.output


def test_reverse_adjustment(seeded):
    result = seeded("transaction", "reverse", "--id", "1", "--notes", "typo")
    assert result.exit_code == 0, result.output
    assert "(-10)" in result.output

    result = seeded("transaction", "list", "--org", "2")
    assert "Reversal of transaction #1: typo" in result.output


def test_low_stock_check(seeded):
    result = seeded("checks", "low-stock", "--threshold", "10")
    assert result.exit_code == 0, result.output
    assert "Low stock alerts: 1 sent, 0 failed" in result.output


def test_org_show(seeded):
    result = seeded("org", "show", "--id", "3")
    assert "Parents:  North Region > City" in result.output
