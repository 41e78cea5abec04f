"""End-to-end CLI tests against a SQLite file in a temp directory."""

import logging

import pytest
from click.testing import CliRunner

from sweetshop.infrastructure.cli.main import cli
from sweetshop.infrastructure.persistence.database import Database
from sweetshop.infrastructure.persistence.sql_inventory_repository import (
    SqlInventoryRepository,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    # setup_logging swaps the root handlers for ones bound to the runner's streams
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def env(tmp_path):
    return {
        "DATABASE_URL": f"sqlite:///{tmp_path / 'shop.db'}",
        "AUTH_TOKENS_FILE": str(tmp_path / "tokens.json"),
        "LOG_LEVEL": "WARNING",
    }


@pytest.fixture
def runner(env):
    runner = CliRunner()
    result = runner.invoke(cli, ["db", "init", "--seed"], env=env)
    assert result.exit_code == 0, result.output
    return runner


def _sweet_id(env, name):
    database = Database(env["DATABASE_URL"])
    try:
        sweets = SqlInventoryRepository(database.session_factory).list_all()
    finally:
        database.dispose()
    return next(s.id for s in sweets if s.name == name)


def test_db_init_seeds_once(env):
    runner = CliRunner()

    first = runner.invoke(cli, ["db", "init", "--seed"], env=env)
    second = runner.invoke(cli, ["db", "init", "--seed"], env=env)

    assert "Schema ready." in first.output
    assert "Seeded 8 sweet(s)." in first.output
    assert "Seeded 0 sweet(s)." in second.output


def test_inventory_show(runner, env):
    result = runner.invoke(cli, ["inventory", "show"], env=env)

    assert result.exit_code == 0
    assert "Gummy Bears" in result.output
    assert "$1.99" in result.output


def test_purchase_then_restock(runner, env):
    sweet_id = _sweet_id(env, "Dark Chocolate Bar")

    bought = runner.invoke(
        cli,
        ["inventory", "purchase", "--id", sweet_id, "--quantity", "3", "--user", "alice"],
        env=env,
    )
    assert bought.exit_code == 0, bought.output
    assert "3 unit(s) for $8.97" in bought.output
    assert "Remaining stock: 47" in bought.output

    restocked = runner.invoke(
        cli,
        ["inventory", "restock", "--id", sweet_id, "--quantity", "10",
         "--user", "admin", "--admin"],
        env=env,
    )
    assert restocked.exit_code == 0, restocked.output
    assert "now 57 in stock" in restocked.output


def test_purchase_beyond_stock(runner, env):
    sweet_id = _sweet_id(env, "Dark Chocolate Bar")

    result = runner.invoke(
        cli,
        ["inventory", "purchase", "--id", sweet_id, "--quantity", "500", "--user", "alice"],
        env=env,
    )

    assert result.exit_code == 1
    assert "Retry with --quantity 50 or less." in result.output


def test_restock_requires_admin(runner, env):
    sweet_id = _sweet_id(env, "Dark Chocolate Bar")

    result = runner.invoke(
        cli,
        ["inventory", "restock", "--id", sweet_id, "--quantity", "10", "--user", "alice"],
        env=env,
    )

    assert result.exit_code == 1
    assert "Admin access required" in result.output


def test_purchases_show(runner, env):
    sweet_id = _sweet_id(env, "Gummy Bears")
    runner.invoke(
        cli,
        ["inventory", "purchase", "--id", sweet_id, "--quantity", "2", "--user", "alice"],
        env=env,
    )

    mine = runner.invoke(cli, ["purchases", "show", "--user", "alice"], env=env)
    theirs = runner.invoke(cli, ["purchases", "show", "--user", "bob"], env=env)

    assert sweet_id in mine.output
    assert "$3.98" in mine.output
    assert "No purchases found." in theirs.output


def test_bad_configuration(env):
    env["MAX_WRITE_ATTEMPTS"] = "lots"

    result = CliRunner().invoke(cli, ["inventory", "show"], env=env)

    assert result.exit_code == 1
    assert "Error initializing configuration" in result.output
