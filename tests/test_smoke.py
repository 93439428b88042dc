"""Smoke tests: imports work, CLI --help works."""

from click.testing import CliRunner

from layer_order.__main__ import main


def test_import():
    import layer_order

    assert layer_order is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "minimise edge crossings" in result.output
