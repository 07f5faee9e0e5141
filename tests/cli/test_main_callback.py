"""
Test main callback function.

The main callback must turn the common options into the CLI context that
every command reads.
"""

from pathlib import Path

import pytest
import typer

from shopfront import __version__
from shopfront.cli.common.context import (
    CliContext,
    LogLevel,
    clear_cli_context,
    get_cli_context,
)
from shopfront.cli.typer_app import app, main_callback


def test_main_callback_direct() -> None:
    """main_callback sets the context from its arguments."""
    main_callback(
        verbose=2,
        log_level=LogLevel.DEBUG,
        json_output=True,
        config_path=Path("shop.toml"),
        version=False,
    )

    context = get_cli_context()
    assert context.verbose == 2
    assert context.log_level == LogLevel.DEBUG
    assert context.json_output is True
    assert context.config_path == Path("shop.toml")


def test_verbose_overrides_log_level() -> None:
    main_callback(
        verbose=1,
        log_level=LogLevel.INFO,
        json_output=False,
        config_path=None,
        version=False,
    )

    context = get_cli_context()
    assert context.is_verbose() is True
    assert context.get_effective_log_level() == "DEBUG"


def test_explicit_log_level_wins_over_config() -> None:
    context = CliContext(log_level=LogLevel.ERROR)
    assert context.get_effective_log_level("info") == "ERROR"


def test_configured_level_used_by_default() -> None:
    assert CliContext().get_effective_log_level("info") == "INFO"


def test_default_context_when_unset() -> None:
    clear_cli_context()

    context = get_cli_context()

    assert context.json_output is False
    assert context.config_path is None


def test_version_exits() -> None:
    with pytest.raises(typer.Exit):
        main_callback(
            verbose=0,
            log_level=None,
            json_output=False,
            config_path=None,
            version=True,
        )


def test_help(runner) -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "Shopfront - storefront client" in result.output
    for command in ("products", "cart", "checkout", "admin", "cache", "login"):
        assert command in result.output


def test_version_flag(runner) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"Shopfront CLI v{__version__}" in result.output


def test_json_flag_sets_context(runner, services) -> None:
    services.client.get.return_value = {"products": []}

    result = runner.invoke(app, ["--json", "products"])

    assert result.exit_code == 0
    assert get_cli_context().json_output is True
