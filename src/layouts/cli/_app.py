"""The command-line interface for layouts."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from layouts import create_logger
from layouts.config import ConfigError, LayoutsConfig, load_config

from ._commands import register_commands
from ._context import CLIContext
from ._shared import ExitCode, abort

_HELP = "Resolve and flatten nested layout templates."


def _load_config(config: Path | None, *, verbose: bool) -> LayoutsConfig:
    """Load options for this run, exiting with LOAD_ERROR when they are unusable.

    ``--verbose`` raises the log level to debug over anything configured.
    """
    overrides = {"logging": {"level": "debug"}} if verbose else None
    try:
        return load_config(config, overrides=overrides)
    except FileNotFoundError:
        abort(f"Config file not found: {config}", ExitCode.LOAD_ERROR)
    except ConfigError as e:
        abort(str(e), ExitCode.LOAD_ERROR)


def _dispatch(
    app: App, tokens: tuple[str, ...], *, verbose: bool, config: Path | None
) -> None:
    options = _load_config(config, verbose=verbose)
    log_settings = options.logging
    logger = create_logger(
        level=log_settings.level.value,
        log_format=log_settings.format.value,  # type: ignore[arg-type]
        log_file=log_settings.file,
    )

    CLIContext.set_current(
        CLIContext(config=options, verbose=verbose, config_path=config, logger=logger)
    )
    try:
        app(tokens)
    finally:
        CLIContext.reset()


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the ``layouts`` application with its commands registered.

    Global options are parsed by the meta app, which loads configuration
    and then hands the remaining tokens to the command.
    """
    app = App(
        name="layouts",
        help=_HELP,
        help_on_error=True,
        console=console or Console(),
        error_console=error_console or Console(stderr=True),
        exit_on_error=exit_on_error,
    )
    register_commands(app)

    @app.meta.default
    def _global_options(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Log debug output to stderr")] = False,
        config: Annotated[
            Path | None,
            Parameter(name="--config", help="layouts.toml or pyproject.toml to read"),
        ] = None,
    ) -> None:
        """Run a layouts command.

        Args:
            tokens: The command and its arguments.
            verbose: Log debug output to stderr.
            config: A layouts.toml, or a pyproject.toml with a [tool.layouts] table.
        """
        _dispatch(app, tokens, verbose=verbose, config=config)

    return app


app = create_app()


def main() -> None:
    """Entry point for the ``layouts`` script."""
    create_app().meta()
