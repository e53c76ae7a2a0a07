"""Typer CLI entrypoint with structured error handling."""

from __future__ import annotations

import sys

import click
import typer

from density_reduction.cli.commands.approximate import approximate
from density_reduction.cli.commands.bins import bins
from density_reduction.cli.commands.fidelity import fidelity
from density_reduction.cli.commands.generate import generate
from density_reduction.cli.commands.plot import plot
from density_reduction.exceptions import (
    ConfigError,
    DataSourceError,
    InvalidInputError,
    ResourceLimitError,
)
from density_reduction.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Quantile-based density reduction CLI")


app.command()(generate)
app.command()(approximate)
app.command()(bins)
app.command()(fidelity)
app.command()(plot)


log = get_logger(__name__, component="cli")


def main() -> None:
    configure_logging(component="cli")
    try:
        # standalone mode would turn Ctrl-C into a generic exit code 1
        exit_code = app(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)
    except (ConfigError, InvalidInputError) as exc:
        log.error(str(exc))
        sys.exit(1)
    except DataSourceError as exc:
        log.error(f"Data source failed: {exc}")
        sys.exit(2)
    except ResourceLimitError as exc:
        log.error(f"Resource limit exceeded: {exc}")
        sys.exit(4)
    except (click.exceptions.Abort, KeyboardInterrupt):
        log.info("Shutdown requested")
        sys.exit(130)
    except Exception:
        log.exception("Unhandled exception")
        sys.exit(255)
    if isinstance(exit_code, int) and exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    # main() exits with the mapped status code on failure
    main()
