"""
CLI: ``cargo examples``: run all examples of a locally cloned crate.

Cargo dispatches ``cargo examples ...`` to the ``cargo-examples`` binary
as ``cargo-examples examples ...``, so the Typer application is a group
holding a single ``examples`` command.

Example:
    cargo examples --list --no-run
    cargo examples --from hello --skip slow,broken -F serde -- --release
"""

from __future__ import annotations

from pathlib import Path

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from typer.core import TyperCommand

from cargo_examples import __version__
from cargo_examples.discovery import discover_examples
from cargo_examples.errors import ConfigError, ExamplesError
from cargo_examples.logging import configure_logging, get_logger
from cargo_examples.manifest import resolve_layout
from cargo_examples.runner import ExampleRunner
from cargo_examples.selection import parse_name_list, select_examples
from cargo_examples.settings import RunnerSettings, get_settings

logger = get_logger(__name__)

err_console = Console(stderr=True)

app = typer.Typer(
    name="cargo",
    help="Cargo subcommand to run all examples for any locally cloned crate.",
    no_args_is_help=True,
    add_completion=False,
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("cargo-examples")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"cargo-examples {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Cargo subcommand to run all examples for any locally cloned crate."""


# ── cargo examples ───────────────────────────────────────────────────────


CARGO_ARGS_META = "cargo_examples.cargo_args"


class PassthroughCommand(TyperCommand):
    """Command that hands everything after the first ``--`` to cargo untouched.

    Only the part before ``--`` is parsed; stray positional arguments there
    are usage errors.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if "--" in args:
            split = args.index("--")
            args, ctx.meta[CARGO_ARGS_META] = args[:split], args[split + 1 :]
        else:
            ctx.meta[CARGO_ARGS_META] = []
        return super().parse_args(ctx, args)


def _load_settings() -> RunnerSettings:
    try:
        return get_settings()
    except ValidationError as exc:
        raise ConfigError(f"invalid environment configuration: {exc}", cause=exc) from exc


@app.command("examples", cls=PassthroughCommand, options_metavar="[OPTIONS] [-- CARGO_ARGS...]")
def examples_cmd(
    ctx: typer.Context,
    manifest_path: Path | None = typer.Option(
        None,
        "--manifest-path",
        metavar="FILE",
        help="Path to Cargo.toml",
    ),
    list_: bool = typer.Option(
        False,
        "--list",
        "-l",
        help="List *all* examples and print them out before running any",
    ),
    print_names: bool = typer.Option(
        False,
        "--print",
        "-p",
        help="Print example name before running",
    ),
    from_: str | None = typer.Option(
        None,
        "--from",
        "-f",
        metavar="EXAMPLE",
        help="Run examples starting with <EXAMPLE>",
    ),
    no_run: bool = typer.Option(
        False,
        "--no-run",
        "-n",
        help="Do not run any examples, useful when combined with `--list`, or `--from` + `--print`",
    ),
    skip: list[str] | None = typer.Option(
        None,
        "--skip",
        "-s",
        metavar="EXAMPLE",
        help="Skip <EXAMPLE> when running. (--skip=example1,example2)",
    ),
    features: list[str] | None = typer.Option(
        None,
        "--features",
        "-F",
        metavar="FEATURES",
        help="Run examples with <FEATURES> enabled. (--features=feature1,feature2)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log discovery and cargo invocations to stderr.",
    ),
) -> None:
    """Run every example of the crate, in name order.

    Arguments after ``--`` are passed along to cargo when running.
    """
    cargo_args = ctx.meta.get(CARGO_ARGS_META, [])
    configure_logging(level="DEBUG" if verbose else "WARNING")
    try:
        settings = _load_settings()
        configure_logging(
            level="DEBUG" if verbose else settings.log_level,
            json_format=settings.log_json,
        )

        layout = resolve_layout(manifest_path)
        examples = discover_examples(layout.examples_dir, layout.manifest_path)

        if list_:
            # print all examples, unfiltered
            for example in examples:
                typer.echo(example.name)

        runner = ExampleRunner(
            manifest_path=layout.manifest_path,
            root_dir=layout.root_dir,
            cargo=settings.cargo,
            features=parse_name_list(features),
            cargo_args=list(cargo_args),
        )
        selected = select_examples(
            examples,
            start_from=from_,
            skip=parse_name_list(skip),
        )
        ran = runner.run_all(
            selected,
            print_names=print_names,
            no_run=no_run,
            echo=typer.echo,
        )
        logger.info("examples.complete", discovered=len(examples), ran=ran)
    except ExamplesError as exc:
        logger.debug("examples.failed", **exc.to_dict())
        err_console.print(f"[bold red]error[/bold red]: {escape(exc.message)}", soft_wrap=True)
        raise typer.Exit(code=exc.exit_code) from exc
