"""Command-line entry point for btclient.

Parses the invocation, configures logging and hands the run to the
LifecycleOrchestrator. Usage errors exit with status 1, runtime faults with
status 2.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import click
from pydantic import ValidationError as PydanticValidationError

from btclient import __version__
from btclient.cli.verbosity import VerbosityManager
from btclient.engine.base import EngineFactory, RateLimits, TransferEngine
from btclient.engine.loader import load_engine_factory
from btclient.models import DEFAULT_OUTPUT_DIRECTORY, ExitCode, InvocationConfig
from btclient.session.lifecycle import LifecycleOrchestrator
from btclient.utils.logging_config import get_logger, setup_logging
from btclient.utils.shutdown import interrupt_on_signals

logger = get_logger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class LauncherCommand(click.Command):
    """Click command whose usage errors exit with ExitCode.USAGE."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Parse arguments, remapping click's usage exit status."""
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = ExitCode.USAGE
            raise


def _usage_error(ctx: click.Context, message: str) -> click.UsageError:
    err = click.UsageError(message, ctx)
    err.exit_code = ExitCode.USAGE
    return err


def _format_validation_error(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"])
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)


def _deferred_engine_factory(reference: str | None) -> EngineFactory:
    """Load the engine only when the run creates it, so load errors are run faults."""

    def build(limits: RateLimits) -> TransferEngine:
        return load_engine_factory(reference)(limits)

    return build


@click.command(cls=LauncherCommand, context_settings=CONTEXT_SETTINGS)
@click.argument("torrent", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT_DIRECTORY,
    show_default=True,
    envvar="BTCLIENT_OUTPUT",
    metavar="DIR",
    help="Read/write data to directory DIR.",
)
@click.option(
    "--iface",
    "-i",
    envvar="BTCLIENT_IFACE",
    metavar="IFACE",
    help="Bind to interface IFACE.",
)
@click.option(
    "--seed",
    "-s",
    type=int,
    metavar="SECONDS",
    help="Time to seed after downloading (default: no seeding).",
)
@click.option(
    "--max-download",
    "-d",
    type=float,
    metavar="KB/SEC",
    help="Max download rate (default: unlimited).",
)
@click.option(
    "--max-upload",
    "-u",
    type=float,
    metavar="KB/SEC",
    help="Max upload rate (default: unlimited).",
)
@click.option(
    "--engine",
    "-e",
    envvar="BTCLIENT_ENGINE",
    metavar="MODULE:ATTR",
    help="Transfer engine factory (default: installed 'btclient.engines' entry point).",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (-v, -vv).")
@click.version_option(__version__, prog_name="btclient")
@click.pass_context
def cli(
    ctx: click.Context,
    torrent: Path,
    output: Path,
    iface: str | None,
    seed: int | None,
    max_download: float | None,
    max_upload: float | None,
    engine: str | None,
    verbose: int,
) -> None:
    """Download (and optionally seed) the torrent described by TORRENT."""
    try:
        config = InvocationConfig(
            torrent_file=torrent,
            output_directory=output,
            interface_name=iface,
            seed_seconds=seed,
            max_upload_rate=max_upload,
            max_download_rate=max_download,
            engine=engine,
            verbosity=verbose,
        )
    except PydanticValidationError as e:
        raise _usage_error(ctx, _format_validation_error(e)) from e

    setup_logging(VerbosityManager(config.verbosity).log_level)
    logger.debug("Invocation: %s", config)

    # Tests and embedders may inject collaborators through ctx.obj
    overrides: dict[str, Any] = ctx.ensure_object(dict)
    orchestrator = LifecycleOrchestrator(
        overrides.get("engine_factory") or _deferred_engine_factory(config.engine),
        resolver=overrides.get("resolver"),
        sleep=overrides.get("sleep"),
    )

    with interrupt_on_signals():
        code = orchestrator.run(config)
    ctx.exit(int(code))


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the btclient command."""
    cli.main(args=list(argv) if argv is not None else None, prog_name="btclient")
