"""Command-line interface for releasenfo."""

import asyncio
import sys
from datetime import date, datetime
from pathlib import Path

import click

from releasenfo import __version__
from releasenfo.config import Config, ReleaseOptions, load_config
from releasenfo.core.pipeline import NfoPipeline
from releasenfo.core.probe import MediaProbe
from releasenfo.errors import ReleaseNfoError
from releasenfo.metadata.heuristic import VALID_SOURCES
from releasenfo.metadata.resolver import ReleaseMetadataResolver
from releasenfo.metadata.tmdb import TMDBClient
from releasenfo.metadata.tvmaze import TVMazeClient
from releasenfo.models.release import ReleaseMetadata, ReleaseRequest, ReportOptions
from releasenfo.utils.logger import get_logger, setup_logging


def _validate_date(ctx, param, value):
    """Validate a YYYY-MM-DD release date."""
    if value is None:
        return None
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise click.BadParameter("expected YYYY-MM-DD")
    return value


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (defaults to $RELEASENFO_CONFIG or "
    "~/.config/releasenfo/config.yaml)",
)
@click.pass_context
def cli(ctx, config):
    """releasenfo - Generate release NFO files for video files."""
    try:
        cfg = load_config(config)
        ctx.ensure_object(dict)
        ctx.obj["config"] = cfg

        setup_logging(cfg.logging)

    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)


async def _resolve_release(
    config: Config,
    options: ReleaseOptions,
    video_file: Path,
    request: ReleaseRequest,
) -> ReleaseMetadata:
    tmdb_client = None
    if options.tmdb_api_key:
        tmdb_client = TMDBClient(
            options.tmdb_api_key,
            base_url=config.tmdb.base_url,
            timeout=config.tmdb.timeout_seconds,
        )
    tvmaze_client = TVMazeClient(
        base_url=config.tvmaze.base_url,
        timeout=config.tvmaze.timeout_seconds,
    )

    try:
        resolver = ReleaseMetadataResolver(tmdb_client, tvmaze_client)
        return await resolver.resolve(video_file, request)
    finally:
        await tvmaze_client.close()
        if tmdb_client:
            await tmdb_client.close()


@cli.command()
@click.argument("video_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--title", default=None, help="Title of the release")
@click.option(
    "--source",
    default=None,
    help="Source platform (e.g. DISNEYPLUS, NETFLIX, WEB-DL); detected from the "
    "release name if omitted",
)
@click.option("--url", default=None, help="Reference URL (e.g. a TVmaze or IMDb link)")
@click.option("--notes", default=None, help='Additional notes (default: "none")')
@click.option(
    "--release-date",
    default=None,
    callback=_validate_date,
    help="Release date in YYYY-MM-DD format (default: today)",
)
@click.option(
    "--use-filename/--use-dirname",
    default=None,
    help="Use the video file name as release name instead of its parent directory",
)
@click.option(
    "--keepcase/--lowercase",
    "keep_case",
    default=None,
    help="Keep the original case of the NFO file name (default: lowercase)",
)
@click.option("--imdb-id", default=None, help="Look up title on TMDB by IMDb ID (e.g. tt0133093)")
@click.option(
    "--tvmaze-id",
    type=int,
    default=None,
    help="Look up episode title on TVmaze by show ID (season/episode from the file name)",
)
@click.pass_context
def generate(
    ctx,
    video_file,
    title,
    source,
    url,
    notes,
    release_date,
    use_filename,
    keep_case,
    imdb_id,
    tvmaze_id,
):
    """Generate the NFO file for a video file.

    The NFO is written next to the video, named after it. Title and URL are
    taken verbatim when given, or looked up with --imdb-id / --tvmaze-id.
    """
    config = ctx.obj["config"]
    logger = get_logger(__name__)

    try:
        options = config.resolve_release_options(
            notes=notes,
            source=source,
            use_filename=use_filename,
            keep_case=keep_case,
        )
    except ValueError as e:
        click.secho(f"✗ Invalid option from environment: {e}", fg="red", err=True)
        sys.exit(1)

    request = ReleaseRequest(
        title=title,
        url=url,
        source=options.source,
        imdb_id=imdb_id,
        tvmaze_id=tvmaze_id,
    )
    report_options = ReportOptions(
        release_date=release_date or date.today().isoformat(),
        notes=options.notes,
        use_filename=options.use_filename,
        keep_case=options.keep_case,
    )

    try:
        release = asyncio.run(_resolve_release(config, options, video_file, request))

        pipeline = NfoPipeline(
            MediaProbe(config.probe.binary, config.probe.timeout_seconds)
        )
        result = pipeline.run(video_file, release, report_options)

    except ReleaseNfoError as e:
        logger.error("NFO generation failed", file=str(video_file), error=str(e))
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.echo(str(result))


@cli.command()
def sources():
    """List valid source platforms."""
    click.echo("Valid sources are:")
    for source in VALID_SOURCES:
        click.echo(f"  {source}")


@cli.command()
def version():
    """Show version information."""
    click.echo(f"releasenfo v{__version__}")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
