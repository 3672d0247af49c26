"""Command-line interface using Click."""

import sys
from pathlib import Path

import click

from . import __version__
from .config import LAG_OFFSET, POLL_INTERVAL, get_cache_dir, get_youtube_api_key
from .core.frames import FrameSource
from .core.listing import format_timestamp
from .core.pipeline import CaptionGenerator, select_caption_frames
from .core.watch import run_forever
from .exceptions import CaptionBandError
from .utils.cache import RecordStore
from .utils.logging import setup_logging
from .utils.validation import (
    extract_video_id,
    validate_offset,
    validate_video_id,
    validate_youtube_url,
)


def _video_id_from_argument(url_or_id: str) -> str:
    if len(url_or_id) == 11 and "/" not in url_or_id:
        return validate_video_id(url_or_id)
    return extract_video_id(validate_youtube_url(url_or_id))


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """captionband - Recover timestamped captions burnt into YouTube videos."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger
    ctx.obj['verbose'] = verbose


@cli.command()
@click.argument('url_or_id')
@click.option('-o', '--output', type=click.Path(), help='Write the listing to this file')
@click.option('--offset', type=int, default=LAG_OFFSET, show_default=True,
              help='Seconds to shift timestamps back')
@click.option('--work-dir', type=click.Path(), help='Scratch directory for decoded frames')
@click.option('--cache-dir', type=click.Path(), help='Record store directory')
@click.option('--force', is_flag=True, help='Rebuild even if a listing is cached')
@click.pass_context
def generate(ctx, url_or_id, output, offset, work_dir, cache_dir, force):
    """Build (or fetch from cache) the caption listing of one video."""
    logger = ctx.obj['logger']
    try:
        video_id = _video_id_from_argument(url_or_id)
        store = RecordStore(Path(cache_dir) if cache_dir else get_cache_dir())
        generator = CaptionGenerator(
            store,
            work_dir=Path(work_dir) if work_dir else None,
            offset=validate_offset(offset),
        )

        if force:
            # The old record stays until the rebuild has succeeded
            captions_text = generator.build(video_id)
            store.set_captions(video_id, captions_text)
        else:
            captions_text = generator.get_or_build(video_id)

        if output:
            Path(output).write_text(captions_text, encoding='utf-8')
            logger.info(f"✅ Captions written to {output}")
        else:
            click.echo(captions_text)

    except CaptionBandError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"❌ Unexpected error: {e}")
        if ctx.obj.get('verbose'):
            import traceback
            traceback.print_exc()
        sys.exit(1)


@cli.command(name='filter')
@click.argument('frames_dir', type=click.Path(exists=True, file_okay=False))
@click.option('--offset', type=int, default=LAG_OFFSET, show_default=True,
              help='Seconds to shift timestamps back')
@click.pass_context
def filter_frames(ctx, frames_dir, offset):
    """Classify an already decoded frame directory without running OCR.

    Rejected frame images are deleted from FRAMES_DIR.
    """
    logger = ctx.obj['logger']
    try:
        frames = select_caption_frames(FrameSource(Path(frames_dir)), validate_offset(offset))
    except CaptionBandError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    for frame in frames:
        click.echo(f"{frame.basename}\t{format_timestamp(frame.time)}")


@cli.command()
@click.option('--playlist-id', required=True, help='Playlist to watch')
@click.option('--title-prefix', default='', help='Only consider items whose title starts with this')
@click.option('--interval', type=float, default=POLL_INTERVAL, show_default=True,
              help='Seconds between polls')
@click.option('--output-dir', type=click.Path(), default='captions', show_default=True,
              help='Directory listings are written to')
@click.option('--cache-dir', type=click.Path(), help='Record store directory')
@click.pass_context
def watch(ctx, playlist_id, title_prefix, interval, output_dir, cache_dir):
    """Poll a playlist and build listings for new videos."""
    logger = ctx.obj['logger']
    api_key = get_youtube_api_key()
    if not api_key:
        logger.error("❌ YouTube API key missing! Set CAPTIONBAND_YT_API_KEY")
        sys.exit(1)

    store = RecordStore(Path(cache_dir) if cache_dir else get_cache_dir())
    generator = CaptionGenerator(store)
    run_forever(
        generator,
        playlist_id,
        api_key,
        Path(output_dir),
        title_prefix=title_prefix,
        interval=interval,
    )


@cli.group()
def cache():
    """Record store commands."""
    pass


@cache.command()
@click.argument('video_id')
@click.option('--cache-dir', type=click.Path(), help='Record store directory')
def show(video_id, cache_dir):
    """Print the cached listing of a video."""
    store = RecordStore(Path(cache_dir) if cache_dir else get_cache_dir())
    captions_text = store.get_captions(video_id)
    if captions_text is None:
        click.echo(f"No captions cached for {video_id}")
        sys.exit(1)
    click.echo(captions_text)


@cache.command()
@click.option('--cache-dir', type=click.Path(), help='Record store directory')
def stats(cache_dir):
    """Show record store statistics."""
    store = RecordStore(Path(cache_dir) if cache_dir else get_cache_dir())
    stats = store.get_stats()
    click.echo(f"Records File: {stats['records_file']}")
    click.echo(f"Videos: {stats['video_count']}")


@cache.command()
@click.argument('video_id')
@click.option('--cache-dir', type=click.Path(), help='Record store directory')
@click.confirmation_option(prompt='Are you sure you want to clear this video record?')
def clear(video_id, cache_dir):
    """Forget the cached listing of a video."""
    store = RecordStore(Path(cache_dir) if cache_dir else get_cache_dir())
    if store.clear_video(video_id):
        click.echo(f"✅ Cleared record for video {video_id}")
    else:
        click.echo(f"No record for video {video_id}")


if __name__ == '__main__':
    cli()
