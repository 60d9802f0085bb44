"""
Command Line Interface for dxfcross

Usage:
    dxfcross drawing.dxf
    dxfcross drawing.dxf crossings.dxf --concurrency 8
    dxfcross parsed.json --curve-segments
"""

import logging
import sys
from typing import Optional

import click
from tqdm import tqdm

from . import __version__
from .config import DEFAULT_CONCURRENCY, PipelineConfig
from .pipeline import IntersectionPipeline


@click.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path(), required=False)
@click.option(
    "-c", "--concurrency",
    type=click.IntRange(min=1),
    default=DEFAULT_CONCURRENCY,
    help=f"Number of concurrent workers (default: {DEFAULT_CONCURRENCY})"
)
@click.option(
    "--curve-segments",
    is_flag=True,
    help="Also intersect sampled circles, arcs, ellipses and splines"
)
@click.option(
    "--dxf-version",
    type=click.Choice(["R12", "R2000", "R2004", "R2007", "R2010", "R2013", "R2018"]),
    default="R2010",
    help="DXF version of OUTPUT_FILE (default: R2010)"
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Suppress progress output and the point listing"
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable debug logging"
)
@click.version_option(version=__version__)
def main(
    input_file: str,
    output_file: Optional[str],
    concurrency: int,
    curve_segments: bool,
    dxf_version: str,
    quiet: bool,
    verbose: bool,
):
    """
    Flatten a drawing and list every crossing between its line segments.

    \b
    INPUT_FILE is a .dxf drawing or a .json document in dxf-parser layout.
    OUTPUT_FILE, if given, receives the segments and intersection markers.

    \b
    Examples:
        dxfcross plan.dxf                      # Print intersections
        dxfcross plan.dxf marked.dxf           # Also write a marker DXF
        dxfcross plan.dxf -c 8                 # Use 8 workers
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = PipelineConfig(concurrency=concurrency, curve_segments=curve_segments)
    pipeline = IntersectionPipeline(config)

    bar = None
    if not quiet:
        bar = tqdm(total=100, bar_format="{l_bar}{bar}| {desc}", leave=False)

        def progress_callback(message: str, progress: float):
            bar.set_description_str(message)
            bar.update(int(progress * 100) - bar.n)

        pipeline.set_progress_callback(progress_callback)

    try:
        result = pipeline.process_file(input_file, output_file, dxf_version)
    finally:
        if bar is not None:
            bar.close()

    # Report result
    if result.success:
        if not quiet:
            click.echo(click.style("✓ Done", fg="green"))
            click.echo(f"  Entities: {result.entities_count}")
            click.echo(f"  Segments: {result.segments_count}")
            click.echo(f"  Intersections: {len(result.intersections)}")
            for point in result.intersections:
                click.echo(f"    ({point.x:.6f}, {point.y:.6f})")
            for f in result.output_files:
                click.echo(f"  Output: {f}")
        sys.exit(0)
    else:
        click.echo(click.style(f"✗ Failed: {result.message}", fg="red"), err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
