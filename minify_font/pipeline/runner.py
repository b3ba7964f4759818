"""
Minify pipeline orchestration.

Runs the steps of one CLI invocation in order:
  1. resolve   - Pick the code points to keep (collection, custom words or both)
  2. plan      - Decide formats and compute one output path per format
  3. generate  - Convert all formats concurrently
  4. report    - Print per-format results and the @font-face rule
"""

from collections.abc import Mapping
from pathlib import Path

import click

from minify_font.config.collections import CharacterCollection, default_registry
from minify_font.core.charset import resolve_subset
from minify_font.core.codec import CodecOptions
from minify_font.core.output_paths import infer_formats, resolve_output_paths
from minify_font.operations.css import build_font_face_css
from minify_font.operations.generate import BatchResult, generate_fonts
from minify_font.utils.logging import logger


def report_outcomes(result: BatchResult) -> None:
    """Print a success or failure line per format, then the generated files."""
    for outcome in result.outcomes:
        if outcome.success:
            click.echo(f"  {outcome.format}... ✓")
        else:
            click.echo(f"  {outcome.format}... ✗ {outcome.error}")

    if result.succeeded:
        click.echo("\n✓ Generated successfully:")
        for outcome in result.succeeded:
            click.echo(f"  {outcome.path}")

    if result.failed:
        click.echo(f"\n✗ {len(result.failed)} format(s) failed:")
        for outcome in result.failed:
            click.echo(f"  {outcome.format}: {outcome.error}")


def run_minify(
    input_path: str | Path,
    *,
    collection: str,
    collection_explicit: bool = False,
    words: str | None = None,
    output: str | None = None,
    formats: str | list[str] | None = None,
    codec_options: CodecOptions | None = None,
    registry: Mapping[str, CharacterCollection] | None = None,
) -> BatchResult:
    """
    Run one minify invocation.

    Args:
        input_path: Font to minify
        collection: Collection name (default or user supplied)
        collection_explicit: Whether the collection was given by the user
        words: Custom characters, None when not given
        output: Output file or directory
        formats: Comma-separated or list of formats
        codec_options: Options forwarded to the codec
        registry: Collections to resolve against, defaults to the bundled ones

    Returns:
        BatchResult of the generation step

    Raises:
        ValidationError: On an unknown collection or empty format list
        SetupFailure: If the input is missing or outputs cannot be prepared
    """
    input_path = Path(input_path)
    registry = default_registry() if registry is None else registry

    logger.info(f"Processing: {input_path}")

    subset = resolve_subset(words, collection, collection_explicit, registry)
    logger.info(f"Using {subset.description}")

    output_formats = infer_formats(formats, output)
    plan = resolve_output_paths(input_path, output, output_formats)

    result = generate_fonts(input_path, subset, plan, codec_options)

    report_outcomes(result)
    click.echo("\nCSS @font-face:")
    click.echo(build_font_face_css(result.outcomes, input_path.stem))

    return result
