"""
Main CLI entry point for minify-font.
"""

import json
import sys

import click
from click.core import ParameterSource

from minify_font import __version__
from minify_font.config.collections import DEFAULT_COLLECTION, default_registry
from minify_font.core.codec import CodecOptions
from minify_font.errors import MinifyFontError
from minify_font.utils.logging import logger, set_verbose

EXAMPLES = """
\b
Examples:
  minify-font font.ttf
  minify-font font.ttf -c top500
  minify-font font.ttf -c commonlyUsed -o output/
  minify-font font.ttf -w "Hello World"
  minify-font font.ttf -c top500 -w "额外字符" -o minified.woff2
  minify-font font.ttf -f woff2
  minify-font font.ttf -f ttf,woff -o dist/
"""


class MinifyCommand(click.Command):
    """Command that prints help when called bare and exits with 1 on usage errors."""

    def parse_args(self, ctx, args):
        if not args and not ctx.resilient_parsing:
            click.echo(ctx.get_help(), color=ctx.color)
            ctx.exit()
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


class JsonObject(click.ParamType):
    """A JSON object given as a string."""

    name = "json"

    def convert(self, value, param, ctx):
        if isinstance(value, dict):
            return value
        try:
            data = json.loads(value)
        except json.JSONDecodeError as e:
            self.fail(f"Invalid JSON: {e}", param, ctx)
        if not isinstance(data, dict):
            self.fail("Expected a JSON object", param, ctx)
        return data


@click.command(
    cls=MinifyCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EXAMPLES,
)
@click.version_option(
    __version__,
    "-v",
    "--version",
    prog_name="minify-font",
    message="%(prog)s version %(version)s",
)
@click.argument("input_path", metavar="INPUT", type=click.Path(dir_okay=False))
@click.option(
    "-c",
    "--collection",
    default=DEFAULT_COLLECTION,
    show_default=True,
    help=f"Predefined character collection: {', '.join(default_registry().names)}.",
)
@click.option(
    "-w",
    "--words",
    default=None,
    help="Custom characters to include (combined with -c when both are given).",
)
@click.option(
    "-o",
    "--output",
    default=None,
    help="Output file or directory. Defaults to the input path with a .min suffix.",
)
@click.option(
    "-f",
    "--formats",
    default=None,
    help="Comma-separated formats to generate (default: ttf,woff,woff2).",
)
@click.option("--input-options", type=JsonObject(), default=None, help="Input font options as JSON.")
@click.option("--output-options", type=JsonObject(), default=None, help="Output font options as JSON.")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any format fails.")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx,
    input_path,
    collection,
    words,
    output,
    formats,
    input_options,
    output_options,
    strict,
    verbose,
):
    """Subset INPUT font to a character set and convert it to web font formats."""
    from minify_font.pipeline.runner import run_minify

    set_verbose(verbose)

    collection_explicit = (
        ctx.get_parameter_source("collection") == ParameterSource.COMMANDLINE
    )
    codec_options = CodecOptions(input_options or {}, output_options or {})

    try:
        result = run_minify(
            input_path,
            collection=collection,
            collection_explicit=collection_explicit,
            words=words,
            output=output,
            formats=formats,
            codec_options=codec_options,
        )
    except MinifyFontError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error minifying font: {e}")
        sys.exit(1)

    if strict and result.failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
