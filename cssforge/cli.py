"""cssforge command line host.

Runs one stage invocation over a stylesheet file::

    cssforge build src/main.css -o dist/main.css \\
        --compiler acme_css.engine:Engine --scanner acme_css.scan:Scanner
"""

import logging
import sys
from pathlib import Path

import click

from cssforge import create_stage
from cssforge.config import ForgeSettings, OptimizeSettings
from cssforge.errors import CSSForgeError
from cssforge.stylesheet import DependencyMessage, DirDependencyMessage


def configure_logging(level: str) -> None:
    """Configure root logging for CLI use."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@click.group()
def cli() -> None:
    """cssforge - incremental utility-CSS build stage."""


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write CSS here instead of stdout")
@click.option("--compiler", "compiler_name", required=True, help="Compiler engine name or module:attr")
@click.option("--scanner", "scanner_name", required=True, help="Content scanner name or module:attr")
@click.option("--optimizer", "optimizer_name", help="Optimizer name or module:attr")
@click.option("--base", type=click.Path(file_okay=False, path_type=Path), help="Root directory for content detection")
@click.option("--optimize/--no-optimize", default=None, help="Optimize output (default: production env)")
@click.option("--minify", is_flag=True, help="Minify optimized output")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and list watch edges")
def build(
    input_file: Path,
    output: Path | None,
    compiler_name: str,
    scanner_name: str,
    optimizer_name: str | None,
    base: Path | None,
    optimize: bool | None,
    minify: bool,
    verbose: bool,
) -> None:
    """Compile INPUT_FILE once and write the resulting CSS."""
    settings = ForgeSettings()
    configure_logging("debug" if verbose else settings.log_level)

    raw_options: dict = {}
    if base is not None:
        raw_options["base"] = str(base)
    if optimize is None:
        optimize = settings.is_production
    raw_options["optimize"] = OptimizeSettings(minify=minify) if optimize else False

    try:
        stage = create_stage(compiler_name, scanner_name, optimizer_name, raw_options)
        css, result = stage.process_css(input_file.read_text(encoding="utf-8"), from_path=str(input_file))
    except (CSSForgeError, TypeError) as e:
        raise click.ClickException(str(e)) from e

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(css, encoding="utf-8")
    else:
        click.echo(css, nl=False)

    if verbose:
        for message in result.messages:
            if isinstance(message, DependencyMessage):
                click.echo(f"dependency {message.file}", err=True)
            elif isinstance(message, DirDependencyMessage):
                click.echo(f"dir-dependency {message.dir} {message.glob}", err=True)


def main() -> None:
    """Main entry point for the cssforge CLI."""
    cli()


if __name__ == "__main__":
    main()
