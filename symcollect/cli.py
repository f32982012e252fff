#!/usr/bin/env python3
"""
Command line for collecting exported C symbols.

Usage:
    symcollect -p '^mrp_' -g -o linker-script.ld src/*.h
"""

import sys
from pathlib import Path

import click

from symcollect.collector import SymbolCollector
from symcollect.config import CollectorConfig
from symcollect.console import Console
from symcollect.errors import FatalError
from symcollect.output import OutputMode


def build_config(
    config_file: Path | None,
    files: tuple[Path, ...],
    **overrides,
) -> CollectorConfig:
    """Merge the config file (explicit or discovered) with command line values."""
    if config_file is not None:
        config = CollectorConfig.load_from_file(config_file)
    else:
        config = CollectorConfig.find_config(Path.cwd()) or CollectorConfig()

    updates = {key: value for key, value in overrides.items() if value is not None}
    if files:
        updates["files"] = list(files)
    return config.model_copy(update=updates)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@click.option("-c", "--compiler-flags", help="flags to pass to compiler")
@click.option("-p", "--pattern", help="symbol regexp pattern")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="write output to the given file",
)
@click.option("-g", "--gnu-ld", is_flag=True, help="generate GNU ld linker script")
@click.option("-v", "--verbose", count=True, help="run in verbose mode")
@click.option("--compiler", help="preprocessor to run (default: gcc)")
@click.option(
    "--no-preprocess", is_flag=True, help="scan the files as they are (already preprocessed)"
)
@click.option("--timeout", type=float, help="kill the preprocessor after this many seconds")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON configuration file (default: nearest symcollect.json)",
)
def cli(
    files: tuple[Path, ...],
    compiler_flags: str | None,
    pattern: str | None,
    output: Path | None,
    gnu_ld: bool,
    verbose: int,
    compiler: str | None,
    no_preprocess: bool,
    timeout: float | None,
    config_file: Path | None,
):
    """Collect the externally visible symbols of C source files."""
    console = Console()

    try:
        config = build_config(
            config_file,
            files,
            compiler_flags=compiler_flags,
            pattern=pattern,
            output=output,
            output_mode=OutputMode.VERSION_SCRIPT if gnu_ld else None,
            verbose=verbose or None,
            compiler=compiler,
            preprocess=False if no_preprocess else None,
            preprocess_timeout=timeout,
        )
        log = console.setup_logging(config.verbose)

        collector = SymbolCollector(config, logger=log)
        collector.collect()
        collector.write(config.output)

    except FatalError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
