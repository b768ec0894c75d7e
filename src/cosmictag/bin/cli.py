#!/usr/bin/env python3
"""Command line entry point of the cosmic tagger."""

import argparse
import os
import pathlib
from typing import List

from cosmictag.config import load_config_file
from cosmictag.config.load import resolve_config_path
from cosmictag.config.operations import parse_value, set_nested_value
from cosmictag.version import __version__


def main(
    config: str,
    source: List[str],
    source_list: str,
    output: str,
    n: int,
    nskip: int,
    entry_list: str,
    skip_entry_list: str,
    log_dir: str,
    config_overrides: List[str],
):
    """Main driver of the cosmic tagging process.

    Performs these basic functions:
    - Update the configuration with the command-line arguments
    - Run the tagger

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : List[str]
        List of paths to the input directories
    source_list : str
        Path to a text file containing a list of input directory paths
    output : str
        Path to the output file
    n : int
        Number of entries to process
    nskip : int
        Number of entries to skip
    entry_list : str
        Path to a text file containing a list of entries to process
    skip_entry_list : str
        Path to a text file containing a list of entries to skip
    log_dir : str
        Path to the directory for storing the CSV log
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"
    """
    # Find the appropriate config file, load it
    cfg_file = resolve_config_path(config, current_dir=os.getcwd())
    cfg = load_config_file(cfg_file)

    # If there is no base block, build one
    if "base" not in cfg:
        cfg["base"] = {}

    # Propagate the configuration parent directory to enable relative paths
    parent_path = str(pathlib.Path(cfg_file).parent)
    cfg["base"]["parent_path"] = parent_path

    # The configuration must minimally contain an IO block with a reader
    if "io" not in cfg or cfg["io"].get("reader") is None:
        raise KeyError("Configuration file must contain an `io.reader` block.")

    # Override the input command-line information into the configuration
    io_mapping = {
        "file_keys": source if source is not None else source_list,
        "n_entry": n,
        "n_skip": nskip,
        "entry_list": entry_list,
        "skip_entry_list": skip_entry_list,
    }
    for io_key, io_value in io_mapping.items():
        if io_value is not None:
            cfg["io"]["reader"][io_key] = io_value

    # Override the output path if provided
    if output is not None:
        if cfg["io"].get("writer") is None:
            cfg["io"]["writer"] = {"name": "csv"}
        cfg["io"]["writer"]["file_name"] = output

    # Override logging path if provided
    if log_dir is not None:
        cfg["base"]["log_dir"] = log_dir

    # Apply any generic config overrides from --set arguments
    for override in config_overrides or []:
        if "=" not in override:
            raise ValueError(
                f"Invalid --set format: '{override}'. "
                f"Expected format: 'key.path=value'"
            )

        key_path, value_str = override.split("=", 1)
        cfg = set_nested_value(cfg, key_path.strip(), parse_value(value_str.strip()))

    # Import the main functionality only once the configuration is ready
    from cosmictag.main import run

    run(cfg)


def cli(argv=None):
    """Main CLI entry point.

    Parameters
    ----------
    argv : List[str], optional
        Command line arguments. If not specified, `sys.argv` is parsed.
    """
    parser = argparse.ArgumentParser(
        description="cosmictag - PCA-axis cosmic ray tagging for LArTPC data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cosmictag --version                               Show version information
  cosmictag -c config.yaml                          Tag the inputs listed in the config
  cosmictag -c config.yaml -s data/run1 -o tags.csv Tag one input directory
  cosmictag -c config.yaml --set base.verbosity=debug
""",
    )

    # Add a version command
    parser.add_argument(
        "--version", "-v", action="version", version=f"cosmictag {__version__}"
    )

    # Add config file argument
    parser.add_argument(
        "-c", "--config", required=True, help="Path to the configuration file"
    )

    # Add mutually exclusive group for source input
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-s",
        "--source",
        nargs="+",
        type=str,
        help="List of paths to the input directories",
    )
    group.add_argument(
        "-S",
        "--source-list",
        help="Path to a text file containing a list of input directory paths",
    )

    # Add output argument
    parser.add_argument("-o", "--output", help="Path to the output CSV file")

    # Add entry and skip arguments
    parser.add_argument(
        "-n", "--iterations", type=int, help="Number of entries to process"
    )

    parser.add_argument("--nskip", type=int, help="Number of entries to skip")

    parser.add_argument(
        "--entry-list",
        help="Path to a text file containing a list of entries to process",
    )

    parser.add_argument(
        "--skip-entry-list",
        help="Path to a text file containing a list of entries to skip",
    )

    # Add logging arguments
    parser.add_argument(
        "--log-dir", help="Path to the directory for storing the CSV log"
    )

    # Add option to dynamically override any config parameter using dot notation
    parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override any config parameter using dot notation "
        "(e.g., --set post.cosmic_pca_tagger.x_margin=10). "
        "Can be used multiple times for multiple overrides.",
    )

    # Parse the arguments
    args = parser.parse_args(argv)

    main(
        config=args.config,
        source=args.source,
        source_list=args.source_list,
        output=args.output,
        n=args.iterations,
        nskip=args.nskip,
        entry_list=args.entry_list,
        skip_entry_list=args.skip_entry_list,
        log_dir=args.log_dir,
        config_overrides=args.config_overrides,
    )


if __name__ == "__main__":
    cli()
