#!/usr/bin/env python3
"""Command line entry point of the parent reconstruction."""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from larslice.config import ConfigError, apply_overrides, load_config_file
from larslice.config.load import resolve_config_path
from larslice.utils.enums import StatusCode
from larslice.utils.logger import logger
from larslice.version import __version__

# Default reader used when input files are given on the command line
DEFAULT_READER = "npz"


def build_config(
    config: str,
    source: Optional[List[str]] = None,
    n: Optional[int] = None,
    nskip: Optional[int] = None,
    config_overrides: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Loads a configuration file and folds the command line options into it.

    Parameters
    ----------
    config : str
        Name or path of the configuration file
    source : List[str], optional
        Input file patterns, replace `io.reader.file_keys`
    n : int, optional
        Number of events to process, replaces `io.reader.n_entry`
    nskip : int, optional
        Number of events to skip, replaces `io.reader.n_skip`
    config_overrides : List[str], optional
        Overrides in the form "key.path=value", applied last

    Returns
    -------
    dict
        Complete configuration
    """
    path = resolve_config_path(config, current_dir=os.getcwd())
    cfg = load_config_file(path)

    # Relative input paths in the configuration refer to its own directory
    cfg.setdefault("base", {})["parent_path"] = os.path.dirname(path)

    # Input paths given on the command line refer to the working directory
    if source is not None:
        source = [os.path.abspath(s) for s in source]

    reader_options = {"file_keys": source, "n_entry": n, "n_skip": nskip}
    for key, value in reader_options.items():
        if value is not None:
            io_cfg = cfg.setdefault("io", {})
            io_cfg.setdefault("reader", {"name": DEFAULT_READER})[key] = value

    if config_overrides:
        apply_overrides(cfg, config_overrides)

    return cfg


def main(
    config: str,
    source: Optional[List[str]],
    n: Optional[int],
    nskip: Optional[int],
    config_overrides: Optional[List[str]],
) -> StatusCode:
    """Reconstructs every event requested by the command line.

    Parameters
    ----------
    config : str
        Name or path of the configuration file
    source : List[str]
        Input file patterns
    n : int
        Number of events to process
    nskip : int
        Number of events to skip
    config_overrides : List[str]
        Overrides in the form "key.path=value"

    Returns
    -------
    StatusCode
        `SUCCESS` or the failure of the first failed event

    Raises
    ------
    ConfigError
        If the configuration cannot be loaded or bound
    """
    cfg = build_config(config, source, n, nskip, config_overrides)

    from larslice.driver import Driver

    return Driver(cfg).run()


def cli():
    """Parses the command line, runs the reconstruction and exits with its status."""
    parser = argparse.ArgumentParser(
        description="LArSlice - slice-based LArTPC neutrino reconstruction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The exit code is the status code of the run (0 on success).

Examples:
  larslice -c parent.yaml -s "events/*.npz"
  larslice -c parent.yaml -s "events/*.npz" -n 10 --set parent.slicing=one_slice
""",
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"LArSlice {__version__}"
    )
    parser.add_argument("-c", "--config", required=True, help="Configuration file")
    parser.add_argument("-s", "--source", nargs="+", help="Input file patterns")
    parser.add_argument("-n", "--iterations", type=int, help="Number of events")
    parser.add_argument("--nskip", type=int, help="Number of events to skip")
    parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override a configuration value using dot notation, "
        "e.g. --set parent.slicing.max_gap=10 (repeatable)",
    )
    args = parser.parse_args()

    try:
        status = main(
            args.config, args.source, args.iterations, args.nskip, args.config_overrides
        )

    except ConfigError as err:
        logger.error("Configuration error: %s", err)
        status = err.status

    sys.exit(int(status))


if __name__ == "__main__":
    cli()
