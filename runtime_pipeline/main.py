"""
Channel Runtime - command line entry point
Sums the runtime of a YouTube channel's public uploads.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from runtime_pipeline.core.config import AppConfig, ConfigLoader, ConfigValidationError
from runtime_pipeline.core.config.config_loader import ASK
from runtime_pipeline.core.errors import VideoSumError
from runtime_pipeline.core.youtube import YouTubeClient
from runtime_pipeline.core.youtube.metadata_miner import ChannelRuntimeMiner
from shared.storage import OutputFile

DEFAULT_CONFIG_FILE = Path("config.yaml")
DEFAULT_KEY_FILE = Path("config/key.txt")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure logging with a console handler on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler()],
        force=True
    )
    # discovery chatter is not useful at INFO
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    return logging.getLogger(__name__)


def add_file_logging(log_file: str) -> None:
    """Mirror the console log into a file."""
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode='a', encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logging.getLogger().addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="channel-runtime",
        description="YouTube API tool for calculating the video runtime sum of a channel.",
        epilog=(
            "The aggregated total is printed to standard output. The full list of "
            "videos is saved in CSV format to the output file; if the run fails, that "
            "file holds the last raw API response instead."
        )
    )
    parser.add_argument("channel", nargs="?",
                        help="Human-readable name of the channel, with or without the '@' prefix. "
                             "Asked interactively when omitted.")
    parser.add_argument("-k", "--key", help="YouTube API key in plain text. "
                        "Falls back to the key file when omitted.")
    parser.add_argument("--key-file", type=Path, default=DEFAULT_KEY_FILE,
                        help="File holding the API key (default: %(default)s).")
    parser.add_argument("-s", "--start", nargs="?", const=ASK,
                        help="Only count videos published at or after this RFC3339 timestamp, "
                             "i.e. 'yyyy-mm-ddTHH:MM:SSZ'. Asked interactively when empty.")
    parser.add_argument("-e", "--end", nargs="?", const=ASK,
                        help="Only count videos published at or before this RFC3339 timestamp. "
                             "Asked interactively when empty.")
    parser.add_argument("-o", "--output", help="Output file (default: output.txt).")
    parser.add_argument("--no-output", action="store_true",
                        help="Do not write the output file.")
    parser.add_argument("-u", "--largest-unit", choices=["day", "hour", "minute", "second"],
                        help="Largest unit used when rendering the total (default: day).")
    parser.add_argument("-c", "--config", type=Path,
                        help=f"YAML configuration file (default: {DEFAULT_CONFIG_FILE} if present).")
    parser.add_argument("-q", "--quiet", action="store_true", help="Hide the progress bar.")
    parser.add_argument("--log-file", help="Also write the log to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def load_configuration(logger: logging.Logger, args: argparse.Namespace) -> AppConfig:
    """Load and validate the run configuration from the arguments and files."""
    config_path = args.config
    if config_path is None and DEFAULT_CONFIG_FILE.exists():
        config_path = DEFAULT_CONFIG_FILE
    if config_path is not None:
        logger.info(f"Loading configuration from: {config_path}")

    overrides = {
        "api_key": args.key,
        "channel": args.channel,
        "start_date": args.start,
        "end_date": args.end,
        "output": False if args.no_output else args.output,
        "largest_unit": args.largest_unit,
        "show_progress": False if args.quiet else None,
        "log_file": args.log_file,
    }

    config = ConfigLoader(config_path, overrides, key_file=args.key_file).load()

    logger.info("Configuration validated successfully")
    logger.info(f"  Channel: @{config.channel}")
    logger.info(f"  Start Date: {config.start_date if config.start_date else 'unbounded'}")
    logger.info(f"  End Date: {config.end_date if config.end_date else 'unbounded'}")
    logger.info(f"  Output: {config.output_path if config.output_path else 'disabled'}")

    return config


def run(argv: Optional[List[str]] = None) -> int:
    """Run the pipeline and return the process exit code."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.verbose)

    try:
        config = load_configuration(logger, args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ConfigValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        return 1
    except EOFError:
        logger.error("Input closed before the configuration was complete")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read configuration: {e}")
        return 1

    output = OutputFile(config.output_path) if config.output_path else None

    try:
        if config.log_file:
            add_file_logging(config.log_file)
        client = YouTubeClient(config.api_key, sink=output)
        report = ChannelRuntimeMiner(client, config, output).run()
    except VideoSumError as e:
        logger.error(f"Run failed: {e}")
        if output is not None:
            logger.error(f"Last API response kept in {output.path}")
        return 1
    except OSError as e:
        logger.error(f"Could not write output: {e}")
        return 1

    if report is None:
        return 0

    for line in report.summary_lines(config.largest_unit):
        print(line)
    return 0


def main():
    """Main execution entry for Channel Runtime."""
    sys.exit(run())


if __name__ == "__main__":
    main()
