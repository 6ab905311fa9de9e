"""Command line entry point.

Resolves the video behind an embedding page, lists its variants and
downloads the widest one into a single file.
"""

import argparse
import sys
from typing import List, Optional

from tqdm import tqdm

from dashdl import __version__
from dashdl.core.config import ConfigService
from dashdl.core.errors import EXIT_INTERRUPTED, format_error, report_exception
from dashdl.core.http import HttpClient
from dashdl.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    set_run_id,
)
from dashdl.services.pipeline import DownloadPipeline

logger = get_logger(__name__)


class TqdmProgress:
    """ProgressReporter backed by a tqdm byte bar."""

    def __init__(self, description: str, disable: bool = False):
        self._bar = tqdm(
            total=0,
            desc=description,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            disable=disable,
        )

    def set_total(self, total: int) -> None:
        self._bar.total = total
        self._bar.refresh()

    def update(self, amount: int) -> None:
        self._bar.update(amount)

    def close(self) -> None:
        if self._bar.total is not None and self._bar.n < self._bar.total:
            self._bar.update(self._bar.total - self._bar.n)
        self._bar.close()

    def abort(self) -> None:
        self._bar.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dashdl",
        description="Download the video embedded in a page from its segmented manifest.",
    )
    parser.add_argument("-u", "--url", required=True, help="URL of the embedding page")
    parser.add_argument("-r", "--referer", required=True, help="Referer sent with the page request")
    parser.add_argument("-f", "--filename", required=True, help="Output filename")
    parser.add_argument("-c", "--config", default=None, help="Path to a YAML config file")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the available variants and exit without downloading",
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Do not draw a progress bar"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line interface and return the process exit status."""
    args = build_parser().parse_args(argv)

    progress: Optional[TqdmProgress] = None
    try:
        config = ConfigService(args.config).load()
        configure_logging(args.log_level or config.logging.level, config.logging.format)
        run_id = set_run_id()
        logger.info("Starting dashdl", version=__version__, run_id=run_id)

        with HttpClient.from_config(config.http) as http:
            pipeline = DownloadPipeline(http, chunk_size=config.download.chunk_size)

            variants = pipeline.resolve_variants(args.url, args.referer)
            print(f"Found {len(variants)} videos")
            for variant in variants:
                print(variant.describe())

            best = pipeline.select_variant(variants)
            print(f"Found best video: {best.describe()}")

            if args.list:
                return 0

            progress = TqdmProgress(args.filename, disable=args.no_progress)
            result = pipeline.download(best, args.filename, progress=progress)
            progress = None

        print(f"Saved {result.file_size} bytes to {result.file_path}")
        return 0

    except KeyboardInterrupt:
        if progress is not None:
            progress.abort()
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as e:
        if progress is not None:
            progress.abort()
        error = report_exception(e)
        print(format_error(error), file=sys.stderr)
        return error.exit_status
    finally:
        logger.debug("Run finished")
        clear_run_id()


if __name__ == "__main__":
    sys.exit(main())
