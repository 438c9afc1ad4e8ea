import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import config
from .core import run
from .exceptions import BlackVueSyncError
from .reporting import ReportGenerator

def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a log file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format=config.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Download video files from BlackVue on local network")

    p.add_argument("-i", "--ip", required=True,
                   help="The IP address of the BlackVue camera on your local network (e.g. 192.168.0.5)")
    p.add_argument("-d", "--directory", required=True, type=Path,
                   help="The path to store the video files in")

    p.add_argument("--ignore-existing", action="store_true",
                   help="Download the video file, even if it already exists in the directory")
    p.add_argument("--connect-timeout", type=int, default=config.DEFAULT_CONNECT_TIMEOUT,
                   help=f"Connection timeout in seconds (default: {config.DEFAULT_CONNECT_TIMEOUT})")
    p.add_argument("--download-timeout", type=int, default=config.DEFAULT_DOWNLOAD_TIMEOUT,
                   help=f"Video download timeout in seconds (default: {config.DEFAULT_DOWNLOAD_TIMEOUT})")

    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a per-file result CSV to this path")
    p.add_argument("--strict", action="store_true",
                   help="Exit non-zero if any video failed to download")

    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    logging.info("=== BlackVue Sync Started ===")
    logging.info(f"Dashcam: {args.ip}")
    logging.info(f"Dest:    {args.directory}")

    try:
        outcome = run(
            ip=args.ip,
            root=args.directory,
            ignore_existing=args.ignore_existing,
            connect_timeout=args.connect_timeout,
            download_timeout=args.download_timeout,
        )
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except BlackVueSyncError as e:
        logging.error(str(e))
        return e.exit_code
    except Exception:
        logging.exception("Fatal error during sync.")
        return 1

    reporter = ReportGenerator()
    if args.report_csv:
        reporter.write_csv(outcome, args.report_csv)

    logging.info(reporter.summary(outcome))

    if outcome.has_failures:
        logging.warning(f"{outcome.failed} video(s) failed to download; they will be retried on the next run.")
        if args.strict:
            return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
