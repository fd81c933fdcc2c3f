"""
Command-line interface for the sitemap crawler.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sitemap_crawler.core import DEFAULT_MAX_DEPTH, DEFAULT_WORKERS, CrawlConfig, Crawler
from sitemap_crawler.errors import InvalidInputError
from sitemap_crawler.fetch import DEFAULT_TIMEOUT_S, DEFAULT_USER_AGENT
from sitemap_crawler.sitemap import build_json, build_sitemap, write_output
from sitemap_crawler.stats import CrawlStats

logger = logging.getLogger("sitemap_crawler")


def print_summary(stats: CrawlStats, pages: int) -> None:
    """Print crawl summary to stderr."""
    snap = stats.snapshot()
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Unique pages found:     {pages}\n")
    sys.stderr.write(f"Pages scanned:          {snap['scanned']}\n")
    sys.stderr.write(f"Links added:            {snap['added']}\n")
    sys.stderr.write(f"Skipped (extension):    {snap['skipped_ext']}\n\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitemap-crawler",
        description="Crawl same-host links starting from a URL and output a sitemap.",
    )
    parser.add_argument("start_url", help="Start URL (e.g. https://example.com)")
    parser.add_argument("--depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help=f"Maximum number of hops from the start URL (default: {DEFAULT_MAX_DEPTH})")
    parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                        help=f"Number of concurrent workers (default: {DEFAULT_WORKERS})")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S,
                        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT_S:g})")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--stats", action="store_true", help="Show periodic crawling stats")
    parser.add_argument("--format", choices=("xml", "json"), default="xml", help="Output format (default: xml)")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    parser.add_argument("--out", default="-", help="Output file path, or '-' for stdout (default: -)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the sitemap crawler CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    stats = CrawlStats()
    try:
        config = CrawlConfig(
            start_url=args.start_url,
            max_depth=args.depth,
            worker_count=args.workers,
            timeout_s=args.timeout,
            user_agent=args.user_agent,
            show_stats=args.stats,
        )
        crawler = Crawler(config, stats=stats)
    except InvalidInputError as e:
        logger.error("Error building sitemap for %s: %s", args.start_url, e)
        return 2

    logger.info(
        "Starting sitemap build for %s (depth: %d, workers: %d)",
        crawler.start_url, config.max_depth, config.worker_count,
    )
    pages = crawler.run()
    logger.info("Finished crawling. Found %d unique pages.", len(pages))

    if args.stats:
        print_summary(stats, len(pages))

    if args.format == "json":
        payload = build_json(pages, pretty=args.pretty).encode("utf-8")
    else:
        payload = build_sitemap(pages)

    if args.out == "-":
        sys.stdout.buffer.write(payload)
        sys.stdout.flush()
    else:
        output_path = write_output(payload, Path(args.out))
        logger.info("Results written to: %s", output_path)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
