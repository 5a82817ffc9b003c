from __future__ import annotations

import argparse
import logging
import sys

import requests

from . import __version__
from . import client
from . import config as config_lib
from . import logs
from . import metrics
from .app import create_app
from .snapshotter import Snapshotter
from .whitelist import VolumeWhitelist, WhitelistLoadError

logger = logging.getLogger(__name__)


def make_parser() -> argparse.ArgumentParser:
    # -h is taken by --host, so help is only available as --help.
    parser = argparse.ArgumentParser(
        prog="snapshot-manager",
        description="Manager for ZFS snapshots",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-p", "--port", type=int, metavar="PORT", help="Server port (default 7877).")
    parser.add_argument("-h", "--host", metavar="HOST", help="Server host (default localhost).")
    parser.add_argument("-w", "--whitelist", metavar="WHITELIST", help="Whitelist location.")
    parser.add_argument("--zfs-binary", metavar="PATH", help="Snapshot tool to invoke (default zfs).")
    parser.add_argument("--metrics-port", type=int, metavar="PORT", help="Expose Prometheus metrics on this port.")
    parser.add_argument("--log-level", metavar="LEVEL", help="Logging level (default INFO).")
    return parser


def build_config(args: argparse.Namespace, environ=None) -> config_lib.ServerConfig:
    return config_lib.load_config(
        environ,
        whitelist_path=args.whitelist,
        host=args.host,
        port=args.port,
        zfs_binary=args.zfs_binary,
        metrics_port=args.metrics_port,
        log_level=args.log_level.upper() if args.log_level else None,
    )


def main(argv: list[str] | None = None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)

    try:
        server_config = build_config(args)
    except config_lib.ConfigError as e:
        parser.error(str(e))

    logs.setup_logging(server_config.log_level.upper())

    try:
        whitelist = VolumeWhitelist.load(server_config.whitelist_path)
    except WhitelistLoadError as e:
        logger.critical(str(e))
        return 1
    logger.info(f"Whitelist containing {len(whitelist)} elements read from system.")
    metrics.snapshot_whitelist_size.set(len(whitelist))

    if server_config.metrics_port is not None:
        metrics.start_exporter(server_config.metrics_port, server_config.host)

    app = create_app(whitelist, Snapshotter(binary=server_config.zfs_binary))
    logger.info(f"Starting server on {server_config.address}")
    app.run(host=server_config.host, port=server_config.port, threaded=True)
    return 0


def trigger_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="snapshot-trigger", description="Ask a snapshot manager for a snapshot.")
    parser.add_argument("volume", help="Volume to snapshot, e.g. tank/data.")
    parser.add_argument("--url", default=client.DEFAULT_URL, help=f"Server URL (default {client.DEFAULT_URL}).")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds.")
    args = parser.parse_args(argv)

    try:
        result = client.trigger_snapshot(args.volume, base_url=args.url, timeout=args.timeout)
    except requests.RequestException as e:
        print(f"Failed to reach {args.url}: {e}", file=sys.stderr)
        return 1

    print(f"{result.status_code} {result.message}")
    return 0 if result.ok else 1
