#!/usr/bin/env python3
"""
Riemann FUSE Driver

Mounts a Riemann event index as a read-only filesystem.

Usage:
    riemann-fs /mnt/riemann --host localhost --port 5555
"""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

import pyfuse3
import trio

from .config import RiemannFSConfig, load_config
from .filesystem import RiemannFS
from .safety import FSNAME, validate_mountpoint

log = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Mount a Riemann event index as a read-only FUSE filesystem"
    )
    parser.add_argument(
        "mountpoint",
        nargs="?",
        help="Directory to mount the filesystem",
    )
    parser.add_argument(
        "--mount-point",
        dest="mount_point",
        help="Same as the positional mountpoint",
    )
    parser.add_argument(
        "--host",
        help="Riemann host to connect to (default: localhost)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Riemann TCP port (default: 5555)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Socket timeout in seconds for Riemann queries (default: none)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Report failed Riemann queries as I/O errors instead of empty results",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (default: ~/.config/riemann-fs/config.json)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RiemannFSConfig:
    return load_config(
        mountpoint=args.mountpoint or args.mount_point or "",
        cli_host=args.host,
        cli_port=args.port,
        cli_timeout=args.timeout,
        cli_strict=args.strict,
        cli_debug=args.debug,
        config_path=args.config,
    )


def _handle_term(signum, frame):
    # Let the trio loop unwind so pyfuse3.close() can unmount
    log.info(f"Received signal {signum}, unmounting")
    raise KeyboardInterrupt


async def _serve(fs: RiemannFS) -> None:
    await fs.connect()
    await pyfuse3.main()


def run(config: RiemannFSConfig) -> None:
    """Mount and serve until interrupted. Blocks."""
    fs = RiemannFS(config=config)

    fuse_options = set(pyfuse3.default_options)
    fuse_options.add(f"fsname={FSNAME}")
    fuse_options.add("ro")
    if config.debug:
        fuse_options.add("debug")

    log.info(f"Mounting RiemannFS on {config.mountpoint}")
    log.info(f"Riemann: {config.store.address}")

    pyfuse3.init(fs, config.mountpoint, fuse_options)

    try:
        trio.run(_serve, fs)
    except KeyboardInterrupt:
        log.info("Interrupted, unmounting...")
    finally:
        pyfuse3.close(unmount=True)
        log.info("Unmounted")


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    config = build_config(args)

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not config.mountpoint:
        print("Mount point must be specified", file=sys.stderr)
        sys.exit(1)

    error = validate_mountpoint(config.mountpoint)
    if error:
        print(error, file=sys.stderr)
        sys.exit(1)

    signal.signal(signal.SIGTERM, _handle_term)
    run(config)


if __name__ == "__main__":
    main()
