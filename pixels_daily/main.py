#!/usr/bin/env python3
"""
Command line entry point.

    pixels-daily            run one reconciliation and exit
    pixels-daily --watch    run every SNAPSHOT_INTERVAL_MINUTES until stopped
"""

import argparse
import sys
from pathlib import Path

from apscheduler.schedulers.blocking import BlockingScheduler

from pixels_daily.chain import ChainFeed
from pixels_daily.checkpoint import CheckpointStore
from pixels_daily.config import CanvasConfig, Settings, get_settings
from pixels_daily.logs import error, log, warn
from pixels_daily.models import ReconcileResult
from pixels_daily.reconcile import Reconciler
from pixels_daily.snapshot import SnapshotEmitter
from pixels_daily.storage import make_publisher


def run_once(settings: Settings, config: CanvasConfig | None = None) -> ReconcileResult:
    config = config or CanvasConfig()
    public_dir = Path(settings.PUBLIC_DIR)

    publisher = make_publisher(settings)
    feed = ChainFeed(
        settings.RPC_URL,
        settings.CONTRACT_ADDRESS,
        settings.PIXELS_CHANGED_TOPIC,
        block_range=settings.LOG_BLOCK_RANGE,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
    try:
        reconciler = Reconciler(
            config,
            feed,
            SnapshotEmitter(config, publisher, public_dir / "canvasNFT"),
            CheckpointStore(public_dir / "cache.json", config),
        )
        return reconciler.run()
    finally:
        feed.close()
        publisher.close()


def _scheduled_run(settings: Settings):
    # A failed run keeps the old checkpoint; the next tick retries the window
    try:
        run_once(settings)
    except Exception as e:
        warn(f"Scheduled run failed: {e}")


def watch(settings: Settings):
    interval = settings.SNAPSHOT_INTERVAL_MINUTES
    scheduler = BlockingScheduler()
    scheduler.add_job(
        _scheduled_run,
        'interval',
        args=[settings],
        minutes=interval,
        id='pixels_daily',
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    log(f"Running snapshot job every {interval} minutes (Ctrl+C to stop)")
    _scheduled_run(settings)
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        log("Scheduler stopped")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pixels-daily",
        description="Replay Pixels contract events and publish daily canvas snapshots.",
    )
    parser.add_argument(
        "--watch", action="store_true",
        help="keep running and reconcile every SNAPSHOT_INTERVAL_MINUTES",
    )
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        if args.watch:
            watch(settings)
        else:
            run_once(settings)
    except KeyboardInterrupt:
        warn("Interrupted by user")
        return 1
    except Exception as e:
        error(f"Snapshot run failed: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
