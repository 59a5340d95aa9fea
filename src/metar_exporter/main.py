"""Main entry point for running the METAR exporter."""

import argparse
import asyncio
import logging
import signal
import sys
from typing import NoReturn

from . import __version__
from .clients import AviationWeatherClient, ObservationProvider
from .collector import StationCollector
from .config import ConfigError, Settings, get_settings, parse_listen
from .registry import MetricRegistry
from .scheduler import Scheduler
from .server import create_app, start_server

logger = logging.getLogger(__name__)

_shutdown_event: asyncio.Event | None = None


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Reduce noise from httpx and the aiohttp access log
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def handle_shutdown(signum: int, frame: object) -> None:
    """Handle shutdown signals gracefully."""
    sig_name = signal.Signals(signum).name
    logger.info("Received %s, initiating shutdown...", sig_name)
    if _shutdown_event:
        _shutdown_event.set()


async def run_exporter(
    settings: Settings,
    provider: ObservationProvider | None = None,
    registry: MetricRegistry | None = None,
    shutdown_event: asyncio.Event | None = None,
) -> None:
    """Collect and serve metrics until shutdown.

    Args:
        settings: Application settings.
        provider: Optional observation provider for testing.
        registry: Optional metric registry for testing.
        shutdown_event: Optional event to signal shutdown. When omitted,
            SIGINT and SIGTERM trigger shutdown.

    Raises:
        ConfigError: If the configuration is unusable.
        OSError: If the listen address cannot be bound.
    """
    global _shutdown_event

    interval = settings.exporter.validate_startup()
    stations = settings.exporter.get_stations_list()
    host, port = parse_listen(settings.exporter.listen)

    if shutdown_event is None:
        shutdown_event = asyncio.Event()
        _shutdown_event = shutdown_event
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, lambda s=sig: handle_shutdown(s, None))

    if registry is None:
        registry = MetricRegistry()
    registry.register_all()

    client: AviationWeatherClient | None = None
    if provider is None:
        client = AviationWeatherClient(settings.provider)
        provider = client

    collector = StationCollector(provider, registry)
    scheduler = Scheduler(stations, collector, interval)

    logger.info(
        "Collecting %d stations every %s: %s",
        len(stations),
        interval,
        ", ".join(stations),
    )

    # The startup round is initiated before the listener comes up
    scheduler.run_round()

    runner = None
    try:
        runner = await start_server(create_app(registry), host, port)
        await scheduler.run(shutdown_event, fire_immediately=False)
    finally:
        if runner is not None:
            await runner.cleanup()
        if client is not None:
            await client.close()

    logger.info("Exporter stopped")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="METAR Exporter - airport weather observations as Prometheus gauges",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export two stations, refreshed every 5 minutes
  metar-exporter -s EDDF -s KJFK

  # Listen on a different port and refresh every 10 minutes
  metar-exporter --listen 127.0.0.1:9100 --interval 10m -s EDDF

Environment Variables:
  METAR_LISTEN     IP/Port to listen on (default: :3000)
  METAR_STATIONS   Comma-separated airport codes to query
  METAR_INTERVAL   Interval to fetch the data (default: 5m)
  AVWX_BASE_URL    aviationweather.gov base URL
        """,
    )

    parser.add_argument(
        "--listen",
        help="IP/Port to listen on (default: :3000)",
    )

    parser.add_argument(
        "-s",
        "--station",
        dest="stations",
        action="append",
        help="Station (airport code) to query; may be repeated or comma-separated",
    )

    parser.add_argument(
        "--interval",
        help="Interval to fetch the data, e.g. 5m or 1h30m (default: 5m)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Override environment settings with command line values."""
    if args.listen is not None:
        settings.exporter.listen = args.listen
    if args.stations:
        settings.exporter.stations = ",".join(args.stations)
    if args.interval is not None:
        settings.exporter.interval = args.interval
    if args.log_level is not None:
        settings.log_level = args.log_level
    return settings


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()
    settings = apply_args(get_settings(), args)

    setup_logging(settings.log_level)
    logger.info("METAR exporter %s starting", __version__)

    try:
        settings.exporter.validate_startup()
    except ConfigError as e:
        logger.critical("%s", e)
        sys.exit(1)

    try:
        asyncio.run(run_exporter(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except OSError as e:
        logger.critical("[ERR] %s", e)
        sys.exit(1)

    logger.info("Shutdown complete")
    sys.exit(0)


if __name__ == "__main__":
    main()
