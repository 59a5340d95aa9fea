"""Unit tests for main entry point."""

import asyncio
import socket
from unittest.mock import patch

import pytest

from metar_exporter.config import ConfigError, ExporterConfig, Settings
from metar_exporter.main import apply_args, main, parse_args, run_exporter, setup_logging
from metar_exporter.registry import MetricName, MetricRegistry
from metar_exporter.schemas import Observation


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestParseArgs:
    def test_default_args(self):
        """Test default argument values."""
        args = parse_args([])

        assert args.listen is None
        assert args.stations is None
        assert args.interval is None
        assert args.log_level is None

    def test_repeated_station_arg(self):
        """Test -s/--station may be repeated."""
        args = parse_args(["-s", "EDDF", "--station", "KJFK"])

        assert args.stations == ["EDDF", "KJFK"]

    def test_listen_and_interval(self):
        args = parse_args(["--listen", "127.0.0.1:9100", "--interval", "1m"])

        assert args.listen == "127.0.0.1:9100"
        assert args.interval == "1m"

    def test_log_level_arg(self):
        """Test --log-level argument."""
        args = parse_args(["--log-level", "DEBUG"])

        assert args.log_level == "DEBUG"


class TestApplyArgs:
    def test_cli_overrides_settings(self):
        settings = Settings(exporter=ExporterConfig(stations="EGLL", interval="5m"))
        args = parse_args(["-s", "EDDF,KJFK", "--interval", "30s", "--log-level", "ERROR"])

        apply_args(settings, args)

        assert settings.exporter.get_stations_list() == ["EDDF", "KJFK"]
        assert settings.exporter.interval == "30s"
        assert settings.log_level == "ERROR"

    def test_missing_args_keep_settings(self):
        settings = Settings(exporter=ExporterConfig(stations="EGLL", listen=":9000"))

        apply_args(settings, parse_args([]))

        assert settings.exporter.get_stations_list() == ["EGLL"]
        assert settings.exporter.listen == ":9000"


class TestSetupLogging:
    def test_setup_logging_info(self):
        """Test logging setup with INFO level."""
        setup_logging("INFO")

    def test_setup_logging_debug(self):
        """Test logging setup with DEBUG level."""
        setup_logging("DEBUG")


class TestMain:
    def test_empty_station_exits(self, monkeypatch):
        """Test startup fails before serving when no station is configured."""
        monkeypatch.delenv("METAR_STATIONS", raising=False)
        with patch("sys.argv", ["metar-exporter", "-s", ""]):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1

    def test_bad_interval_exits(self):
        """Test an unparsable interval is fatal."""
        with patch("sys.argv", ["metar-exporter", "-s", "EDDF", "--interval", "soon"]):
            with patch("metar_exporter.main.asyncio.run") as mock_run:
                with pytest.raises(SystemExit) as exc_info:
                    main()

        assert exc_info.value.code == 1
        mock_run.assert_not_called()


class TestRunExporter:
    @pytest.mark.asyncio
    async def test_invalid_config_raises(self):
        settings = Settings(exporter=ExporterConfig(stations=""))

        with pytest.raises(ConfigError):
            await run_exporter(settings, shutdown_event=asyncio.Event())

    @pytest.mark.asyncio
    async def test_startup_round_and_shutdown(
        self,
        fake_provider,
        sample_observation: Observation,
    ):
        """Test the first round runs at startup and shutdown is clean."""
        fake_provider.results["EDDF"] = sample_observation
        registry = MetricRegistry()
        shutdown_event = asyncio.Event()
        settings = Settings(
            exporter=ExporterConfig(
                listen=f"127.0.0.1:{_free_port()}",
                stations="EDDF,KJFK",
                interval="1h",
            )
        )

        async def trigger_shutdown():
            await asyncio.sleep(0.1)
            shutdown_event.set()

        await asyncio.gather(
            run_exporter(
                settings,
                provider=fake_provider,
                registry=registry,
                shutdown_event=shutdown_event,
            ),
            trigger_shutdown(),
        )

        assert sorted(fake_provider.calls) == ["EDDF", "KJFK"]
        snapshot = registry.snapshot()
        assert snapshot[(MetricName.SUCCESS, "EDDF")] == 1
        assert snapshot[(MetricName.SUCCESS, "KJFK")] == 0
