"""HTTP exposition endpoint for the metric registry."""

import logging

from aiohttp import web

from .registry import MetricRegistry

logger = logging.getLogger(__name__)

REGISTRY_KEY = web.AppKey("registry", MetricRegistry)

ROOT_MESSAGE = "I'm fine but for metrics visit /metrics"


async def handle_metrics(request: web.Request) -> web.Response:
    """Serve the current registry contents in the text exposition format."""
    registry = request.app[REGISTRY_KEY]
    # The content_type kwarg rejects parameters such as version and charset
    return web.Response(
        body=registry.render(),
        headers={"Content-Type": registry.content_type},
    )


async def handle_root(request: web.Request) -> web.Response:
    return web.Response(text=ROOT_MESSAGE + "\n")


def create_app(registry: MetricRegistry) -> web.Application:
    """Build the aiohttp application serving ``/`` and ``/metrics``."""
    app = web.Application()
    app[REGISTRY_KEY] = registry
    app.router.add_get("/metrics", handle_metrics)
    app.router.add_get("/", handle_root)
    return app


async def start_server(app: web.Application, host: str, port: int) -> web.AppRunner:
    """Start serving the app.

    Raises:
        OSError: If the address cannot be bound.
    """
    runner = web.AppRunner(app, access_log=None)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    try:
        await site.start()
    except OSError:
        await runner.cleanup()
        raise
    logger.info("Listening on %s:%d", host, port)
    return runner
