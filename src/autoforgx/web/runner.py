"""Uvicorn server runner."""

import uvicorn

from autoforgx.app import App
from autoforgx.config import Config
from autoforgx.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Run the API under uvicorn.

    Requests are logged by the request-context middleware, so uvicorn's access log is off
    and uvicorn keeps the logging already configured by setup_logging.
    """
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=None,
        log_level="debug" if config.debug else "info",
        access_log=False,
    )
