"""Application entry point for AutoForgX backend server."""

from autoforgx.app import App
from autoforgx.config import Config
from autoforgx.logging import setup_logging
from autoforgx.web.runner import run_server


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
