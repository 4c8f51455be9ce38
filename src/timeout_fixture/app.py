# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""Flask application serving the delayed responder."""

import logging
import sys
import time

from flask import Flask, Response

from timeout_fixture.config import FixtureConfig
from timeout_fixture.exceptions import WriteFailure
from timeout_fixture.waiting import epoch_millis, get_waiter

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Send the fixture log lines to standard output.

    Args:
        level: the log level for the fixture loggers.
    """
    package_logger = logging.getLogger("timeout_fixture")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)


def write_body(response: Response, body: str) -> None:
    """Write the body through the response's writer stream.

    Args:
        response: the response being built.
        body: the text to write.

    Raises:
        WriteFailure: if the stream refuses the write.
    """
    try:
        response.stream.write(body.encode("utf-8"))
    except (OSError, ValueError) as exc:
        raise WriteFailure(f"failed to write response body: {exc}") from exc


def create_app(config: FixtureConfig | None = None) -> Flask:
    """Create the Flask application.

    Args:
        config: the fixture configuration, loaded from the environment when omitted.

    Returns:
        The Flask application.
    """
    config = config if config is not None else FixtureConfig.from_env()
    waiter = get_waiter(config.wait_strategy)

    app = Flask(__name__)
    app.extensions["timeout_fixture"] = config

    @app.get(config.route)
    def delayed_response() -> Response:
        """Stall the worker for the configured duration, then answer with the canned body."""
        logger.info("before true%d", epoch_millis())
        waiter(config.wait_seconds, time.time)
        logger.info("afer true%d", epoch_millis())
        response = app.response_class()
        write_body(response, config.body)
        return response

    return app
