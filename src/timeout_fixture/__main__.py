# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""Command line entry point for the timeout fixture."""

import logging
import pathlib
import sys

import click

from timeout_fixture.app import configure_logging, create_app
from timeout_fixture.config import FixtureConfig
from timeout_fixture.exceptions import ConfigInvalidError
from timeout_fixture.webserver import GunicornWebserver

logger = logging.getLogger(__name__)


@click.command()
@click.option("--wait-seconds", type=float, help="Seconds each request stalls.")
@click.option("--wait-strategy", type=click.Choice(["busy", "sleep"]), help="How to stall.")
@click.option("--host", help="Bind address.")
@click.option("--port", type=int, help="Bind port.")
@click.option("--workers", "webserver_workers", type=int, help="Gunicorn worker processes.")
@click.option("--threads", "webserver_threads", type=int, help="Threads per gunicorn worker.")
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=pathlib.Path),
    default=pathlib.Path(".timeout-fixture"),
    show_default=True,
    help="Directory for the generated gunicorn configuration.",
)
@click.option("--dev", is_flag=True, help="Use Flask's threaded development server.")
def main(base_dir: pathlib.Path, dev: bool, **settings) -> None:
    """Serve an endpoint that waits before answering with a canned JSON body.

    Options override the TIMEOUT_FIXTURE_* environment variables.
    """
    configure_logging()
    try:
        config = FixtureConfig.from_env(**settings)
    except ConfigInvalidError as exc:
        raise click.UsageError(exc.msg) from exc
    if dev:
        logger.info("starting development server on %s:%s", config.host, config.port)
        create_app(config).run(host=config.host, port=config.port, threaded=True)
        return
    try:
        sys.exit(GunicornWebserver(config, base_dir).serve())
    except ConfigInvalidError as exc:
        raise click.ClickException(exc.msg) from exc


if __name__ == "__main__":  # pragma: nocover
    main()  # pylint: disable=no-value-for-parameter
