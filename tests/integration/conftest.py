# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""Fixtures for timeout fixture integration tests."""

import threading
import typing

import pytest
from werkzeug.serving import BaseWSGIServer, make_server

from timeout_fixture.app import create_app
from timeout_fixture.config import FixtureConfig


@pytest.fixture(scope="module", name="serve")
def serve_fixture() -> typing.Generator[typing.Callable[[FixtureConfig], str], None, None]:
    """Return a function serving the fixture on a free local port from a background thread.

    The threaded server handles each request on its own thread, so a busy wait only
    occupies the thread of the request it serves. Servers are shut down with the module.
    """
    servers: list[tuple[BaseWSGIServer, threading.Thread]] = []

    def serve(config: FixtureConfig) -> str:
        """Start a server for the configuration.

        Returns:
            the base URL of the server.
        """
        server = make_server("127.0.0.1", 0, create_app(config), threaded=True)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append((server, thread))
        return f"http://127.0.0.1:{server.server_port}"

    yield serve

    for server, thread in servers:
        server.shutdown()
        server.server_close()
        thread.join(timeout=10)


@pytest.fixture(scope="module", name="short_wait_url")
def short_wait_url_fixture(serve: typing.Callable[[FixtureConfig], str]) -> str:
    """Base URL of a fixture whose wait is shortened to two seconds."""
    return serve(FixtureConfig.build(wait_seconds=2))


@pytest.fixture(scope="module", name="default_url")
def default_url_fixture(serve: typing.Callable[[FixtureConfig], str]) -> str:
    """Base URL of a fixture with the default ten second wait."""
    return serve(FixtureConfig.build())
