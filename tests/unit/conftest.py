# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""pytest fixtures for the unit test."""

# pylint: disable=too-few-public-methods

import typing

import pytest
from flask import Flask
from flask.testing import FlaskClient

from timeout_fixture.app import create_app
from timeout_fixture.config import FixtureConfig


class FakeClock:
    """A clock that advances by a fixed step every time it is read."""

    def __init__(self, start: float = 1000.0, step: float = 1.0):
        """Initialize the FakeClock object."""
        self.now = start
        self.step = step
        self.reads = 0

    def __call__(self) -> float:
        """Return the current fake time, then advance it."""
        self.reads += 1
        current = self.now
        self.now += self.step
        return current


@pytest.fixture(name="fake_clock")
def fake_clock_fixture() -> FakeClock:
    """Fake clock fixture."""
    return FakeClock()


@pytest.fixture(name="fixture_config")
def fixture_config_fixture() -> FixtureConfig:
    """Fixture configuration with a short wait, to keep unit tests fast."""
    return FixtureConfig.build(wait_seconds=0.2)


@pytest.fixture(name="app")
def app_fixture(fixture_config: FixtureConfig) -> Flask:
    """Flask application fixture."""
    app = create_app(fixture_config)
    app.config.update(TESTING=True)
    return app


@pytest.fixture(name="client")
def client_fixture(app: Flask) -> typing.Generator[FlaskClient, None, None]:
    """Flask test client fixture."""
    with app.test_client() as client:
        yield client
