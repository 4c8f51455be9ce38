# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""This module defines the FixtureConfig class which represents the timeout fixture settings."""

import datetime
import itertools
import json
import os
import typing

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from timeout_fixture.constants import (
    DEFAULT_PORT,
    DEFAULT_ROUTE,
    DEFAULT_WAIT_SECONDS,
    DUMMY_RESPONSE,
    ENV_CONFIG_PREFIX,
    GUNICORN_DEFAULT_TIMEOUT,
)
from timeout_fixture.exceptions import ConfigInvalidError


class WebserverConfig(typing.TypedDict):
    """Represent the configuration values for a web server.

    Attributes:
        workers: The number of workers to use for the web server, or None if not specified.
        threads: The number of threads per worker to use for the web server,
            or None if not specified.
        keepalive: The time to wait for requests on a Keep-Alive connection,
            or None if not specified.
        timeout: The worker silence timeout for the web server, always longer than the wait.
    """

    workers: int | None
    threads: int | None
    keepalive: datetime.timedelta | None
    timeout: datetime.timedelta


class FixtureConfig(BaseModel):
    """Represent the timeout fixture configuration values.

    Attrs:
        wait_seconds: how long each request stalls before the body is written.
        wait_strategy: ``busy`` to spin on the clock, ``sleep`` for a plain timed delay.
        route: the URL rule the delayed responder is mounted on.
        body: the canned response body.
        host: bind address for the web server.
        port: bind port for the web server, 0 picks a free port.
        webserver_workers: number of gunicorn worker processes.
        webserver_threads: number of threads per gunicorn worker.
        webserver_keepalive: seconds to wait for requests on a Keep-Alive connection.
        webserver_timeout: gunicorn worker silence timeout in seconds.
        worker_timeout: the gunicorn worker timeout actually applied.
        access_log: gunicorn access log target, ``-`` for stdout.
        error_log: gunicorn error log target, ``-`` for stderr.
        webserver_config: the web server settings, with durations as timedelta.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    wait_seconds: float = Field(DEFAULT_WAIT_SECONDS, gt=0)
    wait_strategy: str = Field("busy", pattern="^(busy|sleep)$")
    route: str = Field(DEFAULT_ROUTE, pattern="^/")
    body: str = Field(DUMMY_RESPONSE, min_length=1)
    host: str = Field("0.0.0.0", min_length=1)  # nosec
    port: int = Field(DEFAULT_PORT, ge=0, le=65535)
    webserver_workers: int | None = Field(None, gt=0)
    webserver_threads: int | None = Field(None, gt=0)
    webserver_keepalive: int | None = Field(None, gt=0)
    webserver_timeout: int | None = Field(None, gt=0)
    access_log: str = Field("-", min_length=1)
    error_log: str = Field("-", min_length=1)

    @field_validator("webserver_timeout")
    @classmethod
    def outlast_wait(cls, value: int | None, info: ValidationInfo) -> int | None:
        """Check that gunicorn won't kill a worker while it is still waiting.

        Args:
            value: the input value.
            info: the values validated so far.

        Returns:
            The unchanged timeout.

        Raises:
            ValueError: if the timeout is not longer than the wait.
        """
        wait_seconds = info.data.get("wait_seconds")
        if value is not None and wait_seconds is not None and value <= wait_seconds:
            raise ValueError(
                f"webserver_timeout must be greater than wait_seconds ({wait_seconds})"
            )
        return value

    @classmethod
    def build(cls, **settings: typing.Any) -> "FixtureConfig":
        """Validate settings and create a FixtureConfig.

        Args:
            settings: field values; None values fall back to the defaults.

        Returns:
            The validated FixtureConfig.

        Raises:
            ConfigInvalidError: if any setting is invalid.
        """
        try:
            return cls(**{k: v for k, v in settings.items() if v is not None})
        except ValidationError as exc:
            error_fields = set(
                itertools.chain.from_iterable(error["loc"] for error in exc.errors())
            )
            error_field_str = " ".join(sorted(str(f) for f in error_fields))
            raise ConfigInvalidError(f"invalid configuration: {error_field_str}") from exc

    @classmethod
    def from_env(
        cls, environ: typing.Mapping[str, str] | None = None, **overrides: typing.Any
    ) -> "FixtureConfig":
        """Load the configuration from prefixed environment variables.

        Values are handed to pydantic as raw strings and converted to the field types
        there, so string settings such as the body are kept verbatim.

        Args:
            environ: the environment to read, defaults to ``os.environ``.
            overrides: settings that take precedence over the environment.

        Returns:
            The validated FixtureConfig.
        """
        environ = os.environ if environ is None else environ
        settings: dict[str, typing.Any] = {}
        for key in sorted(environ):
            if not key.startswith(ENV_CONFIG_PREFIX):
                continue
            settings[key.removeprefix(ENV_CONFIG_PREFIX).lower()] = environ[key]
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls.build(**settings)

    def to_env(self) -> dict[str, str]:
        """Render the non-default settings as prefixed environment variables.

        Returns:
            A dictionary representing the fixture environment variables.
        """
        return {
            f"{ENV_CONFIG_PREFIX}{k.upper()}": v if isinstance(v, str) else json.dumps(v)
            for k, v in self.model_dump(exclude_defaults=True).items()
        }

    @property
    def worker_timeout(self) -> int:
        """Get the gunicorn worker timeout, always longer than the wait.

        A busy waiting sync worker cannot heartbeat, so gunicorn's own default would
        kill it mid-wait once the wait reaches that default.

        Returns:
            The configured timeout, or the wait plus gunicorn's default timeout.
        """
        if self.webserver_timeout is not None:
            return self.webserver_timeout
        return int(self.wait_seconds) + GUNICORN_DEFAULT_TIMEOUT

    @property
    def webserver_config(self) -> WebserverConfig:
        """Get the web server configuration.

        Returns:
            The web server configuration.
        """
        return WebserverConfig(
            workers=self.webserver_workers,
            threads=self.webserver_threads,
            keepalive=datetime.timedelta(seconds=self.webserver_keepalive)
            if self.webserver_keepalive is not None
            else None,
            timeout=datetime.timedelta(seconds=self.worker_timeout),
        )
