# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""Provide the GunicornWebserver class to represent the gunicorn server."""
import datetime
import logging
import os
import pathlib
import subprocess  # nosec B404
import sys
import typing

from timeout_fixture.config import FixtureConfig
from timeout_fixture.constants import GUNICORN_CONFIG_FILE, WSGI_APP_PATH
from timeout_fixture.exceptions import ConfigInvalidError

logger = logging.getLogger(__name__)


class GunicornWebserver:
    """A class representing a Gunicorn web server hosting the fixture.

    Attrs:
        config_text: the content of the Gunicorn configuration file.
        config_path: the path to the Gunicorn configuration file.
        command: the command to start the Gunicorn web server.
    """

    def __init__(self, config: FixtureConfig, base_dir: pathlib.Path):
        """Initialize a new instance of the GunicornWebserver class.

        Args:
            config: The fixture configuration.
            base_dir: The directory the Gunicorn configuration file is written to.
        """
        self._config = config
        self._base_dir = base_dir

    @property
    def config_text(self) -> str:
        """Generate the content of the Gunicorn configuration file.

        Returns:
            The content of the Gunicorn configuration file.
        """
        config_entries = []
        for setting, setting_value in self._config.webserver_config.items():
            setting_value = typing.cast(None | int | datetime.timedelta, setting_value)
            if setting_value is None:
                continue
            setting_value = (
                setting_value
                if isinstance(setting_value, int)
                else int(setting_value.total_seconds())
            )
            config_entries.append(f"{setting} = {setting_value}")
        host = self._config.host
        # IPv6 literals need brackets to be told apart from the port
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        new_line = "\n"
        config = f"""\
bind = ['{host}:{self._config.port}']
accesslog = {repr(self._config.access_log)}
errorlog = {repr(self._config.error_log)}
{new_line.join(config_entries)}"""
        return config

    @property
    def config_path(self) -> pathlib.Path:
        """Gets the path to the Gunicorn configuration file.

        Returns:
            The path to the web server configuration file.
        """
        return self._base_dir / GUNICORN_CONFIG_FILE

    @property
    def command(self) -> list[str]:
        """Get the command to start the Gunicorn web server.

        Returns:
            The command to start the Gunicorn web server.
        """
        return [
            sys.executable,
            "-m",
            "gunicorn",
            "-c",
            str(self.config_path),
            WSGI_APP_PATH,
        ]

    @property
    def _check_config_command(self) -> list[str]:
        """Returns the command to check the Gunicorn configuration.

        Returns:
            The command to check the Gunicorn configuration.
        """
        return self.command + ["--check-config"]

    def environment(self) -> dict[str, str]:
        """Build the environment the Gunicorn process runs with.

        Returns:
            The current environment updated with the fixture settings.
        """
        env = dict(os.environ)
        env.update(self._config.to_env())
        return env

    def update_config(self) -> bool:
        """Write and check the configuration file of the web server.

        Returns:
            True if the configuration file changed.

        Raises:
            ConfigInvalidError: if gunicorn rejects the configuration.
        """
        self._base_dir.mkdir(parents=True, exist_ok=True)
        try:
            current_webserver_config = self.config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            current_webserver_config = None
        self.config_path.write_text(self.config_text, encoding="utf-8")
        if current_webserver_config == self.config_text:
            return False
        try:
            subprocess.run(  # nosec B603
                self._check_config_command,
                env=self.environment(),
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            logger.error(
                "webserver configuration check failed, stdout: %s, stderr: %s",
                exc.stdout,
                exc.stderr,
            )
            self.config_path.unlink(missing_ok=True)
            raise ConfigInvalidError(
                "Webserver configuration check failed, please review your configuration"
            ) from exc
        logger.info("gunicorn config written to %s", self.config_path)
        return True

    def serve(self) -> int:
        """Run the Gunicorn web server in the foreground until it exits.

        Returns:
            The exit code of the Gunicorn process.
        """
        self.update_config()
        logger.info(
            "serving on %s:%s, each request waits %ss",
            self._config.host,
            self._config.port,
            self._config.wait_seconds,
        )
        completed = subprocess.run(self.command, env=self.environment(), check=False)  # nosec
        return completed.returncode
