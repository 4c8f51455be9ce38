# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""This module defines constants used throughout the timeout fixture."""

DUMMY_RESPONSE = '{"name":"myName"}'
DEFAULT_WAIT_SECONDS = 10.0
DEFAULT_ROUTE = "/"
DEFAULT_PORT = 8000
ENV_CONFIG_PREFIX = "TIMEOUT_FIXTURE_"
WSGI_APP_PATH = "timeout_fixture.wsgi:app"
GUNICORN_CONFIG_FILE = "gunicorn.conf.py"
GUNICORN_DEFAULT_TIMEOUT = 30
