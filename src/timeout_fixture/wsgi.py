# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""WSGI entry point, configured from the ``TIMEOUT_FIXTURE_`` environment variables."""

from timeout_fixture.app import configure_logging, create_app

configure_logging()
app = create_app()
