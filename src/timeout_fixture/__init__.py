# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""HTTP fixture that stalls before answering, for exercising client timeouts."""

from timeout_fixture.app import create_app, write_body
from timeout_fixture.config import FixtureConfig
from timeout_fixture.exceptions import ConfigInvalidError, WriteFailure

__all__ = ["ConfigInvalidError", "FixtureConfig", "WriteFailure", "create_app", "write_body"]
