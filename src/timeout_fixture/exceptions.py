# Copyright 2023 Canonical Ltd.
# See LICENSE file for licensing details.

"""Exceptions used by the timeout fixture."""


class ConfigInvalidError(Exception):
    """Exception raised when the fixture configuration is found to be invalid.

    Attrs:
        msg (str): Explanation of the error.
    """

    def __init__(self, msg: str):
        """Initialize a new instance of the ConfigInvalidError exception.

        Args:
            msg (str): Explanation of the error.
        """
        super().__init__(msg)
        self.msg = msg


class WriteFailure(Exception):
    """Exception raised when the response body cannot be written.

    Attrs:
        msg (str): Explanation of the error.
    """

    def __init__(self, msg: str):
        """Initialize a new instance of the WriteFailure exception.

        Args:
            msg (str): Explanation of the error.
        """
        super().__init__(msg)
        self.msg = msg
