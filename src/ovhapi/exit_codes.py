"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to one error kind and is referenced by the corresponding
:class:`~ovhapi.exceptions.OvhError` subclass.  Shell wrappers can inspect
the exit code of ``ovhapi`` to tell a rejected signature from a dropped
connection without parsing stderr.

Example::

    $ ovhapi call GET /me
    $ echo $?
    4   # EXIT_REMOTE_ERROR -- the API answered with a structured error
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_CONFIG_ERROR = 3
"""Credentials, endpoint or configuration files could not be used."""

EXIT_REMOTE_ERROR = 4
"""The API returned an unexpected status with a structured error body."""

EXIT_UNEXPECTED_STATUS = 5
"""The API returned an unexpected status without a decodable error body."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_ENCODING_ERROR = 7
"""The request payload could not be serialised to JSON."""
