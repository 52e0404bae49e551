"""Pydantic models shared across ovhapi modules.

**Configuration models** -- built by :func:`~ovhapi.config.resolve_client_config`
from configuration files, environment variables and explicit arguments:
    :class:`ClientConfig`.

**Wire models** -- decoded from API responses:
    :class:`ErrorPayload`.

All models use Pydantic v2.  Secrets are held as :class:`~pydantic.SecretStr`
so they never appear in ``repr()`` or ``model_dump()`` output.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr

DEFAULT_TIMEOUT = 180.0
"""Seconds a single API call may take before it fails with a timeout."""


# --- Client Config ---


class ClientConfig(BaseModel):
    """Resolved credentials and settings used to build a :class:`~ovhapi.client.Client`.

    ``endpoint`` is either a short name from :mod:`ovhapi.endpoints` or a
    literal base URL.  Any credential may be empty; the API rejects the
    calls that need it.

    Example::

        ClientConfig(
            endpoint="ovh-eu",
            application_key="7kbG7Bk7S9Nt7ZSV",
            application_secret="EXEgWIz07P0HYwtQDs7cNIqCiQaWSuHF",
            consumer_key="MtSwSrPpNjqfVSmJhLbPyr2i45lSwPU1",
        )
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(default="", description="Endpoint name or base URL")
    application_key: str = Field(default="", description="Public application key")
    application_secret: SecretStr = Field(default=SecretStr(""))
    consumer_key: SecretStr = Field(default=SecretStr(""))
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds"
    )


# --- Wire Models ---


class ErrorPayload(BaseModel):
    """Structured error body returned by the API on failure.

    Every field may be missing from the body and then defaults to ``""``.
    A body that is not a JSON object, or whose fields are not strings,
    fails validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    error_code: str = Field(default="", alias="errorCode")
    http_code: str = Field(default="", alias="httpCode")
    message: str = ""
