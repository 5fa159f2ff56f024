"""Database credential helpers for the Lambda runtime."""

from __future__ import annotations

import base64
import json
import os
from typing import Any

from sqlalchemy.engine import make_url

from app.exceptions import ConfigurationError
from app.services.aws_clients import get_secretsmanager_client

_SECRET_CACHE: dict[str, dict[str, Any]] = {}


def get_database_url() -> str:
    """Resolve the database URL from env or Secrets Manager.

    ``DATABASE_URL`` wins. Otherwise ``DATABASE_SECRET_ARN`` must point
    at a JSON secret holding a ``url`` (or ``database_url``) field.

    Raises:
        ConfigurationError: If neither source yields a URL.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    secret_arn = os.getenv("DATABASE_SECRET_ARN")
    if not secret_arn:
        raise ConfigurationError("DATABASE_URL")

    secret = _get_secret(secret_arn)
    url = secret.get("url") or secret.get("database_url")
    if not url:
        raise ConfigurationError("DATABASE_URL")
    return str(url)


def get_service_role_key() -> str:
    """Return the service role key.

    Raises:
        ConfigurationError: If ``SERVICE_ROLE_KEY`` is unset or empty.
    """
    key = os.getenv("SERVICE_ROLE_KEY")
    if not key:
        raise ConfigurationError("SERVICE_ROLE_KEY")
    return key


def with_service_role(database_url: str, service_role_key: str) -> str:
    """Fill in the connection password from the service role key.

    URLs that already carry a password are returned unchanged.
    """
    url = make_url(database_url)
    if url.password or url.get_backend_name() == "sqlite":
        return database_url
    return url.set(password=service_role_key).render_as_string(hide_password=False)


def clear_secret_cache() -> None:
    """Forget cached secrets (useful in tests)."""
    _SECRET_CACHE.clear()


def _get_secret(secret_arn: str) -> dict[str, Any]:
    """Fetch a secret from AWS Secrets Manager."""

    if secret_arn in _SECRET_CACHE:
        return _SECRET_CACHE[secret_arn]

    client = get_secretsmanager_client()
    response = client.get_secret_value(SecretId=secret_arn)
    secret_str = response.get("SecretString")
    if not secret_str and response.get("SecretBinary"):
        secret_str = base64.b64decode(response["SecretBinary"]).decode("utf-8")

    if not secret_str:
        raise ConfigurationError("DATABASE_SECRET_ARN")

    secret_payload = json.loads(secret_str)
    _SECRET_CACHE[secret_arn] = secret_payload
    return secret_payload
