"""boto3 session and client factory."""

from __future__ import annotations

from typing import Any, Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError


class AuthenticationError(Exception):
    """Raised when credentials cannot be loaded or the caller cannot be verified."""


class ClientFactory(Protocol):
    """Anything that hands out service clients by name."""

    def client(self, service_name: str) -> Any: ...


class Boto3ClientFactory:
    """Creates clients from one shared-config profile.

    The session is created lazily on the first ``client()`` call so that a
    bad profile surfaces as an AuthenticationError at the point of use.
    """

    def __init__(self, profile: str, region: Optional[str] = None) -> None:
        self.profile = profile
        self.region = region
        self._session: Optional[boto3.Session] = None

    @property
    def session(self) -> boto3.Session:
        if self._session is None:
            try:
                self._session = boto3.Session(
                    profile_name=self.profile, region_name=self.region
                )
            except BotoCoreError as exc:
                raise AuthenticationError(
                    f"Cannot load AWS profile {self.profile!r}: {exc}"
                ) from exc
        return self._session

    def client(self, service_name: str) -> Any:
        try:
            return self.session.client(service_name)
        except BotoCoreError as exc:
            raise AuthenticationError(
                f"Cannot create {service_name} client for profile {self.profile!r}: {exc}"
            ) from exc
