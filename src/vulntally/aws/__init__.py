"""AWS interface layer — client factory, identity check, findings fetcher."""

from vulntally.aws.fetcher import FetchError, fetch_findings
from vulntally.aws.identity import CallerIdentity, check_caller_identity
from vulntally.aws.session import AuthenticationError, Boto3ClientFactory, ClientFactory

__all__ = [
    "AuthenticationError",
    "Boto3ClientFactory",
    "CallerIdentity",
    "ClientFactory",
    "FetchError",
    "check_caller_identity",
    "fetch_findings",
]
