"""STS caller identity check."""

from __future__ import annotations

from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from vulntally.aws.session import AuthenticationError, ClientFactory


@dataclass(frozen=True)
class CallerIdentity:
    account: str
    arn: str


def check_caller_identity(factory: ClientFactory) -> CallerIdentity:
    """Return the account and ARN the credentials resolve to."""
    sts = factory.client("sts")
    try:
        response = sts.get_caller_identity()
    except (BotoCoreError, ClientError) as exc:
        raise AuthenticationError(f"Identity check failed: {exc}") from exc
    return CallerIdentity(
        account=response.get("Account", ""),
        arn=response.get("Arn", ""),
    )
