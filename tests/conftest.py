"""Shared test fixtures — raw Inspector records and a fake AWS client factory."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

import pytest
from botocore.exceptions import ClientError


def make_record(
    repo: Optional[str] = "repo-a",
    severity: str = "HIGH",
    *,
    arn: str = "arn:aws:inspector2:eu-central-1:123456789012:finding/abc",
    resources: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Build a raw ListFindings record for an ECR image in *repo*."""
    if resources is None:
        image: Dict[str, Any] = {"registry": "123456789012", "imageTags": ["v1.2.3"]}
        if repo is not None:
            image["repositoryName"] = repo
        resources = [{
            "type": "AWS_ECR_CONTAINER_IMAGE",
            "id": f"arn:aws:ecr:eu-central-1:123456789012:repository/{repo}/sha256:0",
            "details": {"awsEcrContainerImage": image},
        }]
    return {
        "findingArn": arn,
        "title": "CVE-2024-0001 - openssl",
        "severity": severity,
        "resources": resources,
    }


class FakeInspector:
    """Replays canned pages and records every list_findings request."""

    def __init__(self, pages: List[Dict[str, Any]], fail_on_call: Optional[int] = None):
        self.pages = pages
        self.fail_on_call = fail_on_call
        self.calls: List[Dict[str, Any]] = []

    def list_findings(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(copy.deepcopy(kwargs))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise ClientError(
                {"Error": {"Code": "ThrottlingException", "Message": "Rate exceeded"}},
                "ListFindings",
            )
        return self.pages[len(self.calls) - 1]


class FakeSts:
    def __init__(self, fail: bool = False):
        self.fail = fail

    def get_caller_identity(self) -> Dict[str, Any]:
        if self.fail:
            raise ClientError(
                {"Error": {"Code": "ExpiredToken", "Message": "The security token has expired"}},
                "GetCallerIdentity",
            )
        return {
            "UserId": "AIDAEXAMPLE",
            "Account": "123456789012",
            "Arn": "arn:aws:iam::123456789012:user/ops",
        }


class FakeClientFactory:
    def __init__(self, inspector: Optional[FakeInspector] = None, sts: Optional[FakeSts] = None):
        self.inspector = inspector or FakeInspector([{"findings": []}])
        self.sts = sts or FakeSts()
        self.requested: List[str] = []

    def client(self, service_name: str) -> Any:
        self.requested.append(service_name)
        return {"inspector2": self.inspector, "sts": self.sts}[service_name]


@pytest.fixture
def two_pages() -> List[Dict[str, Any]]:
    """Page 1 carries a continuation token, page 2 does not."""
    return [
        {
            "findings": [
                make_record("repo-b", "CRITICAL", arn="arn:f1"),
                make_record("repo-a", "HIGH", arn="arn:f2"),
            ],
            "nextToken": "token-1",
        },
        {"findings": [make_record("repo-a", "LOW", arn="arn:f3")]},
    ]


@pytest.fixture
def fake_factory(two_pages) -> FakeClientFactory:
    return FakeClientFactory(FakeInspector(two_pages))
