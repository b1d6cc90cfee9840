"""Paginated retrieval of Inspector findings.

Every page request carries the same ``filterCriteria`` document. Inspector
rejects a ``nextToken`` that is submitted without the filter it was issued
for, so the criteria are rendered once and passed unchanged on each call.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from vulntally.aws.session import ClientFactory
from vulntally.findings.filters import Filter
from vulntally.findings.models import Finding

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a ListFindings call fails.

    ``findings`` holds everything gathered from the pages that succeeded
    before the failure; callers decide whether that is usable.
    """

    def __init__(self, message: str, findings: List[Finding], pages: int) -> None:
        super().__init__(message)
        self.findings = findings
        self.pages = pages


def fetch_findings(
    factory: ClientFactory,
    query: Filter,
    *,
    page_size: Optional[int] = None,
) -> List[Finding]:
    """Fetch every finding matching *query*, following continuation tokens.

    Findings are returned in the order the service produced them.
    """
    client = factory.client("inspector2")
    criteria = query.to_criteria()
    findings: List[Finding] = []
    token: Optional[str] = None
    pages = 0

    logger.info("Getting findings ...")
    while True:
        request: Dict[str, Any] = {"filterCriteria": criteria}
        if page_size is not None:
            request["maxResults"] = page_size
        if token:
            request["nextToken"] = token

        try:
            response = client.list_findings(**request)
        except (BotoCoreError, ClientError) as exc:
            raise FetchError(
                f"ListFindings failed on page {pages + 1}: {exc}", findings, pages
            ) from exc

        pages += 1
        findings.extend(Finding.from_api(f) for f in response.get("findings") or ())
        token = response.get("nextToken")
        if not token:
            break
        logger.info("Getting further findings ...")

    logger.debug("Fetched %d findings in %d page(s)", len(findings), pages)
    return findings
