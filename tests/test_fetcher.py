"""Tests for the paginated findings fetcher and the identity check."""

import boto3
import pytest
from botocore.stub import Stubber
from conftest import FakeClientFactory, FakeInspector, FakeSts, make_record

from vulntally.aws.fetcher import FetchError, fetch_findings
from vulntally.aws.identity import CallerIdentity, check_caller_identity
from vulntally.aws.session import AuthenticationError
from vulntally.findings.filters import build_filter


class TestPagination:
    def test_two_pages(self, fake_factory):
        query = build_filter("v1.2.3", "sandbox")
        findings = fetch_findings(fake_factory, query)

        calls = fake_factory.inspector.calls
        assert len(calls) == 2
        assert calls[0]["filterCriteria"] == calls[1]["filterCriteria"] == query.to_criteria()
        assert "nextToken" not in calls[0]
        assert calls[1]["nextToken"] == "token-1"
        assert [f.finding_arn for f in findings] == ["arn:f1", "arn:f2", "arn:f3"]

    def test_single_page(self):
        factory = FakeClientFactory(FakeInspector([{"findings": [make_record()]}]))
        findings = fetch_findings(factory, build_filter("v1"))
        assert len(findings) == 1
        assert len(factory.inspector.calls) == 1

    def test_empty_token_terminates(self):
        pages = [{"findings": [make_record()], "nextToken": ""}]
        factory = FakeClientFactory(FakeInspector(pages))
        assert len(fetch_findings(factory, build_filter("v1"))) == 1
        assert len(factory.inspector.calls) == 1

    def test_stops_on_page_without_token_even_with_findings(self):
        pages = [
            {"findings": [], "nextToken": "t1"},
            {"findings": [], "nextToken": "t2"},
            {"findings": [make_record(), make_record()]},
        ]
        factory = FakeClientFactory(FakeInspector(pages))
        findings = fetch_findings(factory, build_filter("v1"))
        assert len(findings) == 2
        assert len(factory.inspector.calls) == 3

    def test_filter_identical_on_every_page(self):
        pages = [{"findings": [], "nextToken": f"t{i}"} for i in range(5)] + [{"findings": []}]
        factory = FakeClientFactory(FakeInspector(pages))
        fetch_findings(factory, build_filter("v1", "a,,b"))
        criteria = [c["filterCriteria"] for c in factory.inspector.calls]
        assert len(criteria) == 6
        assert all(c == criteria[0] for c in criteria)
        assert [c.get("nextToken") for c in factory.inspector.calls] == [None, "t0", "t1", "t2", "t3", "t4"]

    def test_empty_exclusion_term_does_not_error(self):
        factory = FakeClientFactory(FakeInspector([{"findings": []}]))
        fetch_findings(factory, build_filter("v1", "x,,y"))
        sent = factory.inspector.calls[0]["filterCriteria"]["ecrImageRepositoryName"]
        assert [t["value"] for t in sent] == ["x", "y"]

    def test_page_size_passed_through(self):
        factory = FakeClientFactory(FakeInspector([{"findings": []}]))
        fetch_findings(factory, build_filter("v1"), page_size=50)
        assert factory.inspector.calls[0]["maxResults"] == 50

    def test_page_size_omitted_by_default(self):
        factory = FakeClientFactory(FakeInspector([{"findings": []}]))
        fetch_findings(factory, build_filter("v1"))
        assert "maxResults" not in factory.inspector.calls[0]

    def test_null_records_do_not_abort(self):
        record = make_record("a")
        record["resources"] = [None]
        factory = FakeClientFactory(FakeInspector([{"findings": [record, None]}]))
        findings = fetch_findings(factory, build_filter("v1"))
        assert len(findings) == 2
        assert findings[1].resources == ()

    def test_missing_findings_key(self):
        factory = FakeClientFactory(FakeInspector([{}]))
        assert fetch_findings(factory, build_filter("v1")) == []


class TestFetchErrors:
    def test_first_page_failure(self):
        factory = FakeClientFactory(FakeInspector([], fail_on_call=1))
        with pytest.raises(FetchError) as excinfo:
            fetch_findings(factory, build_filter("v1"))
        assert excinfo.value.findings == []
        assert excinfo.value.pages == 0

    def test_partial_results_preserved(self, two_pages):
        factory = FakeClientFactory(FakeInspector(two_pages, fail_on_call=2))
        with pytest.raises(FetchError) as excinfo:
            fetch_findings(factory, build_filter("v1"))
        err = excinfo.value
        assert [f.finding_arn for f in err.findings] == ["arn:f1", "arn:f2"]
        assert err.pages == 1
        assert "page 2" in str(err)
        assert len(factory.inspector.calls) == 2


class TestWithBotocoreStubber:
    def test_real_client_request_shape(self):
        client = boto3.client(
            "inspector2",
            region_name="eu-central-1",
            aws_access_key_id="testing",
            aws_secret_access_key="testing",
        )
        query = build_filter("v1.2.3", "sandbox")
        criteria = query.to_criteria()

        class _Factory:
            def client(self, service_name):
                return client

        with Stubber(client) as stubber:
            stubber.add_response(
                "list_findings",
                {"findings": [], "nextToken": "page-2"},
                {"filterCriteria": criteria},
            )
            stubber.add_response(
                "list_findings",
                {"findings": []},
                {"filterCriteria": criteria, "nextToken": "page-2"},
            )
            assert fetch_findings(_Factory(), query) == []
            stubber.assert_no_pending_responses()


class TestIdentity:
    def test_returns_account_and_arn(self):
        identity = check_caller_identity(FakeClientFactory())
        assert identity == CallerIdentity(
            account="123456789012", arn="arn:aws:iam::123456789012:user/ops"
        )

    def test_failure_wrapped(self):
        with pytest.raises(AuthenticationError) as excinfo:
            check_caller_identity(FakeClientFactory(sts=FakeSts(fail=True)))
        assert "expired" in str(excinfo.value)
