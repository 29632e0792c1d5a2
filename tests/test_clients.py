"""Tests for the downstream httpx clients, using httpx.MockTransport."""

import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest

from backend.src.common.types import SYSTEM_USER_ID, CourtListType
from backend.src.services.clients import (
    APIError,
    ConnectionError,
    CourtListDataClient,
    DocumentGeneratorClient,
    EmptyResponseError,
    NotFoundError,
    PublicationHubClient,
    PublicationMeta,
    RateLimitError,
    ReferenceDataClient,
)
from backend.src.services.courtlist import CourtListFetcher

BASE_URL = "http://common-platform.test"


def _config(handler, **extra):
    return {
        "base_url": BASE_URL,
        "retry_delay": 0,
        "transport": httpx.MockTransport(handler),
        **extra,
    }


class TestClientBase:
    def test_requires_base_url(self):
        with pytest.raises(ValueError, match="base_url"):
            CourtListDataClient({})

    @pytest.mark.parametrize(
        "status,error",
        [(404, NotFoundError), (429, RateLimitError), (500, APIError)],
    )
    def test_status_mapping(self, status, error):
        client = CourtListDataClient(_config(lambda request: httpx.Response(status, text="nope")))

        async def scenario():
            async with client:
                await client.fetch(CourtListType.STANDARD, "centre", "2026-01-05", "2026-01-05")

        with pytest.raises(error) as exc_info:
            asyncio.run(scenario())
        assert exc_info.value.status_code == status

    def test_retries_connect_errors(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        client = CourtListDataClient(_config(handler, retry_attempts=2))

        async def scenario():
            async with client:
                await client.fetch(CourtListType.STANDARD, "centre", "2026-01-05", "2026-01-05")

        with pytest.raises(ConnectionError, match="after 2 attempts"):
            asyncio.run(scenario())
        assert len(calls) == 2


class TestCourtListDataClient:
    def test_request_shape(self, sample_payload_dict):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json=sample_payload_dict)

        client = CourtListDataClient(_config(handler))

        async def scenario():
            async with client:
                return await client.fetch(
                    CourtListType.ONLINE_PUBLIC, "centre-1", "2026-01-05", "2026-01-05", "user-7"
                )

        data = asyncio.run(scenario())

        request = seen["request"]
        assert request.url.path == "/progression-service/query/api/rest/progression/courtlistdata"
        assert request.url.params["listId"] == "ONLINE_PUBLIC"
        assert request.url.params["courtCentreId"] == "centre-1"
        assert request.url.params["restricted"] == "false"
        assert request.headers["Accept"] == "application/vnd.progression.search.court.list.data+json"
        assert request.headers["CJSCPPUID"] == "user-7"
        assert data["courtCentreName"] == "Lavender Hill Magistrates' Court"

    def test_empty_body(self):
        client = CourtListDataClient(_config(lambda request: httpx.Response(200)))

        async def scenario():
            async with client:
                await client.fetch(CourtListType.STANDARD, "centre", "2026-01-05", "2026-01-05")

        with pytest.raises(EmptyResponseError):
            asyncio.run(scenario())


class TestReferenceDataAndFetcher:
    def _handler(self, sample_payload_dict, reference_status=200):
        def handler(request):
            if request.url.path.endswith("/courtrooms"):
                assert request.url.params["ouCourtRoomName"] == "Lavender Hill Magistrates' Court"
                assert request.headers["CJSCPPUID"] == SYSTEM_USER_ID
                if reference_status != 200:
                    return httpx.Response(reference_status)
                return httpx.Response(200, json={"id": "c1a2", "oucode": "B01LY00", "courtId": 325})
            return httpx.Response(200, json=sample_payload_dict)

        return handler

    def test_fetch_enriches_payload(self, sample_payload_dict):
        handler = self._handler(sample_payload_dict)
        fetcher = CourtListFetcher(
            CourtListDataClient(_config(handler)),
            ReferenceDataClient(_config(handler)),
        )

        payload = asyncio.run(fetcher.fetch(CourtListType.STANDARD, "centre", "2026-01-05"))

        assert payload.ou_code == "B01LY00"
        assert payload.court_id == "c1a2"
        assert payload.court_id_numeric == "325"

    def test_reference_failure_leaves_payload_unenriched(self, sample_payload_dict):
        handler = self._handler(sample_payload_dict, reference_status=500)
        fetcher = CourtListFetcher(
            CourtListDataClient(_config(handler)),
            ReferenceDataClient(_config(handler)),
        )

        payload = asyncio.run(fetcher.fetch(CourtListType.STANDARD, "centre", "2026-01-05"))

        assert payload.court_centre_name == "Lavender Hill Magistrates' Court"
        assert payload.ou_code is None
        assert payload.court_id_numeric is None

    def test_reference_failure_is_logged_lazily(self, sample_payload_dict, caplog):
        handler = self._handler(sample_payload_dict, reference_status=500)
        reference = ReferenceDataClient(_config(handler))

        import logging

        with caplog.at_level(logging.WARNING, logger="backend.src.services.clients.reference_data"):
            result = asyncio.run(reference.court_centre_by_name("Lavender Hill Magistrates' Court"))

        assert result is None
        record = caplog.records[-1]
        assert record.msg == "Reference data lookup failed for %r: %s"
        assert record.args[0] == "Lavender Hill Magistrates' Court"
        assert "500" in record.getMessage()


class TestPublicationHubClient:
    def test_metadata_headers(self):
        client = PublicationHubClient(
            {"base_url": "http://hub.test/publication", "token": "secret"}
        )
        now = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)
        meta = PublicationMeta(
            court_list_type=CourtListType.ONLINE_PUBLIC,
            content_date="2026-01-05T00:00:00.000Z",
            court_id_numeric="325",
        )

        headers = client.build_headers(meta, now=now)

        assert headers["x-provenance"] == "COMMON_PLATFORM"
        assert headers["x-type"] == "LIST"
        assert headers["x-list-type"] == "MAGISTRATES_PUBLIC_LIST"
        assert headers["x-court-id"] == "325"
        assert headers["x-language"] == "ENGLISH"
        assert headers["x-sensitivity"] == "PUBLIC"
        assert headers["x-display-from"] == "2026-01-05T09:00:00.000Z"
        assert headers["x-display-to"] == "2026-01-12T09:00:00.000Z"
        assert headers["Authorization"] == "Bearer secret"

    def test_court_id_defaults_to_zero(self):
        client = PublicationHubClient({"base_url": "http://hub.test/publication"})
        meta = PublicationMeta(court_list_type=CourtListType.STANDARD, content_date="2026-01-05")

        headers = client.build_headers(meta)

        assert headers["x-court-id"] == "0"
        assert headers["x-list-type"] == "MAGISTRATES_STANDARD_LIST"
        assert "Authorization" not in headers

    def test_posts_document_to_endpoint(self):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(201)

        client = PublicationHubClient(
            {"base_url": "http://hub.test/publication", "transport": httpx.MockTransport(handler)}
        )
        meta = PublicationMeta(court_list_type=CourtListType.STANDARD, content_date="2026-01-05")

        async def scenario():
            async with client:
                return await client.publish({"document": {}}, meta)

        assert asyncio.run(scenario()) == 201
        assert str(seen["request"].url) == "http://hub.test/publication"
        assert seen["request"].method == "POST"

    def test_server_error_raises(self):
        client = PublicationHubClient(
            {
                "base_url": "http://hub.test/publication",
                "transport": httpx.MockTransport(lambda request: httpx.Response(500)),
            }
        )
        meta = PublicationMeta(court_list_type=CourtListType.STANDARD, content_date="2026-01-05")

        async def scenario():
            async with client:
                await client.publish({}, meta)

        with pytest.raises(APIError):
            asyncio.run(scenario())


class TestDocumentGeneratorClient:
    def test_render_request(self):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, content=b"%PDF-1.7 fake")

        client = DocumentGeneratorClient(_config(handler))

        async def scenario():
            async with client:
                return await client.render("BenchAndStandardCourtList", {"listType": "STANDARD"})

        assert asyncio.run(scenario()) == b"%PDF-1.7 fake"
        request = seen["request"]
        assert request.headers["Content-Type"] == "application/vnd.systemdocgenerator.render+json"
        assert request.headers["CJSCPPUID"] == SYSTEM_USER_ID
        body = json.loads(request.content)
        assert body == {
            "templateName": "BenchAndStandardCourtList",
            "templatePayload": {"listType": "STANDARD"},
            "conversionFormat": "pdf",
        }

    def test_empty_body_raises(self):
        client = DocumentGeneratorClient(_config(lambda request: httpx.Response(200)))

        async def scenario():
            async with client:
                await client.render("BenchAndStandardCourtList", {})

        with pytest.raises(EmptyResponseError):
            asyncio.run(scenario())
