import errno
import io
import socket
from urllib.error import HTTPError, URLError

import pytest

from movieshelf.services.catalog import (
    CatalogClient,
    CatalogFailure,
    CatalogNoResults,
    CatalogSuccess,
    parse_catalog_payload,
)
from movieshelf.services.errors import (
    InvalidArgumentError,
    UpstreamAuthFailureError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from tests.helpers import FakeOpener, omdb_movie, omdb_not_found, omdb_payload


def _client(opener: FakeOpener) -> CatalogClient:
    return CatalogClient(api_key="secret", base_url="https://omdb.test/", timeout=10, opener=opener)


def _http_error(code: int, reason: str) -> HTTPError:
    return HTTPError("https://omdb.test/", code, reason, hdrs=None, fp=io.BytesIO(b"{}"))


def test_search_normalizes_provider_results():
    opener = FakeOpener(
        omdb_payload(
            omdb_movie("tt0133093", "The Matrix", "1999", "https://img.test/matrix.jpg"),
            omdb_movie("tt0234215", "The Matrix Reloaded", "2003"),
            total="23",
        )
    )
    page = _client(opener).search("matrix", 1)

    assert page.total_results == 23
    assert [item.external_id for item in page.items] == ["tt0133093", "tt0234215"]
    assert page.items[0].title == "The Matrix"
    assert page.items[0].year == "1999"
    assert page.items[1].poster_url == "N/A"


def test_search_percent_encodes_trimmed_query_and_sends_page_and_timeout():
    opener = FakeOpener(omdb_payload())
    _client(opener).search("  star wars & co ", 3)

    url, timeout = opener.calls[-1]
    assert "s=star%20wars%20%26%20co" in url
    assert opener.last_params["page"] == ["3"]
    assert opener.last_params["apikey"] == ["secret"]
    assert timeout == 10


def test_search_keeps_year_ranges_as_text():
    opener = FakeOpener(omdb_payload(omdb_movie("tt0903747", "Breaking Bad", "2008-2013")))
    page = _client(opener).search("breaking", 1)
    assert page.items[0].year == "2008-2013"


def test_no_results_sentinel_yields_empty_page():
    opener = FakeOpener(omdb_not_found())
    page = _client(opener).search("zzzzzzzz", 1)
    assert page.items == []
    assert page.total_results == 0


def test_other_provider_failures_yield_empty_page():
    opener = FakeOpener(omdb_not_found("Too many results."))
    page = _client(opener).search("a", 1)
    assert page.items == []
    assert page.total_results == 0


def test_invalid_api_key_sentinel_is_auth_failure():
    opener = FakeOpener(omdb_not_found("Invalid API key!"))
    with pytest.raises(UpstreamAuthFailureError):
        _client(opener).search("matrix", 1)


def test_http_401_is_auth_failure():
    opener = FakeOpener(error=_http_error(401, "Unauthorized"))
    with pytest.raises(UpstreamAuthFailureError):
        _client(opener).search("matrix", 1)
    assert len(opener.calls) == 1


def test_other_http_status_is_upstream_error_with_status():
    opener = FakeOpener(error=_http_error(503, "Service Unavailable"))
    with pytest.raises(UpstreamError) as excinfo:
        _client(opener).search("matrix", 1)
    assert excinfo.value.status == 503
    assert "503" in excinfo.value.message


@pytest.mark.parametrize("error", [URLError(socket.timeout("timed out")), TimeoutError("timed out")])
def test_timeouts_are_classified(error):
    with pytest.raises(UpstreamTimeoutError):
        _client(FakeOpener(error=error)).search("matrix", 1)


def test_dns_failure_is_unavailable():
    error = URLError(socket.gaierror(socket.EAI_NONAME, "Name or service not known"))
    with pytest.raises(UpstreamUnavailableError) as excinfo:
        _client(FakeOpener(error=error)).search("matrix", 1)
    assert "DNS" in excinfo.value.message


@pytest.mark.parametrize(
    "reason",
    [
        ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused"),
        OSError(errno.ENETUNREACH, "Network is unreachable"),
    ],
)
def test_connection_failures_are_unavailable(reason):
    with pytest.raises(UpstreamUnavailableError):
        _client(FakeOpener(error=URLError(reason))).search("matrix", 1)


def test_invalid_json_is_upstream_error():
    with pytest.raises(UpstreamError):
        _client(FakeOpener(body=b"<html>gateway</html>")).search("matrix", 1)


@pytest.mark.parametrize("query, page", [("", 1), ("   ", 1), ("matrix", 0), ("matrix", -2)])
def test_invalid_arguments_do_not_reach_the_network(query, page):
    opener = FakeOpener(omdb_payload())
    with pytest.raises(InvalidArgumentError):
        _client(opener).search(query, page)
    assert opener.calls == []


def test_non_numeric_total_is_treated_as_zero():
    opener = FakeOpener(omdb_payload(omdb_movie("tt0133093"), total="N/A"))
    page = _client(opener).search("matrix", 1)
    assert page.total_results == 0
    assert len(page.items) == 1


def test_parse_payload_variants():
    assert isinstance(parse_catalog_payload(omdb_payload(omdb_movie("tt0133093"))), CatalogSuccess)
    assert isinstance(parse_catalog_payload({"Response": "False"}), CatalogNoResults)
    assert isinstance(parse_catalog_payload(omdb_not_found()), CatalogNoResults)
    failure = parse_catalog_payload(omdb_not_found("Something went wrong."))
    assert isinstance(failure, CatalogFailure)
    assert failure.message == "Something went wrong."
    with pytest.raises(UpstreamError):
        parse_catalog_payload(["not", "an", "object"])


def test_parse_payload_skips_malformed_items():
    payload = omdb_payload(omdb_movie("tt0133093"), {"Title": "No id"}, "junk", total="3")
    response = parse_catalog_payload(payload)
    assert isinstance(response, CatalogSuccess)
    assert [item.external_id for item in response.items] == ["tt0133093"]
    assert response.total_text == "3"
