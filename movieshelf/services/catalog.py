"""Client for the external movie catalog (OMDb search API).

One call to :meth:`CatalogClient.search` issues one GET request. The
provider's JSON is first mapped to one of three variants
(:class:`CatalogSuccess`, :class:`CatalogNoResults`, :class:`CatalogFailure`)
so nothing downstream inspects optional response fields, then to a
:class:`CatalogPage`. Transport failures are classified into the upstream
kinds of :mod:`movieshelf.services.errors`. No retries happen here.
"""

from __future__ import annotations

import errno
import json
import logging
import socket
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from movieshelf.constants import NO_POSTER, OMDB_AUTH_MARKERS, OMDB_NOT_FOUND_MARKERS, OMDB_RESPONSE_FALSE, SERVICE_NAME, SERVICE_VERSION
from movieshelf.enums import CatalogOutcome
from movieshelf.services.errors import (
    UpstreamAuthFailureError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from movieshelf.services.pagination import parse_total_results
from movieshelf.services.validation import validate_page, validate_query

logger = logging.getLogger(__name__)

_UNREACHABLE_ERRNOS = {errno.ECONNREFUSED, errno.ENETUNREACH, errno.EHOSTUNREACH, errno.ECONNRESET, errno.ETIMEDOUT}


@dataclass(frozen=True)
class CatalogItem:
    title: str
    external_id: str
    year: str
    poster_url: str


@dataclass(frozen=True)
class CatalogSuccess:
    items: list[CatalogItem]
    total_text: str
    outcome: CatalogOutcome = CatalogOutcome.success


@dataclass(frozen=True)
class CatalogNoResults:
    outcome: CatalogOutcome = CatalogOutcome.no_results


@dataclass(frozen=True)
class CatalogFailure:
    message: str
    outcome: CatalogOutcome = CatalogOutcome.failure


CatalogResponse = CatalogSuccess | CatalogNoResults | CatalogFailure


@dataclass(frozen=True)
class CatalogPage:
    items: list[CatalogItem] = field(default_factory=list)
    total_results: int = 0


def _parse_item(raw: Any) -> CatalogItem | None:
    if not isinstance(raw, dict):
        return None
    title = str(raw.get("Title") or "").strip()
    external_id = str(raw.get("imdbID") or "").strip()
    if not title or not external_id:
        return None
    return CatalogItem(
        title=title,
        external_id=external_id,
        year=str(raw.get("Year") or "").strip(),
        poster_url=str(raw.get("Poster") or NO_POSTER).strip() or NO_POSTER,
    )


def parse_catalog_payload(payload: Any) -> CatalogResponse:
    if not isinstance(payload, dict):
        raise UpstreamError("Catalog provider returned an unexpected payload")

    if str(payload.get("Response", "")).strip() == OMDB_RESPONSE_FALSE:
        message = str(payload.get("Error") or "").strip()
        if not message or any(marker in message.lower() for marker in OMDB_NOT_FOUND_MARKERS):
            return CatalogNoResults()
        return CatalogFailure(message=message)

    raw_items = payload.get("Search")
    if not isinstance(raw_items, list):
        raw_items = []
    items: list[CatalogItem] = []
    for raw in raw_items:
        item = _parse_item(raw)
        if item is None:
            logger.warning("Skipped malformed catalog item: %r", raw)
            continue
        items.append(item)
    total_text = str(payload.get("totalResults") if payload.get("totalResults") is not None else "0")
    return CatalogSuccess(items=items, total_text=total_text)


def _is_timeout(reason: object) -> bool:
    return isinstance(reason, (TimeoutError, socket.timeout))


def _is_unreachable(reason: object) -> bool:
    if isinstance(reason, OSError) and getattr(reason, "errno", None) in _UNREACHABLE_ERRNOS:
        return True
    return isinstance(reason, ConnectionError)


class CatalogClient:
    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://www.omdbapi.com/",
        timeout: float = 10,
        opener: Callable[..., Any] = urlopen,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._opener = opener

    @property
    def timeout(self) -> float:
        return self._timeout

    def build_url(self, query: str, page: int) -> str:
        params = urlencode({"apikey": self._api_key, "s": query, "page": str(page)}, quote_via=quote)
        separator = "&" if "?" in self._base_url else "?"
        return f"{self._base_url}{separator}{params}"

    def search(self, query: str, page: int = 1) -> CatalogPage:
        term = validate_query(query)
        validate_page(page)

        response = self.fetch(term, page)
        logger.debug("Catalog outcome for %r page %s: %s", term, page, response.outcome.value)
        if isinstance(response, CatalogNoResults):
            return CatalogPage()
        if isinstance(response, CatalogFailure):
            if any(marker in response.message.lower() for marker in OMDB_AUTH_MARKERS):
                logger.warning("Catalog provider rejected the API key: %s", response.message)
                raise UpstreamAuthFailureError(f"Invalid OMDb API key: {response.message}")
            logger.warning("Catalog provider reported failure for %r page %s: %s", term, page, response.message)
            return CatalogPage()
        return CatalogPage(
            items=list(response.items),
            total_results=parse_total_results(response.total_text),
        )

    def fetch(self, term: str, page: int) -> CatalogResponse:
        request = Request(
            self.build_url(term, page),
            headers={"User-Agent": f"{SERVICE_NAME}/{SERVICE_VERSION}", "Accept": "application/json"},
        )
        logger.debug("Catalog search q=%r page=%s timeout=%ss", term, page, self._timeout)
        try:
            with self._opener(request, timeout=self._timeout) as response:  # noqa: S310
                raw = response.read()
        except HTTPError as exc:
            raise self._classify_http_error(exc) from exc
        except URLError as exc:
            raise self._classify_transport_error(exc.reason, exc) from exc
        except (TimeoutError, OSError) as exc:
            raise self._classify_transport_error(exc, exc) from exc

        try:
            payload = json.loads(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise UpstreamError("Catalog provider returned invalid JSON", cause=exc) from exc
        return parse_catalog_payload(payload)

    def _classify_http_error(self, exc: HTTPError) -> Exception:
        status = exc.code
        if status == 401:
            logger.warning("Catalog provider rejected the API key")
            return UpstreamAuthFailureError("Invalid OMDb API key", cause=exc)
        logger.warning("Catalog provider returned HTTP %s", status)
        return UpstreamError(f"OMDb API error: {status} {exc.reason}", status=status, cause=exc)

    def _classify_transport_error(self, reason: object, exc: BaseException) -> Exception:
        if _is_timeout(reason):
            logger.warning("Catalog request timed out after %ss", self._timeout)
            return UpstreamTimeoutError("Request timeout: OMDb API did not respond in time", cause=exc)
        if isinstance(reason, socket.gaierror):
            logger.warning("Catalog DNS lookup failed: %s", reason)
            return UpstreamUnavailableError(
                "Unable to connect to OMDb API: DNS lookup failed. Please check your internet connection.",
                cause=exc,
            )
        if _is_unreachable(reason):
            logger.warning("Catalog provider unreachable: %s", reason)
            return UpstreamUnavailableError(
                "Unable to connect to OMDb API: Network error. Please check your internet connection.",
                cause=exc,
            )
        logger.warning("Catalog transport failure: %s", reason)
        return UpstreamUnavailableError(f"Unable to connect to OMDb API: {reason}", cause=exc)
