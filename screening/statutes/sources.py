"""Ordered statute source strategies.

Each strategy turns a normalized key into a candidate ``StatuteRecord`` or a
``StatuteFailure``. The resolver validates candidates and decides whether to
move on to the next strategy.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timezone
from urllib.parse import quote

from screening.citations.models import Jurisdiction
from screening.logging.logger import Log
from screening.statutes.browser import BrowserPool
from screening.statutes.debug_dump import StatuteDebugDump
from screening.statutes.exceptions import BrowserFetchError, StatuteFetchError
from screening.statutes.html_parser import (
    clean_browser_text,
    find_version_marker,
    first_line,
    html_to_text,
    parse_versioned_utah_html,
    versioned_url,
)
from screening.statutes.http_client import StatuteHttpClient
from screening.statutes.models import (
    FailureReason,
    StatuteFailure,
    StatuteRecord,
    StatuteResult,
    StatuteSource,
)

UTAH_CODE_BASE = "https://le.utah.gov/xcode"
WVC_CODE_BASE = "https://westvalleycity.municipal.codes/Code"
_UTAH_KEY = re.compile(r"^(\d{1,3}[a-z]?)-(\d{1,4}[a-z]?)-(.+)$", re.IGNORECASE)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_utah_url(normalized_key: str) -> str | None:
    match = _UTAH_KEY.match(normalized_key)
    if match is None:
        return None
    title = match.group(1).upper()
    chapter, section = match.group(2), match.group(3)
    return f"{UTAH_CODE_BASE}/Title{title}/Chapter{chapter}/{title}-{chapter}-S{section}.html"


def build_wvc_url(normalized_key: str) -> str:
    return f"{WVC_CODE_BASE}/{quote(normalized_key, safe='')}"


class StatuteSourceStrategy(ABC):
    name: str = "source"

    @abstractmethod
    def fetch(self, normalized_key: str) -> StatuteResult:
        """Produce a candidate record or a typed failure; never raises for fetch problems."""


class UtahVersionedPageSource(StatuteSourceStrategy):
    """Primary shell page -> embedded version id -> versioned page ``#secdiv``.

    The shell page only supplies the version id; its own markup is never
    treated as statute text.
    """

    name = "utah_versioned_page"

    def __init__(
        self,
        http: StatuteHttpClient,
        debug_dump: StatuteDebugDump | None = None,
        clock: Clock = _utc_now,
    ) -> None:
        self._http = http
        self._debug_dump = debug_dump
        self._clock = clock

    def fetch(self, normalized_key: str) -> StatuteResult:
        url = build_utah_url(normalized_key)
        if url is None:
            return _failure(
                Jurisdiction.UTAH, normalized_key, FailureReason.UNSUPPORTED,
                "Unsupported Utah citation format.",
            )
        try:
            shell_html = self._http.get_html(url)
        except StatuteFetchError as exc:
            return _failure(Jurisdiction.UTAH, normalized_key, exc.reason, str(exc), url)

        version = find_version_marker(shell_html)
        if version is None:
            return _failure(
                Jurisdiction.UTAH, normalized_key, FailureReason.PARSE_ERROR,
                "No current version marker on code page.", url,
            )
        content_url = versioned_url(url, version)
        Log.debug(f"Fetching versioned statute {content_url}")
        try:
            content_html = self._http.get_html(content_url)
        except StatuteFetchError as exc:
            return _failure(
                Jurisdiction.UTAH, normalized_key, FailureReason.PARSE_ERROR,
                f"Versioned page unavailable: {exc}", content_url,
            )

        parsed = parse_versioned_utah_html(content_html)
        if self._debug_dump is not None:
            self._debug_dump.save(normalized_key, content_html, parsed)
        if parsed is None:
            return _failure(
                Jurisdiction.UTAH, normalized_key, FailureReason.PARSE_ERROR,
                "Versioned page has no parsable statute content.", content_url,
            )
        return StatuteRecord(
            jurisdiction=Jurisdiction.UTAH,
            normalized_key=normalized_key,
            title=first_line(parsed),
            text=parsed,
            url=content_url,
            fetched_at=self._clock(),
            source=StatuteSource.UTAH_LEGISLATURE,
        )


class UtahBrowserSource(StatuteSourceStrategy):
    name = "utah_headless_browser"

    def __init__(
        self,
        browser: BrowserPool,
        debug_dump: StatuteDebugDump | None = None,
        clock: Clock = _utc_now,
    ) -> None:
        self._browser = browser
        self._debug_dump = debug_dump
        self._clock = clock

    def fetch(self, normalized_key: str) -> StatuteResult:
        url = build_utah_url(normalized_key)
        if url is None:
            return _failure(
                Jurisdiction.UTAH, normalized_key, FailureReason.UNSUPPORTED,
                "Unsupported Utah citation format.",
            )
        try:
            raw_text = self._browser.fetch_text(url, "#secdiv")
        except BrowserFetchError as exc:
            return _failure(
                Jurisdiction.UTAH, normalized_key, FailureReason.PARSE_ERROR, str(exc), url
            )
        text = clean_browser_text(raw_text)
        if self._debug_dump is not None:
            self._debug_dump.save(f"{normalized_key}_playwright", "N/A (headless browser)", text)
        if text is None:
            return _failure(
                Jurisdiction.UTAH, normalized_key, FailureReason.PARSE_ERROR,
                "Headless browser returned no text.", url,
            )
        return StatuteRecord(
            jurisdiction=Jurisdiction.UTAH,
            normalized_key=normalized_key,
            title=first_line(text),
            text=text,
            url=url,
            fetched_at=self._clock(),
            source=StatuteSource.UTAH_LEGISLATURE,
        )


class WestValleyCitySource(StatuteSourceStrategy):
    name = "wvc_municipal_codes"

    def __init__(self, http: StatuteHttpClient, clock: Clock = _utc_now) -> None:
        self._http = http
        self._clock = clock

    def fetch(self, normalized_key: str) -> StatuteResult:
        url = build_wvc_url(normalized_key)
        try:
            html = self._http.get_html(url)
        except StatuteFetchError as exc:
            return _failure(
                Jurisdiction.WEST_VALLEY_CITY, normalized_key, exc.reason, str(exc), url
            )
        text = html_to_text(html)
        if text is None:
            return _failure(
                Jurisdiction.WEST_VALLEY_CITY, normalized_key, FailureReason.PARSE_ERROR,
                "Failed to parse HTML.", url,
            )
        return StatuteRecord(
            jurisdiction=Jurisdiction.WEST_VALLEY_CITY,
            normalized_key=normalized_key,
            title=first_line(text),
            text=text,
            url=url,
            fetched_at=self._clock(),
            source=StatuteSource.WEST_VALLEY_CITY,
        )


def _failure(
    jurisdiction: Jurisdiction,
    normalized_key: str,
    reason: FailureReason,
    details: str,
    url: str | None = None,
) -> StatuteFailure:
    return StatuteFailure(
        jurisdiction=jurisdiction,
        normalized_key=normalized_key,
        reason=reason,
        details=details,
        url_tried=url,
    )
