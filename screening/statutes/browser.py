"""Pooled headless Chromium used when static page parsing fails."""

import queue
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from screening.logging.logger import Log
from screening.statutes.exceptions import BrowserFetchError
from screening.statutes.http_client import USER_AGENT

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]
VIEWPORT = {"width": 1280, "height": 720}

_BODY_TEXT_SCRIPT = """() => {
    document.querySelectorAll(
        'nav, header, footer, [role="navigation"], [role="banner"], [role="contentinfo"], '
        + '.breadcrumb, .menu, #skipNav, #header, #footer, #leftNav, #topNav'
    ).forEach(el => el.remove());
    const main = document.querySelector('#secdiv') || document.querySelector('#content')
        || document.querySelector('main') || document.body;
    return main.innerText || '';
}"""

_Request = tuple[str, str | None, "Future[str]"]


class BrowserPool:
    """One browser and one browsing context shared by every fetch.

    Playwright's sync objects are bound to the thread that created them, so a
    single owner thread runs all browser work and callers wait on futures.
    The browser is closed after ``idle_timeout_seconds`` without a request and
    relaunched on the next one.
    """

    def __init__(
        self,
        *,
        idle_timeout_seconds: float = 60,
        idle_check_seconds: float = 10,
        page_timeout_seconds: float = 15,
        playwright_factory: Callable[[], Any] = sync_playwright,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._idle_timeout = idle_timeout_seconds
        self._idle_check = idle_check_seconds
        self._page_timeout_ms = int(page_timeout_seconds * 1000)
        self._playwright_factory = playwright_factory
        self._clock = clock

        self._requests: queue.Queue[_Request | None] = queue.Queue()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._closed = False

        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None
        self._last_used = 0.0

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    def fetch_text(self, url: str, selector: str | None = "#secdiv") -> str:
        """Load ``url`` and return the text of ``selector`` (or the cleaned page body).

        Raises:
            BrowserFetchError: on navigation, timeout or browser failures.
        """
        future: Future[str] = Future()
        with self._lock:
            if self._closed:
                raise BrowserFetchError("Browser pool is closed")
            if self._thread is None:
                self._thread = threading.Thread(
                    target=self._serve, name="statute-browser", daemon=True
                )
                self._thread.start()
            self._requests.put((url, selector, future))
        return future.result()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            thread = self._thread
            if thread is not None:
                self._requests.put(None)
        if thread is not None:
            thread.join(timeout=self._page_timeout_ms / 1000 + 5)
        else:
            self._shutdown_browser()

    def _serve(self) -> None:
        while True:
            try:
                request = self._requests.get(timeout=self._idle_check)
            except queue.Empty:
                self.close_if_idle()
                with self._lock:
                    if self._browser is None and self._requests.empty():
                        self._thread = None
                        return
                continue
            if request is None:
                self._shutdown_browser()
                return
            url, selector, future = request
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(self._fetch(url, selector))
            except Exception as exc:  # handed to the waiting caller
                future.set_exception(exc)

    def close_if_idle(self) -> bool:
        if self._browser is None:
            return False
        if self._clock() - self._last_used <= self._idle_timeout:
            return False
        Log.info("Closing idle headless browser")
        self._shutdown_browser()
        return True

    def _fetch(self, url: str, selector: str | None) -> str:
        started = self._clock()
        page = None
        try:
            context = self._ensure_context()
            page = context.new_page()
            page.goto(url, wait_until="networkidle", timeout=self._page_timeout_ms)
            text = ""
            if selector:
                element = page.query_selector(selector)
                if element is not None:
                    text = element.inner_text() or ""
            if not text:
                text = page.evaluate(_BODY_TEXT_SCRIPT) or ""
            Log.info(
                f"Headless fetch extracted {len(text)} chars",
                url=url,
                ms=int((self._clock() - started) * 1000),
            )
            return str(text)
        except PlaywrightError as exc:
            raise BrowserFetchError(f"Headless fetch failed for {url}: {exc}") from exc
        finally:
            if page is not None:
                try:
                    page.close()
                except PlaywrightError as exc:
                    Log.debug(f"Failed to close browser page: {exc}")
            self._last_used = self._clock()

    def _ensure_context(self) -> Any:
        if self._browser is not None and self._browser.is_connected():
            return self._context
        self._shutdown_browser()
        Log.info("Launching headless browser")
        self._playwright = self._playwright_factory().start()
        self._browser = self._playwright.chromium.launch(headless=True, args=LAUNCH_ARGS)
        self._context = self._browser.new_context(user_agent=USER_AGENT, viewport=VIEWPORT)
        self._context.set_default_timeout(self._page_timeout_ms)
        return self._context

    def _shutdown_browser(self) -> None:
        for name in ("_context", "_browser"):
            resource = getattr(self, name)
            if resource is not None:
                try:
                    resource.close()
                except PlaywrightError as exc:
                    Log.debug(f"Failed to close {name.strip('_')}: {exc}")
                setattr(self, name, None)
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except PlaywrightError as exc:
                Log.debug(f"Failed to stop playwright: {exc}")
            self._playwright = None
