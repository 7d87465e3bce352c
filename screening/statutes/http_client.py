import httpx

from screening.statutes.exceptions import StatuteFetchError
from screening.statutes.models import FailureReason

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class StatuteHttpClient:
    """Fetches legal-code pages and maps HTTP outcomes onto failure reasons."""

    def __init__(
        self,
        *,
        timeout_seconds: int = 20,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client if client is not None else httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )

    def get_html(self, url: str) -> str:
        """Return the page body.

        Raises:
            StatuteFetchError: with NOT_FOUND for 404, RATE_LIMITED for 429 and
                NETWORK_ERROR for other error statuses or transport failures.
        """
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise StatuteFetchError(
                FailureReason.NETWORK_ERROR, f"Request failed: {exc}", url
            ) from exc

        if response.status_code == 404:
            raise StatuteFetchError(FailureReason.NOT_FOUND, "Section not found.", url)
        if response.status_code == 429:
            raise StatuteFetchError(FailureReason.RATE_LIMITED, "Rate limited.", url)
        if response.is_error:
            raise StatuteFetchError(
                FailureReason.NETWORK_ERROR, f"HTTP {response.status_code}", url
            )
        return response.text

    def close(self) -> None:
        self._client.close()
