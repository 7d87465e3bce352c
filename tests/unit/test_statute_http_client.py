import httpx
import pytest

from screening.statutes.exceptions import StatuteFetchError
from screening.statutes.http_client import StatuteHttpClient
from screening.statutes.models import FailureReason

URL = "https://le.utah.gov/xcode/Title58/Chapter37/58-37-S8.html"


def _client(handler) -> StatuteHttpClient:  # type: ignore[no-untyped-def]
    return StatuteHttpClient(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestStatuteHttpClient:
    def test_returns_body(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<html>ok</html>"))
        assert client.get_html(URL) == "<html>ok</html>"

    @pytest.mark.parametrize(
        ("status", "reason"),
        [
            (404, FailureReason.NOT_FOUND),
            (429, FailureReason.RATE_LIMITED),
            (503, FailureReason.NETWORK_ERROR),
        ],
    )
    def test_maps_error_statuses(self, status: int, reason: FailureReason) -> None:
        client = _client(lambda request: httpx.Response(status))
        with pytest.raises(StatuteFetchError) as exc_info:
            client.get_html(URL)
        assert exc_info.value.reason is reason
        assert exc_info.value.url == URL

    def test_transport_failure_is_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused")

        with pytest.raises(StatuteFetchError) as exc_info:
            _client(handler).get_html(URL)
        assert exc_info.value.reason is FailureReason.NETWORK_ERROR
