"""Unit tests for ApiClient status and error mapping."""

from unittest.mock import MagicMock

import pytest
import requests

from reading_assistant.core import AuthExpiredError, TransportError
from reading_assistant.io import ApiClient


def make_response(status_code=200, body=None, invalid_json=False):
    response = MagicMock()
    response.status_code = status_code
    if invalid_json:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def client(mock_session):
    return ApiClient("http://127.0.0.1:8000/api/", timeout=5, session=mock_session)


class TestRequests:
    def test_url_joining(self, client):
        assert client.url_for("/login/") == "http://127.0.0.1:8000/api/login/"
        assert client.url_for("profile/") == "http://127.0.0.1:8000/api/profile/"

    def test_json_content_type(self, mock_session, client):
        assert mock_session.headers["Content-Type"] == "application/json"

    def test_post_sends_json_with_timeout(self, client, mock_session):
        mock_session.request.return_value = make_response(body={"success": True})

        body = client.post("/save_passage/", {"keywords_with_explanations": []})

        assert body == {"success": True}
        mock_session.request.assert_called_once_with(
            "POST",
            "http://127.0.0.1:8000/api/save_passage/",
            json={"keywords_with_explanations": []},
            timeout=5,
        )

    def test_empty_base_url_rejected(self):
        with pytest.raises(ValueError):
            ApiClient("")


class TestErrorMapping:
    def test_401_raises_auth_expired(self, client, mock_session):
        mock_session.request.return_value = make_response(401, {"detail": "Not authenticated"})

        with pytest.raises(AuthExpiredError):
            client.get("/get_all_saved_passages/")

    def test_401_on_login_returns_error_body(self, client, mock_session):
        mock_session.request.return_value = make_response(401, {"success": False, "message": "Invalid credentials"})

        body = client.post("/login/", {}, auth_required=False, accept_error_body=True)

        assert body["message"] == "Invalid credentials"

    def test_server_error_raises_transport_error(self, client, mock_session):
        mock_session.request.return_value = make_response(500, {"detail": "boom"})

        with pytest.raises(TransportError) as exc_info:
            client.post("/get_keywords/", {"passage": "x"})

        assert exc_info.value.status_code == 500

    def test_error_status_without_json_body(self, client, mock_session):
        mock_session.request.return_value = make_response(502, invalid_json=True)

        with pytest.raises(TransportError):
            client.post("/login/", {}, auth_required=False, accept_error_body=True)

    def test_timeout(self, client, mock_session):
        mock_session.request.side_effect = requests.Timeout()

        with pytest.raises(TransportError, match="timed out"):
            client.get("/profile/")

    def test_connection_error(self, client, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError, match="Could not reach the server"):
            client.get("/profile/")

    def test_invalid_json_on_success(self, client, mock_session):
        mock_session.request.return_value = make_response(200, invalid_json=True)

        with pytest.raises(TransportError, match="Invalid JSON"):
            client.get("/profile/")

    def test_non_object_body(self, client, mock_session):
        mock_session.request.return_value = make_response(200, [1, 2, 3])

        with pytest.raises(TransportError, match="Unexpected response shape"):
            client.get("/profile/")


class TestDetach:
    def test_detached_client_keeps_old_session(self, mock_session):
        fresh_session = MagicMock()
        fresh_session.headers = {}
        client = ApiClient("http://127.0.0.1:8000/api", session=mock_session, session_factory=lambda: fresh_session)
        mock_session.request.return_value = make_response(200, {"success": True})
        fresh_session.request.return_value = make_response(200, {"success": True, "user": {}})

        detached = client.detach()
        detached.post("/logout/", auth_required=False)
        client.post("/login/", {"username": "ada"}, auth_required=False)

        assert mock_session.request.call_args[0][1].endswith("/logout/")
        assert fresh_session.request.call_args[0][1].endswith("/login/")
        assert fresh_session.headers["Content-Type"] == "application/json"
        mock_session.cookies.clear.assert_not_called()

    def test_close_closes_session(self, client, mock_session):
        client.close()

        mock_session.close.assert_called_once()
