"""Tests for the storefront API client: auth header, decoding and error mapping."""

import pytest
import requests

from shopfront.config import APISettings
from shopfront.services.api_client import ApiClient
from shopfront.shared.errors import ApiError, ErrorCode


class TestRequest:
    def test_get_builds_url_and_params(self, client, session, response_factory):
        session.request.return_value = response_factory(200, {"products": []})

        body = client.get("/products", params={"page": "1"})

        assert body == {"products": []}
        args, kwargs = session.request.call_args
        assert args == ("GET", "http://api.test/api/products")
        assert kwargs["params"] == {"page": "1"}
        assert kwargs["timeout"] == 5
        assert kwargs["verify"] is True

    def test_no_auth_header_without_token(self, client, session):
        client.get("/products")

        assert session.request.call_args.kwargs["headers"] == {}

    def test_bearer_token_from_store(self, client, session, store):
        store.set_item("token", "abc123")

        client.get("/cart")

        headers = session.request.call_args.kwargs["headers"]
        assert headers == {"Authorization": "Bearer abc123"}

    def test_post_json(self, client, session):
        client.post("/auth/login", json={"email": "a@b.c"})

        kwargs = session.request.call_args.kwargs
        assert kwargs["json"] == {"email": "a@b.c"}
        assert kwargs["files"] is None

    def test_multipart_ignores_json(self, client, session):
        parts = [("name", (None, "Tee"))]

        client.put("/products/p1", json={"ignored": True}, files=parts)

        kwargs = session.request.call_args.kwargs
        assert kwargs["files"] == parts
        assert kwargs["json"] is None

    def test_empty_body_decodes_to_none(self, client, session, response_factory):
        session.request.return_value = response_factory(204)
        assert client.delete("/cart") is None

    def test_trailing_slash_stripped(self, store, session):
        api = ApiClient(store, base_url="http://api.test/api/", session=session)
        api.get("/products")
        assert session.request.call_args.args[1] == "http://api.test/api/products"

    def test_from_settings(self, store):
        settings = APISettings(base_url="https://shop.example/api", timeout=3, verify_ssl=False)

        api = ApiClient.from_settings(settings, store)

        assert api.base_url == "https://shop.example/api"
        assert api.timeout == 3
        assert api.verify_ssl is False


class TestErrorMapping:
    @pytest.mark.parametrize(
        ("status", "code"),
        [
            (400, ErrorCode.API_REQUEST_FAILED),
            (401, ErrorCode.API_AUTHENTICATION_FAILED),
            (403, ErrorCode.API_FORBIDDEN),
            (404, ErrorCode.NOT_FOUND),
            (422, ErrorCode.API_REQUEST_FAILED),
            (500, ErrorCode.API_SERVER_ERROR),
            (503, ErrorCode.API_SERVER_ERROR),
        ],
    )
    def test_status_codes(self, client, session, response_factory, status, code):
        session.request.return_value = response_factory(status, {})

        with pytest.raises(ApiError) as exc_info:
            client.get("/products")

        assert exc_info.value.code == code
        assert exc_info.value.status_code == status

    def test_server_message_is_kept(self, client, session, response_factory):
        session.request.return_value = response_factory(400, {"message": "Size is required"})

        with pytest.raises(ApiError) as exc_info:
            client.post("/cart", json={})

        assert exc_info.value.server_message == "Size is required"
        assert exc_info.value.context.endpoint == "/cart"

    def test_non_json_error_body(self, client, session, response_factory):
        session.request.return_value = response_factory(502, raw=b"<html>Bad gateway</html>")

        with pytest.raises(ApiError) as exc_info:
            client.get("/products")

        assert exc_info.value.server_message is None

    def test_timeout(self, client, session):
        session.request.side_effect = requests.Timeout("slow")

        with pytest.raises(ApiError) as exc_info:
            client.get("/products")

        assert exc_info.value.code == ErrorCode.API_TIMEOUT
        assert exc_info.value.status_code == 0
        assert isinstance(exc_info.value.original_error, requests.Timeout)

    def test_connection_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ApiError) as exc_info:
            client.get("/products")

        assert exc_info.value.code == ErrorCode.NETWORK_ERROR

    def test_other_request_exception(self, client, session):
        session.request.side_effect = requests.TooManyRedirects("loop")

        with pytest.raises(ApiError) as exc_info:
            client.get("/products")

        assert exc_info.value.code == ErrorCode.API_REQUEST_FAILED

    def test_invalid_json_success_body(self, client, session, response_factory):
        session.request.return_value = response_factory(200, raw=b"not json")

        with pytest.raises(ApiError) as exc_info:
            client.get("/products")

        assert exc_info.value.code == ErrorCode.API_INVALID_RESPONSE

    def test_not_retried(self, client, session, response_factory):
        session.request.return_value = response_factory(500, {})

        with pytest.raises(ApiError):
            client.get("/products")

        assert session.request.call_count == 1
