"""
tests/test_supabase_gateway.py — Bet Tracker
=============================================
Unit tests for core/supabase_gateway.py.

These tests do NOT make real network calls — the requests session is mocked.
Run: pytest tests/test_supabase_gateway.py -v
"""

import os
import sys
from unittest.mock import MagicMock, patch

import pytest
import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.supabase_gateway import (
    PLACEHOLDER_KEY,
    PLACEHOLDER_URL,
    REQUEST_TIMEOUT,
    GatewayError,
    SupabaseGateway,
    _id_filter,
    get_credentials,
    is_configured,
)


def _response(status=200, body=None, content=b"x"):
    resp = MagicMock()
    resp.status_code = status
    resp.content = content
    resp.json.return_value = body
    resp.text = ""
    return resp


def _gateway(response):
    session = MagicMock()
    session.request.return_value = response
    gw = SupabaseGateway(url="https://proj.supabase.co/", api_key="anon", session=session)
    return gw, session


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

class TestCredentials:
    def test_env_vars(self):
        env = {"SUPABASE_URL": "https://abc.supabase.co", "SUPABASE_ANON_KEY": "k"}
        with patch.dict(os.environ, env):
            assert get_credentials() == ("https://abc.supabase.co", "k")

    def test_missing_falls_back_to_placeholder(self):
        env = {k: v for k, v in os.environ.items()
               if k not in ("SUPABASE_URL", "SUPABASE_ANON_KEY")}
        with patch.dict(os.environ, env, clear=True), \
                patch("core.supabase_gateway._from_secrets", return_value=None):
            url, key = get_credentials()
        assert url == PLACEHOLDER_URL
        assert key == PLACEHOLDER_KEY

    def test_is_configured(self):
        assert is_configured("https://abc.supabase.co", "k")
        assert not is_configured(PLACEHOLDER_URL, "k")
        assert not is_configured("https://abc.supabase.co", PLACEHOLDER_KEY)

    def test_gateway_strips_trailing_slash(self):
        gw, _ = _gateway(_response(body=[]))
        assert gw.url == "https://proj.supabase.co"
        assert gw.configured


class TestIdFilter:
    def test_single(self):
        assert _id_filter([5]) == "eq.5"

    def test_many(self):
        assert _id_filter([1, 2, 3]) == "in.(1,2,3)"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class TestSelectAll:
    def test_ascending_order_and_table(self):
        gw, session = _gateway(_response(body=[{"id": 1}]))
        rows = gw.select_all("bet", ascending=True)
        assert rows == [{"id": 1}]
        method, url = session.request.call_args[0]
        kwargs = session.request.call_args[1]
        assert method == "GET"
        assert url == "https://proj.supabase.co/rest/v1/bets"
        assert kwargs["params"]["order"] == "created_at.asc"
        assert kwargs["timeout"] == REQUEST_TIMEOUT

    def test_descending_for_trades(self):
        gw, session = _gateway(_response(body=[]))
        gw.select_all("trade", ascending=False)
        url = session.request.call_args[0][1]
        assert url.endswith("/rest/v1/stocks")
        assert session.request.call_args[1]["params"]["order"] == "created_at.desc"

    def test_auth_headers(self):
        gw, session = _gateway(_response(body=[]))
        gw.select_all("bet")
        headers = session.request.call_args[1]["headers"]
        assert headers["apikey"] == "anon"
        assert headers["Authorization"] == "Bearer anon"

    def test_non_list_body_returns_empty(self):
        gw, _ = _gateway(_response(body={"unexpected": True}))
        assert gw.select_all("bet") == []


class TestInsert:
    def test_returns_stored_row(self):
        gw, session = _gateway(_response(status=201, body=[{"id": 9, "stake": 10}]))
        stored = gw.insert("bet", {"stake": 10})
        assert stored["id"] == 9
        kwargs = session.request.call_args[1]
        assert kwargs["json"] == [{"stake": 10}]
        assert kwargs["headers"]["Prefer"] == "return=representation"


class TestUpdate:
    def test_batch_update_uses_in_filter(self):
        gw, session = _gateway(_response(body=[{"id": 1}, {"id": 2}]))
        rows = gw.update("bet", {"result": "won"}, [1, 2])
        assert len(rows) == 2
        assert session.request.call_args[0][0] == "PATCH"
        assert session.request.call_args[1]["params"] == {"id": "in.(1,2)"}
        assert session.request.call_args[1]["json"] == {"result": "won"}

    def test_empty_ids_skips_request(self):
        gw, session = _gateway(_response(body=[]))
        assert gw.update("bet", {"result": "won"}, []) == []
        session.request.assert_not_called()


class TestDelete:
    def test_single_delete(self):
        gw, session = _gateway(_response(status=204, content=b""))
        gw.delete("trade", [4])
        assert session.request.call_args[0][0] == "DELETE"
        assert session.request.call_args[1]["params"] == {"id": "eq.4"}

    def test_empty_ids_skips_request(self):
        gw, session = _gateway(_response(status=204, content=b""))
        gw.delete("trade", [])
        session.request.assert_not_called()


class TestErrors:
    def test_http_error_raises(self):
        gw, _ = _gateway(_response(status=401, body={"message": "Invalid API key"}))
        with pytest.raises(GatewayError) as excinfo:
            gw.select_all("bet")
        assert excinfo.value.status_code == 401
        assert "Invalid API key" in str(excinfo.value)

    def test_network_error_raises(self):
        session = MagicMock()
        session.request.side_effect = requests.exceptions.ConnectionError("down")
        gw = SupabaseGateway(url="https://proj.supabase.co", api_key="anon", session=session)
        with pytest.raises(GatewayError):
            gw.select_all("bet")

    def test_invalid_json_raises(self):
        resp = _response(body=None)
        resp.json.side_effect = ValueError("bad json")
        gw, _ = _gateway(resp)
        with pytest.raises(GatewayError):
            gw.select_all("bet")

    def test_unknown_kind_raises(self):
        gw, session = _gateway(_response(body=[]))
        with pytest.raises(GatewayError):
            gw.select_all("parlay")
        session.request.assert_not_called()
