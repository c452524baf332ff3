"""
core/supabase_gateway.py — Bet Tracker
=======================================
All remote-database calls live here. No math, no UI.

The store is a managed Postgres behind a PostgREST endpoint:
    {SUPABASE_URL}/rest/v1/{table}

Responsibilities:
- Load connection parameters (URL + anonymous key) from environment
- Full-table select ordered by created_at
- Single-row insert
- Update by id (one id or a batch in one statement)
- Delete by id (one id or a batch in one statement)

Failure policy: every transport error, non-2xx status or bad JSON body is
raised as GatewayError. No retries — callers surface the error and offer a
manual retry.

DO NOT add analytics math or Streamlit rendering to this file.
NEVER hardcode keys. Use SUPABASE_URL / SUPABASE_ANON_KEY.
"""

import logging
import os
from typing import Iterable, Optional

import requests

from core.records import TABLES

logger = logging.getLogger(__name__)

# Non-functional fallback — lets the app boot and show an error state.
PLACEHOLDER_URL = "https://placeholder.supabase.co"
PLACEHOLDER_KEY = "placeholder-key"

REQUEST_TIMEOUT = 15
REST_PATH = "/rest/v1"


class GatewayError(Exception):
    """Any failure talking to the remote store."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

def _from_secrets(name: str) -> Optional[str]:
    try:
        import streamlit as st
        if hasattr(st, "secrets") and name in st.secrets:
            return st.secrets[name]
    except (ImportError, Exception):
        pass
    return None


def get_credentials() -> tuple[str, str]:
    """
    Load the database URL and anonymous key.

    Checks:
    1. SUPABASE_URL / SUPABASE_ANON_KEY env vars
    2. Streamlit secrets (for Streamlit Cloud deployments)
    3. Placeholder values (every call will fail)

    Returns:
        (url, anon_key)
    """
    url = os.environ.get("SUPABASE_URL") or _from_secrets("SUPABASE_URL")
    key = os.environ.get("SUPABASE_ANON_KEY") or _from_secrets("SUPABASE_ANON_KEY")

    if not url or not key:
        logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY not set — using placeholder")
        return url or PLACEHOLDER_URL, key or PLACEHOLDER_KEY
    return url, key


def is_configured(url: str, key: str) -> bool:
    return url != PLACEHOLDER_URL and key != PLACEHOLDER_KEY


def _id_filter(ids: Iterable[int]) -> str:
    id_list = [int(i) for i in ids]
    if len(id_list) == 1:
        return f"eq.{id_list[0]}"
    return "in.(" + ",".join(str(i) for i in id_list) + ")"


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------

class SupabaseGateway:
    """
    Thin table client keyed by record kind ("bet" / "trade").

    Args:
        url:     Project URL. Defaults to get_credentials().
        api_key: Anonymous API key. Defaults to get_credentials().
        session: Optional requests.Session for test injection.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if url is None or api_key is None:
            env_url, env_key = get_credentials()
            url = url or env_url
            api_key = api_key or env_key
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return is_configured(self.url, self.api_key)

    def _endpoint(self, kind: str) -> str:
        try:
            table = TABLES[kind]
        except KeyError:
            raise GatewayError(f"Unknown record kind: {kind}") from None
        return f"{self.url}{REST_PATH}/{table}"

    def _headers(self, prefer: Optional[str] = None) -> dict:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(
        self,
        method: str,
        kind: str,
        params: Optional[dict] = None,
        payload=None,
        prefer: Optional[str] = None,
    ):
        url = self._endpoint(kind)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self._headers(prefer),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.exceptions.RequestException as exc:
            logger.error("%s %s failed: %s", method, TABLES[kind], exc)
            raise GatewayError(f"Network error: {exc}") from exc

        if response.status_code >= 400:
            detail = ""
            try:
                body = response.json()
                detail = body.get("message", "") if isinstance(body, dict) else ""
            except ValueError:
                detail = response.text[:200] if response.text else ""
            logger.error(
                "%s %s → HTTP %d %s", method, TABLES[kind], response.status_code, detail
            )
            raise GatewayError(
                f"HTTP {response.status_code}: {detail}".strip(),
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return []
        try:
            return response.json()
        except ValueError as exc:
            logger.error("%s %s returned invalid JSON", method, TABLES[kind])
            raise GatewayError("Invalid JSON in response") from exc

    # -----------------------------------------------------------------------
    # Table operations
    # -----------------------------------------------------------------------

    def select_all(self, kind: str, ascending: bool = True) -> list[dict]:
        """
        Fetch every row of a table ordered by created_at.

        Args:
            kind:      "bet" or "trade".
            ascending: True = oldest first (analytics), False = newest first (history).

        Returns:
            List of row dicts. Empty list for an empty table.
        """
        direction = "asc" if ascending else "desc"
        rows = self._request(
            "GET", kind, params={"select": "*", "order": f"created_at.{direction}"}
        )
        return rows if isinstance(rows, list) else []

    def insert(self, kind: str, row: dict) -> dict:
        """Insert one row. Returns the stored row (with id and created_at)."""
        rows = self._request(
            "POST", kind, payload=[row], prefer="return=representation"
        )
        logger.info("Inserted 1 row into %s", TABLES[kind])
        return rows[0] if rows else {}

    def update(self, kind: str, values: dict, ids: Iterable[int]) -> list[dict]:
        """
        Apply the same column values to every id in one statement.

        Returns:
            The updated rows.
        """
        id_list = list(ids)
        if not id_list:
            return []
        rows = self._request(
            "PATCH",
            kind,
            params={"id": _id_filter(id_list)},
            payload=values,
            prefer="return=representation",
        )
        logger.info("Updated %d row(s) in %s", len(id_list), TABLES[kind])
        return rows if isinstance(rows, list) else []

    def delete(self, kind: str, ids: Iterable[int]) -> None:
        """Delete every id in one statement."""
        id_list = list(ids)
        if not id_list:
            return
        self._request("DELETE", kind, params={"id": _id_filter(id_list)})
        logger.info("Deleted %d row(s) from %s", len(id_list), TABLES[kind])


# Module-level gateway — created on first use, shared by every page
_gateway: Optional[SupabaseGateway] = None


def get_gateway() -> SupabaseGateway:
    global _gateway
    if _gateway is None:
        _gateway = SupabaseGateway()
    return _gateway
