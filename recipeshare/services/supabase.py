from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from supabase import Client, create_client

from recipeshare import config

# Lazily-initialized Supabase client
_client: Optional[Client] = None


# ================================
# INIT SUPABASE CLIENT
# ================================
def get_client() -> Client:
    """
    Lazily create the Supabase client so that importing this module
    does not explode if credentials are missing (e.g. during local tests).
    """
    global _client
    if _client is None:
        if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
            logging.error("SUPABASE_URL / SUPABASE_ANON_KEY are not set; storage is unavailable.")
            raise RuntimeError("Supabase credentials are not set")
        _client = create_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)
    return _client


def set_client(client: Optional[Client]) -> None:
    """
    Replace (or reset with None) the shared client.
    """
    global _client
    _client = client


def error_code(error: Exception) -> Optional[str]:
    """
    Postgres/PostgREST error code carried by a client exception, if any
    (e.g. "23503" for a foreign key violation).
    """
    code = getattr(error, "code", None)
    return str(code) if code is not None else None


def error_message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error)


# ================================
# CORE INSERT
# ================================
def insert_record(table: str, data: Dict[str, Any]):
    """
    Insert one row into Supabase.
    Returns:
        (response, error)  where error is the raised exception or None
    """
    try:
        response = get_client().table(table).insert(data).execute()
        return response, None
    except Exception as e:  # noqa: BLE001
        logging.error("[SUPABASE ERROR %s] %s", table, error_message(e))
        return None, e


def call_rpc(name: str, params: Dict[str, Any]):
    """
    Call a Postgres function through PostgREST.
    Returns:
        (response, error)  where error is the raised exception or None
    """
    try:
        response = get_client().rpc(name, params).execute()
        return response, None
    except Exception as e:  # noqa: BLE001
        logging.error("[SUPABASE ERROR rpc %s] %s", name, error_message(e))
        return None, e
