"""
Recipe / comment queries against Supabase.

Media columns come back exactly as stored (`\\x...` text); decoding them
is the media pipeline's job, not this module's.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from recipeshare.media.models import StoredMedia
from recipeshare.services.supabase import call_rpc, get_client, insert_record
from recipeshare.utils.time import now_iso

LIST_COLUMNS = """
    recipe_id,
    title,
    date_time,
    image:image_id ( image_data )
"""

DETAIL_COLUMNS = """
    recipe_id,
    title,
    description,
    cuisine,
    date_time,
    document:doc_id ( doc_data ),
    image:image_id ( image_data )
"""

COMMENT_COLUMNS = """
    comment_content,
    comment_datetime,
    USER ( username )
"""


def create_recipe_with_media(
    user_id: str,
    title: str,
    description: Optional[str],
    cuisine: Optional[str],
    image: StoredMedia,
    document: StoredMedia,
):
    """
    Insert the recipe and both media rows in one transaction (RPC).
    Returns:
        (response, error)
    """
    return call_rpc(
        "create_recipe_with_media",
        {
            "p_user_id": user_id,
            "p_title": title,
            "p_description": description,
            "p_cuisine": cuisine,
            "p_image_data": image.encoded,
            "p_image_name": image.file_name,
            "p_image_type": image.declared_type,
            "p_doc_data": document.encoded,
            "p_doc_name": document.file_name,
            "p_doc_type": document.declared_type,
        },
    )


def list_recipes_with_images() -> List[Dict[str, Any]]:
    response = get_client().table("recipe").select(LIST_COLUMNS).execute()
    return response.data or []


def get_recipe_detail(recipe_id: str | int) -> Optional[Dict[str, Any]]:
    """
    One recipe with its image and document, or None if it does not exist.
    """
    response = (
        get_client()
        .table("recipe")
        .select(DETAIL_COLUMNS)
        .eq("recipe_id", recipe_id)
        .maybe_single()
        .execute()
    )
    # maybe_single() yields no response at all on zero rows in some
    # client versions and an empty one in others.
    if response is None or not response.data:
        return None
    return response.data


def add_comment(recipe_id: int, user_id: str | int, comment_content: str):
    """
    Returns:
        (response, error)
    """
    return insert_record(
        "comment",
        {
            "recipe_id": recipe_id,
            "user_id": user_id,
            "comment_content": comment_content,
            "comment_datetime": now_iso(),
        },
    )


def list_comments(recipe_id: str | int) -> List[Dict[str, Any]]:
    response = (
        get_client()
        .table("comment")
        .select(COMMENT_COLUMNS)
        .eq("recipe_id", recipe_id)
        .order("comment_datetime", desc=False)
        .execute()
    )
    return response.data or []
