from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Blueprint, jsonify, request

from recipeshare.media import MediaUpload, ValidationError, ingest, retrieve, retrieve_batch
from recipeshare.media.models import FIELD_FOR_KIND, MEDIA_KINDS
from recipeshare.services import recipes as store
from recipeshare.services.supabase import error_code, error_message
from recipeshare.validator import validate_payload

api = Blueprint("api", __name__)

RECIPE_FORM_FIELDS = ("user_id", "title", "description", "cuisine")

# Postgres foreign key violation
FK_VIOLATION = "23503"


# ================================
# RESPONSE HELPERS
# ================================
def _ok(data: Any, status: int = 200, message: Optional[str] = None):
    body: Dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def _fail(error: str, status: int, details: Any = None):
    body: Dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        body["details"] = details
    return jsonify(body), status


def _embedded(row: Dict[str, Any], relation: str, column: str) -> Optional[str]:
    """
    Pull a column out of an embedded (joined) row. PostgREST returns a
    to-one join as an object, or as a list when it cannot infer the
    cardinality.
    """
    nested = row.get(relation)
    if isinstance(nested, list):
        nested = nested[0] if nested else None
    if not nested:
        return None
    return nested.get(column)


def _upload_from_request(field: str) -> Optional[MediaUpload]:
    storage = request.files.get(field)
    if storage is None:
        return None
    data = storage.read()
    return MediaUpload(
        filename=storage.filename or "",
        content_type=storage.mimetype or None,
        data=data,
    )


# ================================
# ROUTES
# ================================
@api.route("/create-recipe", methods=["POST"])
def create_recipe() -> Any:
    """
    Multipart create: form fields + `image_data` and `doc_data` files.

    Both files are validated before anything is written; every invalid
    field is reported in one 400.
    """
    form = {name: request.form.get(name) for name in RECIPE_FORM_FIELDS}
    errors: Dict[str, str] = {}

    is_valid, err = validate_payload(
        "create_recipe",
        {k: v for k, v in form.items() if v is not None},
    )
    if not is_valid:
        errors["form"] = err

    stored = {}
    for kind in MEDIA_KINDS:
        field = FIELD_FOR_KIND[kind]
        try:
            stored[kind] = ingest(_upload_from_request(field), kind)
        except ValidationError as e:
            errors[field] = e.message

    if errors:
        logging.info("[CREATE RECIPE] rejected: %s", errors)
        return _fail(
            f"Invalid or missing field(s): {', '.join(errors)}",
            400,
            details=errors,
        )

    response, error = store.create_recipe_with_media(
        user_id=form["user_id"],
        title=form["title"],
        description=form["description"],
        cuisine=form["cuisine"],
        image=stored["image"],
        document=stored["document"],
    )

    if error:
        message = error_message(error)
        status = 404 if "User does not exist" in message else 500
        return _fail(message, status)

    return _ok(response.data, 201)


@api.route("/recipes-with-images", methods=["GET"])
def recipes_with_images() -> Any:
    """
    Gallery list. A recipe whose image cannot be decoded is still listed,
    with image_data null.
    """
    try:
        rows = store.list_recipes_with_images()
    except Exception as e:  # noqa: BLE001
        logging.exception("[FETCH RECIPES ERROR] %s", e)
        return _fail("Failed to fetch recipes", 500, details=str(e))

    images = retrieve_batch(
        (
            (row.get("recipe_id"), row.get("title"), _embedded(row, "image", "image_data"))
            for row in rows
        ),
        field="image_data",
    )

    results = [
        {
            "recipe_id": row.get("recipe_id"),
            "title": row.get("title"),
            "date_time": row.get("date_time"),
            "image_data": image,
        }
        for row, image in zip(rows, images)
    ]
    return _ok(results)


@api.route("/recipe/<recipe_id>", methods=["GET"])
def recipe_detail(recipe_id: str) -> Any:
    try:
        row = store.get_recipe_detail(recipe_id)
    except Exception as e:  # noqa: BLE001
        logging.exception("[FETCH RECIPE ERROR %s] %s", recipe_id, e)
        return _fail("Failed to fetch recipe details", 500, details=str(e))

    if row is None:
        return _fail("Recipe not found", 404)

    title = row.get("title")
    # Image and document fail independently.
    image = retrieve(
        _embedded(row, "image", "image_data"),
        record_id=recipe_id,
        label=title,
        field="image_data",
    )
    document = retrieve(
        _embedded(row, "document", "doc_data"),
        record_id=recipe_id,
        label=title,
        field="doc_data",
    )

    return _ok(
        {
            "title": title,
            "description": row.get("description"),
            "cuisine": row.get("cuisine"),
            "date_time": row.get("date_time"),
            "image_data": image,
            "doc_data": document,
        }
    )


@api.route("/recipe/<recipe_id>/comment", methods=["POST"])
def add_comment(recipe_id: str) -> Any:
    body = request.get_json(silent=True)
    if body is None:
        return _fail(
            "Request body is missing. Ensure 'Content-Type' header is set to 'application/json'.",
            400,
        )

    try:
        recipe_key = int(recipe_id)
    except ValueError:
        return _fail("Recipe ID must be an integer.", 400)

    is_valid, err = validate_payload("comment", body)
    if not is_valid:
        return _fail("User ID and non-empty comment content are required.", 400, details=err)

    response, error = store.add_comment(recipe_key, body["user_id"], body["comment_content"])

    if error:
        if error_code(error) == FK_VIOLATION:
            return _fail(
                "The specified user or recipe does not exist.",
                404,
                details=error_message(error),
            )
        return _fail(
            "Failed to add comment.",
            500,
            details={"message": error_message(error), "code": error_code(error) or "UNKNOWN"},
        )

    data = response.data or [None]
    return _ok(data[0], 201, message="Comment added successfully.")


@api.route("/recipe/<recipe_id>/displaycomments", methods=["GET"])
def display_comments(recipe_id: str) -> Any:
    try:
        rows = store.list_comments(recipe_id)
    except Exception as e:  # noqa: BLE001
        logging.exception("[FETCH COMMENTS ERROR %s] %s", recipe_id, e)
        return _fail(
            "Failed to fetch comments.",
            500,
            details={"message": error_message(e), "code": error_code(e)},
        )

    results = [
        {
            "comment_content": row.get("comment_content"),
            "comment_datetime": row.get("comment_datetime"),
            "username": (row.get("USER") or {}).get("username") or "Unknown User",
        }
        for row in rows
    ]
    return _ok(results)
