"""
API Gateway (REST, proxy integration) handlers for the lending operations.

One handler per function, plus ``lambda_handler`` which routes a single
function deployment::

    POST /books                 -> add_book_handler
    GET  /books                 -> list_books_handler
    POST /books/{id}/checkout   -> checkout_book_handler
    POST /books/{id}/return     -> return_book_handler

Results map to responses as follows: Ok is 200 (201 for a new book),
a validation rejection is 400 with an ``errors`` list, an unavailable book
is 400 with a single ``error``, and a store failure is 500.
"""

import json
import logging
from typing import Any

from .results import Failed, Ok, Rejected, RejectionReason, Result
from .services.provider import get_lending_service

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def build_response(status_code: int, body: Any) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(DEFAULT_HEADERS),
        "body": json.dumps(body),
    }


def error_response(message: str, status_code: int = 500) -> dict[str, Any]:
    return build_response(status_code, {"error": message})


def result_response(result: Result, success_status: int = 200, success_body: Any = None) -> dict[str, Any]:
    """Render a lending result as an API Gateway proxy response."""
    if isinstance(result, Rejected):
        if result.reason == RejectionReason.VALIDATION:
            return build_response(400, {"errors": result.errors})
        return error_response(result.message, 400)
    if isinstance(result, Failed):
        return error_response(result.cause, 500)
    return build_response(success_status, success_body)


def log_request(event: dict[str, Any]) -> None:
    logger.info("Request Path: %s", event.get("path"))
    logger.info("Request Method: %s", event.get("httpMethod"))
    logger.debug("Request Body: %s", event.get("body"))
    logger.debug("Path Parameters: %s", json.dumps(event.get("pathParameters")))


def _book_id(event: dict[str, Any]) -> str | None:
    params = event.get("pathParameters") or {}
    if params.get("id"):
        return params["id"]
    parts = [p for p in (event.get("path") or "").split("/") if p]
    # books/{id}/<action>
    return parts[1] if len(parts) == 3 else None


def add_book_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:  # noqa: ARG001
    log_request(event)

    raw_body = event.get("body")
    if not raw_body:
        return error_response("Request body is required", 400)

    try:
        payload = json.loads(raw_body)
    except json.JSONDecodeError:
        logger.warning("Request body is not valid JSON")
        return error_response("Request body must be valid JSON", 400)

    result = get_lending_service().add_book(payload)
    body = result.value.model_dump(mode="json", by_alias=True) if isinstance(result, Ok) else None
    return result_response(result, 201, body)


def list_books_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:  # noqa: ARG001
    log_request(event)

    result = get_lending_service().list_books()
    body = (
        [book.model_dump(mode="json", by_alias=True) for book in result.value]
        if isinstance(result, Ok)
        else None
    )
    return result_response(result, 200, body)


def checkout_book_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:  # noqa: ARG001
    log_request(event)

    result = get_lending_service().checkout_book(_book_id(event))
    return result_response(result, 200, {"message": "Book checked out successfully"})


def return_book_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:  # noqa: ARG001
    log_request(event)

    result = get_lending_service().return_book(_book_id(event))
    return result_response(result, 200, {"message": "Book returned successfully"})


def lambda_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Route a proxy event to the matching handler."""
    try:
        return _dispatch(event, context)
    except Exception:
        logger.exception("Unhandled error for %s %s", event.get("httpMethod"), event.get("path"))
        return error_response("Internal server error", 500)


def _dispatch(event: dict[str, Any], context: Any) -> dict[str, Any]:
    method = event.get("httpMethod")
    path = (event.get("path") or "").rstrip("/")

    if method == "OPTIONS":
        return build_response(200, "")
    if path == "/books" and method == "POST":
        return add_book_handler(event, context)
    if path == "/books" and method == "GET":
        return list_books_handler(event, context)
    if path.startswith("/books/") and path.endswith("/checkout") and method == "POST":
        return checkout_book_handler(event, context)
    if path.startswith("/books/") and path.endswith("/return") and method == "POST":
        return return_book_handler(event, context)

    logger.warning("No route for %s %s", method, path)
    return error_response("Resource not found", 404)
