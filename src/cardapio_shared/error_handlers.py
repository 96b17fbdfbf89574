"""
Centralized error handlers for Flask applications.
"""

from http import HTTPStatus

from flask import Flask, jsonify, render_template, request
from postgrest.exceptions import APIError
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from cardapio_shared.errors import InvalidQuery, RestaurantNotFound
from cardapio_shared.logging_config import get_logger

logger = get_logger(__name__)


def error_response(message: str, extra: dict | None = None) -> dict:
    payload = {"error": message}
    if extra:
        payload.update(extra)
    return payload


def register_error_handlers(app: Flask) -> None:
    """
    Register centralized error handlers for the Flask app.

    Args:
        app: Flask application instance
    """

    def should_return_json():
        """
        JSON for /api/ paths or when the client explicitly prefers JSON over HTML.
        """
        return request.path.startswith("/api/") or (
            request.accept_mimetypes.accept_json and not request.accept_mimetypes.accept_html
        )

    @app.errorhandler(RestaurantNotFound)
    def handle_restaurant_not_found(e: RestaurantNotFound):
        logger.info(f"Restaurant not found: {e.slug}")
        if should_return_json():
            return jsonify(
                error_response("Restaurante não encontrado", {"slug": e.slug})
            ), HTTPStatus.NOT_FOUND
        return render_template("not_found.html", slug=e.slug), HTTPStatus.NOT_FOUND

    @app.errorhandler(APIError)
    def handle_remote_error(e: APIError):
        """The hosted database rejected or failed the read."""
        logger.error(f"Remote database error {e.code}: {e.message}")
        message = e.message or "Erro ao consultar o banco de dados"
        if should_return_json():
            return jsonify(
                error_response(message, {"code": e.code, "details": e.details})
            ), HTTPStatus.BAD_GATEWAY
        return render_template(
            "error.html", error="Serviço temporariamente indisponível", code=502
        ), HTTPStatus.BAD_GATEWAY

    @app.errorhandler(InvalidQuery)
    def handle_invalid_query(e: InvalidQuery):
        logger.warning(f"Invalid query parameters: {e.details}")
        if should_return_json():
            return jsonify(
                error_response(e.description, {"details": e.details})
            ), HTTPStatus.BAD_REQUEST
        return render_template("error.html", error=e.description, code=400), 400

    @app.errorhandler(PydanticValidationError)
    def handle_row_validation_error(e: PydanticValidationError):
        """A remote row did not match its model: the upstream data is at fault."""
        logger.error(f"Remote row failed validation: {e}")
        if should_return_json():
            return jsonify(
                error_response("Resposta inválida do banco de dados")
            ), HTTPStatus.BAD_GATEWAY
        return render_template(
            "error.html", error="Serviço temporariamente indisponível", code=502
        ), HTTPStatus.BAD_GATEWAY

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        """Handle HTTP exceptions from Werkzeug."""
        logger.warning(f"HTTP exception {e.code}: {e.description}")
        if should_return_json():
            return jsonify(error_response(e.description or str(e))), e.code
        return render_template("error.html", error=e.description, code=e.code), e.code

    @app.errorhandler(Exception)
    def handle_generic_exception(e: Exception):
        """Handle any unhandled exceptions."""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        if should_return_json():
            return jsonify(
                error_response("Erro interno do servidor")
            ), HTTPStatus.INTERNAL_SERVER_ERROR
        return render_template("error.html", error="Erro interno do servidor", code=500), 500
