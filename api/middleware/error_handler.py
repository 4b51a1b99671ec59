# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Error handling middleware with structured HAL responses.
Provides centralized error handling and formatting for Flask applications.
"""

from flask import Flask, Response, request, jsonify
from werkzeug.exceptions import HTTPException
from typing import Dict, Any, Tuple
from opentelemetry import trace
import logging

from domain.errors import DomainError, from_pydantic
from services.hal import HalFormatter

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

HTTP_ERROR_TYPES = {
    400: ("bad-request", "Bad Request"),
    404: ("resource-not-found", "Resource Not Found"),
    405: ("method-not-allowed", "Method Not Allowed"),
    415: ("unsupported-media-type", "Unsupported Media Type"),
    422: ("validation-error", "Validation Error"),
    500: ("internal-server-error", "Internal Server Error"),
    503: ("service-unavailable", "Service Unavailable"),
}


class ErrorHandlerMiddleware:
    """Centralized error handling middleware with HAL response formatting."""

    def __init__(self, app: Flask, hal_formatter: HalFormatter):
        self.app = app
        self.hal_formatter = hal_formatter
        self.register_error_handlers()

    def register_error_handlers(self):
        """Register error handlers with Flask application."""

        @self.app.errorhandler(DomainError)
        def handle_domain_error(error: DomainError):
            return self.handle_domain_error(error)

        @self.app.errorhandler(HTTPException)
        def handle_http_exception(error: HTTPException):
            return self.handle_http_error(error)

        @self.app.errorhandler(Exception)
        def handle_generic_exception(error):
            return self.handle_unexpected_error(error)

    def handle_domain_error(self, error: DomainError) -> Tuple[Response, int]:
        """
        Render a domain exception as a problem document.

        Args:
            error: Domain exception carrying its own status and type

        Returns:
            Tuple of (JSON response, status code)
        """
        with tracer.start_as_current_span("error_handler.domain_error") as span:
            span.set_attributes({
                "error.type": error.error_type,
                "error.status": error.status_code,
                "http.method": request.method,
                "http.path": request.path
            })

            log = logger.error if error.status_code >= 500 else logger.warning
            log(
                f"Domain error: {error.error_type}",
                extra={
                    "error_type": error.error_type,
                    "status_code": error.status_code,
                    "detail": error.message,
                    "path": request.path,
                    "method": request.method
                }
            )

            return jsonify(self.hal_formatter.format_error(error, request.path)), error.status_code

    def handle_http_error(self, error: HTTPException) -> Tuple[Response, int]:
        """Render routing and protocol errors raised by Flask or werkzeug."""
        code = error.code or 500
        error_type, title = HTTP_ERROR_TYPES.get(code, ("http-error", error.name))
        detail = str(error.description) if error.description else title

        logger.warning(
            f"Client error: {title}",
            extra={
                "error_type": error_type,
                "status_code": code,
                "detail": detail,
                "path": request.path,
                "method": request.method,
                "user_agent": request.headers.get('User-Agent'),
                "ip_address": request.remote_addr
            }
        )

        error_response = self.hal_formatter.builder.build_error_response(
            error_type,
            title,
            code,
            detail,
            request.path
        )
        return jsonify(error_response), code

    def handle_unexpected_error(self, error: Exception) -> Tuple[Response, int]:
        """
        Handle unexpected exceptions not caught by specific handlers.

        Store failures end up here and become a 500 problem response.
        """
        with tracer.start_as_current_span("error_handler.unexpected_error") as span:
            span.set_attributes({
                "error.type": "unexpected-error",
                "error.class": error.__class__.__name__,
                "http.method": request.method,
                "http.path": request.path
            })
            span.record_exception(error)

            logger.error(
                f"Unexpected error: {error.__class__.__name__}",
                extra={
                    "error_type": "unexpected-error",
                    "error_class": error.__class__.__name__,
                    "error_message": str(error),
                    "path": request.path,
                    "method": request.method
                },
                exc_info=True
            )

            # Don't expose internal error details
            detail = "An unexpected error occurred"
            if self.app.config.get('ENVIRONMENT') != 'production':
                detail = f"{error.__class__.__name__}: {str(error)}"

            return jsonify(self.hal_formatter.format_server_error(request.path, detail)), 500


def make_validation_error_callback(hal_formatter: HalFormatter):
    """
    Build the flask-openapi3 callback for invalid path and query parameters.

    Args:
        hal_formatter: HAL formatter instance

    Returns:
        Callable turning a pydantic ValidationError into a 400 response
    """
    def validation_error_callback(error) -> Response:
        domain_error = from_pydantic("Invalid request parameters", error)
        logger.warning(
            "Request parameter validation failed",
            extra={"path": request.path, "errors": domain_error.errors}
        )
        response = jsonify(hal_formatter.format_error(domain_error, request.path))
        response.status_code = domain_error.status_code
        return response

    return validation_error_callback
