from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ApiError(Exception):
	status_code = 500

	def __init__(self, message: str) -> None:
		super().__init__(message)
		self.message = message


class ValidationError(ApiError):
	"""Required input is missing or malformed."""
	status_code = 400


class NotFoundError(ApiError):
	"""A referenced athlete or record does not exist."""
	status_code = 404


class DependencyError(ApiError):
	"""Database or external service failure.

	The message is always a generic, route-level string; the underlying
	exception is logged server-side and chained as ``__cause__``.
	"""
	status_code = 500


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
	return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
	return JSONResponse({"error": "Invalid request"}, status_code=400)


def register_error_handlers(app: FastAPI) -> None:
	app.add_exception_handler(ApiError, _api_error_handler)
	app.add_exception_handler(RequestValidationError, _request_validation_handler)
