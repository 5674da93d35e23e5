"""Error taxonomy for the upload pipeline.

Infrastructure components (converter, storage) raise
:class:`InfrastructureError` subclasses. Upload services classify every
failure exactly once into :class:`ServiceValidationError` (the caller can
fix it) or :class:`ServiceInfrastructureError` (the environment must be
fixed) and let it propagate to the request handler.
"""
from __future__ import annotations


class InfrastructureError(Exception):
    """Raised by external collaborators: conversion tool, filesystem, storage."""

    kind = "infrastructure"

    def __init__(self, message: str) -> None:
        super().__init__(f"{self.kind} error: {message}")
        self.message = message


class ConverterError(InfrastructureError):
    kind = "converter"


class ConverterIOError(InfrastructureError):
    kind = "I/O"


class StorageError(InfrastructureError):
    kind = "storage"


class ServiceError(Exception):
    """Base class for errors returned from an upload service."""


class ServiceValidationError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(f"validation error: {message}")
        self.message = message


class ServiceInfrastructureError(ServiceError):
    def __init__(self, cause: InfrastructureError, *, context: str | None = None) -> None:
        super().__init__(f"{context}: {cause}" if context else str(cause))
        self.cause = cause
        self.context = context
