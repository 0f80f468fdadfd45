"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, storage, cache, errors),
``schemas`` (pydantic payloads), ``services`` (business logic) and
``api`` (versioned routers).
"""

from .main import app, create_app  # noqa: F401
