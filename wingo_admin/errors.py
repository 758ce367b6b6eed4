from __future__ import annotations


class ConfigurationError(RuntimeError):
    """The backend endpoint is not configured; no request was attempted."""


class FetchFailure(RuntimeError):
    """A backend call failed at the transport level or returned a non-2xx status."""


class SeedFailure(RuntimeError):
    """The demo batch could not be seeded at all."""
