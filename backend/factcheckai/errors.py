# backend/factcheckai/errors.py
"""
Error taxonomy for the fact-check pipeline.

Each error carries the HTTP status the orchestrator reports it with. The
message is what the client sees; details belong in the server log.
"""


class FactCheckError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FactCheckError):
    """Missing or malformed input."""
    status_code = 400


class ExtractionError(FactCheckError):
    """The article could not be fetched or had too little readable text."""
    status_code = 400


class ProviderError(FactCheckError):
    """A single provider returned an unusable response envelope."""
    status_code = 502


class AllProvidersFailedError(FactCheckError):
    status_code = 500
