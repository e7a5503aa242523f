"""Fish fight exception hierarchy.

Centralised base classes so handlers can catch narrowly and map each
failure to the right response.
"""


class FishFightError(Exception):
    """Root of all fish fight domain exceptions."""


class InvalidPayload(FishFightError):
    """A drawing submission failed validation. Nothing was stored."""


class DuplicateDrawing(InvalidPayload):
    """A drawing id was submitted twice while duplicates are rejected."""


class TransientSendFailure(FishFightError):
    """Pushing a message to a single client failed.

    Isolated to that connection; the next snapshot supersedes the lost one.
    """


class ConfigurationError(FishFightError):
    """Invalid or missing configuration."""
