"""Domain errors raised by the resolver and aggregation layers."""

from typing import Any


class StatlineError(Exception):
    """Base class for domain errors."""


class NotFoundError(StatlineError):
    """A requested player or game is absent upstream."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(f"{resource} {identifier} not found")
        self.resource = resource
        self.identifier = identifier
