from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from papersmith.models import GeneratedPaper


class PaperSmithError(Exception):
    """Base class for errors raised by the paper generation core."""


class InvalidConfiguration(PaperSmithError):
    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("invalid generation config: " + "; ".join(self.errors))


class ServiceUnavailable(PaperSmithError):
    """The external generation service has no usable credential."""


class ExternalGenerationExhausted(PaperSmithError):
    """Every candidate model failed or returned an unusable response."""

    def __init__(self, attempts: dict[str, str]) -> None:
        self.attempts = dict(attempts)
        detail = ", ".join(f"{m}: {e}" for m, e in self.attempts.items()) or "no models configured"
        super().__init__(f"external generation exhausted ({detail})")


class GenerationCancelled(PaperSmithError):
    pass


class StoreIOFailure(PaperSmithError):
    def __init__(self, message: str, paper: Optional["GeneratedPaper"] = None) -> None:
        # Carries the generated paper when persisting it failed, so it can be saved again.
        self.paper = paper
        super().__init__(message)
