"""Error taxonomy for the journal core.

Every error propagates to the immediate caller. Nothing here is retried
automatically; the API layer maps each kind to its own HTTP status.
"""


class JournalError(Exception):
    """Base class for all journal errors."""


class TradeValidationError(JournalError):
    """A candidate trade failed a validation rule."""

    def __init__(self, reason: str, rule: str = "invalid"):
        super().__init__(reason)
        self.reason = reason
        self.rule = rule


class TradeNotFoundError(JournalError):
    def __init__(self, trade_id: str):
        super().__init__(f"Trade {trade_id} not found")
        self.trade_id = trade_id


class DraftNotFoundError(JournalError):
    def __init__(self, draft_id: str):
        super().__init__(f"Draft {draft_id} not found")
        self.draft_id = draft_id


class TemplateNotFoundError(JournalError):
    def __init__(self, index: int):
        super().__init__(f"Template #{index} not found")
        self.index = index


class StorageError(JournalError):
    """The persistence collaborator failed to load or save a blob."""


class DegenerateRatioWarning(RuntimeWarning):
    """A pip-based ratio was requested with a zero denominator."""
