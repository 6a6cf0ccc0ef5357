class CatalogConfigurationError(ValueError):
    """Raised when a catalog entry is malformed (missing reply, duplicate intent)."""
    pass


class IntentNotFoundError(LookupError):
    """Raised when a classified intent has no active catalog entry."""

    def __init__(self, intent: str) -> None:
        super().__init__(f"No active catalog entry for intent '{intent}'")
        self.intent = intent


class ConversationNotFoundError(LookupError):
    """Raised when a conversation id does not exist in the store."""
    pass


class MessengerNotConfiguredError(RuntimeError):
    """Raised when no page access token is available for the Send API."""
    pass
