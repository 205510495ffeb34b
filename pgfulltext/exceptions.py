"""pgfulltext exceptions."""


class PgFulltextError(Exception):
    """Base exception for pgfulltext errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(PgFulltextError):
    """Invalid search configuration for a searchable entity."""

    def __init__(self, message: str, entity: str | None = None):
        self.entity = entity
        super().__init__(message)
