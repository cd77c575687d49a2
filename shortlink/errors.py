"""Exception hierarchy for the link shortener."""


class ShortlinkError(Exception):
    """Base class for all shortener errors."""


class ValidationError(ShortlinkError):
    """Client supplied something we cannot shorten. Never retried."""

    MALFORMED_JSON = "malformed_json"
    MISSING_FIELD = "missing_field"
    INVALID_URL = "invalid_url"

    MESSAGES = {
        MALFORMED_JSON: "Invalid JSON",
        MISSING_FIELD: "Missing url field",
        INVALID_URL: "Invalid URL format. Must be http:// or https://",
    }

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(self.MESSAGES.get(reason, reason))

    @property
    def message(self) -> str:
        return self.MESSAGES.get(self.reason, self.reason)


class NotFoundError(ShortlinkError):
    """No link is stored under the requested identifier."""

    def __init__(self, link_id: str):
        self.link_id = link_id
        super().__init__(f"Short code '{link_id}' not found")


class StoreError(ShortlinkError):
    """The link store failed to complete an operation."""


class StoreUnavailableError(StoreError):
    """The link store could not be reached."""


class DuplicateKeyError(StoreError):
    """An insert collided with an existing identifier."""

    def __init__(self, link_id: str):
        self.link_id = link_id
        super().__init__(f"Short code '{link_id}' already exists")
