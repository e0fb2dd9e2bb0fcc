"""Domain exception hierarchy for Charity Console.

All domain-specific exceptions inherit from CharityConsoleError.
This allows catching all application errors with a single base class
while preserving specificity for individual error types.
"""

from typing import Any


class CharityConsoleError(Exception):
    """Base exception for all Charity Console errors.

    Includes an error_code and HTTP status for API responses plus extra context.
    """

    error_code: str = "CHARITY_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Not Found Errors
# =============================================================================


class RecordNotFoundError(CharityConsoleError):
    """Raised when a record cannot be found in its collection."""

    error_code = "RECORD_NOT_FOUND"
    status_code = 404
    collection: str = "record"

    def __init__(self, record_id: str) -> None:
        super().__init__(
            f"{self.collection.replace('_', ' ').capitalize()} not found: {record_id}",
            context={f"{self.collection}_id": str(record_id)},
        )


class FamilyNotFoundError(RecordNotFoundError):
    error_code = "FAMILY_NOT_FOUND"
    collection = "family"


class CampaignNotFoundError(RecordNotFoundError):
    error_code = "CAMPAIGN_NOT_FOUND"
    collection = "campaign"


class PackageNotFoundError(RecordNotFoundError):
    error_code = "PACKAGE_NOT_FOUND"
    collection = "package"


class EventNotFoundError(RecordNotFoundError):
    error_code = "EVENT_NOT_FOUND"
    collection = "event"


class LocationNotFoundError(RecordNotFoundError):
    error_code = "LOCATION_NOT_FOUND"
    collection = "location"


class BankAccountNotFoundError(RecordNotFoundError):
    error_code = "BANK_ACCOUNT_NOT_FOUND"
    collection = "account"


class PixKeyNotFoundError(RecordNotFoundError):
    error_code = "PIX_KEY_NOT_FOUND"
    collection = "pix_key"


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(CharityConsoleError):
    """Base exception for validation errors.

    Raised before any write; the stored state is left unchanged.
    """

    error_code = "VALIDATION_ERROR"
    status_code = 422


class InvalidDocumentNumberError(ValidationError):
    """Raised when a CPF or CNPJ fails its check digits."""

    error_code = "INVALID_DOCUMENT_NUMBER"

    def __init__(self, kind: str, value: str) -> None:
        super().__init__(
            f"Invalid {kind}: {value}",
            context={"kind": kind, "value": value},
        )


class InvalidDateRangeError(ValidationError):
    """Raised when an end date precedes its start date."""

    error_code = "INVALID_DATE_RANGE"

    def __init__(self, start_date: str, end_date: str) -> None:
        super().__init__(
            f"End date {end_date} is before start date {start_date}",
            context={"start_date": start_date, "end_date": end_date},
        )


class PastStartDateError(ValidationError):
    """Raised when a new campaign starts before today."""

    error_code = "PAST_START_DATE"

    def __init__(self, start_date: str, today: str) -> None:
        super().__init__(
            f"Start date {start_date} is in the past (today is {today})",
            context={"start_date": start_date, "today": today},
        )


class InvalidPostalCodeError(ValidationError):
    """Raised when a postal code (CEP) does not have 8 digits."""

    error_code = "INVALID_POSTAL_CODE"

    def __init__(self, postal_code: str) -> None:
        super().__init__(
            f"Postal code must have 8 digits: {postal_code}",
            context={"postal_code": postal_code},
        )


class CampaignLinkError(ValidationError):
    """Raised when a campaign cannot be newly linked to an event."""

    error_code = "CAMPAIGN_NOT_LINKABLE"

    def __init__(self, campaign_id: str, event_id: str, reason: str) -> None:
        super().__init__(
            f"Campaign {campaign_id} cannot be linked to event {event_id}: {reason}",
            context={"campaign_id": campaign_id, "event_id": event_id, "reason": reason},
        )


class BankInfoError(ValidationError):
    """Raised when bank account or Pix key data is inconsistent."""

    error_code = "BANK_INFO_ERROR"


class SettingsError(ValidationError):
    """Raised when organization settings are out of range."""

    error_code = "SETTINGS_ERROR"


# =============================================================================
# Collaborator Errors
# =============================================================================


class CollaboratorError(CharityConsoleError):
    """Base exception for failures of external collaborators."""

    error_code = "COLLABORATOR_ERROR"
    status_code = 502


class AIAssistUnavailableError(CollaboratorError):
    """Raised when AI assist is requested but no credential is configured."""

    error_code = "AI_ASSIST_UNAVAILABLE"
    status_code = 503

    def __init__(self) -> None:
        super().__init__("AI assist is unavailable: no API key configured")


class AIAssistError(CollaboratorError):
    """Raised when the AI assist call fails or returns nothing usable."""

    error_code = "AI_ASSIST_ERROR"

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"AI assist failed during {operation}: {reason}",
            context={"operation": operation, "reason": reason},
        )


class AddressNotFoundError(CollaboratorError):
    """Raised when the lookup service reports an unknown postal code."""

    error_code = "ADDRESS_NOT_FOUND"
    status_code = 404

    def __init__(self, postal_code: str) -> None:
        super().__init__(
            f"Address not found for postal code {postal_code}",
            context={"postal_code": postal_code},
        )


class AddressLookupError(CollaboratorError):
    """Raised when the address lookup service cannot be reached."""

    error_code = "ADDRESS_LOOKUP_ERROR"

    def __init__(self, postal_code: str, reason: str) -> None:
        super().__init__(
            f"Address lookup failed for {postal_code}: {reason}",
            context={"postal_code": postal_code, "reason": reason},
        )


class DocumentStoreError(CollaboratorError):
    """Raised when the document store rejects or fails an operation."""

    error_code = "DOCUMENT_STORE_ERROR"

    def __init__(self, operation: str, collection: str, reason: str) -> None:
        super().__init__(
            f"Document store {operation} on {collection} failed: {reason}",
            context={"operation": operation, "collection": collection, "reason": reason},
        )


# =============================================================================
# Authorization Errors
# =============================================================================


class AuthenticationError(CharityConsoleError):
    """Raised when a write is attempted without an authenticated session."""

    error_code = "AUTHENTICATION_ERROR"
    status_code = 401

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)
