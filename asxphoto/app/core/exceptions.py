"""Custom exception classes for the photo contest application."""


class ContestException(Exception):
    """Base exception for all contest-specific errors.

    ``details`` carries the short user-facing message shown by the client.
    """

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ContestValidationError(ContestException):
    """Raised when input is malformed (callsign, title, file, password...)."""

    def __init__(self, message: str, details: str | None = None, field: str | None = None):
        super().__init__(message=message, details=details or message)
        self.field = field


class QuotaExceededError(ContestException):
    """Raised when the monthly upload or vote limit has been reached."""

    def __init__(self, kind: str, limit: int):
        if kind == "upload":
            details = f"Hai raggiunto il limite di {limit} foto per questo mese"
        else:
            details = "Hai esaurito i voti per questo mese"
        super().__init__(
            message=f"{kind.capitalize()} limit of {limit} reached",
            details=details,
        )
        self.kind = kind
        self.limit = limit


class SelfVoteError(ContestException):
    """Raised when a pilot tries to vote for their own photo."""

    def __init__(self, photo_id: str):
        super().__init__(
            message=f"Cannot vote for own photo: {photo_id}",
            details="Non puoi votare le tue foto",
        )
        self.photo_id = photo_id


class AlreadyVotedError(ContestException):
    """Raised when a pilot votes for the same photo twice."""

    def __init__(self, photo_id: str, user_id: str):
        super().__init__(
            message=f"User {user_id} already voted for photo {photo_id}",
            details="Hai già votato questa foto",
        )
        self.photo_id = photo_id
        self.user_id = user_id


class UnauthorizedError(ContestException):
    """Raised when a request requires an authenticated caller."""

    def __init__(self, message: str = "Authentication required", details: str | None = None):
        super().__init__(message=message, details=details or "Accedi per continuare")


class StaffRequiredError(ContestException):
    """Raised when a staff-only operation is attempted without the staff capability."""

    def __init__(self):
        super().__init__(
            message="Staff capability required",
            details="Operazione riservata allo staff",
        )


class PhotoNotFoundError(ContestException):
    """Raised when a photo does not exist or is not visible to the caller."""

    def __init__(self, photo_id: str):
        super().__init__(
            message=f"Photo not found: {photo_id}",
            details="La foto richiesta non esiste",
        )
        self.photo_id = photo_id


class UserNotFoundError(ContestException):
    """Raised when a user is not found."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User not found: {user_id}",
            details="L'utente richiesto non esiste",
        )
        self.user_id = user_id


class ConflictError(ContestException):
    """Raised when a unique field (email, callsign) is already taken."""

    def __init__(self, field: str, value: str):
        super().__init__(
            message=f"{field} already in use: {value}",
            details=f"{field.capitalize()} già in uso",
        )
        self.field = field
        self.value = value


class RemoteFailureError(ContestException):
    """Raised when the data store or object storage fails during a step."""

    def __init__(self, step: str, original_error: Exception | None = None):
        message = f"Remote failure during {step}"
        if original_error:
            message += f": {str(original_error)}"
        super().__init__(
            message=message,
            details="Errore del servizio. Riprova.",
        )
        self.step = step
        self.original_error = original_error


class QuotaUnavailableError(RemoteFailureError):
    """Raised when a quota count cannot be read; the quota is unknown, not zero."""

    def __init__(self, counter: str, original_error: Exception | None = None):
        super().__init__(step=f"{counter} count", original_error=original_error)
        self.details = "Impossibile verificare i limiti. Riprova."
        self.counter = counter
