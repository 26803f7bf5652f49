from quota_admin.core.error_codes import ErrorCode


class AdminError(Exception):
    code = ErrorCode.APPLICATION_ERROR

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        self.message = message
        self.code = str(code or self.code)
        self.status_code = status_code
        super().__init__(message)


# ── Local, raised before any request ───────────────────────────────────────


class ValidationError(AdminError):
    code = ErrorCode.VALIDATION_ERROR


class TimeWindowError(ValidationError):
    code = ErrorCode.TIME_WINDOW_INVALID

    def __init__(self, valid_from: int, valid_until: int):
        self.valid_from = valid_from
        self.valid_until = valid_until
        super().__init__("Effective time must be earlier than expiry time")


class FieldFormatError(ValidationError):
    code = ErrorCode.FIELD_FORMAT_INVALID

    def __init__(self, field: str, value: object, reason: str = "must be an integer"):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value!r} {reason}")


class SubmissionInProgressError(AdminError):
    code = ErrorCode.SUBMISSION_IN_PROGRESS

    def __init__(self):
        super().__init__("A submission is already in progress")


# ── Remote ─────────────────────────────────────────────────────────────────


class ApplicationError(AdminError):
    """The server answered with ``success=false``; ``message`` is shown verbatim."""

    code = ErrorCode.APPLICATION_ERROR


class NotFoundError(AdminError):
    code = ErrorCode.NOT_FOUND


class ServerError(AdminError):
    code = ErrorCode.SERVER_ERROR


class TransportError(AdminError):
    code = ErrorCode.TRANSPORT_ERROR


class SubmissionError(AdminError):
    code = ErrorCode.SUBMISSION_FAILED

    def __init__(self, message: str = "Save failed, please retry"):
        super().__init__(message)


class PartialFailureError(AdminError):
    code = ErrorCode.PARTIAL_FAILURE

    def __init__(self, failed: int, total: int):
        self.failed = failed
        self.total = total
        super().__init__("Some changes failed to save, please retry")
