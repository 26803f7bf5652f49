class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TIME_WINDOW_INVALID = "TIME_WINDOW_INVALID"
    FIELD_FORMAT_INVALID = "FIELD_FORMAT_INVALID"
    APPLICATION_ERROR = "APPLICATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    SERVER_ERROR = "SERVER_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"
    SUBMISSION_IN_PROGRESS = "SUBMISSION_IN_PROGRESS"
