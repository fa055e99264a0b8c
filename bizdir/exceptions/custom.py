class SubmissionValidationError(Exception):
    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__(f"Validation failed: {', '.join(sorted(errors))}")


class NotFoundError(Exception):
    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        self.message = f"{resource} not found"
        super().__init__(f"{resource} {identifier} not found")


class StoreUnavailableError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ImageProcessingError(Exception):
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(Exception):
    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(f"Please wait {retry_after} seconds before submitting again")
