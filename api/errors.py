class ConversionError(Exception):
    """Base class for every failure a conversion can end with."""

    status_code = 500
    message = "Conversion failed"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(ConversionError):
    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class RateUnavailable(ConversionError):
    status_code = 404
    message = "Exchange rate not available"


class UpstreamUnauthorized(ConversionError):
    status_code = 401
    message = "Invalid or missing access key"


class UpstreamInvalidCurrency(ConversionError):
    status_code = 400

    def __init__(self, which: str):
        self.which = which
        super().__init__(f"Invalid {which} currency")


class UpstreamMalformedResponse(ConversionError):
    status_code = 500
    message = "Error parsing API response"


class UpstreamUnreachable(ConversionError):
    status_code = 502
    message = "Error calling exchange rate API"


class UpstreamUnclassified(ConversionError):
    """The provider reported an error code we have no mapping for."""

    status_code = 422

    def __init__(self, code: int, info: str):
        self.code = code
        self.info = info
        super().__init__("Unable to process request")
