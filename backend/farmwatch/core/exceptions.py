class DeviceError(Exception):
    """Base class for failures talking to the sensor device.

    ``reason`` is the short human-readable text exposed as the connector's
    last error.
    """

    reason = "device error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.reason)
        self.detail = detail


class DeviceUnreachableError(DeviceError):
    reason = "device unreachable"


class DeviceTimeoutError(DeviceError):
    reason = "connection timed out"


class DeviceErrorStatusError(DeviceError):
    reason = "device responded with error status"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"status {status_code}")
        self.status_code = status_code


class MalformedPayloadError(DeviceError):
    reason = "malformed payload"


class ConfigInvalidError(ValueError):
    """Raised when a configuration update cannot be parsed or is inconsistent."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
