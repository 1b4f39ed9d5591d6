"""VPNBlocker exception classes."""



class VPNBlockerError(Exception):
    """Base exception for all VPNBlocker errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(VPNBlockerError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class TransportError(VPNBlockerError):
    """Raised when an HTTP call fails before a response is received."""

    pass


class QueryError(VPNBlockerError):
    """Raised when a reputation lookup fails or cannot be interpreted."""

    def __init__(self, code: str, message: str, address: str | None = None) -> None:
        super().__init__(code, message)
        self.address = address


class UnresolvedAddressError(VPNBlockerError):
    """Raised when a connection attempt carries no network address."""

    def __init__(self, name: str) -> None:
        super().__init__("UNRESOLVED_ADDRESS", f"Could not resolve IP for {name}")
        self.name = name


class DeliveryError(VPNBlockerError):
    """Raised when a heartbeat could not be delivered."""

    def __init__(
        self, code: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code
