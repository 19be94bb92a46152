"""Custom exception hierarchy for the GPIO conformance driver."""


class GpioConformanceError(Exception):
    """Base exception for all GPIO conformance driver errors."""

    pass


class InvalidAddressingError(GpioConformanceError):
    """Raised when the addressing mode is unset, unsupported or lacks offsets."""

    pass


class UnknownCaseError(GpioConformanceError):
    """Raised when a case identifier has no registered scenario."""

    def __init__(self, case_id):
        super().__init__(f"Unknown case id: {case_id}")
        self.case_id = case_id


class CapabilityError(GpioConformanceError):
    """Raised when the line capability fails a call."""

    def __init__(self, message: str, line=None, errno=None):
        super().__init__(message)
        self.line = line
        self.errno = errno


class DeviceNotFoundError(CapabilityError):
    """Raised when no matching GPIO controller can be discovered."""

    pass


class VerificationMismatchError(GpioConformanceError):
    """Raised when a read attribute does not equal the expected token."""

    def __init__(self, actual, expected, line=None):
        super().__init__(f"Expected {expected!r}, read {actual!r}")
        self.actual = actual
        self.expected = expected
        self.line = line


class ScenarioRegistrationError(GpioConformanceError):
    """Raised when scenario registration fails (e.g., duplicate case ids)."""

    pass


class ConfigurationError(GpioConformanceError):
    """Raised when configuration is invalid or missing."""

    pass
