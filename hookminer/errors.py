class InputError(ValueError):
    """Raised for malformed mining inputs, before any salt is tried."""


class RunStateError(RuntimeError):
    """Raised when a mining run is started outside of the IDLE state."""
