class RecordStoreError(RuntimeError):
    """Raised when the record backend fails (timeouts, network errors, rejected writes)."""
    pass


class RecordContractError(RuntimeError):
    """Raised when the record backend answers without the data the caller needs."""
    pass


class SurfaceNotFound(LookupError):
    """Raised when a picker, form or checklist surface id is unknown."""
    pass
