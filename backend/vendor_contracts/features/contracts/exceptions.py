class ContractError(Exception):
    """base class for expected contract failures"""

    status_code = 500

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ContractValidationError(ContractError):
    """a lifecycle guard or field constraint was violated"""

    status_code = 400


class ContractPermissionError(ContractError):
    """the caller's role is not allowed to perform the action"""

    status_code = 403


class ContractNotFoundError(ContractError):
    """no contract exists for the requested id or (event, vendor) pair"""

    status_code = 404


class ContractStoreError(ContractError):
    """the contract store failed to read or write"""

    status_code = 503
