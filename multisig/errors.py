"""Error codes raised by the multisig program and account constraint failures."""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Custom program errors, numbered from the first custom error code."""

    THRESHOLD_TOO_LOW = 6000
    THRESHOLD_TOO_HIGH = 6001
    SIGNER_NOT_IN_OWNERS = 6002
    TRANSACTION_ALREADY_EXECUTED = 6003
    ONLY_INITIATOR_CAN_CANCEL = 6004
    NOT_ENOUGH_APPROVALS = 6005

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorCode.THRESHOLD_TOO_LOW: "Threshold must be greater than 0",
    ErrorCode.THRESHOLD_TOO_HIGH: (
        "Threshold must be less than or equal to the number of owners"
    ),
    ErrorCode.SIGNER_NOT_IN_OWNERS: "The signer is not in the owners list",
    ErrorCode.TRANSACTION_ALREADY_EXECUTED: "Transaction has already been executed",
    ErrorCode.ONLY_INITIATOR_CAN_CANCEL: "Only the initiator can cancel the transaction",
    ErrorCode.NOT_ENOUGH_APPROVALS: "Not enough approvals to execute the transaction",
}


class MultisigError(Exception):
    """A program instruction failed with one of the program's error codes."""

    def __init__(self, code):
        self.code = ErrorCode(code)
        super().__init__(self.code.message)


class ConstraintError(Exception):
    """An account failed one of the constraints its instruction places on it."""