"""Account records kept by the multisig program and their storage sizes."""

from dataclasses import dataclass, field

_EMPTY_KEY = bytes(32)


@dataclass
class SignerAccount:
    """A public key and whether it signs; also the record of one vote."""

    pubkey: bytes = _EMPTY_KEY
    is_signer: bool = False

    @staticmethod
    def get_max_size() -> int:
        return 32 + 1  # pubkey + is_signer


@dataclass
class MultiSigAccount:
    """A wallet owned jointly by several keys."""

    owners: list = field(default_factory=list)
    threshold: int = 0
    nonce: int = 0
    num_transactions_created: int = 0

    @staticmethod
    def get_max_size(num_owners) -> int:
        base_size = 1 + 1 + 8  # threshold, nonce, num_transactions_created
        owners_size = 4 + 32 * num_owners
        return base_size + owners_size


@dataclass
class Transactions:
    """A proposed transaction and the approvals collected for it."""

    transaction_index: int = 0
    parent: bytes = _EMPTY_KEY
    initiator: bytes = _EMPTY_KEY
    accounts: list = field(default_factory=list)
    signers: list = field(default_factory=list)
    time: int = 0
    data: bytes = b""
    did_complete: bool = False
    multisig_account: bytes = _EMPTY_KEY

    @staticmethod
    def get_max_size(num_signers) -> int:
        # transaction_index, parent, initiator, time, did_complete, multisig_account
        base_size = 8 + 32 + 32 + 8 + 1 + 32
        accounts_size = 4 + num_signers * (32 + 1)
        signers_size = 4 + num_signers
        data_size = 4 + 1024  # instruction data of at most 1 KiB
        return base_size + accounts_size + signers_size + data_size