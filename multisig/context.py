"""Accounts each instruction works on, and the ledger that holds them."""

import hashlib
import time
from dataclasses import dataclass, field

from multisig.errors import ConstraintError
from multisig.state import MultiSigAccount, SignerAccount, Transactions

_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_MAX_SEEDS = 16
_MAX_SEED_LEN = 32
_PDA_MARKER = b"ProgramDerivedAddress"

# Field prime and curve constant of edwards25519.
_P = 2**255 - 19
_D = (-121665 * pow(121666, -1, _P)) % _P


def _b58decode(text: str) -> bytes:
    number = 0
    for char in text:
        number = number * 58 + _BASE58_ALPHABET.index(char)
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    leading = len(text) - len(text.lstrip("1"))
    return _pubkey(b"\x00" * leading + body)


def _pubkey(value) -> bytes:
    key = bytes(value)
    if len(key) != 32:
        raise ValueError(f"a public key is 32 bytes, got {len(key)}")
    return key


PROGRAM_ID = _b58decode("4Y4g4JbDRHdv8bzykPhQHjCsn3BgNpsySgfjyEx5EAid")


def _on_curve(data: bytes) -> bool:
    """Whether the bytes decompress to a point on edwards25519."""
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    x2 = u * pow(v, -1, _P) % _P
    return x2 == 0 or pow(x2, (_P - 1) // 2, _P) == 1


def _create_program_address(seeds, program_id):
    digest = hashlib.sha256()
    for seed in seeds:
        digest.update(seed)
    digest.update(program_id)
    digest.update(_PDA_MARKER)
    address = digest.digest()
    return None if _on_curve(address) else address


def find_program_address(seeds, program_id):
    """Derive the off-curve address for the seeds; return (address, bump)."""
    seeds = [bytes(seed) for seed in seeds]
    program_id = _pubkey(program_id)
    if len(seeds) + 1 > _MAX_SEEDS:
        raise ValueError(f"at most {_MAX_SEEDS - 1} seeds may be given")
    if any(len(seed) > _MAX_SEED_LEN for seed in seeds):
        raise ValueError(f"a seed is at most {_MAX_SEED_LEN} bytes")
    for bump in range(255, -1, -1):
        address = _create_program_address([*seeds, bytes([bump])], program_id)
        if address is not None:
            return address, bump
    raise ValueError("no viable bump seed for these seeds")


@dataclass(frozen=True)
class AccountMeta:
    """An account passed to an invoked instruction."""

    pubkey: bytes
    is_signer: bool
    is_writable: bool

    @classmethod
    def new(cls, pubkey, is_signer):
        return cls(_pubkey(pubkey), bool(is_signer), True)

    @classmethod
    def new_readonly(cls, pubkey, is_signer):
        return cls(_pubkey(pubkey), bool(is_signer), False)


@dataclass(frozen=True)
class Instruction:
    """An instruction for another program: its id, accounts and data."""

    program_id: bytes
    accounts: list
    data: bytes


class Ledger:
    """Accounts by address, a clock, and a way to invoke other programs."""

    def __init__(self, clock=None, invoker=None):
        self.accounts = {}
        self.spaces = {}
        self.invoked = []
        self._clock = clock if clock is not None else (lambda: int(time.time()))
        self._invoker = invoker

    def init_account(self, address, account, space):
        address = _pubkey(address)
        if address in self.accounts:
            raise ConstraintError(f"account {address.hex()} is already in use")
        self.accounts[address] = account
        self.spaces[address] = space
        return account

    def get(self, address):
        address = _pubkey(address)
        try:
            return self.accounts[address]
        except KeyError:
            raise ConstraintError(
                f"account {address.hex()} is not initialized"
            ) from None

    def now(self):
        return int(self._clock())

    def invoke(self, instruction):
        self.invoked.append(instruction)
        if self._invoker is not None:
            return self._invoker(instruction)
        return None


def _load(ledger, address, kind):
    account = ledger.get(address)
    if not isinstance(account, kind):
        raise ConstraintError(
            f"account {bytes(address).hex()} is not a {kind.__name__} account"
        )
    return account


def _load_pair(ledger, multisig_address, transaction_address):
    multisig = _load(ledger, multisig_address, MultiSigAccount)
    transaction = _load(ledger, transaction_address, Transactions)
    if transaction.multisig_account != multisig_address:
        raise ConstraintError("has one constraint violated: multisig_account")
    return multisig, transaction


@dataclass
class CreateMultisig:
    ledger: Ledger = field(repr=False)
    payer: bytes
    multisig_address: bytes
    multisig_account: MultiSigAccount
    bump: int

    @classmethod
    def load(cls, ledger, payer, owners):
        payer = _pubkey(payer)
        address, bump = find_program_address([b"multisig", payer], PROGRAM_ID)
        account = ledger.init_account(
            address, MultiSigAccount(), 8 + MultiSigAccount.get_max_size(len(owners))
        )
        return cls(ledger, payer, address, account, bump)


@dataclass
class CreateTransaction:
    ledger: Ledger = field(repr=False)
    proposer: bytes
    multisig_address: bytes
    multisig_acnt: MultiSigAccount
    transaction_address: bytes
    transaction_account: Transactions
    bump: int

    @classmethod
    def load(cls, ledger, proposer, multisig_acnt):
        proposer = _pubkey(proposer)
        multisig_address = _pubkey(multisig_acnt)
        multisig = _load(ledger, multisig_address, MultiSigAccount)
        counter = multisig.num_transactions_created.to_bytes(8, "little")
        address, bump = find_program_address(
            [b"transaction", multisig_address, counter], PROGRAM_ID
        )
        transaction = ledger.init_account(
            address, Transactions(), 8 + Transactions.get_max_size(len(multisig.owners))
        )
        return cls(
            ledger, proposer, multisig_address, multisig, address, transaction, bump
        )


@dataclass
class _SignerRecordContext:
    ledger: Ledger = field(repr=False)
    payer: bytes
    multisig_address: bytes
    multisig_account: MultiSigAccount
    transaction_address: bytes
    transaction_account: Transactions
    signer_address: bytes
    signer_account: SignerAccount
    bump: int

    @classmethod
    def _open(cls, seed, ledger, payer, multisig_account, transaction_account):
        payer = _pubkey(payer)
        multisig_address = _pubkey(multisig_account)
        transaction_address = _pubkey(transaction_account)
        multisig, transaction = _load_pair(ledger, multisig_address, transaction_address)
        address, bump = find_program_address(
            [seed, payer, transaction_address], PROGRAM_ID
        )
        record = ledger.init_account(
            address, SignerAccount(), 8 + SignerAccount.get_max_size()
        )
        return cls(
            ledger,
            payer,
            multisig_address,
            multisig,
            transaction_address,
            transaction,
            address,
            record,
            bump,
        )


@dataclass
class ApproveTransaction(_SignerRecordContext):
    @classmethod
    def load(cls, ledger, payer, multisig_account, transaction_account):
        return cls._open(
            b"approve_signer", ledger, payer, multisig_account, transaction_account
        )


@dataclass
class RejectTransaction(_SignerRecordContext):
    @classmethod
    def load(cls, ledger, payer, multisig_account, transaction_account):
        return cls._open(
            b"reject_signer", ledger, payer, multisig_account, transaction_account
        )


@dataclass
class ExecuteTransaction:
    ledger: Ledger = field(repr=False)
    payer: bytes
    multisig_address: bytes
    multisig_account: MultiSigAccount
    transaction_address: bytes
    transaction_account: Transactions

    @classmethod
    def load(cls, ledger, payer, multisig_account, transaction_account):
        payer = _pubkey(payer)
        multisig_address = _pubkey(multisig_account)
        transaction_address = _pubkey(transaction_account)
        multisig, transaction = _load_pair(ledger, multisig_address, transaction_address)
        return cls(
            ledger, payer, multisig_address, multisig, transaction_address, transaction
        )