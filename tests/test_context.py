import pytest

from multisig.context import (
    PROGRAM_ID,
    AccountMeta,
    ApproveTransaction,
    CreateMultisig,
    CreateTransaction,
    ExecuteTransaction,
    Instruction,
    Ledger,
    RejectTransaction,
    find_program_address,
)
from multisig.errors import ConstraintError
from multisig.state import MultiSigAccount, SignerAccount, Transactions

PAYER = b"\x01" * 32
OWNER_A = b"\x02" * 32
OWNER_B = b"\x03" * 32


def _setup():
    ledger = Ledger(clock=lambda: 1000)
    ms = CreateMultisig.load(ledger, PAYER, [OWNER_A, OWNER_B])
    ms.multisig_account.owners = [OWNER_A, OWNER_B]
    tx = CreateTransaction.load(ledger, OWNER_A, ms.multisig_address)
    tx.transaction_account.multisig_account = ms.multisig_address
    return ledger, ms, tx


def test_program_id_is_a_key():
    meta = AccountMeta.new_readonly(PROGRAM_ID, False)
    assert meta.pubkey == PROGRAM_ID
    assert len(meta.pubkey) == 32


def test_account_meta_new_is_writable():
    meta = AccountMeta.new(OWNER_A, True)
    assert (meta.pubkey, meta.is_signer, meta.is_writable) == (OWNER_A, True, True)


def test_account_meta_readonly():
    meta = AccountMeta.new_readonly(OWNER_A, False)
    assert (meta.pubkey, meta.is_signer, meta.is_writable) == (OWNER_A, False, False)


def test_account_meta_rejects_short_key():
    with pytest.raises(ValueError):
        AccountMeta.new(b"\x01" * 5, True)


def test_instruction_holds_fields():
    meta = AccountMeta.new(OWNER_A, True)
    ins = Instruction(program_id=OWNER_A, accounts=[meta], data=b"\x09")
    assert ins.accounts == [meta]
    assert ins.data == b"\x09"


def test_find_program_address_is_deterministic():
    first = find_program_address([b"multisig", PAYER], PROGRAM_ID)
    second = find_program_address([b"multisig", PAYER], PROGRAM_ID)
    assert first == second
    address, bump = first
    assert len(address) == 32
    assert 0 <= bump <= 255


def test_find_program_address_depends_on_seeds():
    a, _ = find_program_address([b"multisig", OWNER_A], PROGRAM_ID)
    b, _ = find_program_address([b"multisig", OWNER_B], PROGRAM_ID)
    assert a != b


def test_find_program_address_rejects_long_seed():
    with pytest.raises(ValueError):
        find_program_address([b"x" * 33], PROGRAM_ID)


def test_find_program_address_rejects_too_many_seeds():
    with pytest.raises(ValueError):
        find_program_address([b"x"] * 16, PROGRAM_ID)


def test_ledger_init_and_get():
    ledger = Ledger()
    account = MultiSigAccount()
    ledger.init_account(OWNER_A, account, 50)
    assert ledger.get(OWNER_A) is account
    assert ledger.spaces[OWNER_A] == 50


def test_ledger_init_twice_fails():
    ledger = Ledger()
    ledger.init_account(OWNER_A, MultiSigAccount(), 50)
    with pytest.raises(ConstraintError):
        ledger.init_account(OWNER_A, MultiSigAccount(), 50)


def test_ledger_get_missing_fails():
    with pytest.raises(ConstraintError):
        Ledger().get(OWNER_A)


def test_ledger_now_uses_clock():
    assert Ledger(clock=lambda: 1234).now() == 1234


def test_ledger_invoke_records_and_calls_invoker():
    calls = []
    ledger = Ledger(invoker=lambda ins: calls.append(ins) or "done")
    ins = Instruction(OWNER_A, [], b"")
    assert ledger.invoke(ins) == "done"
    assert calls == [ins]
    assert ledger.invoked == [ins]


def test_create_multisig_load_allocates_space():
    ledger = Ledger()
    ctx = CreateMultisig.load(ledger, PAYER, [OWNER_A, OWNER_B, PAYER])
    expected, bump = find_program_address([b"multisig", PAYER], PROGRAM_ID)
    assert ctx.multisig_address == expected
    assert ctx.bump == bump
    assert ledger.spaces[expected] == 8 + MultiSigAccount.get_max_size(3)
    assert ledger.get(expected) is ctx.multisig_account


def test_create_multisig_once_per_payer():
    ledger = Ledger()
    CreateMultisig.load(ledger, PAYER, [OWNER_A])
    with pytest.raises(ConstraintError):
        CreateMultisig.load(ledger, PAYER, [OWNER_A])


def test_create_transaction_address_follows_counter():
    ledger, ms, tx = _setup()
    assert ledger.spaces[tx.transaction_address] == 8 + Transactions.get_max_size(2)
    ms.multisig_account.num_transactions_created += 1
    nxt = CreateTransaction.load(ledger, OWNER_A, ms.multisig_address)
    assert nxt.transaction_address != tx.transaction_address


def test_create_transaction_same_counter_collides():
    ledger, ms, _ = _setup()
    with pytest.raises(ConstraintError):
        CreateTransaction.load(ledger, OWNER_B, ms.multisig_address)


def test_create_transaction_requires_multisig_account():
    ledger, _, tx = _setup()
    with pytest.raises(ConstraintError):
        CreateTransaction.load(ledger, OWNER_A, tx.transaction_address)


def test_approve_load_creates_signer_record():
    ledger, ms, tx = _setup()
    ctx = ApproveTransaction.load(
        ledger, OWNER_B, ms.multisig_address, tx.transaction_address
    )
    assert ctx.transaction_account is tx.transaction_account
    assert ledger.spaces[ctx.signer_address] == 8 + SignerAccount.get_max_size()
    assert ledger.get(ctx.signer_address) is ctx.signer_account


def test_approve_twice_by_same_payer_fails():
    ledger, ms, tx = _setup()
    ApproveTransaction.load(ledger, OWNER_B, ms.multisig_address, tx.transaction_address)
    with pytest.raises(ConstraintError):
        ApproveTransaction.load(
            ledger, OWNER_B, ms.multisig_address, tx.transaction_address
        )


def test_approve_and_reject_records_are_distinct():
    ledger, ms, tx = _setup()
    approve = ApproveTransaction.load(
        ledger, OWNER_B, ms.multisig_address, tx.transaction_address
    )
    reject = RejectTransaction.load(
        ledger, OWNER_B, ms.multisig_address, tx.transaction_address
    )
    assert approve.signer_address != reject.signer_address


def test_has_one_mismatch_fails():
    ledger, ms, tx = _setup()
    tx.transaction_account.multisig_account = OWNER_A
    with pytest.raises(ConstraintError, match="has one"):
        RejectTransaction.load(
            ledger, OWNER_B, ms.multisig_address, tx.transaction_address
        )
    with pytest.raises(ConstraintError, match="has one"):
        ExecuteTransaction.load(
            ledger, OWNER_B, ms.multisig_address, tx.transaction_address
        )


def test_execute_load_returns_ledger_accounts():
    ledger, ms, tx = _setup()
    ctx = ExecuteTransaction.load(
        ledger, PAYER, ms.multisig_address, tx.transaction_address
    )
    assert ctx.multisig_account is ms.multisig_account
    assert ctx.transaction_account is tx.transaction_account
    assert ctx.ledger.now() == 1000