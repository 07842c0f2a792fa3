"""Instruction handlers of the multisig program."""

from multisig.context import AccountMeta, Instruction
from multisig.errors import ErrorCode, MultisigError
from multisig.state import SignerAccount

_U8_MAX = 0xFF
_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF


def _require(condition, code):
    if not condition:
        raise MultisigError(code)


def _owner_index(owners, key):
    try:
        return owners.index(key)
    except ValueError:
        raise MultisigError(ErrorCode.SIGNER_NOT_IN_OWNERS) from None


def create_multisig(ctx, owners, threshold):
    """Set up a wallet owned by ``owners`` that needs ``threshold`` approvals."""
    if not 0 <= threshold <= _U8_MAX:
        raise ValueError(f"threshold must fit in a byte, got {threshold}")
    owners = [bytes(owner) for owner in owners]

    _require(threshold > 0, ErrorCode.THRESHOLD_TOO_LOW)
    # The owner count is compared as a single byte.
    _require(threshold <= len(owners) & _U8_MAX, ErrorCode.THRESHOLD_TOO_HIGH)

    account = ctx.multisig_account
    account.owners = owners
    account.threshold = threshold
    account.nonce = 0
    account.num_transactions_created = 0


def create_transaction(ctx, accounts, data):
    """Propose a transaction; the proposer's approval is counted if an owner."""
    multisig = ctx.multisig_acnt
    transaction = ctx.transaction_account
    proposer = ctx.proposer

    if multisig.num_transactions_created >= _U64_MAX:
        raise OverflowError("transaction counter overflow")

    transaction.transaction_index = multisig.num_transactions_created
    transaction.parent = ctx.multisig_address
    transaction.initiator = proposer
    transaction.accounts = [
        SignerAccount(bytes(account.pubkey), bool(account.is_signer))
        for account in accounts
    ]
    transaction.multisig_account = ctx.multisig_address

    signers = [owner == proposer for owner in multisig.owners]
    if proposer in multisig.owners:
        # Only the first matching owner slot is marked.
        first = multisig.owners.index(proposer)
        signers = [index == first for index in range(len(multisig.owners))]

    transaction.signers = signers
    transaction.time = ctx.ledger.now()
    transaction.data = bytes(data)
    transaction.did_complete = False

    multisig.num_transactions_created += 1


def _record_vote(ctx, approve):
    transaction = ctx.transaction_account
    _require(not transaction.did_complete, ErrorCode.TRANSACTION_ALREADY_EXECUTED)
    index = _owner_index(ctx.multisig_account.owners, ctx.payer)
    transaction.signers[index] = approve
    ctx.signer_account.pubkey = ctx.payer
    ctx.signer_account.is_signer = approve


def approve_transaction(ctx):
    """Record the payer's approval of a pending transaction."""
    _record_vote(ctx, True)


def reject_transaction(ctx):
    """Withdraw the payer's approval of a pending transaction."""
    _record_vote(ctx, False)


def cancel_transaction(ctx):
    """Close a pending transaction; only its initiator may do so."""
    transaction = ctx.transaction_account
    _require(transaction.initiator == ctx.payer, ErrorCode.ONLY_INITIATOR_CAN_CANCEL)
    _require(not transaction.did_complete, ErrorCode.TRANSACTION_ALREADY_EXECUTED)
    transaction.did_complete = True


def execute_transaction(ctx):
    """Run an approved transaction and return what the invoked program gave back."""
    transaction = ctx.transaction_account
    multisig = ctx.multisig_account

    _require(not transaction.did_complete, ErrorCode.TRANSACTION_ALREADY_EXECUTED)
    approvals = sum(1 for approved in transaction.signers if approved)
    _require(approvals >= multisig.threshold, ErrorCode.NOT_ENOUGH_APPROVALS)

    transaction.did_complete = True

    metas = [
        AccountMeta.new(account.pubkey, True)
        if account.is_signer
        else AccountMeta.new_readonly(account.pubkey, False)
        for account in transaction.accounts
    ]
    if not metas:
        return None

    instruction = Instruction(
        program_id=metas[0].pubkey, accounts=metas, data=bytes(transaction.data)
    )
    try:
        return ctx.ledger.invoke(instruction)
    except Exception:
        # A failed invocation undoes the whole instruction.
        transaction.did_complete = False
        raise