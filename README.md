# multisig

This package is a multi-signature wallet program that runs against a small in-memory ledger.
Several owners share one wallet. A proposed transaction runs only after enough owners
have approved it. The required number of approvals is the threshold.

## Modules

- `multisig.errors`: this module defines `ErrorCode`, `MultisigError` and `ConstraintError`.
- `multisig.state`: this module defines the account records `MultiSigAccount`, `Transactions` and `SignerAccount`. Each record has a `get_max_size` that gives its storage size in bytes.
- `multisig.context`: this module defines `Ledger`, `find_program_address`, `AccountMeta`, `Instruction` and the per-instruction contexts. The contexts are `CreateMultisig`, `CreateTransaction`, `ApproveTransaction`, `RejectTransaction` and `ExecuteTransaction`.
- `multisig.program`: this module holds the instruction handlers.

## How it works

Each handler in `multisig.program` takes a context. You build the context with the
`load` classmethod of the matching context class. `load` finds the accounts on the
`Ledger` and checks them. Where the instruction creates a new account, `load` derives the
account's address from seeds and the program id with `find_program_address`. It then
stores the new account on the ledger.

- **`create_multisig(ctx, owners, threshold)`** sets up the wallet.
  - The threshold must fit in a byte. If it does not, the call raises `ValueError`.
  - The threshold must be at least 1 and no larger than the number of owners.
  - The wallet's address is derived from the payer's key, so each payer has one wallet.
- **`create_transaction(ctx, accounts, data)`** records a proposal.
  - It stores the accounts that the proposal uses, given as `SignerAccount` values, and the instruction data.
  - It stores the ledger's current time.
  - If the proposer is an owner, the proposer's approval is counted at once.
  - The call increments the wallet's transaction counter.
- **`approve_transaction(ctx)`** and **`reject_transaction(ctx)`** set the calling owner's vote.
  - Each also fills in a signer record of its own. That record is derived from the payer and the transaction.
  - An owner can therefore approve a given transaction once and reject it once.
- **`cancel_transaction(ctx)`** marks a pending transaction complete. Only its initiator may call it.
- **`execute_transaction(ctx)`** runs a pending transaction.
  - It needs at least `threshold` approvals, and it marks the transaction complete.
  - It builds an `Instruction` from the stored accounts. Signer accounts become writable signer metas. The other accounts become read-only metas. The first account is the target program.
  - It passes the `Instruction` to `Ledger.invoke` and returns the invoker's result.
  - If the transaction lists no accounts, nothing is invoked.
  - If the invoker raises, the transaction is left pending.

Handler failures raise `MultisigError`. Its `code` is an `ErrorCode`, and the error's text is `code.message`. The codes are:

| Code | Value |
| --- | --- |
| `THRESHOLD_TOO_LOW` | 6000 |
| `THRESHOLD_TOO_HIGH` | 6001 |
| `SIGNER_NOT_IN_OWNERS` | 6002 |
| `TRANSACTION_ALREADY_EXECUTED` | 6003 |
| `ONLY_INITIATOR_CAN_CANCEL` | 6004 |
| `NOT_ENOUGH_APPROVALS` | 6005 |

When `load` rejects an account, it raises `ConstraintError`. Examples are:

- an address that is already in use;
- a missing account;
- an account of the wrong kind;
- a transaction that belongs to a different wallet.

## The ledger

`Ledger(clock=None, invoker=None)` holds the following:

- `accounts` maps each address to its account.
- `spaces` maps each address to the space the account was given.
- `invoked` lists every `Instruction` passed to `invoke`.

The `clock` returns the current Unix time, and defaults to the system clock. The `invoker`, if one is given, receives each invoked `Instruction`.

## Usage

```python
from multisig import program
from multisig.context import (
    ApproveTransaction, CreateMultisig, CreateTransaction, ExecuteTransaction, Ledger,
)
from multisig.state import SignerAccount

ledger = Ledger(clock=lambda: 1_700_000_000, invoker=lambda ix: None)
alice, bob, carol = bytes([1]) * 32, bytes([2]) * 32, bytes([3]) * 32

ctx = CreateMultisig.load(ledger, alice, [alice, bob, carol])
program.create_multisig(ctx, [alice, bob, carol], 2)
wallet = ctx.multisig_address

ctx = CreateTransaction.load(ledger, alice, wallet)
program.create_transaction(ctx, [SignerAccount(bytes([9]) * 32, False)], b"\x01")
tx = ctx.transaction_address

program.approve_transaction(ApproveTransaction.load(ledger, bob, wallet, tx))
program.execute_transaction(ExecuteTransaction.load(ledger, alice, wallet, tx))
assert ledger.get(tx).did_complete
```

## What it does not do

- The package is a library only and has no command-line interface.
- It does not connect to any network. Accounts exist only in the `Ledger`'s memory and are not saved anywhere.
- It does not check signatures. The key passed as the payer or proposer is trusted as the caller.
- It does not move funds. Executing a transaction only hands the instruction to the invoker you supply.

## Tests

```
pip install -e ".[test]"
pytest
```