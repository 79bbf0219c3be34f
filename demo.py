#!/usr/bin/env python3
"""
Complete demo of the Quorum Vault approval flow
"""

from quorum_vault.wallet import MultiSigWallet
from quorum_vault.keys import OwnerKey
from quorum_vault.rules import ThresholdRule
from quorum_vault.errors import AlreadyExecuted, AlreadySigned, TransferFailed, Unauthorized

def main():
    print("=" * 60)
    print("🏦 QUORUM VAULT - COMPLETE DEMO")
    print("=" * 60)
    print()

    # Step 1: Setup
    print("🔧 STEP 1: Generating owner keys")
    print("-" * 40)

    participants = []
    for name in ["Alice", "Bob", "Carol"]:
        key = OwnerKey()
        participants.append({'name': name, 'key': key})
        print(f"✅ {name}: {key.identity[:16]}...")

    print()

    # Step 2: Create wallet
    print("🏗️  STEP 2: Creating wallet")
    print("-" * 40)

    owners = [p['key'].identity for p in participants]
    wallet = MultiSigWallet(owners, 2, threshold_rule=ThresholdRule.EXCEED)

    print(f"✅ Wallet ID: {wallet.wallet_id}")
    print(f"✅ Threshold: {wallet.threshold} (rule: {wallet.threshold_rule.value})")
    print(f"✅ Signatures needed to execute: {wallet.engine.required_signatures}")
    print()

    # Step 3: Fund it
    print("💰 STEP 3: Depositing funds")
    print("-" * 40)

    wallet.deposit("treasury", 100_000_000)
    print(f"✅ Balance: {wallet.get_balance():,}")
    print()

    # Step 4: Request and approve
    print("📝 STEP 4: Requesting a transfer")
    print("-" * 40)

    alice, bob, carol = (p['key'].identity for p in participants)
    tx = wallet.request_transaction(alice, "supplier", 25_000_000)
    print(f"✅ Transaction {tx.index}: {tx.value:,} to {tx.recipient}")

    for p in participants:
        tx = wallet.approve_transaction(p['key'].identity, tx.index)
        state = "EXECUTED" if tx.executed else "pending"
        print(f"✍️  {p['name']} signed ({tx.signature_count}/{wallet.engine.required_signatures}) - {state}")

    print(f"✅ Balance: {wallet.get_balance():,}")
    print(f"✅ Supplier received: {wallet.gateway.received_by('supplier'):,}")
    print()

    # Step 5: Rejected operations
    print("🚫 STEP 5: Rejected operations")
    print("-" * 40)

    for label, action in [
        ("Approve executed transaction", lambda: wallet.approve_transaction(alice, 0)),
        ("Outsider request", lambda: wallet.request_transaction("mallory", "mallory", 1)),
    ]:
        try:
            action()
        except (AlreadyExecuted, Unauthorized) as e:
            print(f"❌ {label}: {type(e).__name__} - {e}")

    tx = wallet.request_transaction(bob, "refusing_contract", 10_000_000)
    wallet.approve_transaction(bob, tx.index)
    try:
        wallet.approve_transaction(bob, tx.index)
    except AlreadySigned as e:
        print(f"❌ Double signature: {e}")
    print()

    # Step 6: Rollback
    print("↩️  STEP 6: Failed transfer rollback")
    print("-" * 40)

    def refuse(recipient, value):
        raise RuntimeError("recipient refuses payments")

    wallet.gateway.register_hook("refusing_contract", refuse)
    wallet.approve_transaction(carol, tx.index)
    before = wallet.state_hash()
    try:
        wallet.approve_transaction(alice, tx.index)
    except TransferFailed as e:
        print(f"❌ {e}")

    print(f"✅ State unchanged: {wallet.state_hash() == before}")
    print(f"✅ Balance: {wallet.get_balance():,}")
    print()

    print("📜 Event log:")
    for event in wallet.get_events():
        print(f"   {event.to_dict()}")

if __name__ == "__main__":
    main()
