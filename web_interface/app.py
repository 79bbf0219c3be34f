#!/usr/bin/env python3
"""
Web interface for Quorum Vault
"""

import logging

from flask import Flask, jsonify, request

from quorum_vault.config import settings
from quorum_vault.errors import (
    AlreadyExecuted,
    AlreadySigned,
    NotFound,
    TransferFailed,
    Unauthorized,
    WalletError,
)
from quorum_vault.keys import OwnerKey, action_message
from quorum_vault.rules import ThresholdRule
from quorum_vault.wallet import MultiSigWallet

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = settings.secret_key

# Global storage (in production, use proper database)
wallets = {}
used_nonces = {}  # wallet_id -> {(caller, nonce)}

ERROR_STATUS = {
    Unauthorized: 403,
    NotFound: 404,
    AlreadySigned: 409,
    AlreadyExecuted: 409,
    TransferFailed: 502,
}


def _error(message: str, status: int):
    return jsonify({'success': False, 'error': message}), status


def _wallet_error(exc: WalletError):
    status = ERROR_STATUS.get(type(exc), 400)
    logger.info("Wallet error (%d): %s", status, exc)
    return jsonify({'success': False, 'error': str(exc), 'type': type(exc).__name__}), status


def _authenticate(wallet: MultiSigWallet, action: str, data: dict, fields: dict):
    """Verify the caller signed this action; returns an error response or None"""
    caller = data.get('caller')
    nonce = data.get('nonce')
    signature = data.get('signature')

    if not isinstance(caller, str) or not isinstance(nonce, (str, int)) or not signature:
        return _error("caller, nonce and signature are required", 400)

    message = action_message(wallet.wallet_id, action, {'caller': caller, 'nonce': nonce, **fields})
    if not OwnerKey.verify_signature(message, signature, caller):
        return _error("Invalid signature", 401)

    seen = used_nonces.setdefault(wallet.wallet_id, set())
    if (caller, nonce) in seen:
        return _error("Nonce already used", 409)
    seen.add((caller, nonce))
    return None


@app.route('/api/wallets', methods=['POST'])
def create_wallet():
    """Create new quorum wallet"""
    data = request.get_json(silent=True) or {}
    keys_info = []

    if 'owners' in data:
        owners = data['owners']
    else:
        # Generate keys for named members
        owners = []
        for member_data in data.get('members') or []:
            if not isinstance(member_data, dict):
                return _error("members must be objects with a name", 400)
            private_hex, public_hex = OwnerKey.generate_key_pair()
            owners.append(public_hex)
            keys_info.append({
                'name': member_data.get('name'),
                'public_key': public_hex,
                'private_key': private_hex,
            })

    if not isinstance(owners, list):
        return _error("owners must be a list", 400)

    try:
        rule = ThresholdRule(data['threshold_rule']) if 'threshold_rule' in data else None
        wallet = MultiSigWallet(owners, data.get('threshold'), threshold_rule=rule)
    except WalletError as e:
        return _wallet_error(e)
    except (ValueError, TypeError) as e:
        return _error(str(e), 400)

    if wallet.wallet_id in wallets:
        return _error("Wallet already exists", 409)

    wallets[wallet.wallet_id] = wallet
    logger.info("Created wallet %s with %d owners", wallet.wallet_id, len(owners))

    return jsonify({
        'success': True,
        'wallet_id': wallet.wallet_id,
        'members': keys_info,
        'wallet': wallet.to_dict(),
    })


@app.route('/api/wallet/<wallet_id>')
def get_wallet(wallet_id):
    """Get wallet state"""
    if wallet_id not in wallets:
        return _error("Wallet not found", 404)
    return jsonify(wallets[wallet_id].to_dict())


@app.route('/api/wallet/<wallet_id>/deposit', methods=['POST'])
def deposit(wallet_id):
    """Deposit funds into wallet"""
    if wallet_id not in wallets:
        return _error("Wallet not found", 404)

    wallet = wallets[wallet_id]
    data = request.get_json(silent=True) or {}
    amount = data.get('amount')

    denied = _authenticate(wallet, 'deposit', data, {'amount': amount})
    if denied:
        return denied

    try:
        balance = wallet.deposit(data['caller'], amount)
    except WalletError as e:
        return _wallet_error(e)

    return jsonify({'success': True, 'balance': balance})


@app.route('/api/wallet/<wallet_id>/transactions', methods=['POST'])
def request_transaction(wallet_id):
    """Request a transfer from the wallet"""
    if wallet_id not in wallets:
        return _error("Wallet not found", 404)

    wallet = wallets[wallet_id]
    data = request.get_json(silent=True) or {}
    to = data.get('to')
    value = data.get('value')

    denied = _authenticate(wallet, 'request', data, {'to': to, 'value': value})
    if denied:
        return denied

    try:
        tx = wallet.request_transaction(data['caller'], to, value)
    except WalletError as e:
        return _wallet_error(e)

    return jsonify({'success': True, 'transaction': tx.to_dict()})


@app.route('/api/wallet/<wallet_id>/transactions/<int:index>/approve', methods=['POST'])
def approve_transaction(wallet_id, index):
    """Approve a pending transfer"""
    if wallet_id not in wallets:
        return _error("Wallet not found", 404)

    wallet = wallets[wallet_id]
    data = request.get_json(silent=True) or {}

    denied = _authenticate(wallet, 'approve', data, {'index': index})
    if denied:
        return denied

    try:
        tx = wallet.approve_transaction(data['caller'], index)
    except WalletError as e:
        return _wallet_error(e)

    return jsonify({
        'success': True,
        'transaction': tx.to_dict(),
        'balance': wallet.get_balance(),
    })


@app.route('/api/wallet/<wallet_id>/transactions')
def get_transactions(wallet_id):
    if wallet_id not in wallets:
        return _error("Wallet not found", 404)
    return jsonify({'transactions': [tx.to_dict() for tx in wallets[wallet_id].get_transactions()]})


@app.route('/api/wallet/<wallet_id>/balance')
def get_balance(wallet_id):
    if wallet_id not in wallets:
        return _error("Wallet not found", 404)
    return jsonify({'balance': wallets[wallet_id].get_balance()})


@app.route('/api/wallet/<wallet_id>/events')
def get_events(wallet_id):
    if wallet_id not in wallets:
        return _error("Wallet not found", 404)
    return jsonify({'events': [e.to_dict() for e in wallets[wallet_id].get_events()]})


@app.route('/api/wallet/<wallet_id>/payees/<address>')
def get_payee(wallet_id, address):
    """Get total paid out to a recipient"""
    if wallet_id not in wallets:
        return _error("Wallet not found", 404)
    return jsonify({'address': address, 'received': wallets[wallet_id].gateway.received_by(address)})


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    app.run(
        host=settings.host,
        port=settings.port,
        debug=False
    )
