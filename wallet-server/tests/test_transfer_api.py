import pytest
from sqlalchemy.exc import OperationalError

from fingerprint_wallet.infrastructure.database.repositories import SqlWalletRepository


async def test_send_moves_funds(client, seed_wallets):
    response = await client.post("/api/wallet/send", json={"sender": "alice", "receiver": "bob", "amount": 500})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Sent 500 to bob"}
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 9500
    assert (await client.get("/api/wallet/bob")).json()["balance"] == 500

    history = (await client.get("/api/transactions/bob")).json()["transactions"]
    assert len(history) == 1
    assert {k: history[0][k] for k in ("sender", "receiver", "amount")} == {
        "sender": "alice",
        "receiver": "bob",
        "amount": 500,
    }
    assert "createdAt" in history[0]


async def test_send_insufficient_balance_is_a_no_op(client, seed_wallets):
    response = await client.post("/api/wallet/send", json={"sender": "bob", "receiver": "alice", "amount": 1})

    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient balance"
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 10000
    assert (await client.get("/api/wallet/bob")).json()["balance"] == 0
    assert (await client.get("/api/transactions/bob")).json()["transactions"] == []


async def test_send_from_missing_wallet(client, seed_wallets):
    response = await client.post("/api/wallet/send", json={"sender": "ghost", "receiver": "bob", "amount": 1})

    assert response.status_code == 404
    assert response.json()["detail"] == "Sender wallet not found"


@pytest.mark.parametrize(
    "payload",
    [
        {"receiver": "bob", "amount": 5},
        {"sender": "alice", "amount": 5},
        {"sender": "alice", "receiver": "bob"},
        {"sender": "alice", "receiver": "bob", "amount": 0},
        {"sender": "alice", "receiver": "bob", "amount": -1},
        {"sender": "alice", "receiver": "alice", "amount": 5},
    ],
)
async def test_send_rejects_bad_input(client, seed_wallets, payload):
    response = await client.post("/api/wallet/send", json=payload)

    assert response.status_code == 400
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 10000


async def test_send_rejects_fractional_amount(client, seed_wallets):
    response = await client.post("/api/wallet/send", json={"sender": "alice", "receiver": "bob", "amount": 1.5})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request data"


async def test_transfer_returns_transaction_id(client, seed_wallets):
    response = await client.post("/api/transfer", json={"sender": "alice", "receiver": "bob", "amount": 700})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Transferred 700 from alice to bob"

    history = (await client.get("/api/transactions/alice")).json()["transactions"]
    assert [entry["id"] for entry in history] == [body["transactionId"]]


async def test_transfer_insufficient_balance(client, seed_wallets):
    response = await client.post("/api/transfer", json={"sender": "alice", "receiver": "bob", "amount": 10001})

    assert response.status_code == 400
    assert "Insufficient balance" in response.json()["detail"]


async def test_transfer_missing_fields(client, seed_wallets):
    response = await client.post("/api/transfer", json={"sender": "alice"})

    assert response.status_code == 400


async def test_transfer_to_unregistered_receiver(client, seed_wallets):
    response = await client.post("/api/transfer", json={"sender": "alice", "receiver": "frank", "amount": 40})

    assert response.status_code == 200
    assert (await client.get("/api/wallet/frank")).json()["balance"] == 40


async def test_registered_users_can_trade(client, register_user):
    await register_user("alice")
    await register_user("bob")

    response = await client.post("/api/wallet/send", json={"sender": "alice", "receiver": "bob", "amount": 500})

    assert response.status_code == 200
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 9500
    assert (await client.get("/api/wallet/bob")).json()["balance"] == 10500


@pytest.mark.parametrize("path", ["/api/wallet/send", "/api/transfer"])
async def test_amount_beyond_64_bit_is_rejected(client, seed_wallets, path):
    response = await client.post(path, json={"sender": "alice", "receiver": "bob", "amount": 2**63})

    assert response.status_code == 400
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 10000


async def test_send_past_receiver_limit(client, seed_wallets):
    await client.put("/api/wallet/bob", json={"balance": 2**63 - 1})

    response = await client.post("/api/wallet/send", json={"sender": "alice", "receiver": "bob", "amount": 1})

    assert response.status_code == 400
    assert response.json()["detail"] == "Receiver balance limit exceeded"
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 10000


async def test_overlong_username_is_rejected(client, seed_wallets):
    response = await client.post("/api/transfer", json={"sender": "alice", "receiver": "x" * 65, "amount": 1})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request data"


@pytest.mark.parametrize("path", ["/api/wallet/send", "/api/transfer"])
async def test_store_failure_answers_generic_500(client, seed_wallets, monkeypatch, path):
    async def unavailable(self, username, amount):
        raise OperationalError("UPDATE wallets", {}, Exception("database is locked"))

    monkeypatch.setattr(SqlWalletRepository, "debit", unavailable)

    response = await client.post(path, json={"sender": "alice", "receiver": "bob", "amount": 500})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "locked" not in response.text

    monkeypatch.undo()
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 10000
    assert (await client.get("/api/wallet/bob")).json()["balance"] == 0
