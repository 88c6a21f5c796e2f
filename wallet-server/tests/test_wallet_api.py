from sqlalchemy.exc import OperationalError

from fingerprint_wallet.infrastructure.database.repositories import SqlWalletRepository


async def test_create_then_read_round_trip(client):
    created = await client.post(
        "/api/wallet/create",
        json={"username": "carol", "balance": 250, "address": "0xCAROL", "transactions": [{"note": "seed"}]},
    )

    assert created.status_code == 200
    assert created.json()["message"] == "Wallet created successfully"

    fetched = await client.get("/api/wallet/carol")
    assert fetched.status_code == 200
    body = fetched.json()
    assert body["username"] == "carol"
    assert body["balance"] == 250
    assert body["address"] == "0xCAROL"
    assert body["transactions"] == [{"note": "seed"}]
    assert body["createdAt"] is not None


async def test_create_fills_defaults(client):
    created = await client.post("/api/wallet/create", json={"username": "dave"})

    wallet = created.json()["wallet"]
    assert wallet["balance"] == 0
    assert wallet["transactions"] == []
    assert wallet["address"].startswith("0x")
    assert len(wallet["address"]) == 42
    assert wallet["address"][2:] == wallet["address"][2:].upper()


async def test_create_requires_username(client):
    response = await client.post("/api/wallet/create", json={"balance": 10})

    assert response.status_code == 400
    assert response.json()["detail"] == "Username is required"


async def test_create_duplicate_wallet(client, seed_wallets):
    response = await client.post("/api/wallet/create", json={"username": "alice"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Wallet already exists"
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 10000


async def test_get_missing_wallet(client):
    response = await client.get("/api/wallet/ghost")

    assert response.status_code == 404
    assert response.json()["detail"] == "Wallet not found"


async def test_update_changes_only_given_fields(client, seed_wallets):
    response = await client.put("/api/wallet/alice", json={"balance": 42})

    assert response.status_code == 200
    wallet = response.json()["wallet"]
    assert wallet["balance"] == 42
    assert wallet["address"] == "0xALICE"
    assert wallet["transactions"] == []


async def test_update_ignores_empty_address(client, seed_wallets):
    response = await client.put("/api/wallet/alice", json={"address": "", "transactions": [1, 2]})

    wallet = response.json()["wallet"]
    assert wallet["address"] == "0xALICE"
    assert wallet["transactions"] == [1, 2]


async def test_update_balance_to_zero(client, seed_wallets):
    response = await client.put("/api/wallet/alice", json={"balance": 0})

    assert response.json()["wallet"]["balance"] == 0


async def test_update_missing_wallet(client):
    response = await client.put("/api/wallet/ghost", json={"balance": 1})

    assert response.status_code == 404
    assert response.json()["detail"] == "Wallet not found"


async def test_list_wallets(client, seed_wallets):
    response = await client.get("/api/wallets")

    assert response.status_code == 200
    names = {wallet["username"] for wallet in response.json()["wallets"]}
    assert names == {"alice", "bob"}


async def test_balance_beyond_64_bit_is_rejected(client, seed_wallets):
    created = await client.post("/api/wallet/create", json={"username": "carol", "balance": 2**63})
    updated = await client.put("/api/wallet/alice", json={"balance": 2**63})

    assert created.status_code == 400
    assert updated.status_code == 400
    assert (await client.get("/api/wallet/carol")).status_code == 404
    assert (await client.get("/api/wallet/alice")).json()["balance"] == 10000


async def test_negative_balance_is_rejected(client):
    response = await client.post("/api/wallet/create", json={"username": "carol", "balance": -1})

    assert response.status_code == 400


async def test_overlong_wallet_username_is_rejected(client):
    response = await client.post("/api/wallet/create", json={"username": "x" * 65})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request data"


async def test_store_failure_on_read_answers_generic_500(client, monkeypatch):
    async def unavailable(self, username):
        raise OperationalError("SELECT wallets", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SqlWalletRepository, "get_wallet", unavailable)

    response = await client.get("/api/wallet/alice")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
