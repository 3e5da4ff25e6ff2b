from httpx import AsyncClient

from shortlink.app.services.password_hasher import PasswordHasher

ADMIN_ID = "alice"
ADMIN_PASSWORD = "correct-horse"

# Lowest cost bcrypt accepts
test_hasher = PasswordHasher(rounds=4)


async def login(client: AsyncClient, account_id: str = ADMIN_ID, password: str = ADMIN_PASSWORD):
    response = await client.post(
        "/api/auth/login", json={"id": account_id, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token_id: str) -> dict:
    return {"Authorization": f"Bearer {token_id}"}
