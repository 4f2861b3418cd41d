"""Account listing — verifies the {_id, username, email} projection."""


async def test_list_users_projects_public_fields_only(client, signup):
    await signup("bob", "bob@x.com")
    await signup("amy", "amy@x.com")

    res = await client.get("/api/users")

    assert res.status_code == 200
    users = res.json()
    assert [u["username"] for u in users] == ["bob", "amy"]
    for user in users:
        assert set(user) == {"_id", "username", "email"}


async def test_list_users_never_contains_password_material(client, signup):
    await signup("bob", "bob@x.com", "pw123456")
    body = (await client.get("/api/users")).text
    assert "password" not in body.lower()
    assert "pbkdf2" not in body
    assert "pw123456" not in body


async def test_list_users_empty(client):
    res = await client.get("/api/users")
    assert res.status_code == 200
    assert res.json() == []


async def test_list_users_store_down_returns_500(disconnected_client):
    res = await disconnected_client.get("/api/users")
    assert res.status_code == 500
    assert res.json()["message"] == "Error fetching users"
