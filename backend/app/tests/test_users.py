"""
Tests for profile endpoints.
"""


def test_get_and_update_profile(client, sign_in):
    """Test profile update."""
    alice_id, headers = sign_in("alice@mail.com", "Alice")
    
    response = client.put(
        f"/api/users/{alice_id}",
        json={"display_name": "Alice A.", "share_with_friends": True},
        headers=headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["display_name"] == "Alice A."
    assert body["share_with_friends"] is True
    assert body["photo_url"] == ""
    
    response = client.get(f"/api/users/{alice_id}", headers=headers)
    assert response.json()["display_name"] == "Alice A."


def test_update_other_profile_forbidden(client, sign_in):
    """Test updating another user's profile."""
    alice_id, _ = sign_in("alice@mail.com")
    _, bob_headers = sign_in("bob@mail.com")
    response = client.put(f"/api/users/{alice_id}", json={"display_name": "Hacked"}, headers=bob_headers)
    assert response.status_code == 403
    assert response.json()["kind"] == "forbidden"


def test_get_missing_user(client, sign_in):
    """Test getting a missing user."""
    _, headers = sign_in("alice@mail.com")
    response = client.get("/api/users/missing", headers=headers)
    assert response.status_code == 404


def test_search_by_email(client, sign_in):
    """Test user search by email."""
    alice_id, headers = sign_in("alice@mail.com")
    bob_id, _ = sign_in("bob@mail.com")
    
    response = client.get("/api/users/search/BOB@mail.com", headers=headers)
    assert response.status_code == 200
    assert response.json() == {
        "id": bob_id,
        "email": "bob@mail.com",
        "display_name": "bob",
        "photo_url": ""
    }
    assert client.get("/api/users/search/nobody@mail.com", headers=headers).status_code == 404


def test_sharing_with_non_friend_rejected(client, sign_in):
    """Test sharing grant to a non-friend over the API."""
    alice_id, headers = sign_in("alice@mail.com")
    bob_id, _ = sign_in("bob@mail.com")
    response = client.put(
        f"/api/users/{alice_id}/sharing", json={"transaction_share_friend_ids": [bob_id]}, headers=headers
    )
    assert response.status_code == 422
    assert response.json()["kind"] == "invalid_input"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}


def test_other_profile_hides_friends_and_grants(client, sign_in):
    """Test another user's profile hides friends and grants."""
    alice_id, alice_headers = sign_in("alice@mail.com")
    bob_id, bob_headers = sign_in("bob@mail.com")
    client.post(f"/api/users/{alice_id}/friend-requests", json={"friend_id": bob_id}, headers=alice_headers)
    client.post(f"/api/users/{bob_id}/friend-requests/{alice_id}/accept", headers=bob_headers)
    client.put(
        f"/api/users/{alice_id}/sharing", json={"balance_share_friend_ids": [bob_id]}, headers=alice_headers
    )
    
    response = client.get(f"/api/users/{alice_id}", headers=bob_headers)
    assert response.status_code == 200
    assert response.json() == {
        "id": alice_id,
        "email": "alice@mail.com",
        "display_name": "alice",
        "photo_url": ""
    }
    
    own = client.get(f"/api/users/{alice_id}", headers=alice_headers).json()
    assert own["friend_ids"] == [bob_id]
    assert own["balance_share_friend_ids"] == [bob_id]
