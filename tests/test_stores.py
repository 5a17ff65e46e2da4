"""Store API tests."""


def create_store_payload(owner_id: int, **overrides):
    payload = {
        "name": "Main Street Grocers",
        "email": "grocers@example.com",
        "address": "100 Main Street",
        "ownerId": owner_id,
    }
    payload.update(overrides)
    return payload


def test_admin_creates_store(client, admin_user, owner_user, login):
    """Test creating a store starts with an empty aggregate."""
    login("admin@example.com")
    response = client.post("/api/stores", json=create_store_payload(owner_user.id))
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Main Street Grocers"
    assert data["ownerId"] == owner_user.id
    assert data["averageRating"] == "0.00"
    assert data["totalRatings"] == 0


def test_create_store_requires_admin(client, regular_user, owner_user, login, db):
    """Test a regular user gets 403 and nothing is created."""
    from store_ratings.models.store import Store

    login("user@example.com")
    response = client.post("/api/stores", json=create_store_payload(owner_user.id))
    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden"
    assert db.query(Store).count() == 0


def test_create_store_requires_session(client, owner_user):
    """Test anonymous callers cannot create stores."""
    response = client.post("/api/stores", json=create_store_payload(owner_user.id))
    assert response.status_code == 401


def test_create_store_unknown_owner(client, admin_user, login):
    """Test the owner must exist."""
    login("admin@example.com")
    response = client.post("/api/stores", json=create_store_payload(9999))
    assert response.status_code == 400
    assert response.json()["detail"] == "Owner does not exist"


def test_create_store_duplicate_email(client, admin_user, owner_user, store, login):
    """Test store emails are unique."""
    login("admin@example.com")
    response = client.post(
        "/api/stores", json=create_store_payload(owner_user.id, email="bakery@example.com")
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Store with this email already exists"


def test_create_store_validation(client, admin_user, owner_user, login):
    """Test store field constraints."""
    login("admin@example.com")

    response = client.post("/api/stores", json=create_store_payload(owner_user.id, name=""))
    assert response.status_code == 400
    assert response.json()["detail"] == "Store name is required"

    response = client.post(
        "/api/stores", json=create_store_payload(owner_user.id, name="n" * 256)
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Store name must not exceed 255 characters"

    response = client.post("/api/stores", json=create_store_payload(owner_user.id, address=""))
    assert response.status_code == 400
    assert response.json()["detail"] == "Address is required"


def test_list_stores_annotates_user_rating(client, regular_user, storage, store, login):
    """Test non-admin listings include the caller's own rating."""
    other = storage.create_store(
        name="Another Store", email="another@example.com", address="1 Side Road",
        owner_id=store.owner_id,
    )
    storage.create_rating(user_id=regular_user["id"], store_id=store.id, rating=4)

    login("user@example.com")
    response = client.get("/api/stores")
    assert response.status_code == 200
    by_id = {s["id"]: s for s in response.json()}
    assert by_id[store.id]["userRating"] == 4
    assert by_id[other.id]["userRating"] is None


def test_list_stores_admin_has_no_user_rating(client, admin_user, store, login):
    """Test admin listings are not annotated."""
    login("admin@example.com")
    response = client.get("/api/stores")
    assert response.status_code == 200
    stores = response.json()
    assert len(stores) == 1
    assert "userRating" not in stores[0]


def test_list_stores_requires_session(client, store):
    """Test store listing needs a session."""
    assert client.get("/api/stores").status_code == 401


def test_list_stores_ordered_by_name(client, regular_user, storage, owner_user, login):
    """Test default ordering is by name ascending."""
    for name in ["Zebra Books", "Apple Market", "Mango Deli"]:
        storage.create_store(
            name=name,
            email=f"{name.split()[0].lower()}@example.com",
            address="Somewhere",
            owner_id=owner_user.id,
        )

    login("user@example.com")
    names = [s["name"] for s in client.get("/api/stores").json()]
    assert names == ["Apple Market", "Mango Deli", "Zebra Books"]

    names = [s["name"] for s in client.get("/api/stores?sortOrder=desc").json()]
    assert names == ["Zebra Books", "Mango Deli", "Apple Market"]


def test_list_stores_sort_by_rating(client, regular_user, storage, owner_user, make_user, login):
    """Test sorting by average rating."""
    low = storage.create_store(
        name="Low Rated", email="low@example.com", address="A", owner_id=owner_user.id
    )
    high = storage.create_store(
        name="High Rated", email="high@example.com", address="B", owner_id=owner_user.id
    )
    rater = make_user("rater@example.com")
    storage.create_rating(user_id=rater.id, store_id=low.id, rating=1)
    storage.create_rating(user_id=rater.id, store_id=high.id, rating=5)

    login("user@example.com")
    response = client.get("/api/stores?sortBy=averageRating&sortOrder=desc")
    assert [s["name"] for s in response.json()] == ["High Rated", "Low Rated"]


def test_list_stores_invalid_sort(client, regular_user, login):
    """Test unknown sort fields are rejected."""
    login("user@example.com")
    assert client.get("/api/stores?sortBy=password").status_code == 400


def test_search_stores(client, regular_user, storage, owner_user, login):
    """Test search matches name or address, ignoring case."""
    storage.create_store(
        name="Harbour Fish Market", email="fish@example.com", address="3 Quay Lane",
        owner_id=owner_user.id,
    )
    storage.create_store(
        name="Hilltop Florist", email="florist@example.com", address="9 Harbour View",
        owner_id=owner_user.id,
    )
    storage.create_store(
        name="Town Library Cafe", email="cafe@example.com", address="1 High Street",
        owner_id=owner_user.id,
    )

    login("user@example.com")
    response = client.get("/api/stores?search=harbour")
    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Harbour Fish Market", "Hilltop Florist"]


def test_search_stores_escapes_wildcards(client, regular_user, store, login):
    """Test LIKE wildcards in the query are matched literally."""
    login("user@example.com")
    assert client.get("/api/stores?search=%25").json() == []


def test_list_owner_stores(client, regular_user, storage, owner_user, store, login):
    """Test listing stores by owner supports several stores per owner."""
    storage.create_store(
        name="Bakery Annex", email="annex@example.com", address="13 Corner Street",
        owner_id=owner_user.id,
    )

    login("user@example.com")
    response = client.get(f"/api/stores/owner/{owner_user.id}")
    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Bakery Annex", "Corner Street Bakery"]

    assert client.get("/api/stores/owner/9999").json() == []


def test_get_store(client, regular_user, store, login):
    """Test fetching a single store."""
    login("user@example.com")
    response = client.get(f"/api/stores/{store.id}")
    assert response.status_code == 200
    assert response.json()["email"] == "bakery@example.com"

    assert client.get("/api/stores/9999").status_code == 404
