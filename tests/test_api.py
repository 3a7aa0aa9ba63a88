from datetime import date, timedelta


def _create_book(client, **overrides):
    payload = {"title": "Dune", "author": "Frank Herbert", "copies": 1, "genre": "Sci-Fi", "year": 1965}
    payload.update(overrides)
    resp = client.post("/api/books", json=payload)
    assert resp.status_code == 201
    return resp.get_json()


def _create_member(client, name="Ada", email=None):
    resp = client.post("/api/members", json={"name": name, "email": email})
    assert resp.status_code == 201
    return resp.get_json()


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_book_crud(client):
    book = _create_book(client, copies=2)
    assert book["available"] == 2

    assert client.get(f"/api/books/{book['id']}").get_json()["title"] == "Dune"
    assert [b["id"] for b in client.get("/api/books?q=Herbert").get_json()] == [book["id"]]

    resp = client.put(f"/api/books/{book['id']}", json={"copies": 3})
    assert resp.status_code == 200
    assert resp.get_json()["book"]["available"] == 3

    assert client.delete(f"/api/books/{book['id']}").status_code == 204
    resp = client.get(f"/api/books/{book['id']}")
    assert resp.status_code == 404
    assert "message" in resp.get_json()


def test_create_book_missing_fields(client):
    resp = client.post("/api/books", json={"title": "Dune"})
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Title, author, and copies are required."}


def test_delete_unknown_book(client):
    assert client.delete("/api/books/77").status_code == 404


def test_borrow_and_return_flow(client):
    book = _create_book(client)
    member = _create_member(client)
    due = (date.today() - timedelta(days=3)).isoformat()

    resp = client.post("/api/borrow", json={"memberId": member["id"], "bookId": book["id"], "dueDate": due})
    assert resp.status_code == 201
    loan = resp.get_json()["loan"]
    assert loan["bookTitle"] == "Dune"
    assert loan["dueDate"] == due

    resp = client.post("/api/borrow", json={"memberId": member["id"], "bookId": book["id"], "dueDate": due})
    assert resp.status_code == 400

    assert client.delete(f"/api/books/{book['id']}").status_code == 400
    assert client.delete(f"/api/members/{member['id']}").status_code == 400
    assert len(client.get("/api/borrowed").get_json()) == 1
    assert len(client.get(f"/api/members/{member['id']}/borrowed").get_json()) == 1
    assert len(client.get(f"/api/books/{book['id']}/borrowed").get_json()) == 1

    resp = client.post("/api/return", json={"borrowId": loan["id"]})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["fine"] == 300
    assert "3 day(s)" in body["message"]

    m = client.get(f"/api/members/{member['id']}").get_json()
    assert m["outstandingFines"] == 300
    assert m["booksBorrowed"] == 0

    resp = client.post(f"/api/members/{member['id']}/pay-fines")
    assert resp.get_json() == {"message": "Fines have been cleared."}
    assert client.get(f"/api/members/{member['id']}").get_json()["outstandingFines"] == 0

    assert client.post("/api/return", json={"borrowId": loan["id"]}).status_code == 404
    assert client.delete(f"/api/members/{member['id']}").status_code == 204


def test_student_flow(client):
    book = _create_book(client)
    resp = client.post("/api/register", json={"name": "Grace", "email": "grace@example.com", "password": "cobol"})
    assert resp.status_code == 201
    user = resp.get_json()
    assert set(user) == {"id", "email", "role", "name"}

    assert client.post("/api/register", json={"name": "G", "email": "grace@example.com", "password": "x"}).status_code == 400
    assert client.post("/api/login", json={"email": "grace@example.com", "password": "nope"}).status_code == 401

    login = client.post("/api/login", json={"email": "grace@example.com", "password": "cobol"}).get_json()
    token = login["accessToken"]

    resp = client.post(
        "/api/student/borrow",
        json={"bookId": book["id"], "dueDate": "2030-01-01"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 201

    profile = client.get(f"/api/my-profile/{user['id']}").get_json()
    assert profile["booksBorrowed"] == 1
    assert profile["borrowedBooks"][0]["bookTitle"] == "Dune"

    assert client.get("/api/my-profile/999").status_code == 404


def test_student_borrow_without_profile(client):
    book = _create_book(client)
    resp = client.post("/api/student/borrow", json={"bookId": book["id"], "dueDate": "2030-01-01", "userId": 55})
    assert resp.status_code == 403


def test_stats(client):
    _create_book(client, copies=2)
    book = _create_book(client, title="Emma", author="Jane Austen", copies=1)
    member = _create_member(client)
    client.post("/api/borrow", json={"memberId": member["id"], "bookId": book["id"], "dueDate": "2030-01-01"})

    assert client.get("/api/stats").get_json() == {
        "totalBooks": 2,
        "availableBooks": 2,
        "borrowedBooks": 1,
        "totalMembers": 1,
    }


def test_stats_empty(client):
    assert client.get("/api/stats").get_json() == {
        "totalBooks": 0,
        "availableBooks": 0,
        "borrowedBooks": 0,
        "totalMembers": 0,
    }


def test_non_object_body_is_rejected(client):
    resp = client.post("/api/books", json=[1, 2])
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Request body must be a JSON object."}

    resp = client.post("/api/borrow", json="1")
    assert resp.status_code == 400
    assert "message" in resp.get_json()


def test_register_with_non_string_password(client):
    resp = client.post("/api/register", json={"name": "Grace", "email": "grace@example.com", "password": 12345})
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Password must be a string."}

    client.post("/api/register", json={"name": "Grace", "email": "grace@example.com", "password": "cobol"})
    resp = client.post("/api/login", json={"email": "grace@example.com", "password": 12345})
    assert resp.status_code == 401
    assert "message" in resp.get_json()


def test_unexpected_error_is_json(app, client):
    def explode():
        raise RuntimeError("boom")

    app.add_url_rule("/explode", "explode", explode)

    resp = client.get("/explode")
    assert resp.status_code == 500
    assert resp.is_json
    assert resp.get_json() == {"message": "boom"}


def test_unknown_route_is_json(client):
    resp = client.get("/api/nowhere")
    assert resp.status_code == 404
    assert "message" in resp.get_json()


def test_body_user_id_wins_over_bad_token(client):
    book = _create_book(client)
    user = client.post("/api/register", json={"name": "Grace", "email": "grace@example.com", "password": "cobol"}).get_json()

    resp = client.post(
        "/api/student/borrow",
        json={"bookId": book["id"], "dueDate": "2030-01-01", "userId": user["id"]},
        headers={"Authorization": "Bearer garbage"},
    )
    assert resp.status_code == 201


def test_bad_token_without_user_id_is_401(client):
    book = _create_book(client)

    resp = client.post(
        "/api/student/borrow",
        json={"bookId": book["id"], "dueDate": "2030-01-01"},
        headers={"Authorization": "Bearer garbage"},
    )
    assert resp.status_code == 401
    body = resp.get_json()
    assert "message" in body
    assert "msg" not in body
    assert client.get(f"/api/books/{book['id']}").get_json()["available"] == 1
