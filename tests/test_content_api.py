
def _material(topic_id, title="Intro", **overrides):
    body = {"title": title, "type": "LECTURE", "content": "x = 1", "topicId": topic_id}
    body.update(overrides)
    return body


def test_instructor_authors_content(client, instructor, topic):
    headers, user = instructor
    response = client.post("/content", json=_material(topic["id"], published=True), headers=headers)
    assert response.status_code == 200
    material = response.json()
    assert material["createdBy"] == user["id"]
    assert material["version"] == 1

    history = client.get(f"/content/{material['id']}/history").json()
    assert len(history) == 1
    assert history[0]["version"] == 1
    assert history[0]["changeDescription"] == "Content created"

    listed = client.get(f"/content/topic/{topic['id']}").json()
    assert [m["id"] for m in listed] == [material["id"]]


def test_history_lists_newest_first(client, instructor, topic):
    headers, _ = instructor
    material = client.post("/content", json=_material(topic["id"]), headers=headers).json()
    for title in ("Second", "Third"):
        response = client.put(
            f"/content/{material['id']}", json=_material(topic["id"], title=title), headers=headers
        )
        assert response.status_code == 200

    history = client.get(f"/content/{material['id']}/history").json()
    assert [h["version"] for h in history] == [3, 2, 1]
    assert history[0]["title"] == "Third"
    assert client.get(f"/content/{material['id']}").json()["version"] == 3


def test_other_instructor_cannot_edit(client, instructor, register_user, topic):
    headers, _ = instructor
    material = client.post("/content", json=_material(topic["id"]), headers=headers).json()
    other_headers, _ = register_user("other@its.test", "INSTRUCTOR")

    response = client.put(
        f"/content/{material['id']}", json=_material(topic["id"], title="Hijack"), headers=other_headers
    )
    assert response.status_code == 403
    response = client.delete(f"/content/{material['id']}", headers=other_headers)
    assert response.status_code == 403

    history = client.get(f"/content/{material['id']}/history").json()
    assert [h["version"] for h in history] == [1]


def test_admin_deletes_content(client, instructor, register_user, topic):
    headers, _ = instructor
    material = client.post("/content", json=_material(topic["id"]), headers=headers).json()
    admin_headers, _ = register_user("root@its.test", "ADMIN")

    response = client.delete(f"/content/{material['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert client.get(f"/content/{material['id']}").status_code == 404


def test_student_cannot_author(client, register_user, topic):
    headers, _ = register_user("kid@its.test")
    response = client.post("/content", json=_material(topic["id"]), headers=headers)
    assert response.status_code == 403
    assert client.post("/content", json=_material(topic["id"])).status_code == 401


def test_missing_title_is_rejected(client, instructor, topic):
    headers, _ = instructor
    response = client.post("/content", json=_material(topic["id"], title="  "), headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "title"


def test_search_and_listing(client, instructor, topic):
    headers, _ = instructor
    for title in ("Linear Algebra", "Calculus"):
        client.post("/content", json=_material(topic["id"], title=title), headers=headers)

    assert len(client.get("/content").json()) == 2
    assert len(client.get("/content/search").json()) == 2
    found = client.get("/content/search", params={"query": "ALGEBRA"}).json()
    assert [m["title"] for m in found] == ["Linear Algebra"]
    assert len(client.get("/content/my-content", headers=headers).json()) == 2


def test_categories(client):
    categories = client.get("/content/categories").json()
    assert "LECTURE" in categories
    assert "VIDEO" in categories


def test_upload(client, instructor, upload_dir):
    headers, _ = instructor
    response = client.post(
        "/content/upload",
        files={"file": ("slides.pdf", b"%PDF-1.4", "application/pdf")},
        headers=headers,
    )
    assert response.status_code == 200
    path = response.json()
    assert path.endswith("_slides.pdf")
    stored = list(upload_dir.iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == b"%PDF-1.4"


def test_upload_requires_author(client, register_user):
    headers, _ = register_user("kid@its.test")
    response = client.post(
        "/content/upload", files={"file": ("a.txt", b"x", "text/plain")}, headers=headers
    )
    assert response.status_code == 403


def test_unknown_content_is_404(client):
    response = client.get("/content/missing")
    assert response.status_code == 404
    assert "missing" in response.json()["detail"]
    assert client.get("/content/missing/history").status_code == 404
