def test_create_school_trims_and_stamps_created_at(client):
    resp = client.post("/api/schools", json={"name": "  Oak Hill  ", "region": "   "})
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    data = body["data"]
    assert data["name"] == "Oak Hill"
    assert data["region"] is None
    assert data["createdAt"] == "2024-03-01T09:30:00"
    assert isinstance(data["id"], int)


def test_duplicate_trimmed_name_is_a_constraint_violation(client, make_school):
    make_school("Oak Hill")
    resp = client.post("/api/schools", json={"name": " Oak Hill "})
    assert resp.status_code == 409
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "CONSTRAINT_VIOLATION"
    assert body["errors"] == ["A school with this name already exists"]


def test_name_uniqueness_is_case_sensitive(client, make_school):
    make_school("Oak Hill")
    resp = client.post("/api/schools", json={"name": "oak hill"})
    assert resp.status_code == 201


def test_missing_name_is_a_validation_error(client):
    resp = client.post("/api/schools", json={"region": "North"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["errors"] == ["School name is required"]


def test_list_schools_sorted_by_name(client, make_school):
    make_school("Willow", None)
    make_school("Ash Grove", "East")
    names = [s["name"] for s in client.get("/api/schools").json()["data"]]
    assert names == ["Ash Grove", "Willow"]


def test_get_unknown_school_is_not_found(client):
    resp = client.get("/api/schools/999")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_update_school_keeps_created_at(client, clock, make_school):
    from datetime import timedelta

    school = make_school("Oak Hill", "North")
    clock.advance(timedelta(days=1))
    resp = client.put(f"/api/schools/{school['id']}", json={"region": " South "})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["name"] == "Oak Hill"
    assert data["region"] == "South"
    assert data["createdAt"] == school["createdAt"]


def test_update_school_to_taken_name_fails(client, make_school):
    make_school("Oak Hill")
    elm = make_school("Elm St")
    resp = client.put(f"/api/schools/{elm['id']}", json={"name": "Oak Hill"})
    assert resp.status_code == 409


def test_update_school_can_keep_its_own_name(client, make_school):
    oak = make_school("Oak Hill")
    resp = client.put(f"/api/schools/{oak['id']}", json={"name": "Oak Hill", "region": "West"})
    assert resp.status_code == 200


def test_delete_school_without_dependents(client, make_school):
    school = make_school("Empty School")
    resp = client.delete(f"/api/schools/{school['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"id": school["id"]}
    assert client.get(f"/api/schools/{school['id']}").status_code == 404


def test_delete_school_with_teacher_is_refused(client, make_school, make_teacher):
    school = make_school()
    make_teacher(school["id"])
    resp = client.delete(f"/api/schools/{school['id']}")
    assert resp.status_code == 409
    assert resp.json()["errors"] == ["Cannot delete school: 1 teacher(s) still belong to it"]
    assert client.get(f"/api/schools/{school['id']}").status_code == 200


def test_delete_school_with_attendance_lists_both_reasons(client, make_school, make_teacher, make_record):
    school = make_school()
    teacher = make_teacher(school["id"])
    make_record(school["id"], teacher["id"])
    resp = client.delete(f"/api/schools/{school['id']}")
    assert resp.status_code == 409
    assert len(resp.json()["errors"]) == 2


def test_school_teachers_listing(client, make_school, make_teacher):
    oak = make_school("Oak Hill")
    elm = make_school("Elm St")
    make_teacher(oak["id"], "Zed")
    make_teacher(oak["id"], "Amy")
    make_teacher(elm["id"], "Bob")
    names = [t["name"] for t in client.get(f"/api/schools/{oak['id']}/teachers").json()["data"]]
    assert names == ["Amy", "Zed"]
    assert client.get("/api/schools/999/teachers").status_code == 404
