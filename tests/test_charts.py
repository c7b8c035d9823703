def _chart(file_id, **overrides):
    body = {"fileId": file_id, "title": "Revenue by region", "type": "bar", "xAxis": "region", "yAxis": "revenue"}
    body.update(overrides)
    return body


def test_chart_on_approved_file(client, approved_file):
    headers = approved_file["headers"]
    r = client.post("/api/charts", json=_chart(approved_file["id"]), headers=headers)
    assert r.status_code == 200
    chart = r.json()
    assert chart["userId"] == approved_file["owner"].id
    assert chart["type"] == "bar"

    mine = client.get("/api/charts", headers=headers).json()
    assert len(mine) == 1
    assert mine[0]["id"] == chart["id"]


def test_chart_requires_approved_file(client, make_user, upload):
    _, headers = make_user()
    file_id = upload(headers).json()["id"]
    r = client.post("/api/charts", json=_chart(file_id), headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == "File must be approved before creating charts"


def test_chart_on_rejected_file(client, make_user, upload):
    _, headers = make_user()
    _, admin_headers = make_user("admin")
    file_id = upload(headers).json()["id"]
    client.patch(f"/api/files/{file_id}/reject", headers=admin_headers)
    assert client.post("/api/charts", json=_chart(file_id), headers=headers).status_code == 400


def test_chart_axes_must_be_columns(client, approved_file):
    r = client.post("/api/charts", json=_chart(approved_file["id"], yAxis="profit"), headers=approved_file["headers"])
    assert r.status_code == 400
    body = r.json()
    assert "profit" in body["message"]
    assert body["errors"][0]["field"] == "yAxis"
    assert body["errors"][0]["available"] == ["region", "revenue", "units"]


def test_chart_type_is_validated(client, approved_file):
    r = client.post("/api/charts", json=_chart(approved_file["id"], type="scatter"), headers=approved_file["headers"])
    assert r.status_code == 400


def test_three_d_chart(client, approved_file):
    r = client.post("/api/charts", json=_chart(approved_file["id"], type="3d", config={"rotate": 30}),
                    headers=approved_file["headers"])
    assert r.status_code == 200
    assert r.json()["config"] == {"rotate": 30}


def test_chart_on_someone_elses_file(client, approved_file, make_user):
    _, stranger = make_user()
    r = client.post("/api/charts", json=_chart(approved_file["id"]), headers=stranger)
    assert r.status_code == 403


def test_admin_may_chart_any_file(client, approved_file):
    r = client.post("/api/charts", json=_chart(approved_file["id"]), headers=approved_file["admin_headers"])
    assert r.status_code == 200
    assert r.json()["userId"] != approved_file["owner"].id


def test_chart_on_missing_file(client, make_user):
    _, headers = make_user()
    assert client.post("/api/charts", json=_chart("missing"), headers=headers).status_code == 404


def test_charts_for_file(client, approved_file, make_user):
    headers = approved_file["headers"]
    client.post("/api/charts", json=_chart(approved_file["id"]), headers=headers)
    client.post("/api/charts", json=_chart(approved_file["id"], type="pie"), headers=headers)

    r = client.get(f"/api/charts/file/{approved_file['id']}", headers=headers)
    assert [c["type"] for c in r.json()] == ["bar", "pie"]

    _, stranger = make_user()
    assert client.get(f"/api/charts/file/{approved_file['id']}", headers=stranger).status_code == 403
    assert client.get("/api/charts/file/missing", headers=headers).status_code == 404


def test_chart_series(client, approved_file, make_user):
    headers = approved_file["headers"]
    chart_id = client.post("/api/charts", json=_chart(approved_file["id"]), headers=headers).json()["id"]

    r = client.get(f"/api/charts/{chart_id}/series", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["xAxis"] == "region"
    assert body["points"] == [
        {"name": "North", "value": 1200.0},
        {"name": "South", "value": 950.0},
        {"name": "West", "value": 1430.0},
    ]

    _, stranger = make_user()
    assert client.get(f"/api/charts/{chart_id}/series", headers=stranger).status_code == 403
    assert client.get("/api/charts/missing/series", headers=headers).status_code == 404


def test_series_coerces_non_numeric_values(client, make_user, upload):
    _, headers = make_user()
    _, admin_headers = make_user("admin")
    content = b"label,amount\n,abc\nB,2.5\n"
    file_id = upload(headers, name="mixed.csv", content=content).json()["id"]
    client.patch(f"/api/files/{file_id}/approve", headers=admin_headers)

    chart_id = client.post("/api/charts", json=_chart(file_id, xAxis="label", yAxis="amount"), headers=headers).json()["id"]
    points = client.get(f"/api/charts/{chart_id}/series", headers=headers).json()["points"]
    assert points == [{"name": "Item 1", "value": 0.0}, {"name": "B", "value": 2.5}]


def test_series_keeps_zero_and_falls_back_on_blank_labels(client, storage, make_user):
    owner, headers = make_user()
    admin, _ = make_user("admin")
    source = storage.create_file(
        owner.id, "steps.csv", "steps.csv", "unused",
        data=[{"step": 0, "score": 5}, {"step": "", "score": 7}, {"step": None, "score": 9}],
    )
    storage.transition_file(source.id, "pending", status="approved", approved_by=admin.id)
    chart = client.post("/api/charts", json=_chart(source.id, xAxis="step", yAxis="score"), headers=headers).json()

    data = client.get(f"/api/charts/{chart['id']}/series", headers=headers).json()["points"]
    assert [p["name"] for p in data] == [0, "Item 2", "Item 3"]
    assert [p["value"] for p in data] == [5, 7, 9]
