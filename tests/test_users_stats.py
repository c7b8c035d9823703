def test_list_users_hides_passwords(client, make_user):
    _, admin = make_user("admin")
    make_user()
    r = client.get("/api/users", headers=admin)
    assert r.status_code == 200
    for user in r.json():
        assert set(user) == {"id", "email", "name", "role", "createdAt"}


def test_list_users_needs_admin(client, make_user):
    _, headers = make_user()
    assert client.get("/api/users", headers=headers).status_code == 403


def test_superadmin_sets_role(client, make_user, storage):
    target, _ = make_user()
    _, root = make_user("superadmin")

    r = client.patch(f"/api/users/{target.id}/role", json={"role": "admin"}, headers=root)
    assert r.status_code == 200
    assert storage.get_user(target.id).role == "admin"


def test_set_role_validation(client, make_user):
    target, _ = make_user()
    _, root = make_user("superadmin")
    _, admin = make_user("admin")

    assert client.patch(f"/api/users/{target.id}/role", json={"role": "superadmin"}, headers=root).status_code == 400
    assert client.patch("/api/users/missing/role", json={"role": "admin"}, headers=root).status_code == 404
    assert client.patch(f"/api/users/{target.id}/role", json={"role": "admin"}, headers=admin).status_code == 403


def test_dashboard_stats(client, make_user, upload, approved_file):
    headers = approved_file["headers"]
    upload(headers, name="second.csv")
    client.post("/api/charts", headers=headers, json={
        "fileId": approved_file["id"], "title": "t", "type": "line", "xAxis": "region", "yAxis": "units",
    })

    stats = client.get("/api/stats/dashboard", headers=headers).json()
    assert stats == {"totalUploads": 2, "approved": 1, "pending": 1, "rejected": 0, "charts": 1}


def test_admin_stats(client, make_user, upload, approved_file):
    upload(approved_file["headers"], name="second.csv")
    r = client.get("/api/stats/admin", headers=approved_file["admin_headers"])
    assert r.status_code == 200
    stats = r.json()
    assert stats["activeUsers"] == 1
    assert stats["monthlyFiles"] == 2
    assert stats["pendingApprovals"] == 1
    assert stats["chartsGenerated"] == 0
    assert stats["storageUsed"].endswith("B")

    assert client.get("/api/stats/admin", headers=approved_file["headers"]).status_code == 403


def test_superadmin_stats(client, make_user, upload):
    _, user = make_user()
    _, root = make_user("superadmin")
    _, admin = make_user("admin")
    upload(user)
    client.post("/api/admin-requests", json={"message": "promote me"}, headers=user)

    stats = client.get("/api/stats/superadmin", headers=root).json()
    assert stats == {"totalUsers": 3, "pendingApprovals": 1, "filesProcessed": 0, "adminRequests": 1}
    assert client.get("/api/stats/superadmin", headers=admin).status_code == 403
