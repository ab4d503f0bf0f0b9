"""Notifications created by admin actions, as seen by the account owner."""


async def suspend_and_reactivate(client, admin_headers, account_id):
    await client.post(f"/api/admin/users/{account_id}/suspend", json={"reason": "Review"}, headers=admin_headers)
    await client.post(f"/api/admin/users/{account_id}/reactivate", json={"reason": "Done"}, headers=admin_headers)


async def test_owner_sees_and_marks_notifications(client, admin, citizen, auth_headers):
    await suspend_and_reactivate(client, auth_headers(admin), citizen.id)
    headers = auth_headers(citizen)

    response = await client.get("/api/notifications", headers=headers)

    assert response.status_code == 200
    notifications = response.json()["data"]
    assert {item["title"] for item in notifications} == {"Account Suspended", "Account Reactivated"}
    assert all(item["type"] == "ACCOUNT_UPDATE" for item in notifications)

    marked = await client.patch(f"/api/notifications/{notifications[0]['id']}/read", headers=headers)
    assert marked.status_code == 200
    assert marked.json()["data"]["is_read"] is True

    unread = await client.get("/api/notifications", params={"unread_only": True}, headers=headers)
    assert [item["id"] for item in unread.json()["data"]] == [notifications[1]["id"]]


async def test_cannot_mark_someone_elses_notification(client, admin, citizen, account_factory, auth_headers):
    await suspend_and_reactivate(client, auth_headers(admin), citizen.id)
    notifications = (await client.get("/api/notifications", headers=auth_headers(citizen))).json()["data"]
    other = await account_factory()

    response = await client.patch(
        f"/api/notifications/{notifications[0]['id']}/read", headers=auth_headers(other)
    )

    assert response.status_code == 404


async def test_notifications_require_authentication(client):
    response = await client.get("/api/notifications")

    assert response.status_code == 401
