"""
HTTP API tests through FastAPI's TestClient.
"""

from datetime import date, timedelta

from eventpro.core.security import attendance_code_for
from eventpro.models.user import UserRole

from tests.conftest import PASSWORD


def _event_payload(**overrides):
    payload = {
        "title": "UX Design Workshop",
        "description": "A hands-on workshop on research methods and prototyping.",
        "event_date": (date.today() + timedelta(days=14)).isoformat(),
        "start_time": "10:00:00",
        "end_time": "16:00:00",
        "venue": "Tech Hub, San Francisco",
        "location_type": "in-person",
        "capacity": 40,
        "status": "published",
        "topics": [],
    }
    payload.update(overrides)
    return payload


class TestAuthApi:

    def test_register_signs_in(self, client):
        response = client.post("/api/register", json={
            "username": "sarah",
            "email": "sarah@example.com",
            "name": "Sarah Williams",
            "password": PASSWORD,
        })

        assert response.status_code == 201
        assert response.json()["role"] == "user"
        assert "hashed_password" not in response.json()
        me = client.get("/api/user")
        assert me.status_code == 200
        assert me.json()["username"] == "sarah"

    def test_validation_errors_are_400(self, client):
        response = client.post("/api/register", json={
            "username": "ab",
            "email": "not-an-email",
            "name": "S",
            "password": "123",
        })

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert {error["field"] for error in body["errors"]} >= {"username", "email", "password"}

    def test_duplicate_username(self, client, make_user):
        make_user(username="sarah")
        response = client.post("/api/register", json={
            "username": "sarah",
            "email": "another@example.com",
            "name": "Sarah Again",
            "password": PASSWORD,
        })
        assert response.status_code == 409
        assert response.json() == {"message": "Username already exists"}

    def test_login_with_email_and_logout(self, client, make_user):
        user = make_user(username="robert")

        response = client.post("/api/login", json={"username": user.email, "password": PASSWORD})
        assert response.status_code == 200
        assert client.get("/api/user").status_code == 200

        assert client.post("/api/logout").status_code == 200
        client.cookies.clear()
        assert client.get("/api/user").status_code == 401

    def test_logout_invalidates_server_session(self, client, app, make_user):
        make_user(username="emily")
        client.post("/api/login", json={"username": "emily", "password": PASSWORD})
        cookie_name = app.state.settings.SESSION_COOKIE_NAME
        stolen = client.cookies.get(cookie_name)
        assert stolen

        client.post("/api/logout")
        client.cookies.clear()

        replayed = client.get("/api/user", headers={"Cookie": f"{cookie_name}={stolen}"})
        assert replayed.status_code == 401

    def test_bad_credentials(self, client, make_user):
        make_user(username="robert")
        response = client.post("/api/login", json={"username": "robert", "password": "nope"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid username or password"}

    def test_unauthenticated_request(self, client):
        response = client.get("/api/stats")
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_password_reset_endpoints(self, client, app, make_user):
        user = make_user(username="sarah")
        links = []
        app.state.store.email_service.send_password_reset_email = lambda to, link: links.append(link) or True

        response = client.post("/api/forgot-password", json={"email": user.email})
        assert response.status_code == 200
        unknown = client.post("/api/forgot-password", json={"email": "ghost@example.com"})
        assert unknown.json() == response.json()

        token = links[0].split("token=")[1]
        assert client.post("/api/reset-password", json={"token": token, "password": "brand-new"}).status_code == 200
        assert client.post("/api/reset-password", json={"token": token, "password": "again!!"}).status_code == 400
        assert client.post("/api/login", json={"username": "sarah", "password": "brand-new"}).status_code == 200


class TestEventsApi:

    def test_create_requires_admin_or_speaker(self, client, make_user, login_as):
        login_as(make_user())
        assert client.post("/api/events", json=_event_payload()).status_code == 403

    def test_speaker_creates_event_with_topics(self, client, speaker, login_as):
        login_as(speaker)

        response = client.post("/api/events", json=_event_payload(topics=[
            {"title": "User Research Methods", "speaker_id": str(speaker.id)},
            {"title": "Prototyping Tools", "speaker_id": ""},
        ]))

        assert response.status_code == 201
        event = response.json()
        assert event["registration_count"] == 0
        assert event["location_type"] == "in-person"

        detail = client.get(f"/api/events/{event['id']}").json()
        assert [t["title"] for t in detail["topics"]] == ["User Research Methods", "Prototyping Tools"]
        assert [s["id"] for s in detail["topics"][0]["speakers"]] == [speaker.id]
        assert detail["topics"][1]["speakers"] == []

    def test_public_listing_and_detail(self, client, make_event):
        event = make_event()

        listing = client.get("/api/events")
        assert listing.status_code == 200
        assert [e["id"] for e in listing.json()] == [event.id]

        detail = client.get(f"/api/events/{event.id}")
        assert detail.status_code == 200
        assert detail.json()["is_registered"] is False

        assert client.get("/api/events/upcoming").json()[0]["id"] == event.id
        assert client.get("/api/events/9999").status_code == 404

    def test_update_and_delete(self, client, admin, make_event, login_as):
        event = make_event()
        login_as(admin)

        response = client.put(f"/api/events/{event.id}", json={"venue": "Grand Convention Center"})
        assert response.status_code == 200
        assert response.json()["venue"] == "Grand Convention Center"

        assert client.delete(f"/api/events/{event.id}").status_code == 200
        assert client.get(f"/api/events/{event.id}").status_code == 404

    def test_speaker_cannot_delete(self, client, speaker, make_event, login_as):
        event = make_event()
        login_as(speaker)
        assert client.delete(f"/api/events/{event.id}").status_code == 403

    def test_topics_and_speaker_assignment(self, client, admin, speaker, make_user, make_event, login_as):
        event = make_event()
        login_as(admin)

        topic = client.post(f"/api/events/{event.id}/topics", json={"title": "AI Ethics"}).json()
        assigned = client.post(f"/api/topics/{topic['id']}/speakers", json={"speaker_id": speaker.id})
        assert assigned.status_code == 201
        assert assigned.json()["speaker_id"] == speaker.id

        not_a_speaker = client.post(f"/api/topics/{topic['id']}/speakers", json={"speaker_id": make_user().id})
        assert not_a_speaker.status_code == 400

        topics = client.get(f"/api/events/{event.id}/topics").json()
        assert [s["name"] for s in topics[0]["speakers"]] == ["Jane Smith"]

        speakers = client.get("/api/speakers").json()
        assert speakers[0]["events"][0]["id"] == event.id


class TestRegistrationApi:

    def test_register_cancel_cycle(self, client, make_user, make_event, login_as):
        event = make_event(capacity=1)
        first, second = make_user(), make_user()

        login_as(first)
        assert client.post(f"/api/events/{event.id}/register").status_code == 201
        duplicate = client.post(f"/api/events/{event.id}/register")
        assert duplicate.status_code == 409
        assert duplicate.json() == {"message": "User is already registered for this event"}

        login_as(second)
        full = client.post(f"/api/events/{event.id}/register")
        assert full.status_code == 409
        assert full.json() == {"message": "Event has reached maximum capacity"}
        assert client.delete(f"/api/events/{event.id}/register").status_code == 404

        login_as(first)
        assert client.delete(f"/api/events/{event.id}/register").json() == {"success": True}

        login_as(second)
        assert client.post(f"/api/events/{event.id}/register").status_code == 201

    def test_attendance_and_certificate_flow(self, client, admin, speaker, make_user, make_event, login_as):
        event = make_event()
        attendee = make_user(name="Sarah Williams")

        login_as(attendee)
        registration = client.post(f"/api/events/{event.id}/register").json()
        too_early = client.post(f"/api/events/{event.id}/certificate")
        assert too_early.status_code == 409
        assert too_early.json() == {"message": "Attendance must be marked before generating certificate"}

        login_as(admin)
        marked = client.post(f"/api/events/{event.id}/attendance/{attendee.id}")
        assert marked.json() == {"success": True}
        assert client.post("/api/registrations/9999/attendance").status_code == 404

        login_as(speaker)
        issued = client.post(f"/api/registrations/{registration['id']}/certificate")
        assert issued.status_code == 201
        assert issued.json()["certificate_url"] == f"/certificates/{registration['id']}"
        again = client.post(f"/api/registrations/{registration['id']}/certificate")
        assert again.status_code == 409

        login_as(attendee)
        mine = client.get("/api/certificates").json()
        assert [c["id"] for c in mine] == [registration["id"]]

        document = client.get(f"/api/certificates/{registration['id']}")
        assert document.status_code == 200
        assert document.json()["pdf_data_url"].startswith("data:application/pdf;base64,")

        download = client.get(f"/api/certificates/{registration['id']}/download")
        assert download.status_code == 200
        assert download.headers["content-type"] == "application/pdf"
        assert download.content.startswith(b"%PDF")

        client.cookies.clear()
        verified = client.get(f"/api/certificates/verify/{registration['id']}").json()
        assert verified["valid"] is True
        assert verified["user_name"] == "Sarah Williams"
        assert client.get("/api/certificates/verify/9999").json()["valid"] is False

    def test_certificate_of_another_user_is_forbidden(self, db, client, store, make_user, make_event, login_as):
        owner, other = make_user(), make_user()
        reg = store.register(db, owner, make_event().id)
        store.mark_attendance(db, reg.id)
        store.generate_certificate(db, reg.id)

        login_as(other)
        assert client.get(f"/api/certificates/{reg.id}").status_code == 403

    def test_self_attendance(self, client, settings, admin, make_user, make_event, login_as):
        event = make_event()
        attendee = make_user()

        login_as(admin)
        code = client.get(f"/api/events/{event.id}/attendance-code").json()["code"]
        assert code == attendance_code_for(event.id, settings)

        login_as(attendee)
        client.post(f"/api/events/{event.id}/register")
        wrong = client.post(f"/api/events/{event.id}/self-attendance", json={"code": "ZZZZZZZZ"})
        assert wrong.status_code == 400
        right = client.post(f"/api/events/{event.id}/self-attendance", json={"code": code})
        assert right.json() == {"success": True}
        assert client.get(f"/api/events/{event.id}").json()["has_attended"] is True

    def test_registrations_listing_is_gated(self, client, speaker, make_user, make_event, login_as):
        event = make_event()
        attendee = make_user(name="Robert Johnson")
        login_as(attendee)
        client.post(f"/api/events/{event.id}/register")
        assert client.get(f"/api/events/{event.id}/registrations").status_code == 403

        login_as(speaker)
        registrations = client.get(f"/api/events/{event.id}/registrations").json()
        assert [r["user"]["name"] for r in registrations] == ["Robert Johnson"]


class TestUsersProfileDashboardApi:

    def test_admin_manages_users(self, client, admin, make_user, login_as):
        make_user()
        login_as(admin)

        users = client.get("/api/users").json()
        assert len(users) == 2

        created = client.post("/api/speakers", json={
            "username": "michael",
            "email": "michael@example.com",
            "name": "Michael Wilson",
            "password": "speaker123",
        })
        assert created.status_code == 201
        assert created.json()["role"] == UserRole.SPEAKER.value

        created = client.post("/api/users", json={
            "username": "second_admin",
            "email": "second.admin@example.com",
            "name": "Second Admin",
            "password": "admin1234",
            "role": "admin",
        })
        assert created.json()["role"] == "admin"

    def test_non_admin_cannot_list_users(self, client, make_user, login_as):
        login_as(make_user())
        assert client.get("/api/users").status_code == 403

    def test_profile(self, client, make_user, make_event, login_as):
        user = make_user()
        event = make_event()
        login_as(user)
        client.post(f"/api/events/{event.id}/register")

        profile = client.get("/api/profile").json()
        assert [r["id"] for r in profile["upcoming_registrations"]] == [event.id]
        assert profile["attended_events"] == []

        updated = client.patch("/api/profile", json={"bio": "Designer", "name": "Emily Brown"})
        assert updated.json()["bio"] == "Designer"

        mismatch = client.patch("/api/profile", json={
            "current_password": PASSWORD, "new_password": "abcdef", "confirm_password": "abcdeg",
        })
        assert mismatch.status_code == 400

        blank_name = client.patch("/api/profile", json={"name": ""})
        assert blank_name.status_code == 400
        assert [error["field"] for error in blank_name.json()["errors"]] == ["name"]
        assert client.get("/api/profile").json()["name"] == "Emily Brown"

        signature = client.patch("/api/profile/signature", json={"signature_image": "data:image/png;base64,AAAA"})
        assert signature.json()["signature_image"] == "data:image/png;base64,AAAA"
        bad = client.patch("/api/profile/signature", json={"signature_image": "https://example.com/sig.png"})
        assert bad.status_code == 400

    def test_stats_and_activity(self, client, make_user, make_event, login_as):
        event = make_event()
        user = make_user(name="Sarah Williams")
        login_as(user)
        client.post(f"/api/events/{event.id}/register")

        stats = client.get("/api/stats").json()
        assert stats == {
            "total_events": 1,
            "total_users": 2,
            "total_registrations": 1,
            "certificates_issued": 0,
        }

        activity = client.get("/api/activity", params={"limit": 1}).json()
        assert len(activity) == 1
        assert activity[0]["action"] == "register_event"
        assert activity[0]["user"]["name"] == "Sarah Williams"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "x-process-time" in response.headers

    def test_google_sign_in(self, client, app):
        class FakeSSO:
            def verify_token(self, id_token):
                return {"google_id": "99", "email": "g@example.com", "name": "Google User", "picture": None}

        app.state.store.sso = FakeSSO()

        response = client.post("/api/auth/google", json={"credential": "id-token"})
        assert response.status_code == 200
        assert response.json()["username"] == "google_99"
        assert client.get("/api/user").json()["email"] == "g@example.com"
