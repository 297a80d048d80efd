from datetime import datetime, timedelta

from eventpro.models import ActivityLog


def test_log_activity_inserts_one_row(db, store, make_user):
    user = make_user()

    entry = store.log_activity(db, user.id, "download_certificate", 'Downloaded certificate for "UX"')

    assert entry.id is not None
    assert entry.timestamp is not None
    assert db.query(ActivityLog).count() == 1


def test_recent_activity_is_newest_first_and_limited(db, store, make_user):
    user = make_user(name="Sarah Williams")
    now = datetime.utcnow()
    for minutes in (30, 10, 20):
        db.add(ActivityLog(
            user_id=user.id,
            action="register_event",
            description=f"{minutes} minutes ago",
            timestamp=now - timedelta(minutes=minutes),
        ))
    db.commit()

    recent = store.get_recent_activity(db, limit=2)

    assert [entry.description for entry in recent] == ["10 minutes ago", "20 minutes ago"]
    assert recent[0].user.name == "Sarah Williams"


def test_dashboard_stats_counts_each_table(db, store, make_user, make_event):
    first, second = make_user(), make_user()
    event = make_event()
    make_event(title="Second Event")
    reg = store.register(db, first, event.id)
    store.register(db, second, event.id)
    store.mark_attendance(db, reg.id)
    store.generate_certificate(db, reg.id)

    stats = store.get_dashboard_stats(db)

    # make_event creates the admin as well
    assert stats == {
        "total_events": 2,
        "total_users": 3,
        "total_registrations": 2,
        "certificates_issued": 1,
    }


def test_dashboard_stats_on_empty_database(db, store):
    assert store.get_dashboard_stats(db) == {
        "total_events": 0,
        "total_users": 0,
        "total_registrations": 0,
        "certificates_issued": 0,
    }
