"""
Seed a fresh database with demo accounts, events, topics, registrations,
certificates and activity. Does nothing when any user already exists.

    python -m eventpro.db.seed
"""

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy.orm import Session

from eventpro.core.security import get_password_hash
from eventpro.db.database import SessionLocal
from eventpro.models import (
    ActivityLog,
    Certificate,
    Event,
    EventRegistration,
    EventSpeaker,
    EventStatus,
    LocationType,
    Topic,
    User,
    UserRole,
)

logger = logging.getLogger(__name__)

SPEAKERS = [
    ("johndoe", "John Doe", "john.doe@example.com",
     "Expert in DevOps and cloud infrastructure with over 10 years of experience."),
    ("janesmith", "Jane Smith", "jane.smith@example.com",
     "UX design professional specializing in user research and prototyping."),
    ("michaelwilson", "Michael Wilson", "michael.wilson@example.com",
     "AI and machine learning researcher with publications in top conferences."),
]

USERS = [
    ("sarahwilliams", "Sarah Williams", "sarah.williams@example.com"),
    ("robertjohnson", "Robert Johnson", "robert.johnson@example.com"),
    ("emilybrown", "Emily Brown", "emily.brown@example.com"),
]

EVENTS = [
    {
        "title": "DevOps Summit 2023",
        "description": "Join industry experts to discuss the latest trends in DevOps, CI/CD pipelines, "
                       "and cloud infrastructure management.",
        "event_date": date(2023, 10, 15),
        "start_time": time(9, 0),
        "end_time": time(17, 0),
        "venue": "Virtual Event",
        "location_type": LocationType.VIRTUAL,
        "capacity": 100,
        "status": EventStatus.PUBLISHED,
        "topics": [
            ("CI/CD Pipeline Optimization", "Best practices for efficient CI/CD pipelines", 0),
            ("Kubernetes in Production", "Real-world experiences with Kubernetes deployments", 0),
        ],
    },
    {
        "title": "UX Design Workshop",
        "description": "A hands-on workshop focused on user experience design principles, user research "
                       "methods, and prototyping tools.",
        "event_date": date(2023, 11, 5),
        "start_time": time(10, 0),
        "end_time": time(16, 0),
        "venue": "Tech Hub, San Francisco",
        "location_type": LocationType.IN_PERSON,
        "capacity": 40,
        "status": EventStatus.PUBLISHED,
        "topics": [
            ("User Research Methods", "Effective techniques for gathering user insights", 1),
            ("Prototyping Tools", "Comparison of popular prototyping tools", 1),
        ],
    },
    {
        "title": "AI and Machine Learning Conference",
        "description": "Explore the cutting-edge advancements in artificial intelligence and machine "
                       "learning with world-renowned experts.",
        "event_date": date(2023, 12, 10),
        "start_time": time(9, 0),
        "end_time": time(18, 0),
        "venue": "Grand Convention Center, New York",
        "location_type": LocationType.IN_PERSON,
        "capacity": 200,
        "status": EventStatus.PUBLISHED,
        "topics": [
            ("Deep Learning Advances", "Recent breakthroughs in deep learning research", 2),
            ("AI Ethics", "Ethical considerations in AI development", 2),
        ],
    },
    {
        "title": "Cybersecurity Conference",
        "description": "Learn about the latest threats, defensive strategies, and compliance requirements "
                       "in the cybersecurity landscape.",
        "event_date": date(2024, 1, 20),
        "start_time": time(9, 0),
        "end_time": time(17, 0),
        "venue": "Virtual Event",
        "location_type": LocationType.VIRTUAL,
        "capacity": 500,
        "status": EventStatus.DRAFT,
        "topics": [
            ("Threat Intelligence", "Latest trends in cyber threats", None),
            ("Security Compliance", "Navigating regulatory requirements", None),
        ],
    },
]

# (user index, event index, attended, certificate issued)
REGISTRATIONS = [
    (0, 0, True, True),
    (0, 1, False, False),
    (1, 0, True, True),
    (1, 2, False, False),
    (2, 1, True, True),
]


def _create_user(db: Session, username: str, name: str, email: str, role: UserRole,
                 password: str, bio: str = None) -> User:
    user = User(
        username=username,
        name=name,
        email=email,
        role=role,
        bio=bio,
        hashed_password=get_password_hash(password),
    )
    db.add(user)
    db.flush()
    logger.info(f"Created {role.value}: {username}")
    return user


def seed(db: Session) -> bool:
    """Populate an empty database. Returns False when users already exist."""
    if db.query(User).first() is not None:
        logger.info("Database already has users, skipping seeding")
        return False

    admin = _create_user(db, "admin", "Admin User", "admin@eventpro.com", UserRole.ADMIN,
                         "admin123", bio="System administrator")
    speakers = [
        _create_user(db, username, name, email, UserRole.SPEAKER, "speaker123", bio=bio)
        for username, name, email, bio in SPEAKERS
    ]
    users = [
        _create_user(db, username, name, email, UserRole.USER, "user123")
        for username, name, email in USERS
    ]

    events = []
    for data in EVENTS:
        event_data = {key: value for key, value in data.items() if key != "topics"}
        event = Event(created_by_id=admin.id, **event_data)
        db.add(event)
        db.flush()
        for title, description, speaker_index in data["topics"]:
            topic = Topic(event_id=event.id, title=title, description=description)
            db.add(topic)
            db.flush()
            if speaker_index is not None:
                db.add(EventSpeaker(topic_id=topic.id, speaker_id=speakers[speaker_index].id))
        events.append(event)
        logger.info(f"Created event: {event.title}")

    now = datetime.utcnow()
    for user_index, event_index, attended, issued in REGISTRATIONS:
        registration = EventRegistration(
            user_id=users[user_index].id,
            event_id=events[event_index].id,
            attended=attended,
            attendance_time=now if attended else None,
        )
        db.add(registration)
        db.flush()
        if issued:
            registration.certificate_generated = True
            registration.certificate_url = f"/certificates/{registration.id}"
            db.add(Certificate(registration_id=registration.id, certificate_url=registration.certificate_url))

    db.add_all([
        ActivityLog(
            user_id=users[0].id,
            action="register_event",
            description=f'Registered for event "{events[0].title}"',
            timestamp=now - timedelta(minutes=10),
        ),
        ActivityLog(
            user_id=admin.id,
            action="create_event",
            description=f'Created new event "{events[2].title}"',
            timestamp=now - timedelta(hours=1),
        ),
        ActivityLog(
            user_id=users[2].id,
            action="generate_certificate",
            description=f'Generated certificate for "{events[1].title}"',
            timestamp=now - timedelta(hours=3),
        ),
    ])

    db.commit()
    logger.info("Database seeding completed successfully")
    return True


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        seed(db)
    except Exception:
        db.rollback()
        logger.exception("Error during database seeding")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
