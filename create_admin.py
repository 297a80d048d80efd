#!/usr/bin/env python3
"""Create the EventPro admin account"""

import os
import sys
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from eventpro.db.database import SessionLocal
from eventpro.models.user import User, UserRole
from eventpro.core.security import get_password_hash

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@eventpro.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")


def create_admin():
    """Create the admin user unless the username or email is taken"""

    db = SessionLocal()

    try:
        existing_admin = (
            db.query(User)
            .filter((User.username == ADMIN_USERNAME) | (User.email == ADMIN_EMAIL))
            .first()
        )

        if not existing_admin:
            admin_user = User(
                username=ADMIN_USERNAME,
                email=ADMIN_EMAIL,
                hashed_password=get_password_hash(ADMIN_PASSWORD),
                name="Admin User",
                role=UserRole.ADMIN,
                bio="System administrator",
            )

            db.add(admin_user)
            db.commit()
            print(f"Admin created: {ADMIN_USERNAME} <{ADMIN_EMAIL}>")
        else:
            print(f"Account already exists: {existing_admin.username} ({existing_admin.role.value})")

    except Exception as e:
        print(f"Error creating admin: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    create_admin()
