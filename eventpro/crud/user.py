# File: eventpro/crud/user.py
import secrets
from typing import Any, Dict, List, Optional, Union
from sqlalchemy.orm import Session
from eventpro.crud.base import CRUDBase
from eventpro.models.user import User, UserRole
from eventpro.schemas.user import UserCreate, UserUpdate
from eventpro.core.security import get_password_hash, verify_password


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):

    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_by_login(self, db: Session, *, login: str) -> Optional[User]:
        """Look a user up by email when the login contains '@', by username otherwise."""
        if "@" in login:
            return self.get_by_email(db, email=login)
        return self.get_by_username(db, username=login)

    def get_by_role(self, db: Session, *, role: UserRole) -> List[User]:
        return db.query(User).filter(User.role == role).order_by(User.name).all()

    def create(self, db: Session, *, obj_in: UserCreate) -> User:
        db_obj = User(
            username=obj_in.username,
            email=obj_in.email,
            name=obj_in.name,
            role=obj_in.role,
            bio=obj_in.bio,
            profile_image=obj_in.profile_image,
            hashed_password=get_password_hash(obj_in.password),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self, db: Session, *, db_obj: User, obj_in: Union[UserUpdate, Dict[str, Any]]
    ) -> User:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.dict(exclude_unset=True)
        if "password" in update_data:
            hashed_password = get_password_hash(update_data["password"])
            del update_data["password"]
            update_data["hashed_password"] = hashed_password
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def authenticate(self, db: Session, *, login: str, password: str) -> Optional[User]:
        user = self.get_by_login(db, login=login)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def get_or_create_google_user(
        self, db: Session, *, google_id: str, email: str, name: str, picture: Optional[str] = None
    ) -> User:
        """Return the account for a Google identity, creating it on first sign-in."""
        existing_user = self.get_by_email(db, email=email)
        if existing_user:
            return existing_user

        # The account never logs in with a password
        new_user = User(
            username=f"google_{google_id}",
            email=email,
            name=name or email.split("@")[0],
            role=UserRole.USER,
            profile_image=picture,
            hashed_password=get_password_hash(secrets.token_hex(32)),
        )
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
        return new_user


user = CRUDUser(User)
