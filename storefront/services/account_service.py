"""
User accounts: identity provider sync and email/password sign-in
"""
from typing import Optional

import bcrypt
from loguru import logger
from sqlalchemy.orm import Session

from storefront.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from storefront.models import User
from storefront.models.enums import AuthProvider
from storefront.schemas import IdentityProfile, ProfileUpdate


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    return bcrypt.hashpw(password.encode("utf-8")[:72], bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8")[:72], password_hash.encode("utf-8"))


class AccountService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def sync_identity(self, profile: IdentityProfile) -> User:
        """Find the user by email or create one from the identity provider profile"""
        if not profile.email:
            raise ValidationError("Email is required")

        email = profile.email.strip().lower()
        user = self.find_by_email(email)
        if user is None:
            user = User(
                email=email,
                external_id=profile.sub,
                name=profile.name or " ".join(filter(None, [profile.given_name, profile.family_name])) or None,
                first_name=profile.given_name,
                last_name=profile.family_name,
                profile_image_url=profile.picture,
                provider=AuthProvider.AUTH0.value,
            )
            self.db.add(user)
            logger.info(f"Creating user from identity provider: {email}")
        else:
            if profile.sub and not user.external_id:
                user.external_id = profile.sub
            if profile.picture:
                user.profile_image_url = profile.picture
            user.name = user.name or profile.name
            user.first_name = user.first_name or profile.given_name
            user.last_name = user.last_name or profile.family_name

        self.db.commit()
        self.db.refresh(user)
        return user

    def register(self, name: str, email: str, password: str) -> User:
        email = email.strip().lower()
        if self.find_by_email(email):
            raise ConflictError("An account with this email already exists")

        user = User(
            email=email,
            name=name,
            password_hash=hash_password(password),
            provider=AuthProvider.LOCAL.value,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Registered local account: {user}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.find_by_email(email)
        if user is None or not check_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            raise AuthenticationError("Invalid email or password")
        return user

    def update_profile(self, user_id: int, data: ProfileUpdate) -> User:
        user = self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("email"):
            email = changes["email"].strip().lower()
            other = self.find_by_email(email)
            if other is not None and other.id != user.id:
                raise ConflictError("Email is already used by another account")
            changes["email"] = email

        for key, value in changes.items():
            if value is not None:
                setattr(user, key, value)

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Profile updated for user {user.id}: {sorted(changes)}")
        return user
