"""
Account registration, login and token introspection.
"""

import logging
from typing import Tuple

from sqlalchemy.orm import Session

from hostel_app.core.exceptions import AuthenticationError, ConflictError, UserNotFoundError
from hostel_app.core.security import PasswordHasher, TokenClaims, TokenService, authenticate
from hostel_app.models.enums import UserRole
from hostel_app.models.user import User
from hostel_app.repositories.user_repository import UserRepository
from hostel_app.schemas.auth import LoginRequest, SignupRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AuthService:
    """
    User store operations.

    Login failures never say whether the email or the password was wrong.
    """

    def __init__(
        self,
        db: Session,
        token_service: TokenService,
        password_hasher: PasswordHasher,
    ):
        self.repository = UserRepository(db)
        self.token_service = token_service
        self.password_hasher = password_hasher

    def signup(self, request: SignupRequest) -> Tuple[str, User]:
        """
        Register a new account and issue its first token.

        Returns:
            Tuple of (token, user)

        Raises:
            ConflictError: If the email is already registered
        """
        if self.repository.get_by_email(request.email):
            raise ConflictError("User with this email already exists")

        role = request.role or UserRole.STUDENT
        user = User(
            email=request.email,
            name=request.name,
            password_hash=self.password_hasher.hash(request.password),
            role=role.value,
        )
        try:
            self.repository.create(user)
        except ConflictError as e:
            raise ConflictError("User with this email already exists") from e

        logger.info(f"User registered: {user.id}", extra={"role": user.role})
        return self.token_service.issue(user), user

    def login(self, request: LoginRequest) -> Tuple[str, User]:
        """
        Authenticate with email and password.

        Raises:
            AuthenticationError: If the credentials do not match an account
        """
        user = self.repository.get_by_email(request.email)
        if user is None or not self.password_hasher.verify(request.password, user.password_hash):
            logger.warning("Login failed", extra={"email_domain": request.email.rsplit("@", 1)[-1]})
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if self.password_hasher.needs_rehash(user.password_hash):
            user.password_hash = self.password_hasher.hash(request.password)
            self.repository.commit()
            logger.info(f"Password hash upgraded for user {user.id}")

        logger.info(f"User logged in: {user.id}")
        return self.token_service.issue(user), user

    def validate(self, authorization: str) -> TokenClaims:
        return authenticate(authorization, self.token_service)

    def profile(self, claims: TokenClaims) -> User:
        user = self.repository.get_by_id(claims.user_id)
        if user is None:
            raise UserNotFoundError(claims.user_id)
        return user
