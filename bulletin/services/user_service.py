"""
User service: signup, login and password changes.

Hashing goes through the injected ``PasswordHasher``.  Username and
nickname are unique both here (pre-checks, username first) and in the
schema; a constraint violation from a concurrent signup is mapped back
onto the matching error.
"""
import logging

from sqlalchemy.exc import IntegrityError

from bulletin.exceptions import DuplicateNickname, DuplicateUsername, InvalidCredentials, NotFound
from bulletin.models import User
from bulletin.repositories.post_repository import PostRepository
from bulletin.repositories.user_repository import UserRepository
from bulletin.schemas import UserProfile, UserResponse
from bulletin.security import PasswordHasher

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        users: UserRepository,
        posts: PostRepository,
        hasher: PasswordHasher,
    ) -> None:
        self.users = users
        self.posts = posts
        self.hasher = hasher

    async def _load(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User", user_id)
        return user

    async def sign_up(self, username: str, raw_password: str, nickname: str) -> UserResponse:
        if await self.users.get_by_username(username) is not None:
            raise DuplicateUsername(username)
        if await self.users.get_by_nickname(nickname) is not None:
            raise DuplicateNickname(nickname)

        user = User(
            username=username,
            password_hash=self.hasher.hash(raw_password),
            nickname=nickname,
        )
        try:
            user = await self.users.add(user)
        except IntegrityError as exc:
            # Lost a race with another signup; the violated constraint
            # names the column.
            if "nickname" in str(exc.orig):
                raise DuplicateNickname(nickname) from exc
            raise DuplicateUsername(username) from exc

        logger.info("User signed up: id=%d username=%r", user.id, user.username)
        return UserResponse.model_validate(user)

    async def login(self, username: str, raw_password: str) -> UserResponse:
        user = await self.users.get_by_username(username)
        if user is None:
            # Same hashing cost as a wrong password.
            self.hasher.verify_dummy(raw_password)
        if user is None or not self.hasher.verify(raw_password, user.password_hash):
            logger.warning("Failed login for username=%r", username)
            raise InvalidCredentials()
        return UserResponse.model_validate(user)

    async def find_by_id(self, user_id: int) -> UserResponse:
        return UserResponse.model_validate(await self._load(user_id))

    async def get_profile(self, user_id: int) -> UserProfile:
        """Return the user together with how many of their posts are flagged."""
        user = await self._load(user_id)
        profile = UserProfile.model_validate(user)
        profile.flagged_post_count = await self.posts.count_flagged_by_user(user_id)
        return profile

    async def update_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = await self._load(user_id)
        if not self.hasher.verify(current_password, user.password_hash):
            logger.warning("Rejected password change for user id=%d", user_id)
            raise InvalidCredentials()
        user.password_hash = self.hasher.hash(new_password)
        await self.users.flush()
        logger.info("Password updated for user id=%d", user_id)
