"""
Mock session identity and customer reviews.

Login and signup accept any well-formed email; passwords are never checked.
In production this would sit behind a real identity provider.
"""

import logging
import time
from typing import Callable, Iterable, Optional

from swiftfix.schemas.customer_schema import Credentials, Review, User

logger = logging.getLogger(__name__)

SEED_REVIEWS: list[Review] = [
    Review(
        id=1,
        name="Sarah Jenkins",
        rating=5,
        text="Fixed my shattered iPhone 14 Pro Max screen in less than an hour. "
             "Looks brand new! Highly recommended.",
        date="2 days ago",
    ),
    Review(
        id=2,
        name="Mike Ross",
        rating=5,
        text="I thought my Pixel was a goner after dropping it in water. "
             "They managed to save it and the data. Lifesavers!",
        date="1 week ago",
    ),
    Review(
        id=3,
        name="Emily Chen",
        rating=4,
        text="Great service and friendly staff. Battery replacement was quick. "
             "Price was fair compared to Apple store.",
        date="3 weeks ago",
    ),
]


def _epoch_millis(clock: Callable[[], float]) -> int:
    return int(clock() * 1000)


class SessionIdentity:
    """Holds at most one signed-in user for the session."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._current_user: Optional[User] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def _sign_in(self, credentials: Credentials, name: str) -> User:
        user = User(
            id=f"USR-{_epoch_millis(self._clock)}",
            name=name,
            email=credentials.email,
        )
        self._current_user = user
        logger.info("User signed in: %s", user.email)
        return user

    def login(self, email: str, password: str = "") -> User:
        """Sign in; the display name is the email's local part."""
        credentials = Credentials(email=email, password=password)
        return self._sign_in(credentials, credentials.email.split("@")[0])

    def signup(self, name: str, email: str, password: str = "") -> User:
        credentials = Credentials(email=email, password=password, name=name)
        display_name = (credentials.name or "").strip() or credentials.email.split("@")[0]
        return self._sign_in(credentials, display_name)

    def logout(self) -> None:
        if self._current_user is not None:
            logger.info("User signed out: %s", self._current_user.email)
        self._current_user = None


class ReviewBoard:
    """Public reviews, newest first. Posting requires a signed-in user."""

    def __init__(
        self,
        identity: SessionIdentity,
        reviews: Optional[Iterable[Review]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._identity = identity
        self._reviews = list(SEED_REVIEWS if reviews is None else reviews)
        self._clock = clock

    @property
    def reviews(self) -> list[Review]:
        return list(self._reviews)

    def can_submit(self) -> bool:
        return self._identity.is_authenticated

    def submit(self, rating: int, text: str) -> Optional[Review]:
        """Post a review as the current user.

        Returns None without posting when nobody is signed in or the text
        is empty. An out-of-range rating raises pydantic's ValidationError.
        """
        user = self._identity.current_user
        if user is None:
            logger.debug("Review rejected: no signed-in user")
            return None
        if not text.strip():
            return None
        review = Review(
            id=_epoch_millis(self._clock),
            name=user.name,
            rating=rating,
            text=text,
            date="Just now",
        )
        self._reviews.insert(0, review)
        logger.info("Review posted by %s (%d stars)", user.name, rating)
        return review
