"""Tests for mock session identity and the review board."""

import pytest
from pydantic import ValidationError

from swiftfix.tools.identity import SEED_REVIEWS, ReviewBoard, SessionIdentity


def fixed_clock():
    return 1741600000.123


@pytest.fixture
def identity():
    return SessionIdentity(clock=fixed_clock)


@pytest.fixture
def board(identity):
    return ReviewBoard(identity, clock=fixed_clock)


class TestSessionIdentity:
    def test_login_uses_email_local_part(self, identity):
        user = identity.login("maria.santos@mail.com", "anything")
        assert user.name == "maria.santos"
        assert user.id == "USR-1741600000123"
        assert identity.current_user == user
        assert identity.is_authenticated

    def test_password_is_not_checked(self, identity):
        assert identity.login("maria@mail.com").email == "maria@mail.com"

    def test_signup_uses_given_name(self, identity):
        user = identity.signup("Maria Santos", "maria@mail.com", "pw")
        assert user.name == "Maria Santos"

    def test_signup_blank_name_falls_back(self, identity):
        assert identity.signup("  ", "maria@mail.com").name == "maria"

    def test_malformed_email_rejected(self, identity):
        with pytest.raises(ValidationError):
            identity.login("not-an-email")
        assert identity.current_user is None

    def test_logout(self, identity):
        identity.login("maria@mail.com")
        identity.logout()
        assert not identity.is_authenticated
        identity.logout()


class TestReviewBoard:
    def test_seeded(self, board):
        assert board.reviews == SEED_REVIEWS
        assert not board.can_submit()

    def test_anonymous_submit_is_refused(self, board):
        assert board.submit(5, "Great!") is None
        assert len(board.reviews) == len(SEED_REVIEWS)

    def test_submit_prepends(self, identity, board):
        identity.login("maria@mail.com")
        review = board.submit(4, "Quick battery swap.")
        assert board.reviews[0] == review
        assert review.name == "maria"
        assert review.date == "Just now"
        assert review.id == 1741600000123

    def test_blank_text_is_refused(self, identity, board):
        identity.login("maria@mail.com")
        assert board.submit(5, "   ") is None

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, identity, board, rating):
        identity.login("maria@mail.com")
        with pytest.raises(ValidationError):
            board.submit(rating, "Hmm")

    def test_boards_do_not_share_reviews(self, identity):
        identity.login("maria@mail.com")
        first = ReviewBoard(identity)
        first.submit(5, "Nice")
        assert len(ReviewBoard(identity).reviews) == len(SEED_REVIEWS)
