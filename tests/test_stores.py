"""Unit tests for auth/store.py and things/store.py on in-memory SQLite.

Covers:
- UserStore: insert stamps date_created, lookups are case-sensitive,
  UNIQUE(user_name) surfaces as UserNameTaken
- ThingStore: review aggregates, review ordering, rating CHECK constraint
"""

import pytest
from sqlalchemy.exc import IntegrityError

from auth.models import User
from auth.store import UserNameTaken, UserStore
from things.models import Review, Thing
from things.store import ThingStore


@pytest.fixture
def user_store():
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture
def thing_store():
    s = ThingStore("sqlite:///:memory:")
    yield s
    s.close()


class TestUserStore:
    def test_create_and_fetch(self, user_store):
        user_id = user_store.create_user(User(user_name="dunder", full_name="Dunder Mifflin", password_hash="$2b$x"))
        user = user_store.get_by_id(user_id)
        assert user.user_name == "dunder"
        assert user.password_hash == "$2b$x"
        assert user.nickname is None
        assert user.date_created

    def test_caller_cannot_set_date_created(self, user_store):
        user_id = user_store.create_user(
            User(user_name="a", full_name="A", password_hash="h", date_created="1999-01-01T00:00:00+00:00")
        )
        assert user_store.get_by_id(user_id).date_created != "1999-01-01T00:00:00+00:00"

    def test_lookup_is_case_sensitive(self, user_store):
        user_store.create_user(User(user_name="dunder", full_name="D", password_hash="h"))
        assert user_store.get_by_username("dunder") is not None
        assert user_store.get_by_username("Dunder") is None

    def test_duplicate_user_name_raises(self, user_store):
        user_store.create_user(User(user_name="dunder", full_name="D", password_hash="h"))
        with pytest.raises(UserNameTaken):
            user_store.create_user(User(user_name="dunder", full_name="Other", password_hash="h2"))

    def test_missing_ids_return_none(self, user_store):
        assert user_store.get_by_id(404) is None
        assert user_store.get_by_username("ghost") is None


class TestThingStore:
    def test_aggregates(self, thing_store):
        thing_id = thing_store.create_thing(Thing(title="Lamp", user_id=1))
        thing_store.create_review(Review(text="ok", rating=4, thing_id=thing_id, user_id=2))
        thing_store.create_review(Review(text="meh", rating=1, thing_id=thing_id, user_id=3))
        thing = thing_store.get_by_id(thing_id)
        assert thing.number_of_reviews == 2
        assert thing.average_review_rating == pytest.approx(2.5)

    def test_thing_without_reviews(self, thing_store):
        thing_id = thing_store.create_thing(Thing(title="Chair", user_id=1))
        thing = thing_store.get_by_id(thing_id)
        assert thing.number_of_reviews == 0
        assert thing.average_review_rating is None
        assert thing_store.list_reviews_for_thing(thing_id) == []

    def test_get_missing_thing(self, thing_store):
        assert thing_store.get_by_id(123456) is None

    def test_reviews_scoped_to_thing(self, thing_store):
        lamp = thing_store.create_thing(Thing(title="Lamp", user_id=1))
        chair = thing_store.create_thing(Thing(title="Chair", user_id=1))
        first = thing_store.create_review(Review(text="a", rating=5, thing_id=lamp, user_id=2))
        thing_store.create_review(Review(text="b", rating=3, thing_id=chair, user_id=2))
        second = thing_store.create_review(Review(text="c", rating=2, thing_id=lamp, user_id=3))
        assert [r.id for r in thing_store.list_reviews_for_thing(lamp)] == [first, second]

    def test_rating_out_of_range_rejected(self, thing_store):
        thing_id = thing_store.create_thing(Thing(title="Lamp", user_id=1))
        with pytest.raises(IntegrityError):
            thing_store.create_review(Review(text="wow", rating=6, thing_id=thing_id, user_id=2))

    def test_list_things_in_insert_order(self, thing_store):
        ids = [thing_store.create_thing(Thing(title=t, user_id=1)) for t in ("a", "b", "c")]
        assert [t.id for t in thing_store.list_things()] == ids
