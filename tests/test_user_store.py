"""Tests for the user store: registration, authentication, profiles and message history."""

import pytest

from messagely.core import message as message_store
from messagely.core import user as user_store
from messagely.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from messagely.models.user import User


def _fields(**overrides):
    fields = {
        "username": "dana",
        "password": "secret-pass",
        "first_name": "Dana",
        "last_name": "Scully",
        "phone": "+12025550143",
    }
    fields.update(overrides)
    return fields


class TestRegister:
    def test_returns_record_with_hashed_password(self, db, hasher):
        created = user_store.register(db, hasher, _fields())

        assert created["username"] == "dana"
        assert created["first_name"] == "Dana"
        assert created["last_name"] == "Scully"
        assert created["phone"] == "+12025550143"
        assert created["password"] != "secret-pass"
        assert hasher.verify("secret-pass", created["password"])

    def test_sets_join_and_login_timestamps(self, db, hasher):
        user_store.register(db, hasher, _fields())

        profile = user_store.get(db, "dana")
        assert profile["join_at"] is not None
        assert profile["last_login_at"] is not None

    def test_duplicate_username_conflicts(self, db, hasher):
        user_store.register(db, hasher, _fields())

        with pytest.raises(ConflictError, match="dana already exists"):
            user_store.register(db, hasher, _fields(first_name="Other"))

        assert db.query(User).count() == 1
        assert user_store.get(db, "dana")["first_name"] == "Dana"

    @pytest.mark.parametrize("field", ["username", "password", "first_name", "last_name", "phone"])
    def test_empty_field_is_rejected_without_write(self, db, hasher, field):
        with pytest.raises(ValidationError):
            user_store.register(db, hasher, _fields(**{field: ""}))

        assert db.query(User).count() == 0

    def test_missing_field_is_rejected(self, db, hasher):
        fields = _fields()
        del fields["phone"]

        with pytest.raises(ValidationError, match="phone"):
            user_store.register(db, hasher, fields)

    def test_profile_round_trip(self, db, hasher):
        """get() returns exactly the submitted names and phone, never the password."""
        user_store.register(db, hasher, _fields())

        profile = user_store.get(db, "dana")
        assert profile["first_name"] == "Dana"
        assert profile["last_name"] == "Scully"
        assert profile["phone"] == "+12025550143"
        assert "password" not in profile

    def test_overlong_password_is_rejected_without_write(self, db, hasher):
        with pytest.raises(ValidationError, match="72 bytes"):
            user_store.register(db, hasher, _fields(password="p" * 80))

        assert db.query(User).count() == 0

    def test_concurrent_duplicate_registration(self, session_factory, hasher, monkeypatch):
        """Another session registers the same name between our check and our commit."""
        ours = session_factory()
        theirs = session_factory()
        real_get = ours.get
        raced = []

        def get_after_rival_registers(entity, key):
            # First lookup sees no user; the rival commits right after it
            if not raced:
                raced.append(key)
                user_store.register(theirs, hasher, _fields(first_name="Rival"))
                return None
            return real_get(entity, key)

        monkeypatch.setattr(ours, "get", get_after_rival_registers)

        with pytest.raises(ConflictError, match="dana already exists"):
            user_store.register(ours, hasher, _fields())

        assert raced == ["dana"]
        assert ours.query(User).count() == 1
        assert user_store.get(ours, "dana")["first_name"] == "Rival"

        ours.close()
        theirs.close()


class TestAuthenticate:
    def test_correct_password(self, db, hasher, users):
        assert user_store.authenticate(db, hasher, "alice", "wonderland") is True

    def test_wrong_password(self, db, hasher, users):
        assert user_store.authenticate(db, hasher, "alice", "looking-glass") is False

    def test_overlong_password_is_a_mismatch(self, db, hasher, users):
        assert user_store.authenticate(db, hasher, "alice", "x" * 100) is False

    def test_unknown_user_raises(self, db, hasher, users):
        with pytest.raises(AuthError):
            user_store.authenticate(db, hasher, "mallory", "anything")


class TestUpdateLoginTimestamp:
    def test_advances_last_login(self, db, users):
        before = user_store.get(db, "alice")["last_login_at"]

        result = user_store.update_login_timestamp(db, "alice")

        assert result["username"] == "alice"
        assert result["last_login_at"] > before
        assert user_store.get(db, "alice")["last_login_at"] == result["last_login_at"]

    def test_unknown_user(self, db):
        with pytest.raises(NotFoundError, match="No such user: ghost"):
            user_store.update_login_timestamp(db, "ghost")


class TestQueries:
    def test_all_users_lists_public_profiles(self, db, users):
        result = user_store.all_users(db)

        assert [u["username"] for u in result] == ["alice", "bob", "carol"]
        assert result[0] == {
            "username": "alice",
            "first_name": "Alice",
            "last_name": "Liddell",
            "phone": "+14155550101",
        }

    def test_all_users_empty(self, db):
        assert user_store.all_users(db) == []

    def test_get_unknown_user(self, db):
        with pytest.raises(NotFoundError):
            user_store.get(db, "ghost")


class TestMessageHistory:
    @pytest.fixture
    def sent(self, db, users):
        return [
            message_store.create(db, {"from_username": "alice", "to_username": "bob", "body": "hi bob"}),
            message_store.create(db, {"from_username": "alice", "to_username": "carol", "body": "hi carol"}),
            message_store.create(db, {"from_username": "bob", "to_username": "alice", "body": "hey alice"}),
        ]

    def test_messages_from_includes_only_sent(self, db, sent):
        result = user_store.messages_from(db, "alice")

        assert [m["id"] for m in result] == [sent[0]["id"], sent[1]["id"]]
        assert result[0]["to_user"] == {
            "username": "bob",
            "first_name": "Bob",
            "last_name": "Builder",
            "phone": "+14155550102",
        }
        assert result[1]["to_user"]["username"] == "carol"
        assert result[0]["body"] == "hi bob"
        assert result[0]["read_at"] is None

    def test_messages_to_includes_only_received(self, db, sent):
        result = user_store.messages_to(db, "bob")

        assert [m["id"] for m in result] == [sent[0]["id"]]
        assert result[0]["from_user"]["username"] == "alice"
        assert result[0]["from_user"]["first_name"] == "Alice"

    def test_no_messages_is_empty(self, db, sent):
        assert user_store.messages_from(db, "carol") == []
        assert user_store.messages_to(db, "carol") == [
            {
                "id": sent[1]["id"],
                "from_user": {
                    "username": "alice",
                    "first_name": "Alice",
                    "last_name": "Liddell",
                    "phone": "+14155550101",
                },
                "body": "hi carol",
                "sent_at": sent[1]["sent_at"],
                "read_at": None,
            }
        ]

    def test_unknown_user_history(self, db):
        with pytest.raises(NotFoundError):
            user_store.messages_from(db, "ghost")
        with pytest.raises(NotFoundError):
            user_store.messages_to(db, "ghost")
