"""Unit tests for the access decision engine."""
import pytest

from music_commerce.access.decision import decide, enforce, evaluate
from music_commerce.access.schemas import AccessRequest, Actor, Decision, Operation, Reason, Role
from music_commerce.errors import UnauthorizedError

USER = Actor(id="u1", role=Role.USER)
ADMIN = Actor(id="u1", role=Role.ADMIN)


class TestAdmin:
    """Admins are allowed everything, whoever owns the target."""

    @pytest.mark.parametrize("operation", list(Operation))
    @pytest.mark.parametrize("owner", ["u1", "u2", None])
    def test_always_privileged(self, operation, owner):
        decision = decide(ADMIN, operation, owner)
        assert decision == Decision(allowed=True, reason=Reason.PRIVILEGED)

    def test_delete_of_other_users_record(self):
        """Scenario C"""
        decision = decide(ADMIN, Operation.DELETE, "u2")
        assert decision.allowed is True
        assert decision.reason is Reason.PRIVILEGED


class TestUnprivileged:
    """Non-admin actors may only act on their own records."""

    def test_read_own_record(self):
        """Scenario A"""
        decision = decide(USER, Operation.READ, "u1")
        assert decision == Decision(allowed=True, reason=Reason.SELF)

    def test_read_other_users_record(self):
        """Scenario B"""
        decision = decide(USER, Operation.READ, "u2")
        assert decision == Decision(allowed=False, reason=Reason.DENIED_NOT_OWNER)

    def test_create_for_self_and_for_other(self):
        assert decide(USER, Operation.CREATE, "u1").reason is Reason.SELF
        assert decide(USER, Operation.CREATE, "u2").reason is Reason.DENIED_NOT_OWNER

    @pytest.mark.parametrize("operation", [Operation.UPDATE, Operation.DELETE])
    def test_modify_requires_ownership(self, operation):
        assert decide(USER, operation, "u1").allowed is True
        assert decide(USER, operation, "someone-else").allowed is False

    def test_missing_owner_is_not_owner(self):
        decision = decide(USER, Operation.READ, None)
        assert decision.reason is Reason.DENIED_NOT_OWNER

    def test_list_without_owner_filter(self):
        decision = decide(USER, Operation.LIST, None)
        assert decision == Decision(allowed=False, reason=Reason.DENIED_MISSING_FILTER)

    def test_list_with_own_and_other_filter(self):
        assert decide(USER, Operation.LIST, "u1") == Decision(allowed=True, reason=Reason.SELF)
        assert decide(USER, Operation.LIST, "u2").reason is Reason.DENIED_NOT_OWNER

    def test_owner_ids_compared_as_strings(self):
        actor = Actor(id="42", role=Role.USER)
        assert decide(actor, Operation.READ, 42).reason is Reason.SELF

    def test_idempotent(self):
        first = decide(USER, Operation.UPDATE, "u2")
        second = decide(USER, Operation.UPDATE, "u2")
        assert first == second


class TestEnforce:
    """enforce() raises on denial and keeps the reason on the exception."""

    def test_evaluate_matches_decide(self):
        request = AccessRequest(actor=USER, operation=Operation.LIST, target_owner_id=None)
        assert evaluate(request) == decide(USER, Operation.LIST, None)

    def test_allowed_returns_decision(self):
        request = AccessRequest(actor=USER, operation=Operation.READ, target_owner_id="u1")
        assert enforce(request, "nope").reason is Reason.SELF

    def test_denied_raises_with_generic_message(self):
        request = AccessRequest(actor=USER, operation=Operation.DELETE, target_owner_id="u2")
        with pytest.raises(UnauthorizedError) as exc_info:
            enforce(request, "Not allowed to delete this album")

        assert exc_info.value.reason is Reason.DENIED_NOT_OWNER
        assert exc_info.value.status_code == 401
        assert "u2" not in exc_info.value.message
