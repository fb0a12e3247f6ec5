import pytest

from helpdesk.core.exceptions import (
    EntityNotFoundException,
    ForbiddenException,
    UnauthorizedException,
)
from helpdesk.domain.access import Access, Decision, RequestContext, Resource, decide, enforce
from helpdesk.domain.models.enums import UserRole

CLIENT = RequestContext(user_id=1, name="Client", role=UserRole.USER)
MANAGER = RequestContext(user_id=2, name="Manager", role=UserRole.MANAGER)
ADMIN = RequestContext(user_id=3, name="Admin", role=UserRole.ADMIN)

OWNED_BY_CLIENT = Resource(owner_id=1, assignee_id=2)
OWNED_BY_OTHER = Resource(owner_id=9, assignee_id=None)


class TestDecide:

    def test_anonymous_is_unauthenticated_for_every_rule(self):
        for access in Access:
            assert decide(None, access, OWNED_BY_CLIENT) is Decision.UNAUTHENTICATED

    def test_missing_resource_is_not_found(self):
        assert decide(CLIENT, Access.OWNER, None) is Decision.NOT_FOUND
        assert decide(ADMIN, Access.ASSIGNEE, None) is Decision.NOT_FOUND

    def test_owner_rule(self):
        assert decide(CLIENT, Access.OWNER, OWNED_BY_CLIENT) is Decision.ALLOW
        assert decide(CLIENT, Access.OWNER, OWNED_BY_OTHER) is Decision.FORBID
        assert decide(MANAGER, Access.OWNER, OWNED_BY_OTHER) is Decision.ALLOW
        assert decide(ADMIN, Access.OWNER, OWNED_BY_OTHER) is Decision.ALLOW

    def test_staff_rule(self):
        assert decide(CLIENT, Access.STAFF) is Decision.FORBID
        assert decide(MANAGER, Access.STAFF) is Decision.ALLOW
        assert decide(ADMIN, Access.STAFF) is Decision.ALLOW

    def test_assignee_rule(self):
        assert decide(MANAGER, Access.ASSIGNEE, OWNED_BY_CLIENT) is Decision.ALLOW
        assert decide(MANAGER, Access.ASSIGNEE, OWNED_BY_OTHER) is Decision.FORBID
        assert decide(ADMIN, Access.ASSIGNEE, OWNED_BY_OTHER) is Decision.ALLOW
        # owning the resource does not make a client its assignee
        assert decide(CLIENT, Access.ASSIGNEE, OWNED_BY_CLIENT) is Decision.FORBID

    def test_admin_rule(self):
        assert decide(CLIENT, Access.ADMIN) is Decision.FORBID
        assert decide(MANAGER, Access.ADMIN) is Decision.FORBID
        assert decide(ADMIN, Access.ADMIN) is Decision.ALLOW


class TestEnforce:

    def test_allow_returns_none(self):
        assert enforce(ADMIN, Access.ADMIN) is None

    @pytest.mark.parametrize(
        "ctx, access, resource, error",
        [
            (None, Access.STAFF, None, UnauthorizedException),
            (CLIENT, Access.OWNER, None, EntityNotFoundException),
            (CLIENT, Access.OWNER, OWNED_BY_OTHER, ForbiddenException),
            (MANAGER, Access.ADMIN, None, ForbiddenException),
        ],
    )
    def test_refusals_map_to_errors(self, ctx, access, resource, error):
        with pytest.raises(error):
            enforce(ctx, access, resource, entity_name="Order")

    def test_not_found_names_the_entity(self):
        with pytest.raises(EntityNotFoundException) as exc_info:
            enforce(CLIENT, Access.OWNER, None, entity_name="Order")
        assert exc_info.value.message == "Order not found"


class TestResource:

    def test_from_request_like_entity(self):
        class Entity:
            id = 10
            client_id = 4
            assigned_to_id = 7

        assert Resource.of(Entity()) == Resource(owner_id=4, assignee_id=7)

    def test_user_owns_itself(self):
        class Account:
            id = 5

        assert Resource.of(Account()) == Resource(owner_id=5, assignee_id=None)
