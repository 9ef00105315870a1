import pytest
from bson import ObjectId

from nisfix.audit import (
    AuditAction,
    AuditLog,
    AuditLogBuilder,
    ResourceType,
    new_audit_log,
)


def test_action_json_round_trip():
    assert AuditAction.LOGIN.to_json() == "login"
    for action in AuditAction:
        assert AuditAction.from_json(action.to_json()) is action


def test_action_is_valid():
    assert AuditAction.is_valid("ARCHIVE") is True
    assert AuditAction.is_valid("DESTROY") is False
    assert len(list(AuditAction)) == 16


def test_action_from_json_rejects_unknown():
    with pytest.raises(ValueError):
        AuditAction.from_json("destroy")


@pytest.mark.parametrize(
    "resource_type, expected",
    [
        (ResourceType.SECURE_LINK, "secure_link"),
        (ResourceType.ORGANIZATION, "organization"),
    ],
)
def test_resource_type_values(resource_type, expected):
    log = new_audit_log(AuditAction.CREATE, resource_type, ObjectId(), "created")
    assert log.resource_type == expected


def test_collection_name():
    assert AuditLog.collection_name() == "audit_logs"


def test_new_audit_log():
    resource_id = ObjectId()
    log = new_audit_log(AuditAction.CREATE, ResourceType.USER, resource_id, "created user")
    assert isinstance(log.id, ObjectId)
    assert log.created_at is not None
    assert log.action is AuditAction.CREATE
    assert log.resource_type == "user"
    assert log.resource_id == resource_id
    assert log.description == "created user"
    assert log.changes == {}
    assert log.has_changes() is False


def test_before_create_keeps_id():
    existing = ObjectId()
    log = AuditLog(id=existing, changes=None)
    log.before_create()
    assert log.id == existing
    assert log.changes == {}


def test_set_actor_and_request_info_chain():
    user_id, org_id = ObjectId(), ObjectId()
    log = AuditLog()
    result = log.set_actor(user_id, "alice@example.com", org_id).set_request_info(
        "127.0.0.1", "agent", "req-1"
    )
    assert result is log
    assert log.actor_user_id == user_id
    assert log.actor_email == "alice@example.com"
    assert log.actor_org_id == org_id
    assert (log.ip_address, log.user_agent, log.request_id) == ("127.0.0.1", "agent", "req-1")


def test_add_change_and_changes():
    log = AuditLog()
    log.add_change("name", "old", "new")
    assert log.changes["name"] == {"before": "old", "after": "new"}
    log.add_changes({"status": "active", "name": "replaced"})
    assert log.changes["status"] == "active"
    assert log.changes["name"] == "replaced"
    assert log.has_changes() is True


def test_add_change_with_missing_changes():
    log = AuditLog(changes=None)
    log.add_change("x", 1, 2)
    assert log.changes == {"x": {"before": 1, "after": 2}}


@pytest.mark.parametrize(
    "action,auth,modification",
    [
        (AuditAction.LOGIN, True, False),
        (AuditAction.LOGOUT, True, False),
        (AuditAction.CREATE, False, True),
        (AuditAction.UPDATE, False, True),
        (AuditAction.DELETE, False, True),
        (AuditAction.APPROVE, False, False),
    ],
)
def test_action_kinds(action, auth, modification):
    log = AuditLog(action=action)
    assert log.is_auth_action() is auth
    assert log.is_modification_action() is modification


def test_builder_builds_complete_log():
    resource_id, user_id, org_id = ObjectId(), ObjectId(), ObjectId()
    log = (
        AuditLogBuilder()
        .action(AuditAction.UPDATE)
        .resource(ResourceType.REQUIREMENT, resource_id)
        .description("updated requirement")
        .actor(user_id, "bob@example.com", org_id)
        .request_info("10.0.0.1", "agent", "req-2")
        .change("title", "a", "b")
        .changes({"priority": {"before": "LOW", "after": "HIGH"}})
        .build()
    )
    assert isinstance(log.id, ObjectId)
    assert log.created_at is not None
    assert log.action is AuditAction.UPDATE
    assert log.resource_type == "requirement"
    assert log.resource_id == resource_id
    assert log.description == "updated requirement"
    assert log.actor_user_id == user_id
    assert log.actor_email == "bob@example.com"
    assert log.actor_org_id == org_id
    assert log.request_id == "req-2"
    assert log.changes["title"] == {"before": "a", "after": "b"}
    assert log.changes["priority"] == {"before": "LOW", "after": "HIGH"}
    assert log.is_modification_action() is True


def test_builder_empty_build():
    log = AuditLogBuilder().build()
    assert log.action is None
    assert log.changes == {}
    assert log.has_changes() is False