# nisfix

Domain models for a supplier security portal, where companies assess their
suppliers through questionnaires and CheckFix security grades.

The package holds plain Python dataclasses and their business rules:
lifecycle state machines, scoring, expiry checks and permission checks.
Identifiers are `bson.ObjectId` values (the `bson` module comes with
`pymongo`), timestamps are timezone-aware UTC datetimes, and every model
names the MongoDB collection it belongs to through the class method
`collection_name()`.

## Installation

```
pip install nisfix
```

Install the test dependencies with the `test` extra:

```
pip install "nisfix[test]"
```

## What is inside

| Module | Contents |
| --- | --- |
| `nisfix.base` | `JsonEnum`, `utcnow()` |
| `nisfix.organization` | `Organization`, `OrganizationType`, `OrganizationSettings`, `Address`, `default_organization_settings()` |
| `nisfix.user` | `User`, `UserRole` |
| `nisfix.question` | `Question`, `QuestionOption`, `QuestionType` |
| `nisfix.questionnaire` | `Questionnaire`, `QuestionnaireTopic`, `QuestionnaireStatus`, `ScoringMode` |
| `nisfix.questionnaire_template` | `QuestionnaireTemplate`, `TemplateTopic`, `TemplateCategory`, `TemplateVisibility` |
| `nisfix.submission` | `QuestionnaireSubmission`, `SubmissionAnswer`, `TopicScore` |
| `nisfix.relationship` | `CompanySupplierRelationship`, `RelationshipStatus`, `SupplierClassification`, `StatusChange` |
| `nisfix.response` | `SupplierResponse`, `DraftAnswer` |
| `nisfix.requirement` | `Requirement`, `RequirementType`, `RequirementStatus`, `Priority`, `RequirementStatusChange` |
| `nisfix.secure_link` | `SecureLink`, `SecureLinkType` |
| `nisfix.verification` | `CheckFixVerification`, `CheckFixGrade`, `CategoryGrade` |
| `nisfix.audit` | `AuditLog`, `AuditLogBuilder`, `new_audit_log()`, `AuditAction`, `ResourceType` |
| `nisfix.errors` | `ModelError` and its subclasses, `is_not_found_error`, `is_validation_error`, `is_auth_error`, `is_conflict_error` |

### Models

Each document model has a `before_create()` method that assigns an id if
none is set, sets the creation timestamps and fills in defaults (for example
a questionnaire starts as `DRAFT` with a passing score of 70, a requirement
starts as `PENDING` with `MEDIUM` priority). Most models also have
`before_update()`, which refreshes `updated_at`.

### Enumerations

Enumerations built on `JsonEnum` hold upper-case values. `to_json()` returns
the value in lower case (`CheckFixGrade` keeps its upper-case letter),
`from_json()` accepts either case and raises `ValueError` for unknown values,
and `is_valid()` tells whether a value is one of the members.
`ResourceType` is a plain string enumeration of lower-case resource names.

### Errors

Operations that break a business rule raise subclasses of
`nisfix.errors.ModelError`: an illegal status change raises
`InvalidStatusTransitionError`, and `Question.validate_answer()` raises
`InvalidAnswerFormatError` or `InvalidOptionIDError`. The errors are grouped
by base class (`NotFoundError`, `InvalidInputError`, `AuthError`,
`AlreadyExistsError`), and `is_not_found_error()`, `is_validation_error()`,
`is_auth_error()` and `is_conflict_error()` accept either an error or an
error class.

## Example

```python
from bson import ObjectId

from nisfix.errors import InvalidStatusTransitionError
from nisfix.requirement import Requirement, RequirementStatus

admin_id = ObjectId()
requirement = Requirement(title="Annual security review", assigned_by_user_id=admin_id)
requirement.before_create()

requirement.start(admin_id)
requirement.submit(admin_id)
requirement.approve(admin_id, "Looks good")
assert requirement.status is RequirementStatus.APPROVED

try:
    requirement.retry(admin_id)
except InvalidStatusTransitionError:
    print("approved requirements are final")
```

Relationships follow the same pattern:

```python
from nisfix.relationship import CompanySupplierRelationship

relationship = CompanySupplierRelationship(
    company_id=ObjectId(),
    invited_email="supplier@example.com",
    invited_by_user_id=admin_id,
)
relationship.before_create()
relationship.accept(ObjectId(), admin_id)
assert relationship.can_receive_requirements()
```

Audit entries can be built fluently:

```python
from nisfix.audit import AuditAction, AuditLogBuilder, ResourceType

log = (
    AuditLogBuilder()
    .action(AuditAction.UPDATE)
    .resource(ResourceType.REQUIREMENT.value, requirement.id)
    .change("status", "submitted", "approved")
    .build()
)
assert log.is_modification_action() and log.has_changes()
```

## What this package does not do

It has no storage layer, no HTTP server or middleware, no token handling and
no command-line program. It does not talk to MongoDB or to CheckFix; it only
models the documents and the rules that apply to them, and leaves saving,
loading and serving them to the application that uses it.

## Running the tests

```
pytest
```