"""Model validation and operation errors."""

from __future__ import annotations

from typing import Any


class ModelError(Exception):
    """Base class for all model errors; carries a fixed default message."""

    default_message = "model error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


# General categories
class NotFoundError(ModelError):
    default_message = "resource not found"


class AlreadyExistsError(ModelError):
    default_message = "resource already exists"


class InvalidInputError(ModelError):
    default_message = "invalid input"


class AuthError(ModelError):
    default_message = "authentication or authorization failed"


class UnauthorizedError(AuthError):
    default_message = "unauthorized"


class ForbiddenError(AuthError):
    default_message = "forbidden"


class InvalidStatusTransitionError(InvalidInputError):
    default_message = "invalid status transition"


# Organization errors
class OrganizationNotFoundError(NotFoundError):
    default_message = "organization not found"


class OrganizationDeletedError(ModelError):
    default_message = "organization has been deleted"


class InvalidOrganizationTypeError(InvalidInputError):
    default_message = "invalid organization type"


class SlugAlreadyExistsError(AlreadyExistsError):
    default_message = "organization slug already exists"


class DomainAlreadyExistsError(AlreadyExistsError):
    default_message = "domain already exists"


# User errors
class UserNotFoundError(NotFoundError):
    default_message = "user not found"


class UserDeletedError(AuthError):
    default_message = "user has been deleted"


class UserInactiveError(AuthError):
    default_message = "user is inactive"


class EmailAlreadyExistsError(AlreadyExistsError):
    default_message = "email already exists"


class InvalidUserRoleError(InvalidInputError):
    default_message = "invalid user role"


# Secure link errors
class SecureLinkNotFoundError(NotFoundError):
    default_message = "secure link not found"


class SecureLinkExpiredError(AuthError):
    default_message = "secure link has expired"


class SecureLinkUsedError(AuthError):
    default_message = "secure link has already been used"


class SecureLinkInvalidError(AuthError):
    default_message = "secure link is invalid"


# Questionnaire template errors
class TemplateNotFoundError(NotFoundError):
    default_message = "questionnaire template not found"


class TemplateNotEditableError(ModelError):
    default_message = "template cannot be edited"


class TemplateNotDeletableError(ModelError):
    default_message = "template cannot be deleted"


class TemplateNotOwnedByUserError(ModelError):
    default_message = "template not owned by user"


class TemplateAlreadyPublishedError(ModelError):
    default_message = "template is already published"


class TemplateNotPublishedError(ModelError):
    default_message = "template is not published"


class TemplateInUseError(ModelError):
    default_message = "template is in use and cannot be modified"


class TemplateInvalidFormatError(InvalidInputError):
    default_message = "invalid template format"


class TemplateMissingFieldsError(InvalidInputError):
    default_message = "template missing required fields"


class TemplateInvalidVisibilityError(InvalidInputError):
    default_message = "invalid template visibility"


# Questionnaire errors
class QuestionnaireNotFoundError(NotFoundError):
    default_message = "questionnaire not found"


class QuestionnaireNotDraftError(ModelError):
    default_message = "questionnaire is not in draft status"


class QuestionnaireNotPublishedError(ModelError):
    default_message = "questionnaire is not published"


class QuestionnaireNotEditableError(ModelError):
    default_message = "questionnaire cannot be edited (not draft)"


class QuestionnaireNotDeletableError(ModelError):
    default_message = "questionnaire cannot be deleted (not draft)"


# Question errors
class QuestionNotFoundError(NotFoundError):
    default_message = "question not found"


class InvalidQuestionTypeError(InvalidInputError):
    default_message = "invalid question type"


class MissingQuestionOptionsError(InvalidInputError):
    default_message = "choice questions require options"


class InvalidOptionIDError(InvalidInputError):
    default_message = "invalid option ID"


class InvalidAnswerFormatError(InvalidInputError):
    default_message = "invalid answer format"


# Relationship errors
class RelationshipNotFoundError(NotFoundError):
    default_message = "relationship not found"


class RelationshipExistsError(AlreadyExistsError):
    default_message = "relationship already exists"


class RelationshipNotActiveError(ModelError):
    default_message = "relationship is not active"


class RelationshipTerminatedError(ModelError):
    default_message = "relationship has been terminated"


class CannotAssignToRelationshipError(ModelError):
    default_message = "cannot assign requirements to this relationship"


# Requirement errors
class RequirementNotFoundError(NotFoundError):
    default_message = "requirement not found"


class RequirementExpiredError(ModelError):
    default_message = "requirement has expired"


class RequirementNotPendingError(ModelError):
    default_message = "requirement is not pending"


class RequirementNotSubmittableError(ModelError):
    default_message = "requirement cannot be submitted"


class RequirementNotReviewableError(ModelError):
    default_message = "requirement cannot be reviewed"


# Response errors
class ResponseNotFoundError(NotFoundError):
    default_message = "response not found"


class ResponseAlreadyExistsError(AlreadyExistsError):
    default_message = "response already exists for this requirement"


class ResponseNotSubmittedError(ModelError):
    default_message = "response has not been submitted"


class ResponseAlreadySubmittedError(ModelError):
    default_message = "response has already been submitted"


# Submission errors
class SubmissionNotFoundError(NotFoundError):
    default_message = "submission not found"


class SubmissionAlreadyExistsError(AlreadyExistsError):
    default_message = "submission already exists"


# Verification errors
class VerificationNotFoundError(NotFoundError):
    default_message = "verification not found"


class VerificationExpiredError(ModelError):
    default_message = "verification has expired"


class VerificationInvalidError(ModelError):
    default_message = "verification is invalid"


class DomainMismatchError(ModelError):
    default_message = "domain does not match"


class GradeNotMetError(ModelError):
    default_message = "minimum grade requirement not met"


class ReportTooOldError(ModelError):
    default_message = "report is too old"


# Audit log errors
class AuditLogNotFoundError(NotFoundError):
    default_message = "audit log not found"


def _is_kind(err: Any, kind: type[ModelError]) -> bool:
    if isinstance(err, type):
        return issubclass(err, kind)
    return isinstance(err, kind)


def is_not_found_error(err: Any) -> bool:
    """Return True if err (an error or error class) is a not-found error."""
    return _is_kind(err, NotFoundError)


def is_validation_error(err: Any) -> bool:
    """Return True if err (an error or error class) is a validation error."""
    return _is_kind(err, InvalidInputError)


def is_auth_error(err: Any) -> bool:
    """Return True if err (an error or error class) is an authentication/authorization error."""
    return _is_kind(err, AuthError)


def is_conflict_error(err: Any) -> bool:
    """Return True if err (an error or error class) is a conflict/duplicate error."""
    return _is_kind(err, AlreadyExistsError)