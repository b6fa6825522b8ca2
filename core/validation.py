# =============================================================================
# core/validation.py - Request DTO Validation
# =============================================================================
# Routine input validation returns a tagged result instead of raising:
#
#   result = validate(BusinessCreate, payload)
#   if not result.ok:
#       return_400(result.errors)
#   business = result.value
#
# Only the HTTP layer decides how a failed result becomes a response.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from core.models.pagination import PageRequest

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class FieldIssue:
    """One problem with one input field."""

    field: str
    message: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message, "code": self.code}


@dataclass(frozen=True)
class Validated(Generic[M]):
    """Either a parsed value or the list of field issues that prevented it."""

    value: M | None = None
    issues: list[FieldIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.issues

    @property
    def errors(self) -> list[dict[str, str]]:
        return [issue.to_dict() for issue in self.issues]


def _issues_from(error: ValidationError, model: type[BaseModel]) -> list[FieldIssue]:
    # Report issues under the wire (camelCase) name the client sent
    aliases = {
        name: (info.alias or name)
        for name, info in model.model_fields.items()
    }
    issues = []
    for err in error.errors():
        loc = [str(part) for part in err["loc"]]
        if loc:
            loc[0] = aliases.get(loc[0], loc[0])
        issues.append(FieldIssue(
            field=".".join(loc),
            message=err["msg"],
            code=err["type"],
        ))
    return issues


def validate(model: type[M], data: Mapping[str, Any] | Any) -> Validated[M]:
    """Validate `data` against a pydantic model without raising."""
    if not isinstance(data, Mapping):
        return Validated(issues=[FieldIssue(
            field="",
            message="Expected an object",
            code="model_type",
        )])
    try:
        return Validated(value=model.model_validate(dict(data)))
    except ValidationError as e:
        return Validated(issues=_issues_from(e, model))


# =============================================================================
# Pagination Query Parsing
# =============================================================================

def _positive_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value >= 1 else None


def parse_page_request(
    page: str | None,
    limit: str | None,
    default_limit: int = 10,
    max_limit: int = 100,
) -> PageRequest:
    """
    Parse `page`/`limit` query strings leniently.

    Missing, unparseable or non-positive values fall back to page 1 and
    `default_limit`; limits above `max_limit` are clamped.
    """
    parsed_page = _positive_int(page) or 1
    parsed_limit = _positive_int(limit) or default_limit
    return PageRequest(page=parsed_page, limit=min(parsed_limit, max_limit))
