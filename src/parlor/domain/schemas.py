"""Input schemas for role management.

Both schemas accept raw action strings; checking them against the known
actions is left to the role service so unknown values can be reported
together.
"""

from pydantic import BaseModel, ConfigDict, field_validator


def _clean_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Role name cannot be empty")
    return v.strip()


class CreateRoleRequest(BaseModel):
    """Request schema for creating a custom role.

    Attributes:
        name: Role name, unique within its scope.
        actions: Action names granted by the role. At least one is required.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    actions: list[str]

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        """Validate that name is not empty."""
        return _clean_name(v)

    @field_validator("actions")
    @classmethod
    def actions_not_empty(cls, v: list[str]) -> list[str]:
        """Validate that at least one action is granted."""
        if not v:
            raise ValueError("A role must grant at least one action")
        return v


class UpdateRoleRequest(BaseModel):
    """Patch schema for updating a role.

    Only the fields explicitly provided are applied; see ``changes``.

    Attributes:
        name: New role name. Rejected for default roles.
        actions: Replacement action set.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = None
    actions: list[str] | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str | None) -> str | None:
        """Validate that a provided name is not empty."""
        if v is None:
            return v
        return _clean_name(v)

    @field_validator("actions")
    @classmethod
    def actions_not_empty(cls, v: list[str] | None) -> list[str] | None:
        """Validate that a provided action set is not empty."""
        if v is not None and not v:
            raise ValueError("A role must grant at least one action")
        return v

    def changes(self) -> dict[str, object]:
        """Fields present in the patch with a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
