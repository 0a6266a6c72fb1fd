"""
User and credential record shapes.

`User` is the public view: what the session holds, what callers see,
what `get_all_users` returns. `CredentialRecord` is the stored shape
with the password attached. The two are deliberately separate classes
(neither subclasses the other) and `CredentialRecord.to_public()` is the
only way to turn one into the other, so a password cannot ride along
into a session or a response by accident.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from igilife.auth.roles import Role


class _UserFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    email: str
    role: Role
    avatar: str | None = None
    department: str | None = None
    agent_id: str | None = Field(None, alias="agentId")

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class User(_UserFields):
    pass


class CredentialRecord(_UserFields):
    password: str = Field(repr=False)

    def to_public(self) -> User:
        return User.model_validate(self.model_dump(exclude={"password"}))


class ProfileUpdate(BaseModel):
    """Fields a logged-in user may change on their own record."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    department: str | None = None
    agent_id: str | None = Field(None, alias="agentId")


class NewUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    role: Role = Role.USER
    password: str = Field(repr=False)
    avatar: str | None = None
    department: str | None = None
    agent_id: str | None = Field(None, alias="agentId")


CredentialList = TypeAdapter(list[CredentialRecord])
