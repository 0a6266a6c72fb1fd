from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceStatus(str, Enum):
    REQUESTED = "requested"
    IN_PROGRESS = "in_progress"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class UserService(BaseModel):
    """A service requested by, or provided to, one portal user."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    user_id: str = Field(alias="userId")
    service_type: str = Field(alias="serviceType")
    service_name: str = Field(alias="serviceName")
    status: ServiceStatus = ServiceStatus.REQUESTED
    request_date: str = Field(alias="requestDate")
    activation_date: str | None = Field(None, alias="activationDate")
    details: dict[str, Any] = Field(default_factory=dict)
    policy_no: str | None = Field(None, alias="policyNo")

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserServiceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    service_type: str = Field(alias="serviceType", min_length=1)
    service_name: str = Field(alias="serviceName", min_length=1)
    status: ServiceStatus = ServiceStatus.REQUESTED
    activation_date: str | None = Field(None, alias="activationDate")
    details: dict[str, Any] = Field(default_factory=dict)
    policy_no: str | None = Field(None, alias="policyNo")


class UserServiceUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: ServiceStatus | None = None
    activation_date: str | None = Field(None, alias="activationDate")
    details: dict[str, Any] | None = None
    policy_no: str | None = Field(None, alias="policyNo")
