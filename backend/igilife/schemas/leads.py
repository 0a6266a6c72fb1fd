from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    QUOTED = "quoted"
    CONVERTED = "converted"
    CLOSED = "closed"


class QuoteLead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    email: str
    phone: str
    insurance_type: str = Field(alias="insuranceType")
    message: str = ""
    status: LeadStatus = LeadStatus.NEW
    created_at: str = Field(alias="createdAt")
    assigned_agent: str | None = Field(None, alias="assignedAgent")

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class QuoteLeadCreate(BaseModel):
    """A quote request as submitted from the services page."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    insurance_type: str = Field(alias="insuranceType", min_length=1)
    message: str = ""


class QuoteLeadUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    insurance_type: str | None = Field(None, alias="insuranceType")
    message: str | None = None
    status: LeadStatus | None = None
    assigned_agent: str | None = Field(None, alias="assignedAgent")
