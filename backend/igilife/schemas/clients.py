from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Client(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    national_id: str = Field(alias="nationalId")
    contact: str
    email: str
    address: str
    agent_id: str = Field(alias="agentId")
    created_at: str = Field(alias="createdAt")

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ClientCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    national_id: str = Field(alias="nationalId")
    contact: str
    email: str
    address: str
    agent_id: str = Field(alias="agentId")


class ClientUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    national_id: str | None = Field(None, alias="nationalId")
    contact: str | None = None
    email: str | None = None
    address: str | None = None
    agent_id: str | None = Field(None, alias="agentId")


ClientList = TypeAdapter(list[Client])
