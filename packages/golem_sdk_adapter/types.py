# pydantic models mirroring the Golem Base create/query payloads
from pydantic import BaseModel, Field
from typing import Optional, Union

class Annotation(BaseModel):
    key: str
    value: Union[str, int]

class EntityCreate(BaseModel):
    data: bytes
    btl: int
    string_annotations: list[Annotation] = Field(default_factory=list)
    numeric_annotations: list[Annotation] = Field(default_factory=list)

class CreatedEntity(BaseModel):
    entity_key: str
    expiration_block: Optional[int] = None

class StoredEntity(BaseModel):
    entity_key: str
    storage_value: bytes
