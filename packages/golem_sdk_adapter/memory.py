import hashlib
from typing import List

from .query import matches, parse_query
from .types import CreatedEntity, EntityCreate, StoredEntity

class MemoryEntityStore:
    """In-process stand-in for the Golem Base store (STORE_BACKEND=memory).

    Append-only like the real thing; BTL is recorded but never expires entities.
    """
    def __init__(self, owner: str = "0x0000000000000000000000000000000000000000"):
        self.owner = owner
        self._entities: List[tuple[str, EntityCreate]] = []

    def owner_address(self) -> str:
        return self.owner

    async def store(self, entities: List[EntityCreate]) -> List[CreatedEntity]:
        out = []
        for e in entities:
            seed = f"{self.owner}|{len(self._entities)}|".encode() + e.data
            key = "0x" + hashlib.sha256(seed).hexdigest()
            self._entities.append((key, e))
            out.append(CreatedEntity(entity_key=key, expiration_block=e.btl))
        return out

    async def query(self, expression: str) -> List[StoredEntity]:
        terms = parse_query(expression)
        out = []
        for key, e in self._entities:
            strings = {a.key: a.value for a in e.string_annotations}
            numbers = {a.key: a.value for a in e.numeric_annotations}
            if matches(terms, strings, numbers):
                out.append(StoredEntity(entity_key=key, storage_value=e.data))
        return out

    async def close(self) -> None:
        pass
