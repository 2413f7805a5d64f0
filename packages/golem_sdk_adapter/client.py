from typing import Any, List

from golem_base_sdk import Annotation as GbAnnotation
from golem_base_sdk import GolemBaseClient, GolemBaseCreate

from packages.config.env import Cfg
from packages.core.errors import UpstreamFailure
from .types import CreatedEntity, EntityCreate, StoredEntity

def _key_str(k: Any) -> str:
    # SDK entity keys are GenericBytes; older builds hand back plain hex strings
    if hasattr(k, "as_hex_string"): return k.as_hex_string()
    if isinstance(k, (bytes, bytearray)): return "0x" + bytes(k).hex()
    return str(k)

def _to_sdk(e: EntityCreate) -> GolemBaseCreate:
    return GolemBaseCreate(
        data=e.data,
        btl=e.btl,
        string_annotations=[GbAnnotation(a.key, str(a.value)) for a in e.string_annotations],
        numeric_annotations=[GbAnnotation(a.key, int(a.value)) for a in e.numeric_annotations],
    )

class GolemEntityStore:
    """Append-only annotated blob store backed by the Golem Base SDK."""

    def __init__(self, client: GolemBaseClient):
        self.client = client

    @classmethod
    async def connect(cls, cfg: Cfg) -> "GolemEntityStore":
        key = cfg.private_key_bytes()
        try:
            client = await GolemBaseClient.create(rpc_url=cfg.rpc_url, ws_url=cfg.ws_url, private_key=key)
        except Exception as e:
            raise UpstreamFailure(f"Golem Base connection failed: {e}") from e
        return cls(client)

    def owner_address(self) -> str:
        return str(self.client.get_account_address())

    async def store(self, entities: List[EntityCreate]) -> List[CreatedEntity]:
        try:
            receipts = await self.client.create_entities([_to_sdk(e) for e in entities])
        except Exception as e:
            raise UpstreamFailure(f"create_entities failed: {e}") from e
        return [CreatedEntity(entity_key=_key_str(r.entity_key),
                              expiration_block=getattr(r, "expiration_block", None))
                for r in receipts]

    async def query(self, expression: str) -> List[StoredEntity]:
        try:
            rows = await self.client.query_entities(expression)
        except Exception as e:
            raise UpstreamFailure(f"query_entities failed: {e}") from e
        return [StoredEntity(entity_key=_key_str(r.entity_key), storage_value=bytes(r.storage_value)) for r in rows]

    async def close(self) -> None:
        await self.client.disconnect()
