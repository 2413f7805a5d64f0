from packages.config.env import Cfg
from .memory import MemoryEntityStore

async def open_store(cfg: Cfg):
    """Entity store selected by STORE_BACKEND (golem | memory)."""
    if cfg.store_backend == "memory":
        return MemoryEntityStore()
    from .client import GolemEntityStore
    return await GolemEntityStore.connect(cfg)
