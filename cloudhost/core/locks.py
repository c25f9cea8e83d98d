"""
按键互斥锁 (Per-Key Mutex)

同一主机 IP 上的写操作（更新、逻辑删除、状态恢复、公共池申请）在进程内串行执行。
多进程部署时，服务层还会对目标行加 SELECT ... FOR UPDATE 行锁。

Writes addressing the same host IP (update, soft-delete, restore, pool apply) run one at a
time inside the process. Multi-process deployments additionally rely on the row lock taken
by SELECT ... FOR UPDATE in the service layer.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class KeyedLock:
    """按键分配 asyncio.Lock，无等待者时回收 (One asyncio.Lock per key, dropped once unused)."""

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._holders: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


# 主机写操作锁 (Host write lock registry)
host_locks = KeyedLock()
