"""Thread-pool helper for async routes."""

import asyncio
from typing import Callable, TypeVar

T = TypeVar("T")


async def run_sync(func: Callable[..., T], *args, **kwargs) -> T:
    """
    在线程池中执行同步调用

    store 的每次修改都会同步写回存储（文件读写 + 文件锁），不能阻塞 event loop:
        note = await run_sync(store.create, content="Call back Alex")
    """
    return await asyncio.to_thread(func, *args, **kwargs)
