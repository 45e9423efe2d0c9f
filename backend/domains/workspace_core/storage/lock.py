"""
存储锁

两层串行化:
- KeyLockRegistry: 进程内，同一个存储键的读写串行（read-your-writes）
- key_file_lock: 跨进程，同一个键文件同时只有一个写入方
"""

import fcntl
import logging
import os
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

_RETRY_INTERVAL = 0.05


class KeyLockRegistry:
    """同一个键始终返回同一把锁；不同键互不阻塞"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def get(self, key: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self.get(key):
            yield


@contextmanager
def key_file_lock(lock_path: Path, timeout: float = 10.0) -> Iterator[None]:
    """
    对 lock_path 加 fcntl 排他锁

    Raises:
        TimeoutError: timeout 秒内没有拿到锁
        OSError: 锁文件无法创建
    """
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(str(lock_path), os.O_CREAT | os.O_RDWR)
    deadline = time.monotonic() + timeout
    try:
        while True:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if time.monotonic() >= deadline:
                    raise TimeoutError(f"获取存储锁超时: {lock_path}")
                time.sleep(_RETRY_INTERVAL)
        try:
            yield
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        try:
            os.close(fd)
        except OSError as e:
            logger.warning(f"lock_close_failed: {lock_path}: {e}")
