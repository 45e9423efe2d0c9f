"""
键值存储后端

持久化网关只依赖 KeyValueBackend 的三个操作（get/set/remove），
值一律是序列化后的字符串。

- MemoryBackend: 进程内字典，用于测试和 "不落盘" 模式
- JsonFileBackend: 每个键一个文件，原子替换写入，跨进程文件锁
"""

import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from domains.core.exceptions import StorageUnavailableError

from .lock import key_file_lock

logger = logging.getLogger(__name__)


class KeyValueBackend(ABC):
    """键值存储后端基类"""

    name: str = ""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """读取键值，不存在返回 None；存储不可用时抛出 StorageUnavailableError"""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """写入键值；存储不可用时抛出 StorageUnavailableError"""

    @abstractmethod
    def remove(self, key: str) -> None:
        """删除键，不存在时忽略"""

    def close(self) -> None:
        pass


class MemoryBackend(KeyValueBackend):
    """进程内字典后端（重启即丢失）"""

    name = "memory"

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data.keys())


class JsonFileBackend(KeyValueBackend):
    """
    文件后端

    目录结构:
        data_dir/
        ├── designers_os.notes.json
        ├── designers_os.reminders.json
        └── .locks/
            ├── designers_os.notes.lock
            └── designers_os.reminders.lock
    """

    name = "file"

    _UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")

    def __init__(self, data_dir: Path, lock_timeout: float = 10.0):
        self.data_dir = Path(data_dir)
        self.lock_timeout = lock_timeout

    def _safe_name(self, key: str) -> str:
        return self._UNSAFE_CHARS.sub("_", key)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{self._safe_name(key)}.json"

    def _lock(self, key: str):
        return key_file_lock(self.data_dir / ".locks" / f"{self._safe_name(key)}.lock", self.lock_timeout)

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            with self._lock(key):
                if not path.exists():
                    return None
                return path.read_text(encoding="utf-8")
        except (OSError, TimeoutError, UnicodeDecodeError) as e:
            raise StorageUnavailableError(key, str(e), cause=e) from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with self._lock(key):
                # 先写临时文件再原子替换，避免读到写了一半的内容
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self.data_dir,
                    prefix=f".{path.stem}.",
                    suffix=".tmp",
                    delete=False,
                ) as f:
                    tmp_name = f.name
                    f.write(value)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
                tmp_name = None
        except (OSError, TimeoutError) as e:
            raise StorageUnavailableError(key, str(e), cause=e) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug(f"tmp_file_cleanup_skipped: {tmp_name}")

    def remove(self, key: str) -> None:
        try:
            with self._lock(key):
                self._path(key).unlink(missing_ok=True)
        except (OSError, TimeoutError) as e:
            raise StorageUnavailableError(key, str(e), cause=e) from e
