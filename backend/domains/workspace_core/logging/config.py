"""
结构化日志配置

structlog 事件与标准库 logging 记录共用一条渲染链，
领域模块直接 logging.getLogger(__name__)，API 层用 get_logger() 带字段记录。

环境变量:
- LOG_LEVEL: DEBUG / INFO / WARNING / ERROR（默认 INFO）
- LOG_FORMAT: console（默认）或 json
- LOG_FILE: 设置后额外写一份滚动 JSON 日志，供桌面端离线排查
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import structlog

# 第三方库的日志级别，None 表示跟随全局级别
THIRD_PARTY_LEVELS = {
    "uvicorn": None,
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "openai": logging.WARNING,
}


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


@dataclass
class LogConfig:
    level: str = "INFO"
    format: LogFormat = LogFormat.CONSOLE
    service_name: str = "designers-os"
    log_file: Optional[Path] = None
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3

    @classmethod
    def from_env(cls, service_name: str = "designers-os") -> "LogConfig":
        log_file = os.getenv("LOG_FILE")
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format=LogFormat.JSON if os.getenv("LOG_FORMAT", "").lower() == "json" else LogFormat.CONSOLE,
            service_name=service_name,
            log_file=Path(log_file) if log_file else None,
        )

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.level, logging.INFO)


def _pre_chain(service_name: str) -> list:
    """structlog 事件和标准库记录共用的预处理"""
    return [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _add_service(service_name),
    ]


def _add_service(service_name: str):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict
    return processor


def _formatter(fmt: LogFormat, pre_chain: list) -> logging.Formatter:
    if fmt == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _file_handler(config: LogConfig, pre_chain: list) -> logging.Handler:
    # 文件始终写 JSON
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        config.log_file,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(_formatter(LogFormat.JSON, pre_chain))
    return handler


def configure_logging(config: Optional[LogConfig] = None, service_name: str = "designers-os") -> LogConfig:
    """配置根日志器；重复调用会替换之前的 handler"""
    config = config or LogConfig.from_env(service_name=service_name)
    pre_chain = _pre_chain(config.service_name)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_formatter(config.format, pre_chain))
    handlers: list[logging.Handler] = [console]
    if config.log_file is not None:
        handlers.append(_file_handler(config, pre_chain))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(config.numeric_level)

    for name, level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level if level is not None else config.numeric_level)
    return config


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    使用示例:
        logger = get_logger(__name__)
        logger.info("note_created", note_id="3f2a", store="notes")
    """
    return structlog.get_logger(name)


def bind_request_context(request_id: str, **fields) -> None:
    """请求开始时调用；同一请求内的日志都会带上 request_id"""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **fields)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
