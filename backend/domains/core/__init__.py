"""
Core - 通用应用基础设施

提供与具体领域无关的基础设施组件:
- 统一异常体系
- 服务生命周期管理
- 工作台服务装配
"""

from .exceptions import (
    ApplicationError,
    BusinessError,
    ConfigurationError,
    ErrorCategory,
    HTTP_STATUS_BY_CATEGORY,
    ExternalServiceError,
    MalformedDataError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from .lifecycle import (
    CORE_SERVICE_ENTRIES,
    ServiceEntry,
    ServiceRegistry,
    get_service_registry,
    register_core_services,
    reset_service_registry,
)

__all__ = [
    # Exceptions
    "ErrorCategory",
    "HTTP_STATUS_BY_CATEGORY",
    "ApplicationError",
    "NotFoundError",
    "ValidationError",
    "BusinessError",
    "ExternalServiceError",
    "ConfigurationError",
    "StorageUnavailableError",
    "MalformedDataError",
    # Lifecycle
    "ServiceRegistry",
    "ServiceEntry",
    "CORE_SERVICE_ENTRIES",
    "get_service_registry",
    "reset_service_registry",
    "register_core_services",
]
