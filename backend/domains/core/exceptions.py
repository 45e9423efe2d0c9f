"""
统一异常体系

工作台内所有可预期的失败都表示为 ApplicationError 的子类，
API 层按 category 映射 HTTP 状态码，领域层按类型决定降级策略:

- StorageUnavailableError: 读取时视同无数据（使用种子），写入时只记录警告
- MalformedDataError: 丢弃持久化数据，使用种子
- NotFoundError / ValidationError: 直接返回给调用方
- ExternalServiceError / ConfigurationError: AI 代理边界的失败
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """错误分类"""
    VALIDATION = "validation"          # 请求字段无效
    NOT_FOUND = "not_found"            # 资源不存在（如发票草稿）
    BUSINESS = "business"              # 业务规则不满足
    STORAGE = "storage"                # 本地存储不可用
    EXTERNAL = "external"              # 模型服务调用失败
    CONFIGURATION = "configuration"    # 部署配置缺失（如 API 密钥）
    INTERNAL = "internal"


HTTP_STATUS_BY_CATEGORY = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.BUSINESS: 422,
    ErrorCategory.STORAGE: 503,
    ErrorCategory.EXTERNAL: 502,
    ErrorCategory.CONFIGURATION: 500,
    ErrorCategory.INTERNAL: 500,
}


@dataclass
class ApplicationError(Exception):
    """
    应用层异常基类

    使用示例:
        raise NotFoundError("invoice", "a1b2c3")
        raise ValidationError("不可编辑的明细字段: amount", field="amount")
        raise StorageUnavailableError("designers_os.notes", "磁盘已满")
    """
    code: str
    message: str
    category: ErrorCategory = ErrorCategory.INTERNAL
    details: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[Exception] = None

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    @property
    def http_status_code(self) -> int:
        return HTTP_STATUS_BY_CATEGORY.get(self.category, 500)

    def to_dict(self) -> Dict[str, Any]:
        """API 错误响应体"""
        payload: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class NotFoundError(ApplicationError):
    """资源不存在"""

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource_type}不存在: {resource_id}",
            category=ErrorCategory.NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": str(resource_id)},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ValidationError(ApplicationError):
    """请求字段无效"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            category=ErrorCategory.VALIDATION,
            details={"field": field} if field else {},
        )
        self.field = field


class BusinessError(ApplicationError):
    """业务规则不满足"""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            category=ErrorCategory.BUSINESS,
            details=details or {},
            cause=cause,
        )


class ExternalServiceError(ApplicationError):
    """外部服务（模型提供方）调用失败"""

    def __init__(self, service_name: str, message: str, cause: Optional[Exception] = None):
        super().__init__(
            code="EXTERNAL_SERVICE_ERROR",
            message=f"{service_name}: {message}",
            category=ErrorCategory.EXTERNAL,
            details={"service": service_name},
            cause=cause,
        )
        self.service_name = service_name


class ConfigurationError(ApplicationError):
    """部署配置缺失或无效"""

    def __init__(self, config_key: str, message: str):
        super().__init__(
            code="CONFIGURATION_ERROR",
            message=message,
            category=ErrorCategory.CONFIGURATION,
            details={"config_key": config_key},
        )
        self.config_key = config_key


# ==================== 持久化 ====================

class StorageUnavailableError(ApplicationError):
    """持久化存储不可用（被禁用、配额耗尽、权限不足、锁超时）"""

    def __init__(self, storage_key: str, message: str, cause: Optional[Exception] = None):
        super().__init__(
            code="STORAGE_UNAVAILABLE",
            message=f"存储不可用 [{storage_key}]: {message}",
            category=ErrorCategory.STORAGE,
            details={"storage_key": storage_key},
            cause=cause,
        )
        self.storage_key = storage_key


class MalformedDataError(BusinessError):
    """持久化数据不符合预期的集合结构"""

    def __init__(self, storage_key: str, message: str, cause: Optional[Exception] = None):
        super().__init__(
            code="MALFORMED_PERSISTED_DATA",
            message=f"持久化数据格式错误 [{storage_key}]: {message}",
            details={"storage_key": storage_key},
            cause=cause,
        )
        self.storage_key = storage_key


__all__ = [
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
]
