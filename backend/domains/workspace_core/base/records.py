"""持久化记录的字段校验"""

from typing import Any, Dict, Tuple, Type, Union

_MISSING = object()


def require_field(
    record: Dict[str, Any],
    name: str,
    expected: Union[Type, Tuple[Type, ...]],
    optional: bool = False,
) -> Any:
    """
    取出记录中的字段并校验类型

    Raises:
        KeyError: 必填字段缺失
        TypeError: 类型不符（bool 不被当作 int）
    """
    value = record.get(name, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        raise KeyError(name)

    expected_types = expected if isinstance(expected, tuple) else (expected,)
    if isinstance(value, bool) and bool not in expected_types:
        raise TypeError(f"{name}: expected {expected_types}, got bool")
    if not isinstance(value, expected_types):
        raise TypeError(f"{name}: expected {expected_types}, got {type(value).__name__}")
    return value
