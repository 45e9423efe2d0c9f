"""
发票数据模型定义

金额一律使用 Decimal:
- 行金额 = 数量 × 单价
- 小计 = Σ 行金额
- 税额 = 小计 × TAX_RATE
- 合计 = 小计 + 税额

小计/税额/合计只在查询时计算，不单独保存。
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any

# 固定税率
TAX_RATE = Decimal("0.10")

CENTS = Decimal("0.01")

DEFAULT_QUANTITY = 1

# 数量和单价的整数部分最多 12 位，超出视为无效输入
MAX_AMOUNT_DIGITS = 12

# 汇总时的运算精度，足以容纳上限内的乘积与求和再保留到分
TOTALS_PRECISION = 60


def to_money(value: Decimal) -> Decimal:
    """四舍五入到分"""
    with localcontext() as ctx:
        ctx.prec = TOTALS_PRECISION
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _to_decimal(value: Any) -> Decimal:
    """任意输入 -> 有限且不超过上限的 Decimal，否则为 0"""
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    else:
        # float 先转字符串，避免二进制误差带入
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return Decimal(0)
    if not amount.is_finite():
        return Decimal(0)
    if amount and amount.adjusted() >= MAX_AMOUNT_DIGITS:
        return Decimal(0)
    return amount


def coerce_quantity(value: Any) -> int:
    """数量: 非负整数（小数截断），无效输入或负数为 0"""
    amount = _to_decimal(value)
    return int(amount) if amount > 0 else 0


def coerce_rate(value: Any) -> Decimal:
    """单价: 非负 Decimal，无效输入或负数为 0"""
    amount = _to_decimal(value)
    return amount if amount > 0 else Decimal(0)


@dataclass(frozen=True)
class InvoiceLineItem:
    """
    发票明细行

    Attributes:
        id: 行 ID（文档内唯一）
        description: 描述
        quantity: 数量（非负整数）
        rate: 单价（非负）
    """
    id: str
    description: str = ""
    quantity: int = DEFAULT_QUANTITY
    rate: Decimal = Decimal(0)

    @property
    def amount(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = TOTALS_PRECISION
            return self.rate * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'description': self.description,
            'quantity': self.quantity,
            'rate': self.rate,
            'amount': self.amount,
        }


@dataclass(frozen=True)
class InvoiceTotals:
    """小计 / 税额 / 合计"""
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    @classmethod
    def from_items(cls, items) -> 'InvoiceTotals':
        with localcontext() as ctx:
            ctx.prec = TOTALS_PRECISION
            subtotal = sum((item.amount for item in items), Decimal(0))
            tax = subtotal * TAX_RATE
            return cls(
                subtotal=to_money(subtotal),
                tax=to_money(tax),
                total=to_money(subtotal + tax),
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            'subtotal': self.subtotal,
            'tax': self.tax,
            'total': self.total,
            'tax_rate': TAX_RATE,
        }
