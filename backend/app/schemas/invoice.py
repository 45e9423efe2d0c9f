"""Invoice-related Pydantic schemas.

金额字段使用 Decimal，JSON 中序列化为字符串。
"""

from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class InvoiceCreate(BaseModel):
    """Invoice create request."""

    client_name: str = Field("", description="客户名称")
    invoice_number: Optional[str] = Field(None, description="发票编号，默认 INV-<随机数>")
    invoice_date: Optional[date] = Field(None, description="开票日期，默认今天")
    with_default_item: bool = Field(True, description="是否附带默认咨询费明细")


class InvoiceHeaderUpdate(BaseModel):
    """Invoice header update request."""

    client_name: Optional[str] = None
    invoice_number: Optional[str] = None
    invoice_date: Optional[date] = None


class LineItemCreate(BaseModel):
    """新增明细行（数量/单价的无效输入按 0 处理）"""

    description: str = Field("", description="描述")
    quantity: Any = Field(1, description="数量")
    rate: Any = Field(0, description="单价")


class LineItemUpdate(BaseModel):
    """修改明细行的单个字段"""

    field: str = Field(..., description="字段名: description / quantity / rate")
    value: Any = Field(None, description="新值")


class LineItem(BaseModel):
    """发票明细行"""

    id: str
    description: str = ""
    quantity: int = 1
    rate: Decimal = Decimal(0)
    amount: Decimal = Decimal(0)


class InvoiceTotals(BaseModel):
    """金额汇总"""

    subtotal: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal


class Invoice(BaseModel):
    """Complete invoice model for API responses."""

    id: str = Field(..., description="发票草稿 ID")
    client_name: str = Field("", description="客户名称")
    invoice_number: str = Field(..., description="发票编号")
    invoice_date: date = Field(..., description="开票日期")
    items: List[LineItem] = Field(default_factory=list, description="明细行")
    totals: InvoiceTotals = Field(..., description="金额汇总")
