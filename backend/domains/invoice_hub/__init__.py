"""
Invoice Hub - 发票草稿

提供:
- 发票明细行与金额汇总（固定 10% 税率）
- 单张发票草稿的编辑模型
- 多草稿的内存服务
"""

from .core import (
    MAX_AMOUNT_DIGITS,
    TAX_RATE,
    InvoiceDocument,
    InvoiceLineItem,
    InvoiceTotals,
    coerce_quantity,
    coerce_rate,
)
from .services import InvoiceService

__all__ = [
    'MAX_AMOUNT_DIGITS',
    'TAX_RATE',
    'InvoiceDocument',
    'InvoiceLineItem',
    'InvoiceTotals',
    'coerce_quantity',
    'coerce_rate',
    'InvoiceService',
]
