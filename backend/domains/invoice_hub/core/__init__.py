"""
发票核心模块

提供发票数据模型和草稿文档。
"""

from .models import (
    MAX_AMOUNT_DIGITS,
    TAX_RATE,
    InvoiceLineItem,
    InvoiceTotals,
    coerce_quantity,
    coerce_rate,
)
from .document import EDITABLE_ITEM_FIELDS, InvoiceDocument, generate_invoice_number

__all__ = [
    'MAX_AMOUNT_DIGITS',
    'TAX_RATE',
    'InvoiceLineItem',
    'InvoiceTotals',
    'coerce_quantity',
    'coerce_rate',
    'EDITABLE_ITEM_FIELDS',
    'InvoiceDocument',
    'generate_invoice_number',
]
