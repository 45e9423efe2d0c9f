"""
发票草稿文档

单个发票的内存编辑模型：表头（客户、编号、日期）+ 有序明细行。
不做持久化，不做格式校验；数量/单价的无效输入按 0 处理。
"""

import logging
import random
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple

from domains.core.exceptions import ValidationError
from domains.workspace_core.base import new_entity_id

from .models import InvoiceLineItem, InvoiceTotals, coerce_quantity, coerce_rate

logger = logging.getLogger(__name__)

# 可编辑的明细字段
EDITABLE_ITEM_FIELDS = ('description', 'quantity', 'rate')


def generate_invoice_number() -> str:
    """默认发票编号: INV-<0..9999 随机数>"""
    return f"INV-{random.randint(0, 9999)}"


class InvoiceDocument:
    """
    发票草稿

    使用示例:
        doc = InvoiceDocument(client_name="Acme")
        item = doc.add_item()
        doc.update_item(item.id, 'quantity', '2')
        doc.update_item(item.id, 'rate', 100)
        doc.totals().total  # Decimal('220.00')
    """

    def __init__(
        self,
        client_name: str = "",
        invoice_number: Optional[str] = None,
        invoice_date: Optional[date] = None,
        document_id: Optional[str] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.id = document_id or new_entity_id()
        self.client_name = client_name
        self.invoice_number = invoice_number or generate_invoice_number()
        self.invoice_date = invoice_date or date.today()
        self._id_factory = id_factory or new_entity_id
        self._items: List[InvoiceLineItem] = []

    @property
    def items(self) -> Tuple[InvoiceLineItem, ...]:
        return tuple(self._items)

    def get_item(self, item_id: str) -> Optional[InvoiceLineItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    # ==================== 表头 ====================

    def update_header(
        self,
        client_name: Optional[str] = None,
        invoice_number: Optional[str] = None,
        invoice_date: Optional[date] = None,
    ) -> None:
        """更新表头，None 表示不修改"""
        if client_name is not None:
            self.client_name = client_name
        if invoice_number is not None:
            self.invoice_number = invoice_number
        if invoice_date is not None:
            self.invoice_date = invoice_date

    # ==================== 明细 ====================

    def add_item(self, description: str = "", quantity: Any = 1, rate: Any = 0) -> InvoiceLineItem:
        """追加明细行（默认空描述、数量 1、单价 0）"""
        existing = {item.id for item in self._items}
        item_id = self._id_factory()
        while item_id in existing:
            item_id = self._id_factory()

        item = InvoiceLineItem(
            id=item_id,
            description=description,
            quantity=coerce_quantity(quantity),
            rate=coerce_rate(rate),
        )
        self._items.append(item)
        return item

    def update_item(self, item_id: str, field: str, value: Any) -> Optional[InvoiceLineItem]:
        """
        修改明细行的单个字段

        Returns:
            修改后的明细行；行不存在时返回 None（不做任何修改）

        Raises:
            ValidationError: 字段不可编辑
        """
        if field not in EDITABLE_ITEM_FIELDS:
            raise ValidationError(f"不可编辑的明细字段: {field}", field=field)

        for index, item in enumerate(self._items):
            if item.id != item_id:
                continue
            if field == 'quantity':
                updated = replace(item, quantity=coerce_quantity(value))
            elif field == 'rate':
                updated = replace(item, rate=coerce_rate(value))
            else:
                updated = replace(item, description="" if value is None else str(value))
            self._items[index] = updated
            return updated

        logger.debug(f"invoice_item_update_skipped: item_id={item_id} not found")
        return None

    def remove_item(self, item_id: str) -> bool:
        """删除明细行，不存在时返回 False"""
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        return True

    # ==================== 汇总 ====================

    def totals(self) -> InvoiceTotals:
        """按当前明细实时计算"""
        return InvoiceTotals.from_items(self._items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'client_name': self.client_name,
            'invoice_number': self.invoice_number,
            'invoice_date': self.invoice_date.isoformat(),
            'items': [item.to_dict() for item in self._items],
            'totals': self.totals().to_dict(),
        }
