"""
发票服务

在内存中管理多个发票草稿，进程重启后丢失。
"""

import logging
import threading
from datetime import date
from typing import Any, Dict, List, Optional

from domains.core.exceptions import NotFoundError

from ..core import InvoiceDocument, InvoiceLineItem

logger = logging.getLogger(__name__)

DEFAULT_ITEM_DESCRIPTION = "Design Consultation"
DEFAULT_ITEM_RATE = 150


class InvoiceService:
    """发票草稿服务"""

    def __init__(self):
        self._documents: Dict[str, InvoiceDocument] = {}
        self._lock = threading.RLock()

    def create_document(
        self,
        client_name: str = "",
        invoice_number: Optional[str] = None,
        invoice_date: Optional[date] = None,
        with_default_item: bool = True,
    ) -> InvoiceDocument:
        """新建发票草稿，默认带一行咨询费明细"""
        document = InvoiceDocument(
            client_name=client_name,
            invoice_number=invoice_number,
            invoice_date=invoice_date,
        )
        if with_default_item:
            document.add_item(description=DEFAULT_ITEM_DESCRIPTION, quantity=1, rate=DEFAULT_ITEM_RATE)

        with self._lock:
            self._documents[document.id] = document
        logger.info(f"invoice_created: id={document.id}, number={document.invoice_number}")
        return document

    def get_document(self, document_id: str) -> InvoiceDocument:
        """
        获取发票草稿

        Raises:
            NotFoundError: 草稿不存在
        """
        with self._lock:
            document = self._documents.get(document_id)
        if document is None:
            raise NotFoundError("invoice", document_id)
        return document

    def list_documents(self) -> List[InvoiceDocument]:
        """按创建顺序倒序"""
        with self._lock:
            return list(reversed(self._documents.values()))

    def delete_document(self, document_id: str) -> bool:
        with self._lock:
            removed = self._documents.pop(document_id, None)
        if removed is not None:
            logger.info(f"invoice_deleted: id={document_id}")
        return removed is not None

    # ==================== 委托给文档的操作 ====================

    def update_header(self, document_id: str, **header: Any) -> InvoiceDocument:
        document = self.get_document(document_id)
        with self._lock:
            document.update_header(**header)
        return document

    def add_item(self, document_id: str, description: str = "", quantity: Any = 1, rate: Any = 0) -> InvoiceLineItem:
        document = self.get_document(document_id)
        with self._lock:
            return document.add_item(description=description, quantity=quantity, rate=rate)

    def update_item(self, document_id: str, item_id: str, field: str, value: Any) -> Optional[InvoiceLineItem]:
        document = self.get_document(document_id)
        with self._lock:
            return document.update_item(item_id, field, value)

    def remove_item(self, document_id: str, item_id: str) -> bool:
        document = self.get_document(document_id)
        with self._lock:
            return document.remove_item(item_id)
