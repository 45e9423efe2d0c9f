"""Invoice API routes.

发票草稿（仅内存，不持久化）的编辑接口。
金额汇总在每次响应时按当前明细实时计算。

- 草稿不存在: 404
- 明细行不存在: 静默忽略（data 为 null）
"""

import logging
from typing import Optional, List

from fastapi import APIRouter, Depends, Path

from app.schemas.common import ApiResponse, model_to_dict
from app.schemas.invoice import (
    Invoice,
    InvoiceCreate,
    InvoiceHeaderUpdate,
    LineItem,
    LineItemCreate,
    LineItemUpdate,
)
from app.core.deps import get_invoice_service
from app.core.async_utils import run_sync

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_schema(document) -> Invoice:
    return Invoice(**model_to_dict(document))


@router.get("/", response_model=ApiResponse[List[Invoice]])
async def list_invoices(service=Depends(get_invoice_service)):
    """获取所有发票草稿（最新创建的在最前）"""
    documents = await run_sync(service.list_documents)
    return ApiResponse(data=[_to_schema(d) for d in documents])


@router.post("/", response_model=ApiResponse[Invoice])
async def create_invoice(
    invoice: InvoiceCreate,
    service=Depends(get_invoice_service),
):
    """新建发票草稿"""
    document = await run_sync(
        service.create_document,
        client_name=invoice.client_name,
        invoice_number=invoice.invoice_number,
        invoice_date=invoice.invoice_date,
        with_default_item=invoice.with_default_item,
    )
    return ApiResponse(data=_to_schema(document), message="发票创建成功")


@router.get("/{invoice_id}", response_model=ApiResponse[Invoice])
async def get_invoice(
    invoice_id: str = Path(..., description="发票草稿 ID"),
    service=Depends(get_invoice_service),
):
    """获取发票草稿（含实时汇总）"""
    document = await run_sync(service.get_document, invoice_id)
    return ApiResponse(data=_to_schema(document))


@router.patch("/{invoice_id}", response_model=ApiResponse[Invoice])
async def update_invoice_header(
    update: InvoiceHeaderUpdate,
    invoice_id: str = Path(..., description="发票草稿 ID"),
    service=Depends(get_invoice_service),
):
    """修改表头（客户、编号、日期）"""
    header = update.model_dump(exclude_unset=True)
    document = await run_sync(service.update_header, invoice_id, **header)
    return ApiResponse(data=_to_schema(document))


@router.delete("/{invoice_id}", response_model=ApiResponse[bool])
async def delete_invoice(
    invoice_id: str = Path(..., description="发票草稿 ID"),
    service=Depends(get_invoice_service),
):
    """删除发票草稿"""
    deleted = await run_sync(service.delete_document, invoice_id)
    return ApiResponse(data=deleted, message="发票已删除" if deleted else f"发票不存在，已忽略: {invoice_id}")


# ==================== 明细行 ====================

@router.post("/{invoice_id}/items", response_model=ApiResponse[LineItem])
async def add_line_item(
    item: LineItemCreate,
    invoice_id: str = Path(..., description="发票草稿 ID"),
    service=Depends(get_invoice_service),
):
    """追加明细行"""
    created = await run_sync(
        service.add_item,
        invoice_id,
        description=item.description,
        quantity=item.quantity,
        rate=item.rate,
    )
    return ApiResponse(data=LineItem(**model_to_dict(created)))


@router.patch("/{invoice_id}/items/{item_id}", response_model=ApiResponse[Optional[LineItem]])
async def update_line_item(
    update: LineItemUpdate,
    invoice_id: str = Path(..., description="发票草稿 ID"),
    item_id: str = Path(..., description="明细行 ID"),
    service=Depends(get_invoice_service),
):
    """修改明细行的单个字段（数量/单价的无效输入按 0 处理）"""
    updated = await run_sync(service.update_item, invoice_id, item_id, update.field, update.value)

    if updated is None:
        return ApiResponse(data=None, message=f"明细行不存在，已忽略: {item_id}")

    return ApiResponse(data=LineItem(**model_to_dict(updated)))


@router.delete("/{invoice_id}/items/{item_id}", response_model=ApiResponse[bool])
async def remove_line_item(
    invoice_id: str = Path(..., description="发票草稿 ID"),
    item_id: str = Path(..., description="明细行 ID"),
    service=Depends(get_invoice_service),
):
    """删除明细行"""
    removed = await run_sync(service.remove_item, invoice_id, item_id)
    return ApiResponse(data=removed)
