"""
发票服务模块
"""

from .invoice_service import InvoiceService

__all__ = ['InvoiceService']
