from models.companies import Company
from models.parties import Party, PartyRole
from models.items import Item
from models.vouchers import Voucher, VoucherType
from models.voucher_line_items import VoucherLineItem
from models.stock_movements import StockMovement
from models.audit_log import AuditLog
from models.app_config import AppConfig

__all__ = ['AppConfig', 'AuditLog', 'Company', 'Item', 'Party', 'PartyRole', 'StockMovement', 'Voucher', 'VoucherLineItem', 'VoucherType',]
