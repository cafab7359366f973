from storefront.models.store import Store
from storefront.models.product import Product
from storefront.models.option import Option, OptionValue
from storefront.models.variant import ProductVariant
from storefront.models.notification import Notification
from storefront.models.audit_log import AuditLog

__all__ = [
    "Store",
    "Product",
    "Option",
    "OptionValue",
    "ProductVariant",
    "Notification",
    "AuditLog",
]
