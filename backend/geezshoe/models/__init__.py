from geezshoe.models.order import Order
from geezshoe.models.product import Product
from geezshoe.models.aggregates import Sale, Customer
from geezshoe.models.admin import Admin, AuthUser
from geezshoe.models.company import CompanyInfo
from geezshoe.models.kv_store import KeyValue
from geezshoe.models.log import Log

__all__ = ["Order", "Product", "Sale", "Customer", "Admin", "AuthUser", "CompanyInfo", "KeyValue", "Log"]
