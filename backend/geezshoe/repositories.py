# backend/geezshoe/repositories.py
"""
Thin per-entity data access used by the workflows.

Repositories never commit on their own, except where noted; the calling
workflow or route decides the transaction boundary.
"""
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session

from geezshoe.models.order import Order
from geezshoe.models.product import Product
from geezshoe.models.aggregates import Sale, Customer
from geezshoe.models.admin import Admin, ROLE_NORMAL
from geezshoe.models.company import CompanyInfo, COMPANY_ID


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, order: Order) -> Order:
        self.db.add(order)
        self.db.flush()
        return order

    def get(self, order_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def list_page(self, page: int, page_size: int, is_preorder: Optional[bool] = None) -> Tuple[List[Order], int]:
        query = self.db.query(Order)
        if is_preorder is not None:
            query = query.filter(Order.is_preorder == is_preorder)
        query = query.order_by(Order.order_date.desc(), Order.id.desc())
        total = query.count()
        return query.offset((page - 1) * page_size).limit(page_size).all(), total

    def count(self) -> int:
        return self.db.query(Order).count()

    def delete(self, order: Order) -> None:
        self.db.delete(order)
        self.db.flush()


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == int(product_id)).first()

    def get_many(self, product_ids) -> List[Product]:
        ids = [int(pid) for pid in product_ids]
        if not ids:
            return []
        return self.db.query(Product).filter(Product.id.in_(ids)).all()

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()

    def count(self, out_of_stock: bool = False) -> int:
        query = self.db.query(Product)
        if out_of_stock:
            query = query.filter(Product.item_number == 0)
        return query.count()

    def set_stock(self, product: Product, item_number: int) -> None:
        product.item_number = item_number
        product.is_active = item_number > 0
        self.db.flush()


class SalesRepository:
    def __init__(self, db: Session):
        self.db = db

    def increment(self, product_id: int, product_name: Optional[str], delta: int) -> None:
        # Single UPDATE ... SET quantity_sold = quantity_sold + delta, insert when absent
        result = self.db.execute(
            update(Sale)
            .where(Sale.product_id == product_id)
            .values(quantity_sold=Sale.quantity_sold + delta, product_name=product_name)
        )
        if result.rowcount == 0:
            self.db.add(Sale(product_id=product_id, product_name=product_name, quantity_sold=delta))
        self.db.flush()

    def get(self, product_id: int) -> Optional[Sale]:
        return self.db.query(Sale).filter(Sale.product_id == product_id).first()

    def list(self) -> List[Sale]:
        return self.db.query(Sale).order_by(Sale.created_at.desc(), Sale.id.desc()).all()


class CustomerRepository:
    def __init__(self, db: Session):
        self.db = db

    def increment(self, phone: str, name: Optional[str], email: Optional[str], delta: int) -> None:
        result = self.db.execute(
            update(Customer)
            .where(Customer.phone == phone)
            .values(total_items_purchased=Customer.total_items_purchased + delta, name=name, email=email)
        )
        if result.rowcount == 0:
            self.db.add(Customer(phone=phone, name=name, email=email, total_items_purchased=delta))
        self.db.flush()

    def get(self, phone: str) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.phone == phone).first()

    def list(self) -> List[Customer]:
        return self.db.query(Customer).order_by(Customer.total_items_purchased.desc()).all()


class AdminRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, admin_id: str) -> Optional[Admin]:
        return self.db.query(Admin).filter(Admin.id == admin_id).first()

    def get_role(self, admin_id: str) -> Optional[str]:
        admin = self.get(admin_id)
        return admin.role if admin else None

    def get_normal(self, admin_id: str) -> Optional[Admin]:
        return self.db.query(Admin).filter(Admin.id == admin_id, Admin.role == ROLE_NORMAL).first()

    def list_normal(self) -> List[Admin]:
        return self.db.query(Admin).filter(Admin.role == ROLE_NORMAL).order_by(Admin.name.asc()).all()

    def add(self, admin: Admin) -> Admin:
        self.db.add(admin)
        self.db.commit()
        self.db.refresh(admin)
        return admin

    def update_normal(self, admin_id: str, **fields) -> Optional[Admin]:
        admin = self.get_normal(admin_id)
        if not admin:
            return None
        for key, value in fields.items():
            setattr(admin, key, value)
        self.db.commit()
        self.db.refresh(admin)
        return admin

    def delete(self, admin: Admin) -> None:
        self.db.delete(admin)
        self.db.commit()


class CompanyInfoRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self) -> Optional[CompanyInfo]:
        return self.db.query(CompanyInfo).filter(CompanyInfo.id == COMPANY_ID).first()

    def upsert(self, **fields) -> CompanyInfo:
        info = self.get()
        if not info:
            info = CompanyInfo(id=COMPANY_ID)
            self.db.add(info)
        for key, value in fields.items():
            setattr(info, key, value)
        self.db.commit()
        self.db.refresh(info)
        return info
