from sqlalchemy import Column, Integer, String, Text, UniqueConstraint
from geezshoe.database import Base

# Generic namespaced key/value storage (backs server-side carts)
class KeyValue(Base):
    __tablename__ = "kv_store"

    id = Column(Integer, primary_key=True, index=True)
    namespace = Column(String, nullable=False, index=True)
    key = Column(String, nullable=False)
    value = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("namespace", "key", name="uq_kv_namespace_key"),
    )
