from sqlalchemy import Column, Integer, SmallInteger, String, Text, DateTime, UniqueConstraint, Index
from sqlalchemy.sql import func
from product_import.config.database import Base


class CategoryEntity(Base):
    """Category entity (EAV entity row)"""
    __tablename__ = "catalog_category_entity"

    entity_id = Column(Integer, primary_key=True, autoincrement=True)
    attribute_set_id = Column(Integer, nullable=False, default=0)
    parent_id = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    path = Column(String(255), nullable=False, server_default="")  # '' until the id is known
    position = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=0)
    children_count = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_category_level", "level"),
        Index("idx_category_path", "path"),
    )


class CategoryEntityVarchar(Base):
    __tablename__ = "catalog_category_entity_varchar"

    value_id = Column(Integer, primary_key=True, autoincrement=True)
    attribute_id = Column(SmallInteger, nullable=False)
    store_id = Column(SmallInteger, nullable=False, default=0)
    entity_id = Column(Integer, nullable=False)
    value = Column(String(255), nullable=True)

    __table_args__ = (
        UniqueConstraint("entity_id", "attribute_id", "store_id", name="uq_category_varchar_value"),
    )


class CategoryEntityInt(Base):
    __tablename__ = "catalog_category_entity_int"

    value_id = Column(Integer, primary_key=True, autoincrement=True)
    attribute_id = Column(SmallInteger, nullable=False)
    store_id = Column(SmallInteger, nullable=False, default=0)
    entity_id = Column(Integer, nullable=False)
    value = Column(Integer, nullable=True)

    __table_args__ = (
        UniqueConstraint("entity_id", "attribute_id", "store_id", name="uq_category_int_value"),
    )


class UrlRewrite(Base):
    """Request path -> target path mapping"""
    __tablename__ = "url_rewrite"

    url_rewrite_id = Column(Integer, primary_key=True, autoincrement=True)
    entity_type = Column(String(32), nullable=False)
    entity_id = Column(Integer, nullable=False)
    request_path = Column(String(255), nullable=True)
    target_path = Column(String(255), nullable=True)
    redirect_type = Column(SmallInteger, nullable=False, default=0)
    store_id = Column(SmallInteger, nullable=False)
    description = Column(String(255), nullable=True)
    is_autogenerated = Column(SmallInteger, nullable=False, default=0)
    # 'metadata' is reserved on declarative classes
    rewrite_metadata = Column("metadata", Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("request_path", "store_id", name="uq_url_rewrite_request_path_store"),
    )
