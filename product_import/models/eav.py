from sqlalchemy import Column, Integer, SmallInteger, String, Text, UniqueConstraint
from product_import.config.database import Base


class EavEntityType(Base):
    """EAV entity type"""
    __tablename__ = "eav_entity_type"

    entity_type_id = Column(SmallInteger, primary_key=True, autoincrement=True)
    entity_type_code = Column(String(50), nullable=False, unique=True)
    entity_table = Column(String(255), nullable=True)
    default_attribute_set_id = Column(SmallInteger, nullable=False, default=0)


class EavAttribute(Base):
    """EAV attribute metadata"""
    __tablename__ = "eav_attribute"

    attribute_id = Column(SmallInteger, primary_key=True, autoincrement=True)
    entity_type_id = Column(SmallInteger, nullable=False)
    attribute_code = Column(String(255), nullable=False)
    backend_type = Column(String(8), nullable=False, default="static")
    frontend_input = Column(String(50), nullable=True)

    __table_args__ = (
        UniqueConstraint("entity_type_id", "attribute_code", name="uq_eav_attribute_code"),
    )


class CoreConfigData(Base):
    __tablename__ = "core_config_data"

    config_id = Column(Integer, primary_key=True, autoincrement=True)
    scope = Column(String(8), nullable=False, default="default")
    scope_id = Column(Integer, nullable=False, default=0)
    path = Column(String(255), nullable=False)
    value = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("scope", "scope_id", "path", name="uq_core_config_data"),
    )
