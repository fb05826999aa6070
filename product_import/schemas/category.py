from pydantic import BaseModel, Field
from typing import ClassVar, Optional, List, Dict

URL_REWRITE_ENTITY_TYPE = "category"
CATEGORY_TARGET_PATH = "catalog/category/view/id/{category_id}"


class EavAttributeInfo(BaseModel):
    TYPE_VARCHAR: ClassVar[str] = "varchar"
    TYPE_INTEGER: ClassVar[str] = "int"

    attribute_id: int
    attribute_code: str
    backend_type: str


class CategoryInfo(BaseModel):
    """Id path and url keys of an existing (or just created) category"""
    category_id: int
    id_path: List[int]
    url_keys: Dict[int, str] = Field(default_factory=dict)  # store id -> url key

    @property
    def parent_id(self) -> Optional[int]:
        return self.id_path[-2] if len(self.id_path) > 1 else None


class UrlRewriteRecord(BaseModel):
    entity_type: str = URL_REWRITE_ENTITY_TYPE
    entity_id: int
    request_path: str
    target_path: str
    redirect_type: int = 0
    store_id: int = 0
    is_autogenerated: int = 1


class CategoryUrl(BaseModel):
    url_key: str
    url_path: str
    rewrite: UrlRewriteRecord


class CategoryPathResult(BaseModel):
    """Outcome of resolving one name path: either an id or an error message."""
    path: str
    category_id: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, path: str, category_id: int) -> "CategoryPathResult":
        return cls(path=path, category_id=category_id)

    @classmethod
    def failure(cls, path: str, reason: str) -> "CategoryPathResult":
        return cls(path=path, error=reason)
