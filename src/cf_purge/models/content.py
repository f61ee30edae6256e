from __future__ import annotations

import enum

from pydantic import BaseModel, Field
from typing_extensions import Annotated


class ContentKind(enum.StrEnum):
    ARTICLE = "article"
    PAGE = "page"


class EventKind(enum.StrEnum):
    AFTER_SAVE = "afterSave"
    AFTER_DELETE = "afterDelete"


class Operation(enum.StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ContentObject(BaseModel):
    url: str
    # 0 is published, anything else is a draft; "0" and False are rejected
    draft: Annotated[int, Field(strict=True)]
    object_type: ContentKind

    @property
    def is_published(self) -> bool:
        return self.draft == 0

    class Config:
        frozen = True


class ContentEventContext(BaseModel):
    """A content object that the host just persisted or removed."""

    site: str
    hostname: str
    object_type: ContentKind
    data: ContentObject
    operation: Operation
    validation_errors: tuple[str, ...] = ()

    @property
    def is_create(self) -> bool:
        return self.operation is Operation.CREATE

    @property
    def is_update(self) -> bool:
        return self.operation is Operation.UPDATE

    class Config:
        frozen = True
