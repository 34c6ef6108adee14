import math
from dataclasses import dataclass
from typing import Any, List


@dataclass
class ApiResponse:
    status_code: int
    data: Any = None
    message: str = "Success"

    @property
    def success(self) -> bool:
        return self.status_code < 400


@dataclass
class PageDto:
    docs: List[Any]
    total_docs: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool

    @classmethod
    def of(cls, docs, total_docs, page, limit):
        total_pages = math.ceil(total_docs / limit) if limit else 0
        return cls(
            docs=docs,
            total_docs=total_docs,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next_page=page < total_pages
        )


@dataclass
class OwnerDto:
    user_id: str
    username: str
    fullname: str
    avatar: str

    @classmethod
    def from_model(cls, user):
        if user is None:
            return None
        return cls(
            user_id=user.user_id,
            username=user.username,
            fullname=user.fullname,
            avatar=user.avatar
        )
