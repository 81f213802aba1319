from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%d %H:%M:%S")


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class PaginationMeta(BaseModel):
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: int | None = Field(default=None, alias="from")
    to: int | None = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def build(cls, page: int, per_page: int, total: int, count: int):
        first = (page - 1) * per_page + 1 if count else None
        last = first + count - 1 if count else None
        return cls(
            current_page=page,
            last_page=last_page_for(total, per_page),
            per_page=per_page,
            total=total,
            from_=first,
            to=last,
        )


class PaginatedUsersResponse(BaseModel):
    data: list[UserResponse]
    meta: PaginationMeta


class MessageResponse(BaseModel):
    message: str


def last_page_for(total: int, per_page: int) -> int:
    return max(1, -(-total // per_page))
