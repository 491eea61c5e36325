"""
response/read.py
- Purpose: Read-side DB operations for UserResponse.
"""

from sqlalchemy.orm import Session
from idp.models.user_response import UserResponse


class ResponseReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user_role(self, user_id: str, role_id: int) -> list[UserResponse]:
        return (
            self.db.query(UserResponse)
            .filter(UserResponse.user_id == user_id, UserResponse.role_id == role_id)
            .order_by(UserResponse.competency_id.asc())
            .all()
        )

    def get(self, user_id: str, role_id: int, competency_id: int) -> UserResponse | None:
        return (
            self.db.query(UserResponse)
            .filter(
                UserResponse.user_id == user_id,
                UserResponse.role_id == role_id,
                UserResponse.competency_id == competency_id,
            )
            .first()
        )
