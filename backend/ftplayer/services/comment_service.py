from typing import List, Tuple
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError, ValidationError
from ..models.comment import Comment
from ..schemas.comment import CommentCreate
from .ftp_server_service import FtpServerService


class CommentService:
    def __init__(self, db: Session):
        self.db = db
        self.ftp_server_service = FtpServerService(db)

    def _get_owned_comment(self, user_id: int, comment_id: int, action: str) -> Comment:
        comment = self.db.query(Comment).filter(
            Comment.id == comment_id,
            Comment.user_id == user_id
        ).first()

        if not comment:
            raise NotFoundError(f"Comment not found or you don't have permission to {action} it")
        return comment

    def _paginate(self, query, page: int, limit: int) -> Tuple[List[Comment], int]:
        total = query.count()
        comments = query.order_by(
            Comment.created_at.desc(),
            Comment.id.desc()
        ).offset((page - 1) * limit).limit(limit).all()
        return comments, total

    def create_comment(self, user_id: int, comment_data: CommentCreate) -> Comment:
        if not self.ftp_server_service.get_server_by_id(comment_data.ftp_server_id):
            raise NotFoundError("FTP server not found")

        comment = Comment(**comment_data.model_dump(), user_id=user_id)
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def list_for_content(
        self,
        ftp_server_id: int,
        content_id: str,
        page: int = 1,
        limit: int = 50
    ) -> Tuple[List[Comment], int]:
        query = self.db.query(Comment).filter(
            Comment.ftp_server_id == ftp_server_id,
            Comment.content_id == content_id
        )
        return self._paginate(query, page, limit)

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 50) -> Tuple[List[Comment], int]:
        query = self.db.query(Comment).filter(Comment.user_id == user_id)
        return self._paginate(query, page, limit)

    def update_comment(self, user_id: int, comment_id: int, text: str) -> Comment:
        text = text.strip()
        if not text:
            raise ValidationError("Please provide a valid comment")

        comment = self._get_owned_comment(user_id, comment_id, "edit")
        comment.comment = text
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def delete_comment(self, user_id: int, comment_id: int):
        comment = self._get_owned_comment(user_id, comment_id, "delete")
        self.db.delete(comment)
        self.db.commit()
