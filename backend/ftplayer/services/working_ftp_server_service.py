"""
Working FTP server list

Each user keeps an ordered list of the sources they actively use. Any
existing source can be listed, not only the user's own.
"""
from typing import List
from sqlalchemy.orm import Session

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models.ftp_server import FtpServer
from ..models.working_ftp_server import WorkingFtpServer


class WorkingFtpServerService:
    def __init__(self, db: Session):
        self.db = db

    def _entries(self, user_id: int) -> List[WorkingFtpServer]:
        return self.db.query(WorkingFtpServer).filter(
            WorkingFtpServer.user_id == user_id
        ).order_by(WorkingFtpServer.position).all()

    def list_servers(self, user_id: int) -> List[FtpServer]:
        # Inner join drops entries whose source has been deleted
        return self.db.query(FtpServer).join(
            WorkingFtpServer,
            WorkingFtpServer.ftp_server_id == FtpServer.id
        ).filter(
            WorkingFtpServer.user_id == user_id
        ).order_by(WorkingFtpServer.position).all()

    def add_server(self, user_id: int, ftp_server_id: int) -> List[FtpServer]:
        if not self.db.query(FtpServer).filter(FtpServer.id == ftp_server_id).first():
            raise NotFoundError("FTP server not found")

        entries = self._entries(user_id)
        if any(entry.ftp_server_id == ftp_server_id for entry in entries):
            raise ConflictError("FTP server is already in your working list")

        next_position = max((entry.position for entry in entries), default=-1) + 1
        self.db.add(WorkingFtpServer(
            user_id=user_id,
            ftp_server_id=ftp_server_id,
            position=next_position
        ))
        self.db.commit()
        return self.list_servers(user_id)

    def remove_server(self, user_id: int, ftp_server_id: int) -> List[FtpServer]:
        entries = self._entries(user_id)
        entry = next((e for e in entries if e.ftp_server_id == ftp_server_id), None)
        if entry is None:
            raise NotFoundError("FTP server not found in working list")

        self.db.delete(entry)
        remaining = [e for e in entries if e is not entry]
        for position, remaining_entry in enumerate(remaining):
            remaining_entry.position = position

        self.db.commit()
        return self.list_servers(user_id)

    def replace_servers(self, user_id: int, ftp_server_ids: List[int]) -> List[FtpServer]:
        if len(set(ftp_server_ids)) != len(ftp_server_ids):
            raise ValidationError("Duplicate FTP server ids in working list")

        if ftp_server_ids:
            existing = self.db.query(FtpServer.id).filter(FtpServer.id.in_(ftp_server_ids)).all()
            if len(existing) != len(ftp_server_ids):
                raise NotFoundError("One or more FTP servers not found")

        self.db.query(WorkingFtpServer).filter(
            WorkingFtpServer.user_id == user_id
        ).delete(synchronize_session=False)

        for position, ftp_server_id in enumerate(ftp_server_ids):
            self.db.add(WorkingFtpServer(
                user_id=user_id,
                ftp_server_id=ftp_server_id,
                position=position
            ))

        self.db.commit()
        return self.list_servers(user_id)

    def clear_servers(self, user_id: int):
        self.db.query(WorkingFtpServer).filter(
            WorkingFtpServer.user_id == user_id
        ).delete(synchronize_session=False)
        self.db.commit()
