from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from ..core.database import Base


class WorkingFtpServer(Base):
    """One entry of a user's ordered list of sources in active use"""
    __tablename__ = "working_ftp_servers"
    __table_args__ = (
        UniqueConstraint("user_id", "ftp_server_id", name="uq_working_ftp_servers_user_server"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ftp_server_id = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="working_ftp_servers")
    ftp_server = relationship(
        "FtpServer",
        primaryjoin="foreign(WorkingFtpServer.ftp_server_id) == FtpServer.id",
        viewonly=True
    )
