from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import relationship, validates
from ..database import Base

class Resource(Base):
    """
    특정 챌린지(또는 회원)에 역할(Role)을 부여한 배정 기록입니다.
    challenge_id, member_id 중 최소 하나는 있어야 합니다.

    (role_id, challenge_id, member_id) 조합은 고유해야 합니다. NULL끼리는
    UNIQUE 제약에서 서로 다른 값으로 취급되므로, 빈 문자열로 정규화한
    challenge_key / member_key 컬럼에 제약을 겁니다.
    """
    __tablename__ = "resources"
    __table_args__ = (
        UniqueConstraint("role_id", "challenge_key", "member_key", name="uq_resources_role_challenge_member"),
    )
    id = Column(String(36), primary_key=True)
    challenge_id = Column(String, index=True)
    member_id = Column(String, index=True)
    member_handle = Column(String)
    challenge_key = Column(String, nullable=False, default="")
    member_key = Column(String, nullable=False, default="")
    created = Column(DateTime, nullable=False, server_default=func.now())
    created_by = Column(String, nullable=False)
    updated = Column(DateTime, nullable=False, server_default=func.now())
    updated_by = Column(String)
    legacy_id = Column(String, index=True)

    role_id = Column(String(36), ForeignKey("roles.id"), nullable=False, index=True)
    role = relationship("Role")
    resource_phases = relationship(
        "ResourcePhase", back_populates="resource", cascade="all, delete-orphan", passive_deletes=True
    )

    @validates("challenge_id")
    def _normalize_challenge_key(self, key, value):
        self.challenge_key = value or ""
        return value

    @validates("member_id")
    def _normalize_member_key(self, key, value):
        self.member_key = value or ""
        return value
