from sqlalchemy import Boolean, Column, DateTime, String, func
from sqlalchemy.orm import relationship
from ..database import Base

class Role(Base):
    """
    리소스(Resource)에 부여할 수 있는 참여 역할을 정의합니다.
    (예: 'Submitter', 'Reviewer', 'Copilot').
    이 역할을 참조하는 리소스가 하나라도 있으면 삭제할 수 없습니다.
    """
    __tablename__ = "roles"
    id = Column(String(36), primary_key=True)
    name = Column(String, unique=True, nullable=False, index=True)
    full_access = Column(Boolean, nullable=False, default=False)
    self_obtainable = Column(Boolean, nullable=False, default=False)
    created = Column(DateTime, nullable=False, server_default=func.now())
    created_by = Column(String, nullable=False)
    updated = Column(DateTime, nullable=False, server_default=func.now())
    updated_by = Column(String)
    legacy_id = Column(String)

    # 역할이 삭제되면 허용 단계 목록도 함께 삭제됩니다.
    phase_dependencies = relationship(
        "RolePhaseDependency", back_populates="role", cascade="all, delete-orphan", passive_deletes=True
    )
