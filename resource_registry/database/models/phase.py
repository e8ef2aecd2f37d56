from sqlalchemy import Column, DateTime, String, Text, func
from sqlalchemy.orm import relationship
from ..database import Base

class Phase(Base):
    """
    워크플로우(챌린지)의 한 단계를 나타냅니다.
    (예: 'Registration', 'Submission', 'Review').
    리소스가 이 단계에 연결되어 있으면 삭제할 수 없습니다.
    """
    __tablename__ = "phases"
    id = Column(String(36), primary_key=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text)
    created = Column(DateTime, nullable=False, server_default=func.now())
    created_by = Column(String, nullable=False)
    updated = Column(DateTime, nullable=False, server_default=func.now())
    updated_by = Column(String)

    role_dependencies = relationship(
        "RolePhaseDependency", back_populates="phase", cascade="all, delete-orphan", passive_deletes=True
    )
