from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base

class RolePhaseDependency(Base):
    """
    역할(Role)이 연결될 수 있는 단계(Phase)의 허용 목록입니다.
    어떤 역할에 이 기록이 하나라도 있으면, 그 역할의 리소스는 목록에 있는
    단계에만 연결될 수 있습니다. 기록이 없는 역할은 제한이 없습니다.
    """
    __tablename__ = "role_phase_dependencies"
    __table_args__ = (
        UniqueConstraint("role_id", "phase_id", name="uq_role_phase_dependencies_role_phase"),
    )
    id = Column(String(36), primary_key=True)
    role_id = Column(String(36), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    phase_id = Column(String(36), ForeignKey("phases.id", ondelete="CASCADE"), nullable=False, index=True)
    phase_type = Column(String)
    created = Column(DateTime, nullable=False, server_default=func.now())
    created_by = Column(String, nullable=False)
    updated = Column(DateTime, nullable=False, server_default=func.now())
    updated_by = Column(String)

    role = relationship("Role", back_populates="phase_dependencies")
    phase = relationship("Phase", back_populates="role_dependencies")
