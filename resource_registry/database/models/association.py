from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base

class ResourcePhase(Base):
    """
    리소스(Resource)와 단계(Phase) 사이의 다대다(many-to-many) 관계를 연결하는
    연관 테이블 모델입니다. "이 리소스는 현재 이 단계에서 활동 중" 임을 뜻합니다.
    리소스가 삭제되면 함께 삭제되고, 참조 중인 단계는 삭제할 수 없습니다.
    """
    __tablename__ = "resource_phases"
    __table_args__ = (
        UniqueConstraint("resource_id", "phase_id", name="uq_resource_phases_resource_phase"),
    )
    id = Column(String(36), primary_key=True)
    resource_id = Column(String(36), ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True)
    phase_id = Column(String(36), ForeignKey("phases.id"), nullable=False, index=True)
    created = Column(DateTime, nullable=False, server_default=func.now())
    created_by = Column(String)
    updated = Column(DateTime, nullable=False, server_default=func.now())
    updated_by = Column(String)

    resource = relationship("Resource", back_populates="resource_phases")
    phase = relationship("Phase")
