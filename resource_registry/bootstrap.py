# resource_registry/bootstrap.py
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from sqlalchemy.orm import Session

from resource_registry.config import settings
from resource_registry.database import DataStore
from resource_registry.logging_config import setup_logging
from resource_registry.repositories.sqlalchemy import (
    SqlalchemyPhaseRepository, SqlalchemyResourcePhaseRepository, SqlalchemyResourceRepository,
    SqlalchemyRolePhaseDependencyRepository, SqlalchemyRoleRepository, SqlalchemyUnitOfWork
)
from resource_registry.services.phase_service import PhaseService
from resource_registry.services.resource_phase_service import ResourcePhaseService
from resource_registry.services.resource_service import ResourceService
from resource_registry.services.role_phase_dependency_service import RolePhaseDependencyService
from resource_registry.services.role_service import RoleService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """세션 하나를 공유하는 서비스 묶음"""
    roles: RoleService
    phases: PhaseService
    resources: ResourceService
    resource_phases: ResourcePhaseService
    role_phase_dependencies: RolePhaseDependencyService


def create_data_store(database_url: Optional[str] = None) -> DataStore:
    """로깅을 설정하고, DataStore를 만들어 테이블까지 준비한 뒤 반환합니다."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)
    return DataStore(database_url).open()


def build_services(db_session: Session) -> Services:
    """
    하나의 DB 세션 위에 리포지토리와 서비스를 조립합니다.
    (Repositories -> Unit of Work -> Services)
    """
    role_repo = SqlalchemyRoleRepository(db_session)
    phase_repo = SqlalchemyPhaseRepository(db_session)
    resource_repo = SqlalchemyResourceRepository(db_session)
    resource_phase_repo = SqlalchemyResourcePhaseRepository(db_session)
    dependency_repo = SqlalchemyRolePhaseDependencyRepository(db_session)
    uow = SqlalchemyUnitOfWork(db_session)

    resource_phase_service = ResourcePhaseService(
        resource_repo, role_repo, phase_repo, resource_phase_repo, dependency_repo, uow
    )
    return Services(
        roles=RoleService(role_repo, resource_repo, uow),
        phases=PhaseService(phase_repo, resource_phase_repo, uow),
        resources=ResourceService(resource_repo, role_repo, resource_phase_repo, resource_phase_service, uow),
        resource_phases=resource_phase_service,
        role_phase_dependencies=RolePhaseDependencyService(dependency_repo, role_repo, phase_repo, uow),
    )


@contextmanager
def service_scope(store: DataStore) -> Iterator[Services]:
    """
    요청 하나를 처리하는 동안 사용할 서비스 묶음을 제공합니다.
    with 블록이 끝나면 세션을 닫습니다.
    """
    with store.session_scope() as db_session:
        yield build_services(db_session)
