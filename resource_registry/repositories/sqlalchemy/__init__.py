from .sqlalchemy_role_repository import SqlalchemyRoleRepository
from .sqlalchemy_phase_repository import SqlalchemyPhaseRepository
from .sqlalchemy_resource_repository import SqlalchemyResourceRepository
from .sqlalchemy_resource_phase_repository import SqlalchemyResourcePhaseRepository
from .sqlalchemy_role_phase_dependency_repository import SqlalchemyRolePhaseDependencyRepository
from .sqlalchemy_unit_of_work import SqlalchemyUnitOfWork

__all__ = [
    "SqlalchemyRoleRepository",
    "SqlalchemyPhaseRepository",
    "SqlalchemyResourceRepository",
    "SqlalchemyResourcePhaseRepository",
    "SqlalchemyRolePhaseDependencyRepository",
    "SqlalchemyUnitOfWork",
]
