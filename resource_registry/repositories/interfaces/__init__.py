from .role import IRoleRepository
from .phase import IPhaseRepository
from .resource import IResourceRepository
from .resource_phase import IResourcePhaseRepository
from .role_phase_dependency import IRolePhaseDependencyRepository
from .unit_of_work import IUnitOfWork

__all__ = [
    "IRoleRepository",
    "IPhaseRepository",
    "IResourceRepository",
    "IResourcePhaseRepository",
    "IRolePhaseDependencyRepository",
    "IUnitOfWork",
]
