from .role import Role
from .phase import Phase
from .resource import Resource
from .association import ResourcePhase
from .role_phase_dependency import RolePhaseDependency

__all__ = ["Role", "Phase", "Resource", "ResourcePhase", "RolePhaseDependency"]
