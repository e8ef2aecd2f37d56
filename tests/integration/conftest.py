# tests/integration/conftest.py
import pytest

from resource_registry.bootstrap import build_services
from resource_registry.database import DataStore

# ===================================================================
#  인메모리 SQLite 저장소 Fixture
# ===================================================================

@pytest.fixture
def store():
    """테스트마다 새로운 인메모리 DB를 엽니다."""
    data_store = DataStore("sqlite://").open()
    yield data_store
    data_store.close()

@pytest.fixture
def db_session(store: DataStore):
    with store.session_scope() as session:
        yield session

@pytest.fixture
def services(db_session):
    return build_services(db_session)

@pytest.fixture
def submitter(services):
    return services.roles.create_role(
        {"name": "Submitter", "fullAccess": False, "selfObtainable": True, "createdBy": "u1"}
    )

@pytest.fixture
def make_phase(services):
    def _make_phase(name, description=None):
        return services.phases.create_phase({"name": name, "description": description, "createdBy": "u1"})
    return _make_phase
