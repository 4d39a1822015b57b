"""Pytest configuration for tests."""

import pytest

from profilesync.config import Settings
from profilesync.errors import PersistenceError
from profilesync.service import ProfileSyncService
from profilesync.storage.memory import InMemoryStore


SAMPLE_CSV = """profile_name,acc_email,fname,lname,tel,address_city,visa_num,visa_exp,tm_pass
alpha,alpha@example.com,Jane,Doe,5551234567,Austin,4111111111111111,12/27,secret1
beta,beta@example.com,John,Smith,5559876543,"Portland, OR",5500000000000004,01/28,secret2
"""


class FailingStore(InMemoryStore):
    """In-memory scope whose writes can be switched off."""

    def __init__(self, name: str = "failing") -> None:
        super().__init__(name)
        self.fail_writes = False

    async def set(self, items):
        if self.fail_writes:
            raise PersistenceError(f"{self.name} scope is read-only")
        await super().set(items)


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


@pytest.fixture
def sync_store():
    return FailingStore("sync")


@pytest.fixture
def local_store():
    return FailingStore("local")


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def service(sync_store, local_store, settings):
    return ProfileSyncService(sync_store, local_store, settings=settings)
