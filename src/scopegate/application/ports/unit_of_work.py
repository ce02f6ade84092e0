"""Unit of Work port - transactional boundary."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from scopegate.application.ports.repositories.hierarchy_repository import (
    HierarchyRepository,
)
from scopegate.application.ports.repositories.membership_repository import (
    MembershipRepository,
)
from scopegate.application.ports.repositories.override_repository import (
    OverrideRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def memberships(self) -> MembershipRepository: ...

    @property
    def overrides(self) -> OverrideRepository: ...

    @property
    def hierarchy(self) -> HierarchyRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Opens a UnitOfWork: `async with factory() as uow`."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
