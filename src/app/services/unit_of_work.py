from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.doctor_repository import IDoctorRepository
from src.app.repositories.payment_repository import IPaymentRepository
from src.app.repositories.plan_repository import IPlanRepository
from src.app.repositories.tenant_repository import ITenantRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    tenants: ITenantRepository
    plans: IPlanRepository
    payments: IPaymentRepository
    doctors: IDoctorRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
