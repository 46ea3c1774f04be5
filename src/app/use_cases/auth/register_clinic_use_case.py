import logging
import secrets

import bcrypt
from libs.result import Error, Result, Return

from src.app.services.plan_catalog import PlanCatalog, normalize_plan_code, slugify
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Tenant, User, UserRole
from src.domain.errors import ErrorCode
from .dtos import RegisterClinicCommand, RegisterClinicResponse, TenantCreated, UserInfo
from .verification import generate_verification_code, verification_expiry

logger = logging.getLogger(__name__)

DEFAULT_PLAN_CODE = "PRO"


class RegisterClinicUseCase:
    """
    Register Clinic Use Case

    Command/Response Pattern:
    - Input: RegisterClinicCommand (validated business intent)
    - Output: Result[RegisterClinicResponse] (structured response)

    Business Logic:
    1. Normalize email (lower) and registration id (upper)
    2. Reject duplicate email and duplicate registration id
    3. Resolve requested plan; unknown or absent falls back to PRO
    4. Hash password with bcrypt cost factor 12
    5. Create CLINIC_ADMIN user with a 6-digit verification code
    6. Create Tenant in PENDING_VERIFICATION and link it to its owner
    7. Create AuditEvent with action=tenant_registered
    8. Commit once; any failure rolls back user and tenant together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterClinicCommand) -> Result[RegisterClinicResponse]:
        """
        Execute register clinic use case

        Args:
            command: RegisterClinicCommand with owner and clinic details

        Returns:
            Result[RegisterClinicResponse] with user and tenant data
            or Error(VALIDATION_ERROR, EMAIL_ALREADY_EXISTS, REGISTRATION_ID_IN_USE)
        """
        email = command.owner.email.strip().lower()
        registration_id = command.clinic.registration_id.strip().upper()
        clinic_name = command.clinic.name.strip()
        address = command.clinic.address.strip()

        if not (email and command.owner.password and registration_id and clinic_name and address):
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_ERROR,
                    "Owner email, password, clinic name, registration id and address are required",
                )
            )

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(
                    Error(ErrorCode.EMAIL_ALREADY_EXISTS, "Email already registered")
                )

            existing_tenant = await self.uow.tenants.get_by_registration_id(registration_id)
            if existing_tenant:
                return Return.err(
                    Error(
                        ErrorCode.REGISTRATION_ID_IN_USE,
                        "Clinic with this registration ID already exists",
                    )
                )

            plan_code = await self._resolve_plan_code(command.plan_code)

            # Hash password with bcrypt cost factor 12
            password_hash = bcrypt.hashpw(
                command.owner.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                name=command.owner.name.strip(),
                email=email,
                password_hash=password_hash.decode("utf-8"),
                phone=command.owner.phone,
                role=UserRole.CLINIC_ADMIN,
                email_verified=False,
                verification_code=generate_verification_code(),
                verification_expires_at=verification_expiry(),
            )
            user = await self.uow.users.create(user)

            tenant = Tenant(
                name=clinic_name,
                registration_id=registration_id,
                slug=f"{slugify(clinic_name) or 'clinic'}-{secrets.token_hex(3)}",
                address=address,
                owner_id=user.id,
                subscription_plan_code=plan_code,
            )
            tenant = await self.uow.tenants.create(tenant)

            # Cross-link owner to clinic
            user.tenant_id = tenant.id
            await self.uow.users.update(user)

            audit_event = AuditEvent(
                tenant_id=tenant.id,
                user_id=user.id,
                action="tenant_registered",
                event_metadata={
                    "registration_id": registration_id,
                    "plan_code": plan_code,
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"Clinic {tenant.id} registered on plan {plan_code}")

            return Return.ok(
                RegisterClinicResponse(
                    user=UserInfo(
                        id=str(user.id),
                        name=user.name,
                        email=user.email,
                        role=UserRole.CLINIC_ADMIN.value,
                        email_verified=False,
                    ),
                    tenant=TenantCreated(
                        id=str(tenant.id),
                        name=tenant.name,
                        slug=tenant.slug,
                        registration_id=tenant.registration_id,
                        plan_code=plan_code,
                        subscription_status=tenant.subscription_status,
                    ),
                    subscription_status=tenant.subscription_status,
                )
            )

    async def _resolve_plan_code(self, requested) -> str:
        if not normalize_plan_code(requested):
            return DEFAULT_PLAN_CODE
        plan_result = await PlanCatalog(self.uow).get_active_plan(requested)
        if plan_result.is_err():
            logger.info(f"Unknown plan {requested!r} at registration, defaulting to {DEFAULT_PLAN_CODE}")
            return DEFAULT_PLAN_CODE
        return plan_result.value.code
