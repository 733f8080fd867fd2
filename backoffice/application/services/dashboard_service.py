"""
Dashboard service.

Read-only aggregates: the per-client overview (and its sections), the
expiration timeline and portfolio-wide subscription metrics.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Dashboard aggregation
"""

import logging
from collections import Counter, defaultdict
from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import client_to_dict, to_float
from backoffice.boundary.db.CRUD.client_crud import client_crud
from backoffice.boundary.db.CRUD.contract_crud import contract_crud
from backoffice.boundary.db.CRUD.financial_transaction_crud import (
    TransactionFilters,
    financial_transaction_crud,
)
from backoffice.boundary.db.CRUD.hardware_assignment_crud import hardware_assignment_crud
from backoffice.boundary.db.CRUD.service_scope_crud import service_scope_crud
from backoffice.boundary.db.CRUD.team_assignment_crud import team_assignment_crud
from backoffice.boundary.db.models.contract_model import EXPIRING_SOON_DAYS
from backoffice.core.enums import (
    ClientAssignmentRole,
    FinancialTransactionStatus,
    HardwareAssignmentStatus,
)
from backoffice.core.exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)

RECENT_ITEMS = 5
KEY_PARAMETER_LIMIT = 5
SETTLED_STATUSES = (FinancialTransactionStatus.PAID, FinancialTransactionStatus.COMPLETED)
OPEN_STATUSES = (
    FinancialTransactionStatus.PENDING,
    FinancialTransactionStatus.PROCESSING,
    FinancialTransactionStatus.PARTIALLY_PAID,
    FinancialTransactionStatus.OVERDUE,
)


def _sum_values(contracts) -> Decimal:
    return sum((c.value for c in contracts if c.value is not None), Decimal("0"))


def _key_parameters(scope) -> dict:
    params = {k: v for k, v in (scope.scope_details or {}).items() if v not in (None, "")}
    keys = list(params)[:KEY_PARAMETER_LIMIT]
    selected = {k: params[k] for k in keys}
    if scope.quantity is not None:
        selected["quantity"] = scope.quantity
    if scope.unit:
        selected["unit"] = scope.unit
    return selected


class DashboardService:
    """Dashboard aggregation service."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize dashboard service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_client_or_404(self, client_id: UUID):
        client = await client_crud.get_by_id(self.db, client_id)
        if client is None:
            raise ResourceNotFoundError("Client", client_id)
        return client

    # Client overview sections

    async def get_profile(self, client_id: UUID) -> dict:
        """Client profile with its active account manager, if any."""
        client = await self._get_client_or_404(client_id)
        manager = await team_assignment_crud.get_active_for_role(
            self.db, client_id, ClientAssignmentRole.ACCOUNT_MANAGER
        )
        profile = client_to_dict(client)
        profile["account_manager"] = (
            {"user_id": manager.user_id, "name": manager.user.full_name, "email": manager.user.email}
            if manager is not None
            else None
        )
        return profile

    async def get_contracts(self, client_id: UUID) -> list[dict]:
        """Active contracts with expiry information and service counts."""
        await self._get_client_or_404(client_id)
        return await self._contracts_section(client_id)

    async def _contracts_section(self, client_id: UUID) -> list[dict]:
        contracts = await contract_crud.list_active_for_client(self.db, client_id)
        counts = await contract_crud.count_active_scopes_by_contract(self.db, [c.id for c in contracts])
        return [
            {
                "id": c.id,
                "contract_name": c.contract_name,
                "status": c.status,
                "start_date": c.start_date,
                "end_date": c.end_date,
                "value": to_float(c.value),
                "days_until_expiration": c.days_until_expiration,
                "is_expiring_soon": c.is_expiring_soon,
                "service_count": counts.get(c.id, 0),
            }
            for c in contracts
        ]

    async def get_services(self, client_id: UUID) -> list[dict]:
        """Active services on the client's active contracts."""
        await self._get_client_or_404(client_id)
        return await self._services_section(client_id)

    async def _services_section(self, client_id: UUID) -> list[dict]:
        scopes = await service_scope_crud.list_active_for_client(self.db, client_id, active_contracts_only=True)
        return [
            {
                "id": s.id,
                "service_id": s.service_id,
                "service_name": s.service.name,
                "contract_id": s.contract_id,
                "contract_name": s.contract.contract_name,
                "saf_status": s.saf_status,
                "saf_service_end_date": s.saf_service_end_date,
                "total_value": to_float(s.total_value),
                "key_parameters": _key_parameters(s),
            }
            for s in scopes
        ]

    async def get_financials(self, client_id: UUID) -> dict:
        """Contract value, payment totals and recent transactions of a client."""
        await self._get_client_or_404(client_id)
        return await self._financials_section(client_id)

    async def _financials_section(self, client_id: UUID) -> dict:
        contracts = await contract_crud.list_active_for_client(self.db, client_id)
        transactions = await financial_transaction_crud.list_all(
            self.db, TransactionFilters(client_id=client_id)
        )
        revenue = [t for t in transactions if t.is_revenue]
        paid = [t for t in revenue if t.status in SETTLED_STATUSES]
        pending = [t for t in revenue if t.status in OPEN_STATUSES]
        upcoming_due = [t.due_date for t in pending if t.due_date is not None and t.due_date >= date.today()]

        return {
            "total_contract_value": to_float(_sum_values(contracts)),
            "total_paid": to_float(sum((t.amount for t in paid), Decimal("0"))),
            "total_pending": to_float(sum((t.amount for t in pending), Decimal("0"))),
            "last_payment_date": max((t.transaction_date for t in paid), default=None),
            "next_payment_due": min(upcoming_due, default=None),
            "recent_transactions": [
                {
                    "id": t.id,
                    "type": t.type,
                    "amount": to_float(t.amount),
                    "currency": t.currency,
                    "status": t.status,
                    "transaction_date": t.transaction_date,
                    "description": t.description,
                }
                for t in transactions[:RECENT_ITEMS]
            ],
        }

    async def get_hardware(self, client_id: UUID) -> dict:
        """Hardware assigned to a client."""
        await self._get_client_or_404(client_id)
        return await self._hardware_section(client_id)

    async def _hardware_section(self, client_id: UUID) -> dict:
        assignments = await hardware_assignment_crud.list_for_client(self.db, client_id)
        active = [a for a in assignments if a.status == HardwareAssignmentStatus.ACTIVE]
        by_type = Counter(a.hardware_asset.asset_type.value for a in active)
        return {
            "total_assigned": len(assignments),
            "active_count": len(active),
            "by_type": dict(by_type),
            "recent_assignments": [
                {
                    "id": a.id,
                    "hardware_asset_id": a.hardware_asset_id,
                    "asset_tag": a.hardware_asset.asset_tag,
                    "asset_type": a.hardware_asset.asset_type,
                    "status": a.status,
                    "assignment_date": a.assignment_date,
                }
                for a in assignments[:RECENT_ITEMS]
            ],
        }

    async def get_team(self, client_id: UUID) -> dict:
        """Active team members ordered by priority."""
        await self._get_client_or_404(client_id)
        return await self._team_section(client_id)

    async def _team_section(self, client_id: UUID) -> dict:
        assignments = await team_assignment_crud.list_for_client(self.db, client_id, active_only=True)
        return {
            "members": [
                {
                    "assignment_id": a.id,
                    "user_id": a.user_id,
                    "name": a.user.full_name,
                    "email": a.user.email,
                    "assignment_role": a.assignment_role,
                    "priority": a.priority,
                    "assignment_date": a.assignment_date,
                }
                for a in assignments
            ],
            "members_by_role": dict(Counter(a.assignment_role.value for a in assignments)),
        }

    async def get_client_overview(self, client_id: UUID, include_financials: bool = True) -> dict:
        """
        Full client dashboard in one payload.

        Args:
            client_id: Client UUID
            include_financials: False leaves the financials section as None

        Returns:
            dict: profile, contracts, services, financials, hardware, team, summary

        Raises:
            ResourceNotFoundError: If the client does not exist
        """
        profile = await self.get_profile(client_id)
        contracts = await self._contracts_section(client_id)
        services = await self._services_section(client_id)
        financials = await self._financials_section(client_id) if include_financials else None
        hardware = await self._hardware_section(client_id)
        team = await self._team_section(client_id)

        saf_horizon = date.today() + timedelta(days=EXPIRING_SOON_DAYS)
        saf_expiring = any(
            s["saf_service_end_date"] is not None and date.today() <= s["saf_service_end_date"] <= saf_horizon
            for s in services
        )
        contract_expiring = any(c["is_expiring_soon"] for c in contracts)
        total_value = sum(c["value"] or 0.0 for c in contracts)

        logger.info(
            "Client overview built",
            extra={"client_id": str(client_id), "contracts": len(contracts), "services": len(services)},
        )
        return {
            "profile": profile,
            "contracts": contracts,
            "services": services,
            "financials": financials,
            "hardware": hardware,
            "team": team,
            "summary": {
                "active_contracts": len(contracts),
                "active_services": len(services),
                "total_contract_value": total_value,
                "health_status": "warning" if contract_expiring or saf_expiring else "good",
            },
        }

    # Portfolio views

    async def get_expirations(self, days: int = EXPIRING_SOON_DAYS) -> dict:
        """
        Services and contracts expiring within the next N days.

        Services are active scopes by SAF end date; contracts are active
        or renewed-active by end date.
        """
        today = date.today()
        scopes = await service_scope_crud.list_saf_expiring(self.db, days=days)
        contracts = await contract_crud.list_expiring(self.db, days=days)

        services = [
            {
                "id": s.id,
                "service_name": s.service.name,
                "contract_id": s.contract_id,
                "contract_name": s.contract.contract_name,
                "client_id": s.contract.client_id,
                "client_name": s.contract.client.company_name,
                "saf_service_end_date": s.saf_service_end_date,
                "days_until_expiration": (s.saf_service_end_date - today).days,
                "saf_status": s.saf_status,
            }
            for s in scopes
        ]
        contract_items = [
            {
                "id": c.id,
                "contract_name": c.contract_name,
                "client_id": c.client_id,
                "client_name": c.client.company_name,
                "end_date": c.end_date,
                "days_until_expiration": c.days_until_expiration,
                "value": to_float(c.value),
                "status": c.status,
            }
            for c in contracts
        ]
        clients = {item["client_id"] for item in services} | {item["client_id"] for item in contract_items}

        return {
            "days": days,
            "services": services,
            "contracts": contract_items,
            "summary": {
                "total_expiring_services": len(services),
                "total_expiring_contracts": len(contract_items),
                "total_expiring_value": to_float(_sum_values(contracts)),
                "clients_affected": len(clients),
            },
        }

    async def get_subscription_metrics(self) -> dict:
        """
        Portfolio recurring revenue metrics.

        ARR is the summed value of active contracts and MRR is ARR / 12.
        """
        active_clients = await client_crud.count_active(self.db)
        active_contracts = await contract_crud.list_active(self.db)
        arr = _sum_values(active_contracts)
        average = arr / len(active_contracts) if active_contracts else Decimal("0")

        revenue_by_service: dict[str, Decimal] = defaultdict(Decimal)
        for scope in await service_scope_crud.list_active_on_active_contracts(self.db):
            if scope.total_value is not None:
                revenue_by_service[scope.service.name] += scope.total_value

        return {
            "active_clients": active_clients,
            "active_contracts": len(active_contracts),
            "annual_recurring_revenue": to_float(arr),
            "monthly_recurring_revenue": round(float(arr) / 12, 2),
            "average_contract_value": round(float(average), 2),
            "clients_by_source": await client_crud.count_by_source(self.db),
            "revenue_by_service": {name: to_float(value) for name, value in revenue_by_service.items()},
        }
