"""
Domain enumerations.

String enums shared by ORM models, request schemas and services.
Values are persisted as plain strings (non-native enums).

Dependencies: enum (stdlib)
System role: Canonical vocabulary for statuses, roles and types
"""

import enum


class UserRole(str, enum.Enum):
    """Back-office staff roles used for route authorization."""

    ADMIN = "admin"
    MANAGER = "manager"
    PROJECT_MANAGER = "project_manager"
    ACCOUNT_MANAGER = "account_manager"
    ENGINEER = "engineer"


class ClientStatus(str, enum.Enum):
    """
    Client lifecycle states.

    PROSPECT: Not yet contracted
    ACTIVE: At least one running engagement
    INACTIVE: Engagement paused
    EXPIRED: All contracts lapsed
    RENEWED: Contract renewed, engagement continues
    """

    PROSPECT = "prospect"
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    RENEWED = "renewed"


class ClientSourceType(str, enum.Enum):
    """How a client was acquired."""

    DIRECT_SALES = "direct_sales"
    REFERRAL = "referral"
    PARTNER = "partner"
    MARKETING_CAMPAIGN_CLOUD = "marketing_campaign_cloud"
    MARKETING_CAMPAIGN_DEEM = "marketing_campaign_deem"
    NCA_INITIATIVE = "nca_initiative"
    WEB_INQUIRY = "web_inquiry"
    EVENT = "event"
    OTHER = "other"


class ContractStatus(str, enum.Enum):
    """Contract lifecycle states."""

    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    ACTIVE = "active"
    RENEWED_ACTIVE = "renewed_active"
    RENEWED_INACTIVE = "renewed_inactive"
    EXPIRED = "expired"
    TERMINATED = "terminated"
    CANCELLED = "cancelled"
    SUSPENDED = "suspended"
    ON_HOLD = "on_hold"


ACTIVE_CONTRACT_STATUSES = (ContractStatus.ACTIVE, ContractStatus.RENEWED_ACTIVE)
CLOSED_CONTRACT_STATUSES = (
    ContractStatus.TERMINATED,
    ContractStatus.CANCELLED,
    ContractStatus.EXPIRED,
)


class SAFStatus(str, enum.Enum):
    """Service Activation Form workflow states on a service scope."""

    NOT_INITIATED = "not_initiated"
    DRAFT = "draft"
    PENDING_CLIENT_SIGNATURE = "pending_client_signature"
    SIGNED_BY_CLIENT = "signed_by_client"
    CLIENT_REVIEW = "client_review"
    ACTIVATED = "activated"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


ACTIVE_SAF_STATUSES = (SAFStatus.ACTIVATED, SAFStatus.IN_PROGRESS, SAFStatus.SIGNED_BY_CLIENT)


class ServiceCategory(str, enum.Enum):
    """Catalog grouping for offered services."""

    SECURITY_OPERATIONS = "security_operations"
    ENDPOINT_SECURITY = "endpoint_security"
    NETWORK_SECURITY = "network_security"
    CLOUD_SECURITY = "cloud_security"
    INFRASTRUCTURE_SECURITY = "infrastructure_security"
    DATA_PROTECTION = "data_protection"
    PRIVACY_COMPLIANCE = "privacy_compliance"
    INCIDENT_RESPONSE = "incident_response"
    THREAT_HUNTING = "threat_hunting"
    FORENSICS = "forensics"
    COMPLIANCE = "compliance"
    RISK_ASSESSMENT = "risk_assessment"
    AUDIT_SERVICES = "audit_services"
    CONSULTING = "consulting"
    SECURITY_ARCHITECTURE = "security_architecture"
    STRATEGY_PLANNING = "strategy_planning"
    MANAGED_IT = "managed_it"
    MANAGED_DETECTION_RESPONSE = "managed_detection_response"
    MANAGED_SIEM = "managed_siem"
    TRAINING = "training"
    SECURITY_AWARENESS = "security_awareness"
    PENETRATION_TESTING = "penetration_testing"
    VULNERABILITY_ASSESSMENT = "vulnerability_assessment"
    OTHER = "other"


class ServiceDeliveryModel(str, enum.Enum):
    """How a service is delivered to the client."""

    SERVERLESS = "serverless"
    SAAS_PLATFORM = "saas_platform"
    CLOUD_HOSTED = "cloud_hosted"
    PHYSICAL_SERVERS = "physical_servers"
    ON_PREMISES_ENGINEER = "on_premises_engineer"
    CLIENT_INFRASTRUCTURE = "client_infrastructure"
    REMOTE_SUPPORT = "remote_support"
    REMOTE_MONITORING = "remote_monitoring"
    VIRTUAL_DELIVERY = "virtual_delivery"
    HYBRID = "hybrid"
    MULTI_CLOUD = "multi_cloud"
    CONSULTING_ENGAGEMENT = "consulting_engagement"
    PROFESSIONAL_SERVICES = "professional_services"


class HardwareAssetType(str, enum.Enum):
    """Inventory classification for hardware assets."""

    SERVER = "server"
    WORKSTATION = "workstation"
    LAPTOP = "laptop"
    DESKTOP = "desktop"
    NETWORK_DEVICE = "network_device"
    FIREWALL = "firewall"
    SWITCH = "switch"
    ROUTER = "router"
    ACCESS_POINT = "access_point"
    STORAGE_DEVICE = "storage_device"
    SECURITY_APPLIANCE = "security_appliance"
    MONITORING_DEVICE = "monitoring_device"
    PRINTER = "printer"
    MOBILE_DEVICE = "mobile_device"
    TABLET = "tablet"
    OTHER = "other"


class HardwareAssetStatus(str, enum.Enum):
    """
    Hardware asset inventory states.

    IN_STOCK and AWAITING_DEPLOYMENT are the only assignable states.
    IN_USE is set by the assignment flow.
    """

    IN_STOCK = "in_stock"
    AWAITING_DEPLOYMENT = "awaiting_deployment"
    IN_USE = "in_use"
    UNDER_MAINTENANCE = "under_maintenance"
    AWAITING_REPAIR = "awaiting_repair"
    RETIRED = "retired"
    DISPOSED = "disposed"
    LOST = "lost"
    STOLEN = "stolen"


AVAILABLE_ASSET_STATUSES = (HardwareAssetStatus.IN_STOCK, HardwareAssetStatus.AWAITING_DEPLOYMENT)


class HardwareAssignmentStatus(str, enum.Enum):
    """States of a client hardware assignment."""

    ACTIVE = "active"
    RETURNED = "returned"
    REPLACED = "replaced"
    LOST = "lost"
    DAMAGED = "damaged"
    CANCELLED = "cancelled"


class FinancialTransactionType(str, enum.Enum):
    """Revenue and cost categories for financial transactions."""

    REVENUE_CONTRACT_PAYMENT = "REVENUE_CONTRACT_PAYMENT"
    REVENUE_LICENSE_SALE = "REVENUE_LICENSE_SALE"
    REVENUE_HARDWARE_SALE = "REVENUE_HARDWARE_SALE"
    REVENUE_SERVICE_ONE_TIME = "REVENUE_SERVICE_ONE_TIME"
    REVENUE_CONSULTATION = "REVENUE_CONSULTATION"
    REVENUE_TRAINING = "REVENUE_TRAINING"
    REVENUE_SUPPORT = "REVENUE_SUPPORT"
    COST_LICENSE_PURCHASE = "COST_LICENSE_PURCHASE"
    COST_HARDWARE_PURCHASE = "COST_HARDWARE_PURCHASE"
    COST_OPERATIONAL = "COST_OPERATIONAL"
    COST_PERSONNEL = "COST_PERSONNEL"
    COST_INFRASTRUCTURE = "COST_INFRASTRUCTURE"
    COST_VENDOR_SERVICES = "COST_VENDOR_SERVICES"
    COST_TRAINING = "COST_TRAINING"
    OTHER = "OTHER"

    @property
    def is_revenue(self) -> bool:
        return self.value.startswith("REVENUE_")

    @property
    def is_cost(self) -> bool:
        return self.value.startswith("COST_")


class FinancialTransactionStatus(str, enum.Enum):
    """Settlement states of a financial transaction."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    PAID = "PAID"
    COMPLETED = "COMPLETED"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    DISPUTED = "DISPUTED"
    FAILED = "FAILED"


EXCLUDED_FROM_TOTALS = (
    FinancialTransactionStatus.CANCELLED,
    FinancialTransactionStatus.FAILED,
    FinancialTransactionStatus.REFUNDED,
)


class ClientAssignmentRole(str, enum.Enum):
    """Role a staff member plays on a client account."""

    ACCOUNT_MANAGER = "ACCOUNT_MANAGER"
    LEAD_ENGINEER = "LEAD_ENGINEER"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    SUPPORT_CONTACT = "SUPPORT_CONTACT"
    SALES_LEAD = "SALES_LEAD"
    CONSULTANT = "CONSULTANT"
    SECURITY_ANALYST = "SECURITY_ANALYST"
    TECHNICAL_LEAD = "TECHNICAL_LEAD"
    IMPLEMENTATION_SPECIALIST = "IMPLEMENTATION_SPECIALIST"
    BACKUP_CONTACT = "BACKUP_CONTACT"


class HttpMethod(str, enum.Enum):
    GET = "GET"
    POST = "POST"


class ExpectedResponseType(str, enum.Enum):
    """Type the extracted JSONPath value is coerced to."""

    NUMBER = "NUMBER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    JSON_OBJECT = "JSON_OBJECT"
    JSON_ARRAY = "JSON_ARRAY"


class ExternalApiAuthenticationType(str, enum.Enum):
    """
    Authentication schemes supported for external data sources.

    NONE: No credentials
    BASIC_AUTH_USERNAME_PASSWORD: {username, password}
    BEARER_TOKEN_STATIC: {token}
    API_KEY_IN_HEADER: {headerName, keyValue}
    API_KEY_IN_QUERY_PARAM: {paramName, keyValue}
    """

    NONE = "NONE"
    BASIC_AUTH_USERNAME_PASSWORD = "BASIC_AUTH_USERNAME_PASSWORD"
    BEARER_TOKEN_STATIC = "BEARER_TOKEN_STATIC"
    API_KEY_IN_HEADER = "API_KEY_IN_HEADER"
    API_KEY_IN_QUERY_PARAM = "API_KEY_IN_QUERY_PARAM"


class ExternalSystemType(str, enum.Enum):
    """Kind of external system a data source points at."""

    JIRA_DC = "JIRA_DC"
    GRAFANA = "GRAFANA"
    GENERIC_REST_API = "GENERIC_REST_API"
    EDR_VENDOR_X = "EDR_VENDOR_X"
    CUSTOM_API = "CUSTOM_API"
