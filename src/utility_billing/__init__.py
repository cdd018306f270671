"""Utility billing client — bill calculation and admin configuration for the Billing API."""

from utility_billing.__version__ import __version__
from utility_billing.admin import (
    AdminGate,
    AdminPanel,
    AdminState,
    ConfigEditor,
    validate_config_form,
)
from utility_billing.billing import (
    BillCalculator,
    BillManager,
    CalculatorState,
    check_bill,
    compute_bill,
    parse_units,
)
from utility_billing.config.manager import ConfigManager
from utility_billing.core.client import BillingClient
from utility_billing.core.config import ClientConfig
from utility_billing.core.constants import AuthState, GatewayMethod
from utility_billing.core.exceptions import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    BillValidationError,
    ConfigurationError,
    ConfigValidationError,
    ExportError,
    GatewayError,
    OperationInProgressError,
    UtilityBillingError,
    ValidationError,
)
from utility_billing.core.types import (
    BillResponse,
    CalculateBillRequest,
    Configuration,
    UpdateConfigRequest,
)
from utility_billing.export import bill_pdf_filename, export_bill_pdf, render_bill_pdf
from utility_billing.gateway.http import HttpGateway
from utility_billing.gateway.mock import MockGateway

__all__ = [
    "__version__",
    # Clients & gateways
    "BillingClient",
    "ClientConfig",
    "HttpGateway",
    "MockGateway",
    # Managers & flows
    "AdminGate",
    "AdminPanel",
    "AdminState",
    "AuthState",
    "BillCalculator",
    "BillManager",
    "CalculatorState",
    "ConfigEditor",
    "ConfigManager",
    "GatewayMethod",
    # Formula & validation
    "check_bill",
    "compute_bill",
    "parse_units",
    "validate_config_form",
    # Models
    "BillResponse",
    "CalculateBillRequest",
    "Configuration",
    "UpdateConfigRequest",
    # Export
    "bill_pdf_filename",
    "export_bill_pdf",
    "render_bill_pdf",
    # Exceptions
    "APIConnectionError",
    "APIError",
    "APITimeoutError",
    "AuthenticationError",
    "BillValidationError",
    "ConfigValidationError",
    "ConfigurationError",
    "ExportError",
    "GatewayError",
    "OperationInProgressError",
    "UtilityBillingError",
    "ValidationError",
]
