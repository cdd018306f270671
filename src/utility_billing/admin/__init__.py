from utility_billing.admin.editor import ConfigEditor
from utility_billing.admin.gate import AdminGate
from utility_billing.admin.panel import AdminPanel
from utility_billing.admin.state import AdminState, ConfigForm
from utility_billing.admin.validation import validate_config_form

__all__ = [
    "AdminGate",
    "AdminPanel",
    "AdminState",
    "ConfigEditor",
    "ConfigForm",
    "validate_config_form",
]
