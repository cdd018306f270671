from utility_billing.billing.calculator import BillCalculator, CalculatorState
from utility_billing.billing.formula import check_bill, compute_bill, parse_units
from utility_billing.billing.manager import BillManager

__all__ = [
    "BillCalculator",
    "BillManager",
    "CalculatorState",
    "check_bill",
    "compute_bill",
    "parse_units",
]
