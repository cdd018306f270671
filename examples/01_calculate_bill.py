# RUN: python examples/01_calculate_bill.py
"""Calculate a bill — MockGateway, BillCalculator, PDF export.

Demonstrates: local units validation, BillCalculator.calculate(), the
server-side error message path, and export_bill_pdf().
"""

import asyncio
import tempfile

from utility_billing import BillCalculator, MockGateway, export_bill_pdf
from utility_billing.utils.formatting import format_currency, format_units


def _bill(params: dict) -> dict:
    units = params["unitsConsumed"]
    subtotal = units * 0.5
    vat_amount = subtotal * 15 / 100
    return {
        "unitsConsumed": units,
        "ratePerUnit": 0.5,
        "subtotal": subtotal,
        "vatPercentage": 15,
        "vatAmount": vat_amount,
        "fixedServiceCharge": 5,
        "totalAmount": subtotal + vat_amount + 5,
        "calculatedAt": "2026-10-19T12:00:00.000Z",
    }


async def main() -> None:
    # 1. Mock the Billing API's calculate endpoint
    mock = MockGateway()
    mock.register("bill.calculate", _bill)
    await mock.connect()

    calculator = BillCalculator(mock)

    # 2. Invalid input never reaches the API
    await calculator.calculate("-5")
    print(f"Error   : {calculator.state.error}")
    print(f"API hits: {mock.call_count()}")

    # 3. A valid calculation
    bill = await calculator.calculate("100")
    assert bill is not None
    print(f"\nUnits   : {format_units(bill.units_consumed)}")
    print(f"Subtotal: {format_currency(bill.subtotal)}")
    print(f"VAT     : {format_currency(bill.vat_amount)}")
    print(f"Total   : {format_currency(bill.total_amount)}")

    # 4. Export the statement
    with tempfile.TemporaryDirectory() as tmp:
        path = await export_bill_pdf(bill, tmp)
        print(f"\nPDF     : {path.name} ({path.stat().st_size} bytes)")

    await mock.close()


if __name__ == "__main__":
    asyncio.run(main())
