from utility_billing.export.pdf import bill_pdf_filename, export_bill_pdf, render_bill_pdf

__all__ = ["bill_pdf_filename", "export_bill_pdf", "render_bill_pdf"]
