"""File renderings of reports: spreadsheets, text and letterhead PDFs."""
