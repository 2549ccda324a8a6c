"""HTTP routes for the OCR service."""
