"""Error categories feature."""
