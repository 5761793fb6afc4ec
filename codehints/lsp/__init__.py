"""Language server exposing completion hints to LSP clients."""
