"""
SeaFreight Invoice: a Dash editor for sea-freight invoices.

This package provides a single-page editor with a live, print-ready
preview. Line amounts are priced by volume (CBM x quantity x rate), the
record is saved automatically to local storage, and the invoice can be
downloaded as a PDF. Optional text assist through Gemini rewrites item
descriptions and proposes the next invoice number.

Subpackages:
- components: Dash UI components (editor form, invoice preview)
- models: Invoice record and editor status models
- services: Storage, auto-save, text assist and PDF export
- data: Default invoice template and input suggestions
- utils: Pricing and formatting helpers

Main entry points:
- app.main(): Start the server
- app.create_app(): Build the Dash application around an EditorState
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
