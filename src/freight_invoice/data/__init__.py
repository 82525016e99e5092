"""
Static data for the invoice editor.

Modules:
- template: The starter invoice and the blank line item
- suggestions: Autocomplete option lists for the item editor
"""
