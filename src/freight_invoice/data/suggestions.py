"""Autocomplete options offered by the line item editor."""

DESCRIPTIONS = [
    "Ocean Freight Charges",
    "20' Standard Container Shipment",
    "40' Standard Container Shipment",
    "40' High Cube Container Shipment",
    "LCL Consolidated Cargo",
    "Terminal Handling Charges (THC)",
    "Documentation Fee",
    "Bill of Lading Fee",
    "Customs Clearance",
    "Inland Haulage / Transport",
    "Port Congestion Surcharge",
    "Bunker Adjustment Factor (BAF)",
    "Currency Adjustment Factor (CAF)",
    "Electronic Cargo Tracking Note (ECTN)",
]

UNITS = [
    "Container",
    "20' CNTR",
    "40' CNTR",
    "40' HC",
    "CBM",
    "Kgs",
    "MT",
    "Pcs",
    "Pkgs",
    "Pallets",
    "Boxes",
    "Lump Sum",
    "Shipment",
]

# (value, label) pairs for standard container volumes
CBM_PRESETS = [
    ("33.2", "20ft Std"),
    ("67.7", "40ft Std"),
    ("76.4", "40ft HC"),
    ("1.0", "Min LCL"),
]

RATES = [
    "50.00",
    "100.00",
    "150.00",
    "250.00",
    "500.00",
    "1200.00",
    "1800.00",
    "2500.00",
    "3500.00",
    "4500.00",
]

QUANTITIES = ["1", "2", "3", "10", "100"]
