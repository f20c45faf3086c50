# fieldstock/modules/item_types/defaults.py
"""Catalogo inicial: los diez tipos historicos que tambien existen como campos legacy"""

DEFAULT_ITEM_TYPES = [
    {"id": "n950", "name_local": "N950", "name_alt": "N950",
     "category": "devices", "units_per_box": 10, "sort_order": 1},
    {"id": "i9000s", "name_local": "I9000S", "name_alt": "I9000S",
     "category": "devices", "units_per_box": 10, "sort_order": 2},
    {"id": "i9100", "name_local": "I9100", "name_alt": "I9100",
     "category": "devices", "units_per_box": 10, "sort_order": 3},
    {"id": "rollPaper", "name_local": "ورق الطباعة", "name_alt": "Roll Paper",
     "category": "papers", "units_per_box": 50, "sort_order": 4},
    {"id": "stickers", "name_local": "الملصقات", "name_alt": "Stickers",
     "category": "papers", "units_per_box": 100, "sort_order": 5},
    {"id": "newBatteries", "name_local": "البطاريات الجديدة", "name_alt": "New Batteries",
     "category": "accessories", "units_per_box": 20, "sort_order": 6},
    {"id": "mobilySim", "name_local": "شريحة موبايلي", "name_alt": "Mobily SIM",
     "category": "sim", "units_per_box": 50, "sort_order": 7},
    {"id": "stcSim", "name_local": "شريحة STC", "name_alt": "STC SIM",
     "category": "sim", "units_per_box": 50, "sort_order": 8},
    {"id": "zainSim", "name_local": "شريحة زين", "name_alt": "Zain SIM",
     "category": "sim", "units_per_box": 50, "sort_order": 9},
    {"id": "lebaraSim", "name_local": "شريحة ليبارا", "name_alt": "Lebara SIM",
     "category": "sim", "units_per_box": 50, "sort_order": 10},
]
