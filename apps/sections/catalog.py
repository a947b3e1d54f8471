from decimal import Decimal

# Seeded on first migrate, keyed by the unique section name
DEFAULT_SECTIONS = [
    {
        "name": "Nursery",
        "description": "Early childhood Islamic education for ages 3-5",
        "capacity": 30,
        "fee_termly": Decimal("12000"),
        "fee_annual": Decimal("32000"),
        "age_min": 3,
        "age_max": 5,
    },
    {
        "name": "Primary School",
        "description": "Primary education with Islamic values integration",
        "capacity": 40,
        "fee_termly": Decimal("15000"),
        "fee_annual": Decimal("40000"),
        "age_min": 6,
        "age_max": 12,
    },
    {
        "name": "Islamiyya",
        "description": "Foundational Islamic studies program",
        "capacity": 50,
        "fee_termly": Decimal("10000"),
        "fee_annual": Decimal("28000"),
        "age_min": 7,
        "age_max": 16,
    },
    {
        "name": "Tahfiz",
        "description": "Quran memorization program",
        "capacity": 25,
        "fee_termly": Decimal("18000"),
        "fee_annual": Decimal("48000"),
        "age_min": 8,
        "age_max": 18,
    },
    {
        "name": "Higher Islamic",
        "description": "Advanced Islamic studies for older students",
        "capacity": 35,
        "fee_termly": Decimal("20000"),
        "fee_annual": Decimal("55000"),
        "age_min": 16,
        "age_max": 25,
    },
    {
        "name": "Mosque/Majlis",
        "description": "Community programs and adult education",
        "capacity": 100,
        "fee_termly": Decimal("5000"),
        "fee_annual": Decimal("15000"),
        "age_min": 18,
        "age_max": 100,
    },
]

SECTION_NAMES = [section["name"] for section in DEFAULT_SECTIONS]

# Older registration forms post the short name
SECTION_ALIASES = {"Primary": "Primary School"}
