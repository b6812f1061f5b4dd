"""
monitor/constants.py

Husbandry threshold constants used by the risk evaluation engine.
All numeric bands, margins and display strings are referenced from this module.
Magic numbers in business logic are prohibited.
"""

# ── Risk levels ──────────────────────────────────────────────
RISK_SCORES: dict[str, int] = {
    "optimal": 0,
    "warning": 1,
    "danger": 2,
    "critical": 3,
}

RISK_SUBTITLES: dict[str, str] = {
    "optimal": "Conditions excellentes",
    "warning": "Surveillance accrue",
    "danger": "Correction nécessaire",
    "critical": "Intervention immédiate requise",
}

RISK_ICONS: dict[str, str] = {
    "optimal": "check-circle",
    "warning": "alert-circle",
    "danger": "alert",
    "critical": "alert-octagon",
}

DASHBOARD_LABELS: dict[str, str] = {
    "optimal": "OPTIMAL",
    "warning": "ATTENTION",
    "danger": "DANGER",
    "critical": "CRITIQUE",
}

# ── Temperature bands (°C), keyed by inclusive upper age bound ─
# Each entry: (max_age_days, optimal_range, acceptable_range)
TEMPERATURE_BANDS: tuple[tuple[int, tuple[float, float], tuple[float, float]], ...] = (
    (7, (35.5, 36.5), (35.0, 37.0)),
    (14, (32.5, 33.5), (32.0, 34.0)),
    (21, (30.0, 31.0), (29.0, 32.0)),
    (28, (27.0, 28.0), (26.0, 29.0)),
    (35, (24.0, 25.0), (23.0, 26.0)),
)
TEMPERATURE_FALLBACK_BAND: tuple[tuple[float, float], tuple[float, float]] = (
    (21.0, 22.0),
    (20.0, 23.0),
)

# ── Relative humidity bands (%) ──────────────────────────────
HUMIDITY_BANDS: tuple[tuple[int, tuple[float, float], tuple[float, float]], ...] = (
    (3, (62.0, 68.0), (60.0, 70.0)),
    (14, (55.0, 65.0), (50.0, 70.0)),
)
HUMIDITY_FALLBACK_BAND: tuple[tuple[float, float], tuple[float, float]] = (
    (45.0, 65.0),
    (40.0, 70.0),
)

# ── Margins beyond the acceptable band before a reading is critical ─
TEMPERATURE_CRITICAL_MARGIN: float = 3.0  # °C
HUMIDITY_CRITICAL_MARGIN: float = 10.0  # percentage points

# ── Gas concentration tiers (ppm), not age dependent ─────────
GAS_THRESHOLDS_PPM: dict[str, dict[str, float]] = {
    "nh3": {"optimal": 5.0, "warning": 10.0, "danger": 20.0, "critical": 25.0},
    "co": {"optimal": 10.0, "warning": 50.0, "danger": 600.0, "critical": 2000.0},
}
PPM_PER_FRACTION: float = 1000.0

# ── Model output contract ────────────────────────────────────
HORIZONS: tuple[str, ...] = ("1h", "6h", "24h")
VARIABLES: tuple[str, ...] = ("temperature", "humidity", "nh3", "co")
TARGET_PREFIXES: tuple[str, ...] = ("temp", "humidity", "nh3", "co")
MODEL_OUTPUT_LEN: int = len(HORIZONS) * len(VARIABLES)

# ── Sensor window fed to the sequence regressor ─────────────
SEQUENCE_LENGTH: int = 168  # hourly timesteps (7 days)
FEATURE_COUNT: int = 47

# ── Activity history ─────────────────────────────────────────
ACTIVITY_LOG_MAX_LEN: int = 10

# ── Droppings classifier classes ─────────────────────────────
DISEASE_CLASSES: dict[str, dict] = {
    "cocci": {
        "name": "Coccidiose",
        "severity": "danger",
        "description": "Infection parasitaire intestinale causee par des coccidies.",
        "recommendations": [
            "Consultation veterinaire urgente",
            "Traitement anticoccidien immediat",
            "Desinfection du poulailler",
            "Ameliorer la ventilation",
        ],
    },
    "healthy": {
        "name": "Sain",
        "severity": "optimal",
        "description": "Les fientes indiquent un etat de sante normal.",
        "recommendations": [
            "Maintenir les conditions actuelles",
            "Surveillance reguliere",
            "Alimentation equilibree",
        ],
    },
    "ncd": {
        "name": "Newcastle (NCD)",
        "severity": "critical",
        "description": "Maladie virale tres contagieuse et mortelle.",
        "recommendations": [
            "URGENCE VETERINAIRE",
            "Isoler immediatement les oiseaux",
            "Signaler aux autorites sanitaires",
            "Mise en quarantaine du lot",
        ],
    },
    "salmo": {
        "name": "Salmonellose",
        "severity": "warning",
        "description": "Infection bacterienne pouvant affecter les humains.",
        "recommendations": [
            "Consultation veterinaire",
            "Antibiotherapie ciblee",
            "Hygiene renforcee",
            "Controle de la chaine alimentaire",
        ],
    },
}
