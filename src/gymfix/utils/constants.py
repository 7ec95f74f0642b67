"""Application-wide constants."""

APP_NAME = "GymFix"
APP_VERSION = "1.0.0"
APP_ORGANIZATION = "GymFix Serwis"

# Persisted collection keys
COLLECTION_USERS = "users"
COLLECTION_PARTS = "parts"
COLLECTION_JOBS = "jobs"
COLLECTION_CLIENTS = "clients"
COLLECTION_KEYS = [
    COLLECTION_USERS,
    COLLECTION_PARTS,
    COLLECTION_JOBS,
    COLLECTION_CLIENTS,
]

# Job statuses
JOB_PENDING = "PENDING"
JOB_IN_PROGRESS = "IN_PROGRESS"
JOB_COMPLETED = "COMPLETED"
JOB_CANCELED = "CANCELED"
JOB_STATUSES = [JOB_PENDING, JOB_IN_PROGRESS, JOB_COMPLETED, JOB_CANCELED]
OPEN_JOB_STATUSES = [JOB_PENDING, JOB_IN_PROGRESS]

JOB_STATUS_LABELS = {
    JOB_PENDING: "Oczekujące",
    JOB_IN_PROGRESS: "W trakcie",
    JOB_COMPLETED: "Zakończone",
    JOB_CANCELED: "Anulowane",
}

# Allowed lifecycle moves (from -> set of to)
JOB_TRANSITIONS: dict[str, set[str]] = {
    JOB_PENDING: {JOB_IN_PROGRESS, JOB_CANCELED},
    JOB_IN_PROGRESS: {JOB_COMPLETED, JOB_CANCELED},
    JOB_COMPLETED: set(),
    JOB_CANCELED: set(),
}

# Part types
PART_SINGLE = "SINGLE"
PART_ASSEMBLY = "ASSEMBLY"
PART_TYPES = [PART_SINGLE, PART_ASSEMBLY]

# Part categories (key -> display label)
PART_CATEGORIES = {
    "CABLES": "Linki",
    "ELECTRONICS": "Elektronika",
    "UPHOLSTERY": "Tapicerka",
    "MECHANICAL": "Mechaniczne",
    "CONSUMABLES": "Eksploatacyjne",
    "WEARABLE": "Części zużywalne",
}

# ── Roles & permissions ──────────────────────────────────────────
ROLE_ADMIN = "ADMIN"
ROLE_WAREHOUSE = "WAREHOUSE"
ROLE_TECHNICIAN = "TECHNICIAN"
USER_ROLES = [ROLE_ADMIN, ROLE_WAREHOUSE, ROLE_TECHNICIAN]

ROLE_LABELS = {
    ROLE_ADMIN: "Administrator",
    ROLE_WAREHOUSE: "Magazynier",
    ROLE_TECHNICIAN: "Serwisant",
}

MANAGE_USERS = "MANAGE_USERS"
VIEW_INVENTORY = "VIEW_INVENTORY"
MANAGE_INVENTORY = "MANAGE_INVENTORY"
EDIT_PRICES = "EDIT_PRICES"
VIEW_JOBS = "VIEW_JOBS"
MANAGE_JOBS = "MANAGE_JOBS"
VIEW_CLIENTS = "VIEW_CLIENTS"
MANAGE_CLIENTS = "MANAGE_CLIENTS"

PERMISSION_KEYS = [
    MANAGE_USERS,
    VIEW_INVENTORY,
    MANAGE_INVENTORY,
    EDIT_PRICES,
    VIEW_JOBS,
    MANAGE_JOBS,
    VIEW_CLIENTS,
    MANAGE_CLIENTS,
]

# Human-readable labels for each permission
PERMISSION_LABELS = {
    MANAGE_USERS: "Zarządzanie użytkownikami",
    VIEW_INVENTORY: "Podgląd magazynu",
    MANAGE_INVENTORY: "Zarządzanie magazynem",
    EDIT_PRICES: "Edycja cen",
    VIEW_JOBS: "Podgląd zleceń",
    MANAGE_JOBS: "Obsługa zleceń",
    VIEW_CLIENTS: "Podgląd klientów",
    MANAGE_CLIENTS: "Zarządzanie klientami",
}

# Default permissions granted when a role is picked for an account
ROLE_DEFAULT_PERMISSIONS: dict[str, list[str]] = {
    ROLE_ADMIN: list(PERMISSION_KEYS),
    ROLE_WAREHOUSE: [VIEW_INVENTORY, MANAGE_INVENTORY, VIEW_JOBS],
    ROLE_TECHNICIAN: [VIEW_INVENTORY, VIEW_JOBS, MANAGE_JOBS, VIEW_CLIENTS],
}
