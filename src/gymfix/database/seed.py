"""Factory dataset used for any collection that has never been saved."""

import copy

from gymfix.utils.constants import (
    COLLECTION_CLIENTS,
    COLLECTION_JOBS,
    COLLECTION_PARTS,
    COLLECTION_USERS,
    ROLE_ADMIN,
    ROLE_DEFAULT_PERMISSIONS,
    ROLE_TECHNICIAN,
    ROLE_WAREHOUSE,
)

_SEED_PARTS = [
    {"id": "p1", "name": "Linka stalowa 4mm", "sku": "CBL-004",
     "category": "CABLES", "type": "SINGLE", "quantity": 50,
     "minLevel": 10, "price": 25.00, "location": "A-01"},
    {"id": "p2", "name": "Pas bieżni LifeFitness", "sku": "BLT-LF95",
     "category": "MECHANICAL", "type": "SINGLE", "quantity": 3,
     "minLevel": 2, "price": 450.00, "location": "B-04"},
    {"id": "p3", "name": "Sterownik silnika Matrix", "sku": "PCB-MTX",
     "category": "ELECTRONICS", "type": "SINGLE", "quantity": 1,
     "minLevel": 2, "price": 1200.00, "location": "S-10"},
    {"id": "p4", "name": "Smar silikonowy", "sku": "LUB-SIL",
     "category": "CONSUMABLES", "type": "SINGLE", "quantity": 12,
     "minLevel": 5, "price": 45.00, "location": "C-02"},
    {"id": "p5", "name": "Tapicerka siedziska (Czarna)", "sku": "UPH-BK",
     "category": "UPHOLSTERY", "type": "SINGLE", "quantity": 0,
     "minLevel": 2, "price": 150.00, "location": "D-05"},
    {"id": "p6", "name": "Łożysko 6004zz", "sku": "BRG-6004",
     "category": "WEARABLE", "type": "SINGLE", "quantity": 20,
     "minLevel": 8, "price": 15.00, "location": "A-12"},
    {"id": "p7", "name": "Zestaw naprawczy rolki", "sku": "KIT-ROL-01",
     "category": "MECHANICAL", "type": "ASSEMBLY", "quantity": 2,
     "minLevel": 5, "price": 55.00, "location": "K-01",
     "bom": [
         {"partId": "p6", "quantity": 2},
         {"partId": "p4", "quantity": 1},
     ]},
]

_SEED_CLIENTS = [
    {
        "id": "c1",
        "name": "CityFit Centrum",
        "address": "ul. Marszałkowska 100, Warszawa",
        "contactPerson": "Anna Nowak",
        "phone": "500-100-100",
        "machines": [
            {"id": "m1", "model": "LifeFitness 95T",
             "serialNumber": "LF-2022-998", "installDate": "2022-01-15",
             "warrantyUntil": "2024-01-15"},
            {"id": "m2", "model": "Technogym Excite Run",
             "serialNumber": "TG-554-221", "installDate": "2021-06-20",
             "warrantyUntil": "2023-06-20"},
        ],
    },
    {
        "id": "c2",
        "name": "McFit Mokotów",
        "address": "ul. Wołoska 12, Warszawa",
        "contactPerson": "Piotr Kowalski",
        "phone": "600-200-200",
        "machines": [
            {"id": "m3", "model": "Technogym Selection Leg Press",
             "serialNumber": "TG-SLP-001", "installDate": "2023-03-10",
             "warrantyUntil": "2025-03-10"},
            {"id": "m4", "model": "Matrix Aura Multi-Press",
             "serialNumber": "MTX-AMP-88", "installDate": "2022-11-05",
             "warrantyUntil": "2024-11-05"},
        ],
    },
]

_SEED_JOBS = [
    {"id": "j1", "clientName": "CityFit Centrum",
     "machineModel": "LifeFitness 95T",
     "description": "Bieżnia szarpie przy starcie, słychać piski.",
     "status": "PENDING", "dateCreated": "2023-10-25",
     "usedParts": [], "picklist": []},
    {"id": "j2", "clientName": "McFit Mokotów",
     "machineModel": "Technogym Selection Leg Press",
     "description": "Zerwana linka wyciągu.",
     "status": "IN_PROGRESS", "dateCreated": "2023-10-26",
     "usedParts": [], "picklist": []},
]

_SEED_USERS = [
    {"id": "u1", "name": "Admin Systemu", "email": "admin@gymfix.pl",
     "phone": "600-001-001", "position": "Kierownik Serwisu",
     "role": ROLE_ADMIN, "password": "password",
     "permissions": ROLE_DEFAULT_PERMISSIONS[ROLE_ADMIN]},
    {"id": "u2", "name": "Jan Magazynier", "email": "magazyn@gymfix.pl",
     "phone": "600-002-002", "position": "Specjalista ds. Logistyki",
     "role": ROLE_WAREHOUSE, "password": "password",
     "permissions": ROLE_DEFAULT_PERMISSIONS[ROLE_WAREHOUSE]},
    {"id": "u3", "name": "Piotr Serwisant", "email": "serwis@gymfix.pl",
     "phone": "600-003-003", "position": "Młodszy Serwisant",
     "role": ROLE_TECHNICIAN, "password": "password",
     "permissions": ROLE_DEFAULT_PERMISSIONS[ROLE_TECHNICIAN]},
]

_SEEDS = {
    COLLECTION_USERS: _SEED_USERS,
    COLLECTION_PARTS: _SEED_PARTS,
    COLLECTION_JOBS: _SEED_JOBS,
    COLLECTION_CLIENTS: _SEED_CLIENTS,
}


def default_records(key: str) -> list[dict]:
    """Return a fresh copy of the factory records for collection *key*."""
    return copy.deepcopy(_SEEDS[key])
