# medcon/seed/seed_clinic.py
"""
Demo catalog seed script for Medcon.
Creates a small set of doctors, procedures, suppliers and products so the
front desk can be tried out right away.

Usage:
    python -m medcon.seed.seed_clinic

Options:
    --clear     Drop every stored collection before seeding
"""

import argparse
from typing import List

from medcon.auth.auth_service import hash_password
from medcon.common.state import COLLECTIONS, ClinicState
from medcon.common.utils.global_functions import new_id
from medcon.models.entities import DoctorProfile, Procedure, Product, Supplier


# ============================================================================
# SAMPLE DATA
# ============================================================================

DEMO_PASSWORD = "Medico123"

DOCTORS_DATA = [
    # name, specialty, consultation %, procedure %, username, default room
    ("Dra. María González", "Ginecología", 50, 40, "mgonzalez", "Consultorio 1"),
    ("Dr. José Rodríguez", "Medicina Interna", 60, 50, "jrodriguez", "Consultorio 2"),
    ("Dra. Ana Pérez", "Ecografía", 50, 50, "aperez", "Área de Ecografía"),
]

PROCEDURES_DATA = [
    ("Ecografía abdominal", 40.0),
    ("Citología", 25.0),
    ("Electrocardiograma", 30.0),
    ("Curas", 15.0),
]

SUPPLIERS_DATA = [
    ("Droguería Central", "Luis Medina", "0414-5550101"),
    ("Insumos Médicos del Centro", "Carla Ruiz", "0412-5550202"),
]

PRODUCTS_DATA = [
    # name, cost, sell, stock, supplier index
    ("Guantes de látex (caja)", 6.0, 10.0, 20, 1),
    ("Gel para ecografía", 3.5, 6.0, 8, 1),
    ("Ácido fólico 5mg", 1.2, 3.0, 40, 0),
    ("Ibuprofeno 400mg", 0.8, 2.0, 3, 0),
]


def create_doctors(state: ClinicState) -> List[DoctorProfile]:
    """Create demo doctors; each one can log in with DEMO_PASSWORD"""
    print("👩‍⚕️ Creating doctors...")
    password_hash = hash_password(DEMO_PASSWORD)
    doctors = [
        DoctorProfile(
            id=new_id(),
            name=name,
            specialty=specialty,
            consultation_share_percent=consultation,
            procedure_share_percent=procedure,
            username=username,
            password_hash=password_hash,
            default_room=room,
        )
        for name, specialty, consultation, procedure, username, room in DOCTORS_DATA
    ]
    state.doctors.extend(doctors)
    print(f"✓ Created {len(doctors)} doctors")
    return doctors


def create_procedures(state: ClinicState) -> List[Procedure]:
    print("🩺 Creating procedures...")
    procedures = [Procedure(id=new_id(), name=name, price=price) for name, price in PROCEDURES_DATA]
    state.procedures.extend(procedures)
    print(f"✓ Created {len(procedures)} procedures")
    return procedures


def create_inventory(state: ClinicState) -> List[Product]:
    """Create suppliers and the products they provide"""
    print("📦 Creating suppliers and products...")
    suppliers = [
        Supplier(id=new_id(), name=name, contact=contact, phone=phone)
        for name, contact, phone in SUPPLIERS_DATA
    ]
    products = [
        Product(
            id=new_id(),
            name=name,
            cost_price=cost,
            sell_price=sell,
            stock=stock,
            supplier_id=suppliers[supplier_index].id,
        )
        for name, cost, sell, stock, supplier_index in PRODUCTS_DATA
    ]
    state.suppliers.extend(suppliers)
    state.products.extend(products)
    print(f"✓ Created {len(suppliers)} suppliers and {len(products)} products")
    return products


def clear_state(state: ClinicState) -> None:
    """Empty every collection"""
    print("\n🗑️  Clearing existing data...")
    for name in COLLECTIONS:
        setattr(state, name, [])
    print("✓ Collections cleared")


def seed_clinic(state: ClinicState, clear: bool = False) -> ClinicState:
    """Main seeding function"""
    print("\n" + "=" * 60)
    print("🌱 MEDCON DEMO SEEDER")
    print("=" * 60 + "\n")

    if clear:
        clear_state(state)

    create_doctors(state)
    create_procedures(state)
    create_inventory(state)

    # a cleared store needs every key rewritten, not just the seeded ones
    touched = () if clear else ("doctors", "procedures", "suppliers", "products")
    if not state.persist(*touched):
        raise RuntimeError(state.persistence_warning)

    print("\n" + "=" * 60)
    print("✅ SEEDING COMPLETE!")
    print("=" * 60)
    print("\n📋 Doctor logins (password: %s):" % DEMO_PASSWORD)
    print("-" * 40)
    for _, _, _, _, username, _ in DOCTORS_DATA:
        print(f"  {username}")
    print("-" * 40 + "\n")
    return state


def main():
    from medcon.common.database.database import SessionLocal, connect_to_db, close_db_connection
    from medcon.common.database.storage import SqlKeyValueStore

    parser = argparse.ArgumentParser(description="Seed the Medcon store with a demo catalog")
    parser.add_argument("--clear", action="store_true", help="Clear existing data before seeding")
    args = parser.parse_args()

    connect_to_db()
    try:
        state = ClinicState.load(SqlKeyValueStore(SessionLocal))
        seed_clinic(state, clear=args.clear)
    finally:
        close_db_connection()


if __name__ == "__main__":
    main()
