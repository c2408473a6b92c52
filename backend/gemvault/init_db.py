"""Database initialization script with seed data."""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from gemvault.config import settings
from gemvault.database import Base, SessionLocal, engine
from gemvault.models import Admin, Gemstone, GemstoneOwner
from gemvault.services.auth_service import AuthService
from gemvault.services.identifier_service import IdentifierService


def create_tables():
    """Create all database tables."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created successfully!")


def seed_admin(db: Session) -> Admin:
    """Create the default admin unless one with that username exists."""
    admin = db.query(Admin).filter(Admin.username == settings.default_admin_username).first()
    if admin:
        print(f"Admin '{admin.username}' already exists, skipping")
        return admin

    admin = Admin(
        username=settings.default_admin_username,
        password_hash=AuthService.hash_password(settings.default_admin_password),
    )
    db.add(admin)
    db.flush()
    print(f"Created admin '{admin.username}' - change the default password after first login")
    return admin


def seed_sample_gemstone(db: Session) -> None:
    """Register one gemstone with a previous and a current owner."""
    if db.query(Gemstone).count():
        print("Gemstones already present, skipping sample data")
        return

    identifiers = IdentifierService.generate()
    gemstone = Gemstone(
        unique_id_number=identifiers.unique_id_number,
        qr_code_data_url=identifiers.qr_code_data_url,
        name="Blue Sapphire",
        description="Unheated cushion cut sapphire",
        weight_carat=Decimal("2.150"),
        dimensions_mm="8.1 x 6.9 x 4.2",
        color="Royal blue",
        treatment="None",
        origin="Sri Lanka",
    )
    db.add(gemstone)
    db.flush()

    db.add_all(
        [
            GemstoneOwner(
                gemstone_id=gemstone.id,
                owner_name="Budi Santoso",
                owner_phone="+62 812 0000 0001",
                ownership_start_date=date(2021, 3, 1),
                ownership_end_date=date(2023, 6, 15),
                is_current_owner=False,
            ),
            GemstoneOwner(
                gemstone_id=gemstone.id,
                owner_name="Siti Rahma",
                owner_phone="+62 812 0000 0002",
                owner_email="siti@example.com",
                ownership_start_date=date(2023, 6, 15),
                is_current_owner=True,
            ),
        ]
    )
    print(f"Created sample gemstone {gemstone.unique_id_number}")


def main():
    """Initialize database and seed data."""
    create_tables()

    db = SessionLocal()
    try:
        seed_admin(db)
        seed_sample_gemstone(db)
        db.commit()
        print("\nDatabase initialized.")
    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
