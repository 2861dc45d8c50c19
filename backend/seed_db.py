"""
JobBoard Database Seeder

Creates demo data:
- A company representative (Acme) with its company and three job postings
- A job seeker who has applied to one of them
"""

from jobboard.db.session import SessionLocal, engine
from jobboard.db.base import Base
from jobboard.models import Company, Job, Role, User
from jobboard.core.security import get_password_hash


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing = db.query(User).filter(User.email == "hiring@acme.example").first()
        if existing:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Company representative
        representative = User(
            name="Sarah Chen",
            email="hiring@acme.example",
            password=get_password_hash("company123"),
            role=Role.COMPANY.value,
        )
        db.add(representative)
        db.flush()  # Get IDs

        # 2. Their company, linked both ways
        acme = Company(
            name="Acme",
            description="Tools for every trade",
            industry="Manufacturing",
            website="https://acme.example",
            created_by=representative.id,
        )
        db.add(acme)
        db.flush()
        representative.company_id = acme.id

        # 3. Job postings
        jobs = [
            Job(
                title="Backend Engineer",
                description="Build APIs for our ordering platform",
                requirements="Python, SQL, REST",
                salary="120k",
                location="Remote",
                company_id=acme.id,
            ),
            Job(
                title="API Engineer",
                description="Build and document public REST APIs",
                requirements="HTTP, OpenAPI, Python",
                location="Berlin",
                company_id=acme.id,
            ),
            Job(
                title="Warehouse Lead",
                description="Run the night shift at the main depot",
                requirements="Forklift licence",
                location="Leeds",
                company_id=acme.id,
            ),
        ]
        db.add_all(jobs)
        db.flush()

        # 4. Job seeker with one application
        seeker = User(
            name="John Doe",
            email="john.doe@example.com",
            password=get_password_hash("seeker123"),
            role=Role.JOBSEEKER.value,
            resume="https://example.com/john-doe.pdf",
            applied_jobs=[jobs[0].id],
        )
        db.add(seeker)

        # Commit all changes
        db.commit()

        print("✅ Database seeded successfully!")
        print("\n📋 Created Users:")
        print("   - hiring@acme.example (password: company123) [COMPANY: Acme]")
        print("   - john.doe@example.com (password: seeker123) [JOBSEEKER]")
        print(f"\n💼 Created {len(jobs)} jobs for Acme")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
