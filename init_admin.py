"""
Quick script to create the initial admin user
Run this if you don't have an admin user yet
"""
from app.db.init_db import bootstrap_initial_admin, INITIAL_ADMIN_EMP_CODE
from app.db.session import SessionLocal, create_sqlite_tables

if __name__ == "__main__":
    create_sqlite_tables()
    db = SessionLocal()
    try:
        if bootstrap_initial_admin(db):
            print("Database initialized!")
            print(f"Login credentials: Employee Code: {INITIAL_ADMIN_EMP_CODE}")
        else:
            print("Admin user already exists, skipping initialization")
    finally:
        db.close()
