"""
Initialize database and create tables
Run this script once to set up your database
"""

from app import create_app
from extensions import db


def init_db():
    """Initialize the database"""
    app = create_app('development')

    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print("Database tables created successfully!")
        print(f"Database location: {app.config['SQLALCHEMY_DATABASE_URI']}")
        print(f"Record store backend: {app.config['RECORD_STORE_BACKEND']}")

        # Print all tables
        print("\nTables created:")
        for table in db.metadata.sorted_tables:
            print(f"  - {table.name}")

        if app.config['RECORD_STORE_BACKEND'] == 'file':
            import os
            os.makedirs(app.config['RECORD_STORE_PATH'], exist_ok=True)
            print(f"Record files directory: {app.config['RECORD_STORE_PATH']}")


if __name__ == '__main__':
    init_db()
