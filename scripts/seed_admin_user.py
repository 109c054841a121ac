#!/usr/bin/env python3
"""
Seed an approved admin member in the database for local and production use.
Usage:
  python seed_admin_user.py --email admin@example.com --full-name "Admin" --password <password>

Environment variables:
  DATABASE_URL (required)
"""
import os
import sys
import argparse
import psycopg2
from passlib.context import CryptContext

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def get_database_url():
    database_url = os.getenv('DATABASE_URL')
    if not database_url:
        print("DATABASE_URL environment variable not found", file=sys.stderr)
        sys.exit(1)
    return database_url

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def seed_admin_user(email: str, full_name: str, password: str):
    db_url = get_database_url()
    conn = psycopg2.connect(db_url)
    cur = conn.cursor()
    hashed_pw = hash_password(password)
    cur.execute("""
        INSERT INTO users (email, hashed_password, is_active)
        VALUES (%s, %s, TRUE)
        ON CONFLICT (email) DO UPDATE SET
            hashed_password = EXCLUDED.hashed_password,
            is_active = TRUE
        RETURNING id;
    """, (email, hashed_pw))
    user_id = cur.fetchone()[0]
    cur.execute("""
        INSERT INTO profiles (user_id, full_name, email, approval_status)
        VALUES (%s, %s, %s, 'approved')
        ON CONFLICT (user_id) DO UPDATE SET
            full_name = EXCLUDED.full_name,
            approval_status = 'approved',
            updated_at = CURRENT_TIMESTAMP;
    """, (user_id, full_name, email))
    for role in ("admin", "member"):
        cur.execute(
            "INSERT INTO user_roles (user_id, role) VALUES (%s, %s) ON CONFLICT DO NOTHING;",
            (user_id, role),
        )
    conn.commit()
    cur.close()
    conn.close()
    print(f"Seeded admin user: id={user_id} email={email}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed an approved admin member.")
    parser.add_argument('--email', required=True, help='Admin email')
    parser.add_argument('--full-name', required=True, help='Admin full name')
    parser.add_argument('--password', required=True, help='Admin password')
    args = parser.parse_args()
    seed_admin_user(args.email, args.full_name, args.password)
