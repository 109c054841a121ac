"""Create reading progress table and admin summary view

Revision ID: 0002_reading_progress
Revises: 0001_users_and_profiles
Create Date: 2025-01-06
"""
from alembic import op


revision = "0002_reading_progress"
down_revision = "0001_users_and_profiles"
branch_labels = None
depends_on = None


def upgrade():
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS reading_progress (
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            day INTEGER NOT NULL CHECK (day BETWEEN 1 AND 365),
            completed_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
            UNIQUE (user_id, day)
        );

        CREATE INDEX IF NOT EXISTS idx_reading_progress_user
            ON reading_progress (user_id);

        CREATE OR REPLACE VIEW reading_progress_summary AS
        SELECT p.user_id,
               p.full_name,
               p.email,
               COUNT(DISTINCT rp.day) AS completed,
               ROUND(COUNT(DISTINCT rp.day) * 100.0 / 365, 1) AS percent
        FROM profiles p
        LEFT JOIN reading_progress rp ON rp.user_id = p.user_id
        WHERE p.approval_status = 'approved'
        GROUP BY p.user_id, p.full_name, p.email;
        """
    )


def downgrade():
    op.execute(
        """
        DROP VIEW IF EXISTS reading_progress_summary;
        DROP INDEX IF EXISTS idx_reading_progress_user;
        DROP TABLE IF EXISTS reading_progress;
        """
    )
