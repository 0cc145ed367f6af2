"""Database seeder for ZuluNiner: admin profile, demo listings and blog posts.

Run via: python -m src.seed
"""

import logging

from sqlalchemy import text
from sqlalchemy.orm import Session

from src.config import settings
from src.database.engine import sync_engine
from src.logging_config import configure_logging
from src.seed_data.aircraft import AIRCRAFT
from src.seed_data.blog_posts import BLOG_POSTS
from src.seed_data.users import USERS

logger = logging.getLogger(__name__)

ADMIN_USER_ID = USERS[0]["id"]


def seed_users(session: Session) -> None:
    """Upsert user profiles."""
    for user in USERS:
        session.execute(
            text("""
                INSERT INTO users (id, email, name, company, role, location)
                VALUES (:id, :email, :name, :company, :role, :location)
                ON CONFLICT (id) DO UPDATE SET
                    email = EXCLUDED.email,
                    name = EXCLUDED.name,
                    company = EXCLUDED.company,
                    role = EXCLUDED.role,
                    location = EXCLUDED.location
            """),
            user,
        )
    logger.info("Seeded %d users", len(USERS))


def seed_aircraft(session: Session) -> None:
    """Upsert demo listings keyed by slug."""
    for aircraft in AIRCRAFT:
        session.execute(
            text("""
                INSERT INTO aircraft (slug, title, description, price, year, make, model,
                    hours, engine_type, avionics, airport_code, city, country, status, user_id)
                VALUES (:slug, :title, :description, :price, :year, :make, :model,
                    :hours, :engine_type, :avionics, :airport_code, :city, :country,
                    :status, :user_id)
                ON CONFLICT (slug) DO UPDATE SET
                    title = EXCLUDED.title,
                    description = EXCLUDED.description,
                    price = EXCLUDED.price,
                    hours = EXCLUDED.hours,
                    status = EXCLUDED.status
            """),
            {**aircraft, "user_id": ADMIN_USER_ID},
        )
    logger.info("Seeded %d aircraft", len(AIRCRAFT))


def seed_blog_posts(session: Session) -> None:
    for post in BLOG_POSTS:
        session.execute(
            text("""
                INSERT INTO blog_posts (slug, title, blurb, content, meta_description,
                    published, published_at, author_id)
                VALUES (:slug, :title, :blurb, :content, :meta_description,
                    :published, CASE WHEN :published THEN now() END, :author_id)
                ON CONFLICT (slug) DO UPDATE SET
                    title = EXCLUDED.title,
                    blurb = EXCLUDED.blurb,
                    content = EXCLUDED.content,
                    meta_description = EXCLUDED.meta_description
            """),
            {**post, "author_id": ADMIN_USER_ID},
        )
    logger.info("Seeded %d blog posts", len(BLOG_POSTS))


def main() -> None:
    """Run all seed functions inside a single transaction."""
    configure_logging(settings)
    logger.info("Seeding ZuluNiner database...")

    with Session(sync_engine) as session:
        with session.begin():
            seed_users(session)
            # FK → users
            seed_aircraft(session)
            seed_blog_posts(session)

    logger.info("Seeding complete")


if __name__ == "__main__":
    main()
