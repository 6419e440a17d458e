from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Record classes live in jobtracker.db.models and import Base from here;
# init_db() and alembic/env.py import that package so every table is registered.
