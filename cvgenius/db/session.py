from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from cvgenius.core import config
DATABASE_URL = config.DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
