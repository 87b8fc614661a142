from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Note: Models are imported in cvgenius.db.models so that create_all() sees every table
# All models must import Base from this module
