from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import UserDefinedType

Base = declarative_base()

class Untyped(UserDefinedType):
    """Column declared without a type so SQLite keeps values as written."""

    cache_ok = True

    def get_col_spec(self, **kw):
        return ""

class Task(Base):
    __tablename__ = "tblTasks"
    ID = Column(Integer, primary_key=True, autoincrement=False)
    Name = Column(Untyped, nullable=True)
    Description = Column(Untyped, nullable=True)
    DueDate = Column(Untyped, nullable=True)
    Priority = Column(Untyped, nullable=True)
    Location = Column(Untyped, nullable=True)
    Status = Column(Untyped, nullable=True)
