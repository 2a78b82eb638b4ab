from sqlalchemy import Column, Integer, String
from catalog.db import Base

class Manufacturer(Base):
    __tablename__ = "manufacturers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, index=True, nullable=False)

    def __repr__(self):
        return f"<Manufacturer name={self.name}>"
