from sqlalchemy import Column, Integer, String, DateTime, Float
from dbwriter.database import Base


class Sample(Base):
    __tablename__ = 'samples'
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    v0 = Column(Float, nullable=True)
    v1 = Column(Float, nullable=True)

    def __repr__(self):
        return f"<Sample id={self.id} name={self.name!r} timestamp={self.timestamp}>"
