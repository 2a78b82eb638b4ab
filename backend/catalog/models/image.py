from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from catalog.db import Base


class MainImage(Base):
    __tablename__ = "main_images"
    id = Column(Integer, primary_key=True, index=True)
    url = Column(String(512), nullable=False)

    images = relationship(
        "Image",
        back_populates="main_image",
        cascade="all, delete-orphan",
        order_by="Image.id",
    )


class Image(Base):
    __tablename__ = "images"
    id = Column(Integer, primary_key=True, index=True)
    main_image_id = Column(
        Integer, ForeignKey("main_images.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url = Column(String(512), nullable=False)

    main_image = relationship("MainImage", back_populates="images")
