from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from .database import SessionLocal


def get_db():
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Database connection error")
    finally:
        db.close()
