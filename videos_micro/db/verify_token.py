from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from dotenv import load_dotenv
from typing import Annotated
from db.connection import get_db
from models.users_models import User
from sqlalchemy.orm import Session
import os

# Load environment variables
load_dotenv()

# Tokens are issued by the auth service; this service only verifies them
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")

oauth2_bearer = OAuth2PasswordBearer(tokenUrl="login")


# Current user dependency
async def get_current_user(token: Annotated[str, Depends(oauth2_bearer)]):
    if not SECRET_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token verification is not configured",
        )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        username: str = payload.get("uname")
        user_id: int = payload.get("id")
        if username is None or user_id is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication credentials",
            )
        return {"username": username, "user_id": user_id}
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed. Your token is invalid or has expired.",
        )


user_dependency = Annotated[dict, Depends(get_current_user)]

async def verify_token(
    current_user: user_dependency,
    db: Session = Depends(get_db)
) -> User:
    """
    Verify token and return the User object from database
    """
    user = db.query(User).filter(User.id == current_user["user_id"]).first()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return user
