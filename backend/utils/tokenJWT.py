# utils/tokenJWT.py
from jose import jwt, JWTError
from datetime import datetime, timedelta
import os
from typing import Optional
from dotenv import load_dotenv
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from models.profile import AppRole
from utils.navigation import SessionContext, enforce_gate

# Load environment variables with secure defaults
load_dotenv()
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Authorization scheme. auto_error is off so a missing token becomes an
# anonymous session instead of an immediate 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Generate a new JWT access token
def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def _user_from_token(db: Session, token: str) -> Optional[User]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    email = payload.get("sub")
    if email is None:
        return None
    return db.query(User).filter(User.email == email).first()

# Build the explicit session context for this request (anonymous when no valid token)
def get_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> SessionContext:
    if credentials is None:
        return SessionContext()
    user = _user_from_token(db, credentials.credentials)
    if user is None:
        return SessionContext()
    return SessionContext(user=user, profile=user.profile)

# Retrieve the currently authenticated user, 401 when there is none
def get_current_user(session: SessionContext = Depends(get_session)):
    if session.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session.user

# Dependency factory for the role gate. The checker returns the session so
# handlers receive the caller's profile explicitly.
def role_required(required_role: AppRole):
    def _checker(session: SessionContext = Depends(get_session)) -> SessionContext:
        return enforce_gate(session, required_role)
    return _checker

importer_session = role_required(AppRole.IMPORTER)
exporter_session = role_required(AppRole.EXPORTER)
