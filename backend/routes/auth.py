# backend/routes/auth.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from sqlalchemy import func

from database import get_db
from models.users import User
from models.profile import Profile, AppRole
from schemas import user as schemas
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_access_token, get_current_user, get_session
from utils.audit import write_log, client_ip
from utils.messages import EMAIL_TAKEN, INVALID_CREDENTIALS, friendly
from utils.navigation import SessionContext, home_view_for

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)


# Entry view: go straight to the login view
@router.get("/", include_in_schema=False)
def entry():
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


# Login view. A caller that is already signed in is sent to its home view.
@router.get("/login")
def login_view(session: SessionContext = Depends(get_session)):
    if session.user is not None and session.profile is not None:
        return RedirectResponse(home_view_for(session.profile.role), status_code=status.HTTP_303_SEE_OTHER)
    return {"view": "login", "roles": [r.value for r in AppRole]}


# Register a new account together with its profile
@router.post("/register", response_model=schemas.ProfileResponse)
def register(user: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    normalized_email = user.email.strip().lower()

    db_user = db.query(User).filter(func.lower(User.email) == normalized_email).first()
    if db_user:
        write_log(
            db,
            profile_id=None,
            action="REGISTER",
            resource="auth",
            status="FAIL",
            ip=client_ip(request),
            meta={"email": normalized_email, "reason": "Email exists"},
        )
        raise HTTPException(status_code=400, detail=friendly(EMAIL_TAKEN))

    new_user = User(email=normalized_email, password_hash=get_password_hash(user.password))
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    # Second write: the account exists even if this one fails
    profile = Profile(user_id=new_user.id, name=user.name.strip(), role=user.role)
    db.add(profile)
    db.commit()
    db.refresh(profile)

    write_log(
        db,
        profile_id=profile.id,
        action="REGISTER",
        resource="auth",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"email": new_user.email, "role": profile.role.value},
    )
    logger.info("Registered %s as %s", new_user.email, profile.role.value)
    return profile


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    email = payload.email.strip().lower()
    db_user = db.query(User).filter(User.email == email).first()

    if not db_user or not verify_password(payload.password, db_user.password_hash):
        write_log(
            db,
            profile_id=(db_user.profile.id if db_user and db_user.profile else None),
            action="LOGIN", resource="auth", status="FAIL",
            ip=client_ip(request), meta={"email": email},
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=friendly(INVALID_CREDENTIALS))

    if db_user.profile is None:
        # Account created but the profile insert never happened
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Profile not found for this account")

    role = db_user.profile.role
    access_token = create_access_token(data={"sub": db_user.email, "role": role.value})

    write_log(db, profile_id=db_user.profile.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"email": db_user.email})

    return {"access_token": access_token, "token_type": "bearer", "role": role, "home": home_view_for(role)}


# Tokens are stateless, signing out only leaves an audit trail
@router.post("/logout")
def logout(request: Request, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    write_log(db, profile_id=(current_user.profile.id if current_user.profile else None),
              action="LOGOUT", resource="auth", status="SUCCESS", ip=client_ip(request))
    return {"detail": "Signed out", "redirect": "/login"}


# Current session: account plus joined profile
@router.get("/me", response_model=schemas.SessionResponse)
def me(current_user: User = Depends(get_current_user)):
    return {"user": current_user, "profile": current_user.profile}
