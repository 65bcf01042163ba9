from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from liftboard.db import get_db
from liftboard.errors import NotFoundError
from liftboard.models import User, UserRole
from liftboard.schemas.user import UserRegister, UserLogin, UserRead
from liftboard.security import hash_password, verify_password, create_access_token
from liftboard.deps.auth import get_current_user
from liftboard.repositories.team_repo import TeamRepository
from liftboard.repositories.user_repo import UserRepository

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=400, detail="email already registered")
    if payload.team_id is not None and TeamRepository(db).get(payload.team_id) is None:
        raise NotFoundError("Team not found")
    try:
        user = repo.create(
            email=payload.email,
            name=payload.name,
            password_hash=hash_password(payload.password),
            role=payload.role,
            team_id=payload.team_id if payload.role == UserRole.athlete else None,
        )
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=400, detail="email already registered")
        raise
    return user

@router.post("/login")
def login(payload: UserLogin, db: Session = Depends(get_db)):
    repo = UserRepository(db)
    user = repo.get_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="invalid credentials")
    token = create_access_token(sub=str(user.id), role=user.role.value)
    return {"access_token": token, "token_type": "bearer"}

@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
