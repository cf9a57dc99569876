"""
Authentication seam - verifies bearer tokens issued by the identity provider
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.config import get_settings
from backend.database import get_db
from backend.models.user import User
from backend.utils.schemas import CamelORMModel

settings = get_settings()
logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

router = APIRouter()

# Token claims copied onto the user row the first time we see a subject
PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


class UserResponse(CamelORMModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    industry: Optional[str] = None
    team_size: Optional[str] = None
    business_description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token carrying the given claims (tests and local tooling)"""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception
    if not payload.get("sub"):
        raise credentials_exception
    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the requester, creating the user row from token claims on first sight"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = decode_access_token(credentials.credentials)
    user_id = str(claims["sub"])

    user = await db.get(User, user_id)
    if user is None:
        profile = {k: claims.get(k) for k in PROFILE_CLAIMS}
        if profile["email"] and await db.scalar(select(User.id).where(User.email == profile["email"])):
            logger.warning(f"Email of new user {user_id} already belongs to another user; not copying it")
            profile["email"] = None
        user = User(id=user_id, **profile)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info(f"Created user {user_id} from token claims")

    return user


@router.get("/user", response_model=UserResponse)
async def get_user(current_user: User = Depends(get_current_user)):
    """Current user profile"""
    return current_user
