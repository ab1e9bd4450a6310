"""Admin auth API: login, profile, setup endpoints and the bearer-token dependency."""
from __future__ import annotations
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from jose import JWTError, jwt

from conceptcraft.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from conceptcraft.persistence.db import get_connection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["auth"])

_bearer = HTTPBearer(auto_error=False)


# ------------------------------------------------------------------
# Password hashing (Direct bcrypt to avoid passlib compatibility issues)
# ------------------------------------------------------------------
def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash in the database
        return False


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class LoginRequest(BaseModel):
    username: str
    password: str


class SetupRequest(BaseModel):
    username: str
    email: str
    password: str


# ------------------------------------------------------------------
# JWT helpers
# ------------------------------------------------------------------
def _create_token(admin_id: str, username: str, role: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": admin_id,
        "username": username,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def _decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token.")


# ------------------------------------------------------------------
# DB helpers
# ------------------------------------------------------------------
def _get_admin(column: str, value: str) -> Optional[dict]:
    conn = get_connection()
    try:
        row = conn.execute(f"SELECT * FROM admins WHERE {column} = ?", (value,)).fetchone()
    finally:
        conn.close()
    return dict(row) if row else None


def _public_admin(admin: dict) -> dict:
    return {
        "id": admin["id"],
        "username": admin["username"],
        "email": admin.get("email"),
        "role": admin["role"],
    }


# ------------------------------------------------------------------
# Dependency: current admin from Bearer token
# ------------------------------------------------------------------
def get_current_admin(credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)) -> dict:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Access denied. No token provided."
        )
    claims = _decode_token(credentials.credentials)
    admin = _get_admin("id", claims.get("sub", ""))
    if not admin or not admin["is_active"]:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token or inactive account."
        )
    return admin


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------
@router.post("/login")
def login(body: LoginRequest):
    admin = _get_admin("username", body.username)
    if not admin or not admin["is_active"] or not verify_password(body.password, admin["password_hash"]):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    conn = get_connection()
    try:
        conn.execute(
            "UPDATE admins SET last_login = ? WHERE id = ?",
            (datetime.now(timezone.utc).isoformat(), admin["id"]),
        )
        conn.commit()
    finally:
        conn.close()

    token = _create_token(admin["id"], admin["username"], admin["role"])
    return {"token": token, "admin": _public_admin(admin)}


@router.get("/profile")
def get_profile(current_admin: dict = Depends(get_current_admin)):
    return {"admin": _public_admin(current_admin)}


@router.post("/setup", status_code=status.HTTP_201_CREATED)
def setup_admin(body: SetupRequest, credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)):
    """Open only while no admin exists; afterwards a signed-in admin must call it."""
    conn = get_connection()
    try:
        if conn.execute("SELECT COUNT(*) FROM admins").fetchone()[0]:
            get_current_admin(credentials)
        existing = conn.execute(
            "SELECT 1 FROM admins WHERE username = ? OR email = ?", (body.username, body.email)
        ).fetchone()
        if existing:
            raise HTTPException(status_code=400, detail="Admin already exists")
        conn.execute(
            """
            INSERT INTO admins (id, username, email, password_hash, role, is_active, created_at)
            VALUES (?, ?, ?, ?, ?, 1, ?)
            """,
            (
                str(uuid.uuid4()),
                body.username,
                body.email,
                hash_password(body.password),
                "super-admin",
                datetime.now(timezone.utc).isoformat(),
            ),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("Created admin '%s'", body.username)
    return {"message": "Admin created successfully"}
