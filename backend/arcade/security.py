"""Bearer tokens for API callers and salted hashes for match/team secrets."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from flask import current_app
from jose import JWTError, jwt

from arcade import bcrypt


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    cfg = current_app.config
    if expires_delta is None:
        expires_delta = timedelta(minutes=int(cfg.get('ACCESS_TOKEN_EXPIRE_MINUTES', 60)))
    to_encode = {
        'sub': str(user_id),
        'exp': datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, cfg['SECRET_KEY'], algorithm=cfg.get('JWT_ALGORITHM', 'HS256'))


def user_id_from_token(token: str) -> Optional[int]:
    """Return the user id a token was issued for, or None if it is invalid or expired."""
    cfg = current_app.config
    try:
        payload = jwt.decode(token, cfg['SECRET_KEY'], algorithms=[cfg.get('JWT_ALGORITHM', 'HS256')])
    except JWTError as exc:
        current_app.logger.info(f"[token-reject] {exc}")
        return None
    try:
        return int(payload.get('sub'))
    except (TypeError, ValueError):
        return None


def hash_secret(secret: str) -> str:
    return bcrypt.generate_password_hash(secret).decode('utf-8')


def check_secret(secret_hash: str, secret: str) -> bool:
    return bcrypt.check_password_hash(secret_hash, secret)
