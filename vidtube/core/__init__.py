from vidtube.core.config import settings
from vidtube.core.database import Base, engine, SessionLocal
from vidtube.core.result import Ok, Err, Failure, Result, unwrap
from vidtube.core.security import (
    TokenConfig,
    verify_password,
    get_password_hash,
    create_token,
    decode_token,
)
