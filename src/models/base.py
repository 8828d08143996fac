import secrets

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    """Opaque 24-hex-character identifier assigned at insert."""
    return secrets.token_hex(12)
