"""
Validadores compartidos por los esquemas
"""
import re
from typing import Optional


EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def validate_email_format(email: str) -> bool:
    """Validación básica de formato de email."""
    if not email:
        return False
    return bool(re.match(EMAIL_PATTERN, email.strip()))


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Quita espacios y convierte cadenas vacías en None."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def clean_document(value: str) -> str:
    """
    Limpia un número de documento (NIT/cédula) quitando espacios internos
    y en los extremos. Los puntos y guiones se conservan tal como llegan.
    """
    return re.sub(r'\s+', '', value or '')
