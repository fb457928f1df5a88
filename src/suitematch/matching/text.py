"""
Normalización de texto para comparaciones case-insensitive
y extracción de keywords del perfil del buscador.
"""

import re
from typing import Any, Iterable, Optional

# Clase de palabra ASCII: "café" se corta en "caf"
_NON_WORD = re.compile(r"\W+", re.ASCII)


def normalize(value: Any) -> str:
    """Trim + lower. None equivale a string vacío."""
    if value is None:
        return ""
    return str(value).strip().lower()


def keyword_set(strings: Optional[Iterable[Optional[str]]]) -> tuple[str, ...]:
    """
    Keywords únicas de un conjunto de textos.

    Une los textos con espacios, pasa a minúsculas y corta por
    secuencias de caracteres no-palabra ASCII (las letras acentuadas
    también cortan el token). Conserva el orden de primera
    aparición para que las razones sean reproducibles.
    """
    if not strings:
        return ()
    joined = " ".join(s for s in strings if s is not None).lower()
    tokens = (token for token in _NON_WORD.split(joined) if token)
    return tuple(dict.fromkeys(tokens))
