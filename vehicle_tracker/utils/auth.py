"""
Utilitaires d'authentification / Authentication utilities.
Hashing de mots de passe (bcrypt). Aucun token n'est emis.
Password hashing (bcrypt). No tokens are issued.
"""

import bcrypt

# Facteur de cout fixe / Fixed cost factor
BCRYPT_ROUNDS = 12

# Limite d'entree de bcrypt / bcrypt input limit
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hasher un mot de passe / Hash a password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Vérifier un mot de passe / Verify a password."""
    encoded = plain_password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))
