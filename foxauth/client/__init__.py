# Game-server side helpers
from foxauth.client.verifier import SessionVerifier as SessionVerifier

__all__ = ["SessionVerifier"]
