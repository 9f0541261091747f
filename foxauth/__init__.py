# FoxLauncher authlib-injector session server

from foxauth.client.verifier import SessionVerifier
from foxauth.server.core import AuthlibServer
from foxauth.server.keystore import KeyStore
from foxauth.server.signer import Signer

__all__ = [
    "AuthlibServer",
    "KeyStore",
    "SessionVerifier",
    "Signer",
]
