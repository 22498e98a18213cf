from __future__ import annotations

import os

from logic_looper.ports.kv import KeyValueStorePort


class StoredCredentials:
    """
    CredentialPort backed by an environment variable, then the key-value store.

    The token is whatever the auth collaborator issued; it is only ever
    forwarded as a bearer header.
    """

    def __init__(self, kv: KeyValueStorePort, *, key: str = "token", env_var: str | None = None) -> None:
        self.kv = kv
        self.key = key
        self.env_var = env_var

    def get_token(self) -> str | None:
        if self.env_var:
            token = os.environ.get(self.env_var)
            if token:
                return token
        return self.kv.get(self.key) or None

    def set_token(self, token: str) -> None:
        self.kv.set(self.key, token)

    def clear_token(self) -> bool:
        return self.kv.delete(self.key)
