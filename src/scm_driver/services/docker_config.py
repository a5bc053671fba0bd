"""Registry credentials → ``.dockerconfigjson`` transform."""

from __future__ import annotations

import base64
from collections.abc import Mapping

from pydantic import BaseModel


class Credential(BaseModel):
    """Username / password pair for one registry endpoint."""

    username: str | None = None
    password: str | None = None

    def username_any(self) -> str:
        return self.username or ""

    def password_any(self) -> str:
        return self.password or ""


class AuthConfig(BaseModel):
    """One entry of the ``auths`` map in a docker client config file."""

    username: str
    password: str
    auth: str


class DockerConfig(BaseModel):
    """The docker client config file, reduced to its ``auths`` section."""

    auths: dict[str, AuthConfig]


def build_docker_config(entries: Mapping[str, Credential]) -> DockerConfig:
    """Build a configuration that conforms to the ``.dockerconfigjson`` format."""
    auths: dict[str, AuthConfig] = {}
    for endpoint, credential in entries.items():
        username = credential.username_any()
        password = credential.password_any()
        auth = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        auths[endpoint] = AuthConfig(username=username, password=password, auth=auth)
    return DockerConfig(auths=auths)
