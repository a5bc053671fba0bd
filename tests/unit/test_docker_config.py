"""Tests for the registry credential → docker config transform."""

from __future__ import annotations

import base64

from scm_driver.services.docker_config import Credential, build_docker_config


def test_single_registry_matches_docker_config_shape() -> None:
    config = build_docker_config({"registry.io": Credential(username="u", password="p")})
    assert config.model_dump() == {
        "auths": {
            "registry.io": {
                "username": "u",
                "password": "p",
                "auth": base64.b64encode(b"u:p").decode(),
            }
        }
    }


def test_multiple_registries_are_kept_separate() -> None:
    config = build_docker_config(
        {
            "ghcr.io": Credential(username="bot", password="s3cret"),
            "quay.io": Credential(username="robot+ci", password="tok:en"),
        }
    )
    assert set(config.auths) == {"ghcr.io", "quay.io"}
    decoded = base64.b64decode(config.auths["quay.io"].auth).decode()
    assert decoded == "robot+ci:tok:en"


def test_missing_fields_encode_as_empty_strings() -> None:
    config = build_docker_config({"registry.io": Credential(username="u")})
    entry = config.auths["registry.io"]
    assert entry.password == ""
    assert base64.b64decode(entry.auth) == b"u:"


def test_empty_input_yields_empty_auths() -> None:
    assert build_docker_config({}).model_dump() == {"auths": {}}
