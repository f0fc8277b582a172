"""
Password Generator settings.

Values come from the environment; VAULT_LOG_LEVEL is applied at import:
    PASSWORD_GENERATOR_HOME = <directory holding master.config and passwords.enc>
    VAULT_SESSION_TTL = <seconds a remembered unlock stays valid>
    VAULT_LOG_LEVEL = <logging level name>
"""
import os
import logging
from pathlib import Path
from typing import Union

import appdirs

APP_NAME = "PasswordGenerator"

MASTER_FILENAME = "master.config"
VAULT_FILENAME = "passwords.enc"

# 5 minutes, in seconds
DEFAULT_SESSION_TTL = 300


def get_base_dir() -> Path:
    """Return the per-user directory where vault files live.

    ``PASSWORD_GENERATOR_HOME`` wins over the platform default, which is
    ``%APPDATA%\\PasswordGenerator`` on Windows and the XDG config dir
    elsewhere.
    """
    override = os.environ.get("PASSWORD_GENERATOR_HOME")
    if override:
        return Path(override).expanduser()
    return Path(
        appdirs.user_config_dir(APP_NAME, appauthor=False, roaming=True)
    )


def get_session_ttl() -> Union[int, str]:
    """Return the remembered-unlock lifetime in seconds.

    An override is returned as the raw environment string; VaultConfig
    validates it.
    """
    return os.environ.get("VAULT_SESSION_TTL", DEFAULT_SESSION_TTL)


LOG_LEVEL = os.environ.get("VAULT_LOG_LEVEL")

if LOG_LEVEL:
    logging.getLogger("password_generator").setLevel(LOG_LEVEL.upper())
