"""Application configuration read from an ``app.env`` file and the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from dotenv import dotenv_values

CONFIG_FILE_NAME = "app.env"

_FIELDS = {
    "DB_DRIVER": "db_driver",
    "DB_SOURCE": "db_source",
    "SERVER_ADDRESS": "server_address",
}


@dataclass(frozen=True)
class Config:
    """Settings the application needs to start."""

    db_driver: str = ""
    db_source: str = ""
    server_address: str = ""


def load_config(path: Union[str, "os.PathLike[str]"]) -> Config:
    """Load ``app.env`` from the directory ``path``.

    A non-empty environment variable overrides a key that the file defines.
    Raises FileNotFoundError when the file is absent.
    """
    config_file = Path(path) / CONFIG_FILE_NAME
    if not config_file.is_file():
        raise FileNotFoundError(f"config file {CONFIG_FILE_NAME!r} not found in {str(path)!r}")

    values = {
        key.upper(): (value or "")
        for key, value in dotenv_values(config_file).items()
    }
    for key in values:
        env_value = os.environ.get(key)
        if env_value:
            values[key] = env_value

    return Config(
        **{attr: values[key] for key, attr in _FIELDS.items() if key in values}
    )