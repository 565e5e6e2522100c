from __future__ import annotations
import os
import pathlib
import typing as t
import yaml

try:
    import tomllib as _toml                              # Py ≥ 3.11
except ModuleNotFoundError:                              # pragma: no cover
    import tomli as _toml                                # type: ignore[no-redef]

from sqlimport.constants import DEFAULT_CONFIG_PATH, DEFAULT_ENCODING


class ConfigError(RuntimeError):
    """Raised for any user‑visible configuration problem."""


class Environment:
    """
    A thin value‑object holding the attributes required to open a MariaDB
    connection and the import defaults for it.  Nothing here talks to the
    database.
    """

    def __init__(self, name: str, d: dict[str, t.Any]) -> None:
        try:
            self.host: str = d["host"]
            self.user: str = d["user"]
            raw_pwd: str = str(d["password"])
        except KeyError as exc:
            raise ConfigError(
                f"Environment {name!r} is missing required key {exc.args[0]!r}"
            ) from exc

        self.name: str = name
        self.port: int = int(d.get("port", 3306))
        # Optional: a script may select its own database with USE
        self.database: str | None = d.get("database")

        # Allow `${ENV_VAR}` syntax for secrets
        if raw_pwd.startswith("${") and raw_pwd.endswith("}"):
            var = raw_pwd[2:-1]
            value = os.getenv(var)
            if value is None:
                raise ConfigError(f"Environment variable {var!r} is not set")
            raw_pwd = value
        self.password: str = raw_pwd

        # Used by the auto‑create‑db logic
        self.allow_destructive: bool = bool(d.get("allow_destructive", False))

        self.abort_on_error: bool = bool(d.get("abort_on_error", True))
        self.encoding: str = d.get("encoding", DEFAULT_ENCODING)

    # --------------------------------------------------------------------- #
    # Helpers
    # --------------------------------------------------------------------- #
    def dsn(self) -> dict[str, t.Any]:
        """Return kwargs that mysql‑connector understands."""
        dsn = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
        }
        if self.database:
            dsn["database"] = self.database
        return dsn


def _read(cfg_file: pathlib.Path) -> dict[str, t.Any]:
    if cfg_file.suffix.lower() == ".toml":
        with cfg_file.open("rb") as fh:
            try:
                return _toml.load(fh)
            except _toml.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {cfg_file}: {exc}") from exc

    with cfg_file.open(encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {cfg_file}: {exc}") from exc


def load(path: pathlib.Path | str | None = None, env: str | None = None) -> Environment:
    """
    Parse *path* (or the default YAML) and return an :class:`Environment`.
    """
    cfg_file = pathlib.Path(path) if path else DEFAULT_CONFIG_PATH
    if not cfg_file.exists():
        raise ConfigError(f"Config file {cfg_file} not found.")

    raw = _read(cfg_file)

    env_name = env or raw.get("default_env")
    if not env_name:
        raise ConfigError("No environment specified and no default_env in config")

    try:
        return Environment(env_name, raw["environments"][env_name])
    except (KeyError, TypeError) as exc:
        raise ConfigError(f"Environment {env_name!r} not found in config") from exc
