# topmark:header:start
#
#   project      : EnvCodec
#   file         : constants.py
#   file_relpath : src/envcodec/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""EnvCodec Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

ENVCODEC_VERSION: str = get_version("envcodec")

# Codec defaults (see `envcodec.options.Options`)
DEFAULT_SEPARATOR: str = "__"
DEFAULT_SLICE_SEPARATOR: str = ","

# Environment variable consulted by `envcodec.config.logging.resolve_env_log_level`
LOG_LEVEL_ENV_VAR: str = "ENVCODEC_LOG_LEVEL"

# Configuration file names understood by `envcodec.config.loaders`
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "tool.envcodec"
