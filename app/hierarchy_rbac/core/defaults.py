from __future__ import annotations

# Environment and config defaults
DEFAULT_ENV_NAME = "dev"
DEFAULT_DEV_ENV_NAMES = ("dev", "development", "local")
DEFAULT_LOG_LEVEL = "INFO"

# Scope addressing
SCOPE_URI_SCHEME = "scope"
SCOPE_SEPARATOR = "/"
SCOPE_WILDCARD = "*"
FIXED_SIGNATURE_DEPTH = 4

# HTTP embedding defaults
DEFAULT_SCOPE_PATH_PARAM = "scope_path"
DEFAULT_HTTP_ACTION_MAP_CSV = "GET:READ,HEAD:READ,POST:CREATE,PUT:UPDATE,PATCH:UPDATE,DELETE:DELETE"
