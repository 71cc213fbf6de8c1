from __future__ import annotations

# Revision sentinel GitHub uses for "branch created, nothing before it".
ZERO_SHA = "0000000000000000000000000000000000000000"

# CI environment collaborators
EVENT_PATH_ENV = "GITHUB_EVENT_PATH"
EVENT_BEFORE_ENV = "GITHUB_EVENT_BEFORE"
EVENT_AFTER_ENV = "GITHUB_SHA"
ANNOTATIONS_ENV = "GITHUB_ACTIONS"

# Invocation inputs (action.yml maps its inputs onto these)
ENV_PREFIX = "CONFSYNC_"

# sshpass -e reads the password from this variable
SECRET_ENV = "SSHPASS"

# Host keys of ephemeral CI targets are not known in advance.
SSH_OPTIONS = ["-o", "StrictHostKeyChecking=no"]

MASK = "***"
