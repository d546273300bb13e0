"""Colored progress output on stderr."""

import sys

# Colors
BLUE = '\033[0;34m'
GREEN = '\033[0;32m'
YELLOW = '\033[1;33m'
RED = '\033[0;31m'
NC = '\033[0m'

RULE = "=" * 60


def log(msg: str):
    print(f"{BLUE}[INFO]{NC} {msg}", file=sys.stderr)


def success(msg: str):
    print(f"{GREEN}[SUCCESS]{NC} {msg}", file=sys.stderr)


def warn(msg: str):
    print(f"{YELLOW}[WARN]{NC} {msg}", file=sys.stderr)


def error(msg: str):
    print(f"{RED}[ERROR]{NC} {msg}", file=sys.stderr)
    sys.exit(1)


def banner(title: str):
    log(RULE)
    log(title)
    log(RULE)
